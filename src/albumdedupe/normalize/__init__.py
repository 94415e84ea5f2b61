"""String normalization for album and artist names."""

from ._patterns import ARTICLES, STRIP_PATTERNS
from .text import (
    is_exact_match,
    lookup_key,
    normalize_for_comparison,
    normalize_for_lookup,
    sanitize_for_storage,
    strip_accents,
    tokenize,
)

__all__ = [
    "sanitize_for_storage",
    "normalize_for_lookup",
    "lookup_key",
    "normalize_for_comparison",
    "tokenize",
    "is_exact_match",
    "strip_accents",
    "STRIP_PATTERNS",
    "ARTICLES",
]
