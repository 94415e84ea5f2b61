"""Compiled regex patterns and word lists for normalization.

Patterns are compiled once at import time into immutable tuples, so they
can be shared across threads.
"""

import re

# Storage sanitization: unicode variants folded to ASCII equivalents.
ELLIPSIS_RE = re.compile("…")
DASH_RE = re.compile("[–—]")
SMART_SINGLE_QUOTE_RE = re.compile("[‘’`]")
SMART_DOUBLE_QUOTE_RE = re.compile("[“”]")
WHITESPACE_RE = re.compile(r"\s+")

_EDITION_WORDS = r"deluxe|special|expanded|remastered|remaster|anniversary|limited|collector'?s?"
_EDITION_TAIL = r"(?:edition|version|release)?"

# Reissue suffix patterns, applied in order before punctuation stripping so
# bracket delimiters are still available to anchor on.
STRIP_PATTERNS: tuple[re.Pattern[str], ...] = (
    # Edition suffixes in parentheses or brackets
    re.compile(rf"\s*\(\s*(?:{_EDITION_WORDS})\s*{_EDITION_TAIL}\s*\)$", re.IGNORECASE),
    re.compile(rf"\s*\[\s*(?:{_EDITION_WORDS})\s*{_EDITION_TAIL}\s*\]$", re.IGNORECASE),
    # Edition suffixes after a dash or colon
    re.compile(
        rf"\s*[-:]\s*(?:deluxe|special|expanded|remastered|remaster|anniversary|limited)"
        rf"\s*{_EDITION_TAIL}$",
        re.IGNORECASE,
    ),
    # Disc indicators
    re.compile(r"\s*\(\s*disc\s*\d+\s*\)$", re.IGNORECASE),
    re.compile(r"\s*\[\s*disc\s*\d+\s*\]$", re.IGNORECASE),
    re.compile(r"\s*[-:]\s*cd\s*\d+$", re.IGNORECASE),
    # Reissue years in parentheses
    re.compile(r"\s*\(\s*\d{4}\s*(?:remaster|reissue|edition)?\s*\)$", re.IGNORECASE),
    # EP/LP/Single markers
    re.compile(r"\s*\(\s*(?:e\.?p\.?|l\.?p\.?|single)\s*\)$", re.IGNORECASE),
)

APOSTROPHE_RE = re.compile("['´`]")
AMPERSAND_RE = re.compile(r"[&+]")
SLASH_RE = re.compile(r"[/\\]")
# Anything that is not a letter, digit or whitespace (underscore included).
NON_WORD_RE = re.compile(r"[^\w\s]|_")

ARTICLES = frozenset({"the", "a", "an", "el", "la", "le", "les", "der", "die", "das"})
