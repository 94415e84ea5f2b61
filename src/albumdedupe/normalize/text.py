"""String normalization for storage, lookup and fuzzy comparison.

Three layers, each built on the previous one:

1. ``sanitize_for_storage`` - display-safe cleanup, preserves case and
   diacritics.
2. ``normalize_for_lookup`` - exact-match dedup key (sanitized, lowercase).
3. ``normalize_for_comparison`` - aggressive form used as the seed for
   fuzzy scoring.

All functions are pure, deterministic, idempotent and never raise.
"""

import unicodedata

from ._patterns import (
    AMPERSAND_RE,
    APOSTROPHE_RE,
    ARTICLES,
    DASH_RE,
    ELLIPSIS_RE,
    NON_WORD_RE,
    SLASH_RE,
    SMART_DOUBLE_QUOTE_RE,
    SMART_SINGLE_QUOTE_RE,
    STRIP_PATTERNS,
    WHITESPACE_RE,
)

__all__ = [
    "sanitize_for_storage",
    "normalize_for_lookup",
    "lookup_key",
    "normalize_for_comparison",
    "tokenize",
    "is_exact_match",
    "strip_accents",
]


def _as_text(value: object) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def strip_accents(text: str) -> str:
    """Remove diacritical marks for cross-locale matching.

    Parameters
    ----------
    text : str
        Input text with potential diacritics.

    Returns
    -------
    str
        Text with combining marks removed ("Mötley Crüe" → "Motley Crue").
    """
    nfd = unicodedata.normalize("NFD", text)
    stripped = "".join(c for c in nfd if unicodedata.category(c) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def sanitize_for_storage(value: object) -> str:
    """Sanitize an artist or album name for consistent storage.

    Converts unicode punctuation variants to ASCII equivalents and collapses
    whitespace. Case and diacritics are preserved for display.

    Parameters
    ----------
    value : object
        Value to sanitize; ``None`` yields an empty string.

    Returns
    -------
    str
        Sanitized value.

    Examples
    --------
        >>> sanitize_for_storage("  …and Oceans ")
        '...and Oceans'
    """
    text = _as_text(value).strip()
    if not text:
        return ""
    text = ELLIPSIS_RE.sub("...", text)
    text = DASH_RE.sub("-", text)
    text = SMART_SINGLE_QUOTE_RE.sub("'", text)
    text = SMART_DOUBLE_QUOTE_RE.sub('"', text)
    text = WHITESPACE_RE.sub(" ", text)
    return text.strip()


def normalize_for_lookup(value: object) -> str:
    """Normalize a name for exact canonical lookup (sanitized, lowercase)."""
    return sanitize_for_storage(value).lower()


def lookup_key(artist: object, title: object) -> str:
    """Build the exact-match dedup key for an (artist, title) pair.

    Parameters
    ----------
    artist : object
        Artist name.
    title : object
        Album title.

    Returns
    -------
    str
        ``"<artist>|<title>"`` in lookup form.
    """
    return f"{normalize_for_lookup(artist)}|{normalize_for_lookup(title)}"


def normalize_for_comparison(
    value: object,
    *,
    remove_articles: bool = True,
    strip_editions: bool = True,
) -> str:
    """Normalize a string for fuzzy comparison.

    Parameters
    ----------
    value : object
        String to normalize; ``None`` yields an empty string.
    remove_articles : bool, optional
        Drop leading articles while more than one word remains,
        by default True.
    strip_editions : bool, optional
        Strip reissue/edition/disc/format suffixes, by default True.

    Returns
    -------
    str
        Lowercase, accent-folded, punctuation-free, whitespace-collapsed form.

    Notes
    -----
    Suffix patterns run before punctuation stripping so bracket delimiters
    are still present to anchor on. Accents are folded to their base letter
    rather than dropped, and non-Latin letters are kept.
    """
    text = sanitize_for_storage(value)
    if not text:
        return ""

    text = unicodedata.normalize("NFKC", text).casefold().strip()

    if strip_editions:
        for pattern in STRIP_PATTERNS:
            text = pattern.sub("", text)
        text = text.strip()

    text = APOSTROPHE_RE.sub("", text)
    text = AMPERSAND_RE.sub(" and ", text)
    text = SLASH_RE.sub("", text)
    text = strip_accents(text)
    text = NON_WORD_RE.sub(" ", text)
    words = text.split()

    if remove_articles:
        while len(words) > 1 and words[0] in ARTICLES:
            words = words[1:]

    return " ".join(words)


def tokenize(value: object) -> frozenset[str]:
    """Return the set of words of the comparison form."""
    return frozenset(normalize_for_comparison(value).split())


def is_exact_match(a: object, b: object) -> bool:
    """Return True if both strings share the same comparison form."""
    return normalize_for_comparison(a) == normalize_for_comparison(b)
