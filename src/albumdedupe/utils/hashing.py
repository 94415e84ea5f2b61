"""Hashing utilities for albumdedupe.

Cover images are reported in audit events by digest, never by content.
"""

import hashlib

__all__ = ["format_sha256", "calculate_bytes_sha256"]


def format_sha256(hex_digest: str) -> str:
    """Format SHA256 hash with standard prefix.

    Parameters
    ----------
    hex_digest : str
        Raw hexadecimal digest.

    Returns
    -------
    str
        Formatted hash with "sha256:" prefix.
    """
    return f"sha256:{hex_digest}"


def calculate_bytes_sha256(data: bytes) -> str:
    """Calculate SHA-256 digest of in-memory bytes.

    Parameters
    ----------
    data : bytes
        Content to hash (e.g., cover image bytes).

    Returns
    -------
    str
        SHA-256 digest in format "sha256:<hex>".
    """
    return format_sha256(hashlib.sha256(data).hexdigest())
