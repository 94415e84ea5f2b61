"""Exception hierarchy for albumdedupe."""

__all__ = [
    "DedupeError",
    "AlbumValidationError",
    "SelfMergeError",
    "RecordNotFoundError",
    "DuplicateKeyError",
    "CorpusFormatError",
]


class DedupeError(Exception):
    """Base class for all albumdedupe errors."""


class AlbumValidationError(DedupeError):
    """Raised when an input is missing required fields or ids."""


class SelfMergeError(AlbumValidationError):
    """Raised when a record would be merged into itself."""

    def __init__(self, album_id: str) -> None:
        """Initialize self-merge error.

        Parameters
        ----------
        album_id : str
            The id given as both keep and delete target.
        """
        super().__init__(f"Cannot merge album with itself: {album_id}")
        self.album_id = album_id


class RecordNotFoundError(DedupeError):
    """Raised when a required record is absent from the store."""

    def __init__(self, album_id: str) -> None:
        """Initialize not-found error.

        Parameters
        ----------
        album_id : str
            The id that failed to resolve.
        """
        super().__init__(f"Album not found: {album_id}")
        self.album_id = album_id


class DuplicateKeyError(DedupeError):
    """Raised when an insert would violate the unique normalized key."""


class CorpusFormatError(DedupeError):
    """Raised when a JSONL corpus row fails schema validation."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
        line: int | None = None,
    ) -> None:
        """Initialize corpus format error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where the error occurred.
        line : int | None, optional
            1-based line number of the offending row.
        """
        super().__init__(message)
        self.file = file
        self.line = line
