class ExtractionError(Exception):
    """Raised when no text can be produced for a file."""

    def __init__(self, message: str, file_name: str | None = None) -> None:
        super().__init__(message)
        self.file_name = file_name


class NativeExtractionError(ExtractionError):
    """Raised when a format-specific reader cannot parse the file."""


class OcrError(ExtractionError):
    """Raised when rendering or recognition fails."""


class ExtractionCancelledError(ExtractionError):
    """Raised when extraction is stopped through a cancellation token."""
