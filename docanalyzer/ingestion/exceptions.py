class IngestionError(Exception):
    """Base exception for all ingestion-related errors."""


class FileValidationError(IngestionError):
    """Raised when a file is rejected before it enters the pipeline."""

    def __init__(self, file_name: str, kind: str, message: str) -> None:
        super().__init__(message)
        self.file_name = file_name
        self.kind = kind


class FileEncodingError(IngestionError):
    """Raised when file content cannot be encoded or decoded."""
