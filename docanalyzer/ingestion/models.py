import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC = "application/msword"
PLAIN_TEXT = "text/plain"
JPEG = "image/jpeg"
PNG = "image/png"
GIF = "image/gif"

_EXTENSION_TYPES: dict[str, str] = {
    ".pdf": PDF,
    ".docx": DOCX,
    ".doc": DOC,
    ".txt": PLAIN_TEXT,
    ".jpg": JPEG,
    ".jpeg": JPEG,
    ".png": PNG,
    ".gif": GIF,
}


def guess_mime_type(file_name: str) -> str:
    """Guess a MIME type from the file extension; empty string when unknown."""
    suffix = Path(file_name).suffix.lower()
    if suffix in _EXTENSION_TYPES:
        return _EXTENSION_TYPES[suffix]
    guessed, _encoding = mimetypes.guess_type(file_name)
    return guessed or ""


@dataclass(frozen=True)
class IngestedFile:
    """Raw user-supplied file: bytes plus declared name, size and MIME type."""

    name: str
    content: bytes = field(repr=False)
    mime_type: str
    size: int = -1

    def __post_init__(self) -> None:
        if self.size < 0:
            object.__setattr__(self, "size", len(self.content))

    @classmethod
    def from_path(cls, path: Path, mime_type: str | None = None) -> "IngestedFile":
        """Read a file from disk, guessing its MIME type when not given."""
        content = path.read_bytes()
        return cls(
            name=path.name,
            content=content,
            mime_type=mime_type if mime_type is not None else guess_mime_type(path.name),
            size=len(content),
        )


class FileStatus(str, Enum):
    """Per-file pipeline status."""

    VALIDATED = "validated"
    EXTRACTING = "extracting"
    READY = "ready"
    UPLOADING = "uploading"
    DONE = "done"
    ERROR = "error"

    @property
    def is_idle(self) -> bool:
        """True for the two resting states before analysis starts."""
        return self in (FileStatus.VALIDATED, FileStatus.READY)


class ExtractionSource(str, Enum):
    NATIVE = "native"
    OCR = "ocr"


@dataclass(frozen=True)
class UnifiedExtractionResult:
    """Terminal outcome of a successful text extraction."""

    text: str
    source: ExtractionSource
    progress: int = 100
    page_count: int = 0


@dataclass(frozen=True)
class FileRecord:
    """Authoritative per-file state. Updated by replacement, never in place."""

    file: IngestedFile
    status: FileStatus = FileStatus.VALIDATED
    extracted_text: str | None = None
    edited_text: str | None = None
    extraction_result: UnifiedExtractionResult | None = None
    progress: int | None = None
    error_message: str | None = None

    @property
    def name(self) -> str:
        return self.file.name

    @property
    def is_idle(self) -> bool:
        return self.status.is_idle
