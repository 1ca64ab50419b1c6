"""Pre-pipeline file checks: MIME allow-list and size ceiling."""

from dataclasses import dataclass
from enum import Enum

from docanalyzer.config.settings import TEN_MIB
from docanalyzer.ingestion.exceptions import FileValidationError
from docanalyzer.ingestion.models import DOC, DOCX, GIF, JPEG, PDF, PLAIN_TEXT, PNG, IngestedFile

ALLOWED_MIME_TYPES = frozenset({PDF, DOCX, DOC, PLAIN_TEXT, JPEG, PNG, GIF})

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


class RejectionKind(str, Enum):
    TOO_LARGE = "too_large"
    UNSUPPORTED_TYPE = "unsupported_type"


@dataclass(frozen=True)
class Accepted:
    file: IngestedFile


@dataclass(frozen=True)
class Rejected:
    file: IngestedFile
    kind: RejectionKind
    reason: str

    def to_error(self) -> FileValidationError:
        return FileValidationError(self.file.name, self.kind.value, self.reason)


ValidationOutcome = Accepted | Rejected


def validate(file: IngestedFile, max_size_bytes: int = TEN_MIB) -> ValidationOutcome:
    """Check a single file against the allow-list and the size ceiling.

    The type check runs first, so a disallowed file is reported as
    UNSUPPORTED_TYPE whatever its size.
    """
    if file.mime_type not in ALLOWED_MIME_TYPES:
        return Rejected(
            file=file,
            kind=RejectionKind.UNSUPPORTED_TYPE,
            reason=(
                f"{file.name}: Please upload PDF, DOCX, TXT, or image files only "
                f"(got '{file.mime_type or 'unknown'}')."
            ),
        )
    if file.size > max_size_bytes:
        return Rejected(
            file=file,
            kind=RejectionKind.TOO_LARGE,
            reason=(
                f"{file.name}: File size exceeds {format_file_size(max_size_bytes)} limit."
            ),
        )
    return Accepted(file=file)


def filter_batch(
    files: list[IngestedFile],
    max_size_bytes: int = TEN_MIB,
) -> tuple[list[IngestedFile], list[Rejected]]:
    """Validate each file independently, preserving input order."""
    accepted: list[IngestedFile] = []
    rejected: list[Rejected] = []
    for file in files:
        outcome = validate(file, max_size_bytes)
        if isinstance(outcome, Accepted):
            accepted.append(outcome.file)
        else:
            rejected.append(outcome)
    return accepted, rejected


def format_file_size(size_bytes: int) -> str:
    """Render a byte count the way the upload list shows it, e.g. '1.5 MB'."""
    if size_bytes <= 0:
        return "0 Bytes"
    exponent = 0
    value = float(size_bytes)
    while value >= 1024 and exponent < len(_SIZE_UNITS) - 1:
        value /= 1024
        exponent += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[exponent]}"
