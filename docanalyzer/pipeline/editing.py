from dataclasses import replace

from docanalyzer.ingestion.encoder import ContentEncoder
from docanalyzer.ingestion.exceptions import FileEncodingError
from docanalyzer.ingestion.models import PLAIN_TEXT, FileRecord, FileStatus
from docanalyzer.logging.logger import Log
from docanalyzer.pipeline.exceptions import InvalidTransitionError

PLACEHOLDER_TEMPLATE = (
    "[Content of {name}]\n\n"
    "This is a placeholder for the document content. You can edit this text and "
    "it will be used instead of the original file content when analyzing the document."
)


def initial_edit_text(record: FileRecord, encoder: ContentEncoder) -> str:
    """Text to pre-fill the editor with: edited > extracted > decoded plain text > placeholder."""
    if record.edited_text:
        return record.edited_text
    if record.extracted_text:
        return record.extracted_text
    if record.file.mime_type == PLAIN_TEXT:
        try:
            return encoder.read_text(record.file)
        except FileEncodingError as exc:
            Log.warning(f"Cannot decode text for editing: {exc}", file_name=record.name)
    return PLACEHOLDER_TEMPLATE.format(name=record.name)


def apply_edit(record: FileRecord, text: str) -> FileRecord:
    """Return a copy of the record carrying the user's edited text.

    Raises:
        InvalidTransitionError: while the record is extracting or being analyzed.
    """
    if record.status in (FileStatus.EXTRACTING, FileStatus.UPLOADING):
        raise InvalidTransitionError(
            f"{record.name}: cannot edit while '{record.status.value}'"
        )
    return replace(record, edited_text=text)
