"""Per-file status transitions. Every transition returns a new FileRecord."""

from dataclasses import replace

from docanalyzer.ingestion.models import FileRecord, FileStatus, UnifiedExtractionResult
from docanalyzer.pipeline.exceptions import InvalidTransitionError

_UPLOADABLE = frozenset(
    {FileStatus.VALIDATED, FileStatus.READY, FileStatus.DONE, FileStatus.ERROR}
)


class FileStateMachine:
    """Legal moves:

    validated -> extracting -> ready | error
    validated | ready | done | error -> uploading -> done | error
    """

    @classmethod
    def start_extraction(cls, record: FileRecord) -> FileRecord:
        cls._require(record, {FileStatus.VALIDATED}, FileStatus.EXTRACTING)
        return replace(record, status=FileStatus.EXTRACTING, progress=0, error_message=None)

    @classmethod
    def report_progress(cls, record: FileRecord, percent: int) -> FileRecord:
        if record.status is not FileStatus.EXTRACTING:
            raise InvalidTransitionError(
                f"{record.name}: progress reported while '{record.status.value}'"
            )
        value = max(record.progress or 0, max(0, min(100, percent)))
        return replace(record, progress=value)

    @classmethod
    def finish_extraction(
        cls,
        record: FileRecord,
        result: UnifiedExtractionResult,
    ) -> FileRecord:
        cls._require(record, {FileStatus.EXTRACTING}, FileStatus.READY)
        extracted_text = record.extracted_text if record.extracted_text is not None else result.text
        return replace(
            record,
            status=FileStatus.READY,
            extracted_text=extracted_text,
            extraction_result=result,
            progress=100,
        )

    @classmethod
    def fail_extraction(cls, record: FileRecord, message: str) -> FileRecord:
        cls._require(record, {FileStatus.EXTRACTING}, FileStatus.ERROR)
        return replace(record, status=FileStatus.ERROR, progress=None, error_message=message)

    @classmethod
    def start_upload(cls, record: FileRecord) -> FileRecord:
        cls._require(record, _UPLOADABLE, FileStatus.UPLOADING)
        return replace(record, status=FileStatus.UPLOADING, progress=None, error_message=None)

    @classmethod
    def finish_upload(cls, record: FileRecord) -> FileRecord:
        cls._require(record, {FileStatus.UPLOADING}, FileStatus.DONE)
        return replace(record, status=FileStatus.DONE)

    @classmethod
    def fail_upload(cls, record: FileRecord, message: str) -> FileRecord:
        cls._require(record, {FileStatus.UPLOADING}, FileStatus.ERROR)
        return replace(record, status=FileStatus.ERROR, error_message=message)

    @staticmethod
    def _require(
        record: FileRecord,
        allowed: set[FileStatus] | frozenset[FileStatus],
        target: FileStatus,
    ) -> None:
        if record.status not in allowed:
            raise InvalidTransitionError(
                f"{record.name}: cannot move from '{record.status.value}' to '{target.value}'"
            )
