from docanalyzer.analysis.factory import AnalysisServiceFactory
from docanalyzer.analysis.models import AnalysisResult
from docanalyzer.cancellation import CancellationToken
from docanalyzer.config.settings import Settings
from docanalyzer.extraction.factory import ExtractionEngineFactory
from docanalyzer.ingestion.encoder import ContentEncoder
from docanalyzer.ingestion.models import FileRecord, IngestedFile
from docanalyzer.ingestion.validator import (
    Rejected,
    RejectionKind,
    ValidationOutcome,
    format_file_size,
    validate,
)
from docanalyzer.logging.logger import Log
from docanalyzer.pipeline.editing import apply_edit, initial_edit_text
from docanalyzer.pipeline.extraction_runner import ExtractionRunner, ExtractionSummary
from docanalyzer.pipeline.notifier import LogNotifier, Notification, Notifier, notify_safely
from docanalyzer.pipeline.orchestrator import AnalysisOrchestrator, build_file_analyzer
from docanalyzer.pipeline.store import BatchStore


class DocumentSession:
    """Entry point for a presentation layer: upload, edit, remove and analyze files."""

    def __init__(
        self,
        store: BatchStore,
        encoder: ContentEncoder,
        extraction_runner: ExtractionRunner,
        orchestrator: AnalysisOrchestrator,
        notifier: Notifier,
        max_file_size_bytes: int,
    ) -> None:
        self._store = store
        self._encoder = encoder
        self._extraction_runner = extraction_runner
        self._orchestrator = orchestrator
        self._notifier = notifier
        self._max_file_size_bytes = max_file_size_bytes

    def add_files(
        self,
        files: list[IngestedFile],
        cancel_token: CancellationToken | None = None,
    ) -> list[ValidationOutcome]:
        """Validate each file, queue the accepted ones and extract their text."""
        outcomes = [validate(file, self._max_file_size_bytes) for file in files]
        accepted: list[FileRecord] = []
        for outcome in outcomes:
            if isinstance(outcome, Rejected):
                Log.warning(f"Rejected ({outcome.kind.value}): {outcome.reason}")
                too_large = outcome.kind is RejectionKind.TOO_LARGE
                notify_safely(
                    self._notifier,
                    Notification(
                        title="File too large" if too_large else "Invalid file type",
                        description=outcome.reason,
                        level="error",
                    ),
                )
            else:
                accepted.append(FileRecord(file=outcome.file))

        if accepted:
            record_ids = self._store.add(accepted)
            self.extract(record_ids, cancel_token)
        return outcomes

    def extract(
        self,
        record_ids: list[int],
        cancel_token: CancellationToken | None = None,
    ) -> ExtractionSummary:
        return self._extraction_runner.run(record_ids, cancel_token)

    def analyze_all(self, cancel_token: CancellationToken | None = None) -> dict[str, AnalysisResult]:
        return self._orchestrator.analyze_batch(cancel_token=cancel_token)

    def edit_text(self, index: int) -> str:
        """Text to show in the editor for the record at ``index``."""
        return initial_edit_text(self._store.get(self._store.id_at(index)), self._encoder)

    def save_edit(self, file_name: str, file_size: int, text: str) -> int:
        """Store edited text on every record matching name and size; return how many matched.

        Raises:
            InvalidTransitionError: if any match is busy; no record is edited then.
        """
        matching = [
            record_id
            for record_id, record in self._store.items()
            if record.name == file_name and record.file.size == file_size
        ]
        edited = self._store.update_many(matching, lambda current: apply_edit(current, text))
        matched = len(edited)
        if matched:
            notify_safely(
                self._notifier,
                Notification(
                    title="Document updated",
                    description="Your edits have been saved and will be used for analysis",
                ),
            )
        return matched

    def remove(self, index: int) -> FileRecord:
        """Drop the record at ``index`` together with its analysis result."""
        record = self._store.remove(self._store.id_at(index))
        Log.info("Removed from batch", file_name=record.name)
        return record

    def records(self) -> list[FileRecord]:
        return self._store.records()

    def results(self) -> dict[str, AnalysisResult]:
        return self._store.results()

    def total_size(self) -> int:
        return sum(record.file.size for record in self._store.records())

    def summary(self) -> str:
        count = len(self._store.ids())
        plural = "" if count == 1 else "s"
        return f"{count} file{plural} • {format_file_size(self.total_size())}"


def build_session(settings: Settings, notifier: Notifier | None = None) -> DocumentSession:
    """Build a DocumentSession with all required adapters."""
    notifier = notifier or LogNotifier()
    store = BatchStore()
    encoder = ContentEncoder(max_size_bytes=settings.max_file_size_bytes)
    extraction_runner = ExtractionRunner(
        store,
        ExtractionEngineFactory.create(settings),
        notifier=notifier,
        fallback_to_ocr=settings.fallback_to_ocr,
    )
    file_analyzer = build_file_analyzer(
        store,
        AnalysisServiceFactory.create(settings),
        encoder,
        notifier=notifier,
        call_timeout_seconds=settings.analysis_call_timeout_seconds,
    )
    orchestrator = AnalysisOrchestrator(
        store, file_analyzer, max_workers=settings.batch_max_workers
    )
    return DocumentSession(
        store=store,
        encoder=encoder,
        extraction_runner=extraction_runner,
        orchestrator=orchestrator,
        notifier=notifier,
        max_file_size_bytes=settings.max_file_size_bytes,
    )
