from dataclasses import dataclass, field

from docanalyzer.cancellation import CancellationToken
from docanalyzer.extraction.engine import ExtractionOptions, TextExtractionEngine
from docanalyzer.extraction.exceptions import ExtractionCancelledError, ExtractionError
from docanalyzer.logging.logger import Log
from docanalyzer.pipeline.exceptions import InvalidTransitionError, RecordNotFoundError
from docanalyzer.pipeline.notifier import LogNotifier, Notification, Notifier, notify_safely
from docanalyzer.pipeline.state_machine import FileStateMachine
from docanalyzer.pipeline.store import BatchStore


@dataclass
class ExtractionSummary:
    succeeded: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)


class ExtractionRunner:
    """Extracts text for records one at a time, catching per-file failures."""

    def __init__(
        self,
        store: BatchStore,
        engine: TextExtractionEngine,
        notifier: Notifier | None = None,
        fallback_to_ocr: bool = True,
    ) -> None:
        self._store = store
        self._engine = engine
        self._notifier = notifier or LogNotifier()
        self._fallback_to_ocr = fallback_to_ocr

    def run(
        self,
        record_ids: list[int],
        cancel_token: CancellationToken | None = None,
    ) -> ExtractionSummary:
        """Extract every record still in the validated state, in the given order."""
        summary = ExtractionSummary()
        for record_id in record_ids:
            if cancel_token is not None and cancel_token.is_cancelled:
                Log.warning("Extraction batch cancelled")
                summary.skipped.append(record_id)
                continue
            outcome = self._run_one(record_id, cancel_token)
            if outcome is None:
                summary.skipped.append(record_id)
            elif outcome:
                summary.succeeded.append(record_id)
            else:
                summary.failed.append(record_id)
        return summary

    def _run_one(self, record_id: int, cancel_token: CancellationToken | None) -> bool | None:
        try:
            record = self._store.update(record_id, FileStateMachine.start_extraction)
        except (InvalidTransitionError, RecordNotFoundError) as exc:
            Log.debug(f"Skipping extraction for record {record_id}: {exc}")
            return None

        def on_progress(percent: int) -> None:
            try:
                self._store.update(
                    record_id, lambda current: FileStateMachine.report_progress(current, percent)
                )
            except (InvalidTransitionError, RecordNotFoundError):
                # record removed mid-pass; the final transition reports it
                pass

        options = ExtractionOptions(
            fallback_to_ocr=self._fallback_to_ocr,
            on_progress=on_progress,
            cancel_token=cancel_token,
        )
        Log.info("Extracting text", file_name=record.name)
        try:
            result = self._engine.extract(record.file, options)
        except ExtractionError as exc:
            return self._fail(record_id, record.name, exc)
        except Exception as exc:
            Log.exception(f"Unexpected extraction failure: {exc}", file_name=record.name)
            return self._fail(record_id, record.name, exc)

        try:
            self._store.update(
                record_id, lambda current: FileStateMachine.finish_extraction(current, result)
            )
        except RecordNotFoundError:
            Log.warning("Record removed during extraction", file_name=record.name)
            return None
        notify_safely(
            self._notifier,
            Notification(
                title="Text extracted successfully",
                description=f"Extracted {len(result.text)} characters from {record.name}",
            ),
        )
        return True

    def _fail(self, record_id: int, file_name: str, exc: Exception) -> bool | None:
        reason = str(exc) or type(exc).__name__
        try:
            self._store.update(
                record_id, lambda current: FileStateMachine.fail_extraction(current, reason)
            )
        except RecordNotFoundError:
            return None
        if isinstance(exc, ExtractionCancelledError):
            Log.warning(f"Extraction cancelled: {reason}", file_name=file_name)
        else:
            Log.error(f"Extraction failed: {reason}", file_name=file_name)
        notify_safely(
            self._notifier,
            Notification(
                title="Text extraction failed",
                description=f"Unable to extract text from {file_name}",
                level="error",
            ),
        )
        return False

