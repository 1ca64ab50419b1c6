import time
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import TypeVar

from docanalyzer.analysis.base import BaseAnalysisService
from docanalyzer.analysis.models import AnalysisContent, AnalysisResult, Clause, Risk
from docanalyzer.ingestion.encoder import ContentEncoder
from docanalyzer.ingestion.models import FileRecord, FileStatus
from docanalyzer.logging.logger import Log
from docanalyzer.pipeline.content import resolve_content
from docanalyzer.pipeline.exceptions import RecordNotFoundError
from docanalyzer.pipeline.notifier import Notification, Notifier, notify_safely
from docanalyzer.pipeline.state_machine import FileStateMachine
from docanalyzer.pipeline.store import BatchStore

T = TypeVar("T")


@dataclass(slots=True)
class AnalysisContext:
    record_id: int
    file_name: str = ""
    content: AnalysisContent | None = None
    clauses: list[Clause] | None = None
    risks: list[Risk] | None = None
    clauses_degraded: bool = False
    risks_degraded: bool = False
    result: AnalysisResult | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: AnalysisContext) -> AnalysisContext:
        raise NotImplementedError


class MarkUploadingStep(PipelineStep):
    def __init__(self, store: BatchStore) -> None:
        self._store = store

    def run(self, context: AnalysisContext) -> AnalysisContext:
        record = self._store.update(context.record_id, FileStateMachine.start_upload)
        context.file_name = record.name
        Log.info("Marked as uploading", file_name=record.name)
        return context


class ResolveContentStep(PipelineStep):
    def __init__(self, store: BatchStore, encoder: ContentEncoder) -> None:
        self._store = store
        self._encoder = encoder

    def run(self, context: AnalysisContext) -> AnalysisContext:
        record = self._store.get(context.record_id)
        context.content = resolve_content(record, self._encoder)
        kind = "text" if context.content.is_text else "base64 file"
        Log.info(f"Resolved content as {kind}", file_name=record.name)
        return context


class AnalyzeStep(PipelineStep):
    """Runs clause extraction and risk assessment side by side and waits for both.

    A call that raises, or is still running once ``call_timeout_seconds`` have
    passed since both were started, is replaced by an empty list and flagged as
    degraded; it never fails the step.
    """

    def __init__(
        self,
        service: BaseAnalysisService,
        call_timeout_seconds: float = 0.0,
    ) -> None:
        self._service = service
        self._timeout = call_timeout_seconds if call_timeout_seconds > 0 else None

    def run(self, context: AnalysisContext) -> AnalysisContext:
        if context.content is None:
            raise ValueError("AnalysisContext.content must be set before analysis")
        content = context.content
        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="analysis")
        try:
            clauses_future = executor.submit(self._service.extract_clauses, content)
            risks_future = executor.submit(self._service.assess_risks, content)
            deadline = time.monotonic() + self._timeout if self._timeout is not None else None
            context.clauses, context.clauses_degraded = self._settle(
                clauses_future, deadline, "Clause extraction", context.file_name
            )
            context.risks, context.risks_degraded = self._settle(
                risks_future, deadline, "Risk assessment", context.file_name
            )
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
        return context

    def _settle(
        self,
        future: "Future[list[T]]",
        deadline: float | None,
        label: str,
        file_name: str,
    ) -> tuple[list[T], bool]:
        remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
        try:
            return future.result(timeout=remaining), False
        except FutureTimeoutError:
            Log.warning(f"{label} timed out after {self._timeout}s, using fallback", file_name=file_name)
        except Exception as exc:
            Log.warning(f"{label} failed, using fallback: {exc}", file_name=file_name)
        return [], True


class StoreResultStep(PipelineStep):
    def __init__(self, store: BatchStore) -> None:
        self._store = store

    def run(self, context: AnalysisContext) -> AnalysisContext:
        if context.clauses is None or context.risks is None:
            raise ValueError("Both analysis calls must settle before the result is stored")
        context.result = AnalysisResult(
            clauses=context.clauses,
            risks=context.risks,
            clauses_degraded=context.clauses_degraded,
            risks_degraded=context.risks_degraded,
        )
        record = self._store.complete(
            context.record_id, FileStateMachine.finish_upload, context.result
        )
        Log.info(
            f"Analysis stored: {len(context.result.clauses)} clauses, "
            f"{len(context.result.risks)} risks"
            + (" (degraded)" if context.result.degraded else ""),
            file_name=record.name,
        )
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, store: BatchStore, notifier: Notifier) -> None:
        self._store = store
        self._notifier = notifier

    def run(self, context: AnalysisContext) -> AnalysisContext:
        def fail(record: FileRecord) -> FileRecord:
            if record.status is not FileStatus.UPLOADING:
                return record
            return FileStateMachine.fail_upload(record, context.error_message)

        try:
            record = self._store.update(context.record_id, fail)
        except RecordNotFoundError:
            Log.warning(f"Record {context.record_id} was removed before it could be marked failed")
            return context
        Log.error(f"Analysis failed: {context.error_message}", file_name=record.name)
        notify_safely(
            self._notifier,
            Notification(
                title="Analysis failed",
                description=f"Unable to analyze {record.name}",
                level="error",
            ),
        )
        return context
