from concurrent.futures import ThreadPoolExecutor

from docanalyzer.analysis.base import BaseAnalysisService
from docanalyzer.analysis.models import AnalysisResult
from docanalyzer.cancellation import CancellationToken
from docanalyzer.ingestion.encoder import ContentEncoder
from docanalyzer.logging.logger import Log
from docanalyzer.pipeline.exceptions import OrchestrationError, RecordNotFoundError
from docanalyzer.pipeline.notifier import LogNotifier, Notifier
from docanalyzer.pipeline.steps import (
    AnalysisContext,
    AnalyzeStep,
    MarkFailedStep,
    MarkUploadingStep,
    PipelineStep,
    ResolveContentStep,
    StoreResultStep,
)
from docanalyzer.pipeline.store import BatchStore


class FileAnalyzer:
    """Runs the analysis steps for one file.

    Pipeline: mark uploading -> resolve content -> analyze (2 calls) -> store.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(self, record_id: int) -> AnalysisResult:
        """Run every step for a record.

        Raises:
            OrchestrationError: after the failed step ran, if any step raised.
        """
        context = AnalysisContext(record_id=record_id)
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc) or type(exc).__name__
            try:
                self._failed_step.run(context)
            except Exception:
                Log.exception(f"Could not record failure for record {record_id}")
            raise OrchestrationError(context.error_message) from exc
        if context.result is None:
            raise OrchestrationError(f"Record {record_id} finished without a result")
        return context.result


class AnalysisOrchestrator:
    """Analyzes a batch file by file; a failing file never stops the others."""

    def __init__(
        self,
        store: BatchStore,
        file_analyzer: FileAnalyzer,
        max_workers: int = 1,
    ) -> None:
        self._store = store
        self._file_analyzer = file_analyzer
        self._max_workers = max(1, max_workers)

    def analyze_batch(
        self,
        record_ids: list[int] | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> dict[str, AnalysisResult]:
        """Analyze records (all of them by default) and return this run's results by file name.

        With ``max_workers == 1`` files run strictly in batch order; with a
        larger pool every file is still analyzed but completion order is not
        guaranteed.
        """
        ids = self._store.ids() if record_ids is None else list(record_ids)
        Log.info(f"Analyzing batch of {len(ids)} file(s)")
        results: dict[str, AnalysisResult] = {}

        if self._max_workers == 1:
            for record_id in ids:
                if cancel_token is not None and cancel_token.is_cancelled:
                    Log.warning("Batch analysis cancelled")
                    break
                self._collect(results, self._run_one(record_id, cancel_token))
        else:
            with ThreadPoolExecutor(
                max_workers=self._max_workers, thread_name_prefix="batch"
            ) as executor:
                futures = {
                    record_id: executor.submit(self._run_one, record_id, cancel_token)
                    for record_id in ids
                }
                for future in futures.values():
                    self._collect(results, future.result())

        Log.info(f"Batch finished: {len(results)}/{len(ids)} file(s) analyzed")
        return results

    def _run_one(
        self,
        record_id: int,
        cancel_token: CancellationToken | None,
    ) -> tuple[str, AnalysisResult] | None:
        if cancel_token is not None and cancel_token.is_cancelled:
            return None
        try:
            name = self._store.get(record_id).name
            return name, self._file_analyzer.process(record_id)
        except RecordNotFoundError:
            Log.warning(f"Record {record_id} was removed before analysis")
        except OrchestrationError:
            # already marked and logged by the failed step
            pass
        return None

    @staticmethod
    def _collect(
        results: dict[str, AnalysisResult],
        outcome: tuple[str, AnalysisResult] | None,
    ) -> None:
        if outcome is not None:
            name, result = outcome
            results[name] = result


def build_file_analyzer(
    store: BatchStore,
    service: BaseAnalysisService,
    encoder: ContentEncoder,
    notifier: Notifier | None = None,
    call_timeout_seconds: float = 0.0,
) -> FileAnalyzer:
    """Build a FileAnalyzer with the standard step sequence."""
    steps: list[PipelineStep] = [
        MarkUploadingStep(store),
        ResolveContentStep(store, encoder),
        AnalyzeStep(service, call_timeout_seconds=call_timeout_seconds),
        StoreResultStep(store),
    ]
    return FileAnalyzer(steps=steps, failed_step=MarkFailedStep(store, notifier or LogNotifier()))
