from unittest.mock import MagicMock

from docanalyzer.cancellation import CancellationToken
from docanalyzer.extraction.engine import ExtractionOptions, TextExtractionEngine
from docanalyzer.extraction.exceptions import ExtractionError
from docanalyzer.ingestion.models import (
    PDF,
    ExtractionSource,
    FileRecord,
    FileStatus,
    IngestedFile,
    UnifiedExtractionResult,
)
from docanalyzer.pipeline.extraction_runner import ExtractionRunner
from docanalyzer.pipeline.notifier import Notifier
from docanalyzer.pipeline.store import BatchStore


def _record(name: str = "scan.pdf") -> FileRecord:
    return FileRecord(file=IngestedFile(name=name, content=b"%PDF", mime_type=PDF))


def _engine(text: str = "Scanned text") -> MagicMock:
    engine = MagicMock(spec=TextExtractionEngine)
    engine.extract.return_value = UnifiedExtractionResult(text=text, source=ExtractionSource.OCR)
    return engine


class TestExtractionRunner:
    def test_successful_extraction_marks_ready(self) -> None:
        store = BatchStore()
        (record_id,) = store.add([_record()])
        notifier = MagicMock(spec=Notifier)

        summary = ExtractionRunner(store, _engine(), notifier=notifier).run([record_id])

        record = store.get(record_id)
        assert summary.succeeded == [record_id]
        assert record.status is FileStatus.READY
        assert record.extracted_text == "Scanned text"
        assert record.progress == 100
        notification = notifier.notify.call_args.args[0]
        assert notification.title == "Text extracted successfully"
        assert notification.description == "Extracted 12 characters from scan.pdf"

    def test_progress_is_written_to_the_record(self) -> None:
        store = BatchStore()
        (record_id,) = store.add([_record()])
        seen: list[int | None] = []
        engine = _engine()

        def extract(file: IngestedFile, options: ExtractionOptions) -> UnifiedExtractionResult:
            assert options.on_progress is not None
            for percent in (0, 50):
                options.on_progress(percent)
                seen.append(store.get(record_id).progress)
            return UnifiedExtractionResult(text="t", source=ExtractionSource.OCR)

        engine.extract.side_effect = extract
        ExtractionRunner(store, engine, notifier=MagicMock(spec=Notifier)).run([record_id])

        assert seen == [0, 50]
        assert store.get(record_id).progress == 100

    def test_failure_marks_error_and_continues(self) -> None:
        store = BatchStore()
        first, second = store.add([_record("bad.pdf"), _record("good.pdf")])
        engine = _engine()
        engine.extract.side_effect = [
            ExtractionError("OCR produced no text"),
            UnifiedExtractionResult(text="ok", source=ExtractionSource.NATIVE),
        ]
        notifier = MagicMock(spec=Notifier)

        summary = ExtractionRunner(store, engine, notifier=notifier).run([first, second])

        assert summary.failed == [first]
        assert summary.succeeded == [second]
        failed = store.get(first)
        assert failed.status is FileStatus.ERROR
        assert failed.progress is None
        assert failed.error_message == "OCR produced no text"
        titles = [c.args[0].title for c in notifier.notify.call_args_list]
        assert titles == ["Text extraction failed", "Text extracted successfully"]

    def test_unexpected_error_is_contained(self) -> None:
        store = BatchStore()
        (record_id,) = store.add([_record()])
        engine = _engine()
        engine.extract.side_effect = RuntimeError("renderer crashed")

        summary = ExtractionRunner(store, engine, notifier=MagicMock(spec=Notifier)).run([record_id])

        assert summary.failed == [record_id]
        assert store.get(record_id).status is FileStatus.ERROR

    def test_passes_ocr_flag_to_engine(self) -> None:
        store = BatchStore()
        (record_id,) = store.add([_record()])
        engine = _engine()
        ExtractionRunner(store, engine, fallback_to_ocr=False).run([record_id])
        options: ExtractionOptions = engine.extract.call_args.args[1]
        assert options.fallback_to_ocr is False

    def test_already_extracted_record_is_skipped(self) -> None:
        store = BatchStore()
        (record_id,) = store.add([FileRecord(file=_record().file, status=FileStatus.READY)])
        engine = _engine()
        summary = ExtractionRunner(store, engine).run([record_id])
        assert summary.skipped == [record_id]
        engine.extract.assert_not_called()

    def test_cancelled_batch_skips_remaining_files(self) -> None:
        token = CancellationToken()
        token.cancel()
        store = BatchStore()
        ids = store.add([_record("a.pdf"), _record("b.pdf")])
        engine = _engine()
        summary = ExtractionRunner(store, engine).run(ids, cancel_token=token)
        assert summary.skipped == ids
        assert all(store.get(i).status is FileStatus.VALIDATED for i in ids)

    def test_record_removed_during_extraction(self) -> None:
        store = BatchStore()
        (record_id,) = store.add([_record()])
        engine = _engine()

        def remove_then_return(file: IngestedFile, options: ExtractionOptions) -> UnifiedExtractionResult:
            store.remove(record_id)
            assert options.on_progress is not None
            options.on_progress(50)
            return UnifiedExtractionResult(text="t", source=ExtractionSource.NATIVE)

        engine.extract.side_effect = remove_then_return
        summary = ExtractionRunner(store, engine, notifier=MagicMock(spec=Notifier)).run([record_id])
        assert summary.skipped == [record_id]
        assert store.ids() == []

    def test_failing_notifier_does_not_stop_the_batch(self) -> None:
        store = BatchStore()
        first, second = store.add([_record("bad.pdf"), _record("good.pdf")])
        engine = _engine()
        engine.extract.side_effect = [
            ExtractionError("OCR produced no text"),
            UnifiedExtractionResult(text="ok", source=ExtractionSource.NATIVE),
        ]
        notifier = MagicMock(spec=Notifier)
        notifier.notify.side_effect = RuntimeError("notification backend down")

        summary = ExtractionRunner(store, engine, notifier=notifier).run([first, second])

        assert summary.failed == [first]
        assert summary.succeeded == [second]
        assert store.get(second).status is FileStatus.READY
        assert notifier.notify.call_count == 2
