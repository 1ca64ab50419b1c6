from unittest.mock import MagicMock

import pytest

from docanalyzer.config.settings import Settings
from docanalyzer.ingestion.encoder import ContentEncoder
from docanalyzer.ingestion.models import PLAIN_TEXT, FileRecord, FileStatus, IngestedFile
from docanalyzer.ingestion.validator import Accepted, Rejected, RejectionKind
from docanalyzer.pipeline.exceptions import InvalidTransitionError, RecordNotFoundError
from docanalyzer.pipeline.extraction_runner import ExtractionRunner
from docanalyzer.pipeline.notifier import Notifier
from docanalyzer.pipeline.orchestrator import AnalysisOrchestrator
from docanalyzer.pipeline.session import DocumentSession, build_session
from docanalyzer.pipeline.store import BatchStore


def _text_file(name: str, text: str = "The term is two years.") -> IngestedFile:
    return IngestedFile(name=name, content=text.encode("utf-8"), mime_type=PLAIN_TEXT)


@pytest.fixture()
def notifier() -> MagicMock:
    return MagicMock(spec=Notifier)


@pytest.fixture()
def session(notifier: MagicMock) -> DocumentSession:
    return build_session(Settings(analysis_provider="example", max_file_size_bytes=1024), notifier)


class TestAddFiles:
    def test_accepted_text_file_is_extracted(self, session: DocumentSession) -> None:
        outcomes = session.add_files([_text_file("fileA.txt")])
        assert isinstance(outcomes[0], Accepted)
        record = session.records()[0]
        assert record.status is FileStatus.READY
        assert record.extracted_text == "The term is two years."

    def test_rejections_are_reported_and_not_queued(
        self, session: DocumentSession, notifier: MagicMock
    ) -> None:
        outcomes = session.add_files([
            _text_file("big.txt", "x" * 2048),
            IngestedFile(name="run.exe", content=b"MZ", mime_type="application/x-msdownload"),
            _text_file("ok.txt"),
        ])

        assert [type(o) for o in outcomes] == [Rejected, Rejected, Accepted]
        assert isinstance(outcomes[0], Rejected) and outcomes[0].kind is RejectionKind.TOO_LARGE
        assert [r.name for r in session.records()] == ["ok.txt"]
        titles = [c.args[0].title for c in notifier.notify.call_args_list]
        assert titles[:2] == ["File too large", "Invalid file type"]

    def test_failing_notifier_does_not_block_accepted_files(
        self, session: DocumentSession, notifier: MagicMock
    ) -> None:
        notifier.notify.side_effect = RuntimeError("notification backend down")

        session.add_files([
            IngestedFile(name="run.exe", content=b"MZ", mime_type="application/x-msdownload"),
            _text_file("ok.txt"),
        ])

        assert [r.status for r in session.records()] == [FileStatus.READY]


class TestAnalyze:
    def test_analyze_all_stores_results(self, session: DocumentSession) -> None:
        session.add_files([_text_file("fileA.txt"), _text_file("fileB.txt")])
        results = session.analyze_all()
        assert sorted(results) == ["fileA.txt", "fileB.txt"]
        assert results["fileA.txt"].clauses[0].title == "Governing Law"
        assert session.results() == results
        assert all(r.status is FileStatus.DONE for r in session.records())

    def test_remove_drops_record_and_result(self, session: DocumentSession) -> None:
        session.add_files([_text_file("fileA.txt"), _text_file("fileB.txt")])
        session.analyze_all()

        removed = session.remove(0)

        assert removed.name == "fileA.txt"
        assert [r.name for r in session.records()] == ["fileB.txt"]
        assert list(session.results()) == ["fileB.txt"]

    def test_remove_out_of_range(self, session: DocumentSession) -> None:
        with pytest.raises(RecordNotFoundError):
            session.remove(3)


class TestEditing:
    def test_edit_text_prefills_extracted_text(self, session: DocumentSession) -> None:
        session.add_files([_text_file("fileA.txt")])
        assert session.edit_text(0) == "The term is two years."

    def test_save_edit_matches_name_and_size(
        self, session: DocumentSession, notifier: MagicMock
    ) -> None:
        file = _text_file("fileA.txt")
        session.add_files([file, _text_file("fileB.txt")])

        matched = session.save_edit("fileA.txt", file.size, "Edited terms.")

        assert matched == 1
        assert session.records()[0].edited_text == "Edited terms."
        assert session.records()[1].edited_text is None
        assert notifier.notify.call_args.args[0].title == "Document updated"

    def test_save_edit_with_wrong_size_matches_nothing(self, session: DocumentSession) -> None:
        session.add_files([_text_file("fileA.txt")])
        assert session.save_edit("fileA.txt", 1, "Edited") == 0
        assert session.records()[0].edited_text is None

    def test_save_edit_is_all_or_nothing_when_a_match_is_busy(self, notifier: MagicMock) -> None:
        file = _text_file("fileA.txt")
        store = BatchStore()
        store.add([
            FileRecord(file=file, status=FileStatus.READY),
            FileRecord(file=file, status=FileStatus.UPLOADING),
        ])
        session = DocumentSession(
            store=store,
            encoder=ContentEncoder(),
            extraction_runner=MagicMock(spec=ExtractionRunner),
            orchestrator=MagicMock(spec=AnalysisOrchestrator),
            notifier=notifier,
            max_file_size_bytes=1024,
        )

        with pytest.raises(InvalidTransitionError):
            session.save_edit("fileA.txt", file.size, "Edited terms.")

        assert [r.edited_text for r in session.records()] == [None, None]
        notifier.notify.assert_not_called()


class TestSummary:
    def test_summary_counts_files_and_size(self, session: DocumentSession) -> None:
        session.add_files([_text_file("a.txt", "x" * 512), _text_file("b.txt", "y" * 512)])
        assert session.total_size() == 1024
        assert session.summary() == "2 files • 1 KB"

    def test_summary_singular(self, session: DocumentSession) -> None:
        session.add_files([_text_file("a.txt", "abc")])
        assert session.summary() == "1 file • 3 Bytes"
