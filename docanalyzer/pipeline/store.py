import itertools
import threading
from collections.abc import Callable, Iterable

from docanalyzer.analysis.models import AnalysisResult
from docanalyzer.ingestion.models import FileRecord
from docanalyzer.pipeline.exceptions import RecordNotFoundError


class BatchStore:
    """Single owner of the batch: file records in acceptance order plus results by file name.

    Records are immutable; writers swap a whole record under the store lock and
    readers only ever see snapshots. Records are addressed by a stable id so
    a removal does not shift the target of work already in flight.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._records: dict[int, FileRecord] = {}
        self._results: dict[str, AnalysisResult] = {}
        self._ids = itertools.count(1)

    def add(self, records: Iterable[FileRecord]) -> list[int]:
        with self._lock:
            added: list[int] = []
            for record in records:
                record_id = next(self._ids)
                self._records[record_id] = record
                added.append(record_id)
            return added

    def get(self, record_id: int) -> FileRecord:
        with self._lock:
            try:
                return self._records[record_id]
            except KeyError:
                raise RecordNotFoundError(f"No record with id {record_id}") from None

    def ids(self) -> list[int]:
        with self._lock:
            return list(self._records)

    def id_at(self, index: int) -> int:
        with self._lock:
            ids = list(self._records)
            if not 0 <= index < len(ids):
                raise RecordNotFoundError(f"No record at index {index}")
            return ids[index]

    def records(self) -> list[FileRecord]:
        with self._lock:
            return list(self._records.values())

    def items(self) -> list[tuple[int, FileRecord]]:
        with self._lock:
            return list(self._records.items())

    def update(self, record_id: int, change: Callable[[FileRecord], FileRecord]) -> FileRecord:
        """Atomically replace a record with ``change(current)`` and return the new one."""
        with self._lock:
            current = self.get(record_id)
            updated = change(current)
            self._records[record_id] = updated
            return updated

    def update_many(
        self,
        record_ids: Iterable[int],
        change: Callable[[FileRecord], FileRecord],
    ) -> list[FileRecord]:
        """Apply ``change`` to every listed record, or to none if any change raises."""
        with self._lock:
            updated = {record_id: change(self.get(record_id)) for record_id in record_ids}
            self._records.update(updated)
            return list(updated.values())

    def remove(self, record_id: int) -> FileRecord:
        """Drop a record and its result entry."""
        with self._lock:
            record = self.get(record_id)
            del self._records[record_id]
            self._results.pop(record.name, None)
            return record

    def complete(
        self,
        record_id: int,
        change: Callable[[FileRecord], FileRecord],
        result: AnalysisResult,
    ) -> FileRecord:
        """Apply the final transition and store the result in one step.

        Readers never see the new record without its result, and a record that
        was removed leaves no result behind.
        """
        with self._lock:
            updated = self.update(record_id, change)
            self._results[updated.name] = result
            return updated

    def results(self) -> dict[str, AnalysisResult]:
        with self._lock:
            return dict(self._results)
