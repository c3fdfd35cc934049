import threading
from dataclasses import replace
from datetime import datetime, timezone

from app.status.base import BaseStatusStore
from app.status.models import ProcessingRecord, ProcessingStatus, TransitionPayload


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryStatusStore(BaseStatusStore):
    """Thread-safe status store kept in process memory."""

    def __init__(self) -> None:
        self._records: dict[str, ProcessingRecord] = {}
        self._lock = threading.Lock()

    def register(self, document_id: str) -> ProcessingRecord:
        with self._lock:
            existing = self._records.get(document_id)
            if existing is not None:
                return existing
            record = ProcessingRecord(
                document_id=document_id,
                status=ProcessingStatus.PENDING,
                last_updated_at=_now(),
            )
            self._records[document_id] = record
            return record

    def get(self, document_id: str) -> ProcessingRecord | None:
        with self._lock:
            return self._records.get(document_id)

    def find_by_status(self, status: ProcessingStatus, limit: int) -> list[str]:
        with self._lock:
            matching = [r for r in self._records.values() if r.status == status]
        matching.sort(key=lambda r: r.last_updated_at)
        return [r.document_id for r in matching[:limit]]

    def delete(self, document_id: str) -> None:
        with self._lock:
            self._records.pop(document_id, None)

    def _compare_and_set(
        self,
        document_id: str,
        expected_current: ProcessingStatus,
        next_status: ProcessingStatus,
        payload: TransitionPayload,
    ) -> bool:
        with self._lock:
            record = self._records.get(document_id)
            if record is None or record.status != expected_current:
                return False
            self._records[document_id] = replace(
                record,
                status=next_status,
                analysis_result=payload.analysis_result,
                error_message=payload.error_message,
                error_kind=payload.error_kind,
                error_detail=payload.error_detail,
                last_updated_at=_now(),
            )
            return True
