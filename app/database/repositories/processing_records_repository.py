from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from app.database.connection import get_connection
from app.status.base import BaseStatusStore
from app.status.exceptions import StatusStoreError
from app.status.models import ErrorKind, ProcessingRecord, ProcessingStatus, TransitionPayload

_COLUMNS = """
    document_id, status, analysis_result, error_message,
    error_kind, error_detail, last_updated_at
"""


class PostgresStatusStore(BaseStatusStore):
    """Status store backed by the document_processing_records table.

    Transitions are a single conditional UPDATE, so a stale writer never
    overwrites a newer state.
    """

    def register(self, document_id: str) -> ProcessingRecord:
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        INSERT INTO document_processing_records (document_id, status)
                        VALUES (%s, %s)
                        ON CONFLICT (document_id) DO NOTHING
                        """,
                        (document_id, ProcessingStatus.PENDING.value),
                    )
                    cur.execute(
                        f"SELECT {_COLUMNS} FROM document_processing_records "
                        "WHERE document_id = %s",
                        (document_id,),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise StatusStoreError(f"Failed to register document {document_id}: {exc}") from exc

        if row is None:
            raise StatusStoreError(f"Record for document {document_id} vanished after insert")
        return self._to_record(row)

    def get(self, document_id: str) -> ProcessingRecord | None:
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"SELECT {_COLUMNS} FROM document_processing_records "
                        "WHERE document_id = %s",
                        (document_id,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise StatusStoreError(f"Failed to read document {document_id}: {exc}") from exc

        if row is None:
            return None
        return self._to_record(row)

    def find_by_status(self, status: ProcessingStatus, limit: int) -> list[str]:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        SELECT document_id
                        FROM document_processing_records
                        WHERE status = %s
                        ORDER BY last_updated_at
                        LIMIT %s
                        """,
                        (status.value, limit),
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise StatusStoreError(f"Failed to list {status.value} records: {exc}") from exc
        return [row[0] for row in rows]

    def delete(self, document_id: str) -> None:
        try:
            with get_connection() as conn:
                conn.execute(
                    "DELETE FROM document_processing_records WHERE document_id = %s",
                    (document_id,),
                )
                conn.commit()
        except psycopg.Error as exc:
            raise StatusStoreError(f"Failed to delete document {document_id}: {exc}") from exc

    def _compare_and_set(
        self,
        document_id: str,
        expected_current: ProcessingStatus,
        next_status: ProcessingStatus,
        payload: TransitionPayload,
    ) -> bool:
        result = (
            Jsonb(payload.analysis_result) if payload.analysis_result is not None else None
        )
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        UPDATE document_processing_records
                        SET status = %s,
                            analysis_result = %s,
                            error_message = %s,
                            error_kind = %s,
                            error_detail = %s,
                            last_updated_at = NOW()
                        WHERE document_id = %s
                          AND status = %s
                        """,
                        (
                            next_status.value,
                            result,
                            payload.error_message,
                            payload.error_kind.value if payload.error_kind else None,
                            payload.error_detail,
                            document_id,
                            expected_current.value,
                        ),
                    )
                    updated = cur.rowcount == 1
                conn.commit()
        except psycopg.Error as exc:
            raise StatusStoreError(
                f"Failed to move document {document_id} to {next_status.value}: {exc}"
            ) from exc
        return updated

    @staticmethod
    def _to_record(row: dict[str, Any]) -> ProcessingRecord:
        return ProcessingRecord(
            document_id=row["document_id"],
            status=ProcessingStatus(row["status"]),
            analysis_result=row["analysis_result"],
            error_message=row["error_message"],
            error_kind=ErrorKind(row["error_kind"]) if row["error_kind"] else None,
            error_detail=row["error_detail"],
            last_updated_at=row["last_updated_at"],
        )
