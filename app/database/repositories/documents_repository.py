from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.pipeline.documents import BaseDocumentsRepository
from app.pipeline.models import Document


class DocumentsRepository(BaseDocumentsRepository):
    """Read-only access to the documents table."""

    def find_by_id(self, document_id: str) -> Document | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, storage_key, mime_type, document_type,
                           title, original_filename
                    FROM documents
                    WHERE id = %s
                      AND deleted_at IS NULL
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None

        return Document(
            id=row["id"],
            storage_key=row["storage_key"],
            mime_type=row["mime_type"],
            document_type=row["document_type"],
            title=row["title"],
            file_name=row["original_filename"],
        )

    def is_deleted(self, document_id: str) -> bool:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT deleted_at IS NOT NULL FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()
        return row is None or bool(row[0])
