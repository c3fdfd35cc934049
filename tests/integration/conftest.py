import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from app.config.settings import Settings
from app.database.connection import close_pool, get_connection, init_pool

_SCHEMA_PATH = Path(__file__).resolve().parents[2] / "app" / "database" / "schema.sql"


def _test_settings() -> Settings:
    return Settings(
        db_database=os.environ.get("DB_DATABASE", "docpipeline_test"),
        analysis_provider=os.environ.get("ANALYSIS_PROVIDER", "example"),
    )


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(_SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. Set DB_* env to a scratch database"
        )
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    """Collects document ids; their rows (and records, by cascade) are removed afterwards."""
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for document_id in cleanup:
                cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
        conn.commit()


@pytest.fixture
def files_root(tmp_path: Any) -> Any:
    return tmp_path


@pytest.fixture
def seed_document(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[str],
) -> str:
    document_id = str(uuid.uuid4())
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO documents
            (id, storage_key, mime_type, document_type, title, original_filename)
            VALUES (%s, %s, %s, %s, %s, %s)
            """,
            (
                document_id,
                f"{document_id}.pdf",
                "application/pdf",
                "CONTRACT",
                "Employment Agreement",
                "employment.pdf",
            ),
        )
    db_conn.commit()
    integration_cleanup.append(document_id)
    return document_id


@pytest.fixture
def sample_pdf_on_disk(
    seed_document: str,
    files_root: Any,
    sample_pdf_bytes: bytes,
) -> tuple[str, Any]:
    path = files_root / f"{seed_document}.pdf"
    path.write_bytes(sample_pdf_bytes)
    return (seed_document, files_root)
