import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from rfp_analyzer.config.settings import Settings
from rfp_analyzer.database.connection import close_pool, get_connection, init_pool

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "rfp_analyzer" / "database" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "rfp_analyzer_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def seed_owner(db_conn: psycopg.Connection[Any]) -> Generator[str, None, None]:
    """A throwaway user; deleting it cascades to its documents and results."""
    owner_id = uuid.uuid4()
    with db_conn.cursor() as cur:
        cur.execute(
            "INSERT INTO users (id, email) VALUES (%s, %s)",
            (owner_id, f"{owner_id}@example.com"),
        )
    db_conn.commit()
    try:
        yield str(owner_id)
    finally:
        with db_conn.cursor() as cur:
            cur.execute("DELETE FROM users WHERE id = %s", (owner_id,))
        db_conn.commit()


@pytest.fixture
def seed_document(db_conn: psycopg.Connection[Any], seed_owner: str) -> str:
    document_id = uuid.uuid4()
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO uploaded_documents
                (id, user_id, name, original_name, file_path, mime_type, size_bytes)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            """,
            (
                document_id,
                uuid.UUID(seed_owner),
                "tender",
                "tender.pdf",
                "tender.pdf",
                "application/pdf",
                1024,
            ),
        )
    db_conn.commit()
    return str(document_id)
