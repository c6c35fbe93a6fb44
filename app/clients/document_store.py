"""SQLite-backed document store used by the credential and token layers."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from app.core.errors import DocumentStoreError
from app.models import DocumentRecord

logger = logging.getLogger(__name__)


class SQLiteDocumentStore:
    """Persist document metadata and content in a single sqlite table."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    room_id TEXT PRIMARY KEY,
                    doc_id INTEGER NOT NULL,
                    pin INTEGER NOT NULL,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL DEFAULT '',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_documents_credentials "
                "ON documents (doc_id, pin)"
            )

    def create_document(self, record: DocumentRecord) -> DocumentRecord:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO documents (
                        room_id, doc_id, pin, title, content, created_at, updated_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.room_id,
                        record.doc_id,
                        record.pin,
                        record.title,
                        record.content,
                        record.created_at.isoformat(),
                        record.updated_at.isoformat(),
                    ),
                )
        except sqlite3.Error as exc:
            raise DocumentStoreError("Failed to create document.") from exc
        return record

    def find_by_credentials(self, *, doc_id: int, pin: int) -> list[DocumentRecord]:
        """Return every document matching the docId/pin pair exactly."""
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    "SELECT * FROM documents WHERE doc_id = ? AND pin = ?",
                    (doc_id, pin),
                ).fetchall()
        except sqlite3.Error as exc:
            raise DocumentStoreError("Failed to look up document credentials.") from exc
        return [self._row_to_record(row) for row in rows]

    def get_document(self, room_id: str) -> Optional[DocumentRecord]:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT * FROM documents WHERE room_id = ?", (room_id,)
                ).fetchone()
        except sqlite3.Error as exc:
            raise DocumentStoreError("Failed to load document.") from exc
        if not row:
            return None
        return self._row_to_record(row)

    def update_content(self, room_id: str, content: str) -> Optional[DocumentRecord]:
        """Overwrite stored content; returns ``None`` when the document is gone."""
        updated_at = datetime.now(timezone.utc).isoformat()
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "UPDATE documents SET content = ?, updated_at = ? WHERE room_id = ?",
                    (content, updated_at, room_id),
                )
                if cursor.rowcount == 0:
                    return None
                row = conn.execute(
                    "SELECT * FROM documents WHERE room_id = ?", (room_id,)
                ).fetchone()
        except sqlite3.Error as exc:
            raise DocumentStoreError("Failed to save document content.") from exc
        return self._row_to_record(row)

    def delete_document(self, room_id: str) -> bool:
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "DELETE FROM documents WHERE room_id = ?", (room_id,)
                )
        except sqlite3.Error as exc:
            raise DocumentStoreError("Failed to delete document.") from exc
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info("Deleted document room=%s", room_id)
        return deleted

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> DocumentRecord:
        return DocumentRecord(
            room_id=row["room_id"],
            doc_id=row["doc_id"],
            pin=row["pin"],
            title=row["title"],
            content=row["content"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )


__all__ = ["SQLiteDocumentStore"]
