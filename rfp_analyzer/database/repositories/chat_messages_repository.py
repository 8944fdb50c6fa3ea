import uuid

from psycopg.rows import dict_row

from rfp_analyzer.database.connection import get_connection
from rfp_analyzer.database.models import ChatMessageRecord
from rfp_analyzer.database.repositories.helpers import parse_uuid


class ChatMessagesRepository:
    """Database operations for the chat_messages table."""

    def add(
        self,
        *,
        session_id: str,
        owner_id: str,
        sender: str,
        message: str,
        document_id: str | None = None,
    ) -> ChatMessageRecord:
        message_id = uuid.uuid4()
        document_uuid = parse_uuid(document_id) if document_id else None
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO chat_messages
                        (id, session_id, sender, message, document_id, user_id)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    RETURNING created_at
                    """,
                    (message_id, session_id, sender, message, document_uuid, uuid.UUID(owner_id)),
                )
                row = cur.fetchone()
            conn.commit()

        return ChatMessageRecord(
            id=str(message_id),
            session_id=session_id,
            owner_id=owner_id,
            sender=sender,
            message=message,
            document_id=str(document_uuid) if document_uuid else None,
            created_at=row["created_at"] if row else None,
        )

    def recent(self, session_id: str, owner_id: str, limit: int) -> list[ChatMessageRecord]:
        """Last ``limit`` messages of a session, oldest first."""
        owner_uuid = parse_uuid(owner_id)
        if owner_uuid is None or limit <= 0:
            return []

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, session_id, user_id, sender, message, document_id, created_at
                    FROM chat_messages
                    WHERE session_id = %s AND user_id = %s
                    ORDER BY created_at DESC
                    LIMIT %s
                    """,
                    (session_id, owner_uuid, limit),
                )
                rows = cur.fetchall()

        return [self._to_record(row) for row in reversed(rows)]

    def list_for_session(
        self,
        session_id: str,
        owner_id: str,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> list[ChatMessageRecord]:
        owner_uuid = parse_uuid(owner_id)
        if owner_uuid is None:
            return []

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, session_id, user_id, sender, message, document_id, created_at
                    FROM chat_messages
                    WHERE session_id = %s AND user_id = %s
                    ORDER BY created_at
                    LIMIT %s OFFSET %s
                    """,
                    (session_id, owner_uuid, limit, offset),
                )
                rows = cur.fetchall()

        return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: dict) -> ChatMessageRecord:
        return ChatMessageRecord(
            id=str(row["id"]),
            session_id=row["session_id"],
            owner_id=str(row["user_id"]),
            sender=row["sender"],
            message=row["message"],
            document_id=str(row["document_id"]) if row["document_id"] else None,
            created_at=row["created_at"],
        )
