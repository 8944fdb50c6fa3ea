import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from rfp_analyzer.database.repositories.chat_messages_repository import ChatMessagesRepository

OWNER_ID = "11111111-1111-1111-1111-111111111111"
PATCH_TARGET = "rfp_analyzer.database.repositories.chat_messages_repository.get_connection"


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


def _row(message: str, minute: int) -> dict:
    return {
        "id": uuid.uuid4(),
        "session_id": "s-1",
        "user_id": uuid.UUID(OWNER_ID),
        "sender": "user",
        "message": message,
        "document_id": None,
        "created_at": datetime(2025, 1, 1, 0, minute, tzinfo=timezone.utc),
    }


class TestAdd:
    @patch(PATCH_TARGET)
    def test_inserts_and_commits(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = {"created_at": datetime(2025, 1, 1, tzinfo=timezone.utc)}

        record = ChatMessagesRepository().add(
            session_id="s-1", owner_id=OWNER_ID, sender="user", message="Hi"
        )

        mock_conn.commit.assert_called_once()
        assert record.sender == "user"
        assert record.document_id is None
        assert record.to_dict()["created_at"] == "2025-01-01T00:00:00+00:00"


class TestRecent:
    @patch(PATCH_TARGET)
    def test_returns_oldest_first(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [_row("second", 2), _row("first", 1)]

        records = ChatMessagesRepository().recent("s-1", OWNER_ID, limit=2)

        assert [r.message for r in records] == ["first", "second"]

    @patch(PATCH_TARGET)
    def test_zero_limit_skips_query(self, mock_get_conn: MagicMock) -> None:
        assert ChatMessagesRepository().recent("s-1", OWNER_ID, limit=0) == []
        mock_get_conn.assert_not_called()
