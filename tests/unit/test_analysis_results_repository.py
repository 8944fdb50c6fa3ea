import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from psycopg.types.json import Jsonb

from rfp_analyzer.database.repositories.analysis_results_repository import AnalysisResultsRepository

RESULT_ID = "33333333-3333-3333-3333-333333333333"
DOC_ID = "22222222-2222-2222-2222-222222222222"
OWNER_ID = "11111111-1111-1111-1111-111111111111"
CREATED = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
PATCH_TARGET = "rfp_analyzer.database.repositories.analysis_results_repository.get_connection"


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


def _make_row() -> dict:
    return {
        "id": uuid.UUID(RESULT_ID),
        "document_id": uuid.UUID(DOC_ID),
        "user_id": uuid.UUID(OWNER_ID),
        "analysis_type": "quick_rfp_analysis",
        "questions": ["Budget?", "Deadline?"],
        "answers": {"Budget?": "1 crore", "Deadline?": "Not specified in RFP"},
        "metadata": {"model": "m"},
        "created_at": CREATED,
        "document_name": "tender.pdf",
        "document_mime_type": "application/pdf",
    }


class TestCreate:
    @patch(PATCH_TARGET)
    def test_inserts_json_columns_and_commits(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = {"created_at": CREATED}

        record = AnalysisResultsRepository().create(
            document_id=DOC_ID,
            owner_id=OWNER_ID,
            analysis_type="quick_rfp_analysis",
            questions=["Budget?"],
            answers={"Budget?": "1 crore"},
            metadata={"model": "m"},
        )

        params = mock_cursor.execute.call_args.args[1]
        assert isinstance(params[3], Jsonb)
        assert params[3].obj == ["Budget?"]
        assert params[4].obj == {"Budget?": "1 crore"}
        assert params[6] == uuid.UUID(OWNER_ID)
        mock_conn.commit.assert_called_once()
        assert record.created_at == CREATED
        assert uuid.UUID(record.id)


class TestFindById:
    @patch(PATCH_TARGET)
    def test_maps_row_with_document(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row()

        record = AnalysisResultsRepository().find_by_id(RESULT_ID, OWNER_ID)

        assert record is not None
        assert record.id == RESULT_ID
        assert record.document_id == DOC_ID
        assert record.document_name == "tender.pdf"
        assert record.answered_count == 1

    @patch(PATCH_TARGET)
    def test_missing_row_returns_none(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        assert AnalysisResultsRepository().find_by_id(RESULT_ID, OWNER_ID) is None

    @patch(PATCH_TARGET)
    def test_malformed_id_returns_none_without_query(self, mock_get_conn: MagicMock) -> None:
        assert AnalysisResultsRepository().find_by_id("nope", OWNER_ID) is None
        mock_get_conn.assert_not_called()


class TestListForOwner:
    @patch(PATCH_TARGET)
    def test_returns_page_and_total(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = {"total": 7}
        mock_cursor.fetchall.return_value = [_make_row()]

        records, total = AnalysisResultsRepository().list_for_owner(
            OWNER_ID, limit=1, offset=2, analysis_type="quick_rfp_analysis"
        )

        assert total == 7
        assert [r.id for r in records] == [RESULT_ID]
        page_sql, page_params = mock_cursor.execute.call_args.args
        assert "r.analysis_type = %s" in page_sql
        assert page_params == [uuid.UUID(OWNER_ID), "quick_rfp_analysis", 1, 2]


class TestDelete:
    @patch(PATCH_TARGET)
    def test_returns_true_when_row_deleted(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 1

        assert AnalysisResultsRepository().delete(RESULT_ID, OWNER_ID) is True
        mock_conn.commit.assert_called_once()

    @patch(PATCH_TARGET)
    def test_returns_false_when_nothing_matched(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 0

        assert AnalysisResultsRepository().delete(RESULT_ID, OWNER_ID) is False


class TestStats:
    @patch(PATCH_TARGET)
    def test_aggregates_by_type(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [
            {"analysis_type": "quick_rfp_analysis", "count": 3, "unique_documents": 2},
        ]
        mock_cursor.fetchone.return_value = {"total_analyses": 3, "unique_documents_analyzed": 2}

        stats = AnalysisResultsRepository().stats_for_owner(OWNER_ID)

        assert stats.total_analyses == 3
        assert stats.unique_documents_analyzed == 2
        assert stats.by_type == {"quick_rfp_analysis": {"count": 3, "unique_documents": 2}}
