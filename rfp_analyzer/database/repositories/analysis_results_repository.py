import uuid
from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from rfp_analyzer.database.connection import get_connection
from rfp_analyzer.database.models import AnalysisResultRecord, AnalysisStats
from rfp_analyzer.database.repositories.helpers import parse_uuid

_SELECT_WITH_DOCUMENT = """
    SELECT r.id, r.document_id, r.user_id, r.analysis_type, r.questions,
           r.answers, r.metadata, r.created_at,
           d.original_name AS document_name, d.mime_type AS document_mime_type
    FROM analysis_results r
    LEFT JOIN uploaded_documents d ON d.id = r.document_id
"""


class AnalysisResultsRepository:
    """Database operations for the analysis_results table.

    Every read and delete is filtered by the owner id; rows are never updated.
    """

    def create(
        self,
        *,
        document_id: str,
        owner_id: str,
        analysis_type: str,
        questions: list[str],
        answers: dict[str, str],
        metadata: dict[str, Any] | None = None,
    ) -> AnalysisResultRecord:
        """Insert one analysis result and return it."""
        result_id = uuid.uuid4()
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO analysis_results
                        (id, document_id, analysis_type, questions, answers, metadata, user_id)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    RETURNING created_at
                    """,
                    (
                        result_id,
                        uuid.UUID(document_id),
                        analysis_type,
                        Jsonb(questions),
                        Jsonb(answers),
                        Jsonb(metadata) if metadata is not None else None,
                        uuid.UUID(owner_id),
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        return AnalysisResultRecord(
            id=str(result_id),
            document_id=document_id,
            owner_id=owner_id,
            analysis_type=analysis_type,
            questions=list(questions),
            answers=dict(answers),
            metadata=metadata,
            created_at=row["created_at"] if row else None,
        )

    def find_by_id(self, result_id: str, owner_id: str) -> AnalysisResultRecord | None:
        result_uuid = parse_uuid(result_id)
        owner_uuid = parse_uuid(owner_id)
        if result_uuid is None or owner_uuid is None:
            return None

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    _SELECT_WITH_DOCUMENT + " WHERE r.id = %s AND r.user_id = %s",
                    (result_uuid, owner_uuid),
                )
                row = cur.fetchone()

        return self._to_record(row) if row is not None else None

    def list_for_owner(
        self,
        owner_id: str,
        *,
        limit: int = 20,
        offset: int = 0,
        analysis_type: str | None = None,
    ) -> tuple[list[AnalysisResultRecord], int]:
        """Return one page of results, newest first, plus the total count."""
        owner_uuid = parse_uuid(owner_id)
        if owner_uuid is None:
            return [], 0

        where = " WHERE r.user_id = %s"
        params: list[Any] = [owner_uuid]
        if analysis_type:
            where += " AND r.analysis_type = %s"
            params.append(analysis_type)

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    "SELECT COUNT(*) AS total FROM analysis_results r" + where,
                    params,
                )
                count_row = cur.fetchone()
                cur.execute(
                    _SELECT_WITH_DOCUMENT + where + " ORDER BY r.created_at DESC LIMIT %s OFFSET %s",
                    [*params, limit, offset],
                )
                rows = cur.fetchall()

        total = int(count_row["total"]) if count_row else 0
        return [self._to_record(row) for row in rows], total

    def delete(self, result_id: str, owner_id: str) -> bool:
        """Delete a result. Returns False when nothing matched."""
        result_uuid = parse_uuid(result_id)
        owner_uuid = parse_uuid(owner_id)
        if result_uuid is None or owner_uuid is None:
            return False

        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM analysis_results WHERE id = %s AND user_id = %s",
                    (result_uuid, owner_uuid),
                )
                deleted = cur.rowcount > 0
            conn.commit()
        return deleted

    def stats_for_owner(self, owner_id: str) -> AnalysisStats:
        owner_uuid = parse_uuid(owner_id)
        if owner_uuid is None:
            return AnalysisStats()

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT analysis_type,
                           COUNT(id) AS count,
                           COUNT(DISTINCT document_id) AS unique_documents
                    FROM analysis_results
                    WHERE user_id = %s
                    GROUP BY analysis_type
                    """,
                    (owner_uuid,),
                )
                type_rows = cur.fetchall()
                cur.execute(
                    """
                    SELECT COUNT(id) AS total_analyses,
                           COUNT(DISTINCT document_id) AS unique_documents_analyzed
                    FROM analysis_results
                    WHERE user_id = %s
                    """,
                    (owner_uuid,),
                )
                total_row = cur.fetchone()

        return AnalysisStats(
            total_analyses=int(total_row["total_analyses"]) if total_row else 0,
            unique_documents_analyzed=(
                int(total_row["unique_documents_analyzed"]) if total_row else 0
            ),
            by_type={
                row["analysis_type"]: {
                    "count": int(row["count"]),
                    "unique_documents": int(row["unique_documents"]),
                }
                for row in type_rows
            },
        )

    @staticmethod
    def _to_record(row: dict[str, Any]) -> AnalysisResultRecord:
        return AnalysisResultRecord(
            id=str(row["id"]),
            document_id=str(row["document_id"]),
            owner_id=str(row["user_id"]),
            analysis_type=row["analysis_type"],
            questions=list(row["questions"] or []),
            answers=dict(row["answers"] or {}),
            metadata=row["metadata"],
            created_at=row["created_at"],
            document_name=row.get("document_name"),
            document_mime_type=row.get("document_mime_type"),
        )
