from psycopg.rows import dict_row

from rfp_analyzer.database.connection import get_connection
from rfp_analyzer.database.repositories.helpers import parse_uuid
from rfp_analyzer.documents.exceptions import DocumentNotFoundError
from rfp_analyzer.documents.models import UploadedDocument


class UploadedDocumentsRepository:
    """Read access to the uploaded_documents table, scoped by owner."""

    def find_by_id(self, document_id: str, owner_id: str) -> UploadedDocument:
        """Find an uploaded document owned by ``owner_id``.

        Raises:
            DocumentNotFoundError: if no such document exists for this owner.
        """
        doc_uuid = parse_uuid(document_id)
        owner_uuid = parse_uuid(owner_id)
        if doc_uuid is None or owner_uuid is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, user_id, original_name, file_path, mime_type, size_bytes
                    FROM uploaded_documents
                    WHERE id = %s AND user_id = %s
                    """,
                    (doc_uuid, owner_uuid),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        return UploadedDocument(
            id=str(row["id"]),
            owner_id=str(row["user_id"]),
            original_name=row["original_name"],
            file_path=row["file_path"],
            mime_type=row["mime_type"],
            size_bytes=row["size_bytes"],
        )
