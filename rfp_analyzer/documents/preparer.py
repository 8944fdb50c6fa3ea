"""Turns stored files into payloads the LLM gateway can attach."""

import base64
from pathlib import Path

from rfp_analyzer.documents.exceptions import DocumentReadError
from rfp_analyzer.documents.file_loader import FileLoader
from rfp_analyzer.documents.models import Base64Document, PreparedDocument, TextDocument
from rfp_analyzer.logging.logger import Log
from rfp_analyzer.pdf.base import BasePdfExtractor
from rfp_analyzer.pdf.exceptions import PdfExtractionError

PDF_MIME_TYPE = "application/pdf"


class DocumentPreparer:
    """Extracts PDF text locally and base64-encodes every other file type."""

    def __init__(self, file_loader: FileLoader, pdf_extractor: BasePdfExtractor) -> None:
        self._file_loader = file_loader
        self._pdf_extractor = pdf_extractor

    def prepare(self, file_path: str | Path, mime_type: str) -> PreparedDocument:
        """Prepare a stored file for the LLM.

        Raises:
            DocumentReadError: if the file is missing, unreadable, too large,
                or a PDF that cannot be opened.
        """
        path = self._file_loader.resolve(file_path)
        raw = self._file_loader.load(path)
        if mime_type == PDF_MIME_TYPE:
            return self._prepare_pdf(path, raw)

        Log.info("Prepared document as base64", document=path.name, bytes=len(raw))
        return Base64Document(
            content=base64.b64encode(raw).decode("ascii"),
            size_bytes=len(raw),
            mime_type=mime_type,
            filename=path.name,
        )

    def _prepare_pdf(self, path: Path, raw: bytes) -> TextDocument:
        try:
            extracted = self._pdf_extractor.extract(raw)
        except PdfExtractionError as exc:
            raise DocumentReadError(f"Failed to extract text from PDF {path.name}: {exc}") from exc

        text = extracted.text
        if extracted.failed_pages:
            Log.warning(
                "Skipped unreadable PDF pages",
                document=path.name,
                pages=extracted.failed_pages,
            )
        if not text:
            # Usually a scanned PDF with images only.
            Log.warning("PDF text is empty", document=path.name, pages=extracted.page_count)
        Log.info(
            "Extracted PDF text",
            document=path.name,
            chars=len(text),
            pages=extracted.page_count,
        )
        return TextDocument(
            content=text,
            page_count=extracted.page_count,
            mime_type=PDF_MIME_TYPE,
            filename=path.name,
        )
