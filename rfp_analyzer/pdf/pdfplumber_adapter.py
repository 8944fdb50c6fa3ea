import io

import pdfplumber

from rfp_analyzer.logging.logger import Log
from rfp_analyzer.pdf.base import BasePdfExtractor, PdfText
from rfp_analyzer.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> PdfText:
        pages: list[str] = []
        failed: list[int] = []
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                for number, page in enumerate(pdf.pages, start=1):
                    try:
                        pages.append(page.extract_text() or "")
                    except Exception as exc:
                        Log.warning("Failed to extract PDF page", page=number, error=str(exc))
                        failed.append(number)
                page_count = len(pdf.pages)
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        return PdfText(pages=pages, page_count=page_count, failed_pages=failed)
