import pymupdf

from rfp_analyzer.logging.logger import Log
from rfp_analyzer.pdf.base import BasePdfExtractor, PdfText
from rfp_analyzer.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def extract(self, pdf_bytes: bytes) -> PdfText:
        pages: list[str] = []
        failed: list[int] = []
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                for number, page in enumerate(doc, start=1):
                    try:
                        pages.append(page.get_text())
                    except Exception as exc:
                        Log.warning("Failed to extract PDF page", page=number, error=str(exc))
                        failed.append(number)
                page_count = doc.page_count
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
        return PdfText(pages=pages, page_count=page_count, failed_pages=failed)
