from abc import ABC, abstractmethod
from dataclasses import dataclass, field

PAGE_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class PdfText:
    """Per-page text pulled out of a PDF."""

    pages: list[str] = field(default_factory=list)
    page_count: int = 0
    failed_pages: list[int] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Pages joined by a blank line; empty pages contribute nothing."""
        return PAGE_SEPARATOR.join(page for page in self.pages if page.strip()).strip()


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> PdfText:
        """Extract text from PDF bytes page by page.

        A page that fails to yield text is logged and recorded in
        ``failed_pages``; it never aborts the whole extraction.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            PdfText with one entry per successfully read page.

        Raises:
            PdfExtractionError: if the document itself cannot be opened.
        """
