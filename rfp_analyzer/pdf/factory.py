from typing import ClassVar

from rfp_analyzer.config.settings import Settings
from rfp_analyzer.logging.logger import Log
from rfp_analyzer.pdf.base import BasePdfExtractor
from rfp_analyzer.pdf.pdfplumber_adapter import PdfPlumberAdapter
from rfp_analyzer.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the PDF text extractor named by the ``pdf_engine`` setting."""

    ENGINES: ClassVar[dict[str, type[BasePdfExtractor]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.strip().lower()
        extractor_cls = cls.ENGINES.get(engine)
        if extractor_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {sorted(cls.ENGINES)}"
            )
        Log.debug("Using PDF engine", engine=engine)
        return extractor_cls()
