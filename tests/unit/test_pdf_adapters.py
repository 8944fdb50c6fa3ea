from typing import Any
from unittest.mock import patch

import pymupdf
import pytest
from pdfplumber.page import Page as PlumberPage

from rfp_analyzer.pdf.base import BasePdfExtractor, PdfText
from rfp_analyzer.pdf.exceptions import PdfExtractionError
from rfp_analyzer.pdf.pdfplumber_adapter import PdfPlumberAdapter
from rfp_analyzer.pdf.pymupdf_adapter import PyMuPdfAdapter

ADAPTERS = [PdfPlumberAdapter, PyMuPdfAdapter]


@pytest.mark.parametrize("adapter_cls", ADAPTERS)
class TestPdfAdapters:
    def test_extract_returns_text(
        self, adapter_cls: type[BasePdfExtractor], rfp_cover_pdf_bytes: bytes
    ) -> None:
        result = adapter_cls().extract(rfp_cover_pdf_bytes)
        assert isinstance(result, PdfText)
        assert "Smart Parking Platform" in result.text
        assert result.page_count == 1

    def test_extract_multi_page_in_order(
        self, adapter_cls: type[BasePdfExtractor], tender_pdf_bytes: bytes
    ) -> None:
        result = adapter_cls().extract(tender_pdf_bytes)
        assert result.page_count == 3
        assert result.text.index("Smart Parking") < result.text.index("4.5 crore")
        assert result.text.index("4.5 crore") < result.text.index("QCBS")

    def test_extract_blank_pdf_returns_empty_string(
        self, adapter_cls: type[BasePdfExtractor], blank_pdf_bytes: bytes
    ) -> None:
        result = adapter_cls().extract(blank_pdf_bytes)
        assert result.text == ""
        assert result.failed_pages == []

    def test_extract_raises_on_invalid_bytes(self, adapter_cls: type[BasePdfExtractor]) -> None:
        with pytest.raises(PdfExtractionError):
            adapter_cls().extract(b"not a pdf")

    def test_extract_result_is_stripped(
        self, adapter_cls: type[BasePdfExtractor], rfp_cover_pdf_bytes: bytes
    ) -> None:
        text = adapter_cls().extract(rfp_cover_pdf_bytes).text
        assert text == text.strip()


class TestFailingPage:
    def test_pdfplumber_skips_page_that_fails(self, tender_pdf_bytes: bytes) -> None:
        original = PlumberPage.extract_text

        def extract_text(page: Any, *args: Any, **kwargs: Any) -> str:
            if page.page_number == 2:
                raise ValueError("corrupt content stream")
            return original(page, *args, **kwargs)

        with patch.object(PlumberPage, "extract_text", autospec=True, side_effect=extract_text):
            result = PdfPlumberAdapter().extract(tender_pdf_bytes)

        assert result.failed_pages == [2]
        assert result.page_count == 3
        assert "Smart Parking" in result.text
        assert "QCBS" in result.text
        assert "4.5 crore" not in result.text

    def test_pymupdf_skips_page_that_fails(self, tender_pdf_bytes: bytes) -> None:
        original = pymupdf.Page.get_text

        def get_text(page: Any, *args: Any, **kwargs: Any) -> str:
            if page.number == 1:
                raise RuntimeError("corrupt content stream")
            return original(page, *args, **kwargs)

        with patch.object(pymupdf.Page, "get_text", autospec=True, side_effect=get_text):
            result = PyMuPdfAdapter().extract(tender_pdf_bytes)

        assert result.failed_pages == [2]
        assert result.page_count == 3
        assert "Smart Parking" in result.text
        assert "QCBS" in result.text
        assert "4.5 crore" not in result.text


class TestPdfText:
    def test_blank_pages_are_skipped_in_join(self) -> None:
        result = PdfText(pages=["first", "   ", "second\n"], page_count=3)
        assert result.text == "first\n\nsecond"

    def test_no_pages_gives_empty_text(self) -> None:
        assert PdfText().text == ""
