import io

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

TENDER_PAGES = [
    ["Request for Proposal: Smart Parking Platform", "Issued by: Pune Municipal Corporation"],
    ["Estimated contract value: INR 4.5 crore", "Bid submission deadline: 15 March 2025"],
    ["EMD: INR 9 lakh via bank guarantee", "Evaluation: QCBS 70:30"],
]


def _render(pages: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    for lines in pages:
        y = 780
        for line in lines:
            c.drawString(72, y, line)
            y -= 18
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def rfp_cover_pdf_bytes() -> bytes:
    """Single-page RFP cover sheet."""
    return _render(TENDER_PAGES[:1])


@pytest.fixture()
def tender_pdf_bytes() -> bytes:
    """Three-page tender; each page carries distinct commercial terms."""
    return _render(TENDER_PAGES)


@pytest.fixture()
def blank_pdf_bytes() -> bytes:
    """Valid PDF with a single page and no text, like an unOCRed scan."""
    return _render([[]])
