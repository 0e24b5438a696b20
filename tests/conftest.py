import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def make_pdf(*pages: str) -> bytes:
    """Render one PDF page per string; an empty string gives a blank page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for text in pages:
        if text:
            c.drawString(72, 720, text)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    return make_pdf("Hello PDF World")


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    return make_pdf("Page one content", "Page two content")


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    return make_pdf("")
