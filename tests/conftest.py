import io

import pytest
from docx import Document
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docanalyzer.ingestion.models import PLAIN_TEXT, IngestedFile


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "This Agreement may be terminated on 30 days notice")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def scanned_pdf_bytes() -> bytes:
    """Generate a two-page PDF without a text layer, like a scan."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.rect(72, 600, 200, 100, fill=1)
    c.showPage()
    c.rect(72, 600, 200, 100, fill=1)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def docx_bytes() -> bytes:
    """Generate a DOCX with two paragraphs and a small table."""
    document = Document()
    document.add_paragraph("Confidentiality")
    document.add_paragraph("The Receiving Party shall keep all information secret.")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Term"
    table.rows[0].cells[1].text = "Two years"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """Generate a small white PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (40, 20), "white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def gif_bytes() -> bytes:
    """Generate a three-frame GIF."""
    frames = [Image.new("RGB", (20, 20), color) for color in ("white", "black", "white")]
    buf = io.BytesIO()
    frames[0].save(buf, format="GIF", save_all=True, append_images=frames[1:])
    return buf.getvalue()


@pytest.fixture()
def text_file() -> IngestedFile:
    return IngestedFile(
        name="fileA.txt",
        content=b"The Supplier shall indemnify the Customer against all losses.",
        mime_type=PLAIN_TEXT,
    )
