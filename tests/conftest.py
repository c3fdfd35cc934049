import io
import json

import pytest
from docx import Document as DocxDocument
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
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
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """Generate a Word document with two paragraphs and a small table."""
    doc = DocxDocument()
    doc.add_paragraph("Employment Agreement")
    doc.add_paragraph("This agreement is made between Acme Corp and Jane Doe.")
    table = doc.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Salary"
    table.cell(0, 1).text = "100000"
    table.cell(1, 0).text = "Start date"
    table.cell(1, 1).text = "2024-01-01"
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture()
def empty_docx_bytes() -> bytes:
    buf = io.BytesIO()
    DocxDocument().save(buf)
    return buf.getvalue()


@pytest.fixture()
def contract_response() -> str:
    """A valid analysis service response for a contract."""
    return json.dumps(
        {
            "summary": "Employment agreement between Acme Corp and Jane Doe.",
            "parties": ["Acme Corp", "Jane Doe"],
            "keyDates": ["2024-01-01: start date"],
            "financialTerms": ["Salary 100000"],
            "keyObligations": [],
            "riskFactors": [],
            "recommendedActions": ["Review termination clause"],
            "confidence": 0.87,
        }
    )
