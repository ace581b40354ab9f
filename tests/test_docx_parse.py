from io import BytesIO
from docx import Document
from fastapi.testclient import TestClient
from app.core.docx_extractor import extract_docx_text
from app.core.errors import ExtractionError
from app.main import app
import pytest

client = TestClient(app)

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _docx_bytes(doc):
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


def test_parse_docx_extracts_contact_fields():
    doc = Document()
    doc.add_paragraph("Jane Doe")
    doc.add_paragraph("Email: jane.doe@example.com")
    doc.add_paragraph("Phone: (555) 123-4567")
    doc.add_paragraph("Experience")
    doc.add_paragraph("Acme Corp")

    files = {"file": ("resume.docx", _docx_bytes(doc), DOCX_TYPE)}
    r = client.post("/parse", files=files)
    assert r.status_code == 200
    data = r.json()

    assert data["result"]["name"] == "Jane Doe"
    assert data["result"]["email"] == "jane.doe@example.com"
    assert data["result"]["phone"] == "5551234567"
    assert data["result"]["debug"]["headerPreview"] == ["Jane Doe", "Email: jane.doe@example.com", "Phone: (555) 123-4567"]
    assert data["missing"] == []
    assert data["source"] == "docx"


def test_docx_table_header_is_read_in_order():
    doc = Document()
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Jane Doe"
    table.rows[0].cells[1].text = "jane@example.com"
    doc.add_paragraph("Skills")
    doc.add_paragraph("Python")

    text = extract_docx_text(_docx_bytes(doc))
    assert text.split("\n") == ["Jane Doe", "jane@example.com", "Skills", "Python"]


def test_docx_empty_paragraphs_skipped():
    doc = Document()
    doc.add_paragraph("Jane Doe")
    doc.add_paragraph("")
    doc.add_paragraph("   ")
    doc.add_paragraph("jane@example.com")

    assert extract_docx_text(_docx_bytes(doc)) == "Jane Doe\njane@example.com"


def test_corrupt_docx_raises_extraction_error():
    with pytest.raises(ExtractionError):
        extract_docx_text(b"this is not a zip archive")
