"""
HTTP-level tests for the upload endpoint and health routes.
"""

from io import BytesIO

import pdfplumber
from docx import Document
from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


class FakePage:
    def __init__(self, words):
        self._words = words

    def extract_words(self, **kwargs):
        return [dict(w) for w in self._words]


class FakePDF:
    def __init__(self, pages):
        self.pages = pages

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_health_routes():
    assert client.get("/").json() == {"service": "resume-contact-extractor", "status": "running"}
    assert client.get("/health").json() == {"status": "ok"}


def test_empty_upload_rejected():
    r = client.post("/parse", files={"file": ("resume.pdf", b"", "application/pdf")})
    assert r.status_code == 400


def test_legacy_doc_rejected():
    r = client.post("/parse", files={"file": ("resume.doc", b"\xd0\xcf\x11\xe0", "application/msword")})
    assert r.status_code == 415
    assert "Legacy .doc" in r.json()["detail"]


def test_plain_text_rejected():
    r = client.post("/parse", files={"file": ("resume.txt", b"Jane Doe\njane@x.com", "text/plain")})
    assert r.status_code == 415
    assert r.json()["detail"] == "Unsupported file type. Please upload a PDF or DOCX."


def test_corrupt_docx_is_unprocessable():
    r = client.post("/parse", files={"file": ("resume.docx", b"not a docx", "application/octet-stream")})
    assert r.status_code == 422
    assert r.json()["detail"] == "Failed to extract text from the DOCX file."


def test_corrupt_pdf_is_unprocessable():
    r = client.post("/parse", files={"file": ("resume.pdf", b"%PDF-1.4 garbage", "application/pdf")})
    assert r.status_code == 422


def test_docx_without_text_is_unprocessable():
    doc = Document()
    buf = BytesIO()
    doc.save(buf)
    r = client.post("/parse", files={"file": ("resume.docx", buf.getvalue(), "application/octet-stream")})
    assert r.status_code == 422
    assert "no extractable text" in r.json()["detail"]


def test_pdf_upload(monkeypatch):
    page = FakePage([
        {"text": "Jane", "top": 10.0, "x0": 10.0},
        {"text": "Doe", "top": 10.2, "x0": 50.0},
        {"text": "jane@example.com", "top": 30.0, "x0": 10.0},
        {"text": "Phone:", "top": 50.0, "x0": 10.0},
        {"text": "555-123-4567", "top": 50.0, "x0": 60.0},
    ])
    monkeypatch.setattr(pdfplumber, "open", lambda *args, **kwargs: FakePDF([page]))

    r = client.post("/parse", files={"file": ("jane_doe.pdf", b"%PDF-1.4", "application/pdf")})
    assert r.status_code == 200
    data = r.json()
    assert data["result"]["name"] == "Jane Doe"
    assert data["result"]["email"] == "jane@example.com"
    assert data["result"]["phone"] == "5551234567"
    assert data["source"] == "pdf"
    assert data["parse_quality"] == "high"
