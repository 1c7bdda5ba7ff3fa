import io

import pytest
from docx import Document

from services.pdf_parser import extract_document_text, extract_text_docx


def _docx_bytes() -> bytes:
    doc = Document()
    doc.add_paragraph("Senior Backend Engineer")
    doc.add_paragraph("Acme GmbH is hiring in Berlin.")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Salary"
    table.rows[0].cells[1].text = "70.000 - 85.000 EUR"
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def test_extract_text_docx_includes_tables():
    text = extract_text_docx(_docx_bytes())
    assert "Senior Backend Engineer" in text
    assert "Acme GmbH is hiring in Berlin." in text
    assert "Salary | 70.000 - 85.000 EUR" in text


def test_dispatch_by_extension_is_case_insensitive():
    text = extract_document_text("JOB.DOCX", _docx_bytes())
    assert text.startswith("Senior Backend Engineer")


def test_unsupported_extension():
    with pytest.raises(ValueError):
        extract_document_text("job.txt", b"plain text")


def test_corrupt_pdf_raises():
    with pytest.raises(Exception):
        extract_document_text("job.pdf", b"not a pdf")
