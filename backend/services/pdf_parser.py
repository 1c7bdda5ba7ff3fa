import io
import re

import pdfplumber

SUPPORTED_EXTENSIONS = (".pdf", ".docx")

_BLANK_LINES_RE = re.compile(r"\n{3,}")


def extract_text(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file."""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return _BLANK_LINES_RE.sub("\n\n", "\n".join(pages)).strip()


def extract_text_docx(docx_bytes: bytes) -> str:
    """Extract all text from a DOCX file, including table cells."""
    from docx import Document

    doc = Document(io.BytesIO(docx_bytes))
    lines = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            lines.append(" | ".join(cell.text.strip() for cell in row.cells))
    return _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


def extract_document_text(filename: str, content: bytes) -> str:
    """Dispatch on file extension. Raises ValueError for unsupported types."""
    name = filename.lower()
    if name.endswith(".pdf"):
        return extract_text(content)
    if name.endswith(".docx"):
        return extract_text_docx(content)
    raise ValueError(f"Unsupported file type: {filename}")
