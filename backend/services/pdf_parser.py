import io
import logging
from pathlib import Path

import pdfplumber

from services.errors import ExtractionError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = frozenset({".pdf", ".docx", ".txt", ".md"})


def extract_text(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file."""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages).strip()


def extract_text_docx(docx_bytes: bytes) -> str:
    """Extract all text from a DOCX file."""
    from docx import Document
    doc = Document(io.BytesIO(docx_bytes))
    return "\n".join(p.text for p in doc.paragraphs).strip()


def extract_text_from_bytes(content: bytes, suffix: str) -> str:
    """Extract text from uploaded file content by file suffix.

    Raises ExtractionError if the format is unsupported, parsing fails or
    no text comes out.
    """
    suffix = suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ExtractionError(f"Unsupported resume format: {suffix or 'unknown'}")

    try:
        if suffix == ".pdf":
            text = extract_text(content)
        elif suffix == ".docx":
            text = extract_text_docx(content)
        else:
            text = content.decode("utf-8", errors="replace").strip()
    except Exception as e:
        raise ExtractionError(f"Could not parse {suffix} resume: {e}") from e

    if not text:
        raise ExtractionError("No text could be extracted from resume")
    return text


def extract_text_from_path(path: str | Path) -> str:
    """Read a résumé file from disk and return its text."""
    path = Path(path)
    if not path.is_file():
        raise ExtractionError(f"Resume file not found: {path}")
    try:
        content = path.read_bytes()
    except OSError as e:
        raise ExtractionError(f"Could not read {path}: {e}") from e

    text = extract_text_from_bytes(content, path.suffix)
    logger.info("Extracted %d characters from %s", len(text), path.name)
    return text
