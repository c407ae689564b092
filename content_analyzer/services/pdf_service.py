"""PDF text extraction.

Pages are read in order. Within a page the text runs PyPDF2 yields are joined
by a single space; pages are joined by newlines.
"""
from __future__ import annotations

import io
import logging
from typing import List

import PyPDF2
from PyPDF2 import PasswordType

from content_analyzer.errors import PdfExtractionError

logger = logging.getLogger(__name__)


def page_text(page) -> str:
    items = [line.strip() for line in (page.extract_text() or "").splitlines()]
    return " ".join(item for item in items if item)


def extract_pdf_text(data: bytes) -> str:
    try:
        reader = PyPDF2.PdfReader(io.BytesIO(data))
        # Owner-password-only files open with an empty user password.
        if reader.is_encrypted and reader.decrypt("") == PasswordType.NOT_DECRYPTED:
            raise PdfExtractionError("Failed to extract text from PDF: document is password-protected")
        parts: List[str] = [page_text(page) for page in reader.pages]
    except PdfExtractionError:
        raise
    except Exception as e:
        logger.warning("Error parsing PDF: %s: %s", type(e).__name__, e)
        raise PdfExtractionError(f"Failed to extract text from PDF: {e}") from e

    text = "\n".join(parts).strip()
    logger.info("Extracted %d characters from %d PDF page(s)", len(text), len(parts))
    return text
