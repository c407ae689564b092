"""Image OCR with tesseract."""
from __future__ import annotations

import io
import logging
import os
import shutil
from typing import Tuple

import pytesseract
from PIL import Image

from content_analyzer.errors import OcrExtractionError

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "eng"

# Ensure pytesseract can find the tesseract binary on common hosts.
if shutil.which("tesseract") is None:
    for cand in ("/usr/bin/tesseract", "/usr/local/bin/tesseract"):
        if os.path.exists(cand):
            pytesseract.pytesseract.tesseract_cmd = cand
            break


def ocr_ready() -> Tuple[bool, str]:
    try:
        _ = pytesseract.get_tesseract_version()
    except Exception as e:
        return False, f"tesseract not available: {e}"
    return True, ""


def extract_image_text(data: bytes, language: str = DEFAULT_LANGUAGE) -> str:
    try:
        with Image.open(io.BytesIO(data)) as img:
            text = pytesseract.image_to_string(img, lang=language) or ""
    except Exception as e:
        logger.warning("Error performing OCR: %s: %s", type(e).__name__, e)
        raise OcrExtractionError(f"Failed to extract text from image: {e}") from e
    return text.strip()
