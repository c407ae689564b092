"""
Intake error taxonomy and the user-facing messages each kind maps to.
"""
import errno
from typing import Tuple

from config import Config


class IntakeError(Exception):
    """Validation or extraction failure reported to the client as a 400."""

    status_code = 400
    message = "Failed to process file. Please try again."

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.message)
        self.detail = detail


class MissingFileError(IntakeError):
    message = "No file provided"


class UnsupportedTypeError(IntakeError):
    message = "Unsupported file type. Please upload PDF or image files."


def size_label(max_bytes: int) -> str:
    return f"{max_bytes // (1024 * 1024)}MB"


def too_large_message(max_bytes: int) -> str:
    return f"File too large. Please upload files smaller than {size_label(max_bytes)}."


class FileTooLargeError(IntakeError):
    message = too_large_message(Config.MAX_UPLOAD_BYTES)

    def __init__(self, detail: str = "", max_bytes: int = Config.MAX_UPLOAD_BYTES):
        super().__init__(detail)
        self.message = too_large_message(max_bytes)


class PdfExtractionError(IntakeError):
    message = "Unable to read PDF content. The file may be corrupted or password-protected."

    def __init__(self, detail: str = ""):
        super().__init__(detail or "Failed to extract text from PDF")


class OcrExtractionError(IntakeError):
    message = "Unable to extract text from image. Please ensure the image contains readable text."

    def __init__(self, detail: str = ""):
        super().__init__(detail or "Failed to extract text from image")


class NoReadableTextError(IntakeError):
    message = "No readable text found in the file. Please ensure the file contains text content."


class AnalysisUnavailable(Exception):
    """Remote analysis failed. Never leaves the pipeline; triggers the fallback."""

    def __init__(self, detail: str = ""):
        super().__init__(detail or "No response from AI analysis")


GENERIC_ERROR_MESSAGE = "Failed to process file. Please try again."

# First match wins.
INTERNAL_ERROR_MESSAGES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("Failed to extract text from PDF",), PdfExtractionError.message),
    (("Failed to extract text from image",), OcrExtractionError.message),
    (("No response from AI analysis",), "AI analysis service temporarily unavailable. Please try again later."),
    (("ENOSPC", "No space left on device"), "Server storage full. Please try again later."),
    (("ETIMEDOUT", "timed out"), "Request timed out. Please try again with a smaller file."),
)


def classify_internal_error(exc: BaseException) -> str:
    """Pick the 500 message for an unexpected error from its text."""
    text = str(exc or "")
    if isinstance(exc, OSError):
        if exc.errno == errno.ENOSPC:
            text = f"ENOSPC {text}"
        elif exc.errno == errno.ETIMEDOUT:
            text = f"ETIMEDOUT {text}"
    for needles, message in INTERNAL_ERROR_MESSAGES:
        if any(needle in text for needle in needles):
            return message
    return GENERIC_ERROR_MESSAGE
