"""
Error Taxonomy Tests
"""
import errno

import pytest

from content_analyzer.errors import (
    GENERIC_ERROR_MESSAGE,
    AnalysisUnavailable,
    FileTooLargeError,
    IntakeError,
    MissingFileError,
    NoReadableTextError,
    OcrExtractionError,
    PdfExtractionError,
    UnsupportedTypeError,
    classify_internal_error,
)


class TestIntakeErrors:

    @pytest.mark.parametrize("cls", [
        MissingFileError, UnsupportedTypeError, FileTooLargeError,
        PdfExtractionError, OcrExtractionError, NoReadableTextError,
    ])
    def test_client_errors_are_400(self, cls):
        err = cls()
        assert isinstance(err, IntakeError)
        assert err.status_code == 400
        assert err.message

    def test_analysis_unavailable_is_not_an_intake_error(self):
        assert not issubclass(AnalysisUnavailable, IntakeError)

    def test_detail_kept_separately_from_message(self):
        err = PdfExtractionError("Failed to extract text from PDF: EOF marker not found")
        assert "EOF marker" in str(err)
        assert err.message.startswith("Unable to read PDF content")


class TestClassifyInternalError:
    """500 messages picked from the error text"""

    @pytest.mark.parametrize("error, expected", [
        (RuntimeError("Failed to extract text from PDF"),
         "Unable to read PDF content. The file may be corrupted or password-protected."),
        (RuntimeError("Failed to extract text from image"),
         "Unable to extract text from image. Please ensure the image contains readable text."),
        (AnalysisUnavailable(), "AI analysis service temporarily unavailable. Please try again later."),
        (RuntimeError("write failed: ENOSPC"), "Server storage full. Please try again later."),
        (OSError(errno.ENOSPC, "disk"), "Server storage full. Please try again later."),
        (RuntimeError("connect ETIMEDOUT 10.0.0.1:443"), "Request timed out. Please try again with a smaller file."),
        (OSError(errno.ETIMEDOUT, "slow"), "Request timed out. Please try again with a smaller file."),
        (ValueError("something else"), GENERIC_ERROR_MESSAGE),
    ])
    def test_messages(self, error, expected):
        assert classify_internal_error(error) == expected
