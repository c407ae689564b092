"""
Intake pipeline: validate an upload, extract its text, analyze it and build
the response envelope.

Received -> Validated -> Extracted -> Analyzed -> Responded. Validation and
extraction raise ``IntakeError`` subclasses; analysis never fails.
"""
import enum
import logging
from typing import Callable, Dict, Mapping, Optional

from config import Config
from content_analyzer.errors import (
    FileTooLargeError,
    MissingFileError,
    NoReadableTextError,
    UnsupportedTypeError,
)
from content_analyzer.models import AnalysisResult, ResponseEnvelope, UploadedFile

logger = logging.getLogger(__name__)

PREVIEW_SUFFIX = "..."

Extractor = Callable[[bytes], str]
Analyzer = Callable[[str], AnalysisResult]


class ExtractionStrategy(enum.Enum):
    PDF = "pdf"
    IMAGE = "image"


ALLOWED_TYPES: Dict[str, ExtractionStrategy] = {
    "application/pdf": ExtractionStrategy.PDF,
    "image/png": ExtractionStrategy.IMAGE,
    "image/jpeg": ExtractionStrategy.IMAGE,
    "image/jpg": ExtractionStrategy.IMAGE,
    "image/tiff": ExtractionStrategy.IMAGE,
    "image/bmp": ExtractionStrategy.IMAGE,
}

SUPPORTED_FORMATS = ["PDF", "PNG", "JPG", "JPEG", "TIFF", "BMP"]


def text_preview(text: str, limit: int = Config.PREVIEW_CHAR_LIMIT) -> str:
    if len(text) > limit:
        return text[:limit] + PREVIEW_SUFFIX
    return text


class IntakePipeline:
    """
    Runs one upload through validation, extraction and analysis.

    ``extractors`` maps each ExtractionStrategy to ``extract(bytes) -> str``;
    ``analyzer`` is ``analyze(text) -> AnalysisResult``. Both are injected so
    tests can swap in deterministic fakes.
    """

    def __init__(self, extractors: Mapping[ExtractionStrategy, Extractor], analyzer: Analyzer,
                 max_upload_bytes: int = Config.MAX_UPLOAD_BYTES,
                 min_text_length: int = Config.MIN_TEXT_LENGTH,
                 preview_char_limit: int = Config.PREVIEW_CHAR_LIMIT):
        missing = [s.name for s in ExtractionStrategy if s not in extractors]
        if missing:
            raise ValueError(f"No extractor registered for: {', '.join(missing)}")
        self.extractors = dict(extractors)
        self.analyzer = analyzer
        self.max_upload_bytes = max_upload_bytes
        self.min_text_length = min_text_length
        self.preview_char_limit = preview_char_limit

    def validate(self, upload: Optional[UploadedFile]) -> ExtractionStrategy:
        if upload is None:
            raise MissingFileError()
        strategy = ALLOWED_TYPES.get(upload.mimetype)
        if strategy is None:
            raise UnsupportedTypeError(f"Unsupported MIME type: {upload.mimetype!r}")
        if upload.size > self.max_upload_bytes:
            raise FileTooLargeError(
                f"{upload.size} bytes exceeds {self.max_upload_bytes}",
                max_bytes=self.max_upload_bytes,
            )
        return strategy

    def extract(self, upload: UploadedFile, strategy: ExtractionStrategy) -> str:
        text = (self.extractors[strategy](upload.content) or "").strip()
        if len(text) < self.min_text_length:
            raise NoReadableTextError(f"Only {len(text)} characters extracted from {upload.filename}")
        logger.info("Extracted %d characters of text from %s", len(text), upload.filename)
        return text

    def analyze(self, text: str) -> AnalysisResult:
        try:
            result = self.analyzer(text)
        except Exception:
            logger.exception("Content analysis raised, using fallback")
            return AnalysisResult.fallback()
        if not isinstance(result, AnalysisResult):
            logger.warning("Analyzer returned %s, using fallback", type(result).__name__)
            return AnalysisResult.fallback()
        return result.normalized()

    def process(self, upload: Optional[UploadedFile]) -> ResponseEnvelope:
        strategy = self.validate(upload)
        text = self.extract(upload, strategy)
        analysis = self.analyze(text)
        return ResponseEnvelope(
            file_name=upload.filename,
            file_size=upload.size,
            file_type=upload.mimetype,
            extracted_text=text_preview(text, self.preview_char_limit),
            analysis=analysis,
            text_length=len(text),
        )
