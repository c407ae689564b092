"""
Request-scoped data carried through the intake pipeline.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence


SENTIMENTS = ("positive", "neutral", "negative")

MIN_ENGAGEMENT_SCORE = 0
MAX_ENGAGEMENT_SCORE = 100
DEFAULT_ENGAGEMENT_SCORE = 75
DEFAULT_SENTIMENT = "neutral"
DEFAULT_SUGGESTIONS = (
    "Add more engaging questions to increase comments",
    "Include relevant hashtags to improve discoverability",
    "Use more visual content to boost engagement",
    "Post during peak hours for better reach",
)
DEFAULT_KEY_TOPICS = ("Content", "Social Media")


def coerce_score(value: Any) -> int:
    """Clamp a numeric score into [0, 100]; anything non-numeric is the default"""
    if isinstance(value, bool) or value is None:
        return DEFAULT_ENGAGEMENT_SCORE
    if isinstance(value, int):
        return min(MAX_ENGAGEMENT_SCORE, max(MIN_ENGAGEMENT_SCORE, value))
    try:
        score = float(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_ENGAGEMENT_SCORE
    if math.isnan(score):
        return DEFAULT_ENGAGEMENT_SCORE
    score = min(float(MAX_ENGAGEMENT_SCORE), max(float(MIN_ENGAGEMENT_SCORE), score))
    return int(round(score))


def coerce_sentiment(value: Any) -> str:
    sentiment = str(value or "").strip().lower()
    return sentiment if sentiment in SENTIMENTS else DEFAULT_SENTIMENT


def coerce_strings(value: Any, default: Sequence[str]) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return list(default)
    items = [str(v).strip() for v in value if v is not None and str(v).strip()]
    return items or list(default)


@dataclass
class UploadedFile:
    filename: str
    mimetype: str
    content: bytes
    size: int = -1

    def __post_init__(self):
        if self.size < 0:
            self.size = len(self.content or b"")


@dataclass
class AnalysisResult:
    engagement_score: int = DEFAULT_ENGAGEMENT_SCORE
    sentiment: str = DEFAULT_SENTIMENT
    suggestions: List[str] = field(default_factory=lambda: list(DEFAULT_SUGGESTIONS))
    key_topics: List[str] = field(default_factory=lambda: list(DEFAULT_KEY_TOPICS))

    @classmethod
    def fallback(cls) -> "AnalysisResult":
        return cls()

    def normalized(self) -> "AnalysisResult":
        """
        Return a copy with the score clamped to [0, 100] and every missing or
        malformed field backfilled from the defaults.
        """
        return AnalysisResult(
            engagement_score=coerce_score(self.engagement_score),
            sentiment=coerce_sentiment(self.sentiment),
            suggestions=coerce_strings(self.suggestions, DEFAULT_SUGGESTIONS),
            key_topics=coerce_strings(self.key_topics, DEFAULT_KEY_TOPICS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "engagementScore": self.engagement_score,
            "sentiment": self.sentiment,
            "suggestions": list(self.suggestions),
            "keyTopics": list(self.key_topics),
        }


@dataclass
class ResponseEnvelope:
    file_name: str
    file_size: int
    file_type: str
    extracted_text: str
    analysis: AnalysisResult
    text_length: int
    success: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "fileName": self.file_name,
            "fileSize": self.file_size,
            "fileType": self.file_type,
            "extractedText": self.extracted_text,
            "analysis": self.analysis.to_dict(),
            "textLength": self.text_length,
        }
