"""OpenAI wrapper for social-media engagement analysis.

The remote call returns ``(obj, err)``; ``OpenAIAnalyzer`` collapses that into
a fully populated ``AnalysisResult``, substituting the fallback analysis when
anything goes wrong.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional, Tuple

from openai import OpenAI

from content_analyzer.errors import AnalysisUnavailable
from content_analyzer.models import AnalysisResult

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a social media content analysis expert. "
    "Provide detailed analysis and actionable suggestions."
)
TEMPERATURE = 0.7
MAX_TOKENS = 1000


def client_ready(api_key: str) -> Tuple[bool, str]:
    if not (api_key or "").strip():
        return False, "OPENAI_API_KEY is missing"
    return True, ""


def get_client(api_key: str, timeout: float = 60):
    ok, _ = client_ready(api_key)
    if not ok:
        return None
    return OpenAI(api_key=api_key.strip(), timeout=timeout)


def analysis_prompt(text: str, limit: int = 2000) -> str:
    return f"""
Analyze the following text content for social media engagement and provide:
1. An engagement score from 0-100
2. Sentiment analysis (positive, neutral, or negative)
3. 4 specific suggestions to improve social media engagement
4. Key topics mentioned in the content

Content to analyze:
{(text or "")[:limit]}

Please respond in JSON format with the following structure:
{{
  "engagementScore": number,
  "sentiment": "positive" | "neutral" | "negative",
  "suggestions": string[],
  "keyTopics": string[]
}}
"""


def safe_json_loads(s: str) -> Tuple[Optional[Dict[str, Any]], str]:
    if not s:
        return None, "Empty model output"

    # Strip markdown code blocks if present
    text = s.strip()
    if text.startswith("```"):
        lines = text.split("\n", 1)
        if len(lines) > 1:
            text = lines[1]
        if text.endswith("```"):
            text = text[:-3].strip()
        elif "```" in text:
            text = text.rsplit("```", 1)[0].strip()

    try:
        obj = json.loads(text)
        if isinstance(obj, dict):
            return obj, ""
    except ValueError:
        pass

    # Fallback: extract first JSON object from text
    m = re.search(r"\{.*\}", text, flags=re.DOTALL)
    if m:
        try:
            obj = json.loads(m.group(0))
            if isinstance(obj, dict):
                return obj, ""
        except ValueError:
            pass
    return None, "Model did not return valid json"


def normalize_analysis(obj: Optional[Dict[str, Any]]) -> AnalysisResult:
    """
    Repair a parsed model response into an AnalysisResult.

    Each missing or malformed field is backfilled from the defaults and the
    score is clamped to [0, 100].
    """
    if not obj or not isinstance(obj, dict):
        return AnalysisResult.fallback()

    return AnalysisResult(
        engagement_score=obj.get("engagementScore"),
        sentiment=obj.get("sentiment"),
        suggestions=obj.get("suggestions"),
        key_topics=obj.get("keyTopics"),
    ).normalized()


class OpenAIAnalyzer:
    """Callable ``analyze(text) -> AnalysisResult`` backed by chat completions."""

    def __init__(self, api_key: str = "", model: str = "gpt-4.1", timeout: float = 60,
                 prompt_char_limit: int = 2000, client=None):
        self.api_key = api_key or ""
        self.model = (model or "").strip() or "gpt-4.1"
        self.timeout = timeout
        self.prompt_char_limit = prompt_char_limit
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = get_client(self.api_key, self.timeout)
        return self._client

    def ready(self) -> Tuple[bool, str]:
        if self._client is not None:
            return True, ""
        return client_ready(self.api_key)

    def request_analysis(self, text: str) -> Tuple[Optional[Dict[str, Any]], str]:
        client = self.client
        if client is None:
            ok, msg = client_ready(self.api_key)
            return None, msg or "Client not available"
        try:
            res = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": analysis_prompt(text, self.prompt_char_limit)},
                ],
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
            )
            content = ((res.choices[0].message.content if res.choices else "") or "").strip()
            if not content:
                raise AnalysisUnavailable()
            logger.debug("AI analysis received: %s...", content[:100])
            return safe_json_loads(content)
        except Exception as e:
            return None, f"LLM request failed: {type(e).__name__}: {e}"

    def __call__(self, text: str) -> AnalysisResult:
        logger.info("Starting content analysis (%d characters)", len(text or ""))
        obj, err = self.request_analysis(text)
        if err or not obj:
            logger.warning("Analysis unavailable, using fallback: %s", err or "empty result")
            return AnalysisResult.fallback()
        return normalize_analysis(obj)
