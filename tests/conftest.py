"""
Test Configuration and Fixtures
"""
import io

import pytest
from PIL import Image
from reportlab.pdfgen import canvas

from content_analyzer import create_app
from content_analyzer.models import AnalysisResult
from content_analyzer.pipeline import ExtractionStrategy, IntakePipeline
from content_analyzer.services.pdf_service import extract_pdf_text


class FakeAnalyzer:
    """Records the text it was asked to analyze and returns a fixed result"""

    def __init__(self, result=None, error=None):
        self.result = result or AnalysisResult(
            engagement_score=82,
            sentiment="positive",
            suggestions=["Ask a question", "Add a hashtag", "Add an image", "Post at noon"],
            key_topics=["Greeting"],
        )
        self.error = error
        self.calls = []

    def __call__(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


class FakeOcr:
    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = 0

    def __call__(self, data):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text


def make_pdf(*pages):
    """Build a PDF with one page per argument; each argument is a list of lines"""
    buf = io.BytesIO()
    c = canvas.Canvas(buf)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 24
        c.showPage()
    c.save()
    return buf.getvalue()


def make_png(color="white", size=(200, 100)):
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def analyzer():
    return FakeAnalyzer()


@pytest.fixture
def ocr():
    return FakeOcr(text="Summer sale starts today at noon")


@pytest.fixture
def pipeline(analyzer, ocr):
    return IntakePipeline(
        extractors={
            ExtractionStrategy.PDF: extract_pdf_text,
            ExtractionStrategy.IMAGE: ocr,
        },
        analyzer=analyzer,
    )


@pytest.fixture
def app(pipeline):
    """Create application for testing"""
    app = create_app("testing", pipeline=pipeline)
    app.config["TESTING"] = True
    yield app


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()
