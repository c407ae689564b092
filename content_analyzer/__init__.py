"""
Social Content Analyzer Application Factory
"""
import functools
from datetime import datetime, timezone

from flask import Flask, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

from config import config
from content_analyzer.errors import too_large_message
from content_analyzer.pipeline import ExtractionStrategy, IntakePipeline


def build_pipeline(app_config) -> IntakePipeline:
    """Wire the real PDF, OCR and OpenAI collaborators from app config"""
    from content_analyzer.services.ocr_service import extract_image_text
    from content_analyzer.services.openai_service import OpenAIAnalyzer
    from content_analyzer.services.pdf_service import extract_pdf_text

    analyzer = OpenAIAnalyzer(
        api_key=app_config["OPENAI_API_KEY"],
        model=app_config["OPENAI_MODEL"],
        timeout=app_config["OPENAI_TIMEOUT"],
        prompt_char_limit=app_config["PROMPT_CHAR_LIMIT"],
    )
    return IntakePipeline(
        extractors={
            ExtractionStrategy.PDF: extract_pdf_text,
            ExtractionStrategy.IMAGE: functools.partial(
                extract_image_text, language=app_config["OCR_LANGUAGE"]
            ),
        },
        analyzer=analyzer,
        max_upload_bytes=app_config["MAX_UPLOAD_BYTES"],
        min_text_length=app_config["MIN_TEXT_LENGTH"],
        preview_char_limit=app_config["PREVIEW_CHAR_LIMIT"],
    )


def create_app(config_name="default", pipeline=None):
    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config["default"]))
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    if pipeline is None:
        pipeline = build_pipeline(app.config)
    app.extensions["intake_pipeline"] = pipeline

    # Register blueprints
    from content_analyzer.api import api_bp
    app.register_blueprint(api_bp)

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(e):
        app.logger.info("Request body over MAX_CONTENT_LENGTH rejected")
        return jsonify({"error": too_large_message(app.config["MAX_UPLOAD_BYTES"])}), 413

    # Health check endpoint
    @app.route("/healthz")
    def healthz():
        """Health check for load balancers and monitoring"""
        from content_analyzer.services.ocr_service import ocr_ready

        analyzer = app.extensions["intake_pipeline"].analyzer
        if hasattr(analyzer, "ready"):
            openai_ok, openai_msg = analyzer.ready()
        else:
            openai_ok, openai_msg = True, ""
        ocr_ok, ocr_msg = ocr_ready()
        return jsonify({
            "ok": True,
            "version": app.config["APP_VERSION"],
            "time_utc": datetime.now(timezone.utc).isoformat(),
            "openai_ready": openai_ok,
            "openai_message": openai_msg,
            "ocr_ready": ocr_ok,
            "ocr_message": ocr_msg,
            "model": app.config["OPENAI_MODEL"],
        })

    # Version endpoint
    @app.route("/version")
    def version():
        """Version and build info"""
        return jsonify({
            "version": app.config["APP_VERSION"],
            "build_time": app.config["BUILD_TIME"],
            "git_commit": app.config["GIT_COMMIT"],
        })

    return app
