"""
API Blueprint - upload and analyze endpoints
"""
from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from content_analyzer.errors import IntakeError, classify_internal_error, size_label
from content_analyzer.models import UploadedFile
from content_analyzer.pipeline import SUPPORTED_FORMATS

api_bp = Blueprint("api", __name__)


def get_pipeline():
    return current_app.extensions["intake_pipeline"]


def read_upload():
    file = request.files.get("file")
    if file is None:
        return None
    data = file.read()
    return UploadedFile(
        filename=file.filename or "",
        mimetype=(file.mimetype or "").lower(),
        content=data,
        size=len(data),
    )


# ============ API Routes ============

@api_bp.route("/upload", methods=["POST"])
def upload():
    try:
        envelope = get_pipeline().process(read_upload())
    except HTTPException:
        raise
    except IntakeError as e:
        current_app.logger.info("Upload rejected: %s: %s", type(e).__name__, e)
        return jsonify({"error": e.message}), e.status_code
    except Exception as e:
        current_app.logger.exception("Upload processing error")
        return jsonify({"error": classify_internal_error(e)}), 500

    return jsonify(envelope.to_dict()), 200


@api_bp.route("/upload", methods=["GET"])
def upload_info():
    return jsonify({
        "message": "Social Media Content Analyzer API is running",
        "endpoints": {
            "upload": "POST /upload - Upload and analyze files",
            "health": "GET /healthz - Health check",
        },
        "supportedFormats": SUPPORTED_FORMATS,
        "maxFileSize": size_label(current_app.config["MAX_UPLOAD_BYTES"]),
    })
