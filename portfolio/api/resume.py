from flask import Blueprint, current_app, jsonify, request

from ..config import logger
from ..resume_analyzer import analyze_resume, extract_text_from_upload
from . import error, json_body, text_field

bp = Blueprint("resume", __name__)


@bp.route("/resume/analyze", methods=["POST"])
def analyze():
    try:
        upload = request.files.get("file")
        resume_text = request.form.get("text") or text_field(json_body(), "text")

        if upload is not None and upload.filename:
            resume_text = extract_text_from_upload(upload.filename, upload.read())
            if resume_text.startswith("[ERROR]"):
                return error(resume_text)

        if not resume_text or not resume_text.strip():
            return error("Please provide a resume file or text")

        analysis = analyze_resume(resume_text, current_app.extensions["portfolio_inference"])
        return jsonify({"analysis": analysis})
    except Exception as e:
        logger.exception(f"Resume analysis error: {e}")
        return error("Failed to analyze resume", 500)
