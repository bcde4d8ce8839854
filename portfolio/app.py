"""
Flask application for the portfolio demos backend
"""
from typing import Any, Dict, Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .api import register_blueprints
from .config import DEMOS, load_config, setup_logging
from .state import StateManager
from .tasks import TaskBoard
from .utils.hf_client import HuggingFaceClient


def create_app(config: Optional[Dict[str, Any]] = None, inference=None) -> Flask:
    """
    Build the Flask app.

    Args:
        config: Full config dict; loaded from defaults and environment if omitted
        inference: Inference gateway; a HuggingFaceClient is built from config if omitted

    Returns:
        Configured Flask app
    """
    config = config if config is not None else load_config()
    logger = setup_logging(config.get("log_level", "INFO"))

    app = Flask(__name__)
    app.config["PORTFOLIO"] = config
    app.json.sort_keys = False

    CORS(app, origins=config.get("cors_origins", "*"), supports_credentials=True)

    app.extensions["portfolio_state"] = StateManager(config.get("state_file"))
    app.extensions["portfolio_tasks"] = TaskBoard()
    app.extensions["portfolio_inference"] = inference if inference is not None else HuggingFaceClient.from_config(config)

    register_blueprints(app)

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok", "demos": DEMOS})

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def unhandled_error(e):
        logger.exception(f"Unhandled error: {e}")
        return jsonify({"error": "Internal server error"}), 500

    if not app.extensions["portfolio_inference"].configured:
        logger.info("No Hugging Face API key; inference-backed demos use fallbacks")

    return app
