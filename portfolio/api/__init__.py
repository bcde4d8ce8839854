"""
HTTP route handlers, one blueprint per demo.
"""
from typing import Any, Dict, Optional

from flask import current_app, jsonify, request

from ..state import StateManager


def json_body() -> Dict[str, Any]:
    """Request JSON as a dict; anything unparseable becomes {}."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def text_field(body: Dict[str, Any], key: str) -> Optional[str]:
    """String value of a body field; other JSON types count as missing."""
    value = body.get(key)
    return value if isinstance(value, str) else None


def error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def portfolio_config() -> Dict[str, Any]:
    return current_app.config["PORTFOLIO"]


def state_store() -> StateManager:
    return current_app.extensions["portfolio_state"]


def register_blueprints(app):
    from .analytics import bp as analytics_bp
    from .auth import bp as auth_bp
    from .cart import bp as cart_bp
    from .contact import bp as contact_bp
    from .cpp_tools import bp as cpp_tools_bp
    from .recommendations import bp as recommendations_bp
    from .resume import bp as resume_bp
    from .tasks import bp as tasks_bp

    for blueprint in (
        analytics_bp,
        auth_bp,
        cart_bp,
        contact_bp,
        cpp_tools_bp,
        recommendations_bp,
        resume_bp,
        tasks_bp,
    ):
        app.register_blueprint(blueprint, url_prefix="/api")
