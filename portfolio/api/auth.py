from flask import Blueprint, jsonify

from ..auth import clear_session_cookie, get_session, set_session_cookie, sign_in, sign_up
from ..config import logger
from . import error, json_body, portfolio_config, state_store, text_field

bp = Blueprint("auth", __name__)


@bp.route("/auth", methods=["POST"])
def auth_action():
    try:
        body = json_body()
        action = body.get("action")
        name = text_field(body, "name")
        email = text_field(body, "email")
        password = text_field(body, "password")
        auth_cfg = portfolio_config()["auth"]

        if action == "signup":
            if not name or not email or not password:
                return error("Missing required fields")
            result = sign_up(state_store(), name, email, password, auth_cfg["jwt_secret"], auth_cfg["token_days"])
            if not result["success"]:
                return error(result["error"])
            return set_session_cookie(jsonify({"success": True, "token": result["token"]}), result["token"])

        if action == "signin":
            if not email or not password:
                return error("Missing required fields")
            result = sign_in(state_store(), email, password, auth_cfg["jwt_secret"], auth_cfg["token_days"])
            if not result["success"]:
                return error(result["error"], 401)
            return set_session_cookie(jsonify({"success": True, "token": result["token"]}), result["token"])

        if action == "signout":
            return clear_session_cookie(jsonify({"success": True}))

        return error("Invalid action")
    except Exception as e:
        logger.exception(f"Auth error: {e}")
        return error("Authentication failed", 500)


@bp.route("/auth", methods=["GET"])
def current_session():
    try:
        return jsonify({"user": get_session()})
    except Exception as e:
        logger.error(f"Session error: {e}")
        return jsonify({"user": None})
