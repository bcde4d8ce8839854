from flask import Blueprint, jsonify

from ..config import logger
from ..cpp_tools import run_cpp_action
from . import error, json_body, portfolio_config

bp = Blueprint("cpp_tools", __name__)


@bp.route("/cpp-tools", methods=["POST"])
def cpp_tools():
    try:
        body = json_body()
        code = body.get("code")
        if not code:
            return error("Code is required")

        try:
            payload = run_cpp_action(
                body.get("action"),
                str(code),
                compile_delay=portfolio_config()["cpp_tools"]["compile_delay"],
            )
        except ValueError as e:
            return error(str(e))
        return jsonify(payload)
    except Exception as e:
        logger.exception(f"C++ tools error: {e}")
        return error("Failed to process code", 500)
