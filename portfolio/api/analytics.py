from flask import Blueprint, jsonify, request

from ..analytics import build_analytics
from ..config import logger
from . import error, portfolio_config

bp = Blueprint("analytics", __name__)


@bp.route("/analytics", methods=["GET"])
def analytics():
    try:
        payload = build_analytics(
            period=request.args.get("period") or "30d",
            metric=request.args.get("metric"),
            seed=portfolio_config()["analytics"]["seed"],
        )
        return jsonify(payload)
    except Exception as e:
        logger.exception(f"Analytics error: {e}")
        return error("Failed to fetch analytics", 500)
