from flask import Blueprint, jsonify

from ..config import logger
from ..contact import THANK_YOU, submit_contact, validate_contact
from . import error, json_body, portfolio_config, state_store

bp = Blueprint("contact", __name__)


@bp.route("/contact", methods=["POST"])
def contact():
    try:
        body = json_body()
        problem = validate_contact(body)
        if problem:
            return error(problem)

        contact_cfg = portfolio_config()["contact"]
        submit_contact(
            body,
            state_store(),
            webhook_url=contact_cfg["webhook_url"],
            timeout=contact_cfg["timeout"],
            delay=contact_cfg["delay"],
        )
        return jsonify({"success": True, "message": THANK_YOU})
    except Exception as e:
        logger.exception(f"Contact form error: {e}")
        return error("Failed to send message. Please try again.", 500)
