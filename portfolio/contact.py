"""
Contact form submissions.

Submissions are validated, logged, kept in the state store and, when a
webhook URL is configured, forwarded there as JSON.
"""
import re
import time
from datetime import datetime, timezone
from typing import Optional

import httpx

from .config import logger
from .state import StateManager

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

THANK_YOU = "Thank you for your message! I'll get back to you soon."


def validate_contact(data: dict) -> Optional[str]:
    """Return an error message for an invalid submission, else None."""
    if not data.get("name") or not data.get("email") or not data.get("message"):
        return "Name, email, and message are required"
    if not EMAIL_RE.match(str(data["email"])):
        return "Invalid email format"
    return None


def submit_contact(
    data: dict,
    state: StateManager,
    webhook_url: str = "",
    timeout: float = 10,
    delay: float = 0,
) -> dict:
    """
    Record a validated contact submission.

    Raises:
        httpx.HTTPError: if forwarding to the webhook fails
    """
    submission = {
        "name": data["name"],
        "email": data["email"],
        "subject": data.get("subject") or "No subject",
        "message": data["message"],
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    if delay > 0:
        time.sleep(delay)

    logger.info(f"Contact form submission: {submission}")

    if webhook_url:
        response = httpx.post(webhook_url, json=submission, timeout=timeout)
        response.raise_for_status()

    state.append_item("contact_submissions", submission)

    return submission
