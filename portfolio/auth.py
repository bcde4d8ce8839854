"""
Authentication for the demos: password hashing, JWT session tokens and the
user records kept in the state store (section "users", keyed by email).
"""
import uuid
from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Any, Dict, Optional

import jwt
from flask import current_app, g, jsonify, request
from werkzeug.security import check_password_hash, generate_password_hash

from .config import logger
from .state import StateManager

JWT_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return check_password_hash(hashed_password, password)


def create_token(payload: Dict[str, Any], secret: str, days: int = 7) -> str:
    """Sign a session token carrying userId, email and role."""
    now = datetime.now(timezone.utc)
    claims = {
        "userId": payload["userId"],
        "email": payload["email"],
        "role": payload["role"],
        "iat": now,
        "exp": now + timedelta(days=days),
    }
    return jwt.encode(claims, secret, algorithm=JWT_ALGORITHM)


def verify_token(token: str, secret: str) -> Optional[Dict[str, Any]]:
    """Decode a session token. Invalid or expired tokens yield None."""
    try:
        return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None


def sign_up(state: StateManager, name: str, email: str, password: str, secret: str, days: int = 7) -> Dict[str, Any]:
    users = state.section("users")
    email = email.strip().lower()

    if email in users:
        return {"success": False, "error": "Email already registered"}

    user = {
        "id": uuid.uuid4().hex,
        "name": name,
        "email": email,
        "password": hash_password(password),
        "role": "USER",
        "createdAt": datetime.now(timezone.utc).isoformat(),
    }
    users[email] = user
    state.save()

    token = create_token({"userId": user["id"], "email": email, "role": user["role"]}, secret, days)
    return {"success": True, "token": token}


def sign_in(state: StateManager, email: str, password: str, secret: str, days: int = 7) -> Dict[str, Any]:
    user = state.section("users").get(email.strip().lower())
    if not user or not user.get("password"):
        return {"success": False, "error": "Invalid credentials"}

    if not verify_password(password, user["password"]):
        return {"success": False, "error": "Invalid credentials"}

    token = create_token({"userId": user["id"], "email": user["email"], "role": user["role"]}, secret, days)
    return {"success": True, "token": token}


def get_session() -> Optional[Dict[str, Any]]:
    """Session payload from the auth cookie or a Bearer header, if valid."""
    auth_cfg = current_app.config["PORTFOLIO"]["auth"]
    token = request.cookies.get(auth_cfg["cookie_name"])

    if not token:
        header = request.headers.get("Authorization", "")
        if header.startswith("Bearer "):
            token = header[len("Bearer "):].strip()

    if not token:
        return None

    session = verify_token(token, auth_cfg["jwt_secret"])
    if session is None:
        logger.debug("Rejected invalid or expired session token")
    return session


def set_session_cookie(response, token: str):
    auth_cfg = current_app.config["PORTFOLIO"]["auth"]
    response.set_cookie(
        auth_cfg["cookie_name"],
        token,
        max_age=60 * 60 * 24 * auth_cfg["token_days"],
        httponly=True,
        secure=bool(auth_cfg["secure_cookies"]),
        samesite="Lax",
        path="/",
    )
    return response


def clear_session_cookie(response):
    response.delete_cookie(current_app.config["PORTFOLIO"]["auth"]["cookie_name"], path="/")
    return response


def require_auth(view):
    """Reject requests without a valid session; the payload lands on g.session."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        session = get_session()
        if session is None:
            return jsonify({"error": "Unauthorized"}), 401
        g.session = session
        return view(*args, **kwargs)
    return wrapper
