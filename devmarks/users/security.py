"""
Password hashing and access token helpers.
"""

from __future__ import annotations

import time
from typing import Any

import bcrypt
import jwt

from devmarks.core.config import Settings


class SecurityError(RuntimeError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise SecurityError("Password is empty.")
    try:
        return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")
    except ValueError as exc:
        # bcrypt rejects some inputs, e.g. passwords longer than 72 bytes.
        raise SecurityError(f"Password could not be hashed: {exc}") from exc


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(*, user_id: int, username: str, settings: Settings) -> str:
    issued_at = now_epoch_s()
    expires_at = issued_at + settings.token_expire_hours * 3600

    payload = {
        "id": user_id,
        "username": username,
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, *, settings: Settings) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise SecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.InvalidTokenError as exc:
        raise SecurityError("Invalid access token.") from exc

    if not isinstance(payload.get("id"), int):
        raise SecurityError("Invalid access token subject.")
    return payload
