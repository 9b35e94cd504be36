"""
Request dependencies shared by user-scoped routes.
"""

from __future__ import annotations

from fastapi import Depends, Header, status

from devmarks.core.config import Settings, get_settings
from devmarks.core.errors import ApiError, ErrorCode, bad_request

from . import security

INT4_MIN = -(2**31)
INT4_MAX = 2**31 - 1


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, ErrorCode.UNAUTHORIZED, "Missing Authorization header.")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, ErrorCode.UNAUTHORIZED, "Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, ErrorCode.UNAUTHORIZED, "Authorization must be: Bearer <token>.")
    return token


def path_user_id(id: str) -> int:
    """
    Parse the `{id}` path segment. Runs before any storage access.
    """
    raw = (id or "").strip()
    # int() alone would also accept "1_000".
    if not raw.lstrip("+-").isdigit():
        raise bad_request(ErrorCode.BAD_USER_ID)
    try:
        user_id = int(raw)
    except ValueError:
        raise bad_request(ErrorCode.BAD_USER_ID)
    # users.id is a Postgres INTEGER.
    if not INT4_MIN <= user_id <= INT4_MAX:
        raise bad_request(ErrorCode.BAD_USER_ID)
    return user_id


async def require_token_owner(
    user_id: int = Depends(path_user_id),
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> int:
    """
    Resolve the path user id; with AUTH_REQUIRED on, the bearer token must belong to it.
    """
    if not settings.auth_required:
        return user_id

    token = _extract_bearer_token(authorization)
    try:
        claims = security.decode_access_token(token, settings=settings)
    except security.SecurityError as exc:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, ErrorCode.UNAUTHORIZED, str(exc)) from exc

    if claims["id"] != user_id:
        raise ApiError(status.HTTP_403_FORBIDDEN, ErrorCode.FORBIDDEN, "Token does not belong to this user.")
    return user_id
