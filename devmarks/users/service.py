"""
User business logic: sign up and sign in.
"""

from __future__ import annotations

import logging

from fastapi import status

from devmarks.core.config import Settings
from devmarks.core.db import STORAGE_ERRORS, Database
from devmarks.core.errors import ApiError, ErrorCode, server_error

from . import repository, schemas, security

logger = logging.getLogger(__name__)


def _to_user_summary(user_row: dict) -> schemas.UserSummary:
    languages = user_row.get("languages")
    frequency = user_row.get("frequency")
    return schemas.UserSummary(
        id=int(user_row["id"]),
        username=str(user_row["username"]),
        languages=list(languages) if languages is not None else None,
        favorite_language=user_row.get("favorite_language"),
        frequency=int(frequency) if frequency is not None else None,
    )


async def sign_up(db: Database, payload: schemas.SignUpRequest) -> int:
    """
    Hash the password and insert the user. Returns the new user id.
    """
    try:
        password_hash = security.hash_password(payload.password)
    except security.SecurityError:
        logger.exception("password_hash_failed username=%s", payload.username)
        raise server_error(ErrorCode.PASSWORD_HASH_FAILED)

    try:
        user_id = await repository.create_user(
            db,
            username=payload.username,
            password_hash=password_hash,
            email=payload.email,
        )
    except STORAGE_ERRORS:
        logger.exception("user_create_failed username=%s", payload.username)
        raise server_error(ErrorCode.USER_CREATE_FAILED, "SQL Error")

    logger.info("user_created user_id=%s", user_id)
    return user_id


async def sign_in(db: Database, payload: schemas.SignInRequest, *, settings: Settings) -> schemas.SignInResponse:
    try:
        user_row = await repository.confirm_user(db, username=payload.username, password=payload.password)
    except repository.CredentialsError:
        logger.info("login_rejected username=%s", payload.username)
        raise ApiError(
            status.HTTP_403_FORBIDDEN,
            ErrorCode.BAD_CREDENTIALS,
            "Login credentials are not correct",
        )
    except STORAGE_ERRORS:
        logger.exception("login_lookup_failed username=%s", payload.username)
        raise server_error(ErrorCode.LOGIN_FAILED)

    user = _to_user_summary(user_row)
    token = security.build_access_token(user_id=user.id, username=user.username, settings=settings)
    return schemas.SignInResponse(token=token, user=user)
