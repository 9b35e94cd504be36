"""
User persistence helpers.
"""

from __future__ import annotations

from devmarks.core.db import Database, NoRowReturned

from . import security

_USER_COLUMNS = "id, username, password, email, created_on, languages, favorite_language, frequency"


class CredentialsError(RuntimeError):
    """
    Raised for an unknown username and for a wrong password alike.
    """


async def create_user(db: Database, *, username: str, password_hash: str, email: str) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO users (username, password, email, created_on)
        VALUES ($1, $2, $3, now())
        RETURNING id
        """,
        username,
        password_hash,
        email,
    )
    if row is None:
        raise NoRowReturned("Failed to create user.")
    return int(row["id"])


async def get_user_by_username(db: Database, username: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_USER_COLUMNS}
        FROM users
        WHERE username = $1
        """,
        username,
    )


async def confirm_user(db: Database, *, username: str, password: str) -> dict:
    user_row = await get_user_by_username(db, username)
    if user_row is None:
        raise CredentialsError("Login credentials are not correct.")

    if not security.verify_password(password, str(user_row.get("password") or "")):
        raise CredentialsError("Login credentials are not correct.")
    return user_row
