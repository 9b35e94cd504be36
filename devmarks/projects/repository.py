"""
Project and bookmark persistence (raw SQL).
"""

from __future__ import annotations

from devmarks.core.db import Database, NoRowReturned


async def project_exists(db: Database, *, name: str, author: str, language: str) -> int | None:
    """
    Look a project up by its natural key. Returns its id, or None.
    """
    row = await db.fetch_one(
        """
        SELECT id
        FROM projects
        WHERE name = $1
          AND author = $2
          AND language = $3
        LIMIT 1
        """,
        name,
        author,
        language,
    )
    return int(row["id"]) if row is not None else None


async def add_project(db: Database, *, name: str, author: str, language: str) -> int:
    # A concurrent insert of the same project resolves to the existing row.
    row = await db.fetch_one(
        """
        INSERT INTO projects (name, author, language)
        VALUES ($1, $2, $3)
        ON CONFLICT (name, author, language) DO UPDATE
        SET name = EXCLUDED.name
        RETURNING id
        """,
        name,
        author,
        language,
    )
    if row is None:
        raise NoRowReturned("Failed to add project.")
    return int(row["id"])


async def bookmark_project(db: Database, *, user_id: int, project_id: int) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO bookmarked_projects (user_id, project_id)
        VALUES ($1, $2)
        RETURNING id
        """,
        user_id,
        project_id,
    )
    if row is None:
        raise NoRowReturned("Failed to bookmark project.")
    return int(row["id"])


async def fetch_bookmarked_projects(db: Database, *, user_id: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT p.id, p.name, p.author, p.language
        FROM bookmarked_projects b
        JOIN projects p ON p.id = b.project_id
        WHERE b.user_id = $1
        ORDER BY b.id ASC
        """,
        user_id,
    )
