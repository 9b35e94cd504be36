"""
Bookmark business logic.
"""

from __future__ import annotations

import logging

from devmarks.core.db import STORAGE_ERRORS, Database
from devmarks.core.errors import ErrorCode, server_error

from . import repository, schemas

logger = logging.getLogger(__name__)

BOOKMARKED_NEW = "Bookmarked new project"
BOOKMARKED_EXISTING = "Bookmarked existing project"


async def bookmarked_projects(db: Database, *, user_id: int) -> list[schemas.ProjectResponse]:
    try:
        rows = await repository.fetch_bookmarked_projects(db, user_id=user_id)
    except STORAGE_ERRORS:
        logger.exception("bookmark_list_failed user_id=%s", user_id)
        raise server_error(ErrorCode.BOOKMARK_LIST_FAILED, "Failed to fetch bookmarked projects")
    return [
        schemas.ProjectResponse(
            id=int(row["id"]),
            name=str(row["name"]),
            author=str(row["author"]),
            language=str(row["language"]),
        )
        for row in rows
    ]


async def add_bookmark(db: Database, *, user_id: int, payload: schemas.ProjectRequest) -> str:
    """
    Bookmark a project for a user, creating the project first when its
    (name, author, language) triple is not stored yet.
    """
    try:
        project_id = await repository.project_exists(
            db,
            name=payload.name,
            author=payload.author,
            language=payload.language,
        )
    except STORAGE_ERRORS:
        # Treated as not found; the insert below is an upsert on the same key.
        logger.exception("project_lookup_failed user_id=%s name=%s", user_id, payload.name)
        project_id = None

    if project_id is not None:
        try:
            await repository.bookmark_project(db, user_id=user_id, project_id=project_id)
        except STORAGE_ERRORS:
            logger.exception("bookmark_failed user_id=%s project_id=%s", user_id, project_id)
            raise server_error(ErrorCode.EXISTING_PROJECT_BOOKMARK_FAILED, "Failed to bookmark project")
        return BOOKMARKED_EXISTING

    try:
        project_id = await repository.add_project(
            db,
            name=payload.name,
            author=payload.author,
            language=payload.language,
        )
    except STORAGE_ERRORS:
        logger.exception("project_create_failed user_id=%s name=%s", user_id, payload.name)
        raise server_error(ErrorCode.PROJECT_CREATE_FAILED, "Failed to add new project")
    logger.info("project_created project_id=%s", project_id)

    try:
        await repository.bookmark_project(db, user_id=user_id, project_id=project_id)
    except STORAGE_ERRORS:
        logger.exception("bookmark_failed user_id=%s project_id=%s", user_id, project_id)
        raise server_error(ErrorCode.NEW_PROJECT_BOOKMARK_FAILED, "Failed to bookmark project")
    return BOOKMARKED_NEW
