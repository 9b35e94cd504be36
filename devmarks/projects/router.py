"""
Bookmarked project API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from devmarks.core.db import Database, get_db
from devmarks.users.dependencies import require_token_owner

from . import schemas, service

router = APIRouter()


@router.get("/users/{id}/bookmarked_projects", response_model=list[schemas.ProjectResponse])
async def list_bookmarked_projects(
    user_id: int = Depends(require_token_owner),
    db: Database = Depends(get_db),
) -> list[schemas.ProjectResponse]:
    return await service.bookmarked_projects(db, user_id=user_id)


@router.post("/users/{id}/bookmarked_projects")
async def add_bookmarked_project(
    payload: schemas.ProjectRequest,
    user_id: int = Depends(require_token_owner),
    db: Database = Depends(get_db),
) -> str:
    return await service.add_bookmark(db, user_id=user_id, payload=payload)
