"""
User API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends

from devmarks.core import mailer
from devmarks.core.config import Settings, get_settings
from devmarks.core.db import Database, get_db

from . import schemas, service

router = APIRouter()


@router.post("/users")
async def sign_up(
    payload: schemas.SignUpRequest,
    background_tasks: BackgroundTasks,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> str:
    await service.sign_up(db, payload)

    # Welcome mail goes out after the response; its failure is only logged.
    background_tasks.add_task(
        mailer.send_welcome_email_background,
        payload.username,
        payload.email,
        settings=settings,
    )
    return "OK"


@router.post("/users/login", response_model=schemas.SignInResponse)
async def sign_in(
    payload: schemas.SignInRequest,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> schemas.SignInResponse:
    return await service.sign_in(db, payload, settings=settings)
