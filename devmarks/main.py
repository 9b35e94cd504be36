from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devmarks.core.config import Settings
from devmarks.core.db import Database
from devmarks.core.errors import install_error_handlers
from devmarks.projects import router as projects_router
from devmarks.users import router as users_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Open the DB pool once per process.
        await app.state.db.connect(settings.dsn())
        logger.info("db_connected host=%s db=%s", settings.db_host, settings.db_name)
        try:
            yield
        finally:
            await app.state.db.close()

    app = FastAPI(title="devmarks", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = Database()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    app.include_router(users_router.router, tags=["users"])
    app.include_router(projects_router.router, tags=["projects"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app
