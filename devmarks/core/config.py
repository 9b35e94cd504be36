"""
Process configuration read from the environment.

Required (startup fails without them):
- PORT    database port (integer)
- HOST    database host
- USER    database user
- PASS    database password
- DBNAME  database name
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from urllib.parse import quote

from fastapi import Request


class ConfigError(RuntimeError):
    pass


def _env_str(environ: dict[str, str], name: str, default: str) -> str:
    return environ.get(name, "").strip() or default


def _env_int(environ: dict[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(environ: dict[str, str], name: str, default: bool = False) -> bool:
    raw = environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def _required(environ: dict[str, str], name: str) -> str:
    value = environ.get(name, "").strip()
    if not value:
        raise ConfigError(f"{name} is not set.")
    return value


@dataclass(frozen=True)
class Settings:
    db_host: str
    db_port: int
    db_user: str
    db_password: str
    db_name: str
    app_host: str = "0.0.0.0"
    app_port: int = 1323
    jwt_secret: str = "dev-change-this-secret"
    jwt_algorithm: str = "HS256"
    token_expire_hours: int = 24
    mail_api_url: str = ""
    mail_api_key: str = ""
    mail_from: str = "welcome@devmarks.local"
    auth_required: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        env = dict(os.environ if environ is None else environ)

        raw_port = _required(env, "PORT")
        try:
            db_port = int(raw_port)
        except ValueError as exc:
            raise ConfigError(f"PORT must be an integer, got {raw_port!r}.") from exc

        origins = [o.strip() for o in _env_str(env, "CORS_ORIGINS", "*").split(",") if o.strip()]

        return cls(
            db_host=_required(env, "HOST"),
            db_port=db_port,
            db_user=_required(env, "USER"),
            db_password=_required(env, "PASS"),
            db_name=_required(env, "DBNAME"),
            app_host=_env_str(env, "APP_HOST", "0.0.0.0"),
            app_port=_env_int(env, "APP_PORT", 1323),
            # Local default keeps development simple.
            # In production, set JWT_SECRET in environment.
            jwt_secret=_env_str(env, "JWT_SECRET", "dev-change-this-secret"),
            jwt_algorithm=_env_str(env, "JWT_ALG", "HS256"),
            token_expire_hours=_env_int(env, "TOKEN_EXPIRE_HOURS", 24),
            mail_api_url=_env_str(env, "MAIL_API_URL", ""),
            mail_api_key=_env_str(env, "MAIL_API_KEY", ""),
            mail_from=_env_str(env, "MAIL_FROM", "welcome@devmarks.local"),
            auth_required=_env_bool(env, "AUTH_REQUIRED"),
            cors_origins=origins or ["*"],
            log_level=_env_str(env, "LOG_LEVEL", "INFO").upper(),
        )

    def dsn(self) -> str:
        user = quote(self.db_user, safe="")
        password = quote(self.db_password, safe="")
        return f"postgresql://{user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
