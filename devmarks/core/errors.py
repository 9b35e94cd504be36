"""
Client-facing error bodies.

Every failure leaves the API as `{"code": <int>, "message": <str>}`.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorCode(IntEnum):
    BAD_REQUEST = 1
    PASSWORD_HASH_FAILED = 2
    USER_CREATE_FAILED = 3
    BAD_CREDENTIALS = 4
    BAD_USER_ID = 5
    PROJECT_CREATE_FAILED = 6
    NEW_PROJECT_BOOKMARK_FAILED = 7
    EXISTING_PROJECT_BOOKMARK_FAILED = 8
    UNAUTHORIZED = 9
    FORBIDDEN = 10
    BOOKMARK_LIST_FAILED = 11
    LOGIN_FAILED = 12
    INTERNAL_ERROR = 13


class ApiError(HTTPException):
    def __init__(self, status_code: int, code: ErrorCode, message: str) -> None:
        super().__init__(status_code=status_code, detail=message)
        self.code = code
        self.message = message

    def body(self) -> dict:
        return {"code": int(self.code), "message": self.message}


def bad_request(code: ErrorCode = ErrorCode.BAD_REQUEST) -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, code, "Bad request!")


def server_error(code: ErrorCode, message: str = "Server error") -> ApiError:
    return ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, code, message)


async def _api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("bad_request path=%s errors=%s", request.url.path, len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=bad_request().body(),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error path=%s error=%s", request.url.path, type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=server_error(ErrorCode.INTERNAL_ERROR).body(),
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
