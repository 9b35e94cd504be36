"""
User API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SignUpRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1, max_length=128)
    email: str = Field(..., min_length=1, max_length=320)


class SignInRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1, max_length=128)


class UserSummary(BaseModel):
    id: int
    username: str
    languages: list[str] | None = None
    favorite_language: str | None = None
    frequency: int | None = None


class SignInResponse(BaseModel):
    token: str
    user: UserSummary
