"""
Project API schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ProjectRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    author: str = Field(..., min_length=1, max_length=200)
    language: str = Field(..., min_length=1, max_length=100)


class ProjectResponse(BaseModel):
    id: int
    name: str
    author: str
    language: str
