import re
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from .event import CamelModel

YOUTUBE_URL_PATTERN = re.compile(r"^(https?://)?(www\.)?(youtube\.com|youtu\.be)/.+")


def _check_youtube_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not YOUTUBE_URL_PATTERN.match(value):
        raise ValueError("Please provide a valid YouTube URL")
    return value


class ProjectCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    youtube_url: str = Field(..., max_length=500)
    # Appended after the current last project when omitted
    order: Optional[int] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name is required")
        return v

    @field_validator("youtube_url")
    @classmethod
    def check_youtube_url(cls, v):
        return _check_youtube_url(v)


class ProjectUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    youtube_url: Optional[str] = Field(None, max_length=500)
    order: Optional[int] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Project name is required")
        return v

    @field_validator("youtube_url")
    @classmethod
    def check_youtube_url(cls, v):
        return _check_youtube_url(v)


class ProjectDetail(CamelModel):
    id: UUID
    name: str
    youtube_url: str
    order: int
    created_at: datetime
    updated_at: datetime


class ProjectResponse(CamelModel):
    message: str
    data: ProjectDetail


class ProjectListResponse(CamelModel):
    message: str
    data: List[ProjectDetail]
