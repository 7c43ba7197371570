from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from .event import CamelModel


class AdminRole(str, Enum):
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


def _normalize_email(v: Optional[str]) -> Optional[str]:
    return v.strip().lower() if v is not None else v


class AdminCreate(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    role: AdminRole = AdminRole.ADMIN

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v)


class AdminUpdate(CamelModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8, max_length=128)
    role: Optional[AdminRole] = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v)


class AdminLogin(BaseModel):
    email: str
    password: str


class AdminDetail(CamelModel):
    id: UUID
    email: str
    role: AdminRole
    created_at: datetime


class AdminResponse(CamelModel):
    message: str
    data: AdminDetail


class AdminListResponse(CamelModel):
    message: str
    data: List[AdminDetail]


class Token(BaseModel):
    access_token: str
    token_type: str
