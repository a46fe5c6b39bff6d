"""
Manager schemas.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from backoffice.models.manager import ManagerRole
from backoffice.schemas.summary import DepartmentSummary


class ManagerCreateRequest(BaseModel):
    """Request body for POST /managers."""

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    contact: str = Field(default="", max_length=50)
    role: ManagerRole = ManagerRole.manager
    department: UUID | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class ManagerUpdateRequest(BaseModel):
    """Request body for PUT /managers/{id}. A new password is re-hashed."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6, max_length=128)
    contact: str | None = Field(default=None, max_length=50)
    role: ManagerRole | None = None
    department: UUID | None = None


class ManagerResponse(BaseModel):
    """Public manager representation. Never carries the password hash."""

    id: UUID
    name: str
    email: str
    contact: str
    photo: str
    role: ManagerRole
    department_id: UUID | None
    department: DepartmentSummary | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
