"""
Employee schemas.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from backoffice.schemas.common import normalize_localized
from backoffice.schemas.summary import DepartmentSummary, ManagerSummary


class EmployeeCreateRequest(BaseModel):
    """
    Request body for POST /employees.

    ``manager`` is ignored for scoped managers, who always own what they create.
    ``password`` is generated when omitted.
    """

    emp_name: dict[str, str]
    emp_email: EmailStr
    emp_contact: str = Field(default="", max_length=50)
    emp_dob: date | None = None
    department: UUID
    manager: UUID | None = None
    password: str | None = Field(default=None, max_length=128)

    @field_validator("emp_name", mode="before")
    @classmethod
    def localize_name(cls, v: Any) -> dict[str, str]:
        name = normalize_localized(v)
        if not any(text.strip() for text in name.values()):
            raise ValueError("emp_name is required")
        return name

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str | None) -> str | None:
        if v and len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v or None


class EmployeeUpdateRequest(BaseModel):
    """Request body for PUT /employees/{id}. An empty password leaves it unchanged."""

    emp_name: dict[str, str] | None = None
    emp_email: EmailStr | None = None
    emp_contact: str | None = Field(default=None, max_length=50)
    emp_dob: date | None = None
    department: UUID | None = None
    manager: UUID | None = None
    password: str | None = Field(default=None, max_length=128)

    @field_validator("emp_name", mode="before")
    @classmethod
    def localize_name(cls, v: Any) -> dict[str, str] | None:
        if v is None:
            return None
        name = normalize_localized(v)
        if not any(text.strip() for text in name.values()):
            raise ValueError("emp_name is required")
        return name

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str | None) -> str | None:
        if v and len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class EmployeeResponse(BaseModel):
    """Public employee representation. Never carries the password hash."""

    id: UUID
    emp_name: dict[str, str]
    emp_email: str
    emp_contact: str
    emp_dob: date | None
    photo: str
    department_id: UUID
    manager_id: UUID
    department: DepartmentSummary | None = None
    manager: ManagerSummary | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class EmployeeCreateResponse(EmployeeResponse):
    generated_password: str | None = Field(
        default=None,
        description="Plaintext password, present only when the server generated it",
    )
