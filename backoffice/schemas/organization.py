"""
Organization and department schemas.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from backoffice.schemas.summary import (
    DepartmentSummary,
    EmployeeSummary,
    ManagerSummary,
    OrganizationSummary,
)


def _lower(v: str | None) -> str | None:
    return v.strip().lower() if isinstance(v, str) else v


# ---------------------------------------------------------------------------
# Organization
# ---------------------------------------------------------------------------

class OrganizationCreateRequest(BaseModel):
    """Request body for POST /organizations."""

    org_name: str = Field(min_length=1, max_length=200)
    org_address: str = Field(default="", max_length=500)
    org_email: str = Field(default="", max_length=255)
    org_contact: str = Field(default="", max_length=50)

    @field_validator("org_email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return _lower(v)

    @field_validator("org_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("org_name must not be blank")
        return v


class OrganizationUpdateRequest(BaseModel):
    """Request body for PUT /organizations/{id}. Only sent fields change."""

    org_name: str | None = Field(default=None, min_length=1, max_length=200)
    org_address: str | None = Field(default=None, max_length=500)
    org_email: str | None = Field(default=None, max_length=255)
    org_contact: str | None = Field(default=None, max_length=50)

    @field_validator("org_email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return _lower(v)


class OrganizationResponse(BaseModel):
    id: UUID
    org_name: str
    org_address: str
    org_email: str
    org_contact: str
    departments: list[DepartmentSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Department
# ---------------------------------------------------------------------------

class DepartmentCreateRequest(BaseModel):
    """Request body for POST /departments."""

    dept_name: str = Field(min_length=1, max_length=200)
    dept_contact: str = Field(default="", max_length=50)
    dept_email: str = Field(default="", max_length=255)
    organization: UUID

    @field_validator("dept_email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return _lower(v)


class DepartmentUpdateRequest(BaseModel):
    """Request body for PUT /departments/{id}."""

    dept_name: str | None = Field(default=None, min_length=1, max_length=200)
    dept_contact: str | None = Field(default=None, max_length=50)
    dept_email: str | None = Field(default=None, max_length=255)
    organization: UUID | None = None

    @field_validator("dept_email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return _lower(v)


class DepartmentResponse(BaseModel):
    id: UUID
    dept_name: str
    dept_contact: str
    dept_email: str
    organization_id: UUID
    organization: OrganizationSummary | None = Field(
        default=None, description="Null when the organization was deleted"
    )
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DepartmentDetailResponse(DepartmentResponse):
    """Department with its reverse views."""

    employees: list[EmployeeSummary] = Field(default_factory=list)
    managers: list[ManagerSummary] = Field(default_factory=list)
