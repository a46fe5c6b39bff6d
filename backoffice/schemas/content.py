"""
Schemas for public content (services, projects) and service requests.

Create/update of services and projects arrive as multipart forms and are
validated in the routers; only responses are modelled here.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from backoffice.models.content import RequestStatus


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

class ServiceResponse(BaseModel):
    id: UUID
    title: dict[str, str]
    description: dict[str, str]
    image: str
    order: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

class ProjectResponse(BaseModel):
    id: UUID
    title: dict[str, str]
    description: dict[str, str]
    images: list[str]
    category: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Service requests
# ---------------------------------------------------------------------------

class ServiceRequestCreate(BaseModel):
    """Contact form fields, collected from multipart form data."""

    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    service_type: str = ""
    message: str = ""

    @model_validator(mode="after")
    def required_fields(self) -> ServiceRequestCreate:
        for field in ("name", "phone", "email", "address", "service_type"):
            value = getattr(self, field).strip()
            if not value:
                raise ValueError("Please fill all required fields")
            setattr(self, field, value)
        return self


class ServiceRequestStatusUpdate(BaseModel):
    """Request body for PUT /requests/{id}. Only the status can change."""

    status: RequestStatus | None = None


class ServiceRequestResponse(BaseModel):
    id: UUID
    name: str
    phone: str
    email: str
    address: str
    service_type: str
    message: str
    image: str
    status: RequestStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ServiceRequestStats(BaseModel):
    """Response for GET /requests/stats."""

    total: int = Field(ge=0)
    pending: int = Field(ge=0)
    in_progress: int = Field(ge=0, serialization_alias="inProgress")
    done: int = Field(ge=0)
