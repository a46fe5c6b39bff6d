"""
Task schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, field_validator

from backoffice.models.task import TaskStatus
from backoffice.schemas.common import normalize_localized
from backoffice.schemas.summary import EmployeeSummary, ManagerSummary


class TaskCreateRequest(BaseModel):
    """Request body for POST /tasks."""

    title: dict[str, str]
    description: dict[str, str] = Field(default_factory=dict)
    status: TaskStatus = TaskStatus.pending
    due_date: datetime = Field(validation_alias=AliasChoices("due_date", "dueDate"))
    employee: UUID
    manager: UUID | None = None

    @field_validator("title", mode="before")
    @classmethod
    def localize_title(cls, v: Any) -> dict[str, str]:
        title = normalize_localized(v)
        if not any(text.strip() for text in title.values()):
            raise ValueError("title is required")
        return title

    @field_validator("description", mode="before")
    @classmethod
    def localize_description(cls, v: Any) -> dict[str, str]:
        return normalize_localized(v)


class TaskUpdateRequest(BaseModel):
    """Request body for PUT /tasks/{id}. Employees may only change ``status``."""

    title: dict[str, str] | None = None
    description: dict[str, str] | None = None
    status: TaskStatus | None = None
    due_date: datetime | None = Field(
        default=None, validation_alias=AliasChoices("due_date", "dueDate")
    )
    employee: UUID | None = None
    manager: UUID | None = None

    @field_validator("title", mode="before")
    @classmethod
    def localize_title(cls, v: Any) -> dict[str, str] | None:
        if v is None:
            return None
        title = normalize_localized(v)
        if not any(text.strip() for text in title.values()):
            raise ValueError("title is required")
        return title

    @field_validator("description", mode="before")
    @classmethod
    def localize_description(cls, v: Any) -> dict[str, str] | None:
        return None if v is None else normalize_localized(v)


class TaskResponse(BaseModel):
    id: UUID
    title: dict[str, str]
    description: dict[str, str]
    status: TaskStatus
    due_date: datetime
    employee_id: UUID
    manager_id: UUID
    employee: EmployeeSummary | None = None
    manager: ManagerSummary | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
