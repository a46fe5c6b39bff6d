"""
Task ORM model.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import JSON, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from backoffice.models.employee import Employee
    from backoffice.models.manager import Manager


class TaskStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class Task(Base, UUIDMixin, TimestampMixin):
    """A unit of work assigned by a manager to an employee."""

    __tablename__ = "tasks"

    title: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False)
    description: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False, default=dict)
    status: Mapped[TaskStatus] = mapped_column(
        Enum(TaskStatus, name="task_status", native_enum=False, length=20, validate_strings=True),
        nullable=False,
        default=TaskStatus.pending,
        index=True,
    )
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    employee_id: Mapped[UUID] = mapped_column(nullable=False, index=True)
    manager_id: Mapped[UUID] = mapped_column(nullable=False, index=True)

    employee: Mapped[Employee | None] = relationship(
        "Employee",
        primaryjoin="foreign(Task.employee_id) == Employee.id",
        viewonly=True,
        lazy="raise",
    )
    manager: Mapped[Manager | None] = relationship(
        "Manager",
        primaryjoin="foreign(Task.manager_id) == Manager.id",
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Task id={self.id} status={self.status} employee_id={self.employee_id}>"
