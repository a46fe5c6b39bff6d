"""
Employee ORM model.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import JSON, Date, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from backoffice.models.manager import Manager
    from backoffice.models.organization import Department


class Employee(Base, UUIDMixin, TimestampMixin):
    """Represents a staff member supervised by one manager."""

    __tablename__ = "employees"

    emp_name: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False)
    emp_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    emp_contact: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    emp_dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    photo: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    department_id: Mapped[UUID] = mapped_column(nullable=False, index=True)
    manager_id: Mapped[UUID] = mapped_column(nullable=False, index=True)

    department: Mapped[Department | None] = relationship(
        "Department",
        primaryjoin="foreign(Employee.department_id) == Department.id",
        viewonly=True,
        lazy="raise",
    )
    manager: Mapped[Manager | None] = relationship(
        "Manager",
        primaryjoin="foreign(Employee.manager_id) == Manager.id",
        viewonly=True,
        lazy="raise",
    )

    @property
    def display_name(self) -> str:
        """English name when present, otherwise the first non-empty translation."""
        name = self.emp_name or {}
        return name.get("en") or next((v for v in name.values() if v), "")

    def __repr__(self) -> str:
        return f"<Employee id={self.id} emp_email={self.emp_email!r}>"
