"""
Organization and Department ORM models.

References between records are plain UUID columns without foreign-key
constraints: deleting a parent leaves its dependents pointing at nothing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from backoffice.models.employee import Employee
    from backoffice.models.manager import Manager


class Organization(Base, UUIDMixin, TimestampMixin):
    """Top-level business entity owning departments."""

    __tablename__ = "organizations"

    org_name: Mapped[str] = mapped_column(String(200), nullable=False)
    org_address: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    org_email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    org_contact: Mapped[str] = mapped_column(String(50), nullable=False, default="")

    # Reverse view
    departments: Mapped[list[Department]] = relationship(
        "Department",
        primaryjoin="Organization.id == foreign(Department.organization_id)",
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Organization id={self.id} org_name={self.org_name!r}>"


class Department(Base, UUIDMixin, TimestampMixin):
    """A department inside exactly one organization."""

    __tablename__ = "departments"

    dept_name: Mapped[str] = mapped_column(String(200), nullable=False)
    dept_contact: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    dept_email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    organization_id: Mapped[UUID] = mapped_column(nullable=False, index=True)

    organization: Mapped[Organization | None] = relationship(
        "Organization",
        primaryjoin="foreign(Department.organization_id) == Organization.id",
        viewonly=True,
        lazy="raise",
    )

    # Reverse views
    employees: Mapped[list[Employee]] = relationship(
        "Employee",
        primaryjoin="Department.id == foreign(Employee.department_id)",
        viewonly=True,
        lazy="raise",
    )
    managers: Mapped[list[Manager]] = relationship(
        "Manager",
        primaryjoin="Department.id == foreign(Manager.department_id)",
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Department id={self.id} dept_name={self.dept_name!r}>"
