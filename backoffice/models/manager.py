"""
Manager ORM model.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from backoffice.models.organization import Department


class ManagerRole(str, enum.Enum):
    """An ``admin`` manager has the same rights as an owner."""

    admin = "admin"
    manager = "manager"


class Manager(Base, UUIDMixin, TimestampMixin):
    """Represents a back-office manager account."""

    __tablename__ = "managers"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    contact: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    photo: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    role: Mapped[ManagerRole] = mapped_column(
        Enum(ManagerRole, name="manager_role", native_enum=False, length=20, validate_strings=True),
        nullable=False,
        default=ManagerRole.manager,
    )
    department_id: Mapped[UUID | None] = mapped_column(nullable=True, index=True)

    department: Mapped[Department | None] = relationship(
        "Department",
        primaryjoin="foreign(Manager.department_id) == Department.id",
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Manager id={self.id} email={self.email!r} role={self.role}>"
