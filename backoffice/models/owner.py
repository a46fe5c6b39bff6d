"""
Owner ORM model.

The legacy top-level admin account, stored apart from managers.
"""

from __future__ import annotations

import enum

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.models.base import Base, TimestampMixin, UUIDMixin


class OwnerRole(str, enum.Enum):
    admin = "admin"


class Owner(Base, UUIDMixin, TimestampMixin):
    """Represents a site owner (super-principal)."""

    __tablename__ = "owners"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    photo: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    role: Mapped[OwnerRole] = mapped_column(
        Enum(OwnerRole, name="owner_role", native_enum=False, length=20, validate_strings=True),
        nullable=False,
        default=OwnerRole.admin,
    )

    def __repr__(self) -> str:
        return f"<Owner id={self.id} email={self.email!r}>"
