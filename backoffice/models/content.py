"""
Public marketing content and contact-form submissions.

None of these records relate to principals.
"""

from __future__ import annotations

import enum

from sqlalchemy import JSON, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.models.base import Base, TimestampMixin, UUIDMixin


class RequestStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in_progress"
    done = "done"


class Service(Base, UUIDMixin, TimestampMixin):
    """A service offered by the business, shown on the public site."""

    __tablename__ = "services"

    title: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False)
    description: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False)
    image: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)

    def __repr__(self) -> str:
        return f"<Service id={self.id} order={self.order}>"


class Project(Base, UUIDMixin, TimestampMixin):
    """A completed job shown in the gallery."""

    __tablename__ = "projects"

    title: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False)
    description: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False)
    # JSON columns are not mutation-tracked: always assign a new list.
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="general")

    def __repr__(self) -> str:
        return f"<Project id={self.id} category={self.category!r}>"


class ServiceRequest(Base, UUIDMixin, TimestampMixin):
    """A contact-form submission asking for a service."""

    __tablename__ = "service_requests"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    service_type: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    status: Mapped[RequestStatus] = mapped_column(
        Enum(RequestStatus, name="request_status", native_enum=False, length=20, validate_strings=True),
        nullable=False,
        default=RequestStatus.pending,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<ServiceRequest id={self.id} status={self.status}>"
