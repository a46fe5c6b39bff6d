"""
SQLAlchemy ORM models.

All models imported here to ensure they are registered with Base.metadata.
"""

from backoffice.models.base import Base, TimestampMixin, UUIDMixin
from backoffice.models.content import Project, RequestStatus, Service, ServiceRequest
from backoffice.models.employee import Employee
from backoffice.models.manager import Manager, ManagerRole
from backoffice.models.organization import Department, Organization
from backoffice.models.owner import Owner, OwnerRole
from backoffice.models.task import Task, TaskStatus

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "Owner",
    "OwnerRole",
    "Manager",
    "ManagerRole",
    "Employee",
    "Organization",
    "Department",
    "Task",
    "TaskStatus",
    "Service",
    "Project",
    "ServiceRequest",
    "RequestStatus",
]
