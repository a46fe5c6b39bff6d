"""
Compact embedded representations used when populating references.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel


class OrganizationSummary(BaseModel):
    id: UUID
    org_name: str
    org_email: str

    model_config = {"from_attributes": True}


class DepartmentSummary(BaseModel):
    id: UUID
    dept_name: str
    dept_contact: str
    dept_email: str
    organization_id: UUID

    model_config = {"from_attributes": True}


class ManagerSummary(BaseModel):
    """Compact manager info embedded in employee and task responses."""

    id: UUID
    name: str
    email: str

    model_config = {"from_attributes": True}


class EmployeeSummary(BaseModel):
    """Compact employee info embedded in task and department responses."""

    id: UUID
    emp_name: dict[str, str]
    emp_email: str

    model_config = {"from_attributes": True}
