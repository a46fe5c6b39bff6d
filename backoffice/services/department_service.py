"""
Department business logic.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backoffice.models.organization import Department
from backoffice.schemas.common import MessageResponse
from backoffice.schemas.organization import (
    DepartmentCreateRequest,
    DepartmentDetailResponse,
    DepartmentResponse,
    DepartmentUpdateRequest,
)
from backoffice.services.errors import not_found

_REFERENCE_FIELDS = {"organization": "organization_id"}


class DepartmentService:
    """Handles all department operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_departments(self, organization_id: UUID | None = None) -> list[DepartmentResponse]:
        stmt = select(Department).options(selectinload(Department.organization))
        if organization_id is not None:
            stmt = stmt.where(Department.organization_id == organization_id)
        result = await self.db.execute(stmt.order_by(Department.created_at.desc()))
        return [DepartmentResponse.model_validate(d) for d in result.scalars().all()]

    async def get_department(self, dept_id: UUID) -> DepartmentDetailResponse:
        """Department with its organization, employees and managers."""
        result = await self.db.execute(
            select(Department)
            .options(
                selectinload(Department.organization),
                selectinload(Department.employees),
                selectinload(Department.managers),
            )
            .where(Department.id == dept_id)
        )
        dept = result.scalar_one_or_none()
        if dept is None:
            raise not_found("Department")
        return DepartmentDetailResponse.model_validate(dept)

    async def create_department(self, data: DepartmentCreateRequest) -> DepartmentResponse:
        values = data.model_dump()
        dept = Department(
            dept_name=values["dept_name"],
            dept_contact=values["dept_contact"],
            dept_email=values["dept_email"],
            organization_id=values["organization"],
        )
        self.db.add(dept)
        await self.db.flush()
        return DepartmentResponse.model_validate(await self._load(dept.id))

    async def update_department(self, dept_id: UUID, data: DepartmentUpdateRequest) -> DepartmentResponse:
        dept = await self._load(dept_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(dept, _REFERENCE_FIELDS.get(field, field), value)
        await self.db.flush()
        return DepartmentResponse.model_validate(await self._load(dept.id))

    async def delete_department(self, dept_id: UUID) -> MessageResponse:
        """Hard delete. Employees and managers in the department are kept."""
        dept = await self.db.get(Department, dept_id)
        if dept is None:
            raise not_found("Department")
        await self.db.delete(dept)
        await self.db.flush()
        return MessageResponse(message="Department deleted")

    async def _load(self, dept_id: UUID) -> Department:
        result = await self.db.execute(
            select(Department)
            .options(selectinload(Department.organization))
            .where(Department.id == dept_id)
            .execution_options(populate_existing=True)
        )
        dept = result.scalar_one_or_none()
        if dept is None:
            raise not_found("Department")
        return dept
