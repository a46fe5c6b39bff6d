"""
Employee business logic.

Scoped managers (role ``manager``) only ever see and touch the employees they
supervise, and always become the owning manager of employees they create.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backoffice.core.principals import Principal, is_scoped_manager, may_access_owned
from backoffice.core.security import generate_password, hash_password
from backoffice.models.employee import Employee
from backoffice.schemas.common import MessageResponse
from backoffice.schemas.employee import (
    EmployeeCreateRequest,
    EmployeeCreateResponse,
    EmployeeResponse,
    EmployeeUpdateRequest,
)
from backoffice.services.errors import bad_request, forbidden, not_found

_REFERENCE_FIELDS = {"department": "department_id", "manager": "manager_id"}


def _with_references(stmt):
    return stmt.options(selectinload(Employee.department), selectinload(Employee.manager))


class EmployeeService:
    """Handles all employee operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_employees(
        self,
        principal: Principal,
        department_id: UUID | None = None,
        manager_id: UUID | None = None,
    ) -> list[EmployeeResponse]:
        """List employees, newest first. Scoped managers only see their own staff."""
        if is_scoped_manager(principal):
            manager_id = principal.id

        stmt = _with_references(select(Employee))
        if department_id is not None:
            stmt = stmt.where(Employee.department_id == department_id)
        if manager_id is not None:
            stmt = stmt.where(Employee.manager_id == manager_id)

        result = await self.db.execute(stmt.order_by(Employee.created_at.desc()))
        return [EmployeeResponse.model_validate(e) for e in result.scalars().all()]

    async def get_employee(self, principal: Principal, employee_id: UUID) -> EmployeeResponse:
        employee = await self._load(employee_id)
        self._check_access(principal, employee)
        return EmployeeResponse.model_validate(employee)

    async def create_employee(
        self, principal: Principal, data: EmployeeCreateRequest
    ) -> EmployeeCreateResponse:
        """
        Create an employee.

        - Scoped managers are always assigned as the owning manager
        - Other callers must name a manager
        - A password is generated when none is given and returned once
        """
        manager_id = principal.id if is_scoped_manager(principal) else data.manager
        if manager_id is None:
            raise bad_request("manager is required")

        email = data.emp_email.lower()
        await self._ensure_email_free(email)

        generated = None
        password = data.password
        if not password:
            password = generated = generate_password()

        employee = Employee(
            emp_name=data.emp_name,
            emp_email=email,
            emp_contact=data.emp_contact,
            emp_dob=data.emp_dob,
            department_id=data.department,
            manager_id=manager_id,
            password_hash=hash_password(password),
        )
        self.db.add(employee)
        await self.db.flush()

        response = EmployeeResponse.model_validate(await self._load(employee.id))
        return EmployeeCreateResponse(**response.model_dump(), generated_password=generated)

    async def update_employee(
        self, principal: Principal, employee_id: UUID, data: EmployeeUpdateRequest
    ) -> EmployeeResponse:
        employee = await self._load(employee_id)
        self._check_access(principal, employee)

        changes = data.model_dump(exclude_unset=True)
        if is_scoped_manager(principal):
            changes.pop("manager", None)

        password = changes.pop("password", None)
        if password:
            employee.password_hash = hash_password(password)

        email = changes.pop("emp_email", None)
        if email is not None and email.lower() != employee.emp_email:
            await self._ensure_email_free(email.lower())
            employee.emp_email = email.lower()

        for field, value in changes.items():
            if value is None and field != "emp_dob":
                continue
            setattr(employee, _REFERENCE_FIELDS.get(field, field), value)

        await self.db.flush()
        return EmployeeResponse.model_validate(await self._load(employee.id))

    async def delete_employee(self, principal: Principal, employee_id: UUID) -> MessageResponse:
        employee = await self._load(employee_id)
        self._check_access(principal, employee)
        await self.db.delete(employee)
        await self.db.flush()
        return MessageResponse(message="Employee deleted")

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    @staticmethod
    def _check_access(principal: Principal, employee: Employee) -> None:
        if not may_access_owned(principal, employee.manager_id, employee.id):
            raise forbidden()

    async def _ensure_email_free(self, email: str) -> None:
        existing = await self.db.execute(select(Employee.id).where(Employee.emp_email == email))
        if existing.first() is not None:
            raise bad_request("Email already registered", code="EMAIL_TAKEN")

    async def _load(self, employee_id: UUID) -> Employee:
        result = await self.db.execute(
            _with_references(select(Employee))
            .where(Employee.id == employee_id)
            .execution_options(populate_existing=True)
        )
        employee = result.scalar_one_or_none()
        if employee is None:
            raise not_found("Employee")
        return employee
