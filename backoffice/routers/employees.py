"""
Employee endpoints.

Admins and managers only; scoped managers are narrowed to their own staff.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.database import get_db
from backoffice.core.dependencies import admin_or_manager
from backoffice.core.principals import Principal
from backoffice.schemas.common import MessageResponse
from backoffice.schemas.employee import (
    EmployeeCreateRequest,
    EmployeeCreateResponse,
    EmployeeResponse,
    EmployeeUpdateRequest,
)
from backoffice.services.employee_service import EmployeeService

router = APIRouter()


def get_employee_service(db: AsyncSession = Depends(get_db)) -> EmployeeService:
    return EmployeeService(db=db)


@router.get("", response_model=list[EmployeeResponse], summary="List employees")
async def list_employees(
    department: UUID | None = Query(default=None),
    manager: UUID | None = Query(default=None),
    principal: Principal = Depends(admin_or_manager),
    service: EmployeeService = Depends(get_employee_service),
) -> list[EmployeeResponse]:
    return await service.list_employees(principal, department_id=department, manager_id=manager)


@router.post(
    "",
    response_model=EmployeeCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create employee",
)
async def create_employee(
    data: EmployeeCreateRequest,
    principal: Principal = Depends(admin_or_manager),
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeCreateResponse:
    """
    Create an employee.

    - Scoped managers become the owning manager automatically
    - When no password is given one is generated and returned once
    """
    return await service.create_employee(principal, data)


@router.get("/{employee_id}", response_model=EmployeeResponse, summary="Get employee")
async def get_employee(
    employee_id: UUID,
    principal: Principal = Depends(admin_or_manager),
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    return await service.get_employee(principal, employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse, summary="Update employee")
async def update_employee(
    employee_id: UUID,
    data: EmployeeUpdateRequest,
    principal: Principal = Depends(admin_or_manager),
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    return await service.update_employee(principal, employee_id, data)


@router.delete("/{employee_id}", response_model=MessageResponse, summary="Delete employee")
async def delete_employee(
    employee_id: UUID,
    principal: Principal = Depends(admin_or_manager),
    service: EmployeeService = Depends(get_employee_service),
) -> MessageResponse:
    return await service.delete_employee(principal, employee_id)
