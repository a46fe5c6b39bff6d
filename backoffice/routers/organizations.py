"""
Organization and department endpoints.

Any authenticated principal may read; only admins write.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.database import get_db
from backoffice.core.dependencies import admin_only, get_current_principal
from backoffice.schemas.common import MessageResponse
from backoffice.schemas.organization import (
    DepartmentCreateRequest,
    DepartmentDetailResponse,
    DepartmentResponse,
    DepartmentUpdateRequest,
    OrganizationCreateRequest,
    OrganizationResponse,
    OrganizationUpdateRequest,
)
from backoffice.services.department_service import DepartmentService
from backoffice.services.organization_service import OrganizationService

router = APIRouter(dependencies=[Depends(get_current_principal)])
departments_router = APIRouter(dependencies=[Depends(get_current_principal)])


def get_organization_service(db: AsyncSession = Depends(get_db)) -> OrganizationService:
    return OrganizationService(db=db)


def get_department_service(db: AsyncSession = Depends(get_db)) -> DepartmentService:
    return DepartmentService(db=db)


# ---------------------------------------------------------------------------
# Organizations
# ---------------------------------------------------------------------------

@router.get("", response_model=list[OrganizationResponse], summary="List organizations")
async def list_organizations(
    service: OrganizationService = Depends(get_organization_service),
) -> list[OrganizationResponse]:
    return await service.list_organizations()


@router.post(
    "",
    response_model=OrganizationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create organization",
    dependencies=[Depends(admin_only)],
)
async def create_organization(
    data: OrganizationCreateRequest,
    service: OrganizationService = Depends(get_organization_service),
) -> OrganizationResponse:
    return await service.create_organization(data)


@router.get("/{org_id}", response_model=OrganizationResponse, summary="Get organization")
async def get_organization(
    org_id: UUID,
    service: OrganizationService = Depends(get_organization_service),
) -> OrganizationResponse:
    return await service.get_organization(org_id)


@router.put(
    "/{org_id}",
    response_model=OrganizationResponse,
    summary="Update organization",
    dependencies=[Depends(admin_only)],
)
async def update_organization(
    org_id: UUID,
    data: OrganizationUpdateRequest,
    service: OrganizationService = Depends(get_organization_service),
) -> OrganizationResponse:
    return await service.update_organization(org_id, data)


@router.delete(
    "/{org_id}",
    response_model=MessageResponse,
    summary="Delete organization",
    dependencies=[Depends(admin_only)],
)
async def delete_organization(
    org_id: UUID,
    service: OrganizationService = Depends(get_organization_service),
) -> MessageResponse:
    """Departments that referenced the organization are left in place."""
    return await service.delete_organization(org_id)


# ---------------------------------------------------------------------------
# Departments
# ---------------------------------------------------------------------------

@departments_router.get("", response_model=list[DepartmentResponse], summary="List departments")
async def list_departments(
    organization: UUID | None = Query(default=None),
    service: DepartmentService = Depends(get_department_service),
) -> list[DepartmentResponse]:
    return await service.list_departments(organization_id=organization)


@departments_router.post(
    "",
    response_model=DepartmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create department",
    dependencies=[Depends(admin_only)],
)
async def create_department(
    data: DepartmentCreateRequest,
    service: DepartmentService = Depends(get_department_service),
) -> DepartmentResponse:
    return await service.create_department(data)


@departments_router.get(
    "/{dept_id}", response_model=DepartmentDetailResponse, summary="Get department with staff"
)
async def get_department(
    dept_id: UUID,
    service: DepartmentService = Depends(get_department_service),
) -> DepartmentDetailResponse:
    return await service.get_department(dept_id)


@departments_router.put(
    "/{dept_id}",
    response_model=DepartmentResponse,
    summary="Update department",
    dependencies=[Depends(admin_only)],
)
async def update_department(
    dept_id: UUID,
    data: DepartmentUpdateRequest,
    service: DepartmentService = Depends(get_department_service),
) -> DepartmentResponse:
    return await service.update_department(dept_id, data)


@departments_router.delete(
    "/{dept_id}",
    response_model=MessageResponse,
    summary="Delete department",
    dependencies=[Depends(admin_only)],
)
async def delete_department(
    dept_id: UUID,
    service: DepartmentService = Depends(get_department_service),
) -> MessageResponse:
    return await service.delete_department(dept_id)
