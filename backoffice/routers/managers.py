"""
Manager endpoints. Admins and managers read, only admins write.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.database import get_db
from backoffice.core.dependencies import admin_only, admin_or_manager
from backoffice.schemas.common import MessageResponse
from backoffice.schemas.manager import ManagerCreateRequest, ManagerResponse, ManagerUpdateRequest
from backoffice.services.manager_service import ManagerService

router = APIRouter()


def get_manager_service(db: AsyncSession = Depends(get_db)) -> ManagerService:
    return ManagerService(db=db)


@router.get(
    "",
    response_model=list[ManagerResponse],
    summary="List managers",
    dependencies=[Depends(admin_or_manager)],
)
async def list_managers(
    department: UUID | None = Query(default=None),
    service: ManagerService = Depends(get_manager_service),
) -> list[ManagerResponse]:
    return await service.list_managers(department_id=department)


@router.post(
    "",
    response_model=ManagerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create manager",
    dependencies=[Depends(admin_only)],
)
async def create_manager(
    data: ManagerCreateRequest,
    service: ManagerService = Depends(get_manager_service),
) -> ManagerResponse:
    """
    Create a manager account.

    - Email must be unique among managers
    - Role defaults to ``manager``
    """
    return await service.create_manager(data)


@router.get(
    "/{manager_id}",
    response_model=ManagerResponse,
    summary="Get manager",
    dependencies=[Depends(admin_or_manager)],
)
async def get_manager(
    manager_id: UUID,
    service: ManagerService = Depends(get_manager_service),
) -> ManagerResponse:
    return await service.get_manager(manager_id)


@router.put(
    "/{manager_id}",
    response_model=ManagerResponse,
    summary="Update manager",
    dependencies=[Depends(admin_only)],
)
async def update_manager(
    manager_id: UUID,
    data: ManagerUpdateRequest,
    service: ManagerService = Depends(get_manager_service),
) -> ManagerResponse:
    return await service.update_manager(manager_id, data)


@router.delete(
    "/{manager_id}",
    response_model=MessageResponse,
    summary="Delete manager",
    dependencies=[Depends(admin_only)],
)
async def delete_manager(
    manager_id: UUID,
    service: ManagerService = Depends(get_manager_service),
) -> MessageResponse:
    return await service.delete_manager(manager_id)
