"""
Task endpoints.

Everyone authenticated can list, read and update tasks within their reach;
only admins and managers create or delete them.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.database import get_db
from backoffice.core.dependencies import admin_or_manager, get_current_principal
from backoffice.core.principals import Principal
from backoffice.models.task import TaskStatus
from backoffice.schemas.common import MessageResponse
from backoffice.schemas.task import TaskCreateRequest, TaskResponse, TaskUpdateRequest
from backoffice.services.task_service import TaskService

router = APIRouter()


def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db=db)


@router.get("", response_model=list[TaskResponse], summary="List tasks")
async def list_tasks(
    status_filter: TaskStatus | None = Query(default=None, alias="status"),
    employee: UUID | None = Query(default=None),
    manager: UUID | None = Query(default=None),
    principal: Principal = Depends(get_current_principal),
    service: TaskService = Depends(get_task_service),
) -> list[TaskResponse]:
    """
    List tasks ordered by due date.

    Employees only see their own tasks; scoped managers only the tasks they own.
    """
    return await service.list_tasks(
        principal, status=status_filter, employee_id=employee, manager_id=manager
    )


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
)
async def create_task(
    data: TaskCreateRequest,
    principal: Principal = Depends(admin_or_manager),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return await service.create_task(principal, data)


@router.get("/{task_id}", response_model=TaskResponse, summary="Get task")
async def get_task(
    task_id: UUID,
    principal: Principal = Depends(get_current_principal),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return await service.get_task(principal, task_id)


@router.put("/{task_id}", response_model=TaskResponse, summary="Update task")
async def update_task(
    task_id: UUID,
    data: TaskUpdateRequest,
    principal: Principal = Depends(get_current_principal),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """Employees may only move their task between statuses."""
    return await service.update_task(principal, task_id, data)


@router.delete("/{task_id}", response_model=MessageResponse, summary="Delete task")
async def delete_task(
    task_id: UUID,
    principal: Principal = Depends(admin_or_manager),
    service: TaskService = Depends(get_task_service),
) -> MessageResponse:
    return await service.delete_task(principal, task_id)
