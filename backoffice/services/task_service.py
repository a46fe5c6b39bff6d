"""
Task business logic.

Employees see and update only their own tasks, and only their status.
Scoped managers see and touch only the tasks they own.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backoffice.core.principals import Principal, is_employee, is_scoped_manager, may_access_owned
from backoffice.models.task import Task, TaskStatus
from backoffice.schemas.common import MessageResponse
from backoffice.schemas.task import TaskCreateRequest, TaskResponse, TaskUpdateRequest
from backoffice.services.errors import bad_request, forbidden, not_found

EMPLOYEE_WRITABLE_FIELDS = frozenset({"status"})

_REFERENCE_FIELDS = {"employee": "employee_id", "manager": "manager_id"}


def _with_references(stmt):
    return stmt.options(selectinload(Task.employee), selectinload(Task.manager))


class TaskService:
    """Handles all task operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_tasks(
        self,
        principal: Principal,
        status: TaskStatus | None = None,
        employee_id: UUID | None = None,
        manager_id: UUID | None = None,
    ) -> list[TaskResponse]:
        """Soonest due first; ties broken newest first."""
        if is_employee(principal):
            employee_id = principal.id
        elif is_scoped_manager(principal):
            manager_id = principal.id

        stmt = _with_references(select(Task))
        if status is not None:
            stmt = stmt.where(Task.status == status)
        if employee_id is not None:
            stmt = stmt.where(Task.employee_id == employee_id)
        if manager_id is not None:
            stmt = stmt.where(Task.manager_id == manager_id)

        result = await self.db.execute(stmt.order_by(Task.due_date.asc(), Task.created_at.desc()))
        return [TaskResponse.model_validate(t) for t in result.scalars().all()]

    async def get_task(self, principal: Principal, task_id: UUID) -> TaskResponse:
        task = await self._load(task_id)
        self._check_access(principal, task)
        return TaskResponse.model_validate(task)

    async def create_task(self, principal: Principal, data: TaskCreateRequest) -> TaskResponse:
        manager_id = principal.id if is_scoped_manager(principal) else data.manager
        if manager_id is None:
            raise bad_request("manager is required")

        task = Task(
            title=data.title,
            description=data.description,
            status=data.status,
            due_date=data.due_date,
            employee_id=data.employee,
            manager_id=manager_id,
        )
        self.db.add(task)
        await self.db.flush()
        return TaskResponse.model_validate(await self._load(task.id))

    async def update_task(
        self, principal: Principal, task_id: UUID, data: TaskUpdateRequest
    ) -> TaskResponse:
        """
        Partially update a task.

        Employees may only change ``status``; anything else they send is
        dropped. Scoped managers cannot hand a task to another manager.
        """
        task = await self._load(task_id)
        self._check_access(principal, task)

        changes = data.model_dump(exclude_unset=True)
        if is_employee(principal):
            changes = {k: v for k, v in changes.items() if k in EMPLOYEE_WRITABLE_FIELDS}
        elif is_scoped_manager(principal):
            changes.pop("manager", None)

        for field, value in changes.items():
            if value is not None:
                setattr(task, _REFERENCE_FIELDS.get(field, field), value)

        await self.db.flush()
        return TaskResponse.model_validate(await self._load(task.id))

    async def delete_task(self, principal: Principal, task_id: UUID) -> MessageResponse:
        task = await self._load(task_id)
        self._check_access(principal, task)
        await self.db.delete(task)
        await self.db.flush()
        return MessageResponse(message="Task deleted")

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    @staticmethod
    def _check_access(principal: Principal, task: Task) -> None:
        if not may_access_owned(principal, task.manager_id, task.employee_id):
            raise forbidden()

    async def _load(self, task_id: UUID) -> Task:
        result = await self.db.execute(
            _with_references(select(Task))
            .where(Task.id == task_id)
            .execution_options(populate_existing=True)
        )
        task = result.scalar_one_or_none()
        if task is None:
            raise not_found("Task")
        return task
