"""
Manager business logic.

Manager accounts are created and changed by admins only; passwords are
hashed here and never leave the service.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backoffice.core.security import hash_password
from backoffice.models.manager import Manager
from backoffice.schemas.common import MessageResponse
from backoffice.schemas.manager import ManagerCreateRequest, ManagerResponse, ManagerUpdateRequest
from backoffice.services.errors import bad_request, not_found


class ManagerService:
    """Handles all manager operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_managers(self, department_id: UUID | None = None) -> list[ManagerResponse]:
        stmt = select(Manager).options(selectinload(Manager.department))
        if department_id is not None:
            stmt = stmt.where(Manager.department_id == department_id)
        result = await self.db.execute(stmt.order_by(Manager.created_at.desc()))
        return [ManagerResponse.model_validate(m) for m in result.scalars().all()]

    async def get_manager(self, manager_id: UUID) -> ManagerResponse:
        return ManagerResponse.model_validate(await self._load(manager_id))

    async def create_manager(self, data: ManagerCreateRequest) -> ManagerResponse:
        email = data.email.lower()
        await self._ensure_email_free(email)

        manager = Manager(
            name=data.name,
            email=email,
            password_hash=hash_password(data.password),
            contact=data.contact,
            role=data.role,
            department_id=data.department,
        )
        self.db.add(manager)
        await self.db.flush()
        return ManagerResponse.model_validate(await self._load(manager.id))

    async def update_manager(self, manager_id: UUID, data: ManagerUpdateRequest) -> ManagerResponse:
        manager = await self._load(manager_id)
        changes = data.model_dump(exclude_unset=True)

        email = changes.pop("email", None)
        if email is not None and email.lower() != manager.email:
            await self._ensure_email_free(email.lower())
            manager.email = email.lower()

        password = changes.pop("password", None)
        if password:
            manager.password_hash = hash_password(password)

        if "department" in changes:
            manager.department_id = changes.pop("department")

        for field, value in changes.items():
            if value is not None:
                setattr(manager, field, value)

        await self.db.flush()
        return ManagerResponse.model_validate(await self._load(manager.id))

    async def delete_manager(self, manager_id: UUID) -> MessageResponse:
        """Hard delete. Employees and tasks owned by the manager are kept."""
        manager = await self.db.get(Manager, manager_id)
        if manager is None:
            raise not_found("Manager")
        await self.db.delete(manager)
        await self.db.flush()
        return MessageResponse(message="Manager deleted")

    async def _ensure_email_free(self, email: str) -> None:
        existing = await self.db.execute(select(Manager.id).where(Manager.email == email))
        if existing.scalar_one_or_none() is not None:
            raise bad_request("Email already registered", code="EMAIL_TAKEN")

    async def _load(self, manager_id: UUID) -> Manager:
        result = await self.db.execute(
            select(Manager)
            .options(selectinload(Manager.department))
            .where(Manager.id == manager_id)
            .execution_options(populate_existing=True)
        )
        manager = result.scalar_one_or_none()
        if manager is None:
            raise not_found("Manager")
        return manager
