"""
Organization business logic.

Organizations own departments through a reverse view only: deleting an
organization leaves its departments in place.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backoffice.models.organization import Organization
from backoffice.schemas.common import MessageResponse
from backoffice.schemas.organization import (
    OrganizationCreateRequest,
    OrganizationResponse,
    OrganizationUpdateRequest,
)
from backoffice.services.errors import not_found


class OrganizationService:
    """Handles all organization operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_organizations(self) -> list[OrganizationResponse]:
        """All organizations, newest first, each with its departments."""
        result = await self.db.execute(
            select(Organization)
            .options(selectinload(Organization.departments))
            .order_by(Organization.created_at.desc())
        )
        return [OrganizationResponse.model_validate(org) for org in result.scalars().all()]

    async def get_organization(self, org_id: UUID) -> OrganizationResponse:
        return OrganizationResponse.model_validate(await self._load(org_id))

    async def create_organization(self, data: OrganizationCreateRequest) -> OrganizationResponse:
        org = Organization(**data.model_dump())
        self.db.add(org)
        await self.db.flush()
        return OrganizationResponse.model_validate(await self._load(org.id))

    async def update_organization(
        self, org_id: UUID, data: OrganizationUpdateRequest
    ) -> OrganizationResponse:
        org = await self._load(org_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(org, field, value)
        await self.db.flush()
        return OrganizationResponse.model_validate(await self._load(org.id))

    async def delete_organization(self, org_id: UUID) -> MessageResponse:
        """Hard delete. Departments referencing the organization are kept."""
        org = await self.db.get(Organization, org_id)
        if org is None:
            raise not_found("Organization")
        await self.db.delete(org)
        await self.db.flush()
        return MessageResponse(message="Organization deleted")

    async def _load(self, org_id: UUID) -> Organization:
        result = await self.db.execute(
            select(Organization)
            .options(selectinload(Organization.departments))
            .where(Organization.id == org_id)
            .execution_options(populate_existing=True)
        )
        org = result.scalar_one_or_none()
        if org is None:
            raise not_found("Organization")
        return org
