"""
Self-service profile for every principal kind.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.principals import EmployeePrincipal, Principal
from backoffice.schemas.auth import ProfileResponse
from backoffice.services.auth_service import describe_profile


class ProfileService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_profile(self, principal: Principal) -> ProfileResponse:
        return ProfileResponse(user=describe_profile(principal))

    async def update_profile(
        self, principal: Principal, name: str | None = None, photo: str | None = None
    ) -> ProfileResponse:
        """
        Change the caller's display name and/or photo.

        For employees the name replaces the English entry of ``emp_name``.
        """
        record = principal.record
        if name is not None and name.strip():
            if isinstance(principal, EmployeePrincipal):
                record.emp_name = {**(record.emp_name or {}), "en": name.strip()}
            else:
                record.name = name.strip()
        if photo is not None:
            record.photo = photo

        await self.db.flush()
        return ProfileResponse(user=describe_profile(principal))
