"""
Authentication business logic.

Handles owner/manager login, employee login, current-principal lookup and
the startup owner bootstrap. Routers only handle HTTP concerns.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.principals import (
    EmployeePrincipal,
    ManagerPrincipal,
    OwnerPrincipal,
    Principal,
)
from backoffice.core.security import create_access_token, hash_password, verify_password
from backoffice.models.employee import Employee
from backoffice.models.manager import Manager
from backoffice.models.owner import Owner, OwnerRole
from backoffice.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    PrincipalInfo,
    ProfileInfo,
)

logger = logging.getLogger(__name__)


def describe_principal(principal: Principal) -> PrincipalInfo:
    """Public identity fields of any principal kind."""
    match principal:
        case OwnerPrincipal(record=owner):
            email, name = owner.email, owner.name
        case ManagerPrincipal(record=manager):
            email, name = manager.email, manager.name
        case EmployeePrincipal(record=employee):
            email, name = employee.emp_email, employee.display_name
    return PrincipalInfo(
        id=principal.id,
        email=email,
        name=name,
        role=principal.role,
        type=principal.kind,
    )


def describe_profile(principal: Principal) -> ProfileInfo:
    info = describe_principal(principal)
    return ProfileInfo(**info.model_dump(), photo=principal.record.photo or "")


def _invalid_credentials(message: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"code": "INVALID_CREDENTIALS", "message": message},
    )


class AuthService:
    """Handles all authentication operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # -----------------------------------------------------------------------
    # Owner / Manager login
    # -----------------------------------------------------------------------

    async def login(self, data: LoginRequest) -> LoginResponse:
        """
        Authenticate an owner or a manager by email + password.

        Owners are looked up first; managers only when no owner has the email.
        Raises 401 for invalid credentials (never reveals which field is wrong).
        """
        result = await self.db.execute(select(Owner).where(Owner.email == data.email))
        owner = result.scalar_one_or_none()

        if owner is not None:
            if verify_password(data.password, owner.password_hash):
                return self._login_response(OwnerPrincipal(owner))
        else:
            result = await self.db.execute(select(Manager).where(Manager.email == data.email))
            manager = result.scalar_one_or_none()
            if manager is not None and verify_password(data.password, manager.password_hash):
                return self._login_response(ManagerPrincipal(manager))

        logger.warning("Failed login for %s", data.email)
        raise _invalid_credentials()

    # -----------------------------------------------------------------------
    # Employee login
    # -----------------------------------------------------------------------

    async def employee_login(self, data: LoginRequest) -> LoginResponse:
        """Authenticate an employee by emp_email + password."""
        result = await self.db.execute(
            select(Employee)
            .where(Employee.emp_email == data.email)
            .order_by(Employee.created_at)
            .limit(1)
        )
        employee = result.scalars().first()

        if employee is None:
            logger.warning("Failed employee login for %s", data.email)
            raise _invalid_credentials()

        if not employee.password_hash:
            raise _invalid_credentials("Password not set. Contact your manager.")

        if not verify_password(data.password, employee.password_hash):
            logger.warning("Failed employee login for %s", data.email)
            raise _invalid_credentials()

        return self._login_response(EmployeePrincipal(employee))

    # -----------------------------------------------------------------------
    # Current principal (me)
    # -----------------------------------------------------------------------

    async def get_me(self, principal: Principal) -> MeResponse:
        return MeResponse(user=describe_principal(principal))

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _login_response(self, principal: Principal) -> LoginResponse:
        token = create_access_token(str(principal.id), principal.kind)
        logger.info("Login succeeded for %s %s", principal.kind, principal.id)
        return LoginResponse(token=token, user=describe_principal(principal))


async def ensure_admin(db: AsyncSession, email: str, password: str) -> Owner:
    """
    Make sure the bootstrap owner exists.

    Creates it with the configured password when missing; an existing owner
    is left untouched.
    """
    email = email.strip().lower()
    result = await db.execute(select(Owner).where(Owner.email == email))
    owner = result.scalar_one_or_none()
    if owner is not None:
        logger.info("Admin user already exists: %s", email)
        return owner

    owner = Owner(email=email, password_hash=hash_password(password), role=OwnerRole.admin)
    db.add(owner)
    await db.flush()
    logger.info("Admin user created: %s", email)
    return owner
