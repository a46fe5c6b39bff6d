"""
FastAPI dependency injection functions.

Bearer token → verified claims → resolved principal → gate predicate.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backoffice.core.database import get_db
from backoffice.core.principals import (
    EmployeePrincipal,
    ManagerPrincipal,
    OwnerPrincipal,
    Predicate,
    Principal,
    is_admin,
    is_admin_or_manager,
    is_employee,
    is_manager,
)
from backoffice.core.security import InvalidToken, decode_access_token
from backoffice.models.employee import Employee
from backoffice.models.manager import Manager
from backoffice.models.owner import Owner

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# HTTP Bearer scheme (auto_error=False so we can return custom 401)
# ---------------------------------------------------------------------------

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"code": code, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


# ---------------------------------------------------------------------------
# Principal resolution
# ---------------------------------------------------------------------------

async def resolve_principal(db: AsyncSession, principal_id: str, kind: str) -> Principal | None:
    """
    Load the record behind verified token claims.

    Returns None for an unknown kind, a malformed id, or a lookup miss.
    """
    try:
        pk = UUID(principal_id)
    except ValueError:
        return None

    if kind == "user":
        owner = await db.get(Owner, pk)
        return OwnerPrincipal(owner) if owner is not None else None

    if kind == "manager":
        manager = await db.get(Manager, pk)
        return ManagerPrincipal(manager) if manager is not None else None

    if kind == "employee":
        result = await db.execute(
            select(Employee)
            .options(selectinload(Employee.department), selectinload(Employee.manager))
            .where(Employee.id == pk)
        )
        employee = result.scalar_one_or_none()
        return EmployeePrincipal(employee) if employee is not None else None

    return None


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Principal:
    """
    Validate Bearer JWT and return the authenticated principal.

    Raises 401 if:
    - No token provided
    - Token is invalid, tampered or expired
    - Token names an unknown principal kind
    - The principal no longer exists
    """
    if credentials is None:
        raise _unauthorized("MISSING_TOKEN", "Not authorized, no token")

    try:
        claims = decode_access_token(credentials.credentials)
    except InvalidToken as exc:
        logger.debug("Token verification failed: %s", exc)
        raise _unauthorized("INVALID_TOKEN", "Not authorized, token failed")

    principal = await resolve_principal(db, claims["id"], claims["type"])
    if principal is None:
        raise _unauthorized("PRINCIPAL_NOT_FOUND", "Not authorized, principal not found")

    return principal


# ---------------------------------------------------------------------------
# Gate
# ---------------------------------------------------------------------------

def require(predicate: Predicate, message: str):
    """
    Dependency factory that admits only principals satisfying ``predicate``.

    Usage:
        @router.post("/...")
        async def endpoint(principal: Principal = Depends(admin_only)):
            ...
    """
    async def gate(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not predicate(principal):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"code": "FORBIDDEN", "message": message},
            )
        return principal

    return gate


admin_only = require(is_admin, "Admin access required")
admin_or_manager = require(is_admin_or_manager, "Admin or Manager access required")
manager_only = require(is_manager, "Manager access required")
employee_only = require(is_employee, "Employee access required")
