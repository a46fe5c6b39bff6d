"""
Authentication endpoints.

Owner/manager login, employee login, me.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.database import get_db
from backoffice.core.dependencies import get_current_principal
from backoffice.core.principals import Principal
from backoffice.schemas.auth import LoginRequest, LoginResponse, MeResponse
from backoffice.services.auth_service import AuthService

router = APIRouter()


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Dependency that constructs AuthService."""
    return AuthService(db=db)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login as owner or manager",
)
async def login(
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Authenticate with email and password.

    - Owner accounts are checked first, then managers
    - Returns a signed token and the public identity
    - Returns 401 on bad credentials
    """
    return await service.login(data)


@router.post(
    "/employee/login",
    response_model=LoginResponse,
    summary="Login as employee",
)
async def employee_login(
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    return await service.employee_login(data)


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Get current principal",
)
async def me(
    principal: Principal = Depends(get_current_principal),
    service: AuthService = Depends(get_auth_service),
) -> MeResponse:
    return await service.get_me(principal)
