"""
Authentication and profile schemas.

Request/response models for login, /auth/me and /profile.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, model_validator


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------

class LoginRequest(BaseModel):
    """Request body for POST /auth/login and POST /auth/employee/login."""

    email: str = ""
    password: str = ""

    @model_validator(mode="after")
    def both_present(self) -> LoginRequest:
        self.email = self.email.strip().lower()
        if not self.email or not self.password:
            raise ValueError("Please provide email and password")
        return self


class PrincipalInfo(BaseModel):
    """Identity of the authenticated principal, without secrets."""

    id: UUID
    email: str
    name: str
    role: str
    type: str


class LoginResponse(BaseModel):
    """Response for both login endpoints."""

    token: str
    user: PrincipalInfo


class MeResponse(BaseModel):
    """Response for GET /auth/me."""

    user: PrincipalInfo


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

class ProfileInfo(PrincipalInfo):
    photo: str


class ProfileResponse(BaseModel):
    """Response for GET and PUT /profile."""

    user: ProfileInfo
