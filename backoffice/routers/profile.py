"""
Profile endpoints: the caller's own name and photo.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.database import get_db
from backoffice.core.dependencies import get_current_principal
from backoffice.core.principals import Principal
from backoffice.core.uploads import (
    ImageUpload,
    UploadResolver,
    get_upload_resolver,
    photo_file,
    resolve_image,
)
from backoffice.schemas.auth import ProfileResponse
from backoffice.services.profile_service import ProfileService

router = APIRouter()


def get_profile_service(db: AsyncSession = Depends(get_db)) -> ProfileService:
    return ProfileService(db=db)


@router.get("", response_model=ProfileResponse, summary="Get own profile")
async def get_profile(
    principal: Principal = Depends(get_current_principal),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await service.get_profile(principal)


@router.put("", response_model=ProfileResponse, summary="Update own profile")
async def update_profile(
    name: str | None = Form(default=None),
    photo_url: str | None = Form(default=None, alias="photoUrl"),
    photo: ImageUpload | None = Depends(photo_file),
    principal: Principal = Depends(get_current_principal),
    resolver: UploadResolver = Depends(get_upload_resolver),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    stored = await resolve_image(resolver, photo, photo_url, "profiles")
    return await service.update_profile(principal, name=name, photo=stored)
