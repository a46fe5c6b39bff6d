"""
Public service catalogue.

Reads are public. Writes are multipart forms: ``title`` and ``description``
are JSON objects keyed by language, ``image`` is a file or ``imageUrl`` a link.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Form, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.database import get_db
from backoffice.core.dependencies import admin_or_manager
from backoffice.core.uploads import (
    ImageUpload,
    UploadResolver,
    get_upload_resolver,
    image_file,
    resolve_image,
)
from backoffice.schemas.common import MessageResponse, parse_localized_form
from backoffice.schemas.content import ServiceResponse
from backoffice.services.content_service import ServiceCatalog

router = APIRouter()


def get_service_catalog(db: AsyncSession = Depends(get_db)) -> ServiceCatalog:
    return ServiceCatalog(db=db)


@router.get("", response_model=list[ServiceResponse], summary="List services")
async def list_services(
    catalog: ServiceCatalog = Depends(get_service_catalog),
) -> list[ServiceResponse]:
    return await catalog.list_services()


@router.get("/{service_id}", response_model=ServiceResponse, summary="Get service")
async def get_service(
    service_id: UUID,
    catalog: ServiceCatalog = Depends(get_service_catalog),
) -> ServiceResponse:
    return await catalog.get_service(service_id)


@router.post(
    "",
    response_model=ServiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create service",
    dependencies=[Depends(admin_or_manager)],
)
async def create_service(
    title: str | None = Form(default=None),
    description: str | None = Form(default=None),
    order: int = Form(default=0),
    image_url: str | None = Form(default=None, alias="imageUrl"),
    image: ImageUpload | None = Depends(image_file),
    resolver: UploadResolver = Depends(get_upload_resolver),
    catalog: ServiceCatalog = Depends(get_service_catalog),
) -> ServiceResponse:
    title_obj = parse_localized_form(title, "title")
    description_obj = parse_localized_form(description, "description")
    stored = await resolve_image(resolver, image, image_url, "services")
    return await catalog.create_service(
        title=title_obj,
        description=description_obj,
        image=stored or "",
        order=order,
    )


@router.put(
    "/{service_id}",
    response_model=ServiceResponse,
    summary="Update service",
    dependencies=[Depends(admin_or_manager)],
)
async def update_service(
    service_id: UUID,
    title: str | None = Form(default=None),
    description: str | None = Form(default=None),
    order: int | None = Form(default=None),
    image_url: str | None = Form(default=None, alias="imageUrl"),
    image: ImageUpload | None = Depends(image_file),
    resolver: UploadResolver = Depends(get_upload_resolver),
    catalog: ServiceCatalog = Depends(get_service_catalog),
) -> ServiceResponse:
    """Omitted fields keep their current value; a new image replaces the old one."""
    await catalog.get_service(service_id)
    return await catalog.update_service(
        service_id,
        title=parse_localized_form(title, "title", required=False),
        description=parse_localized_form(description, "description", required=False),
        image=await resolve_image(resolver, image, image_url, "services"),
        order=order,
    )


@router.delete(
    "/{service_id}",
    response_model=MessageResponse,
    summary="Delete service",
    dependencies=[Depends(admin_or_manager)],
)
async def delete_service(
    service_id: UUID,
    catalog: ServiceCatalog = Depends(get_service_catalog),
) -> MessageResponse:
    return await catalog.delete_service(service_id)
