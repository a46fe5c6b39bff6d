"""
Project gallery endpoints.

Reads are public. Writes accept up to ten ``images`` files and any number of
``imageUrls`` links; new images are appended on update.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Form, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.database import get_db
from backoffice.core.dependencies import admin_or_manager
from backoffice.core.uploads import (
    ImageUpload,
    UploadResolver,
    get_upload_resolver,
    image_files,
    is_image_url,
)
from backoffice.schemas.common import MessageResponse, parse_localized_form
from backoffice.schemas.content import ProjectResponse
from backoffice.services.content_service import ProjectGallery

router = APIRouter()


def get_project_gallery(db: AsyncSession = Depends(get_db)) -> ProjectGallery:
    return ProjectGallery(db=db)


async def _collect_images(
    resolver: UploadResolver,
    urls: list[str] | None,
    uploads: list[ImageUpload],
) -> list[str]:
    """Pasted links first, then uploaded files in the order received."""
    images = [url.strip() for url in urls or [] if is_image_url(url)]
    for upload in uploads:
        images.append(await resolver.store(upload, "projects"))
    return images


@router.get("", response_model=list[ProjectResponse], summary="List projects")
async def list_projects(
    category: str | None = Query(default=None, max_length=100),
    gallery: ProjectGallery = Depends(get_project_gallery),
) -> list[ProjectResponse]:
    return await gallery.list_projects(category=category)


@router.get("/{project_id}", response_model=ProjectResponse, summary="Get project")
async def get_project(
    project_id: UUID,
    gallery: ProjectGallery = Depends(get_project_gallery),
) -> ProjectResponse:
    return await gallery.get_project(project_id)


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    dependencies=[Depends(admin_or_manager)],
)
async def create_project(
    title: str | None = Form(default=None),
    description: str | None = Form(default=None),
    category: str | None = Form(default=None),
    image_urls: list[str] | None = Form(default=None, alias="imageUrls"),
    images: list[ImageUpload] = Depends(image_files),
    resolver: UploadResolver = Depends(get_upload_resolver),
    gallery: ProjectGallery = Depends(get_project_gallery),
) -> ProjectResponse:
    title_obj = parse_localized_form(title, "title")
    description_obj = parse_localized_form(description, "description")
    return await gallery.create_project(
        title=title_obj,
        description=description_obj,
        images=await _collect_images(resolver, image_urls, images),
        category=category,
    )


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Update project",
    dependencies=[Depends(admin_or_manager)],
)
async def update_project(
    project_id: UUID,
    title: str | None = Form(default=None),
    description: str | None = Form(default=None),
    category: str | None = Form(default=None),
    image_urls: list[str] | None = Form(default=None, alias="imageUrls"),
    images: list[ImageUpload] = Depends(image_files),
    resolver: UploadResolver = Depends(get_upload_resolver),
    gallery: ProjectGallery = Depends(get_project_gallery),
) -> ProjectResponse:
    await gallery.get_project(project_id)
    return await gallery.update_project(
        project_id,
        title=parse_localized_form(title, "title", required=False),
        description=parse_localized_form(description, "description", required=False),
        new_images=await _collect_images(resolver, image_urls, images),
        category=category,
    )


@router.delete(
    "/{project_id}/images/{image_index}",
    response_model=ProjectResponse,
    summary="Remove one image from a project",
    dependencies=[Depends(admin_or_manager)],
)
async def remove_project_image(
    project_id: UUID,
    image_index: int,
    gallery: ProjectGallery = Depends(get_project_gallery),
) -> ProjectResponse:
    return await gallery.remove_image(project_id, image_index)


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    summary="Delete project",
    dependencies=[Depends(admin_or_manager)],
)
async def delete_project(
    project_id: UUID,
    gallery: ProjectGallery = Depends(get_project_gallery),
) -> MessageResponse:
    return await gallery.delete_project(project_id)
