"""
Public marketing content: services and project gallery.

Routers parse the multipart forms and resolve image URLs; this layer only
stores what it is given.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.models.content import Project, Service
from backoffice.schemas.common import MessageResponse
from backoffice.schemas.content import ProjectResponse, ServiceResponse
from backoffice.services.errors import bad_request, not_found


class ServiceCatalog:
    """CRUD for offered services, shown in ``order`` ascending."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_services(self) -> list[ServiceResponse]:
        result = await self.db.execute(
            select(Service).order_by(Service.order.asc(), Service.created_at.desc())
        )
        return [ServiceResponse.model_validate(s) for s in result.scalars().all()]

    async def get_service(self, service_id: UUID) -> ServiceResponse:
        return ServiceResponse.model_validate(await self._get(service_id))

    async def create_service(
        self,
        title: dict[str, str],
        description: dict[str, str],
        image: str = "",
        order: int = 0,
    ) -> ServiceResponse:
        service = Service(title=title, description=description, image=image, order=order)
        self.db.add(service)
        await self.db.flush()
        await self.db.refresh(service)
        return ServiceResponse.model_validate(service)

    async def update_service(
        self,
        service_id: UUID,
        title: dict[str, str] | None = None,
        description: dict[str, str] | None = None,
        image: str | None = None,
        order: int | None = None,
    ) -> ServiceResponse:
        """Only the fields passed as non-None are changed."""
        service = await self._get(service_id)
        if title is not None:
            service.title = title
        if description is not None:
            service.description = description
        if image is not None:
            service.image = image
        if order is not None:
            service.order = order

        await self.db.flush()
        await self.db.refresh(service)
        return ServiceResponse.model_validate(service)

    async def delete_service(self, service_id: UUID) -> MessageResponse:
        service = await self._get(service_id)
        await self.db.delete(service)
        await self.db.flush()
        return MessageResponse(message="Service deleted")

    async def _get(self, service_id: UUID) -> Service:
        service = await self.db.get(Service, service_id)
        if service is None:
            raise not_found("Service")
        return service


class ProjectGallery:
    """CRUD for gallery projects and their image lists."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_projects(self, category: str | None = None) -> list[ProjectResponse]:
        stmt = select(Project)
        if category:
            stmt = stmt.where(Project.category == category)
        result = await self.db.execute(stmt.order_by(Project.created_at.desc()))
        return [ProjectResponse.model_validate(p) for p in result.scalars().all()]

    async def get_project(self, project_id: UUID) -> ProjectResponse:
        return ProjectResponse.model_validate(await self._get(project_id))

    async def create_project(
        self,
        title: dict[str, str],
        description: dict[str, str],
        images: list[str],
        category: str | None = None,
    ) -> ProjectResponse:
        project = Project(
            title=title,
            description=description,
            images=list(images),
            category=category or "general",
        )
        self.db.add(project)
        await self.db.flush()
        await self.db.refresh(project)
        return ProjectResponse.model_validate(project)

    async def update_project(
        self,
        project_id: UUID,
        title: dict[str, str] | None = None,
        description: dict[str, str] | None = None,
        new_images: list[str] | None = None,
        category: str | None = None,
    ) -> ProjectResponse:
        """New images are appended to the existing list."""
        project = await self._get(project_id)
        if title is not None:
            project.title = title
        if description is not None:
            project.description = description
        if category:
            project.category = category
        if new_images:
            project.images = [*project.images, *new_images]

        await self.db.flush()
        await self.db.refresh(project)
        return ProjectResponse.model_validate(project)

    async def remove_image(self, project_id: UUID, image_index: int) -> ProjectResponse:
        project = await self._get(project_id)
        if not 0 <= image_index < len(project.images):
            raise bad_request("Invalid image index")

        project.images = [url for i, url in enumerate(project.images) if i != image_index]
        await self.db.flush()
        await self.db.refresh(project)
        return ProjectResponse.model_validate(project)

    async def delete_project(self, project_id: UUID) -> MessageResponse:
        project = await self._get(project_id)
        await self.db.delete(project)
        await self.db.flush()
        return MessageResponse(message="Project deleted")

    async def _get(self, project_id: UUID) -> Project:
        project = await self.db.get(Project, project_id)
        if project is None:
            raise not_found("Project")
        return project
