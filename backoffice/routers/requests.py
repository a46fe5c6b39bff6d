"""
Service request endpoints.

Anyone may submit the contact form; admins and managers triage it.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Form, Query, status
from pydantic import ValidationError
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
from backoffice.models.content import RequestStatus
from backoffice.schemas.common import MessageResponse
from backoffice.schemas.content import (
    ServiceRequestCreate,
    ServiceRequestResponse,
    ServiceRequestStats,
    ServiceRequestStatusUpdate,
)
from backoffice.services.errors import bad_request
from backoffice.services.request_service import RequestService

router = APIRouter()


def get_request_service(db: AsyncSession = Depends(get_db)) -> RequestService:
    return RequestService(db=db)


def request_form(
    name: str = Form(default=""),
    phone: str = Form(default=""),
    email: str = Form(default=""),
    address: str = Form(default=""),
    service_type: str = Form(default="", alias="serviceType"),
    service_type_snake: str = Form(default="", alias="service_type"),
    message: str = Form(default=""),
) -> ServiceRequestCreate:
    """
    Collect the contact form fields. Missing required fields fail with 400.

    The service type is accepted as `serviceType` or `service_type`.
    """
    try:
        return ServiceRequestCreate(
            name=name,
            phone=phone,
            email=email,
            address=address,
            service_type=service_type or service_type_snake,
            message=message,
        )
    except ValidationError:
        raise bad_request("Please fill all required fields")


@router.get(
    "",
    response_model=list[ServiceRequestResponse],
    summary="List service requests",
    dependencies=[Depends(admin_or_manager)],
)
async def list_requests(
    status_filter: RequestStatus | None = Query(default=None, alias="status"),
    service: RequestService = Depends(get_request_service),
) -> list[ServiceRequestResponse]:
    return await service.list_requests(status=status_filter)


@router.get(
    "/stats",
    response_model=ServiceRequestStats,
    summary="Count service requests by status",
    dependencies=[Depends(admin_or_manager)],
)
async def request_stats(
    service: RequestService = Depends(get_request_service),
) -> ServiceRequestStats:
    return await service.stats()


@router.get(
    "/{request_id}",
    response_model=ServiceRequestResponse,
    summary="Get service request",
    dependencies=[Depends(admin_or_manager)],
)
async def get_request(
    request_id: UUID,
    service: RequestService = Depends(get_request_service),
) -> ServiceRequestResponse:
    return await service.get_request(request_id)


@router.post(
    "",
    response_model=ServiceRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a service request",
)
async def create_request(
    data: ServiceRequestCreate = Depends(request_form),
    image_url: str | None = Form(default=None, alias="imageUrl"),
    image: ImageUpload | None = Depends(image_file),
    resolver: UploadResolver = Depends(get_upload_resolver),
    service: RequestService = Depends(get_request_service),
) -> ServiceRequestResponse:
    """
    Public contact form.

    - name, phone, email, address and service type are required
    - An optional photo may be attached as ``image`` or ``imageUrl``
    """
    stored = await resolve_image(resolver, image, image_url, "requests")
    return await service.create_request(data, image=stored or "")


@router.put(
    "/{request_id}",
    response_model=ServiceRequestResponse,
    summary="Update service request status",
    dependencies=[Depends(admin_or_manager)],
)
async def update_request(
    request_id: UUID,
    data: ServiceRequestStatusUpdate,
    service: RequestService = Depends(get_request_service),
) -> ServiceRequestResponse:
    return await service.update_status(request_id, data)


@router.delete(
    "/{request_id}",
    response_model=MessageResponse,
    summary="Delete service request",
    dependencies=[Depends(admin_or_manager)],
)
async def delete_request(
    request_id: UUID,
    service: RequestService = Depends(get_request_service),
) -> MessageResponse:
    return await service.delete_request(request_id)
