"""
Service request (contact form) business logic.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.models.content import RequestStatus, ServiceRequest
from backoffice.schemas.common import MessageResponse
from backoffice.schemas.content import (
    ServiceRequestCreate,
    ServiceRequestResponse,
    ServiceRequestStats,
    ServiceRequestStatusUpdate,
)
from backoffice.services.errors import not_found

logger = logging.getLogger(__name__)


class RequestService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_requests(self, status: RequestStatus | None = None) -> list[ServiceRequestResponse]:
        stmt = select(ServiceRequest)
        if status is not None:
            stmt = stmt.where(ServiceRequest.status == status)
        result = await self.db.execute(stmt.order_by(ServiceRequest.created_at.desc()))
        return [ServiceRequestResponse.model_validate(r) for r in result.scalars().all()]

    async def stats(self) -> ServiceRequestStats:
        """Count of requests overall and per status."""
        result = await self.db.execute(
            select(ServiceRequest.status, func.count()).group_by(ServiceRequest.status)
        )
        counts = {RequestStatus(s).value: n for s, n in result.all()}
        return ServiceRequestStats(
            total=sum(counts.values()),
            pending=counts.get("pending", 0),
            in_progress=counts.get("in_progress", 0),
            done=counts.get("done", 0),
        )

    async def get_request(self, request_id: UUID) -> ServiceRequestResponse:
        return ServiceRequestResponse.model_validate(await self._get(request_id))

    async def create_request(self, data: ServiceRequestCreate, image: str = "") -> ServiceRequestResponse:
        """Public submission; always starts as ``pending``."""
        record = ServiceRequest(**data.model_dump(), image=image, status=RequestStatus.pending)
        self.db.add(record)
        await self.db.flush()
        await self.db.refresh(record)
        logger.info("Service request %s received for %s", record.id, record.service_type)
        return ServiceRequestResponse.model_validate(record)

    async def update_status(
        self, request_id: UUID, data: ServiceRequestStatusUpdate
    ) -> ServiceRequestResponse:
        record = await self._get(request_id)
        if data.status is not None:
            record.status = data.status
        await self.db.flush()
        await self.db.refresh(record)
        return ServiceRequestResponse.model_validate(record)

    async def delete_request(self, request_id: UUID) -> MessageResponse:
        record = await self._get(request_id)
        await self.db.delete(record)
        await self.db.flush()
        return MessageResponse(message="Request deleted")

    async def _get(self, request_id: UUID) -> ServiceRequest:
        record = await self.db.get(ServiceRequest, request_id)
        if record is None:
            raise not_found("Request")
        return record
