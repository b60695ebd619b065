"""International shipping request service."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.domain.shipping import InternationalShippingRequest
from app.repositories.shipping import ShippingRepository
from app.schemas.shipping import ShippingRequestCreate

logger = logging.getLogger(__name__)

class ShippingService:
    def __init__(self, session: AsyncSession):
        self._repo = ShippingRepository(session)

    async def submit(self, data: ShippingRequestCreate) -> InternationalShippingRequest:
        shipping_request = await self._repo.create(**data.model_dump())
        logger.info(
            "Shipping request #%d submitted for %s (%s)",
            shipping_request.id, data.country, data.shipping_method,
        )
        return shipping_request

    async def get(self, request_id: int) -> InternationalShippingRequest:
        shipping_request = await self._repo.get_by_id(request_id)
        if not shipping_request:
            raise NotFoundError("Shipping request", request_id)
        return shipping_request

    async def list_all(self) -> list[InternationalShippingRequest]:
        """Every request, newest first."""
        return await self._repo.list(order_by="created_at", order="desc")
