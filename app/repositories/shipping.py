"""International shipping request repository."""

from app.domain.shipping import InternationalShippingRequest
from app.repositories.base import BaseRepository


class ShippingRepository(BaseRepository[InternationalShippingRequest]):
    model = InternationalShippingRequest
    entity_name = "Shipping request"
