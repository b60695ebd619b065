"""International shipping request router."""

from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.response import DataResponse, ListResponse, ok
from app.db.base import get_db
from app.schemas.shipping import ShippingRequestCreate, ShippingRequestOut
from app.services.shipping import ShippingService

router = APIRouter(prefix="/api/shipping", tags=["Shipping"])


@router.post("", response_model=DataResponse[ShippingRequestOut], status_code=status.HTTP_201_CREATED)
async def submit_shipping_request(
    body: ShippingRequestCreate,
    session: AsyncSession = Depends(get_db),
):
    shipping_request = await ShippingService(session).submit(body)
    return ok(ShippingRequestOut.model_validate(shipping_request))


@router.get(
    "",
    response_model=Union[DataResponse[ShippingRequestOut], ListResponse[ShippingRequestOut]],
)
async def get_shipping_requests(
    request_id: Optional[int] = Query(default=None, alias="id", description="Fetch a single request"),
    session: AsyncSession = Depends(get_db),
):
    """With ?id= return that request (404 if unknown); otherwise all requests, newest first."""
    svc = ShippingService(session)
    if request_id is not None:
        return ok(ShippingRequestOut.model_validate(await svc.get(request_id)))
    items = await svc.list_all()
    return ok([ShippingRequestOut.model_validate(item) for item in items])
