"""International shipping request Pydantic schemas."""


from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel

class ShippingRequestCreate(CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    company: str | None = None
    shipping_address: str = Field(min_length=1)
    address_line2: str | None = None
    city: str = Field(min_length=1)
    state_province: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    country: str = Field(min_length=1)
    product_description: str = Field(min_length=1)
    quantity: str = Field(min_length=1)
    estimated_value: str = Field(min_length=1)
    order_request: str = Field(min_length=1)
    special_instructions: str | None = None
    shipping_method: str = Field(min_length=1)
    custom_shipping_method: str | None = None
    urgency: str = Field(min_length=1)
    tracking_required: bool = False
    insurance_required: bool = False
    purpose_of_shipment: str | None = None
    custom_purpose: str | None = None
    hs_code: str | None = None
    country_of_origin: str | None = None

class ShippingRequestOut(ShippingRequestCreate):
    id: int
    status: str
    created_at: datetime
    updated_at: datetime
