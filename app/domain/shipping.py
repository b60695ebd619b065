"""SQLAlchemy ORM model for international shipping requests."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.mixins import IntegerIdMixin, TimestampMixin


class InternationalShippingRequest(Base, IntegerIdMixin, TimestampMixin):
    __tablename__ = "international_shipping_requests"

    # Contact
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    company: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Destination
    shipping_address: Mapped[str] = mapped_column(String(255), nullable=False)
    address_line2: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state_province: Mapped[str] = mapped_column(String(100), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)

    # Shipment
    product_description: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[str] = mapped_column(String(100), nullable=False)
    estimated_value: Mapped[str] = mapped_column(String(100), nullable=False)
    order_request: Mapped[str] = mapped_column(Text, nullable=False)
    special_instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    shipping_method: Mapped[str] = mapped_column(String(100), nullable=False)
    custom_shipping_method: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    urgency: Mapped[str] = mapped_column(String(50), nullable=False)
    tracking_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    insurance_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Customs
    purpose_of_shipment: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    custom_purpose: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    hs_code: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    country_of_origin: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # "pending" | "quoted" | "shipped" | "cancelled"
    status: Mapped[str] = mapped_column(String(50), default="pending", nullable=False, index=True)
