"""SQLAlchemy ORM model for digital signatures (one per application)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.mixins import IntegerIdMixin, TimestampMixin


class DigitalSignature(Base, IntegerIdMixin, TimestampMixin):
    __tablename__ = "digital_signatures"

    # unique=True makes the database the single arbiter of "one signature per application"
    application_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("customer_applications.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    signer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    signer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    signature_data_url: Mapped[str] = mapped_column(Text, nullable=False)

    signature_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    signed_document_url: Mapped[str] = mapped_column(String(500), nullable=False)

    ip_address: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    signed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
