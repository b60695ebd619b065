"""SQLAlchemy ORM model for credit approval decisions."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.mixins import IntegerIdMixin, TimestampMixin


class CreditApproval(Base, IntegerIdMixin, TimestampMixin):
    __tablename__ = "credit_approvals"

    application_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("customer_applications.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    # "APPROVED" | "DENIED" | "PENDING"
    decision: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    approved_amount: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # cents
    approved_terms: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    approver_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    approver_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    customer_notified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
