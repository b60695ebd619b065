"""SQLAlchemy ORM models for customer credit applications and their trade references.

An application is written once per applicant submission. Scoring, signatures,
uploads and approval decisions all read it by id; nothing in those paths
mutates it.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.domain.mixins import IntegerIdMixin, TimestampMixin


class CustomerApplication(Base, IntegerIdMixin, TimestampMixin):
    __tablename__ = "customer_applications"

    legal_entity_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    dba: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    tax_ein: Mapped[str] = mapped_column(String(20), nullable=False)
    duns_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    phone_no: Mapped[str] = mapped_column(String(50), nullable=False)

    bill_to_address: Mapped[str] = mapped_column(String(255), nullable=False)
    bill_to_city_state_zip: Mapped[str] = mapped_column(String(255), nullable=False)
    ship_to_address: Mapped[str] = mapped_column(String(255), nullable=False)
    ship_to_city_state_zip: Mapped[str] = mapped_column(String(255), nullable=False)

    buyer_name_email: Mapped[str] = mapped_column(String(255), nullable=False)
    accounts_payable_name_email: Mapped[str] = mapped_column(String(255), nullable=False)
    want_invoices_emailed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    invoice_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    terms_agreed: Mapped[bool] = mapped_column(Boolean, nullable=False)

    trade_references: Mapped[List["TradeReference"]] = relationship(
        back_populates="application",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="TradeReference.id",
    )


class TradeReference(Base, IntegerIdMixin, TimestampMixin):
    """Up to three supplier references given on the application form."""

    __tablename__ = "trade_references"

    application_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("customer_applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    fax_no: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city_state_zip: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    attn: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    application: Mapped["CustomerApplication"] = relationship(back_populates="trade_references")
