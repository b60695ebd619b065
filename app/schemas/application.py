"""Customer application Pydantic schemas (request DTOs and response models)."""


from datetime import datetime

from pydantic import Field, field_validator

from app.schemas.common import CamelModel

MAX_TRADE_REFERENCES = 3

class TradeReferenceIn(CamelModel):
    name: str | None = None
    fax_no: str | None = None
    address: str | None = None
    email: str | None = None
    city_state_zip: str | None = None
    attn: str | None = None

class ApplicationCreate(CamelModel):
    legal_entity_name: str = Field(min_length=1)
    dba: str | None = None
    tax_ein: str = Field(alias="taxEIN", pattern=r"^(\d{9}|\d{2}-\d{7})$")
    duns_number: str | None = None
    phone_no: str = Field(min_length=1)
    bill_to_address: str = Field(min_length=1)
    bill_to_city_state_zip: str = Field(min_length=1)
    ship_to_address: str = Field(min_length=1)
    ship_to_city_state_zip: str = Field(min_length=1)
    buyer_name_email: str = Field(min_length=1)
    accounts_payable_name_email: str = Field(min_length=1)
    want_invoices_emailed: bool = False
    invoice_email: str | None = None
    trade_references: list[TradeReferenceIn] = Field(
        default_factory=list, max_length=MAX_TRADE_REFERENCES,
    )
    terms_agreed: bool

    @field_validator("terms_agreed")
    @classmethod
    def _must_agree(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must agree to the terms and conditions")
        return value

class TradeReferenceOut(CamelModel):
    id: int
    name: str | None = None
    fax_no: str | None = None
    address: str | None = None
    email: str | None = None
    city_state_zip: str | None = None
    attn: str | None = None

class ApplicationOut(CamelModel):
    id: int
    legal_entity_name: str
    dba: str | None = None
    tax_ein: str = Field(alias="taxEIN")
    duns_number: str | None = None
    phone_no: str
    bill_to_address: str
    bill_to_city_state_zip: str
    ship_to_address: str
    ship_to_city_state_zip: str
    buyer_name_email: str
    accounts_payable_name_email: str
    want_invoices_emailed: bool
    invoice_email: str | None = None
    terms_agreed: bool
    trade_references: list[TradeReferenceOut] = []
    created_at: datetime
    updated_at: datetime
