"""Digital signature Pydantic schemas."""


from datetime import datetime

from pydantic import Field, field_validator

from app.schemas.common import CamelModel

_ALLOWED_URL_PREFIXES = ("http", "blob:", "data:")

class SignatureCreate(CamelModel):
    application_id: int = Field(gt=0)
    signer_name: str = Field(min_length=1, max_length=255)
    signer_email: str = Field(min_length=3, max_length=255, pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
    signature_data_url: str = Field(min_length=1)
    signed_at: datetime

    @field_validator("signature_data_url")
    @classmethod
    def _valid_payload_url(cls, value: str) -> str:
        if not value.startswith(_ALLOWED_URL_PREFIXES):
            raise ValueError("Signature must be a valid URL, blob URL, or data URL")
        return value

class SignatureOut(CamelModel):
    id: int
    application_id: int
    signer_name: str
    signer_email: str
    signature_hash: str
    signed_document_url: str
    signed_at: datetime
    created_at: datetime
