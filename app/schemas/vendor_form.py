"""Vendor form upload schemas."""


from datetime import datetime

from app.schemas.common import CamelModel

class VendorFormOut(CamelModel):
    id: int
    application_id: int | None = None
    file_name: str
    file_url: str
    file_type: str
    file_size: int
    uploaded_at: datetime

class UploadResult(CamelModel):
    url: str
    vendor_form: VendorFormOut
