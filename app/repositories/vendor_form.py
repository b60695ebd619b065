"""Vendor form (uploaded file metadata) repository."""

from app.domain.vendor_form import VendorForm
from app.repositories.base import BaseRepository


class VendorFormRepository(BaseRepository[VendorForm]):
    model = VendorForm
    entity_name = "Vendor form"
