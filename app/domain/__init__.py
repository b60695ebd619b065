"""Domain package: all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  application.py      Customer credit applications + trade references
  signature.py        Digital signatures (one per application)
  shipping.py         International shipping requests (standalone)
  vendor_form.py      Uploaded vendor form metadata
  credit_approval.py  Approve/deny decisions recorded from signed links
  mixins.py           Shared IntegerIdMixin, TimestampMixin
"""

from app.domain.application import CustomerApplication, TradeReference
from app.domain.credit_approval import CreditApproval
from app.domain.shipping import InternationalShippingRequest
from app.domain.signature import DigitalSignature
from app.domain.vendor_form import VendorForm

__all__ = [
    "CreditApproval",
    "CustomerApplication",
    "DigitalSignature",
    "InternationalShippingRequest",
    "TradeReference",
    "VendorForm",
]
