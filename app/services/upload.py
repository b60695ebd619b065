"""Vendor form upload service: object key, transfer, then metadata row.

The metadata row is only written after the object store accepted the bytes,
so a failed transfer never leaves a dangling ``vendor_forms`` record.
"""

import logging
import secrets
import string
import time

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.domain.vendor_form import VendorForm
from app.repositories.application import ApplicationRepository
from app.repositories.vendor_form import VendorFormRepository
from app.services.storage import ObjectStorage

logger = logging.getLogger(__name__)

KEY_PREFIX = "vendor-forms"
_BASE36 = string.digits + string.ascii_lowercase


def _base36(value: int) -> str:
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits)) or "0"


def object_key(filename: str, now_ms: int | None = None) -> str:
    """``vendor-forms/{epoch_ms}-{random base36}.{ext}``."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{KEY_PREFIX}/{stamp}-{_base36(secrets.randbits(64))}.{ext}"


class UploadService:
    def __init__(self, session: AsyncSession, storage: ObjectStorage):
        self._repo = VendorFormRepository(session)
        self._applications = ApplicationRepository(session)
        self._storage = storage

    async def upload_vendor_form(
        self,
        *,
        filename: str,
        content: bytes,
        content_type: str,
        application_id: int | None = None,
    ) -> VendorForm:
        if application_id is not None and not await self._applications.exists(application_id):
            raise NotFoundError("Application", application_id)

        key = object_key(filename)
        file_url = await self._storage.put_object(key, content, content_type)

        vendor_form = await self._repo.create(
            application_id=application_id,
            file_name=filename,
            file_url=file_url,
            file_type=content_type,
            file_size=len(content),
        )
        logger.info("Vendor form #%d stored at %s", vendor_form.id, key)
        return vendor_form
