"""Vendor form upload router: multipart file + optional application id."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import AppException, BadRequestError
from app.core.response import DataResponse, ok
from app.db.base import get_db
from app.schemas.vendor_form import UploadResult, VendorFormOut
from app.services.storage import ObjectStorage, get_storage
from app.services.upload import UploadService

router = APIRouter(prefix="/api/upload", tags=["Upload"])


# ---------------------------------------------------------------------------
# Shared file validation
# ---------------------------------------------------------------------------

def _parse_application_id(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise BadRequestError("Valid application ID is required") from exc
    if value <= 0:
        raise BadRequestError("Valid application ID is required")
    return value


async def _read_upload(file: UploadFile) -> bytes:
    contents = await file.read()

    if len(contents) == 0:
        raise BadRequestError("Uploaded file is empty.")

    if len(contents) > settings.max_upload_size_bytes:
        raise AppException(
            f"File size exceeds the {settings.max_upload_size_mb}MB limit.",
            status_code=413,
            code="PAYLOAD_TOO_LARGE",
        )
    return contents


# ---------------------------------------------------------------------------
# POST /api/upload
# ---------------------------------------------------------------------------

@router.post("", response_model=DataResponse[UploadResult], status_code=status.HTTP_201_CREATED)
async def upload_vendor_form(
    file: UploadFile = File(...),
    application_id: Optional[str] = Form(default=None, alias="applicationId"),
    session: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
):
    """Store a vendor form in object storage and record its metadata."""
    app_id = _parse_application_id(application_id)
    contents = await _read_upload(file)

    vendor_form = await UploadService(session, storage).upload_vendor_form(
        filename=file.filename or "upload",
        content=contents,
        content_type=file.content_type or "application/octet-stream",
        application_id=app_id,
    )
    out = VendorFormOut.model_validate(vendor_form)
    return ok(UploadResult(url=out.file_url, vendor_form=out))
