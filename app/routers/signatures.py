"""Digital signature router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.response import DataResponse, ok
from app.db.base import get_db
from app.middleware.security import client_address
from app.schemas.signature import SignatureCreate, SignatureOut
from app.services.signature import SignatureService

router = APIRouter(prefix="/api/signatures", tags=["Signatures"])


@router.post("", response_model=DataResponse[SignatureOut], status_code=status.HTTP_201_CREATED)
async def create_signature(
    body: SignatureCreate,
    request: Request,
    session: AsyncSession = Depends(get_db),
):
    """Record the applicant's signature. 404 for unknown applications, 409 if already signed."""
    signature = await SignatureService(session).create_signature(
        body,
        ip_address=client_address(request),
        user_agent=request.headers.get("user-agent"),
    )
    return ok(SignatureOut.model_validate(signature), "Digital signature recorded successfully")


@router.get("", response_model=DataResponse[SignatureOut])
async def get_signature(
    application_id: int = Query(alias="applicationId", gt=0),
    session: AsyncSession = Depends(get_db),
):
    signature = await SignatureService(session).get_for_application(application_id)
    return ok(SignatureOut.model_validate(signature))
