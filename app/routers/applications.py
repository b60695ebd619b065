"""Credit application intake router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.response import DataResponse, ok
from app.db.base import get_db
from app.schemas.application import ApplicationCreate, ApplicationOut
from app.services.application import ApplicationService

router = APIRouter(prefix="/api/applications", tags=["Applications"])


@router.post("", response_model=DataResponse[ApplicationOut], status_code=status.HTTP_201_CREATED)
async def create_application(
    body: ApplicationCreate,
    session: AsyncSession = Depends(get_db),
):
    """Submit a customer credit application with up to three trade references."""
    application = await ApplicationService(session).create_application(body)
    return ok(ApplicationOut.model_validate(application), "Application received")


@router.get("/{application_id}", response_model=DataResponse[ApplicationOut])
async def get_application(
    application_id: int,
    session: AsyncSession = Depends(get_db),
):
    application = await ApplicationService(session).get_application(application_id)
    return ok(ApplicationOut.model_validate(application))
