"""Digital signature service.

One signature per application. Uniqueness is left to the database: the insert
either succeeds or the unique constraint on ``application_id`` turns into a
``ConflictError``, so two concurrent submissions cannot both win.
"""

import hashlib
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ConflictError, NotFoundError
from app.domain.signature import DigitalSignature
from app.repositories.application import ApplicationRepository
from app.repositories.signature import SignatureRepository
from app.schemas.signature import SignatureCreate

logger = logging.getLogger(__name__)


def signature_hash(data: SignatureCreate) -> str:
    """SHA-256 over the fields that identify a signing event."""
    material = "|".join([
        str(data.application_id),
        data.signer_email.lower(),
        data.signed_at.isoformat(),
        data.signature_data_url,
    ])
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


def signed_document_url(digest: str) -> str:
    return f"{settings.signed_document_base_url.rstrip('/')}/{digest}.pdf"


class SignatureService:
    def __init__(self, session: AsyncSession):
        self._repo = SignatureRepository(session)
        self._applications = ApplicationRepository(session)

    async def create_signature(
        self,
        data: SignatureCreate,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> DigitalSignature:
        if not await self._applications.exists(data.application_id):
            raise NotFoundError(
                "Application", data.application_id,
                details="The specified application does not exist",
            )

        digest = signature_hash(data)
        try:
            signature = await self._repo.create(
                application_id=data.application_id,
                signer_name=data.signer_name,
                signer_email=data.signer_email,
                signature_data_url=data.signature_data_url,
                signature_hash=digest,
                signed_document_url=signed_document_url(digest),
                signed_at=data.signed_at,
                ip_address=ip_address,
                user_agent=user_agent,
            )
        except ConflictError as exc:
            raise ConflictError(
                "Signature already exists",
                details="This application has already been signed",
            ) from exc

        logger.info("Application #%d signed by %s", data.application_id, data.signer_email)
        return signature

    async def get_for_application(self, application_id: int) -> DigitalSignature:
        signature = await self._repo.get_by_application(application_id)
        if not signature:
            raise NotFoundError("Signature for application", application_id)
        return signature
