"""Digital signature repository."""

from sqlalchemy import select

from app.domain.signature import DigitalSignature
from app.repositories.base import BaseRepository


class SignatureRepository(BaseRepository[DigitalSignature]):
    model = DigitalSignature
    entity_name = "Signature"

    async def get_by_application(self, application_id: int) -> DigitalSignature | None:
        result = await self._session.execute(
            select(DigitalSignature).where(DigitalSignature.application_id == application_id)
        )
        return result.scalars().first()
