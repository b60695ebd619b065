"""Credit approval decision repository."""

from sqlalchemy import select

from app.domain.credit_approval import CreditApproval
from app.repositories.base import BaseRepository


class CreditApprovalRepository(BaseRepository[CreditApproval]):
    model = CreditApproval
    entity_name = "Credit approval"

    async def get_by_application(self, application_id: int) -> CreditApproval | None:
        result = await self._session.execute(
            select(CreditApproval).where(CreditApproval.application_id == application_id)
        )
        return result.scalars().first()
