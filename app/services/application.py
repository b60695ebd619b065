"""Customer application service: intake and lookup."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.domain.application import CustomerApplication
from app.repositories.application import ApplicationRepository
from app.schemas.application import ApplicationCreate

logger = logging.getLogger(__name__)

class ApplicationService:
    def __init__(self, session: AsyncSession):
        self._repo = ApplicationRepository(session)

    async def get_application(self, application_id: int) -> CustomerApplication:
        application = await self._repo.get_by_id(application_id)
        if not application:
            raise NotFoundError("Application", application_id)
        return application

    async def create_application(self, data: ApplicationCreate) -> CustomerApplication:
        fields = data.model_dump(exclude={"trade_references"})
        # Blank reference rows on the form are dropped rather than stored empty
        references = [
            ref.model_dump() for ref in data.trade_references if ref.name and ref.name.strip()
        ]
        application = await self._repo.create_with_references(references, **fields)
        logger.info(
            "Application #%d received for %s (%d trade references)",
            application.id, application.legal_entity_name, len(references),
        )
        return application
