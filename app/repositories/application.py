"""Customer application repository."""

from __future__ import annotations

from typing import Any

from app.domain.application import CustomerApplication, TradeReference
from app.repositories.base import BaseRepository


class ApplicationRepository(BaseRepository[CustomerApplication]):
    model = CustomerApplication
    entity_name = "Application"

    async def create_with_references(
        self, references: list[dict[str, Any]], **fields: Any
    ) -> CustomerApplication:
        """Insert the application and its trade references in one flush."""
        application = await self.create(
            trade_references=[TradeReference(**ref) for ref in references],
            **fields,
        )
        return application
