"""Credit approval service: records approve/deny decisions from signed links.

Customer notification e-mail is outside this service; the row is written with
``customer_notified=False`` for the mailer to pick up.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.domain.credit_approval import CreditApproval
from app.repositories.application import ApplicationRepository
from app.repositories.credit_approval import CreditApprovalRepository

logger = logging.getLogger(__name__)

_DECISIONS = {"APPROVE": "APPROVED", "DENY": "DENIED"}

class CreditApprovalService:
    def __init__(self, session: AsyncSession):
        self._repo = CreditApprovalRepository(session)
        self._applications = ApplicationRepository(session)

    async def record_decision(
        self,
        application_id: int,
        decision: str,
        amount_cents: int | None = None,
    ) -> CreditApproval:
        final = _DECISIONS.get(decision.upper())
        if final is None:
            raise BadRequestError("Invalid decision", details="Decision must be APPROVE or DENY")

        if not await self._applications.exists(application_id):
            raise NotFoundError("Application", application_id)

        existing = await self._repo.get_by_application(application_id)
        if existing and existing.decision != "PENDING":
            raise ConflictError(
                f"Application has already been {existing.decision.lower()}",
                details={"decision": existing.decision, "decidedAt": existing.updated_at.isoformat()},
            )

        approved_amount = None
        if final == "APPROVED":
            approved_amount = amount_cents if amount_cents is not None else settings.default_approved_amount_cents

        values = {
            "decision": final,
            "approved_amount": approved_amount,
            "approved_terms": settings.default_approved_terms,
            "approver_email": settings.approver_email,
            "customer_notified": False,
        }
        if existing:
            approval = await self._repo.update(existing.id, **values)
        else:
            approval = await self._repo.create(application_id=application_id, **values)

        logger.info("Decision recorded: %s for application #%d", final, application_id)
        return approval  # type: ignore[return-value]
