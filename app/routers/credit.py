"""Credit analysis and approval endpoints.

``/api/credit-approval`` sits behind the edge auth gate: callers either carry
admin credentials or follow a signed link produced by the analysis endpoint.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.response import DataResponse, ok
from app.core.security import UrlSigner
from app.db.base import get_db
from app.schemas.credit import CreditAnalysisRequest, CreditApprovalOut, CreditDecision
from app.services.credit_analysis import CreditAnalysisService
from app.services.credit_approval import CreditApprovalService

router = APIRouter(prefix="/api", tags=["Credit"])


def get_url_signer(request: Request) -> UrlSigner:
    return request.app.state.url_signer


@router.post("/credit-analysis", response_model=DataResponse[CreditDecision])
async def analyze_application(
    body: CreditAnalysisRequest,
    session: AsyncSession = Depends(get_db),
    signer: UrlSigner = Depends(get_url_signer),
):
    """Verify and score a stored application and return the credit decision."""
    decision = await CreditAnalysisService(session, signer).analyze(body.application_id)
    return ok(decision)


@router.get("/credit-approval", response_model=DataResponse[CreditApprovalOut])
async def record_credit_decision(
    application_id: int = Query(alias="id", gt=0),
    decision: str = Query(description="APPROVE or DENY"),
    amount: Optional[int] = Query(default=None, ge=0, description="Approved amount in cents"),
    session: AsyncSession = Depends(get_db),
):
    approval = await CreditApprovalService(session).record_decision(
        application_id, decision, amount_cents=amount,
    )
    return ok(CreditApprovalOut.model_validate(approval), f"Application {approval.decision}")
