"""Credit analysis: verification, scoring, decision tiers and narrative.

The decision is deterministic: the score picks a tier, the tier fixes the
limit, terms, risk level and conditions. OpenAI (when configured) only writes
the explanation; any failure there falls back to a system-written summary.
"""


import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable
from urllib.parse import urlencode

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import CreditAnalysisError, NotFoundError
from app.core.security import UrlSigner, approval_link_payload, new_link_token
from app.domain.application import CustomerApplication
from app.repositories.application import ApplicationRepository
from app.schemas.credit import (
    ApprovalLinks,
    CreditDecision,
    ScoreResult,
    VerificationResult,
)
from app.services.openai_service import CreditNarrativeService, get_narrative_service
from app.services.scoring import calculate_credit_score, scoring_input
from app.services.verification import run_verification

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Decision tiers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DecisionTier:
    min_score: int
    decision: str
    credit_limit: int
    payment_terms: str
    risk_level: str
    conditions: tuple[str, ...] = field(default_factory=tuple)


DECISION_TIERS: tuple[DecisionTier, ...] = (
    DecisionTier(700, "APPROVE", 50_000, "Net 30", "LOW"),
    DecisionTier(
        600, "CONDITIONAL", 25_000, "Net 15", "MEDIUM",
        ("Provide additional trade references", "Submit recent financial statements"),
    ),
    DecisionTier(
        400, "REVIEW", 10_000, "COD or Prepayment", "HIGH",
        ("Manual underwriting required", "Additional documentation needed"),
    ),
    DecisionTier(
        0, "DECLINE", 0, "Cash in Advance Only", "HIGH",
        ("Credit profile does not meet minimum requirements",),
    ),
)


def decide(score: int) -> DecisionTier:
    for tier in DECISION_TIERS:
        if score >= tier.min_score:
            return tier
    return DECISION_TIERS[-1]

# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------

def _verification_summary(verification: VerificationResult) -> str:
    return (
        f"Business: {verification.business.status}, "
        f"Domain: {'Valid' if verification.domain.is_valid else 'Issues'}, "
        f"Phone: {verification.phone.type}"
    )


def _breakdown_line(score: ScoreResult) -> str:
    return ", ".join(f"{factor}: {points}" for factor, points in score.breakdown.items())


def _system_notes(verification: VerificationResult, score: ScoreResult) -> str:
    return (
        f"Verification Summary: Business registration "
        f"{'valid' if verification.business.is_valid else 'invalid'}, "
        f"Domain {'clean' if verification.domain.is_valid else 'flagged'}.\n\n"
        f"Score Breakdown: {_breakdown_line(score)}"
    )


def _system_reasoning(
    tier: DecisionTier, verification: VerificationResult, score: ScoreResult
) -> str:
    return (
        f"Automated credit analysis completed. Decision: {tier.decision} based on "
        f"credit score of {score.score}/850. Business verification: "
        f"{'Valid' if verification.business.is_valid else 'Failed'}. Domain analysis: "
        f"{'Clean' if verification.domain.is_valid else 'Issues detected'}."
    )


def _ai_notes(narrative: dict[str, Any]) -> str:
    return "\n\n".join([
        f"Risk Assessment: {narrative.get('riskAssessment') or 'Standard risk evaluation'}",
        f"Key Strengths: {', '.join(narrative.get('keyStrengths') or [])}",
        f"Critical Concerns: {', '.join(narrative.get('criticalConcerns') or [])}",
        f"Recommended Actions: {', '.join(narrative.get('recommendedActions') or [])}",
    ])

# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class CreditAnalysisService:
    def __init__(
        self,
        session: AsyncSession,
        signer: UrlSigner,
        rng: random.Random | None = None,
        narrative_factory: Callable[[], CreditNarrativeService] = get_narrative_service,
    ):
        self._applications = ApplicationRepository(session)
        self._signer = signer
        self._rng = rng
        self._narrative_factory = narrative_factory

    async def analyze(self, application_id: int) -> CreditDecision:
        application = await self._applications.get_by_id(application_id)
        if not application:
            raise NotFoundError("Application", application_id)

        logger.info("Starting credit analysis for application #%d", application_id)
        verification = run_verification(application, rng=self._rng)
        score = calculate_credit_score(scoring_input(application), verification)
        tier = decide(score.score)
        logger.info(
            "Application #%d scored %d -> %s", application_id, score.score, tier.decision
        )

        decision = CreditDecision(
            application_id=application_id,
            decision=tier.decision,
            credit_score=score.score,
            risk_level=tier.risk_level,
            credit_limit=tier.credit_limit,
            payment_terms=tier.payment_terms,
            reasoning=_system_reasoning(tier, verification, score),
            conditions=list(tier.conditions),
            additional_notes=_system_notes(verification, score),
            verification_summary=_verification_summary(verification),
            score_breakdown=score.breakdown,
            score_reasoning=score.reasoning,
            verification=verification,
            approval_links=self._approval_links(application_id),
            analyzed_at=datetime.now(timezone.utc),
        )

        if settings.ai_enabled:
            await self._apply_narrative(decision, application, tier, verification, score)
        else:
            logger.info("OpenAI not configured; using system analysis only")
        return decision

    def _approval_links(self, application_id: int) -> ApprovalLinks:
        base = f"{settings.public_base_url.rstrip('/')}/api/credit-approval"

        def link(choice: str) -> str:
            token = new_link_token()
            query = urlencode({
                "id": application_id,
                "decision": choice,
                "token": token,
                "sig": self._signer.sign(approval_link_payload(application_id, choice, token)),
            })
            return f"{base}?{query}"

        return ApprovalLinks(approve=link("APPROVE"), deny=link("DENY"))

    async def _apply_narrative(
        self,
        decision: CreditDecision,
        application: CustomerApplication,
        tier: DecisionTier,
        verification: VerificationResult,
        score: ScoreResult,
    ) -> None:
        evidence = {
            "finalDecision": {
                "decision": tier.decision,
                "creditScore": score.score,
                "creditLimit": tier.credit_limit,
                "paymentTerms": tier.payment_terms,
                "riskLevel": tier.risk_level,
            },
            "verification": verification.model_dump(by_alias=True),
            "scoreBreakdown": score.breakdown,
            "scoringReasoning": score.reasoning,
            "application": {
                "legalEntityName": application.legal_entity_name,
                "dunsNumber": application.duns_number or "Not provided",
                "contact": application.buyer_name_email,
                "tradeReferences": sum(1 for ref in application.trade_references if ref.name),
            },
        }
        try:
            narrative = await self._narrative_factory().write_narrative(evidence)
        except CreditAnalysisError as exc:
            logger.warning(
                "Narrative generation failed for application #%d, keeping system summary: %s",
                decision.application_id, exc.message,
            )
            return

        decision.reasoning = narrative.get("executiveSummary") or "AI analysis completed"
        decision.additional_notes = _ai_notes(narrative)
        decision.verification_summary = (
            narrative.get("verificationSummary") or "Verification checks completed"
        )
        decision.narrative_source = "ai"
