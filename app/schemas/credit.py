"""Verification signals, credit score and credit decision schemas.

None of these are persisted: verification and scoring are recomputed on every
analysis request.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from app.schemas.common import CamelModel


# ---------------------------------------------------------------------------
# Verification signals
# ---------------------------------------------------------------------------

class DomainInfo(CamelModel):
    age: Optional[int] = None  # days
    registrar: Optional[str] = None
    is_valid: bool = False
    suspicious_indicators: list[str] = Field(default_factory=list)


class BusinessVerification(CamelModel):
    is_valid: bool = False
    state_registered: Optional[str] = None
    entity_type: Optional[str] = None
    registration_date: Optional[str] = None
    status: Optional[str] = None
    verification_source: str = "Mock Verification"


class PhoneValidation(CamelModel):
    is_valid: bool = False
    type: str = "Invalid"  # Business | Residential/Mobile | Invalid
    location: Optional[str] = None


class AddressValidation(CamelModel):
    is_valid: bool = False
    type: str = "Residential/Unknown"  # Commercial | Residential/Unknown
    risk_factors: list[str] = Field(default_factory=list)


class VerificationResult(CamelModel):
    domain: Optional[DomainInfo] = None
    business: Optional[BusinessVerification] = None
    phone: Optional[PhoneValidation] = None
    address: Optional[AddressValidation] = None


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

class ScoringApplication(CamelModel):
    """The application fields the scoring rules look at. All optional."""

    legal_entity_name: Optional[str] = None
    buyer_name_email: Optional[str] = None
    duns_number: Optional[str] = None
    trade1_name: Optional[str] = None
    trade2_name: Optional[str] = None
    trade3_name: Optional[str] = None
    bill_to_address: Optional[str] = None
    ship_to_address: Optional[str] = None


class ScoreResult(CamelModel):
    score: int
    breakdown: dict[str, int]
    reasoning: list[str]


# ---------------------------------------------------------------------------
# Credit analysis / approval
# ---------------------------------------------------------------------------

Decision = Literal["APPROVE", "CONDITIONAL", "REVIEW", "DECLINE"]
RiskLevel = Literal["LOW", "MEDIUM", "HIGH"]


class CreditAnalysisRequest(CamelModel):
    application_id: int = Field(gt=0)


class ApprovalLinks(CamelModel):
    approve: str
    deny: str


class CreditDecision(CamelModel):
    application_id: int
    decision: Decision
    credit_score: int
    risk_level: RiskLevel
    credit_limit: int  # dollars
    payment_terms: str
    reasoning: str
    conditions: list[str] = Field(default_factory=list)
    additional_notes: str = ""
    verification_summary: str
    score_breakdown: dict[str, int]
    score_reasoning: list[str] = Field(default_factory=list)
    verification: VerificationResult
    narrative_source: Literal["ai", "system"] = "system"
    approval_links: Optional[ApprovalLinks] = None
    analyzed_at: datetime


class CreditApprovalOut(CamelModel):
    id: int
    application_id: int
    decision: str
    approved_amount: Optional[int] = None
    approved_terms: Optional[str] = None
    approver_email: Optional[str] = None
    customer_notified: bool
    created_at: datetime
    updated_at: datetime
