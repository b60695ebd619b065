"""Heuristic credit score: a flat additive rubric over application fields and
verification signals.

Every rule is an independent function returning the contributions it makes.
The engine sums them onto :data:`BASE_SCORE` and clamps the total to
``[MIN_SCORE, MAX_SCORE]``. Because the rules never look at each other's
output, evaluation order only changes the order of the reasoning lines.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import NamedTuple

from app.schemas.credit import ScoreResult, ScoringApplication, VerificationResult
from app.services.verification import contains_placeholder

BASE_SCORE = 600
MIN_SCORE = 150
MAX_SCORE = 850

BUSINESS_VALID_POINTS = 60
BUSINESS_INVALID_POINTS = -200
DOMAIN_VALID_POINTS = 30
DOMAIN_SUSPICIOUS_POINTS = -100
TEST_COMPANY_POINTS = -300
COMPLETENESS_WITH_DUNS = 50
COMPLETENESS_WITHOUT_DUNS = 20
DUNS_PROVIDED_POINTS = 40
DUNS_MISSING_POINTS = -40
TRADE_REFERENCE_POINTS = 20
ADDRESS_MATCH_POINTS = 20
ADDRESS_MISMATCH_POINTS = 10


class Contribution(NamedTuple):
    factor: str
    points: int
    reason: str


Rule = Callable[[ScoringApplication, VerificationResult], Iterable[Contribution]]


def _signed(points: int) -> str:
    return f"+{points}" if points > 0 else str(points)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def business_registration(app: ScoringApplication, verification: VerificationResult):
    business = verification.business
    if business is None or not business.is_valid:
        yield Contribution(
            "Business Registration",
            BUSINESS_INVALID_POINTS,
            f"INVALID BUSINESS REGISTRATION: {BUSINESS_INVALID_POINTS} points - MAJOR RED FLAG",
        )
    else:
        yield Contribution(
            "Business Registration",
            BUSINESS_VALID_POINTS,
            f"Valid business registration: +{BUSINESS_VALID_POINTS} points",
        )


def domain_verification(app: ScoringApplication, verification: VerificationResult):
    domain = verification.domain
    indicators = domain.suspicious_indicators if domain else []
    if domain is None or not domain.is_valid or indicators:
        yield Contribution(
            "Domain Verification",
            DOMAIN_SUSPICIOUS_POINTS,
            f"SUSPICIOUS DOMAIN ({', '.join(indicators)}): {DOMAIN_SUSPICIOUS_POINTS} points",
        )
    else:
        yield Contribution(
            "Domain Verification",
            DOMAIN_VALID_POINTS,
            f"Valid domain: +{DOMAIN_VALID_POINTS} points",
        )


def placeholder_company(app: ScoringApplication, verification: VerificationResult):
    if contains_placeholder(app.legal_entity_name) or contains_placeholder(app.buyer_name_email):
        yield Contribution(
            "Test Company Detection",
            TEST_COMPANY_POINTS,
            f"TEST/FAKE COMPANY DETECTED: {TEST_COMPANY_POINTS} points - AUTOMATIC HIGH RISK",
        )


def duns_number(app: ScoringApplication, verification: VerificationResult):
    has_duns = bool(app.duns_number)
    completeness = COMPLETENESS_WITH_DUNS if has_duns else COMPLETENESS_WITHOUT_DUNS
    duns = DUNS_PROVIDED_POINTS if has_duns else DUNS_MISSING_POINTS
    yield Contribution(
        "Application Completeness",
        completeness,
        f"Application completeness: +{completeness} points",
    )
    yield Contribution(
        "DUNS Verification",
        duns,
        f"DUNS {'provided' if has_duns else 'missing'}: {_signed(duns)} points",
    )


def trade_references(app: ScoringApplication, verification: VerificationResult):
    count = sum(1 for name in (app.trade1_name, app.trade2_name, app.trade3_name) if name)
    points = count * TRADE_REFERENCE_POINTS
    yield Contribution(
        "Trade References",
        points,
        f"Trade references ({count}/3): +{points} points",
    )


def address_consistency(app: ScoringApplication, verification: VerificationResult):
    points = (
        ADDRESS_MATCH_POINTS
        if app.bill_to_address == app.ship_to_address
        else ADDRESS_MISMATCH_POINTS
    )
    yield Contribution(
        "Address Consistency",
        points,
        f"Address consistency: +{points} points",
    )


DEFAULT_RULES: tuple[Rule, ...] = (
    business_registration,
    domain_verification,
    placeholder_company,
    duns_number,
    trade_references,
    address_consistency,
)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def clamp_score(raw: float) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, round(raw)))


def calculate_credit_score(
    application: ScoringApplication,
    verification: VerificationResult,
    rules: Sequence[Rule] = DEFAULT_RULES,
) -> ScoreResult:
    """Apply *rules* to the application and return the clamped score."""
    breakdown: dict[str, int] = {}
    reasoning: list[str] = []
    total = BASE_SCORE

    for rule in rules:
        for contribution in rule(application, verification):
            breakdown[contribution.factor] = contribution.points
            reasoning.append(contribution.reason)
            total += contribution.points

    return ScoreResult(score=clamp_score(total), breakdown=breakdown, reasoning=reasoning)


def scoring_input(application) -> ScoringApplication:
    """Flatten a stored application (with its trade references) for the rules."""
    names = [ref.name for ref in (application.trade_references or [])][:3]
    names += [None] * (3 - len(names))
    return ScoringApplication(
        legal_entity_name=application.legal_entity_name,
        buyer_name_email=application.buyer_name_email,
        duns_number=application.duns_number,
        trade1_name=names[0],
        trade2_name=names[1],
        trade3_name=names[2],
        bill_to_address=application.bill_to_address,
        ship_to_address=application.ship_to_address,
    )
