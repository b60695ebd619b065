import random

from app.schemas.credit import (
    BusinessVerification,
    DomainInfo,
    ScoringApplication,
    VerificationResult,
)
from app.services.scoring import (
    BASE_SCORE,
    DEFAULT_RULES,
    MAX_SCORE,
    MIN_SCORE,
    calculate_credit_score,
    clamp_score,
)


def _verification(business_valid=True, domain_valid=True, indicators=None) -> VerificationResult:
    return VerificationResult(
        business=BusinessVerification(is_valid=business_valid),
        domain=DomainInfo(is_valid=domain_valid, suspicious_indicators=indicators or []),
    )


def _application(**overrides) -> ScoringApplication:
    values = {
        "legal_entity_name": "Acme Industrial Supply",
        "buyer_name_email": "jane@acmesupply.com",
        "duns_number": "123456789",
        "trade1_name": "Gulf Coast Metals",
        "trade2_name": "Lone Star Fasteners",
        "trade3_name": None,
        "bill_to_address": "100 Industrial Blvd",
        "ship_to_address": "200 Harbor Rd",
    }
    values.update(overrides)
    return ScoringApplication(**values)


def test_breakdown_sums_to_unclamped_score():
    result = calculate_credit_score(_application(), _verification())
    # 600 + 60 + 30 + 50 + 40 + 40 + 10
    assert result.breakdown == {
        "Business Registration": 60,
        "Domain Verification": 30,
        "Application Completeness": 50,
        "DUNS Verification": 40,
        "Trade References": 40,
        "Address Consistency": 10,
    }
    assert result.score == BASE_SCORE + sum(result.breakdown.values()) == 830
    assert len(result.reasoning) == len(result.breakdown)


def test_score_clamped_to_max():
    result = calculate_credit_score(
        _application(trade3_name="Bayou Packaging", ship_to_address="100 Industrial Blvd"),
        _verification(),
    )
    assert result.score == MAX_SCORE


def test_placeholder_company_floor():
    result = calculate_credit_score(
        _application(
            legal_entity_name="Test Company",
            buyer_name_email="a@test.com",
            duns_number=None,
            trade1_name=None,
            trade2_name=None,
        ),
        _verification(business_valid=False, domain_valid=False, indicators=["Suspicious domain pattern detected"]),
    )
    assert result.breakdown["Test Company Detection"] == -300
    assert result.breakdown["Business Registration"] == -200
    assert result.breakdown["Domain Verification"] == -100
    assert result.score == MIN_SCORE


def test_domain_with_indicators_is_penalised_even_when_valid():
    result = calculate_credit_score(
        _application(), _verification(indicators=["Personal email domain (not business)"])
    )
    assert result.breakdown["Domain Verification"] == -100


def test_duns_is_worth_110_points():
    with_duns = calculate_credit_score(_application(trade1_name=None, trade2_name=None), _verification())
    without = calculate_credit_score(
        _application(duns_number=None, trade1_name=None, trade2_name=None), _verification()
    )
    assert with_duns.score - without.score == 110


def test_missing_signals_count_against_the_applicant():
    result = calculate_credit_score(ScoringApplication(), VerificationResult())
    assert result.breakdown["Business Registration"] == -200
    assert result.breakdown["Domain Verification"] == -100
    assert result.breakdown["Trade References"] == 0
    # None == None counts as a matching address
    assert result.breakdown["Address Consistency"] == 20
    assert MIN_SCORE <= result.score <= MAX_SCORE


def test_rule_order_does_not_change_score():
    application = _application(legal_entity_name="Demo Traders")
    verification = _verification(business_valid=False)
    expected = calculate_credit_score(application, verification)

    rules = list(DEFAULT_RULES)
    rng = random.Random(7)
    for _ in range(5):
        rng.shuffle(rules)
        result = calculate_credit_score(application, verification, rules=rules)
        assert result.score == expected.score
        assert result.breakdown == expected.breakdown


def test_clamp_score():
    assert clamp_score(-1000) == MIN_SCORE
    assert clamp_score(10_000) == MAX_SCORE
    assert clamp_score(700.4) == 700
