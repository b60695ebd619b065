import asyncio
from types import SimpleNamespace
from urllib.parse import parse_qsl, urlencode, urlsplit

import httpx
import pytest
from openai import APIConnectionError

from app.core.config import settings
from app.core.exceptions import CreditAnalysisError
from app.core.security import UrlSigner, approval_link_payload
from app.services.credit_analysis import CreditAnalysisService, decide
from app.services.openai_service import CREDIT_NARRATIVE_PROMPT, CreditNarrativeService


def _link_path(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.path}?{parts.query}"


def _analyze(client, application_id: int):
    return client.post("/api/credit-analysis", json={"applicationId": application_id})


# ---------------------------------------------------------------------------
# Decision tiers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "score, decision, limit, terms, risk",
    [
        (850, "APPROVE", 50_000, "Net 30", "LOW"),
        (700, "APPROVE", 50_000, "Net 30", "LOW"),
        (699, "CONDITIONAL", 25_000, "Net 15", "MEDIUM"),
        (600, "CONDITIONAL", 25_000, "Net 15", "MEDIUM"),
        (599, "REVIEW", 10_000, "COD or Prepayment", "HIGH"),
        (400, "REVIEW", 10_000, "COD or Prepayment", "HIGH"),
        (399, "DECLINE", 0, "Cash in Advance Only", "HIGH"),
        (150, "DECLINE", 0, "Cash in Advance Only", "HIGH"),
    ],
)
def test_decision_tiers(score, decision, limit, terms, risk):
    tier = decide(score)
    assert (tier.decision, tier.credit_limit, tier.payment_terms, tier.risk_level) == (
        decision, limit, terms, risk,
    )
    assert bool(tier.conditions) == (decision != "APPROVE")


# ---------------------------------------------------------------------------
# POST /api/credit-analysis
# ---------------------------------------------------------------------------

def test_strong_application_is_approved(client, create_application):
    application = create_application()

    response = _analyze(client, application["id"])

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["decision"] == "APPROVE"
    assert data["creditScore"] == 850
    assert data["creditLimit"] == 50_000
    assert data["paymentTerms"] == "Net 30"
    assert data["riskLevel"] == "LOW"
    assert data["conditions"] == []
    assert data["narrativeSource"] == "system"
    assert data["verification"]["business"]["status"] == "ACTIVE"
    assert data["verification"]["phone"]["location"] == "Houston, TX"
    assert data["scoreBreakdown"]["Trade References"] == 60
    assert data["verificationSummary"] == "Business: ACTIVE, Domain: Valid, Phone: Business"


def test_placeholder_application_is_declined(client, create_application):
    application = create_application(
        legalEntityName="Test Company",
        buyerNameEmail="someone@test.com",
        dunsNumber=None,
        tradeReferences=[],
    )

    data = _analyze(client, application["id"]).json()["data"]

    assert data["decision"] == "DECLINE"
    assert data["creditScore"] == 150
    assert data["creditLimit"] == 0
    assert data["scoreBreakdown"]["Test Company Detection"] == -300
    assert data["conditions"] == ["Credit profile does not meet minimum requirements"]


def test_unknown_application(client):
    response = _analyze(client, 31337)
    assert response.status_code == 404


def test_invalid_application_id(client):
    response = client.post("/api/credit-analysis", json={"applicationId": -1})
    assert response.status_code == 400


def test_approval_links_are_signed(client, create_application):
    application = create_application()
    links = _analyze(client, application["id"]).json()["data"]["approvalLinks"]

    signer = UrlSigner(settings.signature_secret)
    for choice, url in (("APPROVE", links["approve"]), ("DENY", links["deny"])):
        assert url.startswith(f"{settings.public_base_url}/api/credit-approval?")
        query = dict(pair.split("=", 1) for pair in urlsplit(url).query.split("&"))
        assert query["id"] == str(application["id"])
        assert query["decision"] == choice
        payload = approval_link_payload(query["id"], query["decision"], query["token"])
        assert signer.verify(payload, query["sig"])


# ---------------------------------------------------------------------------
# Narrative (service level)
# ---------------------------------------------------------------------------

class _StubNarrative:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.evidence = None

    async def write_narrative(self, evidence):
        self.evidence = evidence
        if self.error:
            raise self.error
        return self.result


def _analyze_in_service(session_factory, application_id, narrative):
    async def _run():
        async with session_factory() as session:
            svc = CreditAnalysisService(
                session, UrlSigner("k"), narrative_factory=lambda: narrative,
            )
            return await svc.analyze(application_id)

    return asyncio.run(_run())


def test_ai_narrative_explains_but_never_changes_decision(
    monkeypatch, create_application, session_factory
):
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    application = create_application()
    narrative = _StubNarrative(result={
        "executiveSummary": "Strong, verified supplier.",
        "keyStrengths": ["Active registration", "DUNS on file"],
        "criticalConcerns": [],
        "verificationSummary": "All checks passed.",
        "riskAssessment": "Low risk.",
        "recommendedActions": ["Open account"],
        "decision": "DECLINE",
    })

    decision = _analyze_in_service(session_factory, application["id"], narrative)

    assert decision.narrative_source == "ai"
    assert decision.decision == "APPROVE"
    assert decision.reasoning == "Strong, verified supplier."
    assert decision.verification_summary == "All checks passed."
    assert "Key Strengths: Active registration, DUNS on file" in decision.additional_notes
    assert narrative.evidence["finalDecision"]["decision"] == "APPROVE"


def test_ai_failure_falls_back_to_system_summary(monkeypatch, create_application, session_factory):
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    application = create_application()
    narrative = _StubNarrative(error=CreditAnalysisError("OpenAI service error: timeout"))

    decision = _analyze_in_service(session_factory, application["id"], narrative)

    assert decision.narrative_source == "system"
    assert decision.reasoning.startswith("Automated credit analysis completed. Decision: APPROVE")


class _FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.request = None

    async def create(self, **kwargs):
        self.request = kwargs
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _fake_client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def test_narrative_service_keeps_only_narrative_keys():
    completions = _FakeCompletions(
        content='{"executiveSummary": "Solid.", "keyStrengths": ["DUNS"], "decision": "DECLINE"}'
    )
    service = CreditNarrativeService(client=_fake_client(completions))

    narrative = asyncio.run(service.write_narrative({"finalDecision": {"decision": "APPROVE"}}))

    assert narrative == {"executiveSummary": "Solid.", "keyStrengths": ["DUNS"]}
    assert completions.request["response_format"] == {"type": "json_object"}
    assert completions.request["messages"][0]["content"] == CREDIT_NARRATIVE_PROMPT


@pytest.mark.parametrize(
    "completions",
    [
        _FakeCompletions(content=None),
        _FakeCompletions(content="not json"),
        _FakeCompletions(content="[1, 2]"),
        _FakeCompletions(error=APIConnectionError(request=httpx.Request("POST", "https://api.openai.com"))),
    ],
)
def test_narrative_service_failures_raise_credit_analysis_error(completions):
    service = CreditNarrativeService(client=_fake_client(completions))
    with pytest.raises(CreditAnalysisError):
        asyncio.run(service.write_narrative({}))


def test_narrative_service_requires_api_key():
    with pytest.raises(CreditAnalysisError):
        CreditNarrativeService()


# ---------------------------------------------------------------------------
# GET /api/credit-approval
# ---------------------------------------------------------------------------

ADMIN = {"Authorization": "Bearer admin"}


def test_approval_requires_credentials(client, create_application):
    application = create_application()
    response = client.get(
        "/api/credit-approval", params={"id": application["id"], "decision": "APPROVE"}
    )
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"].startswith("Bearer")


def test_signed_link_records_decision_once(client, create_application):
    application = create_application()
    links = _analyze(client, application["id"]).json()["data"]["approvalLinks"]

    response = client.get(_link_path(links["approve"]))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["decision"] == "APPROVED"
    assert data["approvedAmount"] == settings.default_approved_amount_cents
    assert data["approvedTerms"] == settings.default_approved_terms
    assert data["customerNotified"] is False

    again = client.get(_link_path(links["deny"]))
    assert again.status_code == 409
    assert again.json()["details"]["decision"] == "APPROVED"


def test_tampered_link_is_rejected(client, create_application):
    application = create_application()
    links = _analyze(client, application["id"]).json()["data"]["approvalLinks"]
    tampered = _link_path(links["approve"]).replace("sig=", "sig=x")

    assert client.get(tampered).status_code == 401


def _with_params(url: str, **changes) -> str:
    parts = urlsplit(url)
    query = dict(parse_qsl(parts.query))
    query.update({key: str(value) for key, value in changes.items()})
    return f"{parts.path}?{urlencode(query)}"


def test_link_cannot_be_retargeted(client, create_application):
    first = create_application()
    second = create_application(legalEntityName="Second Supplier LLC")
    deny_first = _analyze(client, first["id"]).json()["data"]["approvalLinks"]["deny"]

    for changes in (
        {"id": second["id"]},
        {"decision": "APPROVE"},
        {"id": second["id"], "decision": "APPROVE", "amount": 999_999_999},
        {"amount": 999_999_999},
    ):
        response = client.get(_with_params(deny_first, **changes))
        assert response.status_code == 401, changes

    # Nothing was recorded by the rejected attempts
    assert client.get(_link_path(deny_first)).json()["data"]["decision"] == "DENIED"


def test_link_signature_is_not_overridden_by_admin_header(client, create_application):
    application = create_application()
    approve = _analyze(client, application["id"]).json()["data"]["approvalLinks"]["approve"]
    tampered = _with_params(approve, amount=999_999_999)

    assert client.get(tampered, headers=ADMIN).status_code == 401


def test_admin_can_deny(client, create_application):
    application = create_application()
    response = client.get(
        "/api/credit-approval",
        params={"id": application["id"], "decision": "deny"},
        headers=ADMIN,
    )
    assert response.status_code == 200
    assert response.json()["data"]["decision"] == "DENIED"
    assert response.json()["data"]["approvedAmount"] is None


def test_admin_custom_amount(client, create_application):
    application = create_application()
    response = client.get(
        "/api/credit-approval",
        params={"id": application["id"], "decision": "APPROVE", "amount": 250_000},
        headers=ADMIN,
    )
    assert response.json()["data"]["approvedAmount"] == 250_000


def test_invalid_decision(client, create_application):
    application = create_application()
    response = client.get(
        "/api/credit-approval",
        params={"id": application["id"], "decision": "MAYBE"},
        headers=ADMIN,
    )
    assert response.status_code == 400


def test_decision_for_unknown_application(client):
    response = client.get(
        "/api/credit-approval", params={"id": 999, "decision": "APPROVE"}, headers=ADMIN
    )
    assert response.status_code == 404
