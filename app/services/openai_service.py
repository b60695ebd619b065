"""Credit narrative service: OpenAI writes the explanation, never the decision.

The decision, limit, terms and risk level are fixed by the deterministic tiers
in :mod:`app.services.credit_analysis` before this service is called. The
model only receives those results plus the verification and scoring evidence,
and returns a structured narrative.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from openai import AsyncOpenAI, OpenAIError

from app.core.config import settings
from app.core.exceptions import CreditAnalysisError

logger = logging.getLogger(__name__)

# ── System prompt ─────────────────────────────────────────────────────────

CREDIT_NARRATIVE_PROMPT = """You are a professional credit analyst writing an executive summary for a B2B credit application.

The credit decision has ALREADY been made by an automated system from verification data and a credit score. Do not change or second-guess it; explain it.

- If the decision is DECLINE, focus on the red flags and verification failures.
- If the decision is APPROVE, emphasise the positive verification results and strong credit indicators.
- If CONDITIONAL or REVIEW, explain what additional steps are needed.

Output ONLY valid JSON matching this schema (no markdown, no commentary):

{
  "executiveSummary": "<3-4 sentence explanation of the decision>",
  "keyStrengths": ["<2-3 positive factors>"],
  "criticalConcerns": ["<2-3 red flags or risk factors>"],
  "verificationSummary": "<summary of every verification check and its result>",
  "riskAssessment": "<why this risk level was assigned>",
  "recommendedActions": ["<2-3 next steps or conditions>"]
}"""


NARRATIVE_KEYS = (
    "executiveSummary",
    "keyStrengths",
    "criticalConcerns",
    "verificationSummary",
    "riskAssessment",
    "recommendedActions",
)


def _parse_narrative(content: str | None) -> Dict[str, Any]:
    """Decode the model's JSON reply, keeping only the narrative keys."""
    if not content:
        raise CreditAnalysisError("Empty response from OpenAI")
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise CreditAnalysisError(f"Invalid JSON response: {exc}") from exc
    if not isinstance(payload, dict):
        raise CreditAnalysisError("OpenAI response is not a JSON object")
    return {key: payload[key] for key in NARRATIVE_KEYS if key in payload}


class CreditNarrativeService:
    """Asks OpenAI to explain a credit decision that has already been made."""

    def __init__(self, client: AsyncOpenAI | None = None) -> None:
        if client is None and not settings.ai_enabled:
            raise CreditAnalysisError("OpenAI API key is not configured (OPENAI_API_KEY)")
        self.client = client or AsyncOpenAI(
            api_key=settings.openai_api_key, timeout=settings.openai_timeout,
        )

    async def write_narrative(self, evidence: Dict[str, Any]) -> Dict[str, Any]:
        """Return the narrative for *evidence* (decision, score, verification, application).

        Any of :data:`NARRATIVE_KEYS` may be missing from the result; callers
        default them. Every failure surfaces as ``CreditAnalysisError``.
        """
        user_message = "Credit decision evidence:\n" + json.dumps(evidence, indent=2, default=str)
        logger.info(
            "Requesting credit narrative from %s (%d chars of evidence)",
            settings.openai_model, len(user_message),
        )
        try:
            response = await self.client.chat.completions.create(
                model=settings.openai_model,
                messages=[
                    {"role": "system", "content": CREDIT_NARRATIVE_PROMPT},
                    {"role": "user", "content": user_message},
                ],
                max_completion_tokens=settings.openai_max_tokens,
                response_format={"type": "json_object"},
            )
        except OpenAIError as exc:
            logger.error("OpenAI narrative request failed: %s", exc)
            raise CreditAnalysisError(f"OpenAI service error: {exc}") from exc

        narrative = _parse_narrative(response.choices[0].message.content)
        logger.info("Credit narrative received (%s)", ", ".join(sorted(narrative)) or "empty")
        return narrative


def get_narrative_service() -> CreditNarrativeService:
    """Build the narrative service; raises ``CreditAnalysisError`` without an API key."""
    return CreditNarrativeService()
