"""Mock third-party verification checks used by credit analysis.

Each check is a pure function over raw strings and never raises: malformed
input produces an explicit invalid / low-confidence result instead. The real
integrations (WHOIS, Secretary of State registries, carrier lookups, address
standardisation) are not wired in; these heuristics stand in for them.

The only non-deterministic piece is the mock domain age. It draws from an
injectable :class:`random.Random` so callers (and tests) can pin it.
"""

from __future__ import annotations

import logging
import random
import re
from typing import Optional

from app.schemas.credit import (
    AddressValidation,
    BusinessVerification,
    DomainInfo,
    PhoneValidation,
    VerificationResult,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Pattern tables
# ---------------------------------------------------------------------------

PLACEHOLDER_WORDS: tuple[str, ...] = ("test", "demo", "example", "fake", "temp")

_PERSONAL_WEBMAIL = re.compile(r"gmail\.com|yahoo\.com|hotmail\.com|outlook\.com", re.I)
_SHORT_RANDOM_DOMAIN = re.compile(r"^[a-z]{1,3}[0-9]+\.", re.I)

SUSPICIOUS_DOMAIN = "Suspicious domain pattern detected"
PERSONAL_DOMAIN = "Personal email domain (not business)"
INVALID_EMAIL = "Invalid email format"

# Mock domain ages (days): 1 to 11 years
DOMAIN_AGE_MIN_DAYS = 365
DOMAIN_AGE_MAX_DAYS = 365 + 3650

BUSINESS_AREA_CODES: frozenset[str] = frozenset(
    {"713", "281", "832", "214", "469", "972", "512", "737", "361"}
)
HOUSTON_AREA_CODES: frozenset[str] = frozenset({"713", "281", "832"})

_PO_BOX = re.compile(r"p\.?o\.?\s*box", re.I)
_RESIDENTIAL_UNIT = re.compile(r"apt|apartment|unit|#\d+", re.I)
COMMERCIAL_KEYWORDS: tuple[str, ...] = (
    "industrial", "suite", "floor", "building", "plaza", "center", "blvd", "ave",
)
MIN_ADDRESS_LENGTH = 10

_default_rng = random.Random()


def contains_placeholder(text: Optional[str]) -> bool:
    """True when *text* contains a placeholder word such as ``test`` or ``demo``."""
    lowered = (text or "").lower()
    return any(word in lowered for word in PLACEHOLDER_WORDS)


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------

def verify_domain(email: Optional[str], rng: Optional[random.Random] = None) -> DomainInfo:
    """Classify the domain of *email* and attach a mock registration age."""
    parts = (email or "").split("@")
    domain = parts[1].strip() if len(parts) > 1 else ""
    if not domain:
        return DomainInfo(
            age=None, registrar=None, is_valid=False,
            suspicious_indicators=[INVALID_EMAIL],
        )

    lowered = domain.lower()
    indicators: list[str] = []
    for word in PLACEHOLDER_WORDS:
        if word in lowered:
            indicators.append(SUSPICIOUS_DOMAIN)
    if _SHORT_RANDOM_DOMAIN.search(domain):
        indicators.append(SUSPICIOUS_DOMAIN)
    if _PERSONAL_WEBMAIL.search(domain):
        indicators.append(PERSONAL_DOMAIN)

    placeholder = contains_placeholder(domain)
    if placeholder:
        age = 1
    else:
        age = (rng or _default_rng).randrange(DOMAIN_AGE_MIN_DAYS, DOMAIN_AGE_MAX_DAYS)

    return DomainInfo(
        age=age,
        registrar="Unknown" if placeholder else "GoDaddy LLC",
        is_valid=not placeholder,
        suspicious_indicators=indicators,
    )


def verify_business(
    company_name: Optional[str],
    ein: Optional[str] = None,
    state: Optional[str] = None,
) -> BusinessVerification:
    """Mock Secretary-of-State lookup; placeholder names are "not found"."""
    if contains_placeholder(company_name):
        return BusinessVerification(
            is_valid=False,
            state_registered=None,
            entity_type=None,
            registration_date=None,
            status="NOT FOUND",
        )

    return BusinessVerification(
        is_valid=True,
        state_registered=state or "TX",
        entity_type="Limited Liability Company",
        registration_date="2018-03-15",
        status="ACTIVE",
    )


def validate_phone_number(phone: Optional[str]) -> PhoneValidation:
    cleaned = re.sub(r"\D", "", phone or "")
    if len(cleaned) not in (10, 11):
        return PhoneValidation(is_valid=False, type="Invalid", location=None)

    area_code = cleaned[1:4] if len(cleaned) == 11 else cleaned[:3]
    return PhoneValidation(
        is_valid=True,
        type="Business" if area_code in BUSINESS_AREA_CODES else "Residential/Mobile",
        location="Houston, TX" if area_code in HOUSTON_AREA_CODES else "Other",
    )


def validate_address(address: Optional[str]) -> AddressValidation:
    text = address or ""
    risk_factors: list[str] = []

    if _PO_BOX.search(text):
        risk_factors.append("PO Box address (no physical location)")
    if _RESIDENTIAL_UNIT.search(text):
        risk_factors.append("Possible residential address")

    lowered = text.lower()
    commercial = any(keyword in lowered for keyword in COMMERCIAL_KEYWORDS)

    return AddressValidation(
        is_valid=len(text) > MIN_ADDRESS_LENGTH,
        type="Commercial" if commercial else "Residential/Unknown",
        risk_factors=risk_factors,
    )


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

def state_from_city_state_zip(city_state_zip: Optional[str]) -> Optional[str]:
    """Pull ``TX`` out of ``"Houston, TX 77002"``; None when the line has no state part."""
    if not city_state_zip or "," not in city_state_zip:
        return None
    tail = city_state_zip.split(",", 1)[1].strip()
    return tail.split()[0] if tail else None


def run_verification(application, rng: Optional[random.Random] = None) -> VerificationResult:
    """Run every check against a stored application."""
    result = VerificationResult(
        domain=verify_domain(application.buyer_name_email, rng=rng),
        business=verify_business(
            application.legal_entity_name,
            application.tax_ein,
            state_from_city_state_zip(application.bill_to_city_state_zip),
        ),
        phone=validate_phone_number(application.phone_no),
        address=validate_address(application.bill_to_address),
    )
    logger.info(
        "Verification for application #%s: business=%s domain=%s phone=%s address=%s",
        application.id,
        result.business.status,
        "valid" if result.domain.is_valid else "invalid",
        result.phone.type,
        result.address.type,
    )
    return result
