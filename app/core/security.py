"""Edge security primitives: rate-limit counters, signed links, CSRF tokens.

These sit behind small interfaces so the middleware does not care where the
counters live or how links are signed. Counting is done by ``limits`` (the
engine under slowapi); the default in-memory storage is per process, expires
windows on its own and resets on restart. Point it at a shared ``limits``
storage when running more than one instance.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import time
from dataclasses import dataclass
from typing import Optional

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage
from limits.strategies import FixedWindowRateLimiter


# ---------------------------------------------------------------------------
# Rate limiting
# ---------------------------------------------------------------------------

@dataclass
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_at: float  # epoch seconds


class RateLimitStore:
    """Counts hits per key inside a fixed window."""

    def hit(self, key: str, limit: int, window_seconds: int) -> RateLimitDecision:
        raise NotImplementedError

    def reset(self) -> None:
        raise NotImplementedError


class LimitsRateLimitStore(RateLimitStore):
    """Fixed-window counters keyed by ``"{client}-{path}"``, backed by ``limits``."""

    def __init__(self, storage: Optional[Storage] = None):
        self._storage = storage or MemoryStorage()
        self._limiter = FixedWindowRateLimiter(self._storage)

    def hit(self, key: str, limit: int, window_seconds: int) -> RateLimitDecision:
        item = RateLimitItemPerSecond(limit, window_seconds)
        allowed = self._limiter.hit(item, key)
        stats = self._limiter.get_window_stats(item, key)
        return RateLimitDecision(allowed, limit, max(stats.remaining, 0), stats.reset_time)

    def reset(self) -> None:
        self._storage.reset()


# ---------------------------------------------------------------------------
# Signed links
# ---------------------------------------------------------------------------

def approval_link_payload(
    application_id: object,
    decision: object,
    token: object,
    amount: object = None,
) -> str:
    """Canonical string an approve/deny link signs: every parameter it carries."""
    parts = [str(application_id), str(decision), str(token)]
    if amount is not None and amount != "":
        parts.append(str(amount))
    return ":".join(parts)


class UrlSigner:
    """HMAC-SHA256 signatures for the ``sig`` query parameter of e-mailed links."""

    def __init__(self, secret: str):
        self._key = secret.encode("utf-8")

    def sign(self, payload: str) -> str:
        digest = hmac.new(self._key, payload.encode("utf-8"), hashlib.sha256).digest()
        return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")

    def verify(self, payload: Optional[str], signature: Optional[str]) -> bool:
        if not payload or not signature:
            return False
        return hmac.compare_digest(self.sign(payload), signature)


def new_link_token() -> str:
    return secrets.token_urlsafe(24)


# ---------------------------------------------------------------------------
# CSRF
# ---------------------------------------------------------------------------

CSRF_COOKIE = "csrf-token"
CSRF_HEADER = "X-CSRF-Token"
CSRF_MAX_AGE_SECONDS = 60 * 60 * 24


def generate_csrf_token() -> str:
    """Opaque token: base64 of ``"{epoch_ms}-{random hex}"``."""
    raw = f"{int(time.time() * 1000)}-{secrets.token_hex(16)}"
    return base64.b64encode(raw.encode("ascii")).decode("ascii")
