"""Time-based token rules: expiry advisories and the refresh grace window."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
import math

from app.domain.auth_failures import AuthFailure


@dataclass(frozen=True, slots=True)
class ExpiryAdvisory:
    expires_soon: bool
    seconds_remaining: int


def expiry_advisory(expires_at: datetime, now: datetime, threshold: timedelta) -> ExpiryAdvisory:
    """Flag tokens that expire within ``threshold``. Informational only."""
    remaining = (expires_at - now).total_seconds()
    return ExpiryAdvisory(
        expires_soon=remaining < threshold.total_seconds(),
        seconds_remaining=math.floor(remaining),
    )


def is_expired(expires_at: datetime, now: datetime) -> bool:
    return now >= expires_at


def refresh_window_failure(
    expires_at: datetime,
    now: datetime,
    grace_period: timedelta,
) -> AuthFailure | None:
    """Return ``GRACE_EXPIRED`` once a token is past expiry by more than the grace period."""
    if not is_expired(expires_at, now):
        return None
    if now - expires_at > grace_period:
        return AuthFailure.GRACE_EXPIRED
    return None
