#!/usr/bin/env python3
"""
ACCESS CODE VALIDATOR - Invite codes and weekly verification codes

CHECK ORDER (first failure wins):
1. Revoked: is_active is False
2. Expired: expires_at is set and already in the past
3. Maximum usage: max_uses > 0 and usage_count >= max_uses (0 = unlimited)

A code that is both revoked and expired reports "revoked"; user-facing
messages and audit trails rely on this order.

Validation is read-only. Incrementing usage_count after a successful check
must happen atomically with the check, in the caller's transaction
(see services.repository).
"""

from datetime import datetime
from typing import Optional

from .models.calculations import InvalidReason, ValidationResult
from .models.records import AccessCode


def _now_like(moment: datetime) -> datetime:
    """Current time with the same awareness as ``moment``"""
    return datetime.now(tz=moment.tzinfo)


def _match_awareness(value: datetime, reference: datetime) -> datetime:
    """
    ``value`` converted to the awareness of ``reference``

    Naive datetimes are taken as local time.
    """
    if reference.tzinfo is not None and value.tzinfo is None:
        return value.astimezone(reference.tzinfo)
    if reference.tzinfo is None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def validate_access_code(code: AccessCode, now: Optional[datetime] = None) -> ValidationResult:
    """
    Validate an access code snapshot

    Args:
        code: Current state of the code
        now: Evaluation time; defaults to the current time. Naive and aware
            values are both accepted and compared as local time.

    Returns:
        ValidationResult, with a reason when invalid
    """
    if not code.is_active:
        return ValidationResult.rejected(InvalidReason.REVOKED)

    if code.expires_at is not None:
        if now is None:
            current = _now_like(code.expires_at)
        else:
            current = _match_awareness(now, code.expires_at)
        if code.expires_at < current:
            return ValidationResult.rejected(InvalidReason.EXPIRED)

    if code.max_uses > 0 and code.usage_count >= code.max_uses:
        return ValidationResult.rejected(InvalidReason.MAXIMUM_USAGE)

    return ValidationResult.ok()


def is_access_code_valid(code: AccessCode, now: Optional[datetime] = None) -> bool:
    return validate_access_code(code, now).valid
