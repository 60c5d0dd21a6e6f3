"""Secondary validation of confirmed payments before they enter a draw."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from ..models import PaymentRecord

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = ("club_name", "hh_number", "reference")


@dataclass(frozen=True)
class EligibilityResult:
    """Payments that passed validation and how many were discarded."""

    eligible: tuple[PaymentRecord, ...]
    dropped: int


def _has_text(value: Any) -> bool:
    """Return ``True`` if ``value`` is a scalar that is not blank once stringified.

    Maps and arrays decoded from the store never identify a club, household
    or ticket, so they count as missing.
    """
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return False
    return str(value).strip() != ""


def is_eligible(payment: PaymentRecord) -> bool:
    """Return ``True`` when every field in :data:`REQUIRED_FIELDS` has text."""
    return all(_has_text(getattr(payment, name)) for name in REQUIRED_FIELDS)


def filter_eligible_payments(payments: Iterable[PaymentRecord]) -> EligibilityResult:
    """Keep only the payments that identify a club, household and ticket.

    Records failing the check are dropped without raising; the count of
    dropped records is reported back so callers can surface data-quality
    problems. Input order is preserved.
    """

    eligible: list[PaymentRecord] = []
    dropped = 0
    for payment in payments:
        if is_eligible(payment):
            eligible.append(payment)
        else:
            dropped += 1

    logger.info(f"Valid payments: {len(eligible)}, removed {dropped} invalid")
    return EligibilityResult(eligible=tuple(eligible), dropped=dropped)


__all__ = ["EligibilityResult", "REQUIRED_FIELDS", "filter_eligible_payments", "is_eligible"]
