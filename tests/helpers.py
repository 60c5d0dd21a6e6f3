from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from clubdraw.models import PaymentRecord, UserRecord


def make_payment(
    payment_id: str,
    club: Any = "Alpha",
    hh_number: Any = None,
    reference: Any = None,
    **extra: Any,
) -> PaymentRecord:
    return PaymentRecord(
        id=payment_id,
        club_name=club,
        hh_number=hh_number if hh_number is not None else f"HH-{payment_id}",
        reference=reference if reference is not None else f"REF-{payment_id}",
        donor_name=extra.get("donor_name", f"Donor {payment_id}"),
        donor_email=extra.get("donor_email", f"{payment_id}@example.com"),
        date_submitted=extra.get(
            "date_submitted", datetime(2024, 1, 15, tzinfo=timezone.utc)
        ),
        donation_confirmed=True,
    )


def make_user(user_id: str, reg_number: Any, **profile: Any) -> UserRecord:
    return UserRecord(
        id=user_id,
        reg_number=reg_number,
        profile={"regNumber": reg_number, **profile},
    )


class TickingClock:
    """Clock that advances one millisecond on every call."""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self.current = start or datetime(2024, 2, 1, 9, 0, tzinfo=timezone.utc)
        self.calls = 0

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(milliseconds=1)
        self.calls += 1
        return value


class ScriptedRandom:
    """Returns scripted indices and records the pool sizes it was asked about."""

    def __init__(self, indices: list[int]) -> None:
        self.indices = list(indices)
        self.bounds: list[int] = []

    def __call__(self, n: int) -> int:
        self.bounds.append(n)
        return self.indices.pop(0) if self.indices else 0


AFTER_JANUARY_2024 = datetime(2024, 3, 1, tzinfo=timezone.utc)
