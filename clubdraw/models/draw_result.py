"""Value objects returned by a monthly club draw."""

from __future__ import annotations

import json
from dataclasses import FrozenInstanceError, dataclass
from datetime import datetime
from typing import Any, Optional, Union

from .payment import UserRecord
from .utils import dt_iso, jsonable

NO_PAYMENTS_MESSAGE = "No confirmed payments found for the specified month and year."


class _JsonMixin:
    def to_json(self) -> dict[str, Any]:  # pragma: no cover - overridden
        raise NotImplementedError

    def to_json_str(self) -> str:
        """Return :meth:`to_json` serialized as a JSON string."""
        return json.dumps(self.to_json(), ensure_ascii=False)


@dataclass
class Winner(_JsonMixin):
    """A payment selected by the draw, enriched with the donor's profile.

    Attributes
    ----------
    club_name : Any
        Club the ticket was drawn for.
    reg_number : Any
        Household number copied from the winning payment.
    ticket_ref : Any
        Ticket reference copied from the winning payment.
    donor_name : Any
        Donor name copied from the winning payment.
    donor_email : Any
        Donor e-mail copied from the winning payment.
    user : Optional[UserRecord]
        Matching member profile, or ``None`` when no profile shares the
        household number.
    drawn_at : datetime
        UTC instant at which the ticket was pulled from the pool.
    payment_id : Optional[str]
        Identifier of the source payment. Not part of the JSON payload.
    position : Optional[str]
        Ordinal label ("1st", "2nd", ...). ``None`` until the club's winners
        have been ranked.

    The report builder calls :meth:`freeze` on every winner it includes;
    assigning to a frozen winner raises ``FrozenInstanceError``.
    """

    club_name: Any
    reg_number: Any
    ticket_ref: Any
    donor_name: Any
    donor_email: Any
    user: Optional[UserRecord]
    drawn_at: datetime
    payment_id: Optional[str] = None
    position: Optional[str] = None

    def __setattr__(self, name: str, value: Any) -> None:
        if self.__dict__.get("_frozen", False):
            raise FrozenInstanceError(f"cannot assign to field {name!r}")
        super().__setattr__(name, value)

    def freeze(self) -> None:
        """Lock the winner against further changes once it has been reported."""
        object.__setattr__(self, "_frozen", True)

    def to_json(self) -> dict[str, Any]:
        return {
            "clubName": self.club_name,
            "regNumber": jsonable(self.reg_number),
            "ticketRef": jsonable(self.ticket_ref),
            "donorName": jsonable(self.donor_name),
            "donorEmail": jsonable(self.donor_email),
            "user": self.user.to_json() if self.user is not None else None,
            "drawnAt": dt_iso(self.drawn_at),
            "position": self.position,
        }


@dataclass(frozen=True)
class ClubSummary(_JsonMixin):
    """Number of eligible entries a club had in the draw."""

    club_name: Any
    entries: int

    def to_json(self) -> dict[str, Any]:
        return {"clubName": self.club_name, "entries": self.entries}


@dataclass(frozen=True)
class DrawReport(_JsonMixin):
    """Final outcome of a completed draw.

    ``dropped_payments`` counts the records discarded by the eligibility
    filter. It is informational only and is not serialized.
    """

    month: int
    year: int
    total_payments: int
    clubs: tuple[ClubSummary, ...]
    total_winners: int
    winners: tuple[Winner, ...]
    dropped_payments: int = 0

    def to_json(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "year": self.year,
            "totalPayments": self.total_payments,
            "clubs": [club.to_json() for club in self.clubs],
            "totalWinners": self.total_winners,
            "winners": [winner.to_json() for winner in self.winners],
        }


@dataclass(frozen=True)
class NoPaymentsResult(_JsonMixin):
    """Returned when the period holds no eligible payments."""

    month: int
    year: int
    message: str = NO_PAYMENTS_MESSAGE

    def to_json(self) -> dict[str, Any]:
        return {"message": self.message}


@dataclass(frozen=True)
class DrawRefused(_JsonMixin):
    """Returned when the requested month has not finished yet.

    ``window_end`` is the first instant at which the draw may be run.
    """

    month: int
    year: int
    window_end: datetime

    @property
    def message(self) -> str:
        return (
            f"Draw not allowed: month {self.month}/{self.year} is not complete. "
            f"Draws allowed after {dt_iso(self.window_end)}."
        )

    def to_json(self) -> dict[str, Any]:
        return {"message": self.message}


DrawOutcome = Union[DrawReport, NoPaymentsResult, DrawRefused]
