"""Payment and user records read from the fundraiser's document store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from .utils import jsonable


@dataclass(frozen=True)
class PaymentRecord:
    """A single raffle ticket payment.

    Attributes
    ----------
    id : str
        Document identifier of the payment.
    club_name : Any
        Name of the club the ticket was bought for.
    hh_number : Any
        Household (registration) number of the donor.
    reference : Any
        Ticket reference printed on the receipt.
    donor_name : Any
        Display name of the donor, if captured.
    donor_email : Any
        Contact e-mail of the donor, if captured.
    date_submitted : Optional[datetime]
        When the payment was submitted.
    donation_confirmed : bool
        ``True`` once the payment has been reconciled.

    Notes
    -----
    Values come straight from the store and are not coerced. The identifying
    fields may be missing (``None``), blank, or of a non-string type; the
    eligibility filter is responsible for rejecting such records.
    """

    id: str
    club_name: Any = None
    hh_number: Any = None
    reference: Any = None
    donor_name: Any = None
    donor_email: Any = None
    date_submitted: Optional[datetime] = None
    donation_confirmed: bool = False

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "PaymentRecord":
        """Build a record from a decoded store document."""

        return cls(
            id=doc.get("id"),
            club_name=doc.get("clubName"),
            hh_number=doc.get("hhNumber"),
            reference=doc.get("reference"),
            donor_name=doc.get("donorName"),
            donor_email=doc.get("donorEmail"),
            date_submitted=doc.get("dateSubmitted"),
            donation_confirmed=doc.get("donationConfirmed") is True,
        )


@dataclass(frozen=True)
class UserRecord:
    """A registered member profile.

    ``profile`` keeps every other field of the user document untouched so it
    can be echoed back to the caller alongside a winner.
    """

    id: str
    reg_number: Any = None
    profile: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "UserRecord":
        profile = {k: v for k, v in doc.items() if k != "id"}
        return cls(id=doc.get("id"), reg_number=doc.get("regNumber"), profile=profile)

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id, **jsonable(dict(self.profile))}

    def __repr__(self) -> str:
        return f"<UserRecord(id='{self.id}', reg_number='{self.reg_number}')>"
