"""Random selection of winners from a club's pool of tickets."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Sequence

from ..models import PaymentRecord, Winner
from .enrichment import UserDirectory

logger = logging.getLogger(__name__)

DEFAULT_WINNERS_PER_CLUB = 5

RandomBelow = Callable[[int], int]
Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def validate_winners_per_club(winners_per_club: int) -> int:
    """Return ``winners_per_club`` if it is a positive integer."""
    if isinstance(winners_per_club, bool) or not isinstance(winners_per_club, int):
        raise TypeError("winners_per_club must be an integer")
    if winners_per_club <= 0:
        raise ValueError("winners_per_club must be a positive integer")
    return winners_per_club


def draw_club_winners(
    club_name: Any,
    entries: Sequence[PaymentRecord],
    users: UserDirectory,
    winners_per_club: int = DEFAULT_WINNERS_PER_CLUB,
    *,
    randbelow: Optional[RandomBelow] = None,
    clock: Optional[Clock] = None,
) -> list[Winner]:
    """Pull up to ``winners_per_club`` tickets out of ``entries`` at random.

    Parameters
    ----------
    club_name : Any
        Club the entries belong to.
    entries : Sequence[PaymentRecord]
        Eligible payments of the club. The sequence itself is not modified.
    users : UserDirectory
        Directory used to attach the donor's profile to each winner.
    winners_per_club : int, default: 5
        Maximum number of winners to draw.
    randbelow : Optional[Callable[[int], int]], default: None
        Source of uniform integers in ``[0, n)``. Defaults to
        :func:`secrets.randbelow`; only tests should supply another one.
    clock : Optional[Callable[[], datetime]], default: None
        Returns the capture time of each draw. Defaults to the current UTC time.

    Returns
    -------
    list[Winner]
        Winners in the order they were drawn, without positions.

    Notes
    -----
    Each iteration removes the selected ticket from the pool, so a ticket can
    win at most once. When the club has fewer entries than
    ``winners_per_club`` every entry wins.
    """

    validate_winners_per_club(winners_per_club)
    randbelow = randbelow or secrets.randbelow
    clock = clock or _utc_now

    pool = list(entries)
    winners: list[Winner] = []
    while pool and len(winners) < winners_per_club:
        index = randbelow(len(pool))
        if not 0 <= index < len(pool):
            raise ValueError(f"random index {index} outside pool of {len(pool)}")
        payment = pool.pop(index)
        winners.append(
            Winner(
                club_name=club_name,
                reg_number=payment.hh_number,
                ticket_ref=payment.reference,
                donor_name=payment.donor_name,
                donor_email=payment.donor_email,
                user=users.lookup(payment.hh_number),
                drawn_at=clock(),
                payment_id=payment.id,
            )
        )

    logger.info(f"Selected {len(winners)} winners for {club_name}")
    return winners


__all__ = [
    "DEFAULT_WINNERS_PER_CLUB",
    "draw_club_winners",
    "validate_winners_per_club",
]
