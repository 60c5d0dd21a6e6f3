"""Engine that runs the monthly per-club draw over in-memory collections."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from ..models import (
    DrawOutcome,
    DrawRefused,
    NoPaymentsResult,
    PaymentRecord,
    UserRecord,
    Winner,
)
from .eligibility import filter_eligible_payments
from .enrichment import UserDirectory
from .grouping import group_by_club
from .ranking import rank_club_winners
from .report import build_draw_report
from .sampler import (
    DEFAULT_WINNERS_PER_CLUB,
    Clock,
    RandomBelow,
    draw_club_winners,
    validate_winners_per_club,
)
from .window import DrawWindow

logger = logging.getLogger(__name__)


class MonthlyDrawEngine:
    """Engine that filters, groups, samples and ranks a month of payments."""

    def __init__(
        self,
        winners_per_club: int = DEFAULT_WINNERS_PER_CLUB,
        *,
        randbelow: Optional[RandomBelow] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """Create a draw engine.

        Parameters
        ----------
        winners_per_club : int, default: 5
            Maximum number of winners drawn for each club.
        randbelow : Optional[Callable[[int], int]], default: None
            Uniform integer source for ``[0, n)``. Typically omitted, in which
            case :func:`secrets.randbelow` is used.
        clock : Optional[Callable[[], datetime]], default: None
            Clock used both for the completeness gate and to timestamp each
            selection. Defaults to the current UTC time.
        """

        self.winners_per_club = validate_winners_per_club(winners_per_club)
        self._randbelow = randbelow
        self._clock = clock

    def _now(self) -> datetime:
        if self._clock is not None:
            return self._clock()
        return datetime.now(timezone.utc)

    def check_window(
        self, month: int, year: int, now: Optional[datetime] = None
    ) -> Optional[DrawRefused]:
        """Return a :class:`DrawRefused` if ``month``/``year`` has not ended yet."""

        window = DrawWindow.for_month(month, year)
        current = now if now is not None else self._now()
        if window.is_complete(current):
            return None
        logger.info(
            f"Refusing draw for {month}/{year}: window ends at {window.end.isoformat()}"
        )
        return DrawRefused(month=month, year=year, window_end=window.end)

    def draw(
        self,
        payments: Iterable[PaymentRecord],
        users: Iterable[UserRecord],
        month: int,
        year: int,
        now: Optional[datetime] = None,
    ) -> DrawOutcome:
        """Run the draw for ``month``/``year``.

        Parameters
        ----------
        payments : Iterable[PaymentRecord]
            Confirmed payments submitted within the month.
        users : Iterable[UserRecord]
            Full member collection used to enrich winners. May be empty.
        month : int
            Month number (1-12).
        year : int
            Year of the draw.
        now : Optional[datetime], default: None
            Current instant for the completeness gate. Defaults to the
            engine's clock.

        Returns
        -------
        DrawReport | NoPaymentsResult | DrawRefused
            ``DrawRefused`` when the month is not over, ``NoPaymentsResult``
            when nothing is eligible, otherwise the ranked report.

        Notes
        -----
        The draw performs the following steps:

        1. Refuse to run until the calendar month has fully elapsed.
        2. Drop payments missing a club, household number or ticket reference.
        3. Group the remaining payments by club.
        4. For each club, draw winners without replacement and attach the
           member profile sharing the household number.
        5. Rank each club's winners by draw time and build the report.

        Nothing here prevents the same month from being drawn twice; a repeat
        produces a different, equally valid outcome.
        """

        refusal = self.check_window(month, year, now)
        if refusal is not None:
            return refusal

        filtered = filter_eligible_payments(payments)
        if not filtered.eligible:
            return NoPaymentsResult(month=month, year=year)

        groups = group_by_club(filtered.eligible)
        logger.info(f"Grouped into {len(groups)} clubs")
        if logger.isEnabledFor(logging.DEBUG):
            groups.check_partition(filtered.eligible)
            logger.debug(f"Club groups partition {len(filtered.eligible)} payments: {groups!r}")

        directory = UserDirectory.from_users(users)

        ranked: dict[Any, list[Winner]] = {}
        for club_name, entries in groups.items():
            winners = draw_club_winners(
                club_name,
                entries,
                directory,
                self.winners_per_club,
                randbelow=self._randbelow,
                clock=self._clock,
            )
            ranked[club_name] = rank_club_winners(winners)

        return build_draw_report(
            month,
            year,
            groups,
            ranked,
            dropped_payments=filtered.dropped,
        )


__all__ = ["MonthlyDrawEngine"]
