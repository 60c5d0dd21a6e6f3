"""Assembly of the final draw report."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..models import ClubSummary, DrawReport, Winner
from .grouping import ClubGroups


def build_draw_report(
    month: int,
    year: int,
    groups: ClubGroups,
    ranked_winners: Mapping[Any, Sequence[Winner]],
    *,
    dropped_payments: int = 0,
) -> DrawReport:
    """Aggregate per-club counts and ranked winners into a :class:`DrawReport`.

    Clubs and winners follow the order of ``groups``. ``ranked_winners`` maps
    each club name to its already ranked winners; clubs missing from it
    contribute no winners. Every reported winner is frozen.
    """

    clubs = tuple(
        ClubSummary(club_name=club_name, entries=len(entries))
        for club_name, entries in groups.items()
    )

    winners: list[Winner] = []
    for club_name in groups:
        winners.extend(ranked_winners.get(club_name, ()))
    for winner in winners:
        winner.freeze()

    return DrawReport(
        month=month,
        year=year,
        total_payments=groups.total_entries(),
        clubs=clubs,
        total_winners=len(winners),
        winners=tuple(winners),
        dropped_payments=dropped_payments,
    )


__all__ = ["build_draw_report"]
