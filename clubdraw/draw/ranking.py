"""Position labels for drawn winners."""

from __future__ import annotations

from typing import Iterable

from ..models import Winner

_LEADING_ORDINALS = {1: "1st", 2: "2nd", 3: "3rd"}


def ordinal_position(n: int) -> str:
    """Return the position label for the ``n``-th winner.

    Only the first three places get their own suffix; everything after is
    ``"{n}th"``, including 11, 12 and 13 as well as 21, 22 and 23.
    """

    if n < 1:
        raise ValueError("positions start at 1")
    return _LEADING_ORDINALS.get(n, f"{n}th")


def rank_club_winners(winners: Iterable[Winner]) -> list[Winner]:
    """Order one club's winners by draw time and label their positions.

    The sort is stable, so winners captured at the same instant keep the
    order in which they were drawn. Each winner's ``position`` is set in
    place and the ordered list is returned.
    """

    ranked = sorted(winners, key=lambda winner: winner.drawn_at)
    for index, winner in enumerate(ranked, start=1):
        winner.position = ordinal_position(index)
    return ranked


__all__ = ["ordinal_position", "rank_club_winners"]
