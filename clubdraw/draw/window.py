"""Calendar-month windows used to scope a draw."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from ..models.utils import as_utc


@dataclass(frozen=True)
class DrawWindow:
    """Half-open UTC interval ``[start, end)`` covering one calendar month.

    Attributes
    ----------
    month : int
        Month number (1-12).
    year : int
        Four digit year.
    start : datetime
        UTC midnight on the first day of ``month``.
    end : datetime
        UTC midnight on the first day of the following month.
    """

    month: int
    year: int
    start: datetime
    end: datetime

    @classmethod
    def for_month(cls, month: int, year: int) -> "DrawWindow":
        """Build the window for ``month``/``year``.

        December rolls over into January of the following year.

        Raises
        ------
        ValueError
            If ``month`` is not between 1 and 12.
        """

        if isinstance(month, bool) or not isinstance(month, int):
            raise TypeError("month must be an integer")
        if isinstance(year, bool) or not isinstance(year, int):
            raise TypeError("year must be an integer")
        if not 1 <= month <= 12:
            raise ValueError(f"month must be between 1 and 12, got {month}")

        start = datetime(year, month, 1, tzinfo=timezone.utc)
        if month == 12:
            end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
        else:
            end = datetime(year, month + 1, 1, tzinfo=timezone.utc)
        return cls(month=month, year=year, start=start, end=end)

    def contains(self, instant: datetime) -> bool:
        """Return ``True`` when ``instant`` falls inside the window."""
        return self.start <= as_utc(instant) < self.end

    def is_complete(self, now: datetime) -> bool:
        """Return ``True`` once ``now`` has reached the end of the window.

        Naive ``now`` values are treated as UTC.
        """
        return as_utc(now) >= self.end


__all__ = ["DrawWindow"]
