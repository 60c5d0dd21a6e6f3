"""Partition eligible payments by club."""

from __future__ import annotations

from collections import Counter, OrderedDict
from typing import Any, Iterable, Iterator, Sequence

from ..models import PaymentRecord


class ClubGroups:
    """Insertion-ordered mapping of club name to that club's payments.

    Clubs are kept in the order they were first seen and payments keep their
    original order within each club.
    """

    def __init__(self) -> None:
        self._groups: "OrderedDict[Any, list[PaymentRecord]]" = OrderedDict()

    def add(self, payment: PaymentRecord) -> None:
        self._groups.setdefault(payment.club_name, []).append(payment)

    def __getitem__(self, club_name: Any) -> list[PaymentRecord]:
        return self._groups[club_name]

    def __contains__(self, club_name: object) -> bool:
        return club_name in self._groups

    def __iter__(self) -> Iterator[Any]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def items(self) -> Iterator[tuple[Any, list[PaymentRecord]]]:
        return iter(self._groups.items())

    def club_names(self) -> list[Any]:
        return list(self._groups)

    def total_entries(self) -> int:
        """Return the number of payments across every club."""
        return sum(len(entries) for entries in self._groups.values())

    def check_partition(self, source: Sequence[PaymentRecord]) -> None:
        """Verify the groups partition ``source`` exactly.

        Every payment must sit under the key matching its ``club_name``, and
        each payment id must appear in the groups as many times as it does in
        ``source``.

        Raises
        ------
        ValueError
            If the invariant does not hold.
        """

        grouped: Counter = Counter()
        for club_name, entries in self._groups.items():
            for payment in entries:
                if payment.club_name != club_name:
                    raise ValueError(
                        f"Payment {payment.id!r} filed under club {club_name!r} "
                        f"but belongs to {payment.club_name!r}"
                    )
                grouped[payment.id] += 1

        expected = Counter(payment.id for payment in source)
        for payment_id, count in grouped.items():
            if count > expected[payment_id]:
                raise ValueError(
                    f"Payment {payment_id!r} appears more often in the club groups "
                    "than in the eligible payments"
                )
        if grouped != expected:
            raise ValueError("Club groups do not cover the eligible payments exactly")

    def __repr__(self) -> str:
        sizes = ", ".join(f"{name!r}: {len(v)}" for name, v in self._groups.items())
        return f"<ClubGroups({sizes})>"


def group_by_club(payments: Iterable[PaymentRecord]) -> ClubGroups:
    """Group ``payments`` by club name in first-seen order."""

    groups = ClubGroups()
    for payment in payments:
        groups.add(payment)
    return groups


__all__ = ["ClubGroups", "group_by_club"]
