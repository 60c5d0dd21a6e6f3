"""Lookup of member profiles for drawn tickets."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from ..models import UserRecord

logger = logging.getLogger(__name__)


def _join_key(value: Any) -> Optional[str]:
    """Return the textual form used to match household and registration numbers."""
    if value is None:
        return None
    return str(value)


class UserDirectory:
    """Index of users keyed by registration number.

    Registration numbers are expected to be unique. When they are not, the
    first user in collection order is kept and a warning is logged, so the
    result never depends on dictionary ordering or chance.
    """

    def __init__(self) -> None:
        self._by_reg_number: dict[str, UserRecord] = {}

    @classmethod
    def from_users(cls, users: Iterable[UserRecord]) -> "UserDirectory":
        directory = cls()
        duplicates: set[str] = set()
        for user in users:
            key = _join_key(user.reg_number)
            if key is None:
                continue
            if key in directory._by_reg_number:
                if key not in duplicates:
                    logger.warning(
                        f"Registration number {key!r} is shared by several users; "
                        f"using {directory._by_reg_number[key].id!r}"
                    )
                    duplicates.add(key)
                continue
            directory._by_reg_number[key] = user
        return directory

    def lookup(self, reg_number: Any) -> Optional[UserRecord]:
        """Return the user registered under ``reg_number`` or ``None``."""
        key = _join_key(reg_number)
        if key is None:
            return None
        return self._by_reg_number.get(key)

    def __len__(self) -> int:
        return len(self._by_reg_number)


__all__ = ["UserDirectory"]
