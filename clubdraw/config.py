"""Environment-driven settings for the draw's I/O collaborators."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .draw.sampler import DEFAULT_WINNERS_PER_CLUB, validate_winners_per_club

DEFAULT_PAYMENTS_COLLECTION = "2000ClubPayment"
DEFAULT_USERS_COLLECTION = "users"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable '{name}' must be an integer") from exc


@dataclass(frozen=True)
class FirestoreConfig:
    """Connection settings for the Firestore REST endpoint.

    Attributes
    ----------
    base_url : str
        Documents root of the database, e.g.
        ``https://firestore.googleapis.com/v1/projects/<p>/databases/(default)/documents``.
    timeout : int
        Per-request timeout in seconds.
    payments_collection : str
        Collection holding raffle payments.
    users_collection : str
        Collection holding member profiles.
    page_size : int
        Page size requested when listing users.
    """

    base_url: str
    timeout: int = 45
    payments_collection: str = DEFAULT_PAYMENTS_COLLECTION
    users_collection: str = DEFAULT_USERS_COLLECTION
    page_size: int = 300

    @classmethod
    def from_env(cls, base_url: Optional[str] = None) -> "FirestoreConfig":
        """Read the configuration from the process environment and ``.env``.

        Raises
        ------
        ValueError
            If no base URL is supplied and ``FIREBASE_URL`` is not set.
        """

        load_dotenv()
        url = base_url or os.getenv("FIREBASE_URL") or os.getenv("firebase_url")
        if not url:
            raise ValueError("Environment variable 'FIREBASE_URL' is not set")

        return cls(
            base_url=url.rstrip("/"),
            timeout=_int_env("FIREBASE_TIMEOUT", 45),
            payments_collection=os.getenv("PAYMENTS_COLLECTION")
            or DEFAULT_PAYMENTS_COLLECTION,
            users_collection=os.getenv("USERS_COLLECTION") or DEFAULT_USERS_COLLECTION,
            page_size=_int_env("USERS_PAGE_SIZE", 300),
        )


@dataclass(frozen=True)
class DrawSettings:
    """Parameters of the draw itself."""

    winners_per_club: int = DEFAULT_WINNERS_PER_CLUB

    @classmethod
    def from_env(cls) -> "DrawSettings":
        load_dotenv()
        winners = _int_env("DRAW_WINNERS_PER_CLUB", DEFAULT_WINNERS_PER_CLUB)
        return cls(winners_per_club=validate_winners_per_club(winners))


__all__ = ["DrawSettings", "FirestoreConfig"]
