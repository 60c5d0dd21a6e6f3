from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from clubdraw.config import DrawSettings, FirestoreConfig
from clubdraw.draw.sampler import validate_winners_per_club
from clubdraw.firestore.api import FirestoreClient
from clubdraw.models import DrawRefused
from clubdraw.workflows import run_monthly_draw


def _positive_int(text: str) -> int:
    try:
        return validate_winners_per_club(int(text))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {text!r}") from exc


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Draw the monthly 2000 Club winners and print them as JSON."
    )
    parser.add_argument(
        "--month",
        type=int,
        required=True,
        choices=range(1, 13),
        metavar="MONTH",
        help="Month number (1-12).",
    )
    parser.add_argument("--year", type=int, required=True, help="Four digit year.")
    parser.add_argument(
        "--winners-per-club",
        type=_positive_int,
        default=None,
        help="Winners drawn per club (defaults to DRAW_WINNERS_PER_CLUB or 5).",
    )
    parser.add_argument(
        "--token",
        default=None,
        help="Firebase ID token. Falls back to the FIREBASE_TOKEN environment variable.",
    )
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the draw and print the outcome. Returns the process exit code."""
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    token = args.token or os.getenv("FIREBASE_TOKEN")
    if not token:
        print(
            "Missing Firebase token. Pass --token or set FIREBASE_TOKEN.",
            file=sys.stderr,
        )
        return 2

    settings = DrawSettings.from_env()
    winners_per_club = (
        args.winners_per_club
        if args.winners_per_club is not None
        else settings.winners_per_club
    )

    client = FirestoreClient(token, config=FirestoreConfig.from_env())
    outcome = run_monthly_draw(
        client, args.month, args.year, winners_per_club=winners_per_club
    )
    print(outcome.to_json_str())
    return 2 if isinstance(outcome, DrawRefused) else 0


if __name__ == "__main__":
    raise SystemExit(main())
