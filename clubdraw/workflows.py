from typing import TYPE_CHECKING, Optional
from datetime import datetime, timezone
import logging

from .draw.engine import MonthlyDrawEngine
from .draw.sampler import DEFAULT_WINNERS_PER_CLUB
from .draw.window import DrawWindow
from .models import DrawOutcome, NoPaymentsResult

if TYPE_CHECKING:
    from .firestore.api import FirestoreClient

logger = logging.getLogger(__name__)


def run_monthly_draw(
    client: "FirestoreClient",
    month: int,
    year: int,
    *,
    winners_per_club: int = DEFAULT_WINNERS_PER_CLUB,
    now: Optional[datetime] = None,
    engine: Optional[MonthlyDrawEngine] = None,
) -> DrawOutcome:
    """Load a month of confirmed payments and run the club draw over them.

    The workflow performs the following steps:

    1. Refuse to continue while the month is still running. Nothing is
       fetched in that case.
    2. Query the confirmed payments submitted within the month.
    3. Return the "no confirmed payments" result when the query is empty.
    4. Load the full member collection once.
    5. Hand both collections to :class:`~clubdraw.draw.engine.MonthlyDrawEngine`.

    Parameters
    ----------
    client : FirestoreClient
        Authenticated client used to load payments and users.
    month : int
        Month number (1-12).
    year : int
        Year of the draw.
    winners_per_club : int, default: 5
        Maximum winners per club. Ignored when ``engine`` is supplied.
    now : Optional[datetime], default: None
        Current instant for the completeness check. Defaults to UTC now.
    engine : Optional[MonthlyDrawEngine], default: None
        Pre-configured engine. If not provided, a default one is created.

    Returns
    -------
    DrawReport | NoPaymentsResult | DrawRefused
        Outcome ready to be serialized with ``to_json()``.

    Notes
    -----
    Calling this twice for the same month draws a second, unrelated set of
    winners. Callers that publish results must guard against repeats.
    """

    engine = engine or MonthlyDrawEngine(winners_per_club)
    current = now or datetime.now(timezone.utc)

    refusal = engine.check_window(month, year, current)
    if refusal is not None:
        return refusal

    window = DrawWindow.for_month(month, year)
    payments = client.fetch_confirmed_payments(window)
    logger.info(f"Found {len(payments)} confirmed payments for {month}/{year}")
    if not payments:
        return NoPaymentsResult(month=month, year=year)

    users = client.fetch_users()
    return engine.draw(payments, users, month, year, now=current)
