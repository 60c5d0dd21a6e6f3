"""Utilities for the monthly club draw."""

from .eligibility import EligibilityResult, filter_eligible_payments, is_eligible
from .engine import MonthlyDrawEngine
from .enrichment import UserDirectory
from .grouping import ClubGroups, group_by_club
from .ranking import ordinal_position, rank_club_winners
from .report import build_draw_report
from .sampler import DEFAULT_WINNERS_PER_CLUB, draw_club_winners
from .window import DrawWindow

__all__ = [
    "ClubGroups",
    "DEFAULT_WINNERS_PER_CLUB",
    "DrawWindow",
    "EligibilityResult",
    "MonthlyDrawEngine",
    "UserDirectory",
    "build_draw_report",
    "draw_club_winners",
    "filter_eligible_payments",
    "group_by_club",
    "is_eligible",
    "ordinal_position",
    "rank_club_winners",
]
