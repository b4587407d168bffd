"""Match result resolution for victory point, percentage and scenario games."""

from tabletop_league.scoring.resolver import (
    DRAW,
    MAJOR_VICTORY,
    MASSACRE,
    MINOR_VICTORY,
    MatchStatus,
    PercentageBreakdown,
    Resolution,
    classify,
    edit_match,
    margin_for_difference,
    percentage_breakdown,
    resolve,
    resolve_match,
)

__all__ = [
    "DRAW",
    "MAJOR_VICTORY",
    "MASSACRE",
    "MINOR_VICTORY",
    "MatchStatus",
    "PercentageBreakdown",
    "Resolution",
    "classify",
    "edit_match",
    "margin_for_difference",
    "percentage_breakdown",
    "resolve",
    "resolve_match",
]
