"""Standings module for tabletop leagues.

Aggregates match history into per-player statistics and ranks players
through a tiebreak cascade selected by the league settings.
"""

from tabletop_league.standings.base import Tiebreak
from tabletop_league.standings.calculator import (
    PlayerComparison,
    build_tiebreak_cascade,
    compare_players,
    compute_standings,
    player_standing,
    rank_standings,
    top_cut,
)
from tabletop_league.standings.records import apply_match, recompute_records, revert_match
from tabletop_league.standings.stats import (
    HeadToHead,
    PlayerRecord,
    head_to_head,
    points_differential,
    strength_of_schedule,
    tally_records,
    total_scored,
    win_streak,
)
from tabletop_league.standings.tiebreaks import (
    HeadToHeadTiebreak,
    PointsDifferentialTiebreak,
    StrengthOfScheduleTiebreak,
    TotalScoredTiebreak,
    WinsTiebreak,
)

__all__ = [
    "HeadToHead",
    "HeadToHeadTiebreak",
    "PlayerComparison",
    "PlayerRecord",
    "PointsDifferentialTiebreak",
    "StrengthOfScheduleTiebreak",
    "Tiebreak",
    "TotalScoredTiebreak",
    "WinsTiebreak",
    "apply_match",
    "build_tiebreak_cascade",
    "compare_players",
    "compute_standings",
    "head_to_head",
    "player_standing",
    "points_differential",
    "rank_standings",
    "recompute_records",
    "revert_match",
    "strength_of_schedule",
    "tally_records",
    "top_cut",
    "total_scored",
    "win_streak",
]
