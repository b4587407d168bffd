"""Tabletop League.

Standings, Swiss pairings and match result resolution for round-based
tabletop wargame leagues.
"""

from tabletop_league.core.config import LeagueSettings
from tabletop_league.models import Match, Pairing, Player, Standing
from tabletop_league.scoring import resolve, resolve_match
from tabletop_league.services.pairing import create_manual_pairing, generate_pairings
from tabletop_league.services.validation import validate_match
from tabletop_league.standings import compute_standings

__version__ = "0.1.0"
__all__ = [
    "LeagueSettings",
    "Match",
    "Pairing",
    "Player",
    "Standing",
    "__version__",
    "compute_standings",
    "create_manual_pairing",
    "generate_pairings",
    "resolve",
    "resolve_match",
    "validate_match",
]
