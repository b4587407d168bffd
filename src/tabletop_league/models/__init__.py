from tabletop_league.models.match import (
    Match,
    MatchScore,
    MatchType,
    PercentageScore,
    ScenarioScore,
    VictoryPointsScore,
)
from tabletop_league.models.pairing import Pairing, PairingStatus
from tabletop_league.models.player import Player
from tabletop_league.models.standing import Standing

__all__ = [
    "Match",
    "MatchScore",
    "MatchType",
    "Pairing",
    "PairingStatus",
    "PercentageScore",
    "Player",
    "ScenarioScore",
    "Standing",
    "VictoryPointsScore",
]
