"""Core configuration and errors for tabletop leagues."""

from tabletop_league.core.config import (
    DEFAULT_GAME_SYSTEMS,
    GameSystemConfig,
    GameSystemRegistry,
    LeagueSettings,
    LeagueSnapshot,
    NumericRange,
    PercentageRules,
    ScenarioRules,
    VictoryPointsRules,
    load_snapshot,
)
from tabletop_league.core.errors import (
    ComputationError,
    ConfigurationError,
    LeagueError,
    UnknownGameSystemError,
    ValidationError,
)

__all__ = [
    "DEFAULT_GAME_SYSTEMS",
    "GameSystemConfig",
    "GameSystemRegistry",
    "LeagueSettings",
    "LeagueSnapshot",
    "NumericRange",
    "PercentageRules",
    "ScenarioRules",
    "VictoryPointsRules",
    "load_snapshot",
    "ComputationError",
    "ConfigurationError",
    "LeagueError",
    "UnknownGameSystemError",
    "ValidationError",
]
