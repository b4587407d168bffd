"""Configuration schemas and loading for tabletop leagues."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from tabletop_league.core.errors import ConfigurationError, UnknownGameSystemError
from tabletop_league.models import Match, Pairing, Player

PairingMethod = Literal["swiss", "random", "manual"]
TiebreakMethod = Literal["points_differential", "head_to_head", "sos"]
ByeHandling = Literal["auto", "manual"]


class LeagueSettings(BaseModel):
    """Organizer-controlled league options.

    Attributes:
        pairing_method: Method used by ``generate_pairings``.
        first_round_pairing_method: Suggested method for round 1.
        subsequent_round_method: Suggested method after round 1.
        allow_rematches: Whether Swiss pairing may repeat a previous pairing.
        tiebreak_method: Optional tiebreak consulted between wins and total
            scored. ``points_differential`` adds nothing beyond the defaults.
        bye_handling: ``auto`` assigns BYEs, ``manual`` leaves the odd player
            unpaired for the organizer.
        top_cut: Number of players advancing from the final standings.
    """

    model_config = ConfigDict(frozen=True)

    pairing_method: PairingMethod = "swiss"
    first_round_pairing_method: PairingMethod = "manual"
    subsequent_round_method: PairingMethod = "swiss"
    allow_rematches: bool = False
    tiebreak_method: TiebreakMethod = "points_differential"
    bye_handling: ByeHandling = "auto"
    top_cut: int | None = Field(default=None, ge=1)


class NumericRange(BaseModel):
    """Inclusive numeric bounds for a match field."""

    model_config = ConfigDict(frozen=True)

    min: int = 0
    max: int

    @model_validator(mode="after")
    def check_bounds(self) -> NumericRange:
        if self.min > self.max:
            msg = f"Range minimum {self.min} exceeds maximum {self.max}"
            raise ValueError(msg)
        return self

    def __contains__(self, value: int) -> bool:
        return self.min <= value <= self.max


class VictoryPointsRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    match_type: Literal["victory_points"] = "victory_points"
    points_label: str = "Victory Points"
    points_range: NumericRange | None = None


class PercentageRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    match_type: Literal["percentage"] = "percentage"
    army_value_range: NumericRange | None = None


class ScenarioRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    match_type: Literal["scenario"] = "scenario"
    objective_required: bool = True
    casualty_range: NumericRange | None = None


ScoringRules = Annotated[
    VictoryPointsRules | PercentageRules | ScenarioRules,
    Field(discriminator="match_type"),
]


class GameSystemConfig(BaseModel):
    """Scoring rules for one game system."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    rules: ScoringRules

    @property
    def match_type(self) -> str:
        return self.rules.match_type


DEFAULT_GAME_SYSTEMS: tuple[GameSystemConfig, ...] = (
    GameSystemConfig(
        id="40k",
        name="Warhammer 40,000",
        rules=VictoryPointsRules(points_range=NumericRange(min=0, max=100)),
    ),
    GameSystemConfig(
        id="aos",
        name="Age of Sigmar",
        rules=VictoryPointsRules(points_range=NumericRange(min=0, max=100)),
    ),
    GameSystemConfig(
        id="tow",
        name="The Old World",
        rules=PercentageRules(army_value_range=NumericRange(min=1, max=10000)),
    ),
    GameSystemConfig(
        id="mesbg",
        name="Middle-Earth Strategy Battle Game",
        rules=ScenarioRules(objective_required=True),
    ),
)


class GameSystemRegistry:
    """Lookup of game-system configurations by ID.

    Unknown IDs fail fast rather than falling back to a default system.
    """

    def __init__(self, systems: list[GameSystemConfig] | tuple[GameSystemConfig, ...]) -> None:
        self._systems: dict[str, GameSystemConfig] = {}
        for system in systems:
            if system.id in self._systems:
                raise ConfigurationError(f"Duplicate game system '{system.id}'")
            self._systems[system.id] = system

    @classmethod
    def default(cls) -> GameSystemRegistry:
        return cls(DEFAULT_GAME_SYSTEMS)

    def get(self, game_system_id: str | None) -> GameSystemConfig:
        """Return the configuration for a game system.

        Raises:
            ConfigurationError: If no ID is given.
            UnknownGameSystemError: If the ID is not registered.
        """
        if not game_system_id:
            raise ConfigurationError(
                "Game system configuration not found",
                "Set game_system_id on the match.",
            )
        try:
            return self._systems[game_system_id]
        except KeyError:
            raise UnknownGameSystemError(game_system_id, list(self._systems)) from None

    def __contains__(self, game_system_id: str) -> bool:
        return game_system_id in self._systems

    def __len__(self) -> int:
        return len(self._systems)

    @property
    def ids(self) -> list[str]:
        return list(self._systems)


class LeagueSnapshot(BaseModel):
    """A league's settings and records as handed over by the persistence layer."""

    league_id: str | None = None
    settings: LeagueSettings = Field(default_factory=LeagueSettings)
    game_systems: list[GameSystemConfig] = Field(
        default_factory=lambda: list(DEFAULT_GAME_SYSTEMS)
    )
    players: list[Player] = Field(default_factory=list)
    matches: list[Match] = Field(default_factory=list)
    pairings: list[Pairing] = Field(default_factory=list)

    def registry(self) -> GameSystemRegistry:
        return GameSystemRegistry(self.game_systems)

    @property
    def current_round(self) -> int:
        """Highest round seen in matches or pairings, or 1 for a new league."""
        rounds = [m.round for m in self.matches] + [p.round for p in self.pairings]
        return max(rounds, default=1)


def load_snapshot(path: str | Path) -> LeagueSnapshot:
    """Load and validate a league snapshot from a YAML file.

    Args:
        path: Path to YAML league file.

    Returns:
        Validated LeagueSnapshot instance.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigurationError: If the file is empty or not a mapping.
        pydantic.ValidationError: If the contents are invalid.
    """
    snapshot_path = Path(path)
    if not snapshot_path.exists():
        msg = f"League file not found: {snapshot_path}"
        raise FileNotFoundError(msg)

    with snapshot_path.open() as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"League file {snapshot_path} must contain a mapping",
            "Start the file with 'settings:' or 'players:'.",
        )

    return LeagueSnapshot.model_validate(data)
