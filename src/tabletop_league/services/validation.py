"""Game-system specific validation of submitted match results."""

from __future__ import annotations

from datetime import date
from typing import assert_never

import structlog
from pydantic import BaseModel, Field

from tabletop_league.core.config import (
    GameSystemConfig,
    NumericRange,
    PercentageRules,
    ScenarioRules,
    VictoryPointsRules,
)
from tabletop_league.core.errors import ConfigurationError, ValidationError
from tabletop_league.models import (
    Match,
    MatchScore,
    MatchType,
    PercentageScore,
    ScenarioScore,
    VictoryPointsScore,
)
from tabletop_league.scoring import resolve_match

logger = structlog.get_logger()


class MatchCandidate(BaseModel):
    """A match as submitted, before validation.

    Every field is optional so that incomplete submissions can be checked
    and reported in full.
    """

    league_id: str | None = None
    round: int | None = None
    player1_id: str | None = None
    player2_id: str | None = None
    mission: str | None = None
    match_type: MatchType | None = None

    player1_points: int | None = None
    player2_points: int | None = None

    player1_army_value: int | None = None
    player2_army_value: int | None = None
    player1_casualties: int | None = None
    player2_casualties: int | None = None

    scenario_objective: str | None = None
    player1_objective_completed: bool | None = None
    player2_objective_completed: bool | None = None

    date_played: date | None = None
    notes: str | None = None


class ValidationResult(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)

    def raise_for_errors(self) -> None:
        """Raise ValidationError if any rule was violated."""
        if not self.is_valid:
            raise ValidationError(self.errors)


def _check_range(
    errors: list[str], value: int | None, bounds: NumericRange | None, label: str
) -> None:
    if value is None or bounds is None:
        return
    if value not in bounds:
        errors.append(f"{label} must be between {bounds.min} and {bounds.max}")


def _validate_victory_points(
    candidate: MatchCandidate, rules: VictoryPointsRules, errors: list[str]
) -> None:
    if candidate.player1_points is None:
        errors.append(f"{rules.points_label} required for Player 1")
    if candidate.player2_points is None:
        errors.append(f"{rules.points_label} required for Player 2")
    _check_range(errors, candidate.player1_points, rules.points_range, "Player 1 points")
    _check_range(errors, candidate.player2_points, rules.points_range, "Player 2 points")


def _validate_percentage(
    candidate: MatchCandidate, rules: PercentageRules, errors: list[str]
) -> None:
    p1_army = candidate.player1_army_value
    p2_army = candidate.player2_army_value
    if not p1_army or not p2_army:
        errors.append("Army values required for both players")
    _check_range(errors, p1_army, rules.army_value_range, "Player 1 army value")
    _check_range(errors, p2_army, rules.army_value_range, "Player 2 army value")

    p1_cas = candidate.player1_casualties
    p2_cas = candidate.player2_casualties
    if p1_cas is None:
        errors.append("Casualties inflicted required for Player 1")
    elif p1_cas < 0:
        errors.append("Player 1 casualties cannot be negative")
    if p2_cas is None:
        errors.append("Casualties inflicted required for Player 2")
    elif p2_cas < 0:
        errors.append("Player 2 casualties cannot be negative")

    if p1_cas is not None and p2_army is not None and p1_cas > p2_army:
        errors.append("Player 1 casualties cannot exceed Player 2 army value")
    if p2_cas is not None and p1_army is not None and p2_cas > p1_army:
        errors.append("Player 2 casualties cannot exceed Player 1 army value")


def _validate_scenario(candidate: MatchCandidate, rules: ScenarioRules, errors: list[str]) -> None:
    if rules.objective_required and not candidate.scenario_objective:
        errors.append("Scenario objective description required")
    if candidate.player1_objective_completed is None:
        errors.append("Objective completion status required for Player 1")
    if candidate.player2_objective_completed is None:
        errors.append("Objective completion status required for Player 2")
    if candidate.player1_casualties is not None and candidate.player1_casualties < 0:
        errors.append("Player 1 casualties cannot be negative")
    if candidate.player2_casualties is not None and candidate.player2_casualties < 0:
        errors.append("Player 2 casualties cannot be negative")
    _check_range(errors, candidate.player1_casualties, rules.casualty_range, "Player 1 casualties")
    _check_range(errors, candidate.player2_casualties, rules.casualty_range, "Player 2 casualties")


def validate_match(candidate: MatchCandidate, config: GameSystemConfig | None) -> ValidationResult:
    """Validate a submitted match against its game system.

    Every violated rule is collected; validation never stops at the first
    error.

    Args:
        candidate: Submitted match fields.
        config: Game system the match is played under.

    Returns:
        ValidationResult listing all errors found.

    Raises:
        ConfigurationError: If no game system configuration is given.
    """
    if config is None:
        raise ConfigurationError(
            "Game system configuration not found",
            "Look the game system up in a GameSystemRegistry first.",
        )

    errors: list[str] = []

    if not candidate.player1_id or not candidate.player2_id:
        errors.append("Both players must be selected")
    elif candidate.player1_id == candidate.player2_id:
        errors.append("Players must be different")

    if not candidate.mission:
        errors.append("Mission must be selected")

    if candidate.match_type is not None and candidate.match_type != config.match_type:
        errors.append(
            f"Match type '{candidate.match_type}' does not match "
            f"{config.name} scoring ('{config.match_type}')"
        )

    rules = config.rules
    match rules:
        case VictoryPointsRules():
            _validate_victory_points(candidate, rules, errors)
        case PercentageRules():
            _validate_percentage(candidate, rules, errors)
        case ScenarioRules():
            _validate_scenario(candidate, rules, errors)
        case _:
            assert_never(rules)

    if errors:
        logger.debug("match_invalid", game_system=config.id, errors=errors)
    return ValidationResult(is_valid=not errors, errors=errors)


def _build_score(candidate: MatchCandidate, config: GameSystemConfig) -> MatchScore:
    rules = config.rules
    match rules:
        case VictoryPointsRules():
            return VictoryPointsScore(
                player1_points=candidate.player1_points or 0,
                player2_points=candidate.player2_points or 0,
            )
        case PercentageRules():
            return PercentageScore(
                player1_army_value=candidate.player1_army_value,
                player2_army_value=candidate.player2_army_value,
                player1_casualties=candidate.player1_casualties or 0,
                player2_casualties=candidate.player2_casualties or 0,
            )
        case ScenarioRules():
            return ScenarioScore(
                scenario_objective=candidate.scenario_objective,
                player1_objective_completed=bool(candidate.player1_objective_completed),
                player2_objective_completed=bool(candidate.player2_objective_completed),
                player1_casualties=candidate.player1_casualties or 0,
                player2_casualties=candidate.player2_casualties or 0,
            )
        case _:
            assert_never(rules)


def accept_match(
    candidate: MatchCandidate,
    config: GameSystemConfig | None,
    *,
    match_id: str,
    round_number: int | None = None,
) -> Match:
    """Validate a candidate and turn it into a resolved Match.

    Args:
        candidate: Submitted match fields.
        config: Game system the match is played under.
        match_id: Identifier assigned by the persistence layer.
        round_number: Round to record; defaults to the candidate's round.

    Returns:
        Resolved match.

    Raises:
        ConfigurationError: If no game system configuration is given.
        ValidationError: If the candidate breaks any rule, or has no round.
    """
    if config is None:
        raise ConfigurationError("Game system configuration not found")
    validate_match(candidate, config).raise_for_errors()

    round_value = round_number if round_number is not None else candidate.round
    if round_value is None or round_value < 1:
        raise ValidationError(["Round must be a positive number"])

    match = Match(
        id=match_id,
        league_id=candidate.league_id,
        round=round_value,
        player1_id=candidate.player1_id,
        player2_id=candidate.player2_id,
        game_system_id=config.id,
        mission=candidate.mission,
        scoring=_build_score(candidate, config),
        date_played=candidate.date_played,
        notes=candidate.notes,
    )
    logger.info("match_accepted", match_id=match_id, game_system=config.id)
    return resolve_match(match)
