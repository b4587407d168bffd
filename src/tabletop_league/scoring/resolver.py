"""Match result resolution for the three scoring variants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, assert_never

import structlog

from tabletop_league.core.errors import ComputationError
from tabletop_league.models import Match, PercentageScore, ScenarioScore, VictoryPointsScore

logger = structlog.get_logger()

DRAW = "Draw"
MINOR_VICTORY = "Minor Victory"
MAJOR_VICTORY = "Major Victory"
MASSACRE = "Massacre"

# (exclusive upper bound on percentage difference, label)
MARGIN_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (10.0, DRAW),
    (25.0, MINOR_VICTORY),
    (50.0, MAJOR_VICTORY),
)

DEFAULT_CLOSE_THRESHOLD = 5
DEFAULT_DECISIVE_THRESHOLD = 15


class MatchStatus(StrEnum):
    DRAW = "draw"
    CLOSE = "close"
    NORMAL = "normal"
    DECISIVE = "decisive"


@dataclass(frozen=True)
class Resolution:
    """Outcome of a match.

    Attributes:
        winner_id: Winning player ID, None for a draw.
        margin_label: Margin of victory (percentage matches only).
        description: Human-readable result.
    """

    winner_id: str | None
    margin_label: str | None
    description: str

    @property
    def is_draw(self) -> bool:
        return self.winner_id is None


@dataclass(frozen=True)
class PercentageBreakdown:
    player1_percentage: float
    player2_percentage: float

    @property
    def difference(self) -> float:
        return abs(self.player1_percentage - self.player2_percentage)

    @property
    def margin_label(self) -> str:
        return margin_for_difference(self.difference)


def margin_for_difference(diff: float) -> str:
    """Map a percentage difference to its margin of victory label.

    [0, 10) is a Draw, [10, 25) a Minor Victory, [25, 50) a Major Victory
    and 50 or more a Massacre.
    """
    for upper_bound, label in MARGIN_THRESHOLDS:
        if diff < upper_bound:
            return label
    return MASSACRE


def percentage_breakdown(score: PercentageScore) -> PercentageBreakdown:
    """Compute the share of each opposing army destroyed.

    Raises:
        ComputationError: If either army value is missing or not positive.
    """
    p1_army = score.player1_army_value
    p2_army = score.player2_army_value
    if not p1_army or not p2_army or p1_army < 0 or p2_army < 0:
        raise ComputationError(
            f"Cannot compute casualty percentages with army values {p1_army} and {p2_army}",
            "Both army values must be positive.",
        )
    return PercentageBreakdown(
        player1_percentage=score.player1_casualties * 100 / p2_army,
        player2_percentage=score.player2_casualties * 100 / p1_army,
    )


def _side(match: Match, winner_id: str) -> str:
    return "Player 1" if winner_id == match.player1_id else "Player 2"


def _higher(match: Match, first: int, second: int) -> str | None:
    if first > second:
        return match.player1_id
    if second > first:
        return match.player2_id
    return None


def _resolve_victory_points(match: Match, score: VictoryPointsScore) -> Resolution:
    winner_id = _higher(match, score.player1_points, score.player2_points)
    if winner_id is None:
        return Resolution(None, None, DRAW)
    diff = abs(score.player1_points - score.player2_points)
    return Resolution(winner_id, None, f"{_side(match, winner_id)} wins by {diff} VP")


def _resolve_percentage(match: Match, score: PercentageScore) -> Resolution:
    breakdown = percentage_breakdown(score)
    label = breakdown.margin_label
    if label == DRAW:
        return Resolution(None, DRAW, DRAW)
    if breakdown.player1_percentage > breakdown.player2_percentage:
        winner_id = match.player1_id
    else:
        winner_id = match.player2_id
    return Resolution(winner_id, label, f"{label} ({_side(match, winner_id)})")


def _resolve_scenario(match: Match, score: ScenarioScore) -> Resolution:
    p1_done = score.player1_objective_completed
    p2_done = score.player2_objective_completed
    if p1_done and not p2_done:
        return Resolution(match.player1_id, None, "Player 1 completed objective")
    if p2_done and not p1_done:
        return Resolution(match.player2_id, None, "Player 2 completed objective")

    winner_id = _higher(match, score.player1_casualties, score.player2_casualties)
    if winner_id is None:
        return Resolution(None, None, DRAW)
    diff = abs(score.player1_casualties - score.player2_casualties)
    return Resolution(winner_id, None, f"Victory by {diff} casualties")


def resolve(match: Match) -> Resolution:
    """Derive the winner, margin and description of a match.

    Args:
        match: Match with variant-specific scoring fields.

    Returns:
        Resolution for the match.

    Raises:
        ComputationError: If a percentage match has a zero or missing army value.
    """
    score = match.scoring
    match score:
        case VictoryPointsScore():
            return _resolve_victory_points(match, score)
        case PercentageScore():
            return _resolve_percentage(match, score)
        case ScenarioScore():
            return _resolve_scenario(match, score)
        case _:
            assert_never(score)


def resolve_match(match: Match) -> Match:
    """Return a resolved copy of the match with winner and margin filled in."""
    resolution = resolve(match)
    logger.debug(
        "match_resolved",
        match_id=match.id,
        match_type=match.match_type,
        winner=resolution.winner_id,
        margin=resolution.margin_label,
    )
    return match.model_copy(
        update={
            "winner_id": resolution.winner_id,
            "margin_of_victory": resolution.margin_label,
            "resolved": True,
        }
    )


def edit_match(match: Match, **changes: Any) -> Match:
    """Apply edits to a match and re-derive its winner.

    Keyword arguments name Match fields; a ``scoring`` value may be a score
    model or a dict of score fields to merge into the existing score.
    ``winner_id``, ``margin_of_victory`` and ``resolved`` are always
    recomputed and cannot be set directly.

    Raises:
        ValueError: If a derived field or an unknown field is given.
    """
    derived = {"winner_id", "margin_of_victory", "resolved"} & changes.keys()
    if derived:
        msg = f"Cannot set derived fields directly: {', '.join(sorted(derived))}"
        raise ValueError(msg)
    unknown = changes.keys() - Match.model_fields.keys()
    if unknown:
        msg = f"Unknown match fields: {', '.join(sorted(unknown))}"
        raise ValueError(msg)

    scoring = changes.get("scoring")
    if isinstance(scoring, dict):
        merged = match.scoring.model_dump()
        merged.update(scoring)
        changes["scoring"] = merged

    data = match.model_dump()
    data.update(changes)
    edited = Match.model_validate(data)
    logger.info("match_edited", match_id=match.id, fields=sorted(changes))
    return resolve_match(edited)


def classify(
    match: Match,
    close_threshold: int = DEFAULT_CLOSE_THRESHOLD,
    decisive_threshold: int = DEFAULT_DECISIVE_THRESHOLD,
) -> MatchStatus:
    """Classify how close a match was.

    Victory point matches compare the absolute score difference with the
    thresholds. Percentage matches map the margin label (Massacre is
    decisive, Minor Victory is close). Scenario matches are decisive when
    the casualty difference reaches ``decisive_threshold`` and close when
    both or neither side completed the objective.
    """
    resolution = resolve(match)
    if resolution.is_draw:
        return MatchStatus.DRAW

    score = match.scoring
    match score:
        case VictoryPointsScore():
            diff = abs(score.player1_points - score.player2_points)
            if diff >= decisive_threshold:
                return MatchStatus.DECISIVE
            if diff <= close_threshold:
                return MatchStatus.CLOSE
            return MatchStatus.NORMAL
        case PercentageScore():
            if resolution.margin_label == MASSACRE:
                return MatchStatus.DECISIVE
            if resolution.margin_label == MINOR_VICTORY:
                return MatchStatus.CLOSE
            return MatchStatus.NORMAL
        case ScenarioScore():
            diff = abs(score.player1_casualties - score.player2_casualties)
            if diff >= decisive_threshold:
                return MatchStatus.DECISIVE
            if score.player1_objective_completed == score.player2_objective_completed:
                return MatchStatus.CLOSE
            return MatchStatus.NORMAL
        case _:
            assert_never(score)
