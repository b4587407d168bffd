"""Match records and the closed set of scoring variants."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class VictoryPointsScore(BaseModel):
    """Two victory point totals; the higher total wins."""

    model_config = ConfigDict(frozen=True)

    match_type: Literal["victory_points"] = "victory_points"
    player1_points: int = 0
    player2_points: int = 0


class PercentageScore(BaseModel):
    """Army values and casualties inflicted, judged by percentage destroyed."""

    model_config = ConfigDict(frozen=True)

    match_type: Literal["percentage"] = "percentage"
    player1_army_value: int | None = None
    player2_army_value: int | None = None
    player1_casualties: int = 0
    player2_casualties: int = 0


class ScenarioScore(BaseModel):
    """Objective completion flags with casualties as the tiebreaker."""

    model_config = ConfigDict(frozen=True)

    match_type: Literal["scenario"] = "scenario"
    scenario_objective: str | None = None
    player1_objective_completed: bool = False
    player2_objective_completed: bool = False
    player1_casualties: int = 0
    player2_casualties: int = 0


MatchScore = Annotated[
    VictoryPointsScore | PercentageScore | ScenarioScore,
    Field(discriminator="match_type"),
]

MatchType = Literal["victory_points", "percentage", "scenario"]


class Match(BaseModel):
    """A single game between two players.

    Attributes:
        scoring: Variant-specific fields, tagged by ``match_type``.
        winner_id: Winning player ID, or None for a draw.
        margin_of_victory: Margin label for percentage matches.
        resolved: True once the winner has been derived from ``scoring``.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    league_id: str | None = None
    round: int = Field(ge=1)
    player1_id: str
    player2_id: str
    game_system_id: str | None = None
    mission: str | None = None
    scoring: MatchScore = Field(default_factory=VictoryPointsScore)
    winner_id: str | None = None
    margin_of_victory: str | None = None
    resolved: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    date_played: date | None = None
    notes: str | None = None

    @property
    def match_type(self) -> MatchType:
        return self.scoring.match_type

    @property
    def is_draw(self) -> bool:
        return self.resolved and self.winner_id is None

    def involves(self, player_id: str) -> bool:
        return player_id in (self.player1_id, self.player2_id)

    def opponent_of(self, player_id: str) -> str:
        """Return the other player's ID.

        Raises:
            ValueError: If the player did not take part in this match.
        """
        if player_id == self.player1_id:
            return self.player2_id
        if player_id == self.player2_id:
            return self.player1_id
        msg = f"Player {player_id} did not play match {self.id}"
        raise ValueError(msg)

    def scores(self) -> tuple[int, int]:
        """Return (player1, player2) scores used for differentials.

        Victory point matches use points; percentage and scenario matches
        use casualties inflicted.
        """
        score = self.scoring
        if isinstance(score, VictoryPointsScore):
            return score.player1_points, score.player2_points
        return score.player1_casualties, score.player2_casualties

    def score_for(self, player_id: str) -> tuple[int, int]:
        """Return (own, opponent) scores from the given player's side."""
        p1, p2 = self.scores()
        if player_id == self.player1_id:
            return p1, p2
        if player_id == self.player2_id:
            return p2, p1
        msg = f"Player {player_id} did not play match {self.id}"
        raise ValueError(msg)
