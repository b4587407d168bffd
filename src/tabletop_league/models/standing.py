from pydantic import BaseModel, ConfigDict

from tabletop_league.models.player import Player


class Standing(BaseModel):
    """A player's position in the league table with derived statistics."""

    model_config = ConfigDict(frozen=True)

    player: Player
    rank: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    points_differential: int = 0
    total_scored: int = 0
    sos: float = 0.0
    phase: int | None = None

    @property
    def player_id(self) -> str:
        return self.player.id

    @property
    def total_games(self) -> int:
        return self.wins + self.losses + self.draws
