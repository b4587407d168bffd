from pydantic import BaseModel, ConfigDict, Field


class Player(BaseModel):
    """A league member with running win/loss/draw totals."""

    model_config = ConfigDict(frozen=True)

    id: str
    league_id: str | None = None
    name: str = ""
    is_active: bool = True
    joined_round: int = Field(default=1, ge=1)
    left_round: int | None = None  # Still playing if None
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    draws: int = Field(default=0, ge=0)
    total_points: int = 0

    @property
    def total_games(self) -> int:
        return self.wins + self.losses + self.draws

    @property
    def win_rate(self) -> float:
        """Fraction of games won, 0.0 for a player with no games."""
        if self.total_games == 0:
            return 0.0
        return self.wins / self.total_games

    def is_active_in_round(self, round_number: int) -> bool:
        """Whether the player takes part in the given round."""
        if not self.is_active or self.joined_round > round_number:
            return False
        return self.left_round is None or self.left_round >= round_number
