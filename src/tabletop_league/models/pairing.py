from datetime import date
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class PairingStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"


class Pairing(BaseModel):
    """An assignment of two players (or one, for a BYE) to a round."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None  # Assigned by the persistence layer
    league_id: str | None = None
    round: int = Field(ge=1)
    player1_id: str
    player2_id: str | None = None
    match_id: str | None = None
    status: PairingStatus = PairingStatus.PENDING
    due_date: date | None = None

    @property
    def is_bye(self) -> bool:
        return self.player2_id is None

    def involves(self, player_id: str) -> bool:
        return player_id in (self.player1_id, self.player2_id)

    def is_between(self, player_a: str, player_b: str) -> bool:
        """Whether this pairing matches the two players in either seat."""
        return {self.player1_id, self.player2_id} == {player_a, player_b}
