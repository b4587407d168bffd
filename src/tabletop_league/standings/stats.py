"""Per-player statistics derived from match history."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from tabletop_league.models import Match


@dataclass
class PlayerRecord:
    """Win/loss/draw tally for a player.

    Attributes:
        wins: Number of wins.
        losses: Number of losses.
        draws: Number of draws.
    """

    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.draws

    @property
    def win_rate(self) -> float:
        if self.games == 0:
            return 0.0
        return self.wins / self.games

    def record_match(self, match: Match, player_id: str) -> None:
        """Add a resolved match to the tally from the player's side."""
        if match.winner_id is None:
            self.draws += 1
        elif match.winner_id == player_id:
            self.wins += 1
        else:
            self.losses += 1


@dataclass(frozen=True)
class HeadToHead:
    """Results of the mutual matches between two players."""

    p1_wins: int = 0
    p2_wins: int = 0
    draws: int = 0

    @property
    def total(self) -> int:
        return self.p1_wins + self.p2_wins + self.draws


def counted_matches(matches: Iterable[Match], phase: int | None = None) -> list[Match]:
    """Select resolved matches, optionally restricted to one round."""
    return [m for m in matches if m.resolved and (phase is None or m.round == phase)]


def tally_records(matches: Iterable[Match]) -> dict[str, PlayerRecord]:
    """Build a record for every player appearing in the matches."""
    records: dict[str, PlayerRecord] = {}
    for match in matches:
        for player_id in (match.player1_id, match.player2_id):
            records.setdefault(player_id, PlayerRecord()).record_match(match, player_id)
    return records


def points_differential(player_id: str, matches: Iterable[Match]) -> int:
    total = 0
    for match in matches:
        if match.involves(player_id):
            own, opponent = match.score_for(player_id)
            total += own - opponent
    return total


def total_scored(player_id: str, matches: Iterable[Match]) -> int:
    return sum(m.score_for(player_id)[0] for m in matches if m.involves(player_id))


def opponents(player_id: str, matches: Iterable[Match]) -> set[str]:
    return {m.opponent_of(player_id) for m in matches if m.involves(player_id)}


def strength_of_schedule(
    player_id: str,
    matches: Iterable[Match],
    records: dict[str, PlayerRecord],
) -> float:
    """Mean win rate of the distinct opponents a player has faced.

    Opponent win rates come from their current records as given; this is a
    single pass, not an iterative solve. Returns 0.0 for a player without
    opponents.
    """
    faced = opponents(player_id, matches)
    if not faced:
        return 0.0
    empty = PlayerRecord()
    return sum(records.get(opp, empty).win_rate for opp in faced) / len(faced)


def head_to_head(p1_id: str, p2_id: str, matches: Iterable[Match]) -> HeadToHead:
    """Count wins for each player and draws across their mutual matches."""
    p1_wins = p2_wins = draws = 0
    for match in matches:
        if not (match.involves(p1_id) and match.involves(p2_id)):
            continue
        if match.winner_id == p1_id:
            p1_wins += 1
        elif match.winner_id == p2_id:
            p2_wins += 1
        else:
            draws += 1
    return HeadToHead(p1_wins=p1_wins, p2_wins=p2_wins, draws=draws)


def win_streak(player_id: str, matches: Sequence[Match]) -> int:
    """Consecutive wins counting back from the most recent resolved match."""
    played = sorted(
        (m for m in counted_matches(matches) if m.involves(player_id)),
        key=lambda m: (m.round, m.created_at),
        reverse=True,
    )
    streak = 0
    for match in played:
        if match.winner_id != player_id:
            break
        streak += 1
    return streak
