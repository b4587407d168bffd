"""League standings with a configurable tiebreak cascade."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from functools import cmp_to_key

import structlog

from tabletop_league.core.config import LeagueSettings
from tabletop_league.models import Match, Player, Standing
from tabletop_league.standings.base import Tiebreak
from tabletop_league.standings.stats import (
    HeadToHead,
    counted_matches,
    head_to_head,
    points_differential,
    strength_of_schedule,
    tally_records,
    total_scored,
)
from tabletop_league.standings.tiebreaks import (
    HeadToHeadTiebreak,
    PointsDifferentialTiebreak,
    StrengthOfScheduleTiebreak,
    TotalScoredTiebreak,
    WinsTiebreak,
)

logger = structlog.get_logger()


def build_tiebreak_cascade(
    settings: LeagueSettings,
    matches: Sequence[Match],
    standings: Sequence[Standing] = (),
) -> list[Tiebreak]:
    """Create the ordered tiebreak rules for the league's tiebreak method.

    Wins always come first, points differential and total scored are always
    included. Head-to-head sits between wins and differential; strength of
    schedule between differential and total scored.

    Args:
        settings: League settings.
        matches: Matches counted towards the standings.
        standings: Unranked standings; head-to-head groups them by wins.

    Returns:
        Tiebreak rules in the order they are consulted.
    """
    cascade: list[Tiebreak] = [WinsTiebreak()]
    if settings.tiebreak_method == "head_to_head":
        cascade.append(HeadToHeadTiebreak(matches, standings))
    cascade.append(PointsDifferentialTiebreak())
    if settings.tiebreak_method == "sos":
        cascade.append(StrengthOfScheduleTiebreak())
    cascade.append(TotalScoredTiebreak())
    return cascade


def rank_standings(standings: Sequence[Standing], cascade: Sequence[Tiebreak]) -> list[Standing]:
    """Sort standings by the cascade and assign ranks.

    Each tiebreak is consulted only when every earlier one ties. Players
    still tied after the last rule keep their input order and receive
    consecutive ranks.
    """

    def compare(a: Standing, b: Standing) -> int:
        for tiebreak in cascade:
            result = tiebreak.compare(a, b)
            if result:
                return result
        return 0

    ordered = sorted(standings, key=cmp_to_key(compare))
    return [s.model_copy(update={"rank": i}) for i, s in enumerate(ordered, start=1)]


def compute_standings(
    players: Sequence[Player],
    matches: Sequence[Match],
    settings: LeagueSettings,
    phase: int | None = None,
) -> list[Standing]:
    """Compute the ranked league table.

    Only resolved matches count. Records are rebuilt from those matches, so
    the players' stored running totals are not consulted.

    Args:
        players: All league players, in registration order.
        matches: Match history.
        settings: League settings selecting the tiebreak method.
        phase: Restrict to matches of this round; None for the whole league.

    Returns:
        Standings sorted by rank, rank 1 first.
    """
    counted = counted_matches(matches, phase)
    records = tally_records(counted)
    # Opponent strength always uses the league-wide record.
    overall_records = records if phase is None else tally_records(counted_matches(matches))

    standings = []
    for player in players:
        record = records.get(player.id)
        standings.append(
            Standing(
                player=player,
                wins=record.wins if record else 0,
                losses=record.losses if record else 0,
                draws=record.draws if record else 0,
                points_differential=points_differential(player.id, counted),
                total_scored=total_scored(player.id, counted),
                sos=strength_of_schedule(player.id, counted, overall_records),
                phase=phase,
            )
        )

    ranked = rank_standings(standings, build_tiebreak_cascade(settings, counted, standings))
    logger.debug(
        "standings_computed",
        players=len(ranked),
        matches=len(counted),
        tiebreak=settings.tiebreak_method,
        phase=phase,
    )
    return ranked


def top_cut(standings: Sequence[Standing], size: int) -> list[Standing]:
    """Return the players advancing from ranked standings.

    Raises:
        ValueError: If size is not positive.
    """
    if size < 1:
        msg = "Top cut size must be at least 1"
        raise ValueError(msg)
    return sorted(standings, key=lambda s: s.rank)[:size]


def player_standing(
    player_id: str,
    players: Sequence[Player],
    matches: Sequence[Match],
    settings: LeagueSettings,
    phase: int | None = None,
) -> Standing | None:
    """Look up one player's standing, or None if they are not in the league."""
    for standing in compute_standings(players, matches, settings, phase):
        if standing.player_id == player_id:
            return standing
    return None


@dataclass(frozen=True)
class PlayerComparison:
    """Side-by-side comparison of two players."""

    player1: Standing | None
    player2: Standing | None
    head_to_head: HeadToHead

    @property
    def rank_difference(self) -> int:
        return (self.player1.rank if self.player1 else 0) - (
            self.player2.rank if self.player2 else 0
        )

    @property
    def win_difference(self) -> int:
        return (self.player1.wins if self.player1 else 0) - (
            self.player2.wins if self.player2 else 0
        )

    @property
    def differential_difference(self) -> int:
        return (self.player1.points_differential if self.player1 else 0) - (
            self.player2.points_differential if self.player2 else 0
        )


def compare_players(
    p1_id: str,
    p2_id: str,
    players: Sequence[Player],
    matches: Sequence[Match],
    settings: LeagueSettings,
) -> PlayerComparison:
    """Compare two players' standings and their head-to-head record."""
    standings = {s.player_id: s for s in compute_standings(players, matches, settings)}
    return PlayerComparison(
        player1=standings.get(p1_id),
        player2=standings.get(p2_id),
        head_to_head=head_to_head(p1_id, p2_id, counted_matches(matches)),
    )
