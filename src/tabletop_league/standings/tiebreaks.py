"""Tiebreak rules making up the standings cascade."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence

from tabletop_league.models import Match, Standing
from tabletop_league.standings.stats import head_to_head


def _descending(a_value: float, b_value: float) -> int:
    """Rank the larger value first."""
    if a_value > b_value:
        return -1
    if a_value < b_value:
        return 1
    return 0


class WinsTiebreak:
    name = "wins"

    def compare(self, a: Standing, b: Standing) -> int:
        return _descending(a.wins, b.wins)


class HeadToHeadTiebreak:
    """Ranks players tied on wins by their wins against the rest of that group.

    Each player's score counts only matches against players with the same
    number of wins, so a cycle (a beat b, b beat c, c beat a) ties and falls
    through to the next rule. For a two-player tie this is their mutual record.
    """

    name = "head_to_head"

    def __init__(self, matches: Sequence[Match], standings: Sequence[Standing] = ()) -> None:
        groups: dict[int, set[str]] = defaultdict(set)
        for standing in standings:
            groups[standing.wins].add(standing.player_id)

        self._scores: dict[str, int] = {}
        for standing in standings:
            rivals = groups[standing.wins] - {standing.player_id}
            self._scores[standing.player_id] = sum(
                head_to_head(standing.player_id, rival, matches).p1_wins for rival in rivals
            )

    def compare(self, a: Standing, b: Standing) -> int:
        return _descending(self._scores.get(a.player_id, 0), self._scores.get(b.player_id, 0))


class PointsDifferentialTiebreak:
    name = "points_differential"

    def compare(self, a: Standing, b: Standing) -> int:
        return _descending(a.points_differential, b.points_differential)


class StrengthOfScheduleTiebreak:
    name = "sos"

    def compare(self, a: Standing, b: Standing) -> int:
        return _descending(a.sos, b.sos)


class TotalScoredTiebreak:
    name = "total_scored"

    def compare(self, a: Standing, b: Standing) -> int:
        return _descending(a.total_scored, b.total_scored)
