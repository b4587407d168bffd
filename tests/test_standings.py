"""Tests for standings and the tiebreak cascade."""

import itertools
from datetime import UTC, datetime, timedelta

import pytest

from tabletop_league.core.config import LeagueSettings
from tabletop_league.models import Match, PercentageScore, Player, ScenarioScore, VictoryPointsScore
from tabletop_league.scoring import resolve_match
from tabletop_league.standings import (
    HeadToHeadTiebreak,
    PointsDifferentialTiebreak,
    StrengthOfScheduleTiebreak,
    TotalScoredTiebreak,
    WinsTiebreak,
    build_tiebreak_cascade,
    compare_players,
    compute_standings,
    head_to_head,
    player_standing,
    strength_of_schedule,
    tally_records,
    top_cut,
    win_streak,
)

_BASE_TIME = datetime(2026, 1, 1, tzinfo=UTC)


def _vp(match_id, p1, p2, s1, s2, round_number=1):
    return resolve_match(
        Match(
            id=match_id,
            round=round_number,
            player1_id=p1,
            player2_id=p2,
            scoring=VictoryPointsScore(player1_points=s1, player2_points=s2),
            created_at=_BASE_TIME + timedelta(days=round_number),
        )
    )


def _players(*ids):
    return [Player(id=pid, name=pid.upper()) for pid in ids]


def _ids(standings):
    return [s.player_id for s in standings]


def _by_id(standings):
    return {s.player_id: s for s in standings}


class TestDerivedStats:
    """Tests for per-player statistics."""

    def test_differential_and_total_scored(self):
        """Test differential and total scored sum across matches."""
        matches = [_vp("m1", "a", "b", 70, 50), _vp("m2", "c", "a", 60, 40, round_number=2)]
        table = _by_id(compute_standings(_players("a", "b", "c"), matches, LeagueSettings()))
        assert table["a"].points_differential == 0
        assert table["a"].total_scored == 110
        assert table["b"].points_differential == -20
        assert table["c"].total_scored == 60

    def test_percentage_uses_casualties(self):
        """Test percentage matches score by casualties inflicted."""
        match = resolve_match(
            Match(
                id="m1",
                round=1,
                player1_id="a",
                player2_id="b",
                scoring=PercentageScore(
                    player1_army_value=1000,
                    player2_army_value=1000,
                    player1_casualties=500,
                    player2_casualties=100,
                ),
            )
        )
        table = _by_id(compute_standings(_players("a", "b"), [match], LeagueSettings()))
        assert table["a"].points_differential == 400
        assert table["b"].total_scored == 100

    def test_scenario_uses_casualties(self):
        """Test scenario matches score by casualties."""
        match = resolve_match(
            Match(
                id="m1",
                round=1,
                player1_id="a",
                player2_id="b",
                scoring=ScenarioScore(
                    player1_objective_completed=True,
                    player1_casualties=3,
                    player2_casualties=9,
                ),
            )
        )
        table = _by_id(compute_standings(_players("a", "b"), [match], LeagueSettings()))
        assert table["a"].wins == 1
        assert table["a"].points_differential == -6

    def test_record_matches_resolved_count(self):
        """Test wins + losses + draws equals resolved matches played."""
        matches = [
            _vp("m1", "a", "b", 10, 5),
            _vp("m2", "a", "c", 5, 5),
            _vp("m3", "b", "c", 1, 9, round_number=2),
            Match(id="m4", round=3, player1_id="a", player2_id="b"),  # unresolved
        ]
        for standing in compute_standings(_players("a", "b", "c"), matches, LeagueSettings()):
            played = [m for m in matches if m.resolved and m.involves(standing.player_id)]
            assert standing.total_games == len(played)

    def test_sos_uses_current_opponent_records(self):
        """Test SOS averages distinct opponents' current win rates."""
        matches = [
            _vp("m1", "a", "b", 10, 0),
            _vp("m2", "a", "b", 10, 0, round_number=2),
            _vp("m3", "a", "c", 0, 10, round_number=3),
        ]
        records = tally_records(matches)
        # b: 0/2, c: 1/1
        assert strength_of_schedule("a", matches, records) == pytest.approx(0.5)
        # a: 2/3
        assert strength_of_schedule("b", matches, records) == pytest.approx(2 / 3)

    def test_sos_without_opponents(self):
        """Test SOS is zero for a player who has not played."""
        assert strength_of_schedule("z", [], {}) == 0.0

    def test_head_to_head(self):
        """Test head-to-head counts mutual results only."""
        matches = [
            _vp("m1", "a", "b", 10, 0),
            _vp("m2", "b", "a", 10, 0, round_number=2),
            _vp("m3", "b", "a", 10, 0, round_number=3),
            _vp("m4", "a", "b", 5, 5, round_number=4),
            _vp("m5", "a", "c", 10, 0, round_number=5),
        ]
        record = head_to_head("a", "b", matches)
        assert (record.p1_wins, record.p2_wins, record.draws, record.total) == (1, 2, 1, 4)

    def test_win_streak(self):
        """Test the streak counts back from the most recent match."""
        matches = [
            _vp("m1", "a", "b", 10, 0, round_number=1),
            _vp("m2", "a", "c", 0, 10, round_number=2),
            _vp("m3", "a", "b", 10, 0, round_number=3),
            _vp("m4", "c", "a", 0, 10, round_number=4),
        ]
        assert win_streak("a", matches) == 2
        assert win_streak("b", matches) == 0

    def test_win_streak_skips_unresolved(self):
        """Test a pending latest match does not reset the streak."""
        matches = [
            _vp("m1", "a", "b", 10, 0, round_number=1),
            _vp("m2", "a", "c", 10, 0, round_number=2),
            Match(id="m3", round=3, player1_id="a", player2_id="b"),
        ]
        assert win_streak("a", matches) == 2


class TestTiebreakCascade:
    """Tests for cascade construction and ordering."""

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            (
                "points_differential",
                [WinsTiebreak, PointsDifferentialTiebreak, TotalScoredTiebreak],
            ),
            (
                "head_to_head",
                [WinsTiebreak, HeadToHeadTiebreak, PointsDifferentialTiebreak, TotalScoredTiebreak],
            ),
            (
                "sos",
                [
                    WinsTiebreak,
                    PointsDifferentialTiebreak,
                    StrengthOfScheduleTiebreak,
                    TotalScoredTiebreak,
                ],
            ),
        ],
    )
    def test_cascade_order(self, method, expected):
        """Test each method inserts its rule at the right level."""
        cascade = build_tiebreak_cascade(LeagueSettings(tiebreak_method=method), [])
        assert [type(t) for t in cascade] == expected

    def test_wins_rank_first(self):
        """Test wins outrank a better differential."""
        matches = [
            _vp("m1", "a", "b", 11, 10),
            _vp("m2", "c", "d", 90, 0),
            _vp("m3", "a", "d", 11, 10, round_number=2),
            _vp("m4", "b", "c", 12, 10, round_number=2),
        ]
        table = compute_standings(_players("a", "b", "c", "d"), matches, LeagueSettings())
        assert _ids(table)[0] == "a"
        assert [s.rank for s in table] == [1, 2, 3, 4]

    def _sos_tie(self):
        # a and b both 1-1 with +0 differential and 10 scored each.
        # a lost to c (2-0 overall), b lost to d (1-1 overall).
        players = _players("a", "b", "c", "d", "e", "f")
        matches = [
            _vp("m1", "a", "e", 10, 0),
            _vp("m2", "c", "a", 10, 0, round_number=2),
            _vp("m3", "b", "f", 10, 0),
            _vp("m4", "d", "b", 10, 0, round_number=2),
            _vp("m5", "c", "d", 1, 0, round_number=3),
        ]
        return players, matches

    def test_sos_breaks_tie_when_configured(self):
        """Test higher SOS ranks first with the sos method."""
        players, matches = self._sos_tie()
        # Put b first in input order so the result is not insertion order.
        players = [players[1], players[0], *players[2:]]
        table = compute_standings(players, matches, LeagueSettings(tiebreak_method="sos"))
        by_id = {s.player_id: s for s in table}
        assert by_id["a"].sos > by_id["b"].sos
        assert by_id["a"].rank < by_id["b"].rank

    def test_sos_ignored_without_method(self):
        """Test without the sos method the tie falls through to total scored."""
        players, matches = self._sos_tie()
        players = [players[1], players[0], *players[2:]]
        table = compute_standings(
            players, matches, LeagueSettings(tiebreak_method="points_differential")
        )
        by_id = {s.player_id: s for s in table}
        # Same total scored: sequential ranks in input order, b before a.
        assert by_id["b"].rank + 1 == by_id["a"].rank

    def test_head_to_head_breaks_tie(self):
        """Test mutual results decide before differential with head_to_head."""
        # a and b are both 1-1; b has the better differential but lost to a.
        matches = [
            _vp("m1", "a", "b", 10, 9),
            _vp("m2", "b", "d", 50, 0, round_number=2),
            _vp("m3", "c", "a", 30, 0, round_number=2),
            _vp("m4", "c", "d", 10, 0, round_number=3),
        ]
        players = _players("a", "b", "c", "d")
        diff = compute_standings(players, matches, LeagueSettings())
        h2h = compute_standings(players, matches, LeagueSettings(tiebreak_method="head_to_head"))
        assert _ids(diff) == ["c", "b", "a", "d"]
        assert _ids(h2h) == ["c", "a", "b", "d"]

    def test_head_to_head_cycle_independent_of_input_order(self):
        """Test a head-to-head cycle falls through to differential for any player order."""
        matches = [
            _vp("m1", "a", "b", 11, 10),
            _vp("m2", "b", "c", 30, 10, round_number=2),
            _vp("m3", "c", "a", 50, 10, round_number=3),
        ]
        settings = LeagueSettings(tiebreak_method="head_to_head")

        orders = {
            tuple(_ids(compute_standings(_players(*ids), matches, settings)))
            for ids in itertools.permutations("abc")
        }

        assert orders == {("c", "b", "a")}

    def test_tied_players_resolved_by_total_scored(self):
        """Test A/B tied on wins and differential fall to total scored; C below."""
        matches = [
            # a: 3 wins, +10, 90 scored
            _vp("m1", "a", "x1", 30, 27),
            _vp("m2", "a", "x2", 30, 27, round_number=2),
            _vp("m3", "a", "x3", 30, 26, round_number=3),
            # b: 3 wins, +10, 15 scored
            _vp("m4", "b", "y1", 5, 2),
            _vp("m5", "b", "y2", 5, 2, round_number=2),
            _vp("m6", "b", "y3", 5, 1, round_number=3),
            # c: 2 wins, +80
            _vp("m7", "c", "z1", 40, 0),
            _vp("m8", "c", "z2", 40, 0, round_number=2),
        ]
        players = _players("c", "b", "a", "x1", "x2", "x3", "y1", "y2", "y3", "z1", "z2")
        table = compute_standings(
            players, matches, LeagueSettings(tiebreak_method="points_differential")
        )
        by_id = _by_id(table)
        assert by_id["a"].wins == by_id["b"].wins == 3
        assert by_id["a"].points_differential == by_id["b"].points_differential == 10
        assert by_id["c"].wins == 2
        assert by_id["a"].rank == 1  # higher total scored
        assert by_id["b"].rank == 2
        assert by_id["c"].rank == 3

    def test_full_tie_gets_sequential_ranks(self):
        """Test players tied on every level get consecutive ranks in input order."""
        players = _players("b", "a")
        table = compute_standings(players, [], LeagueSettings(tiebreak_method="sos"))
        assert _ids(table) == ["b", "a"]
        assert [s.rank for s in table] == [1, 2]

    def test_idempotent(self):
        """Test repeated runs produce the same order and ranks."""
        players, matches = self._sos_tie()
        settings = LeagueSettings(tiebreak_method="sos")
        first = compute_standings(players, matches, settings)
        second = compute_standings(players, matches, settings)
        assert first == second


class TestPhaseAndHelpers:
    """Tests for phase filtering and helper queries."""

    def test_phase_filters_matches(self):
        """Test a phase counts only that round's matches."""
        matches = [_vp("m1", "a", "b", 10, 0), _vp("m2", "b", "a", 10, 0, round_number=2)]
        table = compute_standings(_players("a", "b"), matches, LeagueSettings(), phase=2)
        assert _ids(table) == ["b", "a"]
        assert all(s.phase == 2 for s in table)
        assert table[0].total_games == 1

    def test_top_cut(self):
        """Test the cut returns the top N by rank."""
        matches = [_vp("m1", "a", "b", 10, 0), _vp("m2", "c", "d", 10, 0)]
        table = compute_standings(_players("a", "b", "c", "d"), matches, LeagueSettings())
        assert _ids(top_cut(table, 2)) == ["a", "c"]
        with pytest.raises(ValueError, match="at least 1"):
            top_cut(table, 0)

    def test_player_standing_and_compare(self):
        """Test single-player lookup and comparison."""
        matches = [_vp("m1", "a", "b", 10, 0)]
        players = _players("a", "b")
        assert player_standing("a", players, matches, LeagueSettings()).rank == 1
        assert player_standing("zz", players, matches, LeagueSettings()) is None

        comparison = compare_players("a", "b", players, matches, LeagueSettings())
        assert comparison.rank_difference == -1
        assert comparison.win_difference == 1
        assert comparison.differential_difference == 20
        assert comparison.head_to_head.p1_wins == 1
