"""Updating players' running totals from match results."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from tabletop_league.models import Match, Player
from tabletop_league.standings.stats import counted_matches, tally_records

logger = structlog.get_logger()


def recompute_records(players: Sequence[Player], matches: Sequence[Match]) -> list[Player]:
    """Rebuild every player's totals from the resolved matches.

    Args:
        players: Players to update.
        matches: Full match history; unresolved matches are ignored.

    Returns:
        Updated player copies, in input order.
    """
    resolved = counted_matches(matches)
    records = tally_records(resolved)
    points: dict[str, int] = {}
    for match in resolved:
        for player_id in (match.player1_id, match.player2_id):
            points[player_id] = points.get(player_id, 0) + match.score_for(player_id)[0]

    updated = []
    for player in players:
        record = records.get(player.id)
        updated.append(
            player.model_copy(
                update={
                    "wins": record.wins if record else 0,
                    "losses": record.losses if record else 0,
                    "draws": record.draws if record else 0,
                    "total_points": points.get(player.id, 0),
                }
            )
        )
    logger.debug("records_recomputed", players=len(updated), matches=len(resolved))
    return updated


def _adjust(player: Player, match: Match, sign: int) -> Player:
    own_score = match.score_for(player.id)[0]
    if match.winner_id is None:
        field = "draws"
    elif match.winner_id == player.id:
        field = "wins"
    else:
        field = "losses"
    return player.model_copy(
        update={
            field: max(0, getattr(player, field) + sign),
            "total_points": player.total_points + sign * own_score,
        }
    )


def _apply(players: Sequence[Player], match: Match, sign: int) -> list[Player]:
    if not match.resolved:
        msg = f"Match {match.id} must be resolved before updating player records"
        raise ValueError(msg)
    return [_adjust(p, match, sign) if match.involves(p.id) else p for p in players]


def apply_match(players: Sequence[Player], match: Match) -> list[Player]:
    """Add a resolved match to both players' running totals.

    Raises:
        ValueError: If the match is not resolved.
    """
    return _apply(players, match, 1)


def revert_match(players: Sequence[Player], match: Match) -> list[Player]:
    """Remove a previously applied match from both players' running totals.

    Use before applying an edited version of the same match.

    Raises:
        ValueError: If the match is not resolved.
    """
    return _apply(players, match, -1)
