"""Plain-text tables for standings and pairings."""

from __future__ import annotations

from collections.abc import Sequence

from tabulate import tabulate

from tabletop_league.models import Pairing, Player, Standing

STANDINGS_HEADERS = ("Rank", "Player", "W", "L", "D", "Diff", "Scored", "SOS")
PAIRINGS_HEADERS = ("Table", "Player 1", "Player 2", "Status")


def _display_name(player: Player) -> str:
    return player.name or player.id


def format_standings(
    standings: Sequence[Standing],
    title: str | None = None,
    tablefmt: str = "github",
) -> str:
    """Render ranked standings as a table.

    Args:
        standings: Ranked standings.
        title: Optional markdown heading.
        tablefmt: tabulate table format.

    Returns:
        Table text.
    """
    rows = [
        (
            s.rank,
            _display_name(s.player),
            s.wins,
            s.losses,
            s.draws,
            f"{s.points_differential:+d}",
            s.total_scored,
            f"{s.sos:.3f}",
        )
        for s in standings
    ]
    table = tabulate(rows, headers=STANDINGS_HEADERS, tablefmt=tablefmt)
    if title:
        return f"# {title}\n\n{table}"
    return table


def format_pairings(
    pairings: Sequence[Pairing],
    players: Sequence[Player],
    tablefmt: str = "github",
) -> str:
    """Render pairings as a table, with BYEs listed as such."""
    names = {p.id: _display_name(p) for p in players}
    rows = [
        (
            table_number,
            names.get(p.player1_id, p.player1_id),
            "BYE" if p.player2_id is None else names.get(p.player2_id, p.player2_id),
            p.status.value,
        )
        for table_number, p in enumerate(pairings, start=1)
    ]
    return tabulate(rows, headers=PAIRINGS_HEADERS, tablefmt=tablefmt)
