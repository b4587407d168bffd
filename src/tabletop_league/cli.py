"""CLI for tabletop league standings and pairings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import pydantic
import structlog
import typer
from rich.console import Console
from rich.logging import RichHandler

from tabletop_league import __version__
from tabletop_league.core.config import LeagueSnapshot, load_snapshot
from tabletop_league.core.errors import ComputationError, ConfigurationError, LeagueError
from tabletop_league.scoring import resolve
from tabletop_league.services.pairing import generate_pairings, round_state, suggest_pairing_method
from tabletop_league.services.reporting import format_pairings, format_standings
from tabletop_league.standings import compute_standings, top_cut

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

PAIRING_METHODS = ("swiss", "random", "manual")

app = typer.Typer(
    name="tabletop-league",
    help="Tabletop League - standings, Swiss pairings and match results for wargame leagues",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"tabletop-league v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """Tabletop League CLI."""


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load(league_path: Path) -> LeagueSnapshot:
    try:
        return load_snapshot(league_path)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e
    except pydantic.ValidationError as e:
        console.print(f"[red]Invalid league file:[/red] {e}")
        raise typer.Exit(1) from e


@app.command()
def standings(
    league_path: Annotated[Path, typer.Argument(help="Path to league YAML file")],
    phase: Annotated[
        int | None, typer.Option("--phase", help="Only count matches of this round")
    ] = None,
    cut: Annotated[
        int | None, typer.Option("--cut", help="Show only the top N (defaults to settings)")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")] = False,
) -> None:
    """Print the ranked league table.

    Args:
        league_path: Path to league YAML file.
        phase: Restrict standings to one round.
        cut: Number of players to show.
        verbose: Enable debug logging.
    """
    _configure_logging(verbose)
    snapshot = _load(league_path)

    try:
        table = compute_standings(
            snapshot.players, snapshot.matches, snapshot.settings, phase=phase
        )
        size = cut or snapshot.settings.top_cut
        if size:
            table = top_cut(table, size)
    except (LeagueError, ValueError) as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e

    title = "Standings" if phase is None else f"Standings - Round {phase}"
    console.print(format_standings(table, title=title), markup=False)
    console.print(f"\nTiebreak: {snapshot.settings.tiebreak_method}")


@app.command()
def pair(
    league_path: Annotated[Path, typer.Argument(help="Path to league YAML file")],
    round_number: Annotated[
        int | None, typer.Option("--round", "-r", help="Round to pair (default: next round)")
    ] = None,
    method: Annotated[
        str | None, typer.Option("--method", help="Pairing method: swiss or random")
    ] = None,
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")] = False,
) -> None:
    """Generate pairings for a round without saving them.

    Args:
        league_path: Path to league YAML file.
        round_number: Round to pair.
        method: Override the configured pairing method.
        seed: Seed for BYE tiebreaks and random pairing.
        verbose: Enable debug logging.
    """
    _configure_logging(verbose)
    if method is not None and method not in PAIRING_METHODS:
        console.print(f"[red]Error:[/red] Unknown pairing method '{method}'")
        raise typer.Exit(1)
    snapshot = _load(league_path)

    if round_number is None:
        current = snapshot.current_round
        started = snapshot.pairings or snapshot.matches
        round_number = current + 1 if started else current

    state = round_state(round_number, snapshot.pairings)
    console.print(f"[bold]Round {round_number}[/bold] ({state.value})")
    if method is None and snapshot.settings.pairing_method == "manual":
        method = suggest_pairing_method(round_number, snapshot.settings)
        console.print(f"  Suggested method: {method}")

    try:
        new_pairings = generate_pairings(
            round_number,
            snapshot.players,
            snapshot.matches,
            snapshot.pairings,
            snapshot.settings,
            method=method,
            seed=seed,
            league_id=snapshot.league_id,
        )
    except LeagueError as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e

    console.print(format_pairings(new_pairings, snapshot.players), markup=False)


@app.command()
def validate(
    league_path: Annotated[Path, typer.Argument(help="Path to league YAML file")],
) -> None:
    """Check a league file and re-resolve every recorded match.

    Args:
        league_path: Path to league YAML file.
    """
    snapshot = _load(league_path)
    registry = snapshot.registry()
    problems: list[str] = []

    for match in snapshot.matches:
        try:
            if match.game_system_id is not None:
                config = registry.get(match.game_system_id)
                if config.match_type != match.match_type:
                    problems.append(
                        f"Match {match.id}: {match.match_type} scoring under {config.name}"
                    )
            resolution = resolve(match)
        except (ConfigurationError, ComputationError) as e:
            problems.append(f"Match {match.id}: {e.message}")
            continue
        if match.resolved and resolution.winner_id != match.winner_id:
            problems.append(
                f"Match {match.id}: recorded winner {match.winner_id}, "
                f"derived winner {resolution.winner_id}"
            )

    console.print(f"  Players: {len(snapshot.players)}")
    console.print(f"  Matches: {len(snapshot.matches)}")
    console.print(f"  Pairings: {len(snapshot.pairings)}")
    console.print(f"  Game systems: {len(registry)}")

    if problems:
        for problem in problems:
            console.print(f"[red]- {problem}[/red]")
        raise typer.Exit(1)
    console.print("[green]League file is valid![/green]")


@app.command()
def info() -> None:
    """Show tool information and example commands."""
    console.print("[bold]Tabletop League[/bold]")
    console.print(f"Version: {__version__}\n")

    console.print("[bold]Example Commands:[/bold]")
    console.print("  # Current standings")
    console.print("  tabletop-league standings league.yaml\n")

    console.print("  # Standings for round 2 only")
    console.print("  tabletop-league standings league.yaml --phase 2\n")

    console.print("  # Swiss pairings for the next round, reproducible")
    console.print("  tabletop-league pair league.yaml --seed 7\n")

    console.print("  # Validate a league file")
    console.print("  tabletop-league validate league.yaml")


if __name__ == "__main__":
    app()
