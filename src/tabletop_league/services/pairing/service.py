"""Round pairing generation, manual pairings and round state."""

from __future__ import annotations

import random
from collections.abc import Sequence
from enum import StrEnum

import structlog
from pydantic import BaseModel

from tabletop_league.core.config import LeagueSettings, PairingMethod
from tabletop_league.core.errors import ConfigurationError
from tabletop_league.models import Match, Pairing, PairingStatus, Player
from tabletop_league.services.pairing.swiss import Entrant, random_pairing, swiss_pairing
from tabletop_league.standings.stats import counted_matches, points_differential, tally_records

logger = structlog.get_logger()

PLAYER1_INACTIVE = "Player 1 is not active in this round"
PLAYER2_INACTIVE = "Player 2 is not active in this round"
SAME_PLAYER = "Players must be different"
DUPLICATE_PAIRING = "Pairing already exists for this round"


class RoundState(StrEnum):
    NOT_GENERATED = "not_generated"
    PENDING = "pending"
    COMPLETE = "complete"


class PairingValidation(BaseModel):
    """Result of checking (and optionally creating) a manual pairing."""

    valid: bool
    error: str | None = None
    pairing: Pairing | None = None


def get_active_players(round_number: int, players: Sequence[Player]) -> list[Player]:
    """Players taking part in the given round, in input order."""
    return [p for p in players if p.is_active_in_round(round_number)]


def has_pairing(
    p1_id: str,
    p2_id: str,
    pairings: Sequence[Pairing],
    round_number: int | None = None,
) -> bool:
    """Whether the two players are paired, in the given round or any round."""
    return any(
        p.is_between(p1_id, p2_id) and (round_number is None or p.round == round_number)
        for p in pairings
    )


def _history(
    round_number: int, matches: Sequence[Match], pairings: Sequence[Pairing]
) -> tuple[list[Match], list[Pairing]]:
    # Pairings of the round being generated are about to be replaced; later
    # rounds have not been played yet.
    earlier_matches = [m for m in matches if m.round < round_number]
    earlier_pairings = [p for p in pairings if p.round < round_number]
    return earlier_matches, earlier_pairings


def build_entrants(
    round_number: int,
    players: Sequence[Player],
    matches: Sequence[Match],
    pairings: Sequence[Pairing],
) -> list[Entrant]:
    """Create pairing entrants for the players active in a round.

    Wins and differential come from resolved matches of earlier rounds.
    Previous opponents come from both earlier pairings and matches.
    """
    earlier_matches, earlier_pairings = _history(round_number, matches, pairings)
    resolved = counted_matches(earlier_matches)
    records = tally_records(resolved)

    entrants = []
    for player in get_active_players(round_number, players):
        played = {m.opponent_of(player.id) for m in earlier_matches if m.involves(player.id)}
        byes = 0
        for pairing in earlier_pairings:
            if not pairing.involves(player.id):
                continue
            if pairing.is_bye:
                byes += 1
            else:
                played.add(
                    pairing.player2_id if pairing.player1_id == player.id else pairing.player1_id
                )
        record = records.get(player.id)
        entrants.append(
            Entrant(
                id=player.id,
                wins=record.wins if record else 0,
                differential=points_differential(player.id, resolved),
                played_against=played,
                byes=byes,
            )
        )
    return entrants


def create_bye_pairing(
    player_id: str, round_number: int, league_id: str | None = None
) -> Pairing:
    """A BYE pairing, created already completed."""
    return Pairing(
        league_id=league_id,
        round=round_number,
        player1_id=player_id,
        player2_id=None,
        status=PairingStatus.COMPLETED,
    )


def _to_pairings(
    pairs: list[tuple[Entrant, Entrant]],
    bye: Entrant | None,
    round_number: int,
    league_id: str | None,
) -> list[Pairing]:
    result = []
    if bye is not None:
        result.append(create_bye_pairing(bye.id, round_number, league_id))
    for entrant_a, entrant_b in pairs:
        result.append(
            Pairing(
                league_id=league_id,
                round=round_number,
                player1_id=entrant_a.id,
                player2_id=entrant_b.id,
            )
        )
    return result


def generate_swiss_pairings(
    round_number: int,
    players: Sequence[Player],
    matches: Sequence[Match],
    pairings: Sequence[Pairing],
    settings: LeagueSettings,
    rng: random.Random,
    league_id: str | None = None,
) -> list[Pairing]:
    """Pair players with similar records while avoiding rematches."""
    entrants = build_entrants(round_number, players, matches, pairings)
    pairs, bye = swiss_pairing(
        entrants,
        rng,
        allow_rematches=settings.allow_rematches,
        assign_bye=settings.bye_handling == "auto",
    )
    if bye is not None:
        logger.info("bye_assigned", player=bye.id, round=round_number, previous_byes=bye.byes)
    return _to_pairings(pairs, bye, round_number, league_id)


def generate_random_pairings(
    round_number: int,
    players: Sequence[Player],
    rng: random.Random,
    league_id: str | None = None,
) -> list[Pairing]:
    """Pair active players in a uniformly shuffled order.

    The odd player out always gets a BYE, whatever the BYE handling setting.
    """
    entrants = [Entrant(id=p.id) for p in get_active_players(round_number, players)]
    pairs, bye = random_pairing(entrants, rng)
    if bye is not None:
        logger.info("bye_assigned", player=bye.id, round=round_number)
    return _to_pairings(pairs, bye, round_number, league_id)


def generate_pairings(
    round_number: int,
    players: Sequence[Player],
    matches: Sequence[Match],
    pairings: Sequence[Pairing],
    settings: LeagueSettings,
    *,
    method: PairingMethod | None = None,
    seed: int | None = None,
    rng: random.Random | None = None,
    league_id: str | None = None,
) -> list[Pairing]:
    """Generate the pairings for a round.

    Only pairings and matches of earlier rounds count as rematch history and
    previous BYEs; existing pairings of the same round are treated as
    replaced. The returned pairings are not persisted.

    Args:
        round_number: Round to pair.
        players: All league players.
        matches: Match history.
        pairings: Pairing history.
        settings: League settings.
        method: Override of ``settings.pairing_method``.
        seed: Seed for a new random source when ``rng`` is not given.
        rng: Random source for BYE tiebreaks and random pairing.
        league_id: League ID stamped on the new pairings.

    Returns:
        New pairings, BYE first when one is assigned.

    Raises:
        ConfigurationError: If the method is ``manual``.
    """
    method = method or settings.pairing_method
    rng = rng or random.Random(seed)  # noqa: S311

    if method == "swiss":
        result = generate_swiss_pairings(
            round_number, players, matches, pairings, settings, rng, league_id
        )
    elif method == "random":
        result = generate_random_pairings(round_number, players, rng, league_id)
    else:
        raise ConfigurationError(
            "Manual pairing method does not generate pairings",
            "Create pairings one at a time with create_manual_pairing.",
        )

    logger.info("pairings_generated", round=round_number, method=method, count=len(result))
    return result


def validate_pairing(
    p1_id: str,
    p2_id: str | None,
    round_number: int,
    players: Sequence[Player],
    pairings: Sequence[Pairing],
) -> PairingValidation:
    """Check that a manual pairing can be added to a round.

    Returns:
        PairingValidation with the first problem found, if any.
    """
    active_ids = {p.id for p in get_active_players(round_number, players)}

    if p1_id not in active_ids:
        return PairingValidation(valid=False, error=PLAYER1_INACTIVE)
    if p2_id is not None and p2_id not in active_ids:
        return PairingValidation(valid=False, error=PLAYER2_INACTIVE)
    if p2_id is not None and p1_id == p2_id:
        return PairingValidation(valid=False, error=SAME_PLAYER)
    if p2_id is not None and has_pairing(p1_id, p2_id, pairings, round_number):
        return PairingValidation(valid=False, error=DUPLICATE_PAIRING)
    return PairingValidation(valid=True)


def create_manual_pairing(
    p1_id: str,
    p2_id: str | None,
    round_number: int,
    players: Sequence[Player],
    pairings: Sequence[Pairing],
    league_id: str | None = None,
) -> PairingValidation:
    """Validate and build an organizer-chosen pairing.

    Omitting the second player creates a completed BYE.
    """
    validation = validate_pairing(p1_id, p2_id, round_number, players, pairings)
    if not validation.valid:
        logger.warning(
            "manual_pairing_rejected",
            player1=p1_id,
            player2=p2_id,
            round=round_number,
            error=validation.error,
        )
        return validation

    if p2_id is None:
        pairing = create_bye_pairing(p1_id, round_number, league_id)
    else:
        pairing = Pairing(
            league_id=league_id, round=round_number, player1_id=p1_id, player2_id=p2_id
        )
    return PairingValidation(valid=True, pairing=pairing)


def get_unpaired_players(
    round_number: int, players: Sequence[Player], pairings: Sequence[Pairing]
) -> list[Player]:
    """Active players without a pairing in the given round."""
    paired: set[str] = set()
    for pairing in pairings:
        if pairing.round == round_number:
            paired.add(pairing.player1_id)
            if pairing.player2_id is not None:
                paired.add(pairing.player2_id)
    return [p for p in get_active_players(round_number, players) if p.id not in paired]


def suggest_pairing_method(round_number: int, settings: LeagueSettings) -> PairingMethod:
    if round_number == 1:
        return settings.first_round_pairing_method
    return settings.subsequent_round_method


def round_state(round_number: int, pairings: Sequence[Pairing]) -> RoundState:
    """Where a round stands: not generated, matches pending, or complete."""
    in_round = [p for p in pairings if p.round == round_number]
    if not in_round:
        return RoundState.NOT_GENERATED
    if all(p.status == PairingStatus.COMPLETED for p in in_round):
        return RoundState.COMPLETE
    return RoundState.PENDING


def complete_pairing(pairing: Pairing, match: Match) -> Pairing:
    """Link a resolved match to its pairing and mark the pairing completed.

    Raises:
        ValueError: If the match is unresolved or between different players.
    """
    if not match.resolved:
        msg = f"Match {match.id} is not resolved"
        raise ValueError(msg)
    if pairing.is_bye or not pairing.is_between(match.player1_id, match.player2_id):
        msg = f"Match {match.id} does not belong to this pairing"
        raise ValueError(msg)
    return pairing.model_copy(update={"match_id": match.id, "status": PairingStatus.COMPLETED})
