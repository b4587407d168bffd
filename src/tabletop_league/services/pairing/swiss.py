"""Swiss-style and random pairing algorithms."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

import structlog

logger = structlog.get_logger()


@dataclass
class Entrant:
    """A player available for pairing in the current round.

    Attributes:
        id: Player ID.
        wins: Wins so far, the primary seeding key.
        differential: Points differential so far, the secondary seeding key.
        played_against: Opponent IDs already paired with this player.
        byes: BYEs received in earlier rounds.
    """

    id: str
    wins: int = 0
    differential: int = 0
    played_against: set[str] = field(default_factory=set)
    byes: int = 0


def select_bye(entrants: list[Entrant], rng: random.Random) -> Entrant:
    """Choose a BYE recipient among the entrants with the fewest BYEs.

    Ties are broken uniformly at random.

    Raises:
        ValueError: If there are no entrants.
    """
    if not entrants:
        msg = "Cannot assign a BYE without entrants"
        raise ValueError(msg)
    min_byes = min(e.byes for e in entrants)
    eligible = [e for e in entrants if e.byes == min_byes]
    return rng.choice(eligible)


def seed_order(entrants: list[Entrant]) -> list[Entrant]:
    """Sort by wins then differential, both descending.

    The sort is stable, so entrants level on both keep their input order.
    """
    return sorted(entrants, key=lambda e: (-e.wins, -e.differential))


def swiss_pairing(
    entrants: list[Entrant],
    rng: random.Random,
    allow_rematches: bool = False,
    assign_bye: bool = True,
) -> tuple[list[tuple[Entrant, Entrant]], Entrant | None]:
    """Generate Swiss-style pairings for one round.

    1. With an odd count and ``assign_bye`` set, one entrant with the fewest
       previous BYEs sits out.
    2. The rest are seeded by wins and points differential.
    3. Each unpaired entrant, top seed first, is paired with the next seed it
       has not played yet (any next seed when rematches are allowed).
    4. When every remaining seed is a rematch, the entrant is paired with
       the next unpaired seed regardless, so nobody is left out.

    Args:
        entrants: Entrants active this round.
        rng: Random source for the BYE tiebreak.
        allow_rematches: Pair strictly by seed, ignoring history.
        assign_bye: Whether to pick a BYE recipient on an odd count.

    Returns:
        Tuple of (pairs, bye_recipient). bye_recipient is None if no BYE was
        assigned. With an odd count and no BYE, the last seed stays unpaired.
    """
    pool = list(entrants)
    bye_recipient: Entrant | None = None
    if len(pool) % 2 == 1 and assign_bye:
        bye_recipient = select_bye(pool, rng)
        pool.remove(bye_recipient)

    seeded = seed_order(pool)
    pairs: list[tuple[Entrant, Entrant]] = []
    used: set[str] = set()

    for i, entrant_a in enumerate(seeded):
        if entrant_a.id in used:
            continue

        opponent = _next_opponent(seeded[i + 1 :], entrant_a, used, allow_rematches)
        if opponent is None and not allow_rematches:
            opponent = _next_opponent(seeded[i + 1 :], entrant_a, used, allow_rematches=True)
            if opponent is not None:
                logger.debug("rematch_fallback", player=entrant_a.id, opponent=opponent.id)
        if opponent is None:
            continue

        pairs.append((entrant_a, opponent))
        used.add(entrant_a.id)
        used.add(opponent.id)

    return pairs, bye_recipient


def _next_opponent(
    candidates: list[Entrant], entrant: Entrant, used: set[str], allow_rematches: bool
) -> Entrant | None:
    for candidate in candidates:
        if candidate.id in used:
            continue
        if not allow_rematches and candidate.id in entrant.played_against:
            continue
        return candidate
    return None


def random_pairing(
    entrants: list[Entrant],
    rng: random.Random,
) -> tuple[list[tuple[Entrant, Entrant]], Entrant | None]:
    """Shuffle entrants and pair them in order.

    With an odd count, the last entrant after shuffling gets the BYE.
    """
    shuffled = list(entrants)
    rng.shuffle(shuffled)

    bye_recipient: Entrant | None = None
    if len(shuffled) % 2 == 1:
        bye_recipient = shuffled.pop()

    pairs = [(shuffled[i], shuffled[i + 1]) for i in range(0, len(shuffled), 2)]
    return pairs, bye_recipient
