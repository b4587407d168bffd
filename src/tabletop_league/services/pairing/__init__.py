from .service import (
    DUPLICATE_PAIRING,
    PLAYER1_INACTIVE,
    PLAYER2_INACTIVE,
    SAME_PLAYER,
    PairingValidation,
    RoundState,
    build_entrants,
    complete_pairing,
    create_bye_pairing,
    create_manual_pairing,
    generate_pairings,
    generate_random_pairings,
    generate_swiss_pairings,
    get_active_players,
    get_unpaired_players,
    has_pairing,
    round_state,
    suggest_pairing_method,
    validate_pairing,
)
from .swiss import Entrant, random_pairing, seed_order, select_bye, swiss_pairing

__all__ = [
    "DUPLICATE_PAIRING",
    "Entrant",
    "PLAYER1_INACTIVE",
    "PLAYER2_INACTIVE",
    "PairingValidation",
    "RoundState",
    "SAME_PLAYER",
    "build_entrants",
    "complete_pairing",
    "create_bye_pairing",
    "create_manual_pairing",
    "generate_pairings",
    "generate_random_pairings",
    "generate_swiss_pairings",
    "get_active_players",
    "get_unpaired_players",
    "has_pairing",
    "random_pairing",
    "round_state",
    "seed_order",
    "select_bye",
    "suggest_pairing_method",
    "swiss_pairing",
    "validate_pairing",
]
