"""Custom exceptions for league configuration and computation errors."""

from __future__ import annotations


class LeagueError(Exception):
    """Base exception for league errors with optional suggestions."""

    label = "League Error"

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"[{self.label}] {self.message}"
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg


class ConfigurationError(LeagueError):
    """Error when game-system or league configuration is missing or invalid."""

    label = "Configuration Error"


class UnknownGameSystemError(ConfigurationError):
    """Error when a game system ID is not present in the registry."""

    def __init__(self, game_system_id: str, known: list[str] | None = None) -> None:
        suggestion = None
        if known:
            suggestion = f"Known game systems: {', '.join(sorted(known))}"
        super().__init__(f"Unknown game system '{game_system_id}'", suggestion)
        self.game_system_id = game_system_id


class ComputationError(LeagueError):
    """Error when a result cannot be computed from degenerate input.

    Raised instead of silently coercing to zero, e.g. a percentage match
    with a zero army value.
    """

    label = "Computation Error"


class ValidationError(LeagueError):
    """Error carrying every violated rule of a rejected match or pairing."""

    label = "Validation Error"

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid input")
