"""Base protocol for tiebreak rules."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tabletop_league.models import Standing


@runtime_checkable
class Tiebreak(Protocol):
    """Protocol for one level of the standings tiebreak cascade.

    Implementations compare two standings on a single criterion and leave
    further separation to the next level.
    """

    name: str

    def compare(self, a: Standing, b: Standing) -> int:
        """Compare two standings.

        Args:
            a: First standing.
            b: Second standing.

        Returns:
            Negative if ``a`` ranks ahead of ``b``, positive if ``b`` ranks
            ahead, 0 if this criterion cannot separate them.
        """
        ...
