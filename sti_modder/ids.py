"""Identifier allocation for one synthesis run."""

from __future__ import annotations


class IdentifierAllocator:
    """Hands out 0, 1, 2, ... in call order.

    Create one per synthesis run. Identifiers are not stable across
    reinstalls: the same mod entry may get a different id next time.
    """

    def __init__(self) -> None:
        self._next = 0

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value

    @property
    def issued(self) -> int:
        """Number of identifiers handed out so far."""
        return self._next
