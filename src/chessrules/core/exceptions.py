"""Error types raised by the rules engine.

All of them derive from :class:`ValueError` so callers that only guard
against bad input keep working.
"""

from __future__ import annotations


class ChessError(ValueError):
    """Base class for engine-detected, recoverable failures."""


class InvalidCoordinate(ChessError):
    """A file, rank or row index outside the 8x8 board."""


class ParseError(ChessError):
    """Move text that matches no grammar rule or resolves to no legal move."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"{reason}: {text!r}")
        self.text = text
        self.reason = reason


class IllegalMove(ChessError):
    """A caller-supplied move absent from the current legal set."""
