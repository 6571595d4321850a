"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def home_row(self) -> int:
        """Row of this side's back rank (row 0 is rank 8)."""
        return 7 if self is Color.WHITE else 0

    @property
    def forward(self) -> int:
        """Row delta of a pawn push for this side."""
        return -1 if self is Color.WHITE else 1

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveKind(IntEnum):
    """Move classification, fixed when the move is generated."""

    NORMAL = 0
    CAPTURE = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5


class GameStatus(IntEnum):
    """Terminal-state classification of the side to move."""

    IN_PROGRESS = 0
    CHECKMATE = 1
    STALEMATE = 2
