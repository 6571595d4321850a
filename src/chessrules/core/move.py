"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessrules.core.enums import MoveKind, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square, square_name

PROMOTION_CHARS: dict[PieceType, str] = {
    PieceType.QUEEN: "q",
    PieceType.ROOK: "r",
    PieceType.BISHOP: "b",
    PieceType.KNIGHT: "n",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable description of one board transition.

    ``piece`` and ``captured`` are references to the pieces on the board when
    the move was generated.  For en passant ``captured`` is the pawn beside
    the mover, not anything on ``end``.
    """

    start: Square
    end: Square
    piece: Piece
    captured: Piece | None = None
    kind: MoveKind = MoveKind.NORMAL
    promotion: PieceType | None = None

    # ── Classification ───────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return self.captured is not None or self.kind == MoveKind.EN_PASSANT

    @property
    def is_en_passant(self) -> bool:
        return self.kind == MoveKind.EN_PASSANT

    @property
    def is_castle(self) -> bool:
        return self.kind in (MoveKind.CASTLE_KINGSIDE, MoveKind.CASTLE_QUEENSIDE)

    @property
    def is_kingside_castle(self) -> bool:
        return self.kind == MoveKind.CASTLE_KINGSIDE

    @property
    def is_promotion(self) -> bool:
        return self.kind == MoveKind.PROMOTION

    @property
    def is_double_pawn_push(self) -> bool:
        return (
            self.piece.piece_type == PieceType.PAWN
            and abs(self.start.row - self.end.row) == 2
        )

    def with_promotion(self, piece_type: PieceType) -> Move:
        """Same promotion move with a different target piece type."""
        if not self.is_promotion:
            raise ValueError(f"{self} is not a promotion")
        if piece_type not in PROMOTION_CHARS:
            raise ValueError(f"Cannot promote to {piece_type.name}")
        return replace(self, promotion=piece_type)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{square_name(self.start)} -> {square_name(self.end)}"

    @property
    def uci(self) -> str:
        """Long coordinate notation, e.g. ``e7e8q``."""
        base = f"{square_name(self.start)}{square_name(self.end)}"
        if self.promotion is not None:
            base += PROMOTION_CHARS[self.promotion]
        return base
