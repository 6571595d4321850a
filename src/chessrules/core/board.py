"""Board - piece placement on an 8x8 grid with apply/undo history."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from chessrules.core.enums import Color, MoveKind, PieceType
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import BOARD_SIZE, Square, iter_squares

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

KING_HOME_FILE = 4
# Castling: (rook corner file, rook landing file).
_CASTLE_ROOKS: dict[MoveKind, tuple[int, int]] = {
    MoveKind.CASTLE_KINGSIDE: (7, 5),
    MoveKind.CASTLE_QUEENSIDE: (0, 3),
}


@dataclass(slots=True)
class _UndoEntry:
    """Everything needed to reverse one applied move."""

    move: Move
    piece: Piece
    was_first_move: bool
    captured: Piece | None
    capture_sq: Square
    rook: Piece | None = None
    rook_had_moved: bool = False


def castle_rook_squares(move: Move) -> tuple[Square, Square]:
    """Corner square and landing square of the rook for a castling *move*."""
    corner_file, landing_file = _CASTLE_ROOKS[move.kind]
    row = move.start.row
    return Square(corner_file, row), Square(landing_file, row)


class Board:
    """Mutable 8x8 grid of optional pieces plus a LIFO move history.

    :meth:`undo_move` must always receive the most recently applied move.
    """

    __slots__ = ("_grid", "_history", "promote_on_apply")

    def __init__(self, *, promote_on_apply: bool = False) -> None:
        # [file][row]
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self._history: list[_UndoEntry] = []
        self.promote_on_apply = promote_on_apply

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq[0]][sq[1]]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._grid[sq[0]][sq[1]] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq[0]][sq[1]] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares in scan order (file-major), optionally by *color*."""
        grid = self._grid
        for sq in iter_squares():
            piece = grid[sq.file][sq.row]
            if piece is not None and (color is None or piece.color == color):
                yield sq, piece

    def find_king(self, color: Color) -> Square | None:
        """First square in scan order holding *color*'s king."""
        for sq, piece in self.pieces(color):
            if piece.piece_type == PieceType.KING:
                return sq
        return None

    @property
    def history(self) -> tuple[Move, ...]:
        return tuple(entry.move for entry in self._history)

    @property
    def last_move(self) -> Move | None:
        return self._history[-1].move if self._history else None

    # -- Setup --------------------------------------------------------------

    def clear(self) -> None:
        self._grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self._history.clear()

    def reset(self) -> None:
        """Standard starting position with an empty history."""
        self.clear()
        for color in (Color.BLACK, Color.WHITE):
            home = color.home_row
            pawn_row = home + color.forward
            for file, pt in enumerate(BACK_RANK):
                self._grid[file][home] = Piece(color, pt)
                self._grid[file][pawn_row] = Piece(color, PieceType.PAWN)

    @classmethod
    def initial(cls, *, promote_on_apply: bool = False) -> Board:
        """Standard starting position."""
        b = cls(promote_on_apply=promote_on_apply)
        b.reset()
        return b

    # -- Apply / undo -------------------------------------------------------

    def move_piece(self, move: Move) -> None:
        """Apply *move*, including its castling/en-passant/promotion effect."""
        piece = self[move.start]
        if piece is None:
            raise ValueError(f"No piece on {move.start.name}")

        capture_sq = move.end
        if move.kind == MoveKind.EN_PASSANT:
            # The victim sits beside the mover: destination file, start row.
            capture_sq = Square(move.end.file, move.start.row)

        entry = _UndoEntry(
            move=move,
            piece=piece,
            was_first_move=not piece.has_moved,
            captured=self[capture_sq],
            capture_sq=capture_sq,
        )

        self[capture_sq] = None
        self[move.start] = None
        placed = piece
        if (
            move.kind == MoveKind.PROMOTION
            and move.promotion is not None
            and self.promote_on_apply
        ):
            placed = Piece(piece.color, move.promotion, has_moved=True)
        self[move.end] = placed
        piece.has_moved = True

        if move.is_castle:
            rook_from, rook_to = castle_rook_squares(move)
            rook = self[rook_from]
            if rook is not None:
                entry.rook = rook
                entry.rook_had_moved = rook.has_moved
                self[rook_to] = rook
                self[rook_from] = None
                rook.has_moved = True

        self._history.append(entry)

    def undo_move(self, move: Move) -> None:
        """Reverse *move*, which must be the last applied move."""
        if not self._history or self._history[-1].move != move:
            raise ValueError(f"{move} is not the most recently applied move")
        entry = self._history.pop()

        self[move.end] = None
        self[entry.capture_sq] = entry.captured
        self[move.start] = entry.piece
        if entry.was_first_move:
            entry.piece.has_moved = False

        if entry.rook is not None:
            rook_from, rook_to = castle_rook_squares(move)
            self[rook_to] = None
            self[rook_from] = entry.rook
            entry.rook.has_moved = entry.rook_had_moved

    # -- Serialisation ------------------------------------------------------

    def fen_piece_placement(self) -> str:
        """FEN placement field, rows 0 (rank 8) to 7 (rank 1)."""
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            empty = 0
            text = ""
            for file in range(BOARD_SIZE):
                piece = self._grid[file][row]
                if piece is None:
                    empty += 1
                    continue
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
            if empty:
                text += str(empty)
            rows.append(text)
        return "/".join(rows)

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = []
            for file in range(BOARD_SIZE):
                p = self._grid[file][row]
                cells.append(str(p) if p else ".")
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
