"""FEN assembly from a board and its move history."""

from __future__ import annotations

from collections.abc import Sequence

from chessrules.core.board import KING_HOME_FILE, Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import BOARD_SIZE, Square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_SYMBOLS: dict[Color, tuple[str, str]] = {
    Color.WHITE: ("K", "Q"),
    Color.BLACK: ("k", "q"),
}


def castling_rights(board: Board) -> str:
    """Castling field built from the kings' and corner rooks' moved flags."""
    rights = ""
    for color in (Color.WHITE, Color.BLACK):
        row = color.home_row
        king = board[Square(KING_HOME_FILE, row)]
        if king is None or not king.is_a(color, PieceType.KING) or king.has_moved:
            continue
        for rook_file, symbol in zip((7, 0), _CASTLING_SYMBOLS[color]):
            rook = board[Square(rook_file, row)]
            if (
                rook is not None
                and rook.is_a(color, PieceType.ROOK)
                and not rook.has_moved
            ):
                rights += symbol
    return rights or "-"


def en_passant_target(board: Board) -> str:
    """Square skipped by the last move if it was a pawn double push, else '-'."""
    last = board.last_move
    if last is None or not last.is_double_pawn_push:
        return "-"
    skipped_row = (last.start.row + last.end.row) // 2
    return square_name(Square(last.start.file, skipped_row))


def halfmove_clock(history: Sequence[Move]) -> int:
    """Plies since the last pawn move or capture."""
    count = 0
    for move in reversed(history):
        if move.piece.piece_type == PieceType.PAWN or move.is_capture:
            break
        count += 1
    return count


def fullmove_number(history: Sequence[Move]) -> int:
    return len(history) // 2 + 1


def build_fen(board: Board, turn: Color) -> str:
    """Six-field FEN for *board* with *turn* to move."""
    history = board.history
    return " ".join(
        (
            board.fen_piece_placement(),
            "w" if turn == Color.WHITE else "b",
            castling_rights(board),
            en_passant_target(board),
            str(halfmove_clock(history)),
            str(fullmove_number(history)),
        )
    )


def board_from_placement(placement: str, *, promote_on_apply: bool = False) -> Board:
    """Build a board from a FEN placement field (or a whole FEN string).

    Every piece starts unmoved and the history is empty.
    """
    field = placement.split()[0] if placement.strip() else ""
    rows = field.split("/")
    if len(rows) != BOARD_SIZE:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {placement!r}")

    board = Board(promote_on_apply=promote_on_apply)
    for row, row_text in enumerate(rows):
        file = 0
        for ch in row_text:
            if ch.isdigit():
                step = int(ch)
                if not 1 <= step <= BOARD_SIZE:
                    raise ValueError(f"Invalid FEN digit {ch!r}: {placement!r}")
                file += step
            else:
                if file >= BOARD_SIZE:
                    raise ValueError(f"Invalid FEN rank width: {placement!r}")
                board[Square(file, row)] = Piece.from_char(ch)
                file += 1
        if file != BOARD_SIZE:
            raise ValueError(f"Invalid FEN rank width: {placement!r}")
    return board
