"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from chessrules.core.board import KING_HOME_FILE, Board
from chessrules.core.enums import Color, MoveKind, PieceType
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import Square, make_square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# Row a pawn must stand on to capture en passant.
_EN_PASSANT_ROW: dict[Color, int] = {Color.WHITE: 3, Color.BLACK: 4}

PieceMoves = Callable[[Board, Square, Piece], Iterator[Move]]
PieceTargets = Callable[[Board, Square, Piece], Iterator[Square]]


# -- Target squares (shared by move generation and attack detection) -------


def _step_targets(
    board: Board, sq: Square, piece: Piece, offsets: tuple[tuple[int, int], ...]
) -> Iterator[Square]:
    for df, dr in offsets:
        to_sq = sq.offset(df, dr)
        if to_sq is None:
            continue
        target = board[to_sq]
        if target is None or target.color != piece.color:
            yield to_sq


def _ray_targets(
    board: Board, sq: Square, piece: Piece, directions: tuple[tuple[int, int], ...]
) -> Iterator[Square]:
    for df, dr in directions:
        to_sq = sq.offset(df, dr)
        while to_sq is not None:
            target = board[to_sq]
            if target is None:
                yield to_sq
            else:
                if target.color != piece.color:
                    yield to_sq
                break
            to_sq = to_sq.offset(df, dr)


def _knight_targets(board: Board, sq: Square, piece: Piece) -> Iterator[Square]:
    return _step_targets(board, sq, piece, KNIGHT_OFFSETS)


def _king_targets(board: Board, sq: Square, piece: Piece) -> Iterator[Square]:
    return _step_targets(board, sq, piece, KING_OFFSETS)


def _bishop_targets(board: Board, sq: Square, piece: Piece) -> Iterator[Square]:
    return _ray_targets(board, sq, piece, BISHOP_DIRS)


def _rook_targets(board: Board, sq: Square, piece: Piece) -> Iterator[Square]:
    return _ray_targets(board, sq, piece, ROOK_DIRS)


def _queen_targets(board: Board, sq: Square, piece: Piece) -> Iterator[Square]:
    return _ray_targets(board, sq, piece, QUEEN_DIRS)


def _pawn_attacks(board: Board, sq: Square, piece: Piece) -> Iterator[Square]:
    """Diagonal squares a pawn controls, occupied or not."""
    del board
    forward = piece.color.forward
    for df in (-1, 1):
        to_sq = sq.offset(df, forward)
        if to_sq is not None:
            yield to_sq


# -- Pseudo-legal moves per piece type -------------------------------------


def _moves_to(
    board: Board, sq: Square, piece: Piece, targets: Iterator[Square]
) -> Iterator[Move]:
    for to_sq in targets:
        captured = board[to_sq]
        kind = MoveKind.NORMAL if captured is None else MoveKind.CAPTURE
        yield Move(sq, to_sq, piece, captured, kind)


def _pawn_advances(
    sq: Square, to_sq: Square, piece: Piece, captured: Piece | None
) -> Iterator[Move]:
    if to_sq.row == piece.color.opposite.home_row:
        for pt in PROMOTION_TYPES:
            yield Move(sq, to_sq, piece, captured, MoveKind.PROMOTION, pt)
    elif captured is None:
        yield Move(sq, to_sq, piece)
    else:
        yield Move(sq, to_sq, piece, captured, MoveKind.CAPTURE)


def _pawn_moves(board: Board, sq: Square, piece: Piece) -> Iterator[Move]:
    forward = piece.color.forward

    one_step = sq.offset(0, forward)
    if one_step is not None and board.is_empty(one_step):
        yield from _pawn_advances(sq, one_step, piece, None)
        start_row = piece.color.home_row + forward
        two_step = sq.offset(0, 2 * forward)
        if sq.row == start_row and two_step is not None and board.is_empty(two_step):
            yield Move(sq, two_step, piece)

    for to_sq in _pawn_attacks(board, sq, piece):
        target = board[to_sq]
        if target is not None and target.color != piece.color:
            yield from _pawn_advances(sq, to_sq, piece, target)

    ep = _en_passant_move(board, sq, piece)
    if ep is not None:
        yield ep


def _en_passant_move(board: Board, sq: Square, piece: Piece) -> Move | None:
    if sq.row != _EN_PASSANT_ROW[piece.color]:
        return None
    last = board.last_move
    if last is None or not last.is_double_pawn_push:
        return None
    if last.end.row != sq.row or abs(last.end.file - sq.file) != 1:
        return None
    victim = board[last.end]
    if victim is None or victim.color == piece.color:
        return None
    to_sq = Square(last.end.file, sq.row + piece.color.forward)
    return Move(sq, to_sq, piece, victim, MoveKind.EN_PASSANT)


def _table_moves(targets: PieceTargets) -> PieceMoves:
    def generate(board: Board, sq: Square, piece: Piece) -> Iterator[Move]:
        return _moves_to(board, sq, piece, targets(board, sq, piece))

    return generate


# King moves here exclude castling; MoveGenerator adds it separately.
PIECE_MOVES: dict[PieceType, PieceMoves] = {
    PieceType.PAWN: _pawn_moves,
    PieceType.KNIGHT: _table_moves(_knight_targets),
    PieceType.BISHOP: _table_moves(_bishop_targets),
    PieceType.ROOK: _table_moves(_rook_targets),
    PieceType.QUEEN: _table_moves(_queen_targets),
    PieceType.KING: _table_moves(_king_targets),
}

ATTACK_TARGETS: dict[PieceType, PieceTargets] = {
    PieceType.PAWN: _pawn_attacks,
    PieceType.KNIGHT: _knight_targets,
    PieceType.BISHOP: _bishop_targets,
    PieceType.ROOK: _rook_targets,
    PieceType.QUEEN: _queen_targets,
    PieceType.KING: _king_targets,
}


class MoveGenerator:
    """Generates legal moves for the pieces on a :class:`Board`.

    Legality is decided by trial: every candidate is applied, the mover's
    king is tested, and the move is undone.  The board is restored before
    any method returns, but it must not be touched by anyone else meanwhile.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def board(self) -> Board:
        return self._board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, color: Color) -> list[Move]:
        """All strictly legal moves for *color*, in board scan order."""
        board = self._board
        legal: list[Move] = []
        for move in self.pseudo_legal_moves(color):
            board.move_piece(move)
            try:
                safe = not self.is_king_in_check(color)
            finally:
                board.undo_move(move)
            if safe:
                legal.append(move)
        return legal

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece standing on *sq* (empty list if none)."""
        make_square(*sq)
        piece = self._board[sq]
        if piece is None:
            return []
        return [m for m in self.legal_moves(piece.color) if m.start == sq]

    def pseudo_legal_moves(self, color: Color) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        for sq, piece in list(self._board.pieces(color)):
            moves.extend(PIECE_MOVES[piece.piece_type](self._board, sq, piece))
            if piece.piece_type == PieceType.KING:
                moves.extend(self._castling_moves(sq, piece))
        return moves

    # -- Attack detection ---------------------------------------------------

    def is_square_attacked(self, sq: Square, friendly_color: Color) -> bool:
        """Is *sq* attacked by any piece not of *friendly_color*?"""
        board = self._board
        for from_sq, piece in board.pieces(friendly_color.opposite):
            if sq in ATTACK_TARGETS[piece.piece_type](board, from_sq, piece):
                return True
        return False

    def is_king_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked?  A board without that king is not."""
        king_sq = self._board.find_king(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color)

    # -- Castling -----------------------------------------------------------

    def _castling_moves(self, sq: Square, king: Piece) -> Iterator[Move]:
        if king.has_moved or sq != Square(KING_HOME_FILE, king.color.home_row):
            return
        if self.is_square_attacked(sq, king.color):
            return
        for kind, rook_file in (
            (MoveKind.CASTLE_KINGSIDE, 7),
            (MoveKind.CASTLE_QUEENSIDE, 0),
        ):
            if self._can_castle(sq, king, rook_file):
                direction = 1 if rook_file > sq.file else -1
                landing = Square(sq.file + 2 * direction, sq.row)
                yield Move(sq, landing, king, None, kind)

    def _can_castle(self, sq: Square, king: Piece, rook_file: int) -> bool:
        board = self._board
        rook = board[Square(rook_file, sq.row)]
        if (
            rook is None
            or not rook.is_a(king.color, PieceType.ROOK)
            or rook.has_moved
        ):
            return False

        direction = 1 if rook_file > sq.file else -1
        for file in range(sq.file + direction, rook_file, direction):
            if not board.is_empty(Square(file, sq.row)):
                return False

        # Transit and landing squares; the current square is checked by the caller.
        for step in (1, 2):
            transit = Square(sq.file + step * direction, sq.row)
            if self.is_square_attacked(transit, king.color):
                return False
        return True
