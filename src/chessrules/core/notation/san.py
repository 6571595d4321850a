"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from chessrules.core.board import Board
from chessrules.core.enums import Color, MoveKind, PieceType
from chessrules.core.exceptions import ParseError
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import SAN_LETTERS, SAN_PIECES
from chessrules.core.types import (
    Square,
    file_to_index,
    index_to_file,
    rank_to_row,
    row_to_rank,
    square_name,
)

_LOGGER = logging.getLogger(__name__)

# piece, from-file, from-rank, capture, to-file, to-rank, promotion
_SAN_RE = re.compile(
    r"^([KQRBN])?([a-h])?([1-8])?(x)?([a-h])([1-8])(?:=([QRBN]))?[+#]?$"
)
_CASTLE_RE = re.compile(r"^([O0]-[O0](?:-[O0])?)[+#]?$")


def parse_san(
    text: str,
    legal_moves: Iterable[Move],
    default_promotion: PieceType = PieceType.QUEEN,
) -> Move:
    """Resolve *text* against *legal_moves* for the side to move.

    When several legal moves fit the text (an under-disambiguated token) the
    first one in generation order is returned rather than an error.  A
    promotion without ``=X`` resolves to *default_promotion*.
    """
    clean = text.strip().rstrip("!?")
    legal = list(legal_moves)

    castle = _CASTLE_RE.match(clean)
    if castle is not None:
        kind = (
            MoveKind.CASTLE_QUEENSIDE
            if castle.group(1).count("-") == 2
            else MoveKind.CASTLE_KINGSIDE
        )
        for m in legal:
            if m.kind == kind:
                return m
        raise ParseError(text, "Illegal castling")

    match = _SAN_RE.match(clean)
    if match is None:
        raise ParseError(text, "Unrecognised move")
    piece_str, file_str, rank_str, _, to_file, to_rank, promo_str = match.groups()

    piece_type = SAN_PIECES[piece_str] if piece_str else PieceType.PAWN
    to_sq = Square(file_to_index(to_file), rank_to_row(int(to_rank)))
    from_file = file_to_index(file_str) if file_str else None
    from_row = rank_to_row(int(rank_str)) if rank_str else None
    promotion = SAN_PIECES[promo_str] if promo_str else None

    for m in legal:
        if m.end != to_sq or m.piece.piece_type != piece_type:
            continue
        if from_file is not None and m.start.file != from_file:
            continue
        if from_row is not None and m.start.row != from_row:
            continue
        if m.is_promotion and m.promotion != (promotion or default_promotion):
            continue
        if promotion is not None and not m.is_promotion:
            continue
        return m

    _LOGGER.debug("No legal move matches %r", text)
    raise ParseError(text, "Illegal move")


def disambiguation(move: Move, legal_moves: Iterable[Move]) -> str:
    """Minimal origin qualifier separating *move* from same-type rivals.

    Rivals are other pieces of the same type landing on the same square.
    File is preferred, then rank, then the full origin square.
    """
    rivals = [
        m
        for m in legal_moves
        if m.end == move.end
        and m.start != move.start
        and m.piece.piece_type == move.piece.piece_type
    ]
    if not rivals:
        return ""
    if all(m.start.file != move.start.file for m in rivals):
        return index_to_file(move.start.file)
    if all(m.start.row != move.start.row for m in rivals):
        return str(row_to_rank(move.start.row))
    return square_name(move.start)


def move_to_san(
    board: Board,
    move: Move,
    color: Color | None = None,
    *,
    suffix: bool = False,
) -> str:
    """Convert a legal *move* to SAN given the *board* before the move.

    With *suffix* a ``+`` or ``#`` is appended when the move gives check or
    mate; this needs a trial apply on *board*.
    """
    mover = move.piece.color if color is None else color

    if move.is_castle:
        san = "O-O" if move.is_kingside_castle else "O-O-O"
    else:
        san = ""
        if move.piece.piece_type == PieceType.PAWN:
            if move.is_capture:
                san += index_to_file(move.start.file)
        else:
            san += SAN_LETTERS[move.piece.piece_type]
            san += disambiguation(move, MoveGenerator(board).legal_moves(mover))

        if move.is_capture:
            san += "x"

        san += square_name(move.end)

        if move.is_promotion and move.promotion is not None:
            san += "=" + SAN_LETTERS[move.promotion]

    if suffix:
        san += _check_suffix(board, move, mover)
    return san


def _check_suffix(board: Board, move: Move, mover: Color) -> str:
    gen = MoveGenerator(board)
    board.move_piece(move)
    try:
        if not gen.is_king_in_check(mover.opposite):
            return ""
        return "#" if not gen.legal_moves(mover.opposite) else "+"
    finally:
        board.undo_move(move)
