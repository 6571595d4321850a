"""Core domain layer - pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Board, Color, MoveGenerator, move_to_san

    board = Board.initial()
    gen = MoveGenerator(board)
    for move in gen.legal_moves(Color.WHITE):
        print(move_to_san(board, move))
"""

from chessrules.core.board import Board
from chessrules.core.enums import Color, GameStatus, MoveKind, PieceType
from chessrules.core.exceptions import (
    ChessError,
    IllegalMove,
    InvalidCoordinate,
    ParseError,
)
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.notation import (
    STARTING_FEN,
    board_from_placement,
    build_fen,
    move_to_san,
    parse_long_coordinate,
    parse_san,
)
from chessrules.core.piece import Piece
from chessrules.core.types import (
    Square,
    file_to_index,
    index_to_file,
    is_valid,
    make_square,
    parse_square,
    rank_to_row,
    row_to_rank,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "MoveKind",
    "PieceType",
    # Errors
    "ChessError",
    "IllegalMove",
    "InvalidCoordinate",
    "ParseError",
    # Types / helpers
    "Square",
    "file_to_index",
    "index_to_file",
    "is_valid",
    "make_square",
    "parse_square",
    "rank_to_row",
    "row_to_rank",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    # Notation
    "STARTING_FEN",
    "board_from_placement",
    "build_fen",
    "move_to_san",
    "parse_long_coordinate",
    "parse_san",
]
