"""Notation package: SAN, FEN and long coordinate moves."""

from chessrules.core.notation.coordinate import parse_long_coordinate
from chessrules.core.notation.fen import (
    STARTING_FEN,
    board_from_placement,
    build_fen,
    castling_rights,
    en_passant_target,
    fullmove_number,
    halfmove_clock,
)
from chessrules.core.notation.san import disambiguation, move_to_san, parse_san

__all__ = [
    "STARTING_FEN",
    "board_from_placement",
    "build_fen",
    "castling_rights",
    "en_passant_target",
    "fullmove_number",
    "halfmove_clock",
    "disambiguation",
    "move_to_san",
    "parse_san",
    "parse_long_coordinate",
]
