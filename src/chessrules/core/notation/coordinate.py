"""Long coordinate moves (``e2e4``, ``e7e8q``) as exchanged with engines."""

from __future__ import annotations

from chessrules.core.enums import PieceType
from chessrules.core.exceptions import InvalidCoordinate, ParseError
from chessrules.core.move import PROMOTION_CHARS
from chessrules.core.types import Square, parse_square

_PROMOTION_PIECES: dict[str, PieceType] = {v: k for k, v in PROMOTION_CHARS.items()}


def parse_long_coordinate(text: str) -> tuple[Square, Square, PieceType | None]:
    """Split *text* into origin, destination and optional promotion type."""
    token = text.strip()
    if len(token) not in (4, 5):
        raise ParseError(text, "Long coordinate move must be 4 or 5 characters")
    try:
        start = parse_square(token[0:2])
        end = parse_square(token[2:4])
    except InvalidCoordinate:
        raise ParseError(text, "Invalid square in long coordinate move") from None

    promotion: PieceType | None = None
    if len(token) == 5:
        promotion = _PROMOTION_PIECES.get(token[4])
        if promotion is None:
            raise ParseError(text, "Invalid promotion letter")
    return start, end, promotion
