"""Square type and coordinate helpers.

Board layout (row 0 is the far edge, i.e. rank 8):
    a8=(0, 0), b8=(1, 0), ..., h8=(7, 0)
    ...
    a1=(0, 7), b1=(1, 7), ..., h1=(7, 7)
"""

from __future__ import annotations

from typing import NamedTuple

from chessrules.core.exceptions import InvalidCoordinate

BOARD_SIZE = 8
_FILES = "abcdefgh"


class Square(NamedTuple):
    """Grid coordinate: file 0–7 (a–h), row 0–7 (rank 8 down to rank 1)."""

    file: int
    row: int

    @property
    def name(self) -> str:
        return square_name(self)

    @property
    def rank(self) -> int:
        return row_to_rank(self.row)

    def offset(self, df: int, dr: int) -> Square | None:
        """Neighbouring square, or ``None`` when it falls off the board."""
        f = self.file + df
        r = self.row + dr
        if 0 <= f < BOARD_SIZE and 0 <= r < BOARD_SIZE:
            return Square(f, r)
        return None


def is_valid(file: int, row: int) -> bool:
    """Check whether (*file*, *row*) lies on the board."""
    return 0 <= file < BOARD_SIZE and 0 <= row < BOARD_SIZE


def file_to_index(letter: str) -> int:
    """'a' → 0 … 'h' → 7 (case-insensitive)."""
    if len(letter) != 1 or letter.lower() not in _FILES:
        raise InvalidCoordinate(f"File character out of range: {letter!r}")
    return _FILES.index(letter.lower())


def index_to_file(file: int) -> str:
    """0 → 'a' … 7 → 'h'."""
    if not 0 <= file < BOARD_SIZE:
        raise InvalidCoordinate(f"File index out of range: {file}")
    return _FILES[file]


def rank_to_row(rank: int) -> int:
    """Rank 1–8 → row 7–0."""
    if not 1 <= rank <= BOARD_SIZE:
        raise InvalidCoordinate(f"Rank value out of range: {rank}")
    return BOARD_SIZE - rank


def row_to_rank(row: int) -> int:
    """Row 0–7 → rank 8–1."""
    if not 0 <= row < BOARD_SIZE:
        raise InvalidCoordinate(f"Row index out of range: {row}")
    return BOARD_SIZE - row


def make_square(file: int, row: int) -> Square:
    """Create a validated square from grid indices."""
    if not is_valid(file, row):
        raise InvalidCoordinate(f"Invalid square coordinates: ({file},{row})")
    return Square(file, row)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (4, 6) → 'e2'."""
    return index_to_file(sq.file) + str(row_to_rank(sq.row))


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → (4, 4)."""
    if len(name) != 2 or name[1] not in "12345678":
        raise InvalidCoordinate(f"Invalid square name: {name!r}")
    return Square(file_to_index(name[0]), rank_to_row(int(name[1])))


_SCAN_ORDER: tuple[Square, ...] = tuple(
    Square(f, r) for f in range(BOARD_SIZE) for r in range(BOARD_SIZE)
)


def iter_squares() -> tuple[Square, ...]:
    """All 64 squares in scan order: file-major, then row."""
    return _SCAN_ORDER


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Square(f, 0) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(f, 1) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(f, 2) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(f, 3) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(f, 4) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(f, 5) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(f, 6) for f in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Square(f, 7) for f in range(8))
