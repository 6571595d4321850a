"""Tests for squares, coordinate helpers and pieces."""

import pytest

from chessrules.core.enums import Color, PieceType
from chessrules.core.exceptions import InvalidCoordinate
from chessrules.core.piece import Piece
from chessrules.core.types import (
    A1,
    A8,
    E2,
    H1,
    Square,
    file_to_index,
    index_to_file,
    is_valid,
    iter_squares,
    make_square,
    parse_square,
    rank_to_row,
    row_to_rank,
    square_name,
)


class TestCoordinates:
    def test_corners(self) -> None:
        assert A8 == Square(0, 0)
        assert A1 == Square(0, 7)
        assert H1 == Square(7, 7)

    def test_file_round_trip(self) -> None:
        for i in range(8):
            assert file_to_index(index_to_file(i)) == i

    def test_file_is_case_insensitive(self) -> None:
        assert file_to_index("E") == 4

    def test_rank_row_mapping(self) -> None:
        assert rank_to_row(1) == 7
        assert rank_to_row(8) == 0
        assert row_to_rank(7) == 1

    @pytest.mark.parametrize("bad", ["i", "", "ab", "1"])
    def test_bad_file_letter(self, bad: str) -> None:
        with pytest.raises(InvalidCoordinate):
            file_to_index(bad)

    def test_bad_indices(self) -> None:
        with pytest.raises(InvalidCoordinate):
            index_to_file(8)
        with pytest.raises(InvalidCoordinate):
            rank_to_row(0)
        with pytest.raises(InvalidCoordinate):
            row_to_rank(-1)
        with pytest.raises(InvalidCoordinate):
            make_square(3, 8)

    @pytest.mark.parametrize("bad", ["e\u0663", "e\u00b2", "e0", "e9", "e"])
    def test_rank_must_be_ascii_digit(self, bad: str) -> None:
        with pytest.raises(InvalidCoordinate):
            parse_square(bad)

    def test_invalid_coordinate_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_square("z9")

    def test_is_valid(self) -> None:
        assert is_valid(0, 0)
        assert not is_valid(-1, 3)
        assert not is_valid(3, 8)


class TestSquare:
    def test_name(self) -> None:
        assert square_name(E2) == "e2"
        assert E2.name == "e2"
        assert E2.rank == 2

    def test_parse(self) -> None:
        assert parse_square("e4") == Square(4, 4)
        assert parse_square("h8") == Square(7, 0)

    def test_offset_on_board(self) -> None:
        assert E2.offset(0, -2) == parse_square("e4")

    def test_offset_off_board(self) -> None:
        assert A1.offset(-1, 0) is None
        assert A8.offset(0, -1) is None

    def test_scan_order_is_file_major(self) -> None:
        squares = iter_squares()
        assert len(squares) == 64
        assert squares[0] == Square(0, 0)
        assert squares[1] == Square(0, 1)
        assert squares[8] == Square(1, 0)


class TestPiece:
    def test_fen_char(self) -> None:
        assert str(Piece(Color.WHITE, PieceType.KNIGHT)) == "N"
        assert str(Piece(Color.BLACK, PieceType.QUEEN)) == "q"

    def test_from_char(self) -> None:
        p = Piece.from_char("k")
        assert p.is_a(Color.BLACK, PieceType.KING)
        assert not p.has_moved

    def test_from_bad_char(self) -> None:
        with pytest.raises(ValueError):
            Piece.from_char("x")

    def test_identity_equality(self) -> None:
        a = Piece(Color.WHITE, PieceType.PAWN)
        b = Piece(Color.WHITE, PieceType.PAWN)
        assert a == a
        assert a != b
