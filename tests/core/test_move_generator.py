"""Perft tests - the gold standard for move-generator correctness.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, MoveKind, PieceType
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.notation import board_from_placement
from chessrules.core.exceptions import InvalidCoordinate
from chessrules.core.types import E1, F1, G1, Square, parse_square


def perft(board: Board, color: Color, depth: int) -> int:
    """Count leaf nodes at *depth* using apply/undo."""
    if depth == 0:
        return 1
    nodes = 0
    for move in MoveGenerator(board).legal_moves(color):
        board.move_piece(move)
        nodes += perft(board, color.opposite, depth - 1)
        board.undo_move(move)
    return nodes


def _board(placement: str) -> Board:
    return board_from_placement(placement, promote_on_apply=True)


def _ucis(board: Board, color: Color) -> set[str]:
    return {m.uci for m in MoveGenerator(board).legal_moves(color)}


def _play(board: Board, *ucis: str) -> None:
    color = Color.WHITE
    for uci in ucis:
        (move,) = [
            m for m in MoveGenerator(board).legal_moves(color) if m.uci == uci
        ]
        board.move_piece(move)
        color = color.opposite


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(Board.initial(promote_on_apply=True), Color.WHITE, 1) == 20

    def test_depth_2(self) -> None:
        assert perft(Board.initial(promote_on_apply=True), Color.WHITE, 2) == 400

    def test_depth_3(self) -> None:
        assert perft(Board.initial(promote_on_apply=True), Color.WHITE, 3) == 8_902

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        assert perft(Board.initial(promote_on_apply=True), Color.WHITE, 4) == 197_281

    def test_board_restored_after_perft(self) -> None:
        board = Board.initial(promote_on_apply=True)
        before = board.fen_piece_placement()
        perft(board, Color.WHITE, 2)
        assert board.fen_piece_placement() == before
        assert board.history == ()


# ── Kiwipete (rich in tactics: castling, ep, promotions) ─────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(_board(KIWIPETE), Color.WHITE, 1) == 48

    def test_depth_2(self) -> None:
        assert perft(_board(KIWIPETE), Color.WHITE, 2) == 2_039

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(_board(KIWIPETE), Color.WHITE, 3) == 97_862


# ── Position 3 (en passant pins, rook endgame) ───────────────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft(_board(POS3), Color.WHITE, 1) == 14

    def test_depth_2(self) -> None:
        assert perft(_board(POS3), Color.WHITE, 2) == 191

    def test_depth_3(self) -> None:
        assert perft(_board(POS3), Color.WHITE, 3) == 2_812


# ── Position 4 (promotions, checks) ──────────────────────────────────────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1"


class TestPerftPos4:
    def test_depth_1(self) -> None:
        assert perft(_board(POS4), Color.WHITE, 1) == 6

    def test_depth_2(self) -> None:
        assert perft(_board(POS4), Color.WHITE, 2) == 264


# ── Special moves ────────────────────────────────────────────────────────────


class TestSpecialMoves:
    def test_en_passant_available_right_after_double_push(self) -> None:
        board = Board.initial()
        _play(board, "e2e4", "a7a6", "e4e5", "d7d5")
        assert "e5d6" in _ucis(board, Color.WHITE)

    def test_en_passant_expires(self) -> None:
        board = Board.initial()
        _play(board, "e2e4", "a7a6", "e4e5", "d7d5", "h2h3", "h7h6")
        assert "e5d6" not in _ucis(board, Color.WHITE)

    def test_en_passant_kind(self) -> None:
        board = Board.initial()
        _play(board, "e2e4", "a7a6", "e4e5", "d7d5")
        (ep,) = MoveGenerator(board).legal_moves_from(parse_square("e5"))[-1:]
        assert ep.kind == MoveKind.EN_PASSANT
        assert ep.is_capture

    def test_kingside_castling_after_clearing_f1_g1(self) -> None:
        board = Board.initial()
        board[F1] = None
        board[G1] = None
        (castle,) = [
            m
            for m in MoveGenerator(board).legal_moves(Color.WHITE)
            if m.kind == MoveKind.CASTLE_KINGSIDE
        ]
        board.move_piece(castle)
        king, rook = board[G1], board[F1]
        assert king is not None and king.piece_type == PieceType.KING
        assert rook is not None and rook.piece_type == PieceType.ROOK

        board.undo_move(castle)
        king = board[E1]
        assert king is not None
        king.has_moved = True
        assert "e1g1" not in _ucis(board, Color.WHITE)

    def test_castling_both_sides(self) -> None:
        board = _board("r3k2r/8/8/8/8/8/8/R3K2R")
        ucis = _ucis(board, Color.WHITE)
        assert {"e1g1", "e1c1"} <= ucis
        assert {"e8g8", "e8c8"} <= _ucis(board, Color.BLACK)

    def test_no_castling_after_king_moved(self) -> None:
        board = _board("r3k2r/8/8/8/8/8/8/R3K2R")
        _play(board, "e1e2", "a8b8", "e2e1", "b8a8")
        ucis = _ucis(board, Color.WHITE)
        assert "e1g1" not in ucis
        assert "e1c1" not in ucis

    def test_no_castling_after_rook_moved(self) -> None:
        board = _board("r3k2r/8/8/8/8/8/8/R3K2R")
        _play(board, "h1h2", "a8b8", "h2h1")
        ucis = _ucis(board, Color.WHITE)
        assert "e1g1" not in ucis
        assert "e1c1" in ucis

    def test_no_castling_through_attacked_square(self) -> None:
        board = _board("4kr2/8/8/8/8/8/8/R3K2R")
        ucis = _ucis(board, Color.WHITE)
        assert "e1g1" not in ucis
        assert "e1c1" in ucis

    def test_no_castling_onto_pawn_attacked_square(self) -> None:
        # The black pawn on h2 covers g1 diagonally.
        board = _board("4k3/8/8/8/8/8/7p/R3K2R")
        assert "e1g1" not in _ucis(board, Color.WHITE)

    def test_no_castling_out_of_check(self) -> None:
        board = _board("4k3/4r3/8/8/8/8/8/R3K2R")
        ucis = _ucis(board, Color.WHITE)
        assert "e1g1" not in ucis
        assert "e1c1" not in ucis

    def test_queenside_b_file_may_be_attacked(self) -> None:
        board = _board("1r2k3/8/8/8/8/8/8/R3K3")
        assert "e1c1" in _ucis(board, Color.WHITE)

    def test_no_castling_when_blocked(self) -> None:
        board = _board("4k3/8/8/8/8/8/8/RN2K1NR")
        ucis = _ucis(board, Color.WHITE)
        assert "e1g1" not in ucis
        assert "e1c1" not in ucis

    def test_king_off_home_square_cannot_castle(self) -> None:
        board = _board("4k3/8/8/8/8/8/8/R2K3R")
        assert not any(
            m.is_castle for m in MoveGenerator(board).legal_moves(Color.WHITE)
        )


# ── Check, pins and terminal positions ───────────────────────────────────────


class TestCheck:
    def test_initial_not_in_check(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert not gen.is_king_in_check(Color.WHITE)
        assert not gen.is_king_in_check(Color.BLACK)

    def test_rook_gives_check(self) -> None:
        gen = MoveGenerator(_board("4k3/8/8/8/8/8/8/4R1K1"))
        assert gen.is_king_in_check(Color.BLACK)
        assert not gen.is_king_in_check(Color.WHITE)

    def test_pawn_attacks_diagonally_only(self) -> None:
        gen = MoveGenerator(_board("8/8/8/8/8/4p3/4K3/8"))
        assert not gen.is_king_in_check(Color.WHITE)
        gen = MoveGenerator(_board("8/8/8/8/8/3p4/4K3/8"))
        assert gen.is_king_in_check(Color.WHITE)

    def test_missing_king_is_not_in_check(self) -> None:
        gen = MoveGenerator(_board("8/8/8/8/8/8/8/R7"))
        assert not gen.is_king_in_check(Color.BLACK)

    def test_pinned_piece_cannot_leave_line(self) -> None:
        board = _board("4r1k1/8/8/8/8/8/4N3/4K3")
        moves = MoveGenerator(board).legal_moves_from(parse_square("e2"))
        assert moves == []

    def test_in_check_only_evasions(self) -> None:
        board = _board("4k3/8/8/8/8/8/3P1P2/r3K3")
        assert _ucis(board, Color.WHITE) == {"e1e2"}

    def test_is_square_attacked(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert gen.is_square_attacked(parse_square("f6"), Color.WHITE)
        assert not gen.is_square_attacked(parse_square("e4"), Color.WHITE)

    def test_king_home_square_constant(self) -> None:
        assert Board.initial().find_king(Color.WHITE) == E1


class TestTerminal:
    def test_checkmate_has_no_moves(self) -> None:
        board = _board("R5k1/5ppp/8/8/8/8/8/6K1")
        gen = MoveGenerator(board)
        assert gen.is_king_in_check(Color.BLACK)
        assert gen.legal_moves(Color.BLACK) == []

    def test_stalemate_has_no_moves(self) -> None:
        board = _board("7k/5Q2/6K1/8/8/8/8/8")
        gen = MoveGenerator(board)
        assert not gen.is_king_in_check(Color.BLACK)
        assert gen.legal_moves(Color.BLACK) == []

    def test_off_board_square_rejected(self) -> None:
        gen = MoveGenerator(Board.initial())
        with pytest.raises(InvalidCoordinate):
            gen.legal_moves_from(Square(-1, 6))

    def test_empty_square_yields_no_moves(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert gen.legal_moves_from(parse_square("e4")) == []
