"""GameSession - turn management, move log and history cursor.

Every move is re-resolved against the engine's legal set before it touches
the board, so callers may hand in moves built from coordinates alone.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from chessrules.core.board import Board
from chessrules.core.enums import Color, GameStatus, PieceType
from chessrules.core.exceptions import IllegalMove, InvalidCoordinate, ParseError
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.notation import (
    build_fen,
    move_to_san,
    parse_long_coordinate,
    parse_san,
)
from chessrules.core.types import Square, make_square, square_name
from chessrules.game.settings import SessionSettings

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, str], None]  # move, san
NavigateCallback = Callable[[int], None]  # cursor after navigation


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_navigate: list[NavigateCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """One game: board, side to move, move log and a replay cursor.

    ``cursor`` indexes the last applied entry of the move log (``-1`` before
    the first move).  Stepping back keeps the moves after the cursor until a
    new move is made from there.

    Not thread-safe: a session needs exclusive access for the whole duration
    of a legal-move query or a move application.
    """

    __slots__ = (
        "_board",
        "_generator",
        "_turn",
        "_log",
        "_cursor",
        "_settings",
        "events",
    )

    def __init__(
        self,
        settings: SessionSettings | None = None,
        *,
        board: Board | None = None,
        turn: Color = Color.WHITE,
    ) -> None:
        self._settings = settings if settings is not None else SessionSettings()
        if board is None:
            board = Board.initial()
        board.promote_on_apply = self._settings.promote_on_apply
        self._board = board
        self._generator = MoveGenerator(board)
        self._turn = turn
        self._log: list[Move] = []
        self._cursor = -1
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def settings(self) -> SessionSettings:
        return self._settings

    @property
    def current_turn(self) -> Color:
        return self._turn

    @property
    def move_log(self) -> tuple[Move, ...]:
        return tuple(self._log)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def is_at_tip(self) -> bool:
        return self._cursor == len(self._log) - 1

    def reset(self) -> None:
        """Back to the standard starting position with an empty log."""
        self._board.reset()
        self._turn = Color.WHITE
        self._log.clear()
        self._cursor = -1
        self._emit_navigate()

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self) -> list[Move]:
        """Legal moves for the side to move."""
        return self._generator.legal_moves(self._turn)

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq*; empty unless it is that side's turn.

        Raises :class:`InvalidCoordinate` for a square off the board.
        """
        make_square(*sq)
        piece = self._board[sq]
        if piece is None or piece.color != self._turn:
            return []
        return self._generator.legal_moves_from(sq)

    def is_in_check(self) -> bool:
        return self._generator.is_king_in_check(self._turn)

    def get_game_state(self) -> GameStatus:
        if self.legal_moves():
            return GameStatus.IN_PROGRESS
        if self.is_in_check():
            return GameStatus.CHECKMATE
        return GameStatus.STALEMATE

    def get_fen(self) -> str:
        return build_fen(self._board, self._turn)

    def san_history(self) -> list[str]:
        """SAN of every logged move, each formatted in its own position."""
        saved = self._cursor
        while self._cursor >= 0:
            self._step_back()
        sans: list[str] = []
        try:
            for move in self._log:
                sans.append(
                    move_to_san(
                        self._board,
                        move,
                        self._turn,
                        suffix=self._settings.san_check_suffix,
                    )
                )
                self._step_forward()
        finally:
            while self._cursor > saved:
                self._step_back()
            while self._cursor < saved:
                self._step_forward()
        return sans

    # ── Making moves ─────────────────────────────────────────────────────

    def make_move(self, candidate: Move) -> bool:
        """Apply the legal move matching *candidate*'s squares.

        Only the coordinates of *candidate* are used, plus its promotion
        choice when the squares name a promotion; the applied move is the
        engine's own.
        """
        try:
            move = self._resolve(
                candidate.start, candidate.end, candidate.promotion, strict=False
            )
        except (IllegalMove, InvalidCoordinate) as exc:
            _LOGGER.warning(
                "Rejected move %s -> %s: %s", candidate.start, candidate.end, exc
            )
            return False
        self._commit(move)
        return True

    def make_san_move(self, text: str) -> bool:
        """Apply a SAN token such as ``Nf3``, ``exd6`` or ``O-O``."""
        try:
            move = parse_san(
                text, self.legal_moves(), self._settings.default_promotion
            )
        except ParseError as exc:
            _LOGGER.warning("Rejected SAN move: %s", exc)
            return False
        self._commit(move)
        return True

    def apply_long_coordinate_move(self, text: str) -> bool:
        """Apply a long coordinate token such as ``e2e4`` or ``a7a8n``."""
        try:
            start, end, promotion = parse_long_coordinate(text)
            move = self._resolve(start, end, promotion)
        except (ParseError, IllegalMove) as exc:
            _LOGGER.warning("Rejected long coordinate move %r: %s", text, exc)
            return False
        self._commit(move)
        return True

    def load_san_moves(self, tokens: Iterable[str]) -> bool:
        """Replay bare SAN *tokens* from the standard starting position.

        All or nothing: if any token fails the session is left as it was.
        """
        trial = GameSession(self._settings)
        for ply, token in enumerate(tokens):
            if not trial.make_san_move(token):
                _LOGGER.warning("Failed to load move %d: %r", ply + 1, token)
                return False

        self._board = trial._board
        self._generator = trial._generator
        self._turn = trial._turn
        self._log = trial._log
        self._cursor = trial._cursor
        _LOGGER.debug("Loaded %d moves", len(self._log))
        self._emit_navigate()
        return True

    # ── Navigation ───────────────────────────────────────────────────────

    def previous_move(self) -> bool:
        """Undo the move at the cursor.  Returns False at the start."""
        if self._cursor < 0:
            return False
        self._step_back()
        self._emit_navigate()
        return True

    def next_move(self) -> bool:
        """Re-apply the move after the cursor.  Returns False at the tip."""
        if self.is_at_tip:
            return False
        self._step_forward()
        self._emit_navigate()
        return True

    def go_to_first_move(self) -> None:
        while self._cursor >= 0:
            self._step_back()
        self._emit_navigate()

    def go_to_last_move(self) -> None:
        while not self.is_at_tip:
            self._step_forward()
        self._emit_navigate()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _resolve(
        self,
        start: Square,
        end: Square,
        promotion: PieceType | None,
        *,
        strict: bool = True,
    ) -> Move:
        """Legal move from *start* to *end*.

        *promotion* picks among promotion moves.  When *strict*, a promotion
        given for a non-promotion move rejects it.
        """
        make_square(*start)
        make_square(*end)
        wanted = promotion
        if wanted is None:
            wanted = self._settings.default_promotion
        for m in self.legal_moves():
            if m.start != start or m.end != end:
                continue
            if m.is_promotion:
                if m.promotion == wanted:
                    return m
            elif promotion is None or not strict:
                return m
        raise IllegalMove(
            f"{square_name(start)}{square_name(end)} is not legal for {self._turn}"
        )

    def _commit(self, move: Move) -> None:
        san = ""
        if self.events.on_move:
            san = move_to_san(
                self._board, move, self._turn, suffix=self._settings.san_check_suffix
            )

        self._board.move_piece(move)
        del self._log[self._cursor + 1 :]
        self._log.append(move)
        self._cursor += 1
        self._turn = self._turn.opposite
        _LOGGER.debug("Applied %s (ply %d)", move.uci, self._cursor + 1)

        for cb in self.events.on_move:
            cb(move, san)

    def _step_back(self) -> None:
        self._board.undo_move(self._log[self._cursor])
        self._cursor -= 1
        self._turn = self._turn.opposite

    def _step_forward(self) -> None:
        self._cursor += 1
        self._board.move_piece(self._log[self._cursor])
        self._turn = self._turn.opposite

    def _emit_navigate(self) -> None:
        _LOGGER.debug("Cursor at %d of %d", self._cursor, len(self._log))
        for cb in self.events.on_navigate:
            cb(self._cursor)
