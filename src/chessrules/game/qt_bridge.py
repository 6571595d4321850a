"""Qt bridge that serializes access to a game session."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessrules.core.enums import GameStatus
from chessrules.game.session import GameSession
from chessrules.game.settings import SessionSettings

_LOGGER = logging.getLogger(__name__)


class SessionWorker(QObject):
    """Thread-affine worker owning one :class:`GameSession`.

    Every slot runs under the worker's lock, so moves suggested by another
    thread (an engine, a network peer) never interleave with a legal-move
    query that is trial-applying moves on the same board.
    """

    move_applied = pyqtSignal(str, str)  # san, fen after the move
    move_rejected = pyqtSignal(str)
    position_changed = pyqtSignal(str)
    fen_ready = pyqtSignal(str)
    game_over = pyqtSignal(int)

    __slots__ = ("_last_san", "_lock", "_session")

    def __init__(self, session: GameSession | None = None) -> None:
        super().__init__()
        self._session = (
            session if session is not None else GameSession(SessionSettings())
        )
        self._lock = threading.Lock()
        self._last_san = ""
        self._session.events.on_move.append(self._remember_san)

    @contextmanager
    def locked(self) -> Iterator[GameSession]:
        """Hold the lock and hand out the session for direct use."""
        with self._lock:
            yield self._session

    # -- Moves ---------------------------------------------------------------

    @pyqtSlot(str)
    def submit_san(self, text: str) -> None:
        """Apply a SAN token; emits ``move_applied`` or ``move_rejected``."""
        with self._lock:
            ok = self._session.make_san_move(text)
            self._after_submit(text, ok)

    @pyqtSlot(str)
    def submit_long_coordinate(self, text: str) -> None:
        """Apply a long coordinate token such as ``e7e8q``."""
        with self._lock:
            ok = self._session.apply_long_coordinate_move(text)
            self._after_submit(text, ok)

    # -- Navigation ----------------------------------------------------------

    @pyqtSlot()
    def step_back(self) -> None:
        with self._lock:
            if self._session.previous_move():
                self.position_changed.emit(self._session.get_fen())

    @pyqtSlot()
    def step_forward(self) -> None:
        with self._lock:
            if self._session.next_move():
                self.position_changed.emit(self._session.get_fen())

    @pyqtSlot()
    def request_fen(self) -> None:
        with self._lock:
            fen = self._session.get_fen()
        self.fen_ready.emit(fen)

    # -- Internal helpers ----------------------------------------------------

    def _remember_san(self, _move: object, san: str) -> None:
        self._last_san = san

    def _after_submit(self, text: str, ok: bool) -> None:
        session = self._session
        if not ok:
            self.move_rejected.emit(text)
            return

        self.move_applied.emit(self._last_san, session.get_fen())

        status = session.get_game_state()
        if status != GameStatus.IN_PROGRESS:
            _LOGGER.debug("Game over: %s", status.name)
            self.game_over.emit(int(status))
