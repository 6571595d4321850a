"""Game management layer - session, settings and the Qt bridge.

Quick start::

    from chessrules.game import GameSession

    session = GameSession()
    session.make_san_move("e4")
    session.apply_long_coordinate_move("e7e5")
    print(session.get_fen())
"""

from chessrules.game.session import GameEvents, GameSession
from chessrules.game.settings import SessionSettings

__all__ = [
    "GameEvents",
    "GameSession",
    "SessionSettings",
]
