"""Session-wide configuration."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import PieceType


@dataclass
class SessionSettings:
    """User-configurable behaviour of a :class:`GameSession`."""

    # Replace the pawn with the promoted piece on the board when applying a
    # promotion.  Off by default: only the move carries the promotion type.
    promote_on_apply: bool = False

    # Promotion used when a SAN or long coordinate token omits one.
    default_promotion: PieceType = PieceType.QUEEN

    # Append "+" / "#" to SAN produced by the session.
    san_check_suffix: bool = False

    def __post_init__(self) -> None:
        if self.default_promotion in (PieceType.PAWN, PieceType.KING):
            raise ValueError(f"Cannot promote to {self.default_promotion.name}")
