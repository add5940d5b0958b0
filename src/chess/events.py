"""
What the chess board tells the outside world (a display, a console...), and the one question it asks it.

All notifications are synchronous and fire during the call that caused them.
NOTE: check detection plays moves speculatively and reverts them, so placements/removals are also reported
for those. Use `Chess.is_speculating` to tell them apart.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Optional

from src.chess.color import ChessColor
from src.chess.pieces import ChessPiece, ChessPieceType


class ChessObserver:
    """Base observer: override only what you need, everything else is a no-op"""

    def on_piece_placed(self, piece_type: ChessPieceType, color: ChessColor, i: int, j: int) -> None:
        pass

    def on_piece_removed(self, i: int, j: int) -> None:
        pass

    def on_check(self, color: ChessColor) -> None:
        pass

    def on_checkmate(self, winner: ChessColor) -> None:
        pass


# Given the promoting color and the candidate pieces, return one of them (or None to keep the default)
PromotionChooser = Callable[[ChessColor, Sequence[ChessPiece]], Optional[ChessPiece]]
