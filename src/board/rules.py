"""
The two capabilities a Move is assembled from.

* a GameCondition says whether a move from `start` to `destination` is allowed on a board
* a GameAction performs one side effect of the move, and knows how to undo it

A rule fragment that needs both (ex. en passant: a condition on the adjacent pawn + removing that pawn) simply implements both.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

if TYPE_CHECKING:
    from src.board.piece import Piece
    from src.board.vector import Vector

BoardT = TypeVar("BoardT", contravariant=True)


class GameCondition(ABC, Generic[BoardT]):
    @abstractmethod
    def check_condition(
        self, start: Vector, destination: Vector, board: BoardT
    ) -> bool:
        """Return True if the move is allowed as far as this condition is concerned."""


class GameAction(ABC, Generic[BoardT]):
    @abstractmethod
    def do_action(
        self, start: Vector, destination: Vector, board: BoardT
    ) -> Optional[Piece]:
        """
        Perform the side effect.

        Returns the piece this action took off the board (or replaced), so that it can be put back on revert.
        None if nothing was affected.
        """

    @abstractmethod
    def revert_action(
        self,
        start: Vector,
        destination: Vector,
        affected_piece: Optional[Piece],
        board: BoardT,
    ) -> None:
        """
        Undo `do_action`. Receives the same start/destination and whatever `do_action` returned.

        NOTE: derived coordinates (ex. where the rook went when castling) must be recomputed exactly as in `do_action`.
        """
