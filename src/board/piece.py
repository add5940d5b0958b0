"""
A board occupant and the Moves it may use.

"Can this piece go from A to B?" is answered by trying each Move in declaration order: the first one that accepts wins.
NOTE: declaration order is therefore a tie-break policy. If two Moves could match the same displacement,
only the first one's effects ever run.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from src.board.move import Move
from src.board.vector import Vector
from src.core.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from src.board.board import Board


def _require_vector(value: object, name: str) -> None:
    if not isinstance(value, Vector):
        raise InvalidArgumentError(f"{name} must be a Vector, got {value!r}")


class Piece:
    def __init__(self, board: Board, moves: Sequence[Move]) -> None:
        if board is None:
            raise InvalidArgumentError("board must not be None")
        # The board owns the piece (through its squares). This is only a handle back for queries.
        self._board = board
        self._moves: tuple[Move, ...] = tuple(moves)

    @property
    def board(self) -> Board:
        return self._board

    @property
    def moves(self) -> tuple[Move, ...]:
        return self._moves

    def move(self, start: Vector, destination: Vector, commit: bool = False) -> bool:
        """
        Try every Move in order. On the first match: perform it (only if `commit`) and return True.
        """
        _require_vector(start, "start")
        _require_vector(destination, "destination")
        for move in self._moves:
            if self.can_move(start, destination, move):
                if commit:
                    self.do_move(start, destination, move)
                return True
        return False

    def can_move(self, start: Vector, destination: Vector, move: Move) -> bool:
        return move.can_move(start, destination, self.board)

    def do_move(self, start: Vector, destination: Vector, move: Move) -> None:
        """Perform the move's effects and record them, so the move can be reverted later."""
        affected_pieces = move.do_move(start, destination, self.board)
        self.board.historic.add(self, move, start, destination, affected_pieces)

    def possible_moves(self, start: Vector) -> list[Vector]:
        """
        Every destination one of the Moves accepts.

        NOTE: brute force over (moves x squares). Fine for a turn based game, not for search.
        """
        _require_vector(start, "start")
        return [
            destination
            for move in self._moves
            for destination in self.board.positions()
            if self.can_move(start, destination, move)
        ]

    def __str__(self) -> str:
        return type(self).__name__
