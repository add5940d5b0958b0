"""The generic Board owns the squares (and so the pieces standing on them) and the history of moves played on it"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Optional

from src.board.historic import Historic
from src.board.move import Move
from src.board.piece import Piece
from src.board.square import Square
from src.board.vector import Vector
from src.core.exceptions import InvalidArgumentError, InvalidConstructionError

logger = logging.getLogger(__name__)


class Board:
    def __init__(self, length: int, height: int) -> None:
        if length <= 0 or height <= 0:
            raise InvalidConstructionError(
                f"Board dimensions must be above 0, got {length}x{height}"
            )
        self.length = length
        self.height = height
        self.historic = Historic()
        # row by row: index = i + j * length
        self._squares: list[Square] = [
            Square(i, j) for j in range(height) for i in range(length)
        ]
        logger.debug("Created %s of %dx%d", type(self).__name__, length, height)

    # --- MOVING ---
    def move(self, start: Vector, destination: Vector) -> bool:
        """Move request. Returns False if there is nothing to move, otherwise lets the piece decide."""
        self._square_at(destination)
        piece = self._square_at(start).piece
        if piece is None:
            return False
        return piece.move(start, destination, commit=True)

    # --- SQUARE ACCESS ---
    def set_piece_at_position(self, piece: Piece, position: Vector) -> Piece:
        if piece is None:
            raise InvalidArgumentError("piece must not be None")
        self._square_at(position).place(piece)
        return piece

    def get_piece_at_position(self, position: Vector) -> Optional[Piece]:
        return self._square_at(position).piece

    def remove_piece_at_position(self, position: Vector) -> Optional[Piece]:
        return self._square_at(position).remove()

    def move_piece_at_position(self, start: Vector, destination: Vector) -> Piece:
        """Take the piece off `start` and put it on `destination` (replacing whatever stood there)."""
        self._square_at(destination)
        piece = self.remove_piece_at_position(start)
        if piece is None:
            raise InvalidArgumentError(f"No piece to move at {start}")
        return self.set_piece_at_position(piece, destination)

    def empty_board(self) -> None:
        for square in self._squares:
            if not square.is_empty():
                self.remove_piece_at_position(square.position)

    def is_in_bounds(self, position: Vector) -> bool:
        return 0 <= position.i < self.length and 0 <= position.j < self.height

    def positions(self) -> Iterator[Vector]:
        """Every coordinate on the board"""
        for i in range(self.length):
            for j in range(self.height):
                yield Vector(i, j)

    def search_pieces(self, piece: Optional[Piece]) -> list[Vector]:
        """
        Where are the pieces equal to the given one?

        NOTE: equality is whatever the piece type defines (for chess: same archetype and color), not identity.
        So `search_pieces(King(WHITE, board))` finds the white king.
        """
        if piece is None:
            return []
        return [
            square.position
            for square in self._squares
            if square.piece is not None and piece == square.piece
        ]

    # --- HISTORY ---
    @property
    def history_depth(self) -> int:
        return len(self.historic)

    def has_moved(self, piece: Optional[Piece]) -> bool:
        return self.historic.is_piece_contained(piece)

    def is_last_action(self, move: Move) -> bool:
        return self.historic.is_last_action(move)

    def last_piece_moved(self) -> Piece:
        return self.historic.last_piece_moved()

    def revert_last_move(self) -> None:
        self.historic.revert_last_move()

    # --- INTERNAL HELPERS ---
    def _square_at(self, position: Vector) -> Square:
        if not isinstance(position, Vector):
            raise InvalidArgumentError(f"position must be a Vector, got {position!r}")
        if not self.is_in_bounds(position):
            raise InvalidArgumentError(
                f"Position ({position.i}, {position.j}) is out of bounds for a {self.length}x{self.height} board"
            )
        return self._squares[position.i + position.j * self.length]
