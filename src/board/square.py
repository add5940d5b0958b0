"""
A square on the board

(placed in its own module so the Board can stay small. Squares are never handed out by the Board.)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from src.board.vector import Vector
from src.core.exceptions import InvalidArgumentError, InvalidConstructionError

if TYPE_CHECKING:
    from src.board.piece import Piece


@dataclass
class Square:
    i: int
    j: int
    piece: Optional[Piece] = None

    def __post_init__(self) -> None:
        if self.i < 0 or self.j < 0:
            raise InvalidConstructionError(
                f"Square position can't be negative: ({self.i}, {self.j})"
            )

    @property
    def position(self) -> Vector:
        return Vector(self.i, self.j)

    def is_empty(self) -> bool:
        return self.piece is None

    def place(self, piece: Piece) -> None:
        if piece is None:
            raise InvalidArgumentError("Cannot place 'None' on a square.")
        self.piece = piece

    def remove(self) -> Optional[Piece]:
        """Empty the square and hand back whatever stood on it (possibly nothing)."""
        removed = self.piece
        self.piece = None
        return removed
