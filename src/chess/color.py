"""Chess sides, and the board edges/directions they are defined from"""

from enum import Enum, StrEnum, auto
from typing import Self


class Direction(Enum):
    """
    Board edges seen as directions.
    UP moves towards higher ranks (j), RIGHT towards higher files (i).
    """

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()

    @property
    def opposite(self) -> "Direction":
        return OPPOSITE_DIRECTIONS[self]

    @property
    def adjacent(self) -> tuple["Direction", "Direction"]:
        """The two perpendicular directions, always in the order (LEFT, RIGHT) or (UP, DOWN)."""
        return ADJACENT_DIRECTIONS[self]

    def starting_edge(self, size: int, offset: int = 0) -> int:
        """
        Index of the row/column `offset` steps inside the edge this direction starts from.

        ex) on an 8x8 board: UP.starting_edge(8) = 0, DOWN.starting_edge(8, 1) = 6
        """
        if self in FAR_EDGE_DIRECTIONS:
            return size - 1 - offset
        return offset


OPPOSITE_DIRECTIONS: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

ADJACENT_DIRECTIONS: dict[Direction, tuple[Direction, Direction]] = {
    Direction.UP: (Direction.LEFT, Direction.RIGHT),
    Direction.DOWN: (Direction.LEFT, Direction.RIGHT),
    Direction.LEFT: (Direction.UP, Direction.DOWN),
    Direction.RIGHT: (Direction.UP, Direction.DOWN),
}

# Starting from these edges means starting from the highest index
FAR_EDGE_DIRECTIONS = frozenset({Direction.DOWN, Direction.RIGHT})


class ChessColor(StrEnum):
    WHITE = auto()
    BLACK = auto()

    @property
    def direction(self) -> Direction:
        """The direction this side's pawns advance in"""
        return COLOR_DIRECTIONS[self]

    @property
    def next(self) -> Self:
        return ChessColor.BLACK if self == ChessColor.WHITE else ChessColor.WHITE

    def home_row(self, size: int, offset: int = 0) -> int:
        return self.direction.starting_edge(size, offset)

    def promotion_row(self, size: int) -> int:
        """The far edge, where pawns of this color promote"""
        return self.direction.opposite.starting_edge(size)


COLOR_DIRECTIONS: dict[ChessColor, Direction] = {
    ChessColor.WHITE: Direction.UP,
    ChessColor.BLACK: Direction.DOWN,
}
