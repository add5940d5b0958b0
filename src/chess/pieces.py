"""Defines the types of chess pieces"""

from __future__ import annotations

from enum import StrEnum, auto
from typing import TYPE_CHECKING, ClassVar

from src.board.move import Move
from src.board.piece import Piece
from src.board.vector import Vector
from src.chess.color import ChessColor
from src.core.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from src.chess.game import Chess


class ChessPieceType(StrEnum):
    PAWN = auto()
    ROOK = auto()
    KNIGHT = auto()
    BISHOP = auto()
    QUEEN = auto()
    KING = auto()


# In the order they are offered to the player
PROMOTION_OPTIONS: tuple[ChessPieceType, ...] = (
    ChessPieceType.QUEEN,
    ChessPieceType.KNIGHT,
    ChessPieceType.ROOK,
    ChessPieceType.BISHOP,
)


class ChessPiece(Piece):
    """
    A piece that belongs to a side
    ---

    * its Moves are the shared ones of its archetype (and, for pawns, of its direction)
    * equality is by archetype and color: two white rooks are equal, even though they are different objects.
      What has moved (or moved last) is tracked by identity in the history, so this is only used to search pieces.
    """

    piece_type: ClassVar[ChessPieceType]
    # Where the piece starts, counted from its own edge (row) and from the side edge (column)
    starting_row: ClassVar[int] = 0
    starting_column: ClassVar[int] = 0

    def __init__(self, color: ChessColor, board: Chess) -> None:
        if color is None:
            raise InvalidArgumentError("color must not be None")
        if board is None:
            raise InvalidArgumentError("board must not be None")
        self.color = color
        super().__init__(board, board.moves.for_piece(self.piece_type, color))

    @property
    def board(self) -> Chess:
        return self._board

    def can_move(self, start: Vector, destination: Vector, move: Move) -> bool:
        """
        Chess legality on top of the Move's own:
        1. never land on a piece of your own color
        2. the Move must accept
        3. the move must not leave your own king in check (skipped while the board scans for attacks)
        """
        board = self.board
        if not board.moves.move_piece.check_condition(start, destination, board):
            return False
        if not super().can_move(start, destination, move):
            return False
        if board.scanning_attacks:
            return True
        return not board.does_move_check(self, start, destination, move)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChessPiece):
            return NotImplemented
        return self.piece_type == other.piece_type and self.color == other.color

    def __hash__(self) -> int:
        return hash((self.piece_type, self.color))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.color.value})"


class Pawn(ChessPiece):
    piece_type = ChessPieceType.PAWN
    starting_row = 1


class Rook(ChessPiece):
    piece_type = ChessPieceType.ROOK
    starting_column = 0


class Knight(ChessPiece):
    piece_type = ChessPieceType.KNIGHT
    starting_column = 1


class Bishop(ChessPiece):
    piece_type = ChessPieceType.BISHOP
    starting_column = 2


class Queen(ChessPiece):
    piece_type = ChessPieceType.QUEEN
    starting_column = 3


class King(ChessPiece):
    piece_type = ChessPieceType.KING
    starting_column = 4


PIECE_CLASSES: dict[ChessPieceType, type[ChessPiece]] = {
    ChessPieceType.PAWN: Pawn,
    ChessPieceType.ROOK: Rook,
    ChessPieceType.KNIGHT: Knight,
    ChessPieceType.BISHOP: Bishop,
    ChessPieceType.QUEEN: Queen,
    ChessPieceType.KING: King,
}


def create_piece(piece_type: ChessPieceType, color: ChessColor, board: Chess) -> ChessPiece:
    return PIECE_CLASSES[piece_type](color, board)
