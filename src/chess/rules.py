"""
Chess rule fragments
-----

Small conditions and actions, assembled into Moves by `src.chess.moves`.
Each one is stateless, so a single instance is shared by all the Moves that use it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Protocol

from src.board.move import Move
from src.board.piece import Piece
from src.board.rules import GameAction, GameCondition
from src.board.vector import Vector
from src.chess.color import ChessColor
from src.chess.pieces import ChessPiece, Pawn, Rook


class ChessBoard(Protocol):
    """Just the parts the rule fragments need"""

    length: int
    height: int

    @property
    def history_depth(self) -> int: ...
    @property
    def scanning_attacks(self) -> bool: ...
    @property
    def pawn_double_advances(self) -> Sequence[Move]: ...

    def get_piece_at_position(self, position: Vector) -> Optional[ChessPiece]: ...
    def set_piece_at_position(self, piece: Piece, position: Vector) -> Piece: ...
    def remove_piece_at_position(self, position: Vector) -> Optional[ChessPiece]: ...
    def move_piece_at_position(self, start: Vector, destination: Vector) -> Piece: ...
    def has_moved(self, piece: Optional[Piece]) -> bool: ...
    def is_last_action(self, move: Move) -> bool: ...
    def last_piece_moved(self) -> Piece: ...
    def is_attacked(self, defending_color: ChessColor, position: Vector) -> bool: ...
    def get_promoted_piece(self, color: ChessColor) -> ChessPiece: ...


# --- CONDITIONS ---
class CanNotEat(GameCondition[ChessBoard]):
    """Destination must be empty (pawn pushes)"""

    def check_condition(self, start: Vector, destination: Vector, board: ChessBoard) -> bool:
        return board.get_piece_at_position(destination) is None


class MustEat(GameCondition[ChessBoard]):
    """Destination must be occupied (pawn diagonal captures)"""

    def check_condition(self, start: Vector, destination: Vector, board: ChessBoard) -> bool:
        return board.get_piece_at_position(destination) is not None


class MustNotCollide(GameCondition[ChessBoard]):
    """Every square strictly between start and destination must be empty"""

    def check_condition(self, start: Vector, destination: Vector, board: ChessBoard) -> bool:
        return all(
            board.get_piece_at_position(start + offset) is None
            for offset in (destination - start).included_vectors()
        )


class OnlyFirstMove(GameCondition[ChessBoard]):
    """The piece on start has never moved (identity lookup in the history)"""

    def check_condition(self, start: Vector, destination: Vector, board: ChessBoard) -> bool:
        return not board.has_moved(board.get_piece_at_position(start))


class MustNotCheck(GameCondition[ChessBoard]):
    """Neither the squares moved through nor the destination may be attacked by the other side"""

    def check_condition(self, start: Vector, destination: Vector, board: ChessBoard) -> bool:
        piece = board.get_piece_at_position(start)
        if piece is None:
            return False
        squares = [start + offset for offset in (destination - start).included_vectors()]
        squares.append(destination)
        return not any(board.is_attacked(piece.color, square) for square in squares)


# --- ACTIONS (some also double as conditions) ---
class MoveChessPiece(GameCondition[ChessBoard], GameAction[ChessBoard]):
    """
    As a condition: no friendly fire (destination empty, or holding the other color).
    As an action: relocate the piece from start to destination.
    """

    def check_condition(self, start: Vector, destination: Vector, board: ChessBoard) -> bool:
        occupant = board.get_piece_at_position(destination)
        if occupant is None:
            return True
        mover = board.get_piece_at_position(start)
        return mover is None or occupant.color != mover.color

    def do_action(self, start: Vector, destination: Vector, board: ChessBoard) -> Optional[Piece]:
        board.move_piece_at_position(start, destination)
        return None

    def revert_action(
        self,
        start: Vector,
        destination: Vector,
        affected_piece: Optional[Piece],
        board: ChessBoard,
    ) -> None:
        board.move_piece_at_position(destination, start)


class EatPiece(MoveChessPiece):
    """Remove whatever stands on the destination, then move there"""

    def do_action(self, start: Vector, destination: Vector, board: ChessBoard) -> Optional[Piece]:
        eaten = board.remove_piece_at_position(destination)
        super().do_action(start, destination, board)
        return eaten

    def revert_action(
        self,
        start: Vector,
        destination: Vector,
        affected_piece: Optional[Piece],
        board: ChessBoard,
    ) -> None:
        super().revert_action(start, destination, affected_piece, board)
        if affected_piece is not None:
            board.set_piece_at_position(affected_piece, destination)


class EnPassant(GameCondition[ChessBoard], GameAction[ChessBoard]):
    """
    Capture of a pawn that just made its double advance, by moving diagonally behind it
    ---

    The captured pawn stands beside the mover: same file as the destination, same rank as the start.
    Only valid on the very next move: the last committed move must be that pawn's double advance.
    """

    @staticmethod
    def eat_position(start: Vector, destination: Vector) -> Vector:
        return Vector(destination.i, start.j)

    def check_condition(self, start: Vector, destination: Vector, board: ChessBoard) -> bool:
        if board.history_depth == 0:
            return False
        mover = board.get_piece_at_position(start)
        target = board.get_piece_at_position(self.eat_position(start, destination))
        if not isinstance(target, Pawn) or mover is None or target.color == mover.color:
            return False
        return board.last_piece_moved() is target and any(
            board.is_last_action(move) for move in board.pawn_double_advances
        )

    def do_action(self, start: Vector, destination: Vector, board: ChessBoard) -> Optional[Piece]:
        return board.remove_piece_at_position(self.eat_position(start, destination))

    def revert_action(
        self,
        start: Vector,
        destination: Vector,
        affected_piece: Optional[Piece],
        board: ChessBoard,
    ) -> None:
        if affected_piece is not None:
            board.set_piece_at_position(affected_piece, self.eat_position(start, destination))


class Roque(MustNotCheck, GameAction[ChessBoard]):
    """
    Castling
    ---

    The king moves two squares towards a rook, the rook jumps over to the square the king crossed.
    Requirements:
    * neither the king nor that rook (same color) has ever moved
    * nothing stands between them
    * the king is not in check, and neither crosses nor lands on an attacked square

    The rook involved is the one in the corner on the king's row, on the side the king moves to.
    """

    def rook_position(self, start: Vector, destination: Vector, board: ChessBoard) -> Vector:
        if destination.i < start.i:
            return Vector(0, start.j)
        return Vector(board.length - 1, start.j)

    def rook_destination(self, start: Vector, destination: Vector, board: ChessBoard) -> Vector:
        rook = self.rook_position(start, destination, board)
        step = 1 if rook.i < destination.i else -1
        return Vector(destination.i + step, destination.j)

    def check_condition(self, start: Vector, destination: Vector, board: ChessBoard) -> bool:
        # Castling never captures, so it never attacks a square
        if board.scanning_attacks:
            return False

        king = board.get_piece_at_position(start)
        if king is None:
            return False

        movement = destination - start
        if movement.j != 0 or abs(movement.i) != 2:
            return False

        rook_position = self.rook_position(start, destination, board)
        rook = board.get_piece_at_position(rook_position)
        if not isinstance(rook, Rook) or rook.color != king.color:
            return False
        if board.has_moved(king) or board.has_moved(rook):
            return False

        between = (rook_position - start).included_vectors()
        if any(board.get_piece_at_position(start + offset) is not None for offset in between):
            return False

        # cannot castle out of check
        if board.is_attacked(king.color, start):
            return False
        return super().check_condition(start, destination, board)

    def do_action(self, start: Vector, destination: Vector, board: ChessBoard) -> Optional[Piece]:
        board.move_piece_at_position(start, destination)
        board.move_piece_at_position(
            self.rook_position(start, destination, board),
            self.rook_destination(start, destination, board),
        )
        return None

    def revert_action(
        self,
        start: Vector,
        destination: Vector,
        affected_piece: Optional[Piece],
        board: ChessBoard,
    ) -> None:
        board.move_piece_at_position(
            self.rook_destination(start, destination, board),
            self.rook_position(start, destination, board),
        )
        board.move_piece_at_position(destination, start)


class Promote(GameAction[ChessBoard]):
    """
    A pawn reaching the far edge is replaced by the piece the board picks (see `Chess.get_promoted_piece`).
    Returns the pawn, so it can be put back on revert.
    """

    def do_action(self, start: Vector, destination: Vector, board: ChessBoard) -> Optional[Piece]:
        pawn = board.get_piece_at_position(destination)
        if not isinstance(pawn, Pawn):
            return None
        if destination.j != pawn.color.promotion_row(board.height):
            return None
        promoted = board.get_promoted_piece(pawn.color)
        board.remove_piece_at_position(destination)
        board.set_piece_at_position(promoted, destination)
        return pawn

    def revert_action(
        self,
        start: Vector,
        destination: Vector,
        affected_piece: Optional[Piece],
        board: ChessBoard,
    ) -> None:
        if affected_piece is None:
            return
        board.remove_piece_at_position(destination)
        board.set_piece_at_position(affected_piece, destination)
