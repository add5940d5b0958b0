"""
The chess Move set
-----

Every chess Move is assembled here from the rule fragments, once per board.
All the pieces of an archetype share the same Move objects (Moves are compared by identity in the history,
ex. en passant asks "was the last move a pawn double advance?").

Geometry reminder: the base vector bounds the reach. So the sliding moves use the board size as base
(one Move spans a whole ray, MustNotCollide stops it at the first piece), while the king and knight use unit sizes.
"""

from dataclasses import dataclass
from typing import Self

from src.board.move import Move
from src.board.vector import Vector
from src.chess.color import ChessColor, Direction
from src.chess.pieces import ChessPieceType
from src.chess.rules import (
    CanNotEat,
    EatPiece,
    EnPassant,
    MoveChessPiece,
    MustEat,
    MustNotCollide,
    OnlyFirstMove,
    Promote,
    Roque,
)
from src.core.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class ChessMoveSet:
    # --- RULE FRAGMENTS ---
    move_piece: MoveChessPiece
    eat: EatPiece
    must_eat: MustEat
    cannot_eat: CanNotEat
    only_first_move: OnlyFirstMove
    no_collision: MustNotCollide
    en_passant: EnPassant
    roque: Roque
    promote: Promote

    # --- SLIDING (rook, bishop, queen) ---
    horizontal_straights: Move
    vertical_straights: Move
    diagonals: Move

    # --- KING ---
    king_grand_roque: Move
    king_petit_roque: Move
    king_horizontal: Move
    king_vertical: Move
    king_diagonals: Move

    # --- PAWNS (one set per direction) ---
    pawn_straight_1_up: Move
    pawn_eat_1_up: Move
    pawn_straight_2_up: Move
    pawn_en_passant_up: Move
    pawn_straight_1_down: Move
    pawn_eat_1_down: Move
    pawn_straight_2_down: Move
    pawn_en_passant_down: Move

    # --- KNIGHT ---
    knight_l: Move
    knight_l2: Move

    @classmethod
    def build(cls, length: int, height: int) -> Self:
        move_piece = MoveChessPiece()
        eat = EatPiece()
        must_eat = MustEat()
        cannot_eat = CanNotEat()
        only_first_move = OnlyFirstMove()
        no_collision = MustNotCollide()
        en_passant = EnPassant()
        roque = Roque()
        promote = Promote()

        return cls(
            move_piece=move_piece,
            eat=eat,
            must_eat=must_eat,
            cannot_eat=cannot_eat,
            only_first_move=only_first_move,
            no_collision=no_collision,
            en_passant=en_passant,
            roque=roque,
            promote=promote,
            horizontal_straights=Move(
                Vector(length, 0), False, True, [no_collision], [eat], "horizontal_straights"
            ),
            vertical_straights=Move(
                Vector(0, height), True, False, [no_collision], [eat], "vertical_straights"
            ),
            diagonals=Move(
                Vector(length, height), True, True, [no_collision], [eat], "diagonals"
            ),
            # the base vector only bounds the reach: Roque itself requires a 2 squares king move
            king_grand_roque=Move(
                Vector(-4, 0), False, False, [only_first_move, no_collision, roque], [roque], "king_grand_roque"
            ),
            king_petit_roque=Move(
                Vector(3, 0), False, False, [only_first_move, no_collision, roque], [roque], "king_petit_roque"
            ),
            king_horizontal=Move(Vector(1, 0), True, True, [no_collision], [eat], "king_horizontal"),
            king_vertical=Move(Vector(0, 1), True, False, [no_collision], [eat], "king_vertical"),
            king_diagonals=Move(Vector(1, 1), True, True, [no_collision], [eat], "king_diagonals"),
            pawn_straight_1_up=Move(
                Vector(0, 1), False, False, [no_collision, cannot_eat], [move_piece, promote], "pawn_straight_1_up"
            ),
            pawn_eat_1_up=Move(
                Vector(1, 1), False, True, [no_collision, must_eat], [eat, promote], "pawn_eat_1_up"
            ),
            pawn_straight_2_up=Move(
                Vector(0, 2), False, False, [no_collision, cannot_eat, only_first_move], [move_piece], "pawn_straight_2_up"
            ),
            pawn_en_passant_up=Move(
                Vector(1, 1), False, True, [no_collision, en_passant], [en_passant, move_piece], "pawn_en_passant_up"
            ),
            pawn_straight_1_down=Move(
                Vector(0, -1), False, False, [no_collision, cannot_eat], [move_piece, promote], "pawn_straight_1_down"
            ),
            pawn_eat_1_down=Move(
                Vector(-1, -1), False, True, [no_collision, must_eat], [eat, promote], "pawn_eat_1_down"
            ),
            pawn_straight_2_down=Move(
                Vector(0, -2), False, False, [no_collision, cannot_eat, only_first_move], [move_piece], "pawn_straight_2_down"
            ),
            pawn_en_passant_down=Move(
                Vector(-1, -1), False, True, [no_collision, en_passant], [en_passant, move_piece], "pawn_en_passant_down"
            ),
            knight_l=Move(Vector(2, 1), True, True, [], [eat], "knight_l"),
            knight_l2=Move(Vector(1, 2), True, True, [], [eat], "knight_l2"),
        )

    @property
    def pawn_double_advances(self) -> tuple[Move, Move]:
        return (self.pawn_straight_2_up, self.pawn_straight_2_down)

    def pawn_moves(self, direction: Direction) -> tuple[Move, ...]:
        if direction == Direction.UP:
            return (
                self.pawn_straight_1_up,
                self.pawn_straight_2_up,
                self.pawn_eat_1_up,
                self.pawn_en_passant_up,
            )
        return (
            self.pawn_straight_1_down,
            self.pawn_straight_2_down,
            self.pawn_eat_1_down,
            self.pawn_en_passant_down,
        )

    def for_piece(self, piece_type: ChessPieceType, color: ChessColor) -> tuple[Move, ...]:
        """The ordered Moves of an archetype. First match wins, so the order matters."""
        if piece_type == ChessPieceType.PAWN:
            return self.pawn_moves(color.direction)
        if piece_type not in PIECE_MOVES:
            raise InvalidArgumentError(f"Unknown piece type: {piece_type!r}")
        return tuple(getattr(self, name) for name in PIECE_MOVES[piece_type])

    def all_moves(self) -> list[Move]:
        return [value for value in vars(self).values() if isinstance(value, Move)]


# --- MOVES PER ARCHETYPE (pawns depend on their direction, see `ChessMoveSet.pawn_moves`) ---
PIECE_MOVES: dict[ChessPieceType, tuple[str, ...]] = {
    ChessPieceType.ROOK: ("vertical_straights", "horizontal_straights"),
    ChessPieceType.KNIGHT: ("knight_l", "knight_l2"),
    ChessPieceType.BISHOP: ("diagonals",),
    ChessPieceType.QUEEN: ("vertical_straights", "horizontal_straights", "diagonals"),
    ChessPieceType.KING: (
        "king_vertical",
        "king_horizontal",
        "king_diagonals",
        "king_grand_roque",
        "king_petit_roque",
    ),
}
