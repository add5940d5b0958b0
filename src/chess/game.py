"""
The Chess board is the entrypoint into the rule engine for whatever drives the game (a display, a console, tests...).
It is responsible for turns, check and checkmate, on top of the generic Board that moves the pieces.

How check is detected
---
* a move is legal only if it does not leave the mover's king attacked.
  This is found out by speculation: play the move for real, look at the king, revert the move.
* "is this square attacked?" asks every opposing piece whether it could move there.
  That question is asked in attack-scan mode: pieces answer with their pseudo-legal moves
  (no speculation of their own, no castling), and an empty target square temporarily holds a stand-in
  of the defending color, so that only moves able to capture count (a pawn attacks diagonally, never straight ahead).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from enum import Enum, auto
from typing import Optional

from src.board.board import Board
from src.board.move import Move
from src.board.piece import Piece
from src.board.vector import Vector
from src.chess.color import ChessColor
from src.chess.events import ChessObserver, PromotionChooser
from src.chess.moves import ChessMoveSet
from src.chess.pieces import (
    PROMOTION_OPTIONS,
    Bishop,
    ChessPiece,
    King,
    Knight,
    Pawn,
    Queen,
    Rook,
    create_piece,
)
from src.chess.settings import ChessSettings
from src.core.exceptions import GameStateError, InvalidArgumentError

logger = logging.getLogger(__name__)

SIZE = 8


class GameStatus(Enum):
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    FINISHED = auto()


class Chess(Board):
    def __init__(
        self,
        settings: Optional[ChessSettings] = None,
        observers: Iterable[ChessObserver] = (),
        choose_promotion: Optional[PromotionChooser] = None,
    ) -> None:
        super().__init__(SIZE, SIZE)
        self.settings = settings or ChessSettings()
        self.moves = ChessMoveSet.build(self.length, self.height)
        self.observers: list[ChessObserver] = list(observers)
        self.choose_promotion = choose_promotion

        self.status = GameStatus.NOT_STARTED
        self.turn: ChessColor = self.settings.first_color
        self.winner: Optional[ChessColor] = None

        self._speculation_depth = 0
        self._attack_scan_depth = 0

    def add_observer(self, observer: ChessObserver) -> None:
        self.observers.append(observer)

    # --- GAME FLOW ---
    def start_game(self) -> None:
        """(Re)start from the initial position. Anything played before is forgotten."""
        self.historic.clear()
        self.turn = self.settings.first_color
        self.winner = None
        self.init_pieces()
        self.status = GameStatus.IN_PROGRESS
        logger.info("Game started, %s to play", self.turn)

    def init_pieces(self) -> None:
        """
        Initial position, derived from each color's direction
        ---

        * pawns fill the second row from the color's own edge
        * rooks, knights and bishops come in pairs, symmetric from both side edges
        * queen and king are counted from the first side edge (so: queen on d, king on e, for both colors)
        """
        self.empty_board()
        for color in ChessColor:
            direction = color.direction
            first_side = direction.adjacent[0]

            for offset in range(self.length):
                self.set_piece_at_position(
                    Pawn(color, self),
                    Vector(
                        first_side.starting_edge(self.length, offset),
                        direction.starting_edge(self.height, Pawn.starting_row),
                    ),
                )

            for piece_class in (Queen, King):
                self.set_piece_at_position(
                    piece_class(color, self),
                    Vector(
                        first_side.starting_edge(self.length, piece_class.starting_column),
                        direction.starting_edge(self.height, piece_class.starting_row),
                    ),
                )

            for side in direction.adjacent:
                for piece_class in (Rook, Knight, Bishop):
                    self.set_piece_at_position(
                        piece_class(color, self),
                        Vector(
                            side.starting_edge(self.length, piece_class.starting_column),
                            direction.starting_edge(self.height, piece_class.starting_row),
                        ),
                    )

    def move(self, start: Vector, destination: Vector) -> bool:
        """
        Play a move for the side whose turn it is.

        Returns False (and changes nothing) if the game is not in progress, if there is no piece of that side on
        `start`, or if no rule allows the move. Otherwise the turn passes and the new side to play is looked at:
        checkmate ends the game, check is reported to the observers.
        Raises GameStateError, before touching the board, unless each side has exactly one king.
        """
        if self.status != GameStatus.IN_PROGRESS:
            logger.debug("Move %s -> %s rejected: game is not in progress", start, destination)
            return False

        piece = self.get_piece_at_position(start)
        if piece is None or piece.color != self.turn:
            logger.debug("Move %s -> %s rejected: no %s piece to move", start, destination, self.turn)
            return False

        # both sides are looked at once the move is played: refuse before anything changes
        for color in ChessColor:
            self._king_position(color)

        if not super().move(start, destination):
            logger.debug("Move %s -> %s rejected for %r", start, destination, piece)
            return False

        logger.debug("Move %s -> %s played by %r", start, destination, piece)
        self.turn = self.turn.next
        if self.checkmate(self.turn):
            self.end_game(self.turn.next)
        elif self.check(self.turn):
            logger.debug("%s is in check", self.turn)
            self._notify("on_check", self.turn)
        return True

    def end_game(self, winner: ChessColor) -> None:
        self.status = GameStatus.FINISHED
        self.winner = winner
        logger.info("Checkmate, %s wins", winner)
        self._notify("on_checkmate", winner)

    def undo_last_move(self) -> None:
        """
        Take back the last move: the position, the turn, and (if that move ended it) the end of the game.
        Raises EmptyHistoryError if there is nothing to take back.
        """
        self.revert_last_move()
        # only two sides: the previous one is also the next one
        self.turn = self.turn.next
        if self.status == GameStatus.FINISHED:
            self.status = GameStatus.IN_PROGRESS
            self.winner = None
        logger.info("Last move undone, %s to play", self.turn)

    # --- CHECK DETECTION ---
    def check(self, defending_color: ChessColor) -> bool:
        """Is the king of that color attacked? (no king on the board: not in check)"""
        return any(
            self.is_attacked(defending_color, position)
            for position in self.search_pieces(King(defending_color, self))
        )

    def checkmate(self, defending_color: ChessColor) -> bool:
        """In check, and no piece of that color has any legal move left."""
        if not self.is_attacked(defending_color, self._king_position(defending_color)):
            return False

        for position in self.locate_color(defending_color):
            piece = self.get_piece_at_position(position)
            if piece.possible_moves(position):
                return False
        return True

    def _king_position(self, color: ChessColor) -> Vector:
        kings = self.search_pieces(King(color, self))
        if len(kings) != 1:
            raise GameStateError(f"Expected exactly one {color} king on the board, found {len(kings)}")
        return kings[0]

    def is_attacked(self, defending_color: ChessColor, position: Vector) -> bool:
        """Could any piece of the other color move to (capture on) this position?"""
        square = self._square_at(position)
        stand_in = None
        if square.is_empty():
            # placed directly on the square: nothing actually happens on the board, observers are not told
            stand_in = King(defending_color, self)
            square.piece = stand_in
        try:
            with self._scanning_attacks():
                for origin in self.positions():
                    attacker = self.get_piece_at_position(origin)
                    if attacker is None or attacker.color == defending_color:
                        continue
                    if attacker.move(origin, position):
                        return True
                return False
        finally:
            if stand_in is not None:
                square.piece = None

    def does_move_check(self, piece: ChessPiece, start: Vector, destination: Vector, move: Move) -> bool:
        """Would this move leave the mover's own king in check? Plays it, looks, and always reverts it."""
        with self._speculating():
            piece.do_move(start, destination, move)
            try:
                return self.check(piece.color)
            finally:
                self.revert_last_move()

    @property
    def is_speculating(self) -> bool:
        return self._speculation_depth > 0

    @property
    def scanning_attacks(self) -> bool:
        return self._attack_scan_depth > 0

    @contextmanager
    def _speculating(self) -> Iterator[None]:
        self._speculation_depth += 1
        try:
            yield
        finally:
            self._speculation_depth -= 1

    @contextmanager
    def _scanning_attacks(self) -> Iterator[None]:
        self._attack_scan_depth += 1
        try:
            yield
        finally:
            self._attack_scan_depth -= 1

    # --- PROMOTION ---
    def get_promoted_piece(self, color: ChessColor) -> ChessPiece:
        """
        The piece a pawn of that color promotes to.

        Asks `choose_promotion` when there is one (never while speculating: the configured default is used then).
        """
        default = create_piece(self.settings.promotion_default, color, self)
        if self.choose_promotion is None or self.is_speculating:
            return default

        candidates = [create_piece(piece_type, color, self) for piece_type in PROMOTION_OPTIONS]
        choice = self.choose_promotion(color, candidates)
        if choice is None:
            return default
        if not any(choice is candidate for candidate in candidates):
            raise InvalidArgumentError(
                f"Promotion choice must be one of the offered pieces, got {choice!r}"
            )
        logger.debug("%s pawn promoted to %r", color, choice)
        return choice

    # --- QUERIES ---
    def locate_color(self, color: ChessColor) -> list[Vector]:
        """Every position holding a piece of that color"""
        positions = []
        for position in self.positions():
            piece = self.get_piece_at_position(position)
            if piece is not None and piece.color == color:
                positions.append(position)
        return positions

    @property
    def pawn_double_advances(self) -> tuple[Move, Move]:
        return self.moves.pawn_double_advances

    # --- SQUARE ACCESS (observed) ---
    def set_piece_at_position(self, piece: Piece, position: Vector) -> Piece:
        if not isinstance(piece, ChessPiece):
            raise InvalidArgumentError(f"Only chess pieces can be placed on a chess board, got {piece!r}")
        super().set_piece_at_position(piece, position)
        self._notify("on_piece_placed", piece.piece_type, piece.color, position.i, position.j)
        return piece

    def remove_piece_at_position(self, position: Vector) -> Optional[ChessPiece]:
        removed = super().remove_piece_at_position(position)
        if removed is not None:
            self._notify("on_piece_removed", position.i, position.j)
        return removed

    def _notify(self, event: str, *args: object) -> None:
        for observer in self.observers:
            try:
                getattr(observer, event)(*args)
            except Exception:
                logger.exception("Observer %r failed on %s", observer, event)
