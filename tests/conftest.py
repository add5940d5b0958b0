"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple modules.
"""

from typing import Callable

import pytest

from src.chess.color import ChessColor
from src.chess.game import Chess
from src.chess.notation import from_algebraic
from src.chess.pieces import ChessPiece

PlaceFn = Callable[[Chess, str, type[ChessPiece], ChessColor], ChessPiece]
PlayFn = Callable[..., list[bool]]


@pytest.fixture
def game() -> Chess:
    """A game in its initial position, white to play"""
    chess = Chess()
    chess.start_game()
    return chess


@pytest.fixture
def empty_game() -> Chess:
    """A started game without any piece on the board. Place the pieces the test needs."""
    chess = Chess()
    chess.start_game()
    chess.empty_board()
    return chess


@pytest.fixture
def place() -> PlaceFn:
    """Put a new piece on a square given in algebraic notation"""

    def _place(chess: Chess, square: str, piece_class: type[ChessPiece], color: ChessColor) -> ChessPiece:
        piece = piece_class(color, chess)
        chess.set_piece_at_position(piece, from_algebraic(square))
        return piece

    return _place


@pytest.fixture
def play() -> PlayFn:
    """
    Play moves written as 'e2e4' (from square + to square) one after the other.
    Returns whether each one was accepted.
    """

    def _play(chess: Chess, *moves: str) -> list[bool]:
        return [
            chess.move(from_algebraic(move[:2]), from_algebraic(move[2:4]))
            for move in moves
        ]

    return _play
