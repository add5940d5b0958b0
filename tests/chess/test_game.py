"""Unit tests for /src/chess/game.py"""

from unittest.mock import Mock

import pytest

from src.chess.color import ChessColor
from src.chess.game import Chess, GameStatus
from src.chess.notation import from_algebraic as sq
from src.chess.pieces import (
    Bishop,
    ChessPieceType,
    King,
    Knight,
    Pawn,
    Queen,
    Rook,
)
from src.chess.settings import ChessSettings
from src.core.exceptions import (
    EmptyHistoryError,
    GameStateError,
    InvalidArgumentError,
)

FOOLS_MATE = ["f2f3", "e7e5", "g2g4", "d8h4"]


def occupancy(chess: Chess) -> dict[str, tuple[ChessPieceType, ChessColor]]:
    """Snapshot of the board, to compare positions before/after"""
    snapshot = {}
    for position in chess.positions():
        piece = chess.get_piece_at_position(position)
        if piece is not None:
            snapshot[f"{position.i},{position.j}"] = (piece.piece_type, piece.color)
    return snapshot


# --- SETUP ---
def test_new_game_is_not_started() -> None:
    chess = Chess()
    assert chess.status == GameStatus.NOT_STARTED
    assert chess.turn == ChessColor.WHITE
    assert chess.winner is None
    assert not chess.move(sq("e2"), sq("e4"))


@pytest.mark.parametrize(
    "square, piece",
    [
        ("a1", (ChessPieceType.ROOK, ChessColor.WHITE)),
        ("b1", (ChessPieceType.KNIGHT, ChessColor.WHITE)),
        ("c1", (ChessPieceType.BISHOP, ChessColor.WHITE)),
        ("d1", (ChessPieceType.QUEEN, ChessColor.WHITE)),
        ("e1", (ChessPieceType.KING, ChessColor.WHITE)),
        ("f1", (ChessPieceType.BISHOP, ChessColor.WHITE)),
        ("g1", (ChessPieceType.KNIGHT, ChessColor.WHITE)),
        ("h1", (ChessPieceType.ROOK, ChessColor.WHITE)),
        ("a8", (ChessPieceType.ROOK, ChessColor.BLACK)),
        ("d8", (ChessPieceType.QUEEN, ChessColor.BLACK)),
        ("e8", (ChessPieceType.KING, ChessColor.BLACK)),
        ("g8", (ChessPieceType.KNIGHT, ChessColor.BLACK)),
    ],
)
def test_initial_position(game: Chess, square: str, piece: tuple[ChessPieceType, ChessColor]) -> None:
    occupant = game.get_piece_at_position(sq(square))
    assert (occupant.piece_type, occupant.color) == piece


def test_initial_pawns_and_counts(game: Chess) -> None:
    assert game.status == GameStatus.IN_PROGRESS
    assert len(game.locate_color(ChessColor.WHITE)) == 16
    assert len(game.locate_color(ChessColor.BLACK)) == 16
    for file in "abcdefgh":
        assert game.get_piece_at_position(sq(f"{file}2")) == Pawn(ChessColor.WHITE, game)
        assert game.get_piece_at_position(sq(f"{file}7")) == Pawn(ChessColor.BLACK, game)
        for rank in "3456":
            assert game.get_piece_at_position(sq(f"{file}{rank}")) is None


def test_start_game_resets(game: Chess, play) -> None:
    play(game, "e2e4", "e7e5")
    game.start_game()
    assert game.history_depth == 0
    assert game.turn == ChessColor.WHITE
    assert game.get_piece_at_position(sq("e4")) is None
    assert len(game.locate_color(ChessColor.WHITE)) == 16


def test_first_color_from_settings() -> None:
    chess = Chess(ChessSettings(first_color=ChessColor.BLACK))
    chess.start_game()
    assert chess.turn == ChessColor.BLACK
    assert not chess.move(sq("e2"), sq("e4"))
    assert chess.move(sq("e7"), sq("e5"))
    assert chess.turn == ChessColor.WHITE


# --- TURNS ---
def test_turns_alternate(game: Chess, play) -> None:
    assert play(game, "e7e5") == [False]
    assert play(game, "e2e4") == [True]
    assert game.turn == ChessColor.BLACK
    assert play(game, "d2d4") == [False]
    assert play(game, "e7e5") == [True]
    assert game.turn == ChessColor.WHITE


def test_moving_from_an_empty_square(game: Chess) -> None:
    assert not game.move(sq("e4"), sq("e5"))
    assert game.turn == ChessColor.WHITE


def test_out_of_bounds_is_an_error(game: Chess) -> None:
    with pytest.raises(InvalidArgumentError):
        game.move(sq("e2"), sq("e9"))


@pytest.mark.parametrize("move", ["e2e5", "e2d3", "b1b3", "a1a3", "c1e3", "e1e2"])
def test_illegal_moves_change_nothing(game: Chess, play, move: str) -> None:
    before = occupancy(game)
    assert play(game, move) == [False]
    assert occupancy(game) == before
    assert game.history_depth == 0
    assert game.turn == ChessColor.WHITE


@pytest.mark.parametrize("move", ["e2e3", "e2e4", "b1a3", "b1c3", "g1f3", "h2h4"])
def test_opening_moves(game: Chess, play, move: str) -> None:
    assert play(game, move) == [True]
    assert game.history_depth == 1


def test_sliding_stops_at_the_first_piece(game: Chess, play) -> None:
    assert play(game, "a2a4", "a7a6") == [True, True]
    assert play(game, "a1a3") == [True]
    assert play(game, "h7h6", "a3h3") == [True, True]
    # h3 -> h7 crosses nothing, but h6 holds a pawn in between
    assert play(game, "b7b6", "h3h7") == [True, False]
    assert play(game, "h3h6") == [True]
    assert game.get_piece_at_position(sq("h6")) == Rook(ChessColor.WHITE, game)


def test_pawn_double_advance_only_once(game: Chess, play) -> None:
    assert play(game, "e2e3", "e7e6") == [True, True]
    assert play(game, "e3e5") == [False]


def test_pawn_can_not_eat_straight_ahead(game: Chess, play) -> None:
    assert play(game, "e2e4", "e7e5", "e4e5") == [True, True, False]
    assert play(game, "d2d4", "d7d6", "d4e5") == [True, True, True]


# --- CHECK ---
def test_pinned_piece_can_not_move(empty_game: Chess, place) -> None:
    place(empty_game, "e1", King, ChessColor.WHITE)
    bishop = place(empty_game, "e2", Bishop, ChessColor.WHITE)
    place(empty_game, "e8", Rook, ChessColor.BLACK)
    place(empty_game, "a8", King, ChessColor.BLACK)

    assert bishop.possible_moves(sq("e2")) == []
    assert not empty_game.move(sq("e2"), sq("d3"))


def test_king_can_not_walk_into_check(empty_game: Chess, place) -> None:
    place(empty_game, "e1", King, ChessColor.WHITE)
    place(empty_game, "d8", Rook, ChessColor.BLACK)
    place(empty_game, "a8", King, ChessColor.BLACK)

    assert not empty_game.move(sq("e1"), sq("d1"))
    assert not empty_game.move(sq("e1"), sq("d2"))
    assert empty_game.move(sq("e1"), sq("f1"))


def test_pawn_attacks_diagonally_only(empty_game: Chess, place) -> None:
    place(empty_game, "e1", King, ChessColor.WHITE)
    place(empty_game, "a8", King, ChessColor.BLACK)
    place(empty_game, "e3", Pawn, ChessColor.BLACK)

    assert empty_game.is_attacked(ChessColor.WHITE, sq("d2"))
    assert empty_game.is_attacked(ChessColor.WHITE, sq("f2"))
    assert not empty_game.is_attacked(ChessColor.WHITE, sq("e2"))
    # the check scan leaves no trace on the board
    assert empty_game.get_piece_at_position(sq("d2")) is None
    assert not empty_game.scanning_attacks


def test_kings_keep_their_distance(empty_game: Chess, place) -> None:
    place(empty_game, "e1", King, ChessColor.WHITE)
    place(empty_game, "e3", King, ChessColor.BLACK)
    assert not empty_game.move(sq("e1"), sq("e2"))
    assert empty_game.move(sq("e1"), sq("d1"))


def test_check(game: Chess, play) -> None:
    assert play(game, "e2e4", "f7f6", "d1h5") == [True, True, True]
    assert game.check(ChessColor.BLACK)
    assert not game.checkmate(ChessColor.BLACK)
    assert game.status == GameStatus.IN_PROGRESS
    # getting out of check is mandatory
    assert play(game, "a7a6") == [False]
    assert play(game, "g7g6") == [True]
    assert not game.check(ChessColor.BLACK)


def test_fools_mate(game: Chess, play) -> None:
    assert play(game, *FOOLS_MATE) == [True] * 4
    assert game.checkmate(ChessColor.WHITE)
    assert game.status == GameStatus.FINISHED
    assert game.winner == ChessColor.BLACK
    assert play(game, "a2a3") == [False]


def test_checkmate_requires_one_king_per_color(empty_game: Chess, place) -> None:
    place(empty_game, "e1", King, ChessColor.WHITE)
    with pytest.raises(GameStateError):
        empty_game.checkmate(ChessColor.BLACK)

    place(empty_game, "e8", King, ChessColor.BLACK)
    place(empty_game, "a8", King, ChessColor.BLACK)
    with pytest.raises(GameStateError):
        empty_game.checkmate(ChessColor.BLACK)


@pytest.mark.parametrize("extra_black_kings", [[], ["e8", "a8"]])
def test_move_without_one_king_per_color_changes_nothing(
    empty_game: Chess, place, extra_black_kings: list[str]
) -> None:
    place(empty_game, "e1", King, ChessColor.WHITE)
    place(empty_game, "a1", Rook, ChessColor.WHITE)
    for square in extra_black_kings:
        place(empty_game, square, King, ChessColor.BLACK)
    before = occupancy(empty_game)

    with pytest.raises(GameStateError):
        empty_game.move(sq("a1"), sq("a5"))

    assert empty_game.history_depth == 0
    assert empty_game.turn == ChessColor.WHITE
    assert occupancy(empty_game) == before
    assert empty_game.status == GameStatus.IN_PROGRESS


def test_no_king_is_no_check(empty_game: Chess) -> None:
    assert not empty_game.check(ChessColor.WHITE)


def test_speculation_leaves_no_trace(game: Chess, play) -> None:
    play(game, "e2e4", "e7e5")
    before = occupancy(game)
    assert game.checkmate(ChessColor.WHITE) is False
    game.get_piece_at_position(sq("d1")).possible_moves(sq("d1"))
    assert occupancy(game) == before
    assert game.history_depth == 2
    assert not game.is_speculating


# --- EN PASSANT ---
def test_en_passant(game: Chess, play) -> None:
    assert play(game, "e2e4", "a7a6", "e4e5", "d7d5") == [True] * 4
    pawn = game.get_piece_at_position(sq("e5"))

    assert play(game, "e5d6") == [True]
    assert game.get_piece_at_position(sq("d6")) is pawn
    assert game.get_piece_at_position(sq("d5")) is None
    assert game.get_piece_at_position(sq("e5")) is None
    assert len(game.locate_color(ChessColor.BLACK)) == 15


def test_en_passant_only_right_after_the_double_advance(game: Chess, play) -> None:
    assert play(game, "e2e4", "a7a6", "e4e5", "d7d5", "h2h3", "h7h6") == [True] * 6
    assert play(game, "e5d6") == [False]


def test_no_en_passant_after_two_single_steps(game: Chess, play) -> None:
    assert play(game, "e2e4", "d7d6", "e4e5", "a7a6", "a2a3", "d6d5") == [True] * 6
    assert play(game, "e5d6") == [False]


def test_en_passant_round_trip(game: Chess, play) -> None:
    play(game, "e2e4", "a7a6", "e4e5", "d7d5")
    before = occupancy(game)
    play(game, "e5d6")

    game.undo_last_move()
    assert occupancy(game) == before
    assert game.turn == ChessColor.WHITE
    assert game.history_depth == 4
    # and the capture is still available
    assert play(game, "e5d6") == [True]


# --- CASTLING ---
KING_SIDE_READY = ["g1f3", "a7a6", "e2e3", "b7b6", "f1e2", "c7c6"]
QUEEN_SIDE_READY = ["b1c3", "a7a6", "d2d3", "b7b6", "c1e3", "c7c6", "d1d2", "d7d6"]


def test_king_side_castling(game: Chess, play) -> None:
    assert play(game, *KING_SIDE_READY) == [True] * 6
    king = game.get_piece_at_position(sq("e1"))
    rook = game.get_piece_at_position(sq("h1"))

    assert play(game, "e1g1") == [True]
    assert game.get_piece_at_position(sq("g1")) is king
    assert game.get_piece_at_position(sq("f1")) is rook
    assert game.get_piece_at_position(sq("e1")) is None
    assert game.get_piece_at_position(sq("h1")) is None
    assert game.turn == ChessColor.BLACK


def test_queen_side_castling(game: Chess, play) -> None:
    assert play(game, *QUEEN_SIDE_READY) == [True] * 8
    assert play(game, "e1c1") == [True]
    assert game.get_piece_at_position(sq("c1")) == King(ChessColor.WHITE, game)
    assert game.get_piece_at_position(sq("d1")) == Rook(ChessColor.WHITE, game)
    assert game.get_piece_at_position(sq("a1")) is None


def test_castling_blocked(game: Chess, play) -> None:
    assert play(game, "e1g1") == [False]
    assert play(game, "e2e3", "a7a6", "f1e2", "b7b6") == [True] * 4
    # the knight is still on g1
    assert play(game, "e1g1") == [False]


def test_no_castling_once_the_rook_has_moved(game: Chess, play) -> None:
    assert play(game, *KING_SIDE_READY) == [True] * 6
    assert play(game, "h1g1", "d7d6", "g1h1", "e7e6") == [True] * 4
    assert play(game, "e1g1") == [False]


def test_no_castling_once_the_king_has_moved(game: Chess, play) -> None:
    assert play(game, *KING_SIDE_READY) == [True] * 6
    assert play(game, "e1f1", "d7d6", "f1e1", "e7e6") == [True] * 4
    assert play(game, "e1g1") == [False]


def test_no_castling_out_of_check(empty_game: Chess, place) -> None:
    place(empty_game, "e1", King, ChessColor.WHITE)
    place(empty_game, "h1", Rook, ChessColor.WHITE)
    place(empty_game, "e8", Rook, ChessColor.BLACK)
    place(empty_game, "a8", King, ChessColor.BLACK)
    assert not empty_game.move(sq("e1"), sq("g1"))


def test_no_castling_through_check(empty_game: Chess, place) -> None:
    place(empty_game, "e1", King, ChessColor.WHITE)
    place(empty_game, "h1", Rook, ChessColor.WHITE)
    place(empty_game, "f8", Rook, ChessColor.BLACK)
    place(empty_game, "a8", King, ChessColor.BLACK)
    assert not empty_game.move(sq("e1"), sq("g1"))


def test_castling_on_a_quiet_board(empty_game: Chess, place) -> None:
    place(empty_game, "e1", King, ChessColor.WHITE)
    place(empty_game, "h1", Rook, ChessColor.WHITE)
    place(empty_game, "b7", Rook, ChessColor.BLACK)
    place(empty_game, "a8", King, ChessColor.BLACK)
    assert empty_game.move(sq("e1"), sq("g1"))


def test_castling_round_trip(game: Chess, play) -> None:
    play(game, *KING_SIDE_READY)
    before = occupancy(game)
    play(game, "e1g1")

    game.undo_last_move()
    assert occupancy(game) == before
    assert game.turn == ChessColor.WHITE
    assert game.history_depth == 6
    assert play(game, "e1g1") == [True]


# --- PROMOTION ---
@pytest.fixture
def promotion_game(empty_game: Chess, place) -> Chess:
    """White pawn one step away from promoting"""
    place(empty_game, "a7", Pawn, ChessColor.WHITE)
    place(empty_game, "e1", King, ChessColor.WHITE)
    place(empty_game, "h6", King, ChessColor.BLACK)
    return empty_game


def test_promotion_to_queen_by_default(promotion_game: Chess) -> None:
    assert promotion_game.move(sq("a7"), sq("a8"))
    assert promotion_game.get_piece_at_position(sq("a8")) == Queen(ChessColor.WHITE, promotion_game)
    assert promotion_game.get_piece_at_position(sq("a7")) is None


def test_promotion_default_from_settings(place) -> None:
    chess = Chess(ChessSettings(promotion_default=ChessPieceType.ROOK))
    chess.start_game()
    chess.empty_board()
    place(chess, "b2", Pawn, ChessColor.BLACK)
    place(chess, "e8", King, ChessColor.BLACK)
    place(chess, "h3", King, ChessColor.WHITE)
    chess.turn = ChessColor.BLACK

    assert chess.move(sq("b2"), sq("b1"))
    assert chess.get_piece_at_position(sq("b1")) == Rook(ChessColor.BLACK, chess)


def test_promotion_round_trip(promotion_game: Chess) -> None:
    pawn = promotion_game.get_piece_at_position(sq("a7"))
    promotion_game.move(sq("a7"), sq("a8"))

    promotion_game.undo_last_move()
    assert promotion_game.get_piece_at_position(sq("a7")) is pawn
    assert promotion_game.get_piece_at_position(sq("a8")) is None
    assert promotion_game.turn == ChessColor.WHITE
    assert promotion_game.history_depth == 0


def test_promotion_by_capture(promotion_game: Chess, place) -> None:
    knight = place(promotion_game, "b8", Knight, ChessColor.BLACK)
    assert promotion_game.move(sq("a7"), sq("b8"))
    assert promotion_game.get_piece_at_position(sq("b8")) == Queen(ChessColor.WHITE, promotion_game)

    promotion_game.undo_last_move()
    assert promotion_game.get_piece_at_position(sq("b8")) is knight
    assert promotion_game.get_piece_at_position(sq("a7")) == Pawn(ChessColor.WHITE, promotion_game)


def test_promotion_chooser(promotion_game: Chess) -> None:
    chooser = Mock(side_effect=lambda color, candidates: candidates[1])
    promotion_game.choose_promotion = chooser

    assert promotion_game.move(sq("a7"), sq("a8"))
    assert promotion_game.get_piece_at_position(sq("a8")) == Knight(ChessColor.WHITE, promotion_game)

    # asked once: never while speculating
    chooser.assert_called_once()
    color, candidates = chooser.call_args.args
    assert color == ChessColor.WHITE
    assert [candidate.piece_type for candidate in candidates] == [
        ChessPieceType.QUEEN,
        ChessPieceType.KNIGHT,
        ChessPieceType.ROOK,
        ChessPieceType.BISHOP,
    ]


def test_promotion_chooser_declines(promotion_game: Chess) -> None:
    promotion_game.choose_promotion = Mock(return_value=None)
    assert promotion_game.move(sq("a7"), sq("a8"))
    assert promotion_game.get_piece_at_position(sq("a8")) == Queen(ChessColor.WHITE, promotion_game)


def test_promotion_chooser_must_pick_a_candidate(promotion_game: Chess) -> None:
    pawn = promotion_game.get_piece_at_position(sq("a7"))
    promotion_game.choose_promotion = Mock(return_value=Queen(ChessColor.WHITE, promotion_game))

    with pytest.raises(InvalidArgumentError):
        promotion_game.move(sq("a7"), sq("a8"))
    assert promotion_game.get_piece_at_position(sq("a7")) is pawn
    assert promotion_game.get_piece_at_position(sq("a8")) is None
    assert promotion_game.history_depth == 0
    assert promotion_game.turn == ChessColor.WHITE


# --- UNDO ---
def test_undo_capture(game: Chess, play) -> None:
    play(game, "e2e4", "d7d5")
    before = occupancy(game)
    assert play(game, "e4d5") == [True]
    assert len(game.locate_color(ChessColor.BLACK)) == 15

    game.undo_last_move()
    assert occupancy(game) == before
    assert game.turn == ChessColor.WHITE
    assert game.history_depth == 2


def test_undo_everything(game: Chess, play) -> None:
    before = occupancy(game)
    moves = ["e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "g8f6"]
    assert play(game, *moves) == [True] * len(moves)
    for _ in moves:
        game.undo_last_move()
    assert occupancy(game) == before
    assert game.turn == ChessColor.WHITE
    with pytest.raises(EmptyHistoryError):
        game.undo_last_move()


def test_undo_reopens_a_finished_game(game: Chess, play) -> None:
    play(game, *FOOLS_MATE)
    game.undo_last_move()
    assert game.status == GameStatus.IN_PROGRESS
    assert game.winner is None
    assert game.turn == ChessColor.BLACK
    assert game.get_piece_at_position(sq("d8")) == Queen(ChessColor.BLACK, game)
    assert play(game, "d8h4") == [True]
    assert game.winner == ChessColor.BLACK


# --- BOARD ACCESS ---
def test_only_chess_pieces_on_a_chess_board(empty_game: Chess) -> None:
    with pytest.raises(InvalidArgumentError):
        empty_game.set_piece_at_position(Mock(), sq("a1"))
    with pytest.raises(InvalidArgumentError):
        empty_game.set_piece_at_position(None, sq("a1"))  # type: ignore[arg-type]


def test_locate_color(empty_game: Chess, place) -> None:
    place(empty_game, "a1", Rook, ChessColor.WHITE)
    place(empty_game, "c3", Bishop, ChessColor.WHITE)
    place(empty_game, "h8", King, ChessColor.BLACK)
    assert set(empty_game.locate_color(ChessColor.WHITE)) == {sq("a1"), sq("c3")}
    assert empty_game.locate_color(ChessColor.BLACK) == [sq("h8")]
