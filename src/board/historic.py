"""
Undo log of the moves played on a board.

Stack discipline: a record is pushed when a move is committed and popped when it is reverted.
A record is never modified once pushed, so reverting only depends on what it captured at the time.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from src.board.vector import Vector
from src.core.exceptions import EmptyHistoryError

if TYPE_CHECKING:
    from src.board.move import Move
    from src.board.piece import Piece

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionRecord:
    """Snapshot of one committed move"""

    piece: Piece
    move: Move
    start: Vector
    destination: Vector
    affected_pieces: tuple[Optional[Piece], ...]

    def is_move(self, move: Move) -> bool:
        return move is self.move

    def revert(self) -> None:
        self.move.revert_move(
            self.start, self.destination, self.affected_pieces, self.piece.board
        )


class Historic:
    def __init__(self) -> None:
        self._records: list[ActionRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def add(
        self,
        piece: Piece,
        move: Move,
        start: Vector,
        destination: Vector,
        affected_pieces: Sequence[Optional[Piece]],
    ) -> None:
        self._records.append(
            ActionRecord(piece, move, start, destination, tuple(affected_pieces))
        )

    def is_piece_contained(self, piece: Optional[Piece]) -> bool:
        """Has this very piece (identity, not equality) ever been the mover?"""
        if piece is None:
            return False
        return any(record.piece is piece for record in self._records)

    def revert_last_move(self) -> None:
        if not self._records:
            raise EmptyHistoryError("No move has been played. Can't revert.")
        # popped only once reverted: a failing revert leaves the log as it was
        self._records[-1].revert()
        self._records.pop()

    def is_last_action(self, move: Move) -> bool:
        return self.last_action().is_move(move)

    def last_piece_moved(self) -> Piece:
        return self.last_action().piece

    def last_action(self) -> ActionRecord:
        if not self._records:
            raise EmptyHistoryError("No move has been played. Can't get last action.")
        return self._records[-1]

    def clear(self) -> None:
        logger.debug("Clearing %d historic records", len(self._records))
        self._records.clear()
