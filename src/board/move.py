"""
Movement pattern + legality + effects
-----

A Move is a reusable definition, shared by every piece of the same archetype (all rooks use the same two Move objects).

* geometry: a base vector bounding the reach, and two mirror flags.
  A single definition can therefore cover up to 4 directions:
  base, mirror_x, mirror_y and (when both flags are set) the opposite.
* legality: an ordered list of conditions, AND-combined.
* effects: an ordered list of actions, applied in order and reverted in reverse order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from src.board.rules import GameAction, GameCondition
from src.board.vector import Vector
from src.core.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from src.board.piece import Piece


@dataclass(frozen=True, eq=False)
class Move:
    vector: Vector
    mirrored_x: bool = False
    mirrored_y: bool = False
    conditions: Sequence[GameCondition[Any]] = field(default=(), repr=False)
    actions: Sequence[GameAction[Any]] = field(default=(), repr=False)
    name: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.vector, Vector):
            raise InvalidArgumentError("movement vector must be a Vector")
        # Moves are shared between pieces: freeze the lists handed in
        object.__setattr__(self, "conditions", tuple(self.conditions or ()))
        object.__setattr__(self, "actions", tuple(self.actions or ()))

    def directions(self) -> list[Vector]:
        """All the directions this definition allows, derived from the base vector and the mirror flags."""
        directions = [self.vector]
        if self.mirrored_x:
            directions.append(self.vector.mirror_x())
        if self.mirrored_y:
            directions.append(self.vector.mirror_y())
        if self.mirrored_x and self.mirrored_y:
            directions.append(self.vector.opposed())
        return directions

    def can_move(self, start: Vector, destination: Vector, board: Any) -> bool:
        """
        Is the move from start to destination allowed by this definition?
        ---

        1. The base vector is an upper bound on the reach, not an exact pattern.
           (That's how a single Move spans a whole sliding ray.)
        2. The displacement must point in one of the allowed directions.
        3. Every condition must hold.
        """
        movement = destination - start
        if movement.norm() > self.vector.norm():
            return False

        if not any(
            movement.are_collinear_and_same_direction(direction)
            for direction in self.directions()
        ):
            return False

        return self.check_conditions(start, destination, board)

    def check_conditions(self, start: Vector, destination: Vector, board: Any) -> bool:
        """First failing condition short-circuits. No conditions at all: always allowed."""
        return all(
            condition.check_condition(start, destination, board)
            for condition in self.conditions
        )

    def do_move(
        self, start: Vector, destination: Vector, board: Any
    ) -> list[Optional[Piece]]:
        """
        Run every action in declaration order
        ---

        Returns one entry per action (the piece it affected, or None). This is the payload needed to revert.
        If an action fails halfway, the actions that already ran are undone before the error propagates.
        """
        affected_pieces: list[Optional[Piece]] = []
        try:
            for action in self.actions:
                affected_pieces.append(action.do_action(start, destination, board))
        except Exception:
            done = self.actions[: len(affected_pieces)]
            for action, affected in zip(reversed(done), reversed(affected_pieces)):
                action.revert_action(start, destination, affected, board)
            raise
        return affected_pieces

    def revert_move(
        self,
        start: Vector,
        destination: Vector,
        affected_pieces: Sequence[Optional[Piece]],
        board: Any,
    ) -> None:
        """Undo `do_move`: actions in reverse order, each one getting back what it returned."""
        if len(affected_pieces) != len(self.actions):
            raise InvalidArgumentError(
                f"Expected {len(self.actions)} affected pieces to revert {self!r}, got {len(affected_pieces)}."
            )
        for action, affected in zip(reversed(self.actions), reversed(affected_pieces)):
            action.revert_action(start, destination, affected, board)
