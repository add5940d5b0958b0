"""
Errors raised by the engine.

NOTE: An illegal move is NOT an error. Wrong turn, empty square, rule violation... all come back as `False`.
These exceptions signal a programming error in the calling layer and are not meant to be recovered from locally.
"""


class EngineError(Exception):
    """Base class for everything the engine raises."""


class InvalidConstructionError(EngineError, ValueError):
    """Board or square created with impossible dimensions/coordinates."""


class InvalidArgumentError(EngineError, ValueError):
    """Missing vector/piece, or a coordinate outside of the board. Never silently clamped."""


class EmptyHistoryError(EngineError, RuntimeError):
    """Reverting (or peeking at) the last move while no move has been played."""


class GameStateError(EngineError):
    """The position breaks an invariant the game relies on (ex. one king per color)."""
