"""
Algebraic square names <-> board coordinates

Files (letters) run along i, ranks (numbers) along j: "a1" is (0, 0), "e2" is (4, 1).
"""

import string

from src.board.vector import Vector
from src.core.exceptions import InvalidArgumentError

FILES = string.ascii_lowercase


def from_algebraic(name: str) -> Vector:
    if len(name) < 2:
        raise InvalidArgumentError(f"Invalid square name: {name!r}")

    file = name[0].lower()
    rank = name[1:]
    if file not in FILES or not rank.isdigit() or int(rank) < 1:
        raise InvalidArgumentError(f"Invalid square name: {name!r}")

    return Vector(FILES.index(file), int(rank) - 1)


def to_algebraic(position: Vector) -> str:
    if not 0 <= position.i < len(FILES) or position.j < 0:
        raise InvalidArgumentError(f"No square name for {position}")
    return f"{FILES[position.i]}{position.j + 1}"
