"""
Integer 2D displacement.

Used both as a coordinate on the board and as the displacement between two coordinates.
No validity constraint: negative components are fine for free vectors, only the Board cares about bounds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector:
    i: int
    j: int

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.i + other.i, self.j + other.j)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.i - other.i, self.j - other.j)

    def __mul__(self, factor: int) -> Vector:
        return Vector(factor * self.i, factor * self.j)

    __rmul__ = __mul__

    def __neg__(self) -> Vector:
        return self.opposed()

    def norm(self) -> float:
        return math.hypot(self.i, self.j)

    def smallest_collinear(self) -> Vector:
        """Divide both components by their gcd: (4, -6) -> (2, -3). The zero vector reduces to itself."""
        gcd = math.gcd(self.i, self.j)
        if gcd == 0:
            return self
        return Vector(self.i // gcd, self.j // gcd)

    def included_vectors(self) -> list[Vector]:
        """
        Integer points strictly between the origin and this vector
        ---

        ex) (3, 0) -> [(1, 0), (2, 0)]
            (2, 1) -> []  (a knight jump passes over nothing)

        Both endpoints are excluded. This is what collision and check-path scans walk over.
        """
        base = self.smallest_collinear()
        steps = math.gcd(self.i, self.j)
        return [base * factor for factor in range(1, steps)]

    def cross_product(self, other: Vector) -> int:
        return self.i * other.j - self.j * other.i

    def are_collinear(self, other: Vector) -> bool:
        return self.cross_product(other) == 0

    def are_collinear_and_same_direction(self, other: Vector) -> bool:
        """Same line AND same sign: (2, 2) and (5, 5) qualify, (2, 2) and (-1, -1) do not."""
        return self.smallest_collinear() == other.smallest_collinear()

    def mirror_x(self) -> Vector:
        """Mirror across the horizontal axis (flips j)"""
        return Vector(self.i, -self.j)

    def mirror_y(self) -> Vector:
        """Mirror across the vertical axis (flips i)"""
        return Vector(-self.i, self.j)

    def opposed(self) -> Vector:
        return Vector(-self.i, -self.j)
