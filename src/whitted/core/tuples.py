"""Points, vectors and colors.

This module provides the small immutable value types every other part of the
tracer is built on:

- ``Tuple``: a 4-component (x, y, z, w) value where w=1 marks a point and
  w=0 marks a vector.
- ``Color``: an (r, g, b) triple in linear space with component-wise
  arithmetic and the Hadamard product.

Equality on both types is approximate (``EPSILON``) because transform chains
accumulate floating point rounding error.

Example:
    >>> from whitted.core.tuples import point, vector
    >>> p = point(1.0, 2.0, 3.0)
    >>> v = vector(0.0, 1.0, 0.0)
    >>> p + v
    Tuple(x=1.0, y=3.0, z=3.0, w=1.0)
    >>> vector(3.0, 4.0, 0.0).magnitude()
    5.0
"""

from __future__ import annotations

import math
from typing import NamedTuple

# Tolerance used for every approximate comparison in the tracer
EPSILON = 1e-5


class InvalidVectorError(ValueError):
    """Raised when a direction is requested from a zero-length vector."""


def approx_equal(a: float, b: float, tolerance: float = EPSILON) -> bool:
    """Compare two floats within ``tolerance``.

    Infinities of the same sign compare equal.
    """
    if a == b:
        return True
    return abs(a - b) < tolerance


# =============================================================================
# Tuple (point / vector)
# =============================================================================


class Tuple(NamedTuple):
    """A 4-component homogeneous coordinate.

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
        w: 1.0 for points, 0.0 for vectors.
    """

    x: float
    y: float
    z: float
    w: float

    @property
    def is_point(self) -> bool:
        return self.w == 1.0

    @property
    def is_vector(self) -> bool:
        return self.w == 0.0

    def __add__(self, other: Tuple) -> Tuple:  # type: ignore[override]
        if self.w == 1.0 and other.w == 1.0:
            raise TypeError("Cannot add two points")
        return Tuple(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Tuple) -> Tuple:
        if self.w == 0.0 and other.w == 1.0:
            raise TypeError("Cannot subtract a point from a vector")
        return Tuple(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __neg__(self) -> Tuple:
        return Tuple(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, scalar: float) -> Tuple:  # type: ignore[override]
        return Tuple(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    __rmul__ = __mul__  # type: ignore[assignment]

    def __truediv__(self, scalar: float) -> Tuple:
        return Tuple(self.x / scalar, self.y / scalar, self.z / scalar, self.w / scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, tuple) or len(other) != 4:
            return NotImplemented
        return self.isclose(Tuple(*other))

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def isclose(self, other: Tuple, tolerance: float = EPSILON) -> bool:
        """Check that every component of ``other`` is within ``tolerance``."""
        return (
            approx_equal(self.x, other.x, tolerance)
            and approx_equal(self.y, other.y, tolerance)
            and approx_equal(self.z, other.z, tolerance)
            and approx_equal(self.w, other.w, tolerance)
        )

    def magnitude(self) -> float:
        """Euclidean length of the tuple (including w)."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w)

    def normalize(self) -> Tuple:
        """Return a unit-length copy of this tuple.

        Raises:
            InvalidVectorError: If the tuple has zero length.
        """
        length = self.magnitude()
        if length == 0.0 or not math.isfinite(length):
            raise InvalidVectorError(f"Cannot normalize a zero-length vector: {self!r}")
        return Tuple(self.x / length, self.y / length, self.z / length, self.w / length)

    def dot(self, other: Tuple) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def cross(self, other: Tuple) -> Tuple:
        """Cross product of two vectors.

        Raises:
            TypeError: If either operand is not a vector.
        """
        if self.w != 0.0 or other.w != 0.0:
            raise TypeError("Cross product is only defined for vectors")
        return vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w=1)."""
    return Tuple(float(x), float(y), float(z), 1.0)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a vector (w=0)."""
    return Tuple(float(x), float(y), float(z), 0.0)


def reflect(incident: Tuple, normal: Tuple) -> Tuple:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector.

    Example:
        >>> reflect(vector(1, -1, 0), vector(0, 1, 0))
        Tuple(x=1.0, y=1.0, z=0.0, w=0.0)
    """
    return incident - normal * (2.0 * incident.dot(normal))


# =============================================================================
# Color
# =============================================================================


class Color(NamedTuple):
    """A linear RGB color. Channels are not clamped."""

    r: float
    g: float
    b: float

    def __add__(self, other: Color) -> Color:  # type: ignore[override]
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other: Color) -> Color:
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, other: Color | float) -> Color:  # type: ignore[override]
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        return Color(self.r * other, self.g * other, self.b * other)

    __rmul__ = __mul__  # type: ignore[assignment]

    def __truediv__(self, scalar: float) -> Color:
        return Color(self.r / scalar, self.g / scalar, self.b / scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, tuple) or len(other) != 3:
            return NotImplemented
        return self.isclose(Color(*other))

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def isclose(self, other: Color, tolerance: float = EPSILON) -> bool:
        """Check that every channel of ``other`` is within ``tolerance``."""
        return (
            approx_equal(self.r, other.r, tolerance)
            and approx_equal(self.g, other.g, tolerance)
            and approx_equal(self.b, other.b, tolerance)
        )


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
