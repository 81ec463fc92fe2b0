"""Composable color patterns.

A pattern maps a point to a color. Every pattern carries its own transform,
and evaluation against a shape walks the point through two spaces:

    world point --(shape inverse)--> object point --(pattern inverse)--> pattern point

Two-child patterns (stripes, checkers, rings, gradients, blended) accept
either nested patterns or plain colors; colors are wrapped in ``Solid``.
Nested children are evaluated with their own transform, relative to the
parent's pattern space.

Example:
    >>> from whitted.core.matrix import scaling
    >>> from whitted.core.tuples import BLACK, WHITE, point
    >>> from whitted.materials.pattern import Stripes
    >>> stripes = Stripes(WHITE, BLACK, transform=scaling(2, 2, 2))
    >>> stripes.color_at(point(1.5, 0, 0))
    Color(r=1.0, g=1.0, b=1.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from whitted.core.matrix import IDENTITY, Matrix
from whitted.core.tuples import WHITE, Color, Tuple

if TYPE_CHECKING:
    from whitted.geometry.shape import Shape

PatternLike = Union["Pattern", Color]


@dataclass(frozen=True, kw_only=True)
class Pattern:
    """Base class for all patterns.

    Subclasses implement ``pattern_at`` in pattern space. The inverse of
    ``transform`` is computed once at construction.

    Attributes:
        transform: Pattern-to-object transform.

    Raises:
        DegenerateTransformError: If ``transform`` is not invertible.
    """

    transform: Matrix = field(default_factory=lambda: IDENTITY)
    inverse: Matrix = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "inverse", self.transform.inverse())

    def pattern_at(self, pattern_point: Tuple) -> Color:
        raise NotImplementedError

    def color_at(self, object_point: Tuple) -> Color:
        """Evaluate the pattern at a point given in the parent (object) space."""
        return self.pattern_at(self.inverse @ object_point)  # type: ignore[arg-type]


def as_pattern(value: PatternLike) -> Pattern:
    """Wrap a plain color in a ``Solid`` pattern; pass patterns through."""
    if isinstance(value, Pattern):
        return value
    if isinstance(value, tuple) and len(value) == 3:
        return Solid(Color(*value))
    raise TypeError(f"Expected a Pattern or Color, got {type(value).__name__}")


def pattern_at_shape(pattern: Pattern, shape: Shape, world_point: Tuple) -> Color:
    """Evaluate ``pattern`` on ``shape`` at a world-space point."""
    object_point = shape.inverse @ world_point
    return pattern.color_at(object_point)  # type: ignore[arg-type]


# =============================================================================
# Pattern Kinds
# =============================================================================


@dataclass(frozen=True)
class Solid(Pattern):
    """A single constant color."""

    color: Color = field(default_factory=lambda: WHITE)

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "color", Color(*self.color))

    def pattern_at(self, pattern_point: Tuple) -> Color:
        return self.color


@dataclass(frozen=True)
class _TwoChildPattern(Pattern):
    a: PatternLike
    b: PatternLike

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "a", as_pattern(self.a))
        object.__setattr__(self, "b", as_pattern(self.b))


@dataclass(frozen=True)
class Stripes(_TwoChildPattern):
    """Alternates between ``a`` and ``b`` every unit along x."""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        child = self.a if math.floor(pattern_point.x) % 2 == 0 else self.b
        return child.color_at(pattern_point)  # type: ignore[union-attr]


@dataclass(frozen=True)
class Rings(_TwoChildPattern):
    """Concentric rings around the y axis, alternating every unit of radius."""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        radius = math.sqrt(pattern_point.x**2 + pattern_point.z**2)
        child = self.a if math.floor(radius) % 2 == 0 else self.b
        return child.color_at(pattern_point)  # type: ignore[union-attr]


@dataclass(frozen=True)
class Checkers(_TwoChildPattern):
    """3D checkerboard of unit cubes."""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        total = math.floor(pattern_point.x) + math.floor(pattern_point.y) + math.floor(pattern_point.z)
        child = self.a if total % 2 == 0 else self.b
        return child.color_at(pattern_point)  # type: ignore[union-attr]


@dataclass(frozen=True)
class LinearGradient(_TwoChildPattern):
    """Blends from ``a`` to ``b`` along x, repeating every unit."""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        fraction = pattern_point.x - math.floor(pattern_point.x)
        start = self.a.color_at(pattern_point)  # type: ignore[union-attr]
        end = self.b.color_at(pattern_point)  # type: ignore[union-attr]
        return start + (end - start) * fraction


@dataclass(frozen=True)
class RadialGradient(_TwoChildPattern):
    """Blends from ``a`` to ``b`` with distance from the y axis, repeating every unit."""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        radius = math.sqrt(pattern_point.x**2 + pattern_point.z**2)
        fraction = radius - math.floor(radius)
        start = self.a.color_at(pattern_point)  # type: ignore[union-attr]
        end = self.b.color_at(pattern_point)  # type: ignore[union-attr]
        return start + (end - start) * fraction


@dataclass(frozen=True)
class Blended(_TwoChildPattern):
    """Average of the two child patterns at the same point."""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        first = self.a.color_at(pattern_point)  # type: ignore[union-attr]
        second = self.b.color_at(pattern_point)  # type: ignore[union-attr]
        return (first + second) * 0.5
