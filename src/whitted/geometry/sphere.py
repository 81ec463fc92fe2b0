"""Unit sphere primitive with robust ray-sphere intersection.

The sphere is centered at the object-space origin with radius 1; size and
position come from the shape transform.

The intersection uses the robust quadratic formula from Ray Tracing Gems to
avoid catastrophic cancellation when b^2 is nearly equal to 4ac.

Example:
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.tuples import point, vector
    >>> local_intersect_sphere(None, Ray(point(0, 0, -5), vector(0, 0, 1)))
    [4.0, 6.0]
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from whitted.core.tuples import Tuple, vector

if TYPE_CHECKING:
    from whitted.core.ray import Ray
    from whitted.geometry.shape import Shape


def _solve_quadratic_robust(h: float, a: float, c: float, sqrt_d: float) -> tuple[float, float]:
    """Solve a*t^2 + 2*h*t + c = 0 given sqrt(h^2 - a*c).

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    # Use sign of h to avoid catastrophic cancellation
    q = -(h + math.copysign(sqrt_d, h))
    if abs(q) < 1e-12:
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q
    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


def local_intersect_sphere(shape: Shape, ray: Ray) -> list[float]:
    """Intersect an object-space ray with the unit sphere.

    Substituting the ray into x^2 + y^2 + z^2 = 1 gives
        a*t^2 + 2*h*t + c = 0
    with a = d.d, h = d.o, c = o.o - 1 (o taken as a vector from the origin).

    Returns:
        Both roots in ascending order (equal for a tangent ray), or an empty
        list if the discriminant is negative.
    """
    ox, oy, oz, _ = ray.origin
    dx, dy, dz, _ = ray.direction
    a = dx * dx + dy * dy + dz * dz
    h = dx * ox + dy * oy + dz * oz
    c = ox * ox + oy * oy + oz * oz - 1.0

    discriminant = h * h - a * c
    if discriminant < 0.0 or a == 0.0:
        return []

    t0, t1 = _solve_quadratic_robust(h, a, c, math.sqrt(discriminant))
    return [t0, t1]


def local_normal_at_sphere(shape: Shape, local_point: Tuple) -> Tuple:
    """Normal of the unit sphere: the point itself as a vector."""
    return vector(local_point.x, local_point.y, local_point.z)
