"""Infinite plane primitive.

In object space the plane is the x-z plane through the origin with its normal
pointing along +y.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from whitted.core.tuples import EPSILON, Tuple, vector

if TYPE_CHECKING:
    from whitted.core.ray import Ray
    from whitted.geometry.shape import Shape

PLANE_NORMAL = vector(0.0, 1.0, 0.0)


def local_intersect_plane(shape: Shape, ray: Ray) -> list[float]:
    """Intersect an object-space ray with the x-z plane.

    Rays parallel to the plane (including coplanar rays) miss.
    """
    dy = ray.direction.y
    if abs(dy) < EPSILON:
        return []
    return [-ray.origin.y / dy]


def local_normal_at_plane(shape: Shape, local_point: Tuple) -> Tuple:
    return PLANE_NORMAL
