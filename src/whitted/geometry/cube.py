"""Axis-aligned cube primitive.

The cube spans [-1, 1] on every object-space axis. Intersection uses the slab
method: each axis yields an entry/exit interval and the ray hits the cube when
the three intervals overlap.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from whitted.core.tuples import EPSILON, Tuple, vector

if TYPE_CHECKING:
    from whitted.core.ray import Ray
    from whitted.geometry.shape import Shape


def _check_axis(origin: float, direction: float) -> tuple[float, float]:
    """Entry and exit t for one pair of parallel faces at -1 and 1.

    Near-zero direction components map to +/- infinity instead of dividing.
    An origin lying on a face counts as inside the slab.
    """
    tmin_numerator = -1.0 - origin
    tmax_numerator = 1.0 - origin

    if abs(direction) >= EPSILON:
        tmin = tmin_numerator / direction
        tmax = tmax_numerator / direction
    else:
        tmin = -math.inf if tmin_numerator <= 0.0 else math.inf
        tmax = math.inf if tmax_numerator >= 0.0 else -math.inf

    if tmin > tmax:
        tmin, tmax = tmax, tmin
    return tmin, tmax


def local_intersect_cube(shape: Shape, ray: Ray) -> list[float]:
    xtmin, xtmax = _check_axis(ray.origin.x, ray.direction.x)
    ytmin, ytmax = _check_axis(ray.origin.y, ray.direction.y)
    ztmin, ztmax = _check_axis(ray.origin.z, ray.direction.z)

    tmin = max(xtmin, ytmin, ztmin)
    tmax = min(xtmax, ytmax, ztmax)

    if math.isnan(tmin) or math.isnan(tmax) or tmin > tmax:
        return []
    return [tmin, tmax]


def local_normal_at_cube(shape: Shape, local_point: Tuple) -> Tuple:
    """Normal of the face whose axis has the largest absolute coordinate.

    Ties (edges and corners) resolve in x, y, z order.
    """
    ax, ay, az = abs(local_point.x), abs(local_point.y), abs(local_point.z)
    maxc = max(ax, ay, az)

    if maxc == ax:
        return vector(local_point.x, 0.0, 0.0)
    if maxc == ay:
        return vector(0.0, local_point.y, 0.0)
    return vector(0.0, 0.0, local_point.z)
