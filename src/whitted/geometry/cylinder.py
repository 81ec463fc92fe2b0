"""Cylinder and double-napped cone primitives.

Both are centered on the object-space y axis and truncated to the open
interval (bottom, top) given on the shape. With ``closed`` set, the ends are
capped by discs: radius 1 for the cylinder and radius |y| for the cone.

Cylinder side:  x^2 + z^2 = 1
Cone side:      x^2 + z^2 = y^2
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from whitted.core.tuples import EPSILON, Tuple, vector

if TYPE_CHECKING:
    from whitted.core.ray import Ray
    from whitted.geometry.shape import Shape


def _within_height(shape: Shape, ray: Ray, t: float) -> bool:
    y = ray.origin.y + t * ray.direction.y
    return shape.bottom < y < shape.top


def _intersect_caps(shape: Shape, ray: Ray, radius_at: float | None, xs: list[float]) -> None:
    """Append cap hits for a closed shape.

    Args:
        shape: The cylinder or cone.
        ray: Object-space ray.
        radius_at: Fixed cap radius, or None to use |y| at the cap (cone).
        xs: List the cap intersections are appended to.
    """
    if not shape.closed or abs(ray.direction.y) < EPSILON:
        return

    for cap_y in (shape.bottom, shape.top):
        t = (cap_y - ray.origin.y) / ray.direction.y
        x = ray.origin.x + t * ray.direction.x
        z = ray.origin.z + t * ray.direction.z
        radius = abs(cap_y) if radius_at is None else radius_at
        if x * x + z * z <= radius * radius:
            xs.append(t)


# =============================================================================
# Cylinder
# =============================================================================


def local_intersect_cylinder(shape: Shape, ray: Ray) -> list[float]:
    if shape.bottom > shape.top:
        return []

    ox, oy, oz, _ = ray.origin
    dx, dy, dz, _ = ray.direction
    xs: list[float] = []

    a = dx * dx + dz * dz
    # Rays parallel to the y axis can only hit the caps
    if a >= EPSILON:
        b = 2.0 * ox * dx + 2.0 * oz * dz
        c = ox * ox + oz * oz - 1.0
        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return []

        sqrt_d = math.sqrt(discriminant)
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)
        if t0 > t1:
            t0, t1 = t1, t0

        for t in (t0, t1):
            if _within_height(shape, ray, t):
                xs.append(t)

    _intersect_caps(shape, ray, 1.0, xs)
    return sorted(xs)


def local_normal_at_cylinder(shape: Shape, local_point: Tuple) -> Tuple:
    dist = local_point.x * local_point.x + local_point.z * local_point.z

    if dist < 1.0 and local_point.y >= shape.top - EPSILON:
        return vector(0.0, 1.0, 0.0)
    if dist < 1.0 and local_point.y <= shape.bottom + EPSILON:
        return vector(0.0, -1.0, 0.0)
    return vector(local_point.x, 0.0, local_point.z)


# =============================================================================
# Cone
# =============================================================================


def local_intersect_cone(shape: Shape, ray: Ray) -> list[float]:
    if shape.bottom > shape.top:
        return []

    ox, oy, oz, _ = ray.origin
    dx, dy, dz, _ = ray.direction
    xs: list[float] = []

    a = dx * dx - dy * dy + dz * dz
    b = 2.0 * ox * dx - 2.0 * oy * dy + 2.0 * oz * dz
    c = ox * ox - oy * oy + oz * oz

    if abs(a) < EPSILON:
        # Ray parallel to one of the cone's halves: at most one side hit
        if abs(b) >= EPSILON:
            t = -c / (2.0 * b)
            if _within_height(shape, ray, t):
                xs.append(t)
    else:
        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            if discriminant > -EPSILON:
                discriminant = 0.0
            else:
                # The caps can still be hit from inside the cone
                _intersect_caps(shape, ray, None, xs)
                return sorted(xs)

        sqrt_d = math.sqrt(discriminant)
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)
        if t0 > t1:
            t0, t1 = t1, t0

        for t in (t0, t1):
            if _within_height(shape, ray, t):
                xs.append(t)

    _intersect_caps(shape, ray, None, xs)
    return sorted(xs)


def local_normal_at_cone(shape: Shape, local_point: Tuple) -> Tuple:
    x, y, z = local_point.x, local_point.y, local_point.z
    dist = x * x + z * z

    if dist < y * y and y >= shape.top - EPSILON:
        return vector(0.0, 1.0, 0.0)
    if dist < y * y and y <= shape.bottom + EPSILON:
        return vector(0.0, -1.0, 0.0)

    if dist == 0.0:
        # On the axis, including the apex, where the side normal vanishes
        return vector(0.0, 1.0 if y > 0.0 else -1.0, 0.0)

    side_y = math.sqrt(dist)
    if y > 0.0:
        side_y = -side_y
    return vector(x, side_y, z)
