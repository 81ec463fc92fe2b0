"""Scene-level intersection testing and hit preparation.

This module aggregates intersections across every shape in a scene, selects
the visible hit, and precomputes the per-hit state the integrator needs for
shading (``Computations``).

Refractive indices on either side of the hit are found by walking the sorted
intersection list while maintaining the stack of transparent shapes the ray
is currently inside.

Example:
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.tuples import point, vector
    >>> from whitted.geometry.shape import make_sphere
    >>> from whitted.scene.intersection import hit, intersect_scene, prepare_computations
    >>> ray = Ray(point(0, 0, -5), vector(0, 0, 1))
    >>> xs = intersect_scene([make_sphere()], ray)
    >>> comps = prepare_computations(hit(xs), ray, xs)
    >>> comps.point
    Tuple(x=0.0, y=0.0, z=-1.0, w=1.0)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from whitted.core.ray import Ray
from whitted.core.tuples import EPSILON, Tuple, reflect
from whitted.geometry.shape import Intersection, Shape, intersect, normal_at

# Refractive index used when a ray is not inside any shape
DEFAULT_REFRACTIVE_INDEX = 1.0


@dataclass(frozen=True)
class Computations:
    """Precomputed state for shading a single hit.

    Attributes:
        t: Ray parameter of the hit.
        shape: The shape that was hit.
        point: World-space hit point.
        eyev: Unit vector from the hit toward the ray origin.
        normalv: Unit surface normal, flipped to face the eye.
        inside: True when the ray originates inside the shape.
        reflectv: Ray direction reflected about the normal.
        over_point: ``point`` nudged along the normal (shadow/reflection origin).
        under_point: ``point`` nudged against the normal (refraction origin).
        n1: Refractive index of the medium being exited.
        n2: Refractive index of the medium being entered.
    """

    t: float
    shape: Shape
    point: Tuple
    eyev: Tuple
    normalv: Tuple
    inside: bool
    reflectv: Tuple
    over_point: Tuple
    under_point: Tuple
    n1: float
    n2: float


def intersect_scene(shapes: Iterable[Shape], ray: Ray) -> list[Intersection]:
    """Intersect a ray with every shape and sort by t.

    Shapes are visited in the given order; the sort is stable so equal t
    values keep scene order.
    """
    xs: list[Intersection] = []
    for shape in shapes:
        xs.extend(intersect(shape, ray))
    xs.sort(key=lambda i: i.t)
    return xs


def hit(xs: Iterable[Intersection]) -> Intersection | None:
    """Return the intersection with the smallest non-negative t, or None."""
    best: Intersection | None = None
    for i in xs:
        if i.t >= 0.0 and (best is None or i.t < best.t):
            best = i
    return best


def _refractive_indices(hit_: Intersection, xs: Sequence[Intersection]) -> tuple[float, float]:
    containers: list[Shape] = []
    n1 = n2 = DEFAULT_REFRACTIVE_INDEX

    for i in xs:
        is_hit = i is hit_ or (i.t == hit_.t and i.shape is hit_.shape)
        if is_hit:
            n1 = containers[-1].material.refractive_index if containers else DEFAULT_REFRACTIVE_INDEX

        if any(shape is i.shape for shape in containers):
            containers = [shape for shape in containers if shape is not i.shape]
        else:
            containers.append(i.shape)

        if is_hit:
            n2 = containers[-1].material.refractive_index if containers else DEFAULT_REFRACTIVE_INDEX
            break

    return n1, n2


def prepare_computations(
    hit_: Intersection,
    ray: Ray,
    xs: Sequence[Intersection] | None = None,
) -> Computations:
    """Build the shading state for an intersection.

    Args:
        hit_: The intersection being shaded.
        ray: The ray that produced it.
        xs: All intersections along the ray, sorted by t. Needed to determine
            n1/n2; defaults to just ``[hit_]``.

    Returns:
        The precomputed ``Computations``.
    """
    if xs is None:
        xs = [hit_]

    point = ray.position(hit_.t)
    eyev = -ray.direction
    normalv = normal_at(hit_.shape, point)

    inside = normalv.dot(eyev) < 0.0
    if inside:
        normalv = -normalv

    offset = normalv * EPSILON
    n1, n2 = _refractive_indices(hit_, xs)

    return Computations(
        t=hit_.t,
        shape=hit_.shape,
        point=point,
        eyev=eyev,
        normalv=normalv,
        inside=inside,
        reflectv=reflect(ray.direction, normalv),
        over_point=point + offset,
        under_point=point - offset,
        n1=n1,
        n2=n2,
    )
