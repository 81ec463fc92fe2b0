"""Shapes, intersections and primitive dispatch.

A ``Shape`` is a closed tagged variant over the primitive kinds in
``ShapeKind``. Each kind contributes two object-space functions, looked up in
a single dispatch table:

- ``local_intersect(shape, local_ray) -> list[float]``
- ``local_normal_at(shape, local_point) -> Tuple``

World-space queries wrap these by transforming the ray into object space with
the cached inverse transform and transforming normals back with the cached
inverse-transpose.

Example:
    >>> from whitted.core.matrix import translation
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.tuples import point, vector
    >>> from whitted.geometry.shape import intersect, make_sphere
    >>> sphere = make_sphere(transform=translation(0, 0, 1))
    >>> [i.t for i in intersect(sphere, Ray(point(0, 0, -5), vector(0, 0, 1)))]
    [5.0, 7.0]
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import NamedTuple

from whitted.core.matrix import IDENTITY, Matrix
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple, vector
from whitted.geometry.cube import local_intersect_cube, local_normal_at_cube
from whitted.geometry.cylinder import (
    local_intersect_cone,
    local_intersect_cylinder,
    local_normal_at_cone,
    local_normal_at_cylinder,
)
from whitted.geometry.plane import local_intersect_plane, local_normal_at_plane
from whitted.geometry.sphere import local_intersect_sphere, local_normal_at_sphere
from whitted.materials.material import GLASS, Material


class ShapeKind(IntEnum):
    """Enumeration of supported primitive kinds.

    Used to dispatch object-space intersection and normal functions.
    """

    SPHERE = 0
    PLANE = 1
    CUBE = 2
    CYLINDER = 3
    CONE = 4


@dataclass(frozen=True, eq=False)
class Shape:
    """A primitive placed in the world with a material.

    Shapes compare by identity: two identical spheres are still two objects
    when tracking which media a ray is inside.

    Attributes:
        kind: Primitive kind.
        transform: Object-to-world transform.
        material: Surface material.
        bottom: Lower y bound for cylinders and cones (exclusive).
        top: Upper y bound for cylinders and cones (exclusive).
        closed: Whether cylinders and cones are capped at bottom and top.
        inverse: Cached inverse of ``transform``.
        normal_transform: Cached transpose of ``inverse``.

    Raises:
        DegenerateTransformError: If ``transform`` is not invertible.
    """

    kind: ShapeKind
    transform: Matrix = field(default_factory=lambda: IDENTITY)
    material: Material = field(default_factory=Material)
    bottom: float = -math.inf
    top: float = math.inf
    closed: bool = False
    inverse: Matrix = field(init=False, repr=False)
    normal_transform: Matrix = field(init=False, repr=False)

    def __post_init__(self) -> None:
        inverse = self.transform.inverse()
        object.__setattr__(self, "inverse", inverse)
        object.__setattr__(self, "normal_transform", inverse.transpose())


class Intersection(NamedTuple):
    """A ray parameter ``t`` at which a ray meets ``shape``."""

    t: float
    shape: Shape


# =============================================================================
# Dispatch
# =============================================================================

LocalIntersect = Callable[[Shape, Ray], list[float]]
LocalNormal = Callable[[Shape, Tuple], Tuple]

_DISPATCH: dict[ShapeKind, tuple[LocalIntersect, LocalNormal]] = {
    ShapeKind.SPHERE: (local_intersect_sphere, local_normal_at_sphere),
    ShapeKind.PLANE: (local_intersect_plane, local_normal_at_plane),
    ShapeKind.CUBE: (local_intersect_cube, local_normal_at_cube),
    ShapeKind.CYLINDER: (local_intersect_cylinder, local_normal_at_cylinder),
    ShapeKind.CONE: (local_intersect_cone, local_normal_at_cone),
}


def local_intersect(shape: Shape, local_ray: Ray) -> list[float]:
    """Object-space intersection t values for ``shape``, ascending."""
    return _DISPATCH[shape.kind][0](shape, local_ray)


def local_normal_at(shape: Shape, local_point: Tuple) -> Tuple:
    """Object-space (unnormalized) normal for ``shape``."""
    return _DISPATCH[shape.kind][1](shape, local_point)


def intersect(shape: Shape, ray: Ray) -> list[Intersection]:
    """Intersect a world-space ray with a shape.

    Non-finite t values (from degenerate arithmetic) are dropped.

    Returns:
        Intersections in ascending t order.
    """
    local_ray = ray.transform(shape.inverse)
    return [Intersection(t, shape) for t in local_intersect(shape, local_ray) if math.isfinite(t)]


def normal_at(shape: Shape, world_point: Tuple) -> Tuple:
    """World-space unit normal of ``shape`` at ``world_point``.

    Raises:
        InvalidVectorError: If the normal is undefined at the point (e.g. a
            cone apex).
    """
    local_point = shape.inverse @ world_point
    local_normal = local_normal_at(shape, local_point)  # type: ignore[arg-type]
    world_normal = shape.normal_transform @ local_normal
    # The inverse-transpose can leave junk in w; normals are vectors
    return vector(world_normal.x, world_normal.y, world_normal.z).normalize()  # type: ignore[union-attr]


# =============================================================================
# Factories
# =============================================================================


def make_sphere(transform: Matrix = IDENTITY, material: Material | None = None) -> Shape:
    """Create a unit sphere placed by ``transform``."""
    return Shape(ShapeKind.SPHERE, transform, material or Material())


def glass_sphere(transform: Matrix = IDENTITY, refractive_index: float = GLASS) -> Shape:
    """Create a fully transparent sphere with the given refractive index."""
    material = Material(transparency=1.0, refractive_index=refractive_index)
    return Shape(ShapeKind.SPHERE, transform, material)


def make_plane(transform: Matrix = IDENTITY, material: Material | None = None) -> Shape:
    return Shape(ShapeKind.PLANE, transform, material or Material())


def make_cube(transform: Matrix = IDENTITY, material: Material | None = None) -> Shape:
    return Shape(ShapeKind.CUBE, transform, material or Material())


def make_cylinder(
    transform: Matrix = IDENTITY,
    material: Material | None = None,
    *,
    bottom: float = -math.inf,
    top: float = math.inf,
    closed: bool = False,
) -> Shape:
    """Create a unit-radius cylinder around the y axis.

    Args:
        transform: Object-to-world transform.
        material: Surface material (default material if None).
        bottom: Lower y bound in object space.
        top: Upper y bound in object space.
        closed: Whether to cap both ends.
    """
    return Shape(ShapeKind.CYLINDER, transform, material or Material(), bottom, top, closed)


def make_cone(
    transform: Matrix = IDENTITY,
    material: Material | None = None,
    *,
    bottom: float = -math.inf,
    top: float = math.inf,
    closed: bool = False,
) -> Shape:
    """Create a double-napped cone around the y axis with its apex at the origin."""
    return Shape(ShapeKind.CONE, transform, material or Material(), bottom, top, closed)
