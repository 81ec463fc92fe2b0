"""Geometry module for shape primitives.

Components:
    shape: Shape variant, intersections, dispatch and factories
    sphere: Unit sphere at the origin
    plane: The x-z plane
    cube: Axis-aligned cube spanning [-1, 1] on each axis
    cylinder: Unit-radius cylinders and double-napped cones around y

Each primitive implements an object-space intersection returning ascending
t values and an object-space normal. ``shape.intersect`` and
``shape.normal_at`` lift these to world space.
"""

from .shape import (
    Intersection,
    Shape,
    ShapeKind,
    glass_sphere,
    intersect,
    local_intersect,
    local_normal_at,
    make_cone,
    make_cube,
    make_cylinder,
    make_plane,
    make_sphere,
    normal_at,
)

__all__ = [
    "Shape",
    "ShapeKind",
    "Intersection",
    "intersect",
    "normal_at",
    "local_intersect",
    "local_normal_at",
    "make_sphere",
    "glass_sphere",
    "make_plane",
    "make_cube",
    "make_cylinder",
    "make_cone",
]
