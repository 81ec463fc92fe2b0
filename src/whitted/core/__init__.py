"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    tuples: Points, vectors and colors
    matrix: 4x4 matrices and transform builders
    ray: Ray data structure
    canvas: Linear RGB pixel buffer
    integrator: Whitted recursion (shading, shadows, reflection, refraction)
    renderer: Scanline renderer with process-pool parallelism

Floating point comparisons throughout the package use ``EPSILON``.
"""

from .canvas import Canvas
from .matrix import (
    IDENTITY,
    DegenerateTransformError,
    Matrix,
    compose,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from .ray import Ray
from .tuples import (
    BLACK,
    EPSILON,
    WHITE,
    Color,
    InvalidVectorError,
    Tuple,
    point,
    reflect,
    vector,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from whitted.core.integrator or whitted.core.renderer when needed.

__all__ = [
    "EPSILON",
    "Tuple",
    "Color",
    "BLACK",
    "WHITE",
    "InvalidVectorError",
    "point",
    "vector",
    "reflect",
    "Matrix",
    "IDENTITY",
    "DegenerateTransformError",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "compose",
    "view_transform",
    "Ray",
    "Canvas",
]
