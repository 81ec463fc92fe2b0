"""World: the shapes and lights of a scene.

The world owns its shapes and lights in insertion order. That order is the
iteration order for intersection and for summing light contributions, which
keeps rendered results bit-reproducible.

Example:
    >>> from whitted.core.tuples import point
    >>> from whitted.geometry.shape import make_sphere
    >>> from whitted.materials.light import PointLight
    >>> from whitted.scene.world import World
    >>> world = World()
    >>> world.add_shape(make_sphere())
    >>> world.add_light(PointLight(point(-10, 10, -10)))
"""

from __future__ import annotations

from dataclasses import dataclass, field

from whitted.core.matrix import scaling
from whitted.core.ray import Ray
from whitted.core.tuples import Color, point
from whitted.geometry.shape import Intersection, Shape, make_sphere
from whitted.materials.light import PointLight
from whitted.materials.material import Material
from whitted.scene.intersection import intersect_scene


@dataclass
class World:
    """A collection of shapes and lights.

    Attributes:
        shapes: Shapes in scene order.
        lights: Lights in scene order.
    """

    shapes: list[Shape] = field(default_factory=list)
    lights: list[PointLight] = field(default_factory=list)

    def add_shape(self, shape: Shape) -> Shape:
        self.shapes.append(shape)
        return shape

    def add_light(self, light: PointLight) -> PointLight:
        self.lights.append(light)
        return light

    def intersect(self, ray: Ray) -> list[Intersection]:
        """All intersections of ``ray`` with the world, sorted by t."""
        return intersect_scene(self.shapes, ray)

    def clear(self) -> None:
        self.shapes.clear()
        self.lights.clear()

    def __repr__(self) -> str:
        return f"World(shapes={len(self.shapes)}, lights={len(self.lights)})"


def default_world() -> World:
    """The canonical two-sphere test world.

    A unit sphere with a green-ish matte material, a concentric sphere scaled
    by 0.5 with the default material, and a white light at (-10, 10, -10).
    """
    outer = make_sphere(
        material=Material(
            pattern=Color(0.8, 1.0, 0.6),
            diffuse=0.7,
            specular=0.2,
        )
    )
    inner = make_sphere(transform=scaling(0.5, 0.5, 0.5))
    light = PointLight(point(-10.0, 10.0, -10.0), Color(1.0, 1.0, 1.0))
    return World(shapes=[outer, inner], lights=[light])
