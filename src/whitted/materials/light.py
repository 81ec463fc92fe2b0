"""Point lights and the Phong reflection model.

The lighting function evaluates one light at one surface point:

    ambient  = material.ambient * surface_color
    diffuse  = material.diffuse * surface_color * light_color * max(0, n . l)
    specular = material.specular * light_color * max(0, r . e) ** shininess

Diffuse and specular drop out when the point is shadowed or when the light is
behind the surface. Ambient is always kept. ``light_color`` is the light's
color scaled by its intensity.

Example:
    >>> from whitted.core.tuples import Color, point, vector
    >>> from whitted.materials.light import PointLight, lighting
    >>> from whitted.materials.material import Material
    >>> light = PointLight(point(0, 0, -10), Color(1, 1, 1))
    >>> lighting(Material(), None, light, point(0, 0, 0), vector(0, 0, -1), vector(0, 0, -1))
    Color(r=1.9, g=1.9, b=1.9)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from whitted.core.tuples import BLACK, WHITE, Color, Tuple, reflect
from whitted.materials.pattern import pattern_at_shape

if TYPE_CHECKING:
    from whitted.geometry.shape import Shape
    from whitted.materials.material import Material


@dataclass(frozen=True)
class PointLight:
    """A point light source with no size.

    Attributes:
        position: Light position (a point).
        color: Light color.
        intensity: Scale applied to ``color`` for diffuse and specular terms.
        casts_shadows: If False, shadow rays are never cast toward this light.

    Raises:
        ValueError: If position is not a point or intensity is negative.
    """

    position: Tuple
    color: Color = field(default_factory=lambda: WHITE)
    intensity: float = 1.0
    casts_shadows: bool = True

    def __post_init__(self) -> None:
        if not self.position.is_point:
            raise ValueError(f"Light position must be a point, got {self.position!r}")
        if self.intensity < 0.0:
            raise ValueError(f"Light intensity must be non-negative, got {self.intensity}")
        object.__setattr__(self, "color", Color(*self.color))

    @property
    def radiance(self) -> Color:
        """Color scaled by intensity."""
        return self.color * self.intensity


def surface_color(material: Material, shape: Shape | None, world_point: Tuple) -> Color:
    """Evaluate the material's pattern at a world point.

    Without a shape the point is treated as already being in object space.
    """
    if shape is None:
        return material.pattern.color_at(world_point)  # type: ignore[union-attr]
    return pattern_at_shape(material.pattern, shape, world_point)  # type: ignore[arg-type]


def ambient_only(material: Material, shape: Shape | None, world_point: Tuple) -> Color:
    """Ambient term alone, used when a scene has no lights."""
    return surface_color(material, shape, world_point) * material.ambient


def lighting(
    material: Material,
    shape: Shape | None,
    light: PointLight,
    world_point: Tuple,
    eyev: Tuple,
    normalv: Tuple,
    in_shadow: bool = False,
) -> Color:
    """Shade a single point for a single light with the Phong model.

    Args:
        material: Surface material.
        shape: Shape the point lies on, used to map the pattern. May be None.
        light: The light source.
        world_point: The point being shaded.
        eyev: Unit vector from the point toward the eye.
        normalv: Unit surface normal at the point.
        in_shadow: Whether the light is occluded from the point.

    Returns:
        The sum of ambient, diffuse and specular contributions.
    """
    color = surface_color(material, shape, world_point)
    ambient = color * material.ambient
    if in_shadow:
        return ambient

    to_light = light.position - world_point
    distance = to_light.magnitude()
    if distance == 0.0:
        return ambient

    lightv = to_light / distance
    light_dot_normal = lightv.dot(normalv)
    if light_dot_normal < 0.0:
        # Light is on the other side of the surface
        return ambient

    radiance = light.radiance
    diffuse = color * radiance * (material.diffuse * light_dot_normal)

    reflectv = reflect(-lightv, normalv)
    reflect_dot_eye = reflectv.dot(eyev)
    if reflect_dot_eye <= 0.0:
        specular = BLACK
    else:
        factor = reflect_dot_eye**material.shininess
        specular = radiance * (material.specular * factor)

    return ambient + diffuse + specular
