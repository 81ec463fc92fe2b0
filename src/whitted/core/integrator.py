"""Whitted-style recursive integrator.

This module computes the color seen along a ray:

1. Intersect the world and pick the hit (no hit gives the background).
2. Shade the hit with the Phong model, summing every light in scene order and
   testing each light for shadows.
3. Add the reflected color (recursing along the mirror direction) and the
   refracted color (recursing along the Snell direction).
4. When a surface is both reflective and transparent, weight the two with the
   Schlick approximation of the Fresnel reflectance.

Recursion is bounded by an explicit ``remaining`` depth threaded through
every call; at zero the reflected and refracted terms are black. Colors are
returned unclamped.

Example:
    >>> from whitted.core.integrator import color_at
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.tuples import point, vector
    >>> from whitted.scene.world import default_world
    >>> color_at(default_world(), Ray(point(0, 0, -5), vector(0, 0, 1)))
    Color(r=0.38066..., g=0.47583..., b=0.2855...)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from whitted.core.ray import Ray
from whitted.core.tuples import BLACK, Color, Tuple
from whitted.materials.light import PointLight, ambient_only, lighting
from whitted.scene.intersection import Computations, hit, prepare_computations

if TYPE_CHECKING:
    from whitted.scene.world import World

# =============================================================================
# Rendering Constants
# =============================================================================

# Default recursion depth for reflected/refracted rays
DEFAULT_MAX_DEPTH = 5

# Color returned for rays that escape the scene
BACKGROUND_COLOR = BLACK


# =============================================================================
# Shadows
# =============================================================================


def is_shadowed(world: World, light: PointLight, world_point: Tuple) -> bool:
    """Check whether any shape blocks ``light`` from ``world_point``.

    Lights with ``casts_shadows`` disabled never shadow.

    Args:
        world: The scene.
        light: The light to test.
        world_point: Origin of the shadow ray, normally ``over_point``.

    Returns:
        True if an intersection lies between the point and the light.
    """
    if not light.casts_shadows:
        return False

    to_light = light.position - world_point
    distance = to_light.magnitude()
    if distance == 0.0:
        return False

    shadow_ray = Ray(world_point, to_light / distance)
    shadow_hit = hit(world.intersect(shadow_ray))
    return shadow_hit is not None and shadow_hit.t < distance


# =============================================================================
# Shading
# =============================================================================


def surface_lighting(world: World, comps: Computations) -> Color:
    """Phong color at the hit, summed over all lights in scene order.

    A world without lights gives the ambient term alone.
    """
    material = comps.shape.material
    if not world.lights:
        return ambient_only(material, comps.shape, comps.over_point)

    total = BLACK
    for light in world.lights:
        shadowed = is_shadowed(world, light, comps.over_point)
        total = total + lighting(
            material,
            comps.shape,
            light,
            comps.over_point,
            comps.eyev,
            comps.normalv,
            shadowed,
        )
    return total


def shade_hit(world: World, comps: Computations, remaining: int = DEFAULT_MAX_DEPTH) -> Color:
    """Full color at a prepared hit: surface plus reflection and refraction.

    Args:
        world: The scene.
        comps: The prepared hit.
        remaining: Recursion budget for secondary rays.

    Returns:
        The unclamped color.
    """
    surface = surface_lighting(world, comps)
    reflected = reflected_color(world, comps, remaining)
    refracted = refracted_color(world, comps, remaining)

    material = comps.shape.material
    if material.reflective > 0.0 and material.transparency > 0.0:
        reflectance = schlick(comps)
        return surface + reflected * reflectance + refracted * (1.0 - reflectance)

    return surface + reflected + refracted


def color_at(world: World, ray: Ray, remaining: int = DEFAULT_MAX_DEPTH) -> Color:
    """Color seen along ``ray``.

    Args:
        world: The scene.
        ray: World-space ray.
        remaining: Recursion budget for secondary rays.

    Returns:
        The unclamped color, or ``BACKGROUND_COLOR`` if nothing is hit.
    """
    xs = world.intersect(ray)
    closest = hit(xs)
    if closest is None:
        return BACKGROUND_COLOR

    comps = prepare_computations(closest, ray, xs)
    return shade_hit(world, comps, remaining)


# =============================================================================
# Reflection and Refraction
# =============================================================================


def reflected_color(world: World, comps: Computations, remaining: int) -> Color:
    """Color arriving along the mirror direction, scaled by ``reflective``."""
    reflective = comps.shape.material.reflective
    if remaining <= 0 or reflective == 0.0:
        return BLACK

    reflect_ray = Ray(comps.over_point, comps.reflectv)
    return color_at(world, reflect_ray, remaining - 1) * reflective


def refracted_color(world: World, comps: Computations, remaining: int) -> Color:
    """Color arriving through the surface, scaled by ``transparency``.

    Total internal reflection gives black.
    """
    transparency = comps.shape.material.transparency
    if remaining <= 0 or transparency == 0.0:
        return BLACK

    # Snell's law: n1 sin(i) = n2 sin(t)
    n_ratio = comps.n1 / comps.n2
    cos_i = comps.eyev.dot(comps.normalv)
    sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
    if sin2_t > 1.0:
        return BLACK

    cos_t = math.sqrt(1.0 - sin2_t)
    direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
    refract_ray = Ray(comps.under_point, direction)
    return color_at(world, refract_ray, remaining - 1) * transparency


def schlick(comps: Computations) -> float:
    """Schlick approximation of the fraction of light reflected at the hit.

    Returns:
        Reflectance in [0, 1]; 1.0 under total internal reflection.
    """
    cosine = comps.eyev.dot(comps.normalv)

    if comps.n1 > comps.n2:
        n_ratio = comps.n1 / comps.n2
        sin2_t = n_ratio * n_ratio * (1.0 - cosine * cosine)
        if sin2_t > 1.0:
            return 1.0
        cosine = math.sqrt(1.0 - sin2_t)

    r0 = ((comps.n1 - comps.n2) / (comps.n1 + comps.n2)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5
