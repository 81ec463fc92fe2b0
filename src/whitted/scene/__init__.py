"""Scene module for world management and hit preparation.

Components:
    world: Shapes and lights in scene order, plus the default test world
    intersection: Scene-wide intersection, hit selection and shading state
    loader: YAML scene documents
"""

from .intersection import (
    DEFAULT_REFRACTIVE_INDEX,
    Computations,
    hit,
    intersect_scene,
    prepare_computations,
)
from .loader import (
    CameraConfig,
    Scene,
    SceneError,
    load_scene,
    scene_from_dict,
    scene_from_yaml,
)
from .world import World, default_world

__all__ = [
    # Intersection module
    "Computations",
    "DEFAULT_REFRACTIVE_INDEX",
    "intersect_scene",
    "hit",
    "prepare_computations",
    # World module
    "World",
    "default_world",
    # Loader module
    "Scene",
    "SceneError",
    "CameraConfig",
    "load_scene",
    "scene_from_dict",
    "scene_from_yaml",
]
