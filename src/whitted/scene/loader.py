"""YAML scene documents.

A scene document describes a camera, a list of lights and a list of objects.
Documents are read with ``yaml.safe_load``, so anchors and aliases can share
materials and patterns; a top-level ``definitions`` entry is conventionally
used to hold them and is otherwise ignored.

Document layout::

    camera:
      width: 400
      height: 200
      fov: 60                     # degrees
      from: [0, 1.5, -5]
      to: [0, 1, 0]
      up: [0, 1, 0]

    lights:
      - position: [-10, 10, -10]
        color: [1, 1, 1]          # optional
        intensity: 1.0            # optional
        casts_shadows: true       # optional

    objects:
      - shape: Sphere             # or a mapping, e.g. {Cylinder: {bottom: 0, top: 1, closed: true}}
        transform:                # applied in listed order
          - [scale, 0.5, 0.5, 0.5]
          - [rotate-y, 45]        # degrees
          - [translate, 0, 1, 0]
        material:
          pattern:
            kind:
              stripes:
                - [1, 1, 1]
                - kind: {solid: [0, 0, 0]}
            transform:
              - [scale, 0.25, 0.25, 0.25]
          diffuse: 0.7
          reflective: 0.2

Shape and pattern names are case-insensitive. Every error raises
``SceneError`` naming the offending entry.

Example:
    >>> from whitted.scene.loader import load_scene
    >>> scene = load_scene("examples/scenes/reflection.yml")
    >>> scene.camera.hsize
    400
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from whitted.camera.pinhole import Camera
from whitted.core.matrix import (
    IDENTITY,
    Matrix,
    compose,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
)
from whitted.core.tuples import WHITE, Color, Tuple, point, vector
from whitted.geometry.shape import Shape, ShapeKind
from whitted.materials.light import PointLight
from whitted.materials.material import Material
from whitted.materials.pattern import (
    Blended,
    Checkers,
    LinearGradient,
    Pattern,
    RadialGradient,
    Rings,
    Solid,
    Stripes,
)
from whitted.scene.world import World

logger = logging.getLogger(__name__)


class SceneError(ValueError):
    """Raised when a scene document is malformed."""


# =============================================================================
# Scene Data Structures
# =============================================================================


@dataclass(frozen=True)
class CameraConfig:
    """Camera settings as written in a scene document.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees.
        from_point: Eye position.
        to_point: Point the camera looks at.
        up: Approximate up direction.
    """

    width: int = 400
    height: int = 200
    fov: float = 60.0
    from_point: Tuple = field(default_factory=lambda: point(0.0, 1.5, -5.0))
    to_point: Tuple = field(default_factory=lambda: point(0.0, 1.0, 0.0))
    up: Tuple = field(default_factory=lambda: vector(0.0, 1.0, 0.0))

    def to_camera(self, width: int | None = None, height: int | None = None) -> Camera:
        """Build the camera, optionally overriding the image size."""
        return Camera.look_at(
            width or self.width,
            height or self.height,
            math.radians(self.fov),
            self.from_point,
            self.to_point,
            self.up,
        )


@dataclass
class Scene:
    """A loaded scene: the world plus the camera settings to view it with."""

    world: World
    camera_config: CameraConfig = field(default_factory=CameraConfig)

    @property
    def camera(self) -> Camera:
        return self.camera_config.to_camera()


# =============================================================================
# Value Helpers
# =============================================================================


def _floats(value: Any, count: int, where: str) -> list[float]:
    if not isinstance(value, Sequence) or isinstance(value, str) or len(value) != count:
        raise SceneError(f"{where}: expected a list of {count} numbers, got {value!r}")
    try:
        return [float(v) for v in value]
    except (TypeError, ValueError) as exc:
        raise SceneError(f"{where}: expected numbers, got {value!r}") from exc


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool):
        raise SceneError(f"{where}: expected a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise SceneError(f"{where}: expected a number, got {value!r}") from exc


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise SceneError(f"{where}: expected a mapping, got {value!r}")
    return value


def _single_entry(value: Any, where: str) -> tuple[str, Any]:
    if isinstance(value, str):
        return value, None
    entries = _mapping(value, where)
    if len(entries) != 1:
        raise SceneError(f"{where}: expected exactly one entry, got {sorted(entries)}")
    ((name, args),) = entries.items()
    return str(name), args


def parse_color(value: Any, where: str = "color") -> Color:
    return Color(*_floats(value, 3, where))


# =============================================================================
# Transforms
# =============================================================================


def _rotation(builder: Callable[[float], Matrix]) -> Callable[[list[float]], Matrix]:
    return lambda args: builder(math.radians(args[0]))


# name -> (argument count, builder)
_TRANSFORMS: dict[str, tuple[int, Callable[[list[float]], Matrix]]] = {
    "translate": (3, lambda args: translation(*args)),
    "scale": (3, lambda args: scaling(*args)),
    "rotate-x": (1, _rotation(rotation_x)),
    "rotate-y": (1, _rotation(rotation_y)),
    "rotate-z": (1, _rotation(rotation_z)),
    "shear": (6, lambda args: shearing(*args)),
}


def parse_transform(value: Any, where: str = "transform") -> Matrix:
    """Compose a list of transform steps in the order they are listed.

    Raises:
        SceneError: If a step is unknown or has the wrong number of arguments.
    """
    if value is None:
        return IDENTITY
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise SceneError(f"{where}: expected a list of steps, got {value!r}")

    steps: list[Matrix] = []
    for index, step in enumerate(value):
        step_where = f"{where}[{index}]"
        if not isinstance(step, Sequence) or isinstance(step, str) or not step:
            raise SceneError(f"{step_where}: expected [name, args...], got {step!r}")
        name = str(step[0]).lower()
        if name not in _TRANSFORMS:
            raise SceneError(f"{step_where}: unknown transform {step[0]!r}")
        count, builder = _TRANSFORMS[name]
        steps.append(builder(_floats(list(step[1:]), count, step_where)))

    return compose(*steps) if steps else IDENTITY


# =============================================================================
# Patterns and Materials
# =============================================================================

_TWO_CHILD_PATTERNS: dict[str, type[Pattern]] = {
    "stripes": Stripes,
    "rings": Rings,
    "checkers": Checkers,
    "linear_gradient": LinearGradient,
    "radial_gradient": RadialGradient,
    "blended": Blended,
}


def parse_pattern(value: Any, where: str = "pattern") -> Pattern:
    """Build a pattern from ``{kind: {name: args}, transform: [...]}`` or ``[r, g, b]``.

    Raises:
        SceneError: If the pattern kind is unknown or its arguments are invalid.
    """
    if isinstance(value, Sequence) and not isinstance(value, str):
        return Solid(parse_color(value, where))

    spec = _mapping(value, where)
    if "kind" not in spec:
        raise SceneError(f"{where}: missing 'kind'")
    name, args = _single_entry(spec["kind"], f"{where}.kind")
    transform = parse_transform(spec.get("transform"), f"{where}.transform")
    kind = name.lower()

    try:
        if kind == "solid":
            return Solid(parse_color(args, f"{where}.kind.solid"), transform=transform)

        if kind in _TWO_CHILD_PATTERNS:
            if not isinstance(args, Sequence) or isinstance(args, str) or len(args) != 2:
                raise SceneError(f"{where}.kind.{name}: expected two child patterns")
            a = parse_pattern(args[0], f"{where}.kind.{name}[0]")
            b = parse_pattern(args[1], f"{where}.kind.{name}[1]")
            return _TWO_CHILD_PATTERNS[kind](a, b, transform=transform)  # type: ignore[call-arg]
    except SceneError:
        raise
    except ValueError as exc:
        raise SceneError(f"{where}: {exc}") from exc

    raise SceneError(f"{where}: unknown pattern kind {name!r}")


_MATERIAL_FIELDS = (
    "ambient",
    "diffuse",
    "specular",
    "shininess",
    "reflective",
    "transparency",
    "refractive_index",
)


def parse_material(value: Any, where: str = "material") -> Material:
    """Build a material; omitted fields keep their defaults.

    Raises:
        SceneError: If a field is unknown or out of range.
    """
    spec = _mapping(value, where)
    unknown = set(spec) - set(_MATERIAL_FIELDS) - {"pattern"}
    if unknown:
        raise SceneError(f"{where}: unknown field(s) {sorted(unknown)}")

    kwargs: dict[str, Any] = {
        name: _number(spec[name], f"{where}.{name}") for name in _MATERIAL_FIELDS if name in spec
    }
    if "pattern" in spec:
        kwargs["pattern"] = parse_pattern(spec["pattern"], f"{where}.pattern")

    try:
        return Material(**kwargs)
    except ValueError as exc:
        raise SceneError(f"{where}: {exc}") from exc


# =============================================================================
# Objects, Lights and Camera
# =============================================================================

_BOUNDED_KINDS = (ShapeKind.CYLINDER, ShapeKind.CONE)


def parse_shape(value: Any, where: str = "object") -> Shape:
    """Build a shape from an object entry (``shape``, ``transform``, ``material``).

    Raises:
        SceneError: If the shape is unknown or its transform is singular.
    """
    spec = _mapping(value, where)
    if "shape" not in spec:
        raise SceneError(f"{where}: missing 'shape'")

    name, args = _single_entry(spec["shape"], f"{where}.shape")
    try:
        kind = ShapeKind[name.upper()]
    except KeyError as exc:
        raise SceneError(f"{where}.shape: unknown shape {name!r}") from exc

    options = _mapping(args, f"{where}.shape.{name}")
    if options and kind not in _BOUNDED_KINDS:
        raise SceneError(f"{where}.shape.{name}: takes no options")
    unknown = set(options) - {"bottom", "top", "closed"}
    if unknown:
        raise SceneError(f"{where}.shape.{name}: unknown option(s) {sorted(unknown)}")

    bottom = _number(options.get("bottom", -math.inf), f"{where}.shape.{name}.bottom")
    top = _number(options.get("top", math.inf), f"{where}.shape.{name}.top")
    closed = bool(options.get("closed", False))

    transform = parse_transform(spec.get("transform"), f"{where}.transform")
    material = parse_material(spec.get("material"), f"{where}.material")

    try:
        return Shape(kind, transform, material, bottom, top, closed)
    except ValueError as exc:
        raise SceneError(f"{where}: {exc}") from exc


def parse_light(value: Any, where: str = "light") -> PointLight:
    spec = _mapping(value, where)
    if "position" not in spec:
        raise SceneError(f"{where}: missing 'position'")

    position = point(*_floats(spec["position"], 3, f"{where}.position"))
    color = parse_color(spec["color"], f"{where}.color") if "color" in spec else WHITE
    intensity = _number(spec.get("intensity", 1.0), f"{where}.intensity")
    try:
        return PointLight(position, color, intensity, bool(spec.get("casts_shadows", True)))
    except ValueError as exc:
        raise SceneError(f"{where}: {exc}") from exc


def parse_camera(value: Any, where: str = "camera") -> CameraConfig:
    spec = _mapping(value, where)
    defaults = CameraConfig()

    width = int(_number(spec.get("width", defaults.width), f"{where}.width"))
    height = int(_number(spec.get("height", defaults.height), f"{where}.height"))
    fov = _number(spec.get("fov", defaults.fov), f"{where}.fov")
    if width <= 0 or height <= 0:
        raise SceneError(f"{where}: size must be positive, got {width}x{height}")
    if not 0.0 < fov < 180.0:
        raise SceneError(f"{where}.fov: must be in (0, 180) degrees, got {fov}")

    from_point = point(*_floats(spec["from"], 3, f"{where}.from")) if "from" in spec else defaults.from_point
    to_point = point(*_floats(spec["to"], 3, f"{where}.to")) if "to" in spec else defaults.to_point
    up = vector(*_floats(spec["up"], 3, f"{where}.up")) if "up" in spec else defaults.up

    config = CameraConfig(width, height, fov, from_point, to_point, up)
    try:
        config.to_camera()
    except ValueError as exc:
        raise SceneError(f"{where}: {exc}") from exc
    return config


# =============================================================================
# Documents
# =============================================================================


def scene_from_dict(data: Any) -> Scene:
    """Build a scene from a parsed document.

    Raises:
        SceneError: If any part of the document is invalid.
    """
    document = _mapping(data, "scene")

    lights = document.get("lights") or []
    objects = document.get("objects") or []
    if not isinstance(lights, Sequence) or isinstance(lights, str):
        raise SceneError(f"lights: expected a list, got {lights!r}")
    if not isinstance(objects, Sequence) or isinstance(objects, str):
        raise SceneError(f"objects: expected a list, got {objects!r}")

    world = World()
    for index, light in enumerate(lights):
        world.add_light(parse_light(light, f"lights[{index}]"))
    for index, obj in enumerate(objects):
        world.add_shape(parse_shape(obj, f"objects[{index}]"))

    return Scene(world, parse_camera(document.get("camera"), "camera"))


def scene_from_yaml(text: str) -> Scene:
    """Parse a scene document from YAML text."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SceneError(f"Invalid YAML: {exc}") from exc
    if data is None:
        raise SceneError("Scene document is empty")
    return scene_from_dict(data)


def load_scene(path: str | Path) -> Scene:
    """Load a scene document from a YAML file.

    Raises:
        SceneError: If the document is invalid.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    scene = scene_from_yaml(path.read_text(encoding="utf-8"))
    logger.debug(
        "Loaded scene %s: %d object(s), %d light(s)",
        path,
        len(scene.world.shapes),
        len(scene.world.lights),
    )
    return scene
