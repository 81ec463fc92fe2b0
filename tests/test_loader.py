"""Unit tests for YAML scene documents.

Tests cover:
- Transform lists and their composition order
- Colors, patterns (including nested ones) and materials
- Shapes, including bounded and capped cylinders and cones
- Lights and camera settings
- Anchors and aliases shared through definitions
- Error reporting for malformed documents
- Loading the bundled example scenes
"""

import math
from pathlib import Path

import pytest

SCENES_DIR = Path(__file__).resolve().parent.parent / "examples" / "scenes"


class TestParseTransform:
    """Tests for transform lists."""

    def test_missing_transform_is_identity(self):
        """Test that no transform gives the identity."""
        from whitted.core.matrix import IDENTITY
        from whitted.scene.loader import parse_transform

        assert parse_transform(None) == IDENTITY
        assert parse_transform([]) == IDENTITY

    def test_steps_apply_in_listed_order(self):
        """Test that the first listed step is applied first."""
        from whitted.core.matrix import scaling, translation
        from whitted.core.tuples import point
        from whitted.scene.loader import parse_transform

        transform = parse_transform([["scale", 2, 2, 2], ["translate", 1, 0, 0]])
        assert transform == translation(1, 0, 0) @ scaling(2, 2, 2)
        assert transform @ point(1, 0, 0) == point(3, 0, 0)

    def test_rotations_are_in_degrees(self):
        """Test that rotation angles are read as degrees."""
        from whitted.core.matrix import rotation_x, rotation_y, rotation_z
        from whitted.scene.loader import parse_transform

        assert parse_transform([["rotate-x", 90]]) == rotation_x(math.pi / 2)
        assert parse_transform([["rotate-y", 45]]) == rotation_y(math.pi / 4)
        assert parse_transform([["Rotate-Z", 30]]) == rotation_z(math.pi / 6)

    def test_shear(self):
        """Test the six-argument shear step."""
        from whitted.core.matrix import shearing
        from whitted.scene.loader import parse_transform

        assert parse_transform([["shear", 1, 0, 0, 0, 0, 0]]) == shearing(1, 0, 0, 0, 0, 0)

    @pytest.mark.parametrize(
        "value, match",
        [
            ([["spin", 1]], "unknown transform"),
            ([["translate", 1, 2]], "3 numbers"),
            ([["scale", "a", 1, 1]], "numbers"),
            ("translate", "list of steps"),
            ([[]], "expected"),
        ],
    )
    def test_invalid_transforms(self, value, match):
        """Test that malformed steps raise SceneError."""
        from whitted.scene.loader import SceneError, parse_transform

        with pytest.raises(SceneError, match=match):
            parse_transform(value)


class TestParsePattern:
    """Tests for pattern entries."""

    def test_plain_color(self):
        """Test that a bare color list becomes a solid pattern."""
        from whitted.core.tuples import Color, point
        from whitted.materials.pattern import Solid
        from whitted.scene.loader import parse_pattern

        pattern = parse_pattern([1, 0.5, 0])
        assert isinstance(pattern, Solid)
        assert pattern.color_at(point(3, 3, 3)) == Color(1, 0.5, 0)

    def test_stripes_with_transform(self):
        """Test a stripe pattern with its own scaling."""
        from whitted.core.tuples import BLACK, WHITE, point
        from whitted.materials.pattern import Stripes
        from whitted.scene.loader import parse_pattern

        pattern = parse_pattern(
            {
                "kind": {"stripes": [[1, 1, 1], [0, 0, 0]]},
                "transform": [["scale", 0.5, 0.5, 0.5]],
            }
        )
        assert isinstance(pattern, Stripes)
        assert pattern.color_at(point(0.25, 0, 0)) == WHITE
        assert pattern.color_at(point(0.75, 0, 0)) == BLACK

    @pytest.mark.parametrize(
        "name, cls_name",
        [
            ("rings", "Rings"),
            ("checkers", "Checkers"),
            ("linear_gradient", "LinearGradient"),
            ("radial_gradient", "RadialGradient"),
            ("blended", "Blended"),
            ("Checkers", "Checkers"),
        ],
    )
    def test_two_child_kinds(self, name, cls_name):
        """Test that every two-child pattern kind is recognized."""
        from whitted.materials import pattern as pattern_module
        from whitted.scene.loader import parse_pattern

        pattern = parse_pattern({"kind": {name: [[1, 1, 1], [0, 0, 0]]}})
        assert type(pattern) is getattr(pattern_module, cls_name)

    def test_nested_patterns(self):
        """Test a pattern whose children are patterns."""
        from whitted.core.tuples import Color, point
        from whitted.scene.loader import parse_pattern

        pattern = parse_pattern(
            {
                "kind": {
                    "checkers": [
                        {"kind": {"solid": [1, 0, 0]}},
                        {"kind": {"stripes": [[0, 1, 0], [0, 0, 1]]}},
                    ]
                }
            }
        )
        assert pattern.color_at(point(0.5, 0, 0)) == Color(1, 0, 0)
        assert pattern.color_at(point(1.5, 0, 0)) == Color(0, 0, 1)

    @pytest.mark.parametrize(
        "value, match",
        [
            ({"kind": {"plaid": [[1, 1, 1], [0, 0, 0]]}}, "unknown pattern kind"),
            ({"kind": {"stripes": [[1, 1, 1]]}}, "two child patterns"),
            ({"transform": []}, "missing 'kind'"),
            ({"kind": {"solid": [1, 1]}}, "3 numbers"),
            ({"kind": {"solid": [1, 1, 1]}, "transform": [["scale", 0, 1, 1]]}, "pattern"),
        ],
    )
    def test_invalid_patterns(self, value, match):
        """Test that malformed patterns raise SceneError."""
        from whitted.scene.loader import SceneError, parse_pattern

        with pytest.raises(SceneError, match=match):
            parse_pattern(value)


class TestParseMaterial:
    """Tests for material entries."""

    def test_missing_material_is_default(self):
        """Test that an absent material gives the defaults."""
        from whitted.materials.material import Material
        from whitted.scene.loader import parse_material

        assert parse_material(None) == Material()

    def test_fields(self):
        """Test that listed fields override the defaults."""
        from whitted.core.tuples import Color, point
        from whitted.scene.loader import parse_material

        m = parse_material(
            {
                "pattern": [0.2, 0.4, 0.6],
                "ambient": 0,
                "reflective": 0.9,
                "transparency": 0.9,
                "refractive_index": 1.5,
            }
        )
        assert m.pattern.color_at(point(0, 0, 0)) == Color(0.2, 0.4, 0.6)
        assert m.ambient == 0.0
        assert m.diffuse == 0.9
        assert m.reflective == 0.9
        assert m.refractive_index == 1.5

    @pytest.mark.parametrize(
        "value, match",
        [
            ({"glossiness": 1}, "unknown field"),
            ({"diffuse": "lots"}, "diffuse"),
            ({"reflective": 2}, "reflective"),
            ([1, 2, 3], "mapping"),
        ],
    )
    def test_invalid_materials(self, value, match):
        """Test that malformed materials raise SceneError."""
        from whitted.scene.loader import SceneError, parse_material

        with pytest.raises(SceneError, match=match):
            parse_material(value)


class TestParseShape:
    """Tests for object entries."""

    @pytest.mark.parametrize("name", ["sphere", "Plane", "CUBE", "cylinder", "Cone"])
    def test_shape_names_are_case_insensitive(self, name):
        """Test each primitive name in various cases."""
        from whitted.geometry.shape import ShapeKind
        from whitted.scene.loader import parse_shape

        shape = parse_shape({"shape": name})
        assert shape.kind == ShapeKind[name.upper()]

    def test_null_options(self):
        """Test the mapping form with no options."""
        from whitted.geometry.shape import ShapeKind
        from whitted.scene.loader import parse_shape

        assert parse_shape({"shape": {"Cube": None}}).kind == ShapeKind.CUBE

    def test_bounded_cylinder(self):
        """Test a capped cylinder with bounds."""
        from whitted.scene.loader import parse_shape

        shape = parse_shape({"shape": {"Cylinder": {"bottom": 0, "top": 1.5, "closed": True}}})
        assert (shape.bottom, shape.top, shape.closed) == (0.0, 1.5, True)

    def test_unbounded_cone_by_default(self):
        """Test that cones default to infinite bounds."""
        from whitted.scene.loader import parse_shape

        shape = parse_shape({"shape": "cone"})
        assert shape.bottom == -math.inf
        assert shape.top == math.inf
        assert shape.closed is False

    def test_transform_and_material(self):
        """Test that transform and material are attached to the shape."""
        from whitted.core.matrix import translation
        from whitted.scene.loader import parse_shape

        shape = parse_shape(
            {
                "shape": "Sphere",
                "transform": [["translate", 0, 1, 0]],
                "material": {"specular": 0.3},
            }
        )
        assert shape.transform == translation(0, 1, 0)
        assert shape.material.specular == 0.3

    @pytest.mark.parametrize(
        "value, match",
        [
            ({"shape": "Torus"}, "unknown shape"),
            ({"transform": []}, "missing 'shape'"),
            ({"shape": {"Sphere": {"top": 1}}}, "takes no options"),
            ({"shape": {"Cylinder": {"height": 1}}}, "unknown option"),
            ({"shape": {"Sphere": None, "Cube": None}}, "exactly one entry"),
            ({"shape": "Sphere", "transform": [["scale", 0, 0, 0]]}, "objects"),
        ],
    )
    def test_invalid_shapes(self, value, match):
        """Test that malformed objects raise SceneError."""
        from whitted.scene.loader import SceneError, parse_shape

        with pytest.raises(SceneError, match=match):
            parse_shape(value, "objects[0]")


class TestParseLightAndCamera:
    """Tests for light and camera entries."""

    def test_light_defaults(self):
        """Test a light with only a position."""
        from whitted.core.tuples import WHITE, point
        from whitted.scene.loader import parse_light

        light = parse_light({"position": [-10, 10, -10]})
        assert light.position == point(-10, 10, -10)
        assert light.color == WHITE
        assert light.intensity == 1.0
        assert light.casts_shadows is True

    def test_light_fields(self):
        """Test a light with every field set."""
        from whitted.core.tuples import Color
        from whitted.scene.loader import parse_light

        light = parse_light(
            {"position": [0, 5, 0], "color": [1, 0.5, 0.5], "intensity": 0.5, "casts_shadows": False}
        )
        assert light.color == Color(1, 0.5, 0.5)
        assert light.intensity == 0.5
        assert light.casts_shadows is False

    @pytest.mark.parametrize(
        "value, match",
        [
            ({}, "missing 'position'"),
            ({"position": [0, 0]}, "3 numbers"),
            ({"position": [0, 0, 0], "intensity": -1}, "intensity"),
        ],
    )
    def test_invalid_lights(self, value, match):
        """Test that malformed lights raise SceneError."""
        from whitted.scene.loader import SceneError, parse_light

        with pytest.raises(SceneError, match=match):
            parse_light(value)

    def test_camera_defaults(self):
        """Test that an absent camera uses the default settings."""
        from whitted.scene.loader import CameraConfig, parse_camera

        assert parse_camera(None) == CameraConfig()

    def test_camera_fields(self):
        """Test building a camera from a camera entry."""
        from whitted.core.tuples import point
        from whitted.scene.loader import parse_camera

        config = parse_camera({"width": 100, "height": 50, "fov": 90, "from": [0, 0, -5], "to": [0, 0, 0]})
        camera = config.to_camera()
        assert (camera.hsize, camera.vsize) == (100, 50)
        assert abs(camera.field_of_view - math.pi / 2) < 1e-12
        assert camera.origin() == point(0, 0, -5)

    def test_camera_size_override(self):
        """Test overriding the image size when building the camera."""
        from whitted.scene.loader import CameraConfig

        camera = CameraConfig().to_camera(width=32, height=16)
        assert (camera.hsize, camera.vsize) == (32, 16)

    @pytest.mark.parametrize(
        "value, match",
        [
            ({"width": 0}, "size must be positive"),
            ({"fov": 180}, "fov"),
            ({"from": [0, 0, 0], "to": [0, 0, 0]}, "camera"),
        ],
    )
    def test_invalid_cameras(self, value, match):
        """Test that malformed cameras raise SceneError."""
        from whitted.scene.loader import SceneError, parse_camera

        with pytest.raises(SceneError, match=match):
            parse_camera(value)


class TestDocuments:
    """Tests for whole scene documents."""

    def test_scene_from_yaml(self):
        """Test parsing a small document with anchors and aliases."""
        from whitted.scene.loader import scene_from_yaml

        scene = scene_from_yaml(
            """
definitions:
  - &shiny
    specular: 1.0
    reflective: 0.5

camera:
  width: 20
  height: 10

lights:
  - position: [0, 10, 0]

objects:
  - shape: Plane
    material: *shiny
  - shape: Sphere
    material: *shiny
"""
        )
        assert len(scene.world.lights) == 1
        assert len(scene.world.shapes) == 2
        assert all(shape.material.reflective == 0.5 for shape in scene.world.shapes)
        assert (scene.camera.hsize, scene.camera.vsize) == (20, 10)

    def test_scene_without_lights(self):
        """Test that lights and objects may be omitted."""
        from whitted.scene.loader import scene_from_dict

        scene = scene_from_dict({"camera": {"width": 4, "height": 4}})
        assert scene.world.shapes == []
        assert scene.world.lights == []

    @pytest.mark.parametrize(
        "text, match",
        [
            ("", "empty"),
            ("objects: [\n", "Invalid YAML"),
            ("- 1\n- 2\n", "mapping"),
            ("objects: 3\n", "objects"),
            ("objects:\n  - shape: Blob\n", r"objects\[0\]"),
        ],
    )
    def test_invalid_documents(self, text, match):
        """Test that malformed documents raise SceneError."""
        from whitted.scene.loader import SceneError, scene_from_yaml

        with pytest.raises(SceneError, match=match):
            scene_from_yaml(text)

    def test_scene_error_is_value_error(self):
        """Test that scene errors can be caught as ValueError."""
        from whitted.scene.loader import SceneError

        assert issubclass(SceneError, ValueError)

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises OSError."""
        from whitted.scene.loader import load_scene

        with pytest.raises(OSError):
            load_scene(tmp_path / "nope.yml")

    @pytest.mark.parametrize(
        "filename, shapes, lights",
        [("spheres.yml", 4, 1), ("patterns.yml", 4, 2), ("reflection.yml", 9, 1)],
    )
    def test_bundled_scenes_load(self, filename, shapes, lights):
        """Test that every bundled example scene loads."""
        from whitted.scene.loader import load_scene

        scene = load_scene(SCENES_DIR / filename)
        assert len(scene.world.shapes) == shapes
        assert len(scene.world.lights) == lights
        assert (scene.camera.hsize, scene.camera.vsize) == (400, 200)

    def test_render_loaded_scene(self):
        """Test rendering a bundled scene at a tiny size."""
        from whitted.core.renderer import render
        from whitted.scene.loader import load_scene

        scene = load_scene(SCENES_DIR / "reflection.yml")
        canvas = render(scene.camera_config.to_camera(width=8, height=4), scene.world, max_depth=2)
        assert canvas.to_numpy().shape == (4, 8, 3)
        assert canvas.to_numpy().any()
