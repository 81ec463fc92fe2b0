"""Unit tests for color patterns.

Tests cover:
- Stripes, rings, checkers and both gradients
- Blended and nested patterns
- Pattern and object transforms
- Wrapping plain colors
"""

import pytest


class TestStripes:
    """Tests for the stripe pattern."""

    def test_constant_in_y_and_z(self):
        """Test that stripes only vary along x."""
        from whitted.core.tuples import BLACK, WHITE, point
        from whitted.materials.pattern import Stripes

        stripes = Stripes(WHITE, BLACK)
        for p in (point(0, 0, 0), point(0, 1, 0), point(0, 2, 0), point(0, 0, 1), point(0, 0, 2)):
            assert stripes.color_at(p) == WHITE

    @pytest.mark.parametrize(
        "x, expected_white",
        [(0, True), (0.9, True), (1, False), (-0.1, False), (-1, False), (-1.1, True)],
    )
    def test_alternates_in_x(self, x, expected_white):
        """Test alternation every unit along x, including negative x."""
        from whitted.core.tuples import BLACK, WHITE, point
        from whitted.materials.pattern import Stripes

        expected = WHITE if expected_white else BLACK
        assert Stripes(WHITE, BLACK).color_at(point(x, 0, 0)) == expected

    def test_object_transform(self):
        """Test stripes on a scaled sphere."""
        from whitted.core.matrix import scaling
        from whitted.core.tuples import BLACK, WHITE, point
        from whitted.geometry.shape import make_sphere
        from whitted.materials.pattern import Stripes, pattern_at_shape

        sphere = make_sphere(transform=scaling(2, 2, 2))
        assert pattern_at_shape(Stripes(WHITE, BLACK), sphere, point(1.5, 0, 0)) == WHITE

    def test_pattern_transform(self):
        """Test stripes with their own scaling."""
        from whitted.core.matrix import scaling
        from whitted.core.tuples import BLACK, WHITE, point
        from whitted.geometry.shape import make_sphere
        from whitted.materials.pattern import Stripes, pattern_at_shape

        stripes = Stripes(WHITE, BLACK, transform=scaling(2, 2, 2))
        assert pattern_at_shape(stripes, make_sphere(), point(1.5, 0, 0)) == WHITE

    def test_object_and_pattern_transform(self):
        """Test that object and pattern transforms combine."""
        from whitted.core.matrix import scaling, translation
        from whitted.core.tuples import BLACK, WHITE, point
        from whitted.geometry.shape import make_sphere
        from whitted.materials.pattern import Stripes, pattern_at_shape

        sphere = make_sphere(transform=scaling(2, 2, 2))
        stripes = Stripes(WHITE, BLACK, transform=translation(0.5, 0, 0))
        assert pattern_at_shape(stripes, sphere, point(2.5, 0, 0)) == WHITE


class TestOtherPatterns:
    """Tests for rings, checkers and gradients."""

    def test_rings(self):
        """Test that rings extend in both x and z."""
        from whitted.core.tuples import BLACK, WHITE, point
        from whitted.materials.pattern import Rings

        rings = Rings(WHITE, BLACK)
        assert rings.color_at(point(0, 0, 0)) == WHITE
        assert rings.color_at(point(1, 0, 0)) == BLACK
        assert rings.color_at(point(0, 0, 1)) == BLACK
        assert rings.color_at(point(0.708, 0, 0.708)) == BLACK

    @pytest.mark.parametrize(
        "near, far",
        [
            ((0.99, 0, 0), (1.01, 0, 0)),
            ((0, 0.99, 0), (0, 1.01, 0)),
            ((0, 0, 0.99), (0, 0, 1.01)),
        ],
    )
    def test_checkers_repeat_on_each_axis(self, near, far):
        """Test that checkers flip across each unit boundary."""
        from whitted.core.tuples import BLACK, WHITE, point
        from whitted.materials.pattern import Checkers

        checkers = Checkers(WHITE, BLACK)
        assert checkers.color_at(point(0, 0, 0)) == WHITE
        assert checkers.color_at(point(*near)) == WHITE
        assert checkers.color_at(point(*far)) == BLACK

    def test_linear_gradient(self):
        """Test linear interpolation along x."""
        from whitted.core.tuples import BLACK, WHITE, Color, point
        from whitted.materials.pattern import LinearGradient

        gradient = LinearGradient(WHITE, BLACK)
        assert gradient.color_at(point(0, 0, 0)) == WHITE
        assert gradient.color_at(point(0.25, 0, 0)) == Color(0.75, 0.75, 0.75)
        assert gradient.color_at(point(0.5, 0, 0)) == Color(0.5, 0.5, 0.5)
        assert gradient.color_at(point(0.75, 0, 0)) == Color(0.25, 0.25, 0.25)

    def test_linear_gradient_repeats(self):
        """Test that the gradient restarts every unit."""
        from whitted.core.tuples import BLACK, WHITE, Color, point
        from whitted.materials.pattern import LinearGradient

        gradient = LinearGradient(WHITE, BLACK)
        assert gradient.color_at(point(1.25, 0, 0)) == Color(0.75, 0.75, 0.75)
        assert gradient.color_at(point(-0.75, 0, 0)) == Color(0.75, 0.75, 0.75)

    def test_radial_gradient(self):
        """Test interpolation by the fractional distance from the y axis."""
        from whitted.core.tuples import BLACK, WHITE, Color, point
        from whitted.materials.pattern import RadialGradient

        gradient = RadialGradient(WHITE, BLACK)
        assert gradient.color_at(point(0, 0, 0)) == WHITE
        assert gradient.color_at(point(0.5, 0, 0)) == Color(0.5, 0.5, 0.5)
        assert gradient.color_at(point(0, 0, 1.25)) == Color(0.75, 0.75, 0.75)


class TestCompositePatterns:
    """Tests for blended and nested patterns."""

    def test_blended_averages_children(self):
        """Test that blending averages both children at the same point."""
        from whitted.core.tuples import BLACK, WHITE, Color, point
        from whitted.materials.pattern import Blended, Solid, Stripes

        blended = Blended(Stripes(WHITE, BLACK), Solid(BLACK))
        assert blended.color_at(point(0, 0, 0)) == Color(0.5, 0.5, 0.5)
        assert blended.color_at(point(1, 0, 0)) == BLACK

    def test_nested_patterns(self):
        """Test a checkerboard whose cells are themselves patterns."""
        from whitted.core.matrix import scaling
        from whitted.core.tuples import BLACK, WHITE, Color, point
        from whitted.materials.pattern import Checkers, Stripes

        red = Color(1, 0, 0)
        nested = Checkers(Stripes(WHITE, BLACK, transform=scaling(0.25, 1, 1)), red)
        assert nested.color_at(point(0.1, 0, 0)) == WHITE
        assert nested.color_at(point(0.3, 0, 0)) == BLACK
        assert nested.color_at(point(1.5, 0, 0)) == red

    def test_plain_colors_are_wrapped(self):
        """Test that colors passed as children become solid patterns."""
        from whitted.core.tuples import BLACK, WHITE
        from whitted.materials.pattern import Solid, Stripes

        stripes = Stripes(WHITE, BLACK)
        assert isinstance(stripes.a, Solid)
        assert isinstance(stripes.b, Solid)

    def test_as_pattern_rejects_other_types(self):
        """Test that non-color values are not accepted as patterns."""
        from whitted.materials.pattern import as_pattern

        with pytest.raises(TypeError):
            as_pattern("red")

    def test_degenerate_pattern_transform(self):
        """Test that a non-invertible pattern transform is rejected."""
        from whitted.core.matrix import DegenerateTransformError, scaling
        from whitted.core.tuples import BLACK, WHITE
        from whitted.materials.pattern import Stripes

        with pytest.raises(DegenerateTransformError):
            Stripes(WHITE, BLACK, transform=scaling(0, 1, 1))
