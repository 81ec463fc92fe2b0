"""Unit tests for the ray module.

Tests cover:
- Ray construction
- Position along a ray
- Transforming rays by translation and scaling
"""


class TestRay:
    """Tests for ray construction and evaluation."""

    def test_create_ray(self):
        """Test that a ray stores its origin and direction."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector

        origin = point(1, 2, 3)
        direction = vector(4, 5, 6)
        ray = Ray(origin, direction)
        assert ray.origin == origin
        assert ray.direction == direction

    def test_position(self):
        """Test computing points along a ray, including behind the origin."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector

        ray = Ray(point(2, 3, 4), vector(1, 0, 0))
        assert ray.position(0) == point(2, 3, 4)
        assert ray.position(1) == point(3, 3, 4)
        assert ray.position(-1) == point(1, 3, 4)
        assert ray.position(2.5) == point(4.5, 3, 4)


class TestRayTransform:
    """Tests for transforming rays."""

    def test_translate_ray(self):
        """Test that translation moves the origin but not the direction."""
        from whitted.core.matrix import translation
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector

        ray = Ray(point(1, 2, 3), vector(0, 1, 0))
        moved = ray.transform(translation(3, 4, 5))
        assert moved.origin == point(4, 6, 8)
        assert moved.direction == vector(0, 1, 0)

    def test_scale_ray(self):
        """Test that scaling changes both origin and direction."""
        from whitted.core.matrix import scaling
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector

        ray = Ray(point(1, 2, 3), vector(0, 1, 0))
        scaled = ray.transform(scaling(2, 3, 4))
        assert scaled.origin == point(2, 6, 12)
        assert scaled.direction == vector(0, 3, 0)

    def test_transform_returns_new_ray(self):
        """Test that transforming leaves the original ray untouched."""
        from whitted.core.matrix import translation
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector

        ray = Ray(point(1, 2, 3), vector(0, 1, 0))
        ray.transform(translation(3, 4, 5))
        assert ray.origin == point(1, 2, 3)
