"""Unit tests for cube intersection and normals.

Tests cover:
- Rays entering each face
- A ray starting inside the cube
- Rays missing the cube, including axis-parallel rays
- Axis-parallel rays running along a face plane
- Face normals, including edges and corners
"""

import pytest


class TestCubeIntersection:
    """Tests for the slab intersection."""

    @pytest.mark.parametrize(
        "origin, direction, t1, t2",
        [
            ((5, 0.5, 0), (-1, 0, 0), 4, 6),
            ((-5, 0.5, 0), (1, 0, 0), 4, 6),
            ((0.5, 5, 0), (0, -1, 0), 4, 6),
            ((0.5, -5, 0), (0, 1, 0), 4, 6),
            ((0.5, 0, 5), (0, 0, -1), 4, 6),
            ((0.5, 0, -5), (0, 0, 1), 4, 6),
            ((0, 0.5, 0), (0, 0, 1), -1, 1),
        ],
    )
    def test_ray_hits_cube(self, origin, direction, t1, t2):
        """Test a ray entering through each face, and from inside."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.shape import local_intersect, make_cube

        ts = local_intersect(make_cube(), Ray(point(*origin), vector(*direction)))
        assert ts == [t1, t2]

    @pytest.mark.parametrize(
        "origin, direction",
        [
            ((-2, 0, 0), (0.2673, 0.5345, 0.8018)),
            ((0, -2, 0), (0.8018, 0.2673, 0.5345)),
            ((0, 0, -2), (0.5345, 0.8018, 0.2673)),
            ((2, 0, 2), (0, 0, -1)),
            ((0, 2, 2), (0, -1, 0)),
            ((2, 2, 0), (-1, 0, 0)),
        ],
    )
    def test_ray_misses_cube(self, origin, direction):
        """Test rays that pass by the cube."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.shape import local_intersect, make_cube

        assert local_intersect(make_cube(), Ray(point(*origin), vector(*direction))) == []

    @pytest.mark.parametrize(
        "origin, direction",
        [
            ((1, 0, -5), (0, 0, 1)),
            ((-1, 0, -5), (0, 0, 1)),
            ((0, 1, -5), (0, 0, 1)),
            ((0, -1, -5), (0, 0, 1)),
            ((-5, 0, 1), (1, 0, 0)),
            ((-5, 0, -1), (1, 0, 0)),
        ],
    )
    def test_ray_along_face(self, origin, direction):
        """Test that a ray running along a face plane grazes the cube on either side."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.shape import local_intersect, make_cube

        assert local_intersect(make_cube(), Ray(point(*origin), vector(*direction))) == [4, 6]

    @pytest.mark.parametrize("origin", [-1.0, 1.0, 0.0])
    def test_parallel_axis_interval_is_defined(self, origin):
        """Test that a parallel axis inside or on the slab spans all of t."""
        import math

        from whitted.geometry.cube import _check_axis

        assert _check_axis(origin, 0.0) == (-math.inf, math.inf)

    def test_scaled_cube(self):
        """Test intersecting a cube stretched along z."""
        from whitted.core.matrix import scaling
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.shape import intersect, make_cube

        cube = make_cube(transform=scaling(1, 1, 3))
        xs = intersect(cube, Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert [round(i.t, 9) for i in xs] == [2.0, 8.0]


class TestCubeNormals:
    """Tests for cube face normals."""

    @pytest.mark.parametrize(
        "p, expected",
        [
            ((1, 0.5, -0.8), (1, 0, 0)),
            ((-1, -0.2, 0.9), (-1, 0, 0)),
            ((-0.4, 1, -0.1), (0, 1, 0)),
            ((0.3, -1, -0.7), (0, -1, 0)),
            ((-0.6, 0.3, 1), (0, 0, 1)),
            ((0.4, 0.4, -1), (0, 0, -1)),
            ((1, 1, 1), (1, 0, 0)),
            ((-1, -1, -1), (-1, 0, 0)),
        ],
    )
    def test_normal_on_surface(self, p, expected):
        """Test the normal on each face, edge and corner."""
        from whitted.core.tuples import point, vector
        from whitted.geometry.shape import local_normal_at, make_cube

        assert local_normal_at(make_cube(), point(*p)) == vector(*expected)
