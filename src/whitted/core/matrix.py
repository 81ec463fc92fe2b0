"""Immutable square matrices and affine transform builders.

Matrices are stored as read-only NumPy arrays. Multiplication uses the ``@``
operator against another ``Matrix`` or a ``Tuple``; chained transforms are
evaluated right-to-left against a point, so ``C @ B @ A`` applies ``A`` first.
The ``compose`` helper takes the steps in the order they are applied.

The inverse is computed from cofactors and raises ``DegenerateTransformError``
for singular matrices instead of returning garbage.

Example:
    >>> import math
    >>> from whitted.core.matrix import compose, rotation_x, scaling, translation
    >>> from whitted.core.tuples import point
    >>> transform = compose(rotation_x(math.pi / 2), scaling(5, 5, 5), translation(10, 5, 7))
    >>> transform @ point(1, 0, 1)
    Tuple(x=15.0, y=0.0, z=7.0, w=1.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np
import numpy.typing as npt

from whitted.core.tuples import EPSILON, Tuple


class DegenerateTransformError(ValueError):
    """Raised when inverting a matrix whose determinant is zero."""


class Matrix:
    """An immutable n x n matrix (n in 2..4).

    Attributes:
        size: Number of rows (and columns).
    """

    __slots__ = ("_data", "_rows", "size")

    def __init__(self, rows: Iterable[Sequence[float]] | npt.ArrayLike) -> None:
        """Create a matrix from nested rows.

        Args:
            rows: Row-major values, e.g. a list of lists or a 2D NumPy array.

        Raises:
            ValueError: If the values do not form a square 2x2, 3x3 or 4x4 matrix.
        """
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1] or data.shape[0] not in (2, 3, 4):
            raise ValueError(f"Matrix must be 2x2, 3x3 or 4x4, got shape {data.shape}")
        data.setflags(write=False)
        self._data = data
        self._rows = tuple(tuple(float(v) for v in row) for row in data)
        self.size = data.shape[0]

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        return cls(np.identity(size))

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return self._rows[row][col]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.size != other.size:
            return False
        return bool(np.allclose(self._data, other._data, rtol=0.0, atol=EPSILON))

    __hash__ = None  # type: ignore[assignment]

    def __reduce__(self) -> tuple[type[Matrix], tuple[tuple[tuple[float, ...], ...]]]:
        return (Matrix, (self._rows,))

    def __repr__(self) -> str:
        return f"Matrix({[list(row) for row in self._rows]})"

    def __matmul__(self, other: Matrix | Tuple) -> Matrix | Tuple:
        if isinstance(other, Matrix):
            if other.size != self.size:
                raise ValueError(f"Cannot multiply {self.size}x{self.size} by {other.size}x{other.size}")
            return Matrix(self._data @ other._data)
        if isinstance(other, Tuple):
            if self.size != 4:
                raise ValueError("Only 4x4 matrices can transform tuples")
            x, y, z, w = other
            r0, r1, r2, r3 = self._rows
            return Tuple(
                r0[0] * x + r0[1] * y + r0[2] * z + r0[3] * w,
                r1[0] * x + r1[1] * y + r1[2] * z + r1[3] * w,
                r2[0] * x + r2[1] * y + r2[2] * z + r2[3] * w,
                r3[0] * x + r3[1] * y + r3[2] * z + r3[3] * w,
            )
        return NotImplemented

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a writable copy of the underlying array."""
        return self._data.copy()

    def transpose(self) -> Matrix:
        return Matrix(self._data.T)

    # =========================================================================
    # Determinant and inverse
    # =========================================================================

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with ``row`` and ``col`` removed."""
        if self.size == 2:
            raise ValueError("A 2x2 matrix has no submatrix")
        return Matrix(np.delete(np.delete(self._data, row, axis=0), col, axis=1))

    def minor(self, row: int, col: int) -> float:
        return _determinant(_sub_rows(self._rows, row, col))

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 else minor

    def determinant(self) -> float:
        return _determinant(self._rows)

    def is_invertible(self) -> bool:
        return self.determinant() != 0.0

    def inverse(self) -> Matrix:
        """Compute the inverse from the matrix of cofactors.

        Returns:
            The inverse matrix.

        Raises:
            DegenerateTransformError: If the determinant is zero.
        """
        det = self.determinant()
        if det == 0.0 or not math.isfinite(det):
            raise DegenerateTransformError(f"Matrix is not invertible (determinant {det}): {self!r}")

        n = self.size
        # Transposed cofactor matrix divided by the determinant
        result = [[0.0] * n for _ in range(n)]
        for row in range(n):
            for col in range(n):
                result[col][row] = self.cofactor(row, col) / det
        return Matrix(result)


def _sub_rows(rows: Sequence[Sequence[float]], row: int, col: int) -> list[list[float]]:
    return [[v for j, v in enumerate(r) if j != col] for i, r in enumerate(rows) if i != row]


def _determinant(rows: Sequence[Sequence[float]]) -> float:
    if len(rows) == 2:
        return rows[0][0] * rows[1][1] - rows[0][1] * rows[1][0]
    total = 0.0
    for col, value in enumerate(rows[0]):
        if value == 0.0:
            continue
        minor = _determinant(_sub_rows(rows, 0, col))
        total += value * (-minor if col % 2 else minor)
    return total


IDENTITY = Matrix.identity(4)


# =============================================================================
# Transform Builders
# =============================================================================


def translation(x: float, y: float, z: float) -> Matrix:
    """Move points by (x, y, z). Vectors are unaffected."""
    return Matrix(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scaling(x: float, y: float, z: float) -> Matrix:
    """Scale along each axis. Negative factors reflect."""
    return Matrix(
        [
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_x(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear each component in proportion to the other two.

    Args:
        xy: X moved in proportion to y.
        xz: X moved in proportion to z.
        yx: Y moved in proportion to x.
        yz: Y moved in proportion to z.
        zx: Z moved in proportion to x.
        zy: Z moved in proportion to y.
    """
    return Matrix(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def compose(*steps: Matrix) -> Matrix:
    """Compose transforms given in the order they are applied.

    ``compose(a, b, c)`` equals ``c @ b @ a``: ``a`` is applied closest to
    the object.
    """
    result = IDENTITY
    for step in steps:
        result = step @ result  # type: ignore[assignment]
    return result  # type: ignore[return-value]


def view_transform(from_point: Tuple, to_point: Tuple, up: Tuple) -> Matrix:
    """Build the world-to-camera transform for an eye looking at a target.

    Args:
        from_point: Eye position.
        to_point: Point the eye looks at.
        up: Approximate up vector; need not be normalized or orthogonal.

    Returns:
        The orientation matrix multiplied by a translation moving the eye to
        the origin.

    Raises:
        InvalidVectorError: If from and to are the same point.
    """
    forward = (to_point - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    orientation = Matrix(
        [
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return orientation @ translation(-from_point.x, -from_point.y, -from_point.z)  # type: ignore[return-value]
