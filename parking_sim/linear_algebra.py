"""
Fixed-size linear algebra for the 2D kinematics core.

Vectors and matrices wrap small numpy arrays. Every value carries a single
float dtype (float32 or float64) that is chosen once by the caller and kept
through all products, so repeated rotation composition never mixes precision.
"""

import math
from typing import Iterable, Optional, Union
import numpy as np
from .constants import FLOAT_DTYPE
from .exceptions import DegenerateMatrixError


def resolve_dtype(dtype=None) -> np.dtype:
    """Return the numpy dtype to use, falling back to the configured default"""
    return np.dtype(FLOAT_DTYPE if dtype is None else dtype)


class Vector2D:
    """A 2-component displacement (no implied position)"""

    __slots__ = ("inner",)

    def __init__(self, x: float, y: float, dtype=None):
        self.inner = np.array([x, y], dtype=resolve_dtype(dtype))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Vector2D":
        vector = cls.__new__(cls)
        vector.inner = np.asarray(array)
        return vector

    @property
    def x(self):
        return self.inner[0]

    @property
    def y(self):
        return self.inner[1]

    @property
    def dtype(self) -> np.dtype:
        return self.inner.dtype

    def norm(self):
        return np.sqrt(self.inner[0] * self.inner[0] + self.inner[1] * self.inner[1])

    def __add__(self, other):
        if isinstance(other, Vector2D):
            return Vector2D.from_array(self.inner + other.inner)
        # Vector + Point is handled by Point.__radd__
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vector2D):
            return Vector2D.from_array(self.inner - other.inner)
        return NotImplemented

    def __neg__(self) -> "Vector2D":
        return Vector2D.from_array(-self.inner)

    def __mul__(self, scalar: float) -> "Vector2D":
        return Vector2D.from_array(self.inner * self.inner.dtype.type(scalar))

    __rmul__ = __mul__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return bool(np.array_equal(self.inner, other.inner))

    def __repr__(self) -> str:
        return f"Vector2D({float(self.x)}, {float(self.y)})"


class Matrix:
    """2x2 matrix, in practice always a rotation matrix"""

    __slots__ = ("inner",)

    def __init__(self, rows: Union[Iterable[Iterable[float]], np.ndarray], dtype=None):
        inner = np.array(rows, dtype=resolve_dtype(dtype))
        if inner.shape != (2, 2):
            raise ValueError(f"Matrix must be 2x2, got shape {inner.shape}")
        self.inner = inner

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Matrix":
        matrix = cls.__new__(cls)
        matrix.inner = np.asarray(array)
        return matrix

    @classmethod
    def eye(cls, dtype=None) -> "Matrix":
        return cls.from_array(np.eye(2, dtype=resolve_dtype(dtype)))

    @classmethod
    def rotation(cls, angle: float, dtype=None) -> "Matrix":
        """
        Build the counter-clockwise rotation matrix for an angle.

        Args:
            angle: Rotation angle in radians
            dtype: Float dtype of the result (defaults to FLOAT_DTYPE)

        Returns:
            [[cos, -sin], [sin, cos]]
        """
        dtype = resolve_dtype(dtype)
        theta = dtype.type(angle)
        c, s = np.cos(theta), np.sin(theta)
        return cls.from_array(np.array([[c, -s], [s, c]], dtype=dtype))

    @property
    def dtype(self) -> np.dtype:
        return self.inner.dtype

    def determinant(self):
        a, b = self.inner[0]
        c, d = self.inner[1]
        return a * d - b * c

    def inverse(self) -> "Matrix":
        """
        Closed-form 2x2 inverse.

        Raises:
            DegenerateMatrixError: If the determinant is numerically zero
        """
        det = self.determinant()
        if not abs(det) > np.finfo(self.dtype).eps:
            raise DegenerateMatrixError(f"Cannot invert matrix with determinant {det}")
        a, b = self.inner[0]
        c, d = self.inner[1]
        return Matrix.from_array(np.array([[d, -b], [-c, a]], dtype=self.dtype) / det)

    def transpose(self) -> "Matrix":
        return Matrix.from_array(self.inner.T.copy())

    def angle(self) -> float:
        """Rotation angle encoded by the matrix, in (-pi, pi]"""
        return math.atan2(float(self.inner[1, 0]), float(self.inner[0, 0]))

    def allclose(self, other: "Matrix", atol: Optional[float] = None) -> bool:
        if atol is None:
            atol = 1e-5 if self.dtype == np.float32 else 1e-9
        return bool(np.allclose(self.inner, other.inner, atol=atol, rtol=0.0))

    def __matmul__(self, other):
        if isinstance(other, Matrix):
            return Matrix.from_array(self.inner @ other.inner)
        if isinstance(other, Vector2D):
            return Vector2D.from_array(self.inner @ other.inner)
        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.array_equal(self.inner, other.inner))

    def __repr__(self) -> str:
        return f"Matrix({self.inner.tolist()})"
