"""
Geometric primitives: points, rotations about an arbitrary pivot and the
straight "forward" displacement built on top of them.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np
from .linear_algebra import Matrix, Vector2D, resolve_dtype


class Point:
    """Immutable 2D position in map coordinates (meters)"""

    __slots__ = ("inner",)

    def __init__(self, x: float, y: float, dtype=None):
        self.inner = np.array([x, y], dtype=resolve_dtype(dtype))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Point":
        point = cls.__new__(cls)
        point.inner = np.asarray(array)
        return point

    @classmethod
    def from_tuple(cls, position: Tuple[float, float], dtype=None) -> "Point":
        return cls(position[0], position[1], dtype=dtype)

    @property
    def x(self):
        return self.inner[0]

    @property
    def y(self):
        return self.inner[1]

    @property
    def dtype(self) -> np.dtype:
        return self.inner.dtype

    def as_tuple(self) -> Tuple[float, float]:
        return (float(self.inner[0]), float(self.inner[1]))

    def translate(self, translation: Vector2D) -> "Point":
        return self + translation

    def rotate(self, rotation: "Rotation") -> "Point":
        """Rotate this point about rotation.origin by rotation.matrix"""
        return rotation.matrix @ (self - rotation.origin) + rotation.origin

    def forward(self, distance: float, rotation_matrix: Matrix) -> "Point":
        """
        Move along the direction a rotation matrix points at.

        The synthetic point distance meters up the local +y axis is rotated
        about this point, so the result lies distance meters along the
        heading encoded by rotation_matrix. Negative distance reverses.

        Args:
            distance: Signed travel distance in meters
            rotation_matrix: Orientation to travel along

        Returns:
            The displaced point
        """
        target = Point.from_array(self.inner + np.array([0, distance], dtype=self.dtype))
        return target.rotate(Rotation(rotation_matrix, self))

    def __sub__(self, other):
        if isinstance(other, Point):
            return Vector2D.from_array(self.inner - other.inner)
        return NotImplemented

    def __add__(self, other):
        if isinstance(other, Vector2D):
            return Point.from_array(self.inner + other.inner)
        return NotImplemented

    __radd__ = __add__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return bool(np.array_equal(self.inner, other.inner))

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __repr__(self) -> str:
        return f"Point({float(self.x)}, {float(self.y)})"


@dataclass(frozen=True)
class Rotation:
    """A rotation matrix applied about an arbitrary pivot"""

    matrix: Matrix
    origin: Point

    @classmethod
    def from_angle(cls, angle: float, origin: Point) -> "Rotation":
        return cls(Matrix.rotation(angle, dtype=origin.dtype), origin)

    def inverse(self) -> "Rotation":
        return Rotation(self.matrix.inverse(), self.origin)


def distance_of(a: Point, b: Point):
    """Euclidean distance between two points"""
    return (a - b).norm()


def midpoint(a: Point, b: Point) -> Point:
    return Point.from_array((a.inner + b.inner) / a.dtype.type(2))
