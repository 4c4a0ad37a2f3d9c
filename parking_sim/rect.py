"""
Rigid rectangle bodies.

A Rect keeps its unrotated extents fixed forever and only changes its origin
and its cumulative rotation matrix. Corners are always derived from those two
pieces of state, so a rectangle can never be sheared or resized by motion.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union
import numpy as np
from .geometry import Point, Rotation
from .linear_algebra import Matrix
from .exceptions import InvalidDimensionError


@dataclass(frozen=True)
class ColorSource:
    """Flat RGB fill"""
    r: int
    g: int
    b: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


class ImageSource:
    """Pre-rendered RGBA pixel buffer, opaque to the kinematics core"""

    def __init__(self, pixels: np.ndarray):
        """
        Args:
            pixels: (height, width, 4) uint8 RGBA array
        """
        pixels = np.asarray(pixels, dtype=np.uint8)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected (height, width, 4) RGBA pixels, got shape {pixels.shape}")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError(f"RGBA pixels have no drawable area, got shape {pixels.shape}")
        self.pixels = pixels

    @property
    def pixel_width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def pixel_height(self) -> int:
        return int(self.pixels.shape[0])

    def aspect_ratio(self) -> float:
        """height / width of the image"""
        return self.pixel_height / self.pixel_width


Source = Union[ColorSource, ImageSource]


class Rect:
    """Oriented rectangle with fixed extents and a cumulative rotation"""

    def __init__(self, origin: Point, width: float, height: float, source: Source,
                 rotation_matrix: Optional[Matrix] = None):
        """
        Initialize a rectangle, axis-aligned unless a rotation matrix is given.

        Args:
            origin: Center of the rectangle in world space
            width: Extent along the local x axis (meters)
            height: Extent along the local y (heading) axis (meters)
            source: Drawable payload handed to the renderer untouched
            rotation_matrix: Initial orientation (identity by default)

        Raises:
            InvalidDimensionError: If width or height is not strictly positive
        """
        if not width > 0 or not height > 0:
            raise InvalidDimensionError(f"Rectangle extents must be positive, got {width} x {height}")
        self.origin = origin
        self.width = width
        self.height = height
        self.source = source
        self.rotation_matrix = rotation_matrix if rotation_matrix is not None else Matrix.eye(dtype=origin.dtype)

    def _corner(self, dx: float, dy: float) -> Point:
        local = Point.from_array(self.origin.inner + np.array([dx, dy], dtype=self.origin.dtype))
        return local.rotate(Rotation(self.rotation_matrix, self.origin))

    def front_left(self) -> Point:
        return self._corner(-self.width / 2.0, self.height / 2.0)

    def front_right(self) -> Point:
        return self._corner(self.width / 2.0, self.height / 2.0)

    def back_left(self) -> Point:
        return self._corner(-self.width / 2.0, -self.height / 2.0)

    def back_right(self) -> Point:
        return self._corner(self.width / 2.0, -self.height / 2.0)

    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """(front_left, front_right, back_left, back_right) in world space"""
        return (self.front_left(), self.front_right(), self.back_left(), self.back_right())

    def polygon(self) -> Tuple[Point, Point, Point, Point]:
        """Corners in winding order for polygon drawing"""
        return (self.front_left(), self.front_right(), self.back_right(), self.back_left())

    def heading(self) -> float:
        """Orientation in radians, 0 when the local y axis points up the map"""
        return self.rotation_matrix.angle()

    def rotate_self(self, rotation_matrix: Matrix) -> None:
        """Compose an orientation change without moving the origin"""
        self.rotation_matrix = rotation_matrix @ self.rotation_matrix

    def rotate(self, rotation: Rotation) -> None:
        """Rotate about an external pivot, updating both position and orientation"""
        self.origin = self.origin.rotate(rotation)
        self.rotate_self(rotation.matrix)

    def forward(self, distance: float, rotation_matrix: Matrix) -> None:
        """Translate the origin along rotation_matrix's heading; orientation is unchanged"""
        self.origin = self.origin.forward(distance, rotation_matrix)

    def __repr__(self) -> str:
        return f"Rect(origin={self.origin!r}, width={self.width}, height={self.height})"
