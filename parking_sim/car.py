"""
Ackermann steering kinematics for a car made of rigid rectangles.

This module implements the car as a fixed assembly of named rectangles:
- Body, logo decal and two folded-out mirrors
- Four wheels whose front pair steers independently (Ackermann geometry)
- A discrete steering state that maps to a turning circle

Driving never integrates velocities. Each forward() call either pivots every
part about the shared turning center or translates every part along the
body's heading, so the assembly moves as one rigid body.
"""

import logging
import numpy as np
from typing import List, Optional, Tuple, Union
from .geometry import Point, Rotation, distance_of, midpoint
from .linear_algebra import Matrix, resolve_dtype
from .rect import Rect, ColorSource, ImageSource, Source
from .exceptions import ConfigurationError
from .constants import (
    CAR_WIDTH,
    CAR_HEIGHT,
    TRACK_WIDTH,
    FRONT_SUSPENSION,
    REAR_SUSPENSION,
    WHEEL_WIDTH,
    WHEEL_HEIGHT,
    LOGO_WIDTH,
    LOGO_TO_FRONT,
    LOGO_FALLBACK_ASPECT,
    MIRROR_WIDTH,
    MIRROR_HEIGHT,
    MIRROR_ANGLE,
    MIRROR_ORIGIN_TO_FRONT,
    TURNING_RADIUS,
    TURNING_COUNT,
    CAR_BODY_COLOR,
    WHEEL_COLOR,
    HALF_PI
)

# Setup module logger
logger = logging.getLogger(__name__)


class Car:
    """Car assembly driven by discrete steer and forward commands"""

    # Paint order: wheels sit inside the body footprint so they are drawn over it
    PART_NAMES = (
        "body",
        "front_left",
        "front_right",
        "rear_left",
        "rear_right",
        "logo",
        "left_mirror",
        "right_mirror",
    )

    def __init__(self, origin: Union[Point, Tuple[float, float]], heading: float, logo_source: Source,
                 turning_radius: float = TURNING_RADIUS, turning_count: int = TURNING_COUNT, dtype=None):
        """
        Build and pose the car.

        Args:
            origin: Body center in map coordinates (meters)
            heading: Initial heading in radians (0 points up the map, positive turns left)
            logo_source: Drawable payload for the logo decal; an ImageSource also
                fixes the decal's aspect ratio
            turning_radius: Rated minimum turning radius in meters
            turning_count: Number of discrete steering steps on each side
            dtype: Float dtype for all geometry (defaults to the origin's dtype)

        Raises:
            ConfigurationError: If the geometry cannot produce a valid turning circle
        """
        if isinstance(origin, Point):
            dtype = origin.dtype if dtype is None else resolve_dtype(dtype)
        else:
            dtype = resolve_dtype(dtype)
            origin = Point.from_tuple(origin, dtype=dtype)
        origin = Point(origin.x, origin.y, dtype=dtype)

        if int(turning_count) != turning_count or turning_count < 1:
            raise ConfigurationError(f"turning_count must be a positive integer, got {turning_count}")

        self.dtype = dtype
        self.turning_radius_limit = turning_radius
        self.turning_count = int(turning_count)
        self._steer_angle = 0

        body_color = ColorSource(*CAR_BODY_COLOR)
        wheel_color = ColorSource(*WHEEL_COLOR)
        x, y = float(origin.x), float(origin.y)

        self.body = Rect(origin, CAR_WIDTH, CAR_HEIGHT, body_color)

        # Wheels, laid out around the unrotated body
        front_y = y + CAR_HEIGHT / 2.0 - FRONT_SUSPENSION
        rear_y = y - CAR_HEIGHT / 2.0 + REAR_SUSPENSION
        self.front_left = self._new_rect(x - TRACK_WIDTH / 2.0, front_y, WHEEL_WIDTH, WHEEL_HEIGHT, wheel_color)
        self.front_right = self._new_rect(x + TRACK_WIDTH / 2.0, front_y, WHEEL_WIDTH, WHEEL_HEIGHT, wheel_color)
        self.rear_left = self._new_rect(x - TRACK_WIDTH / 2.0, rear_y, WHEEL_WIDTH, WHEEL_HEIGHT, wheel_color)
        self.rear_right = self._new_rect(x + TRACK_WIDTH / 2.0, rear_y, WHEEL_WIDTH, WHEEL_HEIGHT, wheel_color)

        self._validate_geometry()

        # Logo decal, top edge LOGO_TO_FRONT behind the front bumper
        if isinstance(logo_source, ImageSource):
            logo_height = LOGO_WIDTH * logo_source.aspect_ratio()
        else:
            logo_height = LOGO_WIDTH * LOGO_FALLBACK_ASPECT
        self.logo = self._new_rect(x, y + CAR_HEIGHT / 2.0 - LOGO_TO_FRONT - logo_height / 2.0,
                                   LOGO_WIDTH, logo_height, logo_source)

        # Mirrors start lying along the body side, then fold out about their hinge corner
        mirror_y = y + CAR_HEIGHT / 2.0 - MIRROR_ORIGIN_TO_FRONT
        self.left_mirror = self._new_rect(x - CAR_WIDTH / 2.0 - MIRROR_HEIGHT / 2.0, mirror_y,
                                          MIRROR_WIDTH, MIRROR_HEIGHT, body_color)
        self.right_mirror = self._new_rect(x + CAR_WIDTH / 2.0 + MIRROR_HEIGHT / 2.0, mirror_y,
                                           MIRROR_WIDTH, MIRROR_HEIGHT, body_color)
        quarter_turn = Matrix.rotation(HALF_PI, dtype=dtype)
        self.left_mirror.rotate_self(quarter_turn)
        self.right_mirror.rotate_self(quarter_turn)
        self.left_mirror.rotate(Rotation.from_angle(HALF_PI - MIRROR_ANGLE, self.left_mirror.back_right()))
        self.right_mirror.rotate(Rotation.from_angle(-(HALF_PI - MIRROR_ANGLE), self.right_mirror.front_right()))

        # Pose the whole assembly
        rotation = Rotation.from_angle(heading, origin)
        for rect in self.rects():
            rect.rotate(rotation)

        logger.debug(f"Car created at {origin.as_tuple()} heading {heading:.3f} rad "
                     f"(wheelbase {float(self.wheelbase):.3f} m, track {float(self.track_width):.3f} m)")

    def _new_rect(self, x: float, y: float, width: float, height: float, source: Source) -> Rect:
        return Rect(Point(x, y, dtype=self.dtype), width, height, source)

    def _validate_geometry(self) -> None:
        """Reject constants for which the turning radius formula is undefined or inverted"""
        wheelbase = float(self.wheelbase)
        track_width = float(self.track_width)
        radicand = self.turning_radius_limit ** 2 - wheelbase ** 2
        if radicand < 0:
            raise ConfigurationError(
                f"Wheelbase {wheelbase:.3f} m exceeds turning radius {self.turning_radius_limit} m")
        if np.sqrt(radicand) - track_width / 2.0 <= 0:
            raise ConfigurationError(
                f"Turning radius {self.turning_radius_limit} m leaves no room for track width {track_width:.3f} m")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def steer_angle(self) -> int:
        """Current discrete steering step, positive to the left"""
        return self._steer_angle

    @property
    def wheelbase(self):
        """L: distance between the left front and left rear wheels"""
        return distance_of(self.front_left.origin, self.rear_left.origin)

    @property
    def track_width(self):
        """T: distance between the rear wheels"""
        return distance_of(self.rear_left.origin, self.rear_right.origin)

    @property
    def back_origin(self) -> Point:
        """Midpoint of the rear axle"""
        return midpoint(self.rear_left.origin, self.rear_right.origin)

    @property
    def top_origin(self) -> Point:
        """Midpoint of the front axle"""
        return midpoint(self.front_left.origin, self.front_right.origin)

    def rects(self) -> List[Rect]:
        return [getattr(self, name) for name in self.PART_NAMES]

    def parts(self) -> List[Tuple[str, Rect]]:
        """(name, rect) pairs in paint order"""
        return [(name, getattr(self, name)) for name in self.PART_NAMES]

    def pose(self) -> Tuple[Point, float]:
        """Body center and heading"""
        return self.body.origin, self.body.heading()

    def turning_radius(self, step: Optional[int] = None):
        """
        Map a discrete steering step to a signed turning radius.

        The rated turning radius is reached at the full steering step and
        intermediate steps scale inversely with the step.

        Args:
            step: Steering step (defaults to the current steer angle)

        Returns:
            Radius in meters (positive turns left, negative turns right),
            or None when driving straight
        """
        if step is None:
            step = self._steer_angle
        if step == 0:
            return None
        wheelbase = self.wheelbase
        return (self.turning_count
                * (np.sqrt(self.turning_radius_limit ** 2 - wheelbase * wheelbase) - self.track_width / 2.0)
                / step)

    def turning_center(self, step: Optional[int] = None) -> Optional[Point]:
        """
        Turning-circle center for a steering step.

        The center sits on the rear axle line, radius meters to the left of
        the rear axle midpoint in the car's own frame (to the right for a
        negative radius).

        Returns:
            World-space center, or None when driving straight
        """
        radius = self.turning_radius(step)
        if radius is None:
            return None
        back_origin = self.back_origin
        unrotated = Point.from_array(back_origin.inner - np.array([radius, 0], dtype=self.dtype))
        return unrotated.rotate(Rotation(self.body.rotation_matrix, back_origin))

    # ------------------------------------------------------------------
    # Steering
    # ------------------------------------------------------------------

    def _angle_matrix(self, radius) -> Matrix:
        """Rotation by atan2(L, radius), the bicycle-model steer for that radius"""
        wheelbase = self.wheelbase
        c = np.sqrt(radius * radius + wheelbase * wheelbase)
        return Matrix.from_array(np.array([
            [radius / c, -wheelbase / c],
            [wheelbase / c, radius / c],
        ], dtype=self.dtype))

    def _small_angle_matrix(self, radius) -> Matrix:
        return self._angle_matrix(radius + self.track_width / 2.0)

    def _big_angle_matrix(self, radius) -> Matrix:
        return self._angle_matrix(radius - self.track_width / 2.0)

    def _front_wheel_matrices(self, center: Optional[Point]) -> Tuple[Matrix, Matrix]:
        """Steering matrices (left, right) for the front wheels, relative to the body"""
        if center is None:
            return Matrix.eye(dtype=self.dtype), Matrix.eye(dtype=self.dtype)
        radius = distance_of(self.back_origin, center)
        if distance_of(self.front_left.origin, center) < distance_of(self.front_right.origin, center):
            # Turning left: the left wheel is the inner one
            return self._big_angle_matrix(radius), self._small_angle_matrix(radius)
        # Turning right: angles are measured from the opposite direction
        return self._small_angle_matrix(radius).inverse(), self._big_angle_matrix(radius).inverse()

    def steer(self) -> None:
        """Re-aim both front wheels for the current steering step"""
        center = self.turning_center()
        left, right = self._front_wheel_matrices(center)
        body_matrix = self.body.rotation_matrix
        self.front_left.rotation_matrix = left @ body_matrix
        self.front_right.rotation_matrix = right @ body_matrix
        logger.debug(f"Steer step {self._steer_angle}: turning center "
                     f"{center.as_tuple() if center is not None else None}")

    def left_steer(self) -> bool:
        """Step the steering one notch left; returns False when already at full lock"""
        if self._steer_angle < self.turning_count:
            self._steer_angle += 1
            self.steer()
            return True
        return False

    def right_steer(self) -> bool:
        """Step the steering one notch right; returns False when already at full lock"""
        if self._steer_angle > -self.turning_count:
            self._steer_angle -= 1
            self.steer()
            return True
        return False

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------

    def forward(self, distance: float) -> None:
        """
        Drive a signed distance (negative reverses).

        With the wheels turned, every part pivots about the shared turning
        center by the arc angle the front axle covers. With the wheels
        straight, every part translates along the body heading.

        Args:
            distance: Travel distance in meters
        """
        center = self.turning_center()
        if center is not None:
            direction = 1.0 if self._steer_angle > 0 else -1.0
            angle = distance / distance_of(self.top_origin, center) * direction
            rotation = Rotation.from_angle(angle, center)
            for rect in self.rects():
                rect.rotate(rotation)
        else:
            rotation_matrix = self.body.rotation_matrix
            for rect in self.rects():
                rect.forward(distance, rotation_matrix)
