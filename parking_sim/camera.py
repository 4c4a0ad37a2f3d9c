from typing import Tuple
from .geometry import Point
from .constants import (
    SCALE,
    DEFAULT_WINDOW_SIZE
)


class Camera:
    """Fixed top-down view: the map's origin sits at the bottom-left of the window"""

    def __init__(self, window_size: Tuple[int, int] = DEFAULT_WINDOW_SIZE, pixels_per_meter: float = SCALE):
        self.window_size = window_size
        self.pixels_per_meter = pixels_per_meter

    def world_to_screen(self, world_pos: Point) -> Tuple[int, int]:
        """Convert world coordinates to screen coordinates"""
        x, y = world_pos.as_tuple()
        screen_x = int(round(x * self.pixels_per_meter))
        # Screen y grows downward, world y grows up the map
        screen_y = int(round(self.window_size[1] - y * self.pixels_per_meter))
        return (screen_x, screen_y)

    def screen_to_world(self, screen_pos: Tuple[int, int]) -> Point:
        """Convert screen coordinates to world coordinates"""
        world_x = screen_pos[0] / self.pixels_per_meter
        world_y = (self.window_size[1] - screen_pos[1]) / self.pixels_per_meter
        return Point(world_x, world_y)
