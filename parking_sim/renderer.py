import pygame
import math
import logging
from typing import Dict, Iterable, Optional, Tuple
from .camera import Camera
from .car import Car
from .rect import Rect, ColorSource, ImageSource
from .constants import (
    DEFAULT_WINDOW_SIZE,
    DEFAULT_RENDER_FPS,
    BACKGROUND_COLOR,
    WINDOW_CAPTION,
    SCALE
)

# Setup module logger
logger = logging.getLogger(__name__)

INFO_FONT_SIZE = 24
INFO_TEXT_COLOR = (255, 255, 255)
INFO_TEXT_MARGIN = 10


class Renderer:
    """Paints map and car rectangles with pygame"""

    def __init__(self, window_size=DEFAULT_WINDOW_SIZE, render_fps=DEFAULT_RENDER_FPS,
                 pixels_per_meter: float = SCALE, enable_fps_limit: bool = True):
        self.window_size = window_size
        self.render_fps = render_fps
        self.enable_fps_limit = enable_fps_limit
        self.window = None
        self.clock = None
        self.font = None
        self._initialized_pygame = False
        self.camera = Camera(window_size, pixels_per_meter)

        # Scaled image surfaces keyed by (source identity, rect extents); the
        # source is held alongside so its id cannot be recycled while cached
        self._image_cache: Dict[Tuple[int, float, float], Tuple[ImageSource, pygame.Surface]] = {}

    def init_pygame(self):
        if not self._initialized_pygame:
            pygame.init()
            pygame.display.init()
            pygame.font.init()
            self._initialized_pygame = True

    def render_frame(self, static_rects: Iterable[Rect], car: Car, info_text: Optional[str] = None):
        """
        Draw one frame to the window, opening it on first use.

        Args:
            static_rects: Map decoration painted first
            car: Car whose parts are painted on top
            info_text: Optional status line drawn in the top-left corner
        """
        self.init_pygame()

        if self.window is None:
            self.window = pygame.display.set_mode(self.window_size)
            pygame.display.set_caption(WINDOW_CAPTION)
            logger.debug(f"Opened {self.window_size[0]}x{self.window_size[1]} window")

        if self.clock is None:
            self.clock = pygame.time.Clock()

        if self.font is None:
            self.font = pygame.font.Font(None, INFO_FONT_SIZE)

        self.draw_scene(self.window, static_rects, car)

        if info_text:
            text = self.font.render(info_text, True, INFO_TEXT_COLOR)
            self.window.blit(text, (INFO_TEXT_MARGIN, INFO_TEXT_MARGIN))

        pygame.display.flip()

        # Only limit FPS if enabled
        if self.enable_fps_limit:
            self.clock.tick(self.render_fps)
        else:
            self.clock.tick()

    def draw_scene(self, surface: pygame.Surface, static_rects: Iterable[Rect], car: Car):
        """Draw map and car onto any surface (window or off-screen)"""
        surface.fill(BACKGROUND_COLOR)
        for rect in static_rects:
            self.draw_rect(surface, rect)
        for _, rect in car.parts():
            self.draw_rect(surface, rect)

    def draw_rect(self, surface: pygame.Surface, rect: Rect):
        """Draw a single rectangle according to its source type"""
        if isinstance(rect.source, ColorSource):
            corners = [self.camera.world_to_screen(p) for p in rect.polygon()]
            pygame.draw.polygon(surface, rect.source.as_tuple(), corners)
        elif isinstance(rect.source, ImageSource):
            self._draw_image(surface, rect)
        else:
            logger.warning(f"Skipping rect with unsupported source {type(rect.source).__name__}")

    def _draw_image(self, surface: pygame.Surface, rect: Rect):
        image = self._image_surface(rect)
        # pygame rotates counter-clockwise on screen, same sense as the world heading
        rotated = pygame.transform.rotate(image, math.degrees(rect.heading()))
        center = self.camera.world_to_screen(rect.origin)
        surface.blit(rotated, rotated.get_rect(center=center))

    def _image_surface(self, rect: Rect) -> pygame.Surface:
        """Build (once per source and size) a surface sized to the rect from its pixel buffer"""
        source = rect.source
        key = (id(source), rect.width, rect.height)
        cached = self._image_cache.get(key)
        if cached is None:
            image = pygame.image.frombuffer(source.pixels.tobytes(),
                                            (source.pixel_width, source.pixel_height), "RGBA").copy()
            target_size = (max(1, int(round(rect.width * self.camera.pixels_per_meter))),
                           max(1, int(round(rect.height * self.camera.pixels_per_meter))))
            if image.get_size() != target_size:
                image = pygame.transform.smoothscale(image, target_size)
            self._image_cache[key] = (source, image)
            return image
        return cached[1]

    def close(self):
        if self.window is not None:
            pygame.display.quit()
            pygame.quit()
            self.window = None
            self.clock = None
            self.font = None
            self._initialized_pygame = False
        self._image_cache.clear()
