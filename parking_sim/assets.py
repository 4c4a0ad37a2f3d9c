"""
Logo asset pipeline: rasterize an SVG once into an RGBA pixel buffer.
"""

import logging
import os
import numpy as np
import pygame
from .rect import ImageSource
from .exceptions import AssetLoadError
from .constants import SCALE

# Setup module logger
logger = logging.getLogger(__name__)


def load_logo(path: str, width: float, scale: float = SCALE) -> ImageSource:
    """
    Load and rasterize a logo image.

    pygame's SDL_image backend handles SVG as well as bitmap formats. The
    image is scaled to width * scale pixels wide, keeping its aspect ratio.

    Args:
        path: Image file path
        width: Target width in meters
        scale: Pixels per meter

    Returns:
        ImageSource holding (height, width, 4) RGBA pixels

    Raises:
        AssetLoadError: If the file is missing, unreadable or rasterizes to nothing
    """
    if not os.path.isfile(path):
        logger.error(f"Logo asset not found: {path}")
        raise AssetLoadError(f"Logo asset not found: {path}")

    try:
        surface = pygame.image.load(path)
    except pygame.error as e:
        logger.error(f"Failed to load logo {path}: {e}")
        raise AssetLoadError(f"Failed to load logo {path}: {e}") from e

    source_width, source_height = surface.get_size()
    target_width = int(width * scale)
    if source_width <= 0 or source_height <= 0 or target_width <= 0:
        raise AssetLoadError(f"Logo {path} has no drawable area ({source_width}x{source_height})")
    target_height = max(1, int(round(target_width * source_height / source_width)))

    try:
        # smoothscale only accepts 24/32-bit surfaces
        if surface.get_bitsize() not in (24, 32):
            converted = pygame.Surface((source_width, source_height), pygame.SRCALPHA, 32)
            converted.blit(surface, (0, 0))
            surface = converted
        scaled = pygame.transform.smoothscale(surface, (target_width, target_height))
        rgb = pygame.surfarray.array3d(scaled)
        alpha = pygame.surfarray.array_alpha(scaled)
    except (pygame.error, ValueError) as e:
        logger.error(f"Failed to rasterize logo {path}: {e}")
        raise AssetLoadError(f"Failed to rasterize logo {path}: {e}") from e

    # surfarray is indexed (x, y); pixel buffers are (row, column)
    pixels = np.dstack((rgb, alpha)).transpose(1, 0, 2).astype(np.uint8)
    logger.debug(f"Loaded logo {path} as {target_width}x{target_height} pixels")
    return ImageSource(pixels)
