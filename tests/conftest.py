import os

# Renderer tests draw to off-screen surfaces; never open a real window
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import numpy as np
import pytest

from parking_sim.car import Car
from parking_sim.geometry import Point
from parking_sim.rect import ImageSource


@pytest.fixture
def logo_source():
    """100x60 transparent logo, so the decal is 1.0 x 0.6 m"""
    return ImageSource(np.zeros((60, 100, 4), dtype=np.uint8))


@pytest.fixture
def car(logo_source):
    return Car(Point(0.0, 0.0), 0.0, logo_source)
