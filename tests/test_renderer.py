import numpy as np
import pygame
import pytest

from parking_sim.camera import Camera
from parking_sim.geometry import Point
from parking_sim.maps import ParallelParking
from parking_sim.rect import Rect, ColorSource, ImageSource
from parking_sim.renderer import Renderer
from parking_sim.constants import BACKGROUND_COLOR, CAR_BODY_COLOR, ROAD_COLOR, DEFAULT_WINDOW_SIZE


def pixel(surface, position):
    return tuple(surface.get_at(position))[:3]


def test_camera_inverts_y_axis():
    camera = Camera((100, 100), pixels_per_meter=10.0)
    assert camera.world_to_screen(Point(0.0, 0.0)) == (0, 100)
    assert camera.world_to_screen(Point(2.0, 3.0)) == (20, 70)
    assert camera.screen_to_world((20, 70)) == Point(2.0, 3.0)


def test_draw_color_rect():
    renderer = Renderer(window_size=(100, 100), pixels_per_meter=10.0)
    surface = pygame.Surface((100, 100))
    renderer.draw_rect(surface, Rect(Point(5.0, 5.0), 2.0, 2.0, ColorSource(255, 0, 0)))
    assert pixel(surface, (50, 50)) == (255, 0, 0)
    assert pixel(surface, (10, 10)) == (0, 0, 0)


def test_draw_image_rect():
    renderer = Renderer(window_size=(100, 100), pixels_per_meter=10.0)
    surface = pygame.Surface((100, 100))
    pixels = np.zeros((10, 20, 4), dtype=np.uint8)
    pixels[..., 1] = 255
    pixels[..., 3] = 255
    renderer.draw_rect(surface, Rect(Point(5.0, 5.0), 2.0, 1.0, ImageSource(pixels)))
    assert pixel(surface, (50, 50)) == (0, 255, 0)
    assert pixel(surface, (50, 20)) == (0, 0, 0)


def test_draw_scene_paints_map_and_car(logo_source):
    parking = ParallelParking()
    car = parking.car(logo_source)
    renderer = Renderer()
    surface = pygame.Surface(DEFAULT_WINDOW_SIZE)
    renderer.draw_scene(surface, parking.static_rects(), car)

    assert pixel(surface, (2, 2)) == BACKGROUND_COLOR
    body_x, body_y = renderer.camera.world_to_screen(car.body.origin)
    assert pixel(surface, (body_x, body_y)) == CAR_BODY_COLOR
    # Road ahead of the car
    road_x, road_y = renderer.camera.world_to_screen(Point(float(car.body.origin.x), 20.0))
    assert pixel(surface, (road_x, road_y)) == ROAD_COLOR
    renderer.close()


def test_close_without_window_is_safe():
    renderer = Renderer()
    renderer.close()
    assert renderer.window is None


def test_shared_image_source_scales_per_rect():
    renderer = Renderer(window_size=(100, 100), pixels_per_meter=10.0)
    pixels = np.zeros((10, 20, 4), dtype=np.uint8)
    pixels[..., 1] = 255
    pixels[..., 3] = 255
    source = ImageSource(pixels)

    small = pygame.Surface((100, 100))
    renderer.draw_rect(small, Rect(Point(5.0, 5.0), 2.0, 1.0, source))
    assert pixel(small, (32, 50)) == (0, 0, 0)

    large = pygame.Surface((100, 100))
    renderer.draw_rect(large, Rect(Point(5.0, 5.0), 4.0, 2.0, source))
    # 40x20 pixels centered on (50, 50)
    assert pixel(large, (32, 50)) == (0, 255, 0)
    assert pixel(large, (50, 58)) == (0, 255, 0)
    assert pixel(large, (50, 62)) == (0, 0, 0)
