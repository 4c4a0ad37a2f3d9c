import pygame
import pytest

from parking_sim.assets import load_logo
from parking_sim.exceptions import AssetLoadError
from parking_sim.constants import DEFAULT_LOGO_PATH


def test_missing_file_raises_asset_error(tmp_path):
    with pytest.raises(AssetLoadError):
        load_logo(str(tmp_path / "missing.svg"), 1.0)


def test_asset_error_is_os_error(tmp_path):
    with pytest.raises(OSError):
        load_logo(str(tmp_path / "missing.svg"), 1.0)


def test_unreadable_file_raises_asset_error(tmp_path):
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"definitely not an image")
    with pytest.raises(AssetLoadError):
        load_logo(str(broken), 1.0)


def test_bundled_logo_rasterizes_to_requested_width():
    try:
        logo = load_logo(DEFAULT_LOGO_PATH, 1.0, scale=30.0)
    except AssetLoadError as e:
        pytest.skip(f"SDL_image build cannot rasterize SVG: {e}")
    assert logo.pixel_width == 30
    # The bundled SVG is 200x120
    assert logo.pixel_height == 18
    assert logo.pixels.shape == (18, 30, 4)
    assert logo.pixels[..., 3].max() > 0


def test_bitmap_logo_rasterizes_to_requested_width(tmp_path):
    path = tmp_path / "logo.bmp"
    image = pygame.Surface((40, 20))
    image.fill((200, 10, 10))
    pygame.image.save(image, str(path))

    logo = load_logo(str(path), 1.0, scale=30.0)
    assert logo.pixels.shape == (15, 30, 4)
    assert logo.aspect_ratio() == pytest.approx(0.5)
    assert tuple(logo.pixels[7, 15]) == (200, 10, 10, 255)
