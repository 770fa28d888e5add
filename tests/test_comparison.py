import math

import numpy as np
import pytest
from PIL import Image as PILImage

from digpainting.comparison import (
    SobelType,
    open_target_image,
    rgb_to_hsl,
    sobel_filter,
    target_from_image,
)


def _gradient_image(width=12, height=8):
    arr = np.zeros((height, width, 3), dtype=np.uint8)
    arr[..., 0] = np.arange(width, dtype=np.uint8)[None, :] * 20
    arr[..., 1] = np.arange(height, dtype=np.uint8)[:, None] * 30
    arr[..., 2] = 90
    return PILImage.fromarray(arr, "RGB")


def test_rgb_to_hsl_pure_red():
    assert rgb_to_hsl(255, 0, 0) == pytest.approx((0.0, 100.0, 50.0))


def test_rgb_to_hsl_white_has_no_hue_or_saturation():
    assert rgb_to_hsl(255, 255, 255) == pytest.approx((0.0, 0.0, 100.0))


def test_rgb_to_hsl_grey_has_zero_saturation():
    h, s, _ = rgb_to_hsl(90, 90, 90)
    assert h == 0.0
    assert s == 0.0


def test_rgb_to_hsl_ranges():
    for rgb in [(10, 200, 30), (250, 5, 128), (0, 0, 255), (33, 33, 34)]:
        h, s, l = rgb_to_hsl(*rgb)
        assert 0.0 <= h < 360.0
        assert 0.0 <= s <= 100.0
        assert 0.0 <= l <= 100.0


def test_sobel_vertical_is_zero_on_uniform_image():
    grey = np.full((5, 7), 200, dtype=np.uint8)
    out = sobel_filter(grey, SobelType.VERTICAL)
    assert out.shape == (5, 7)
    assert out.dtype == np.int16
    assert np.all(out == 0)


def test_sobel_horizontal_is_constant_on_uniform_image():
    grey = np.full((4, 6), 77, dtype=np.uint8)
    out = sobel_filter(grey, SobelType.HORIZONTAL)
    assert out.shape == (4, 6)
    assert out.tolist() == [[-154] * 6 for _ in range(4)]


def test_sobel_vertical_ignores_horizontal_variation():
    grey = np.tile(np.arange(0, 100, 10, dtype=np.uint8), (6, 1))
    out = sobel_filter(grey, SobelType.VERTICAL)
    assert out.shape == (6, 10)
    assert out.tolist() == [[0] * 10 for _ in range(6)]


def test_sobel_rejects_colour_image():
    with pytest.raises(ValueError):
        sobel_filter(np.zeros((3, 3, 3), dtype=np.uint8), SobelType.VERTICAL)


def test_target_shapes_and_ranges():
    target = target_from_image(_gradient_image())
    assert target.dimensions == (12, 8)
    assert target.image.shape == (8, 12, 4)
    assert target.magnitudes.shape == (96,)
    assert target.angles.shape == (96,)
    assert target.hsls.shape == (96, 3)
    assert np.all(target.magnitudes >= 0)
    limit = math.pi * math.pi / 2 + 1e-5
    assert np.all(np.abs(target.angles) <= limit)


def test_target_hsls_match_scalar_conversion():
    target = target_from_image(_gradient_image())
    width = target.dimensions[0]
    x, y = 5, 3
    r, g, b, _ = target.image[y, x]
    assert tuple(target.hsls[y * width + x]) == pytest.approx(
        rgb_to_hsl(int(r), int(g), int(b))
    )


def test_compare_identical_buffer_is_zero():
    target = target_from_image(_gradient_image())
    assert target.compare(target.image.tobytes()) == pytest.approx(0.0)


def test_compare_different_buffer_is_positive():
    target = target_from_image(_gradient_image())
    other = np.full_like(target.image, 255)
    assert target.compare(other.tobytes()) > 0.0


def test_compare_accepts_array_and_bytes_equally():
    target = target_from_image(_gradient_image())
    other = (target.image // 2).astype(np.uint8)
    assert target.compare(other) == pytest.approx(target.compare(other.tobytes()))


def test_compare_short_buffer_raises():
    target = target_from_image(_gradient_image())
    with pytest.raises(ValueError):
        target.compare(b"\x00" * 10)


def test_open_target_image_matches_loaded_image(tmp_path):
    img = _gradient_image()
    path = tmp_path / "target.png"
    img.save(path)
    opened = open_target_image(path)
    direct = target_from_image(img)
    assert opened.dimensions == direct.dimensions
    assert np.array_equal(opened.image, direct.image)
    assert np.allclose(opened.magnitudes, direct.magnitudes)


def test_open_target_image_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        open_target_image(tmp_path / "absent.png")