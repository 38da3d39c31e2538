"""
test_raster.py
--------------
Unit tests for raster.py
"""

import numpy as np
import pytest

from squircle.geometry import Rect
from squircle.mpl_path_utils import path_area
from squircle.path_builder import squircle_path
from squircle.raster import clip_image, squircle_mask


@pytest.fixture
def mask():
    return squircle_mask(200, 100, 20, 0.6)


@pytest.fixture
def gray_image():
    """Small uniform mid-gray BGR image matching the mask size."""
    return np.full((100, 200, 3), 128, dtype=np.uint8)


def test_mask_shape_and_dtype(mask):
    assert mask.shape == (100, 200)
    assert mask.dtype == np.uint8


def test_mask_inside_and_corners(mask):
    assert mask[50, 100] == 255
    assert mask[0, 100] > 0          # straight top edge
    for y, x in [(0, 0), (0, 199), (99, 0), (99, 199), (2, 2)]:
        assert mask[y, x] == 0


def test_mask_coverage_matches_area(mask):
    expected = path_area(squircle_path(Rect(0, 0, 200, 100), 20, 0.6))
    coverage = mask.astype(float).sum() / 255.0
    assert coverage == pytest.approx(expected, rel=0.01)


def test_mask_symmetry(mask):
    binary = mask > 127
    # rasterization may round a few edge pixels differently
    assert np.count_nonzero(binary != binary[:, ::-1]) <= 8
    assert np.count_nonzero(binary != binary[::-1, :]) <= 8


@pytest.mark.parametrize("width,height", [(0, 50), (50, 0), (-3, 10)])
def test_mask_degenerate(width, height):
    m = squircle_mask(width, height)
    assert m.shape == (max(0, height), max(0, width))
    assert not m.any()


def test_mask_without_antialias_is_binary():
    m = squircle_mask(64, 64, 16, 0.6, antialias=False)
    assert set(np.unique(m)) <= {0, 255}


def test_clip_bgr_image(gray_image, mask):
    out = clip_image(gray_image, mask)
    assert out.shape == (100, 200, 4)
    assert np.array_equal(out[..., 3], mask)
    assert np.array_equal(out[..., :3], gray_image)


def test_clip_bgra_multiplies_alpha(mask):
    img = np.full((100, 200, 4), 255, dtype=np.uint8)
    img[:, :100, 3] = 0
    out = clip_image(img, mask)
    assert out[50, 50, 3] == 0
    assert out[50, 150, 3] == 255
    assert img[50, 150, 3] == 255  # input untouched


def test_clip_size_mismatch(gray_image):
    with pytest.raises(ValueError):
        clip_image(gray_image, np.zeros((10, 10), dtype=np.uint8))


def test_clip_rejects_gray(mask):
    with pytest.raises(ValueError):
        clip_image(np.zeros((100, 200), dtype=np.uint8), mask)


def test_clip_rejects_non_arrays(mask):
    with pytest.raises(TypeError):
        clip_image([[0]], mask)
