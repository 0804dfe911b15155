"""
Tests for the fast Gaussian blur.

Covers:
1. Kernel construction (length, normalization, symmetry)
2. Identity at radius 0
3. Edge reflection (no darkening at borders)
4. Whole-image vs tiled path selection
5. Tiled path: strips blurred, interior left transparent
6. Input validation
"""

import math

import numpy as np
import pytest

from material_shadow.rendering.blur import FastGaussianBlur, blur, gaussian_kernel
from material_shadow.utils import InvalidShadowArgument, ShadowConfig


def make_image(width, height, seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)


def filled_rect(width, height, x0, y0, x1, y1, alpha=102):
    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[y0:y1, x0:x1, 3] = alpha
    return image


@pytest.mark.parametrize("radius", [0, 0.5, 1, 3, 6, 12.5, 18, 40])
def test_kernel_sums_to_one(radius):
    kernel = gaussian_kernel(radius)

    assert kernel.dtype == np.float32
    assert float(kernel.sum()) == pytest.approx(1.0, abs=1e-5)


@pytest.mark.parametrize("radius", [0.5, 1, 6, 18])
def test_kernel_length(radius):
    expected = 2 * math.ceil(radius + 1) + 1

    assert gaussian_kernel(radius, horizontal=True).shape == (1, expected)
    assert gaussian_kernel(radius, horizontal=False).shape == (expected, 1)


def test_zero_radius_kernel_is_identity():
    kernel = gaussian_kernel(0)

    assert kernel.shape == (1, 1)
    assert kernel[0, 0] == 1.0


def test_kernel_symmetric_with_center_peak():
    kernel = gaussian_kernel(6).ravel()
    center = kernel.size // 2

    np.testing.assert_allclose(kernel, kernel[::-1])
    assert kernel.argmax() == center
    assert np.all(np.diff(kernel[:center + 1]) > 0)


def test_orientations_share_weights():
    np.testing.assert_array_equal(
        gaussian_kernel(6, horizontal=True).ravel(),
        gaussian_kernel(6, horizontal=False).ravel(),
    )


@pytest.mark.parametrize("radius", [-1, -0.01, float("nan")])
def test_rejects_invalid_radius(radius):
    with pytest.raises(InvalidShadowArgument):
        gaussian_kernel(radius)
    with pytest.raises(InvalidShadowArgument):
        blur(make_image(20, 20), radius)


@pytest.mark.parametrize("size", [(40, 30), (300, 200)])
def test_zero_radius_is_identity(size):
    image = make_image(*size)

    once = blur(image, 0)
    twice = blur(once, 0, force_whole=True)

    np.testing.assert_array_equal(once[:30, :20], image[:30, :20])
    np.testing.assert_array_equal(twice, once)


def test_zero_radius_whole_image_identity():
    image = make_image(300, 200)

    np.testing.assert_array_equal(blur(image, 0, force_whole=True), image)


def test_input_not_modified_and_output_is_new():
    image = make_image(60, 50)
    original = image.copy()

    result = blur(image, 5)

    np.testing.assert_array_equal(image, original)
    assert result is not image
    assert result.shape == image.shape
    assert result.dtype == np.uint8


def test_uniform_image_stays_uniform():
    """Reflected edges never pull transparent black into the border."""
    image = np.full((50, 60, 4), 100, dtype=np.uint8)

    result = blur(image, 8)

    assert np.all(result == 100)


def test_blur_spreads_a_dot():
    image = np.zeros((41, 41, 4), dtype=np.uint8)
    image[20, 20, 3] = 255

    result = blur(image, 4)
    alpha = result[..., 3].astype(int)

    assert alpha[20, 20] < 255
    assert alpha[20, 24] > 0
    assert alpha[20, 21] > alpha[20, 24]
    # Symmetric kernels spread the dot evenly in every direction
    assert np.abs(alpha - alpha[::-1, :]).max() <= 1
    assert np.abs(alpha - alpha[:, ::-1]).max() <= 1
    assert np.abs(alpha - alpha.T).max() <= 1


def test_small_images_use_whole_blur():
    """Below the threshold the automatic path equals the forced whole path."""
    threshold = ShadowConfig.SMALL_SHADOW_THRESHOLD
    image = filled_rect(threshold - 1, 300, 10, 5, 130, 290)

    np.testing.assert_array_equal(blur(image, 6), blur(image, 6, force_whole=True))


def test_large_images_leave_interior_transparent():
    engine = FastGaussianBlur()
    image = filled_rect(300, 300, 13, 8, 293, 293)

    result = engine.blur(image, 18)

    y0, y1, x0, x1 = engine.interior_region(300, 300)
    assert (y0, y1, x0, x1) == (10, 280, 20, 280)
    assert np.all(result[y0:y1, x0:x1] == 0)

    # Whole-image blur keeps the interior filled
    whole = engine.blur(image, 18, force_whole=True)
    assert np.all(whole[y0:y1, x0:x1, 3] > 0)


def test_strips_are_blurred_independently():
    engine = FastGaussianBlur()
    image = make_image(200, 180, seed=3)

    result = engine.blur(image, 6)

    regions = engine.strip_regions(200, 180)
    assert regions["top"] == (0, 10, 0, 200)
    assert regions["bottom"] == (160, 180, 0, 200)
    assert regions["left"] == (10, 160, 0, 20)
    assert regions["right"] == (10, 160, 180, 200)

    for y0, y1, x0, x1 in regions.values():
        expected = engine.blur(np.ascontiguousarray(image[y0:y1, x0:x1]), 6, force_whole=True)
        np.testing.assert_array_equal(result[y0:y1, x0:x1], expected)


def test_custom_engine_geometry():
    engine = FastGaussianBlur(insets=(2, 2, 2, 2), small_shadow_threshold=10)
    image = np.full((20, 20, 4), 200, dtype=np.uint8)

    result = engine.blur(image, 3)

    assert engine.insets == (2, 2, 2, 2)
    assert engine.small_shadow_threshold == 10
    assert np.all(result[4:16, 4:16] == 0)
    assert np.all(result[:4] == 200)
    assert np.all(result[:, :4] == 200)


def test_engine_falls_back_when_strips_would_overlap():
    engine = FastGaussianBlur(insets=(10, 10, 10, 10), small_shadow_threshold=10)
    image = make_image(30, 30)

    np.testing.assert_array_equal(engine.blur(image, 2), engine.blur(image, 2, force_whole=True))


def test_default_engine_follows_shared_config(monkeypatch):
    monkeypatch.setattr(ShadowConfig, "SMALL_SHADOW_THRESHOLD", 1000)
    image = filled_rect(300, 300, 13, 8, 293, 293)

    np.testing.assert_array_equal(blur(image, 6), blur(image, 6, force_whole=True))


def test_thin_strip_larger_than_kernel():
    """Kernels wider than the strip keep reflecting instead of failing."""
    image = filled_rect(200, 4, 0, 2, 200, 4)

    result = blur(image, 18, force_whole=True)

    assert result.shape == image.shape
    assert result[..., 3].max() > 0


def test_empty_image():
    image = np.zeros((0, 10, 4), dtype=np.uint8)

    result = blur(image, 5)

    assert result.shape == (0, 10, 4)
    assert result is not image


@pytest.mark.parametrize("bad", [
    np.zeros((10, 10), dtype=np.uint8),
    np.zeros((10, 10, 3), dtype=np.uint8),
    np.zeros((10, 10, 4), dtype=np.float32),
    [[0, 0, 0, 0]],
])
def test_rejects_bad_buffers(bad):
    with pytest.raises(InvalidShadowArgument):
        blur(bad, 3)
