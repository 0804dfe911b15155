"""
Fast Gaussian blur for shadow masks.

Separable convolution (one horizontal pass, one vertical pass) with edges
handled by reflection, so pixels near the border are never darkened or
lightened by a constant fill.

Most of a large square shadow ends up hidden behind the component that
casts it. For images at least SMALL_SHADOW_THRESHOLD pixels on each side
only the four visible edge strips are blurred:

    +---------------------------+
    |            top            |  2 * OFFSET_TOP rows
    +------+-----------+--------+
    | left |  interior | right  |  2 * OFFSET_LEFT / 2 * OFFSET_RIGHT cols
    |      | (skipped) |        |
    +------+-----------+--------+
    |          bottom           |  2 * OFFSET_BOTTOM rows
    +---------------------------+

The interior of the result stays transparent.
"""

import logging
import math
from typing import Optional, Tuple

import cv2
import numpy as np

from ..utils.errors import InvalidShadowArgument
from ..utils.image_processor import allocate_buffer, validate_buffer
from ..utils.shadow_config import ShadowConfig

logger = logging.getLogger(__name__)

BORDER_MODE = cv2.BORDER_REFLECT


def _quantize(values: np.ndarray) -> np.ndarray:
    """Round to the nearest 8-bit level."""
    return np.clip(np.rint(values), 0, 255)


def gaussian_kernel(radius: float, horizontal: bool = True) -> np.ndarray:
    """
    Build a normalized 1D Gaussian kernel.

    The blur radius is widened by one pixel before use:
    half-width = ceil(radius + 1), sigma = (radius + 1) / 3. A radius of 0
    gives the identity kernel [1.0].

    Args:
        radius: Blur radius in pixels (>= 0)
        horizontal: Shape (1, n) if True, (n, 1) otherwise

    Returns:
        float32 kernel of odd length whose weights sum to 1
    """
    if not radius >= 0:
        raise InvalidShadowArgument(f"Blur radius must be non-negative, got {radius}")

    if radius == 0:
        data = np.ones(1, dtype=np.float64)
    else:
        radius = radius + 1.0
        radius_int = int(math.ceil(radius))
        sigma = radius / 3.0
        two_sigma_square = 2.0 * sigma * sigma
        sigma_root = math.sqrt(two_sigma_square * math.pi)

        distance = np.arange(-radius_int, radius_int + 1, dtype=np.float64) ** 2
        data = np.exp(-distance / two_sigma_square) / sigma_root
        data /= data.sum()

    data = data.astype(np.float32)
    return data.reshape(1, -1) if horizontal else data.reshape(-1, 1)


class FastGaussianBlur:
    """
    Region-aware separable Gaussian blur.

    Geometry is read from ShadowConfig on every call unless explicit insets
    or threshold are given, which tune one engine without touching the
    shared constants.
    """

    def __init__(self,
                 insets: Optional[Tuple[int, int, int, int]] = None,
                 small_shadow_threshold: Optional[int] = None):
        """
        Args:
            insets: (top, left, bottom, right) shadow offsets
            small_shadow_threshold: Minimum side length for the tiled path
        """
        self._insets = tuple(insets) if insets is not None else None
        self._small_shadow_threshold = small_shadow_threshold

    @property
    def insets(self) -> Tuple[int, int, int, int]:
        return self._insets if self._insets is not None else ShadowConfig.insets()

    @property
    def small_shadow_threshold(self) -> int:
        if self._small_shadow_threshold is None:
            return ShadowConfig.SMALL_SHADOW_THRESHOLD
        return self._small_shadow_threshold

    def blur(self, image: np.ndarray, radius: float, force_whole: bool = False) -> np.ndarray:
        """
        Blur a pixel buffer.

        Args:
            image: (H, W, 4) uint8 buffer, left untouched
            radius: Blur radius in pixels (>= 0)
            force_whole: Always blur the whole image, even when large

        Returns:
            New (H, W, 4) uint8 buffer
        """
        validate_buffer(image)
        horizontal = gaussian_kernel(radius, horizontal=True)
        vertical = gaussian_kernel(radius, horizontal=False)

        height, width = image.shape[:2]
        if image.size == 0:
            return image.copy()

        if force_whole or not self._can_tile(width, height):
            logger.debug("Whole-image blur %dx%d, kernel %d", width, height, horizontal.size)
            return self._convolve(image, horizontal, vertical)

        logger.debug("Tiled blur %dx%d, kernel %d", width, height, horizontal.size)
        return self._blur_strips(image, horizontal, vertical)

    def strip_regions(self, width: int, height: int) -> dict:
        """
        Return the four strips blurred on the tiled path.

        Each value is (y0, y1, x0, x1) in pixel coordinates, end exclusive.
        """
        top, left, bottom, right = self.insets
        top_h = 2 * top
        bottom_h = 2 * bottom
        return {
            "top": (0, top_h, 0, width),
            "bottom": (height - bottom_h, height, 0, width),
            "left": (top_h, height - bottom_h, 0, 2 * left),
            "right": (top_h, height - bottom_h, width - 2 * right, width),
        }

    def interior_region(self, width: int, height: int) -> Tuple[int, int, int, int]:
        """The (y0, y1, x0, x1) area the tiled path leaves transparent."""
        top, left, bottom, right = self.insets
        return (2 * top, height - 2 * bottom, 2 * left, width - 2 * right)

    def _can_tile(self, width: int, height: int) -> bool:
        if min(width, height) < self.small_shadow_threshold:
            return False
        # Strips must not overlap
        y0, y1, x0, x1 = self.interior_region(width, height)
        return y1 > y0 and x1 > x0

    def _convolve(self, region: np.ndarray, horizontal: np.ndarray, vertical: np.ndarray) -> np.ndarray:
        """Horizontal pass then vertical pass, each rounded back to 8-bit levels."""
        work = np.ascontiguousarray(region, dtype=np.float32)
        work = _quantize(cv2.filter2D(work, -1, horizontal, borderType=BORDER_MODE))
        work = _quantize(cv2.filter2D(work, -1, vertical, borderType=BORDER_MODE))
        return work.astype(np.uint8)

    def _blur_strips(self, image: np.ndarray, horizontal: np.ndarray, vertical: np.ndarray) -> np.ndarray:
        height, width = image.shape[:2]
        result = allocate_buffer(width, height)

        for y0, y1, x0, x1 in self.strip_regions(width, height).values():
            result[y0:y1, x0:x1] = self._convolve(image[y0:y1, x0:x1], horizontal, vertical)

        return result


DEFAULT_BLUR = FastGaussianBlur()


def blur(image: np.ndarray, radius: float, force_whole: bool = False) -> np.ndarray:
    """Blur with the shared default engine. See FastGaussianBlur.blur."""
    return DEFAULT_BLUR.blur(image, radius, force_whole)
