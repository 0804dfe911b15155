"""
Pixel buffer utilities for shadow rendering.

A pixel buffer is a numpy array of shape (H, W, 4), dtype uint8, holding
straight (not premultiplied) RGBA. These helpers allocate, validate and
convert buffers so the renderers never deal with raw shapes themselves.
"""

import logging

import numpy as np
from PIL import Image

from .errors import InvalidShadowArgument, ShadowAllocationError

logger = logging.getLogger(__name__)

CHANNELS = 4


def allocate_buffer(width: int, height: int) -> np.ndarray:
    """
    Allocate a fully transparent pixel buffer.

    Args:
        width: Buffer width in pixels (may be 0)
        height: Buffer height in pixels (may be 0)

    Returns:
        Zero-filled array of shape (height, width, 4)

    Raises:
        InvalidShadowArgument: if either side is negative
        ShadowAllocationError: if the memory cannot be allocated
    """
    if width < 0 or height < 0:
        raise InvalidShadowArgument(f"Buffer size must be non-negative, got {width}x{height}")

    try:
        return np.zeros((int(height), int(width), CHANNELS), dtype=np.uint8)
    except (MemoryError, ValueError) as e:
        logger.error("Could not allocate %dx%d pixel buffer: %s", width, height, e)
        raise ShadowAllocationError(f"Cannot allocate a {width}x{height} pixel buffer") from e


def validate_buffer(image: np.ndarray, name: str = "image") -> None:
    """Check that an array is an (H, W, 4) uint8 pixel buffer."""
    if not isinstance(image, np.ndarray):
        raise InvalidShadowArgument(f"{name} must be a numpy array, got {type(image).__name__}")
    if image.ndim != 3 or image.shape[2] != CHANNELS:
        raise InvalidShadowArgument(f"{name} must have shape (H, W, 4), got {image.shape}")
    if image.dtype != np.uint8:
        raise InvalidShadowArgument(f"{name} must be uint8, got {image.dtype}")


def buffer_to_image(buffer: np.ndarray) -> Image.Image:
    """
    Wrap a pixel buffer as an RGBA PIL image.

    The image gets its own copy of the pixels, so drawing on it does not
    touch the buffer.
    """
    validate_buffer(buffer, "buffer")
    return Image.fromarray(np.ascontiguousarray(buffer).copy())


def buffer_from_image(image: Image.Image) -> np.ndarray:
    """Convert a PIL image (any mode) into a new RGBA pixel buffer."""
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return np.array(image, dtype=np.uint8)


def alpha_channel(buffer: np.ndarray) -> np.ndarray:
    """Return a copy of the alpha channel as an (H, W) uint8 array."""
    validate_buffer(buffer, "buffer")
    return buffer[..., 3].copy()
