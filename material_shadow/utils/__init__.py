"""
Utility functions for Material shadow rendering.
"""

from .shadow_config import ShadowConfig
from .errors import InvalidShadowArgument, ShadowAllocationError, ShadowError
from .image_processor import (
    allocate_buffer,
    alpha_channel,
    buffer_from_image,
    buffer_to_image,
    validate_buffer,
)
from .debugging import BufferDebugger, PerformanceProfiler

__all__ = [
    "ShadowConfig",
    "ShadowError",
    "InvalidShadowArgument",
    "ShadowAllocationError",
    "allocate_buffer",
    "alpha_channel",
    "buffer_from_image",
    "buffer_to_image",
    "validate_buffer",
    "BufferDebugger",
    "PerformanceProfiler",
]
