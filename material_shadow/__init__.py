"""
Material Design drop shadows for UI components.

This package renders soft square, circular and round shadows from an
elevation level, ready to be composited beneath a component.
"""

import logging

__version__ = "0.1.0"

# Main API
from .rendering import (
    CachedShadowRenderer,
    ElevationCurve,
    FastGaussianBlur,
    ShadowMaskGenerator,
    ShadowSpec,
    ShadowType,
    blur,
    render,
    render_circular_shadow,
    render_round_shadow,
    render_shadow,
)
from .utils import (
    InvalidShadowArgument,
    ShadowAllocationError,
    ShadowConfig,
    ShadowError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ShadowMaskGenerator",
    "ShadowSpec",
    "ShadowType",
    "FastGaussianBlur",
    "ElevationCurve",
    "CachedShadowRenderer",
    "blur",
    "render",
    "render_shadow",
    "render_circular_shadow",
    "render_round_shadow",

    # Configuration and errors
    "ShadowConfig",
    "ShadowError",
    "InvalidShadowArgument",
    "ShadowAllocationError",
]
