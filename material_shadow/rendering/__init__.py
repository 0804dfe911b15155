"""
Shadow rendering pipeline.

Main exports:
- ShadowMaskGenerator: Renders a ShadowSpec into a blurred RGBA buffer
- FastGaussianBlur: Region-aware separable Gaussian blur
- ElevationCurve: Elevation level -> (opacity, radius, offset)
- CachedShadowRenderer: Caller-side render cache
"""

from .elevation import (
    DEFAULT_ELEVATION_CURVE,
    ElevationCurve,
    KeyFrameCurve,
    ShadowParameters,
)
from .blur import DEFAULT_BLUR, FastGaussianBlur, blur, gaussian_kernel
from .shadow import (
    DEFAULT_GENERATOR,
    ShadowMaskGenerator,
    ShadowSpec,
    ShadowType,
    render,
    render_circular_shadow,
    render_round_shadow,
    render_shadow,
)
from .cache import CachedShadowRenderer

__all__ = [
    # Elevation
    "ElevationCurve",
    "KeyFrameCurve",
    "ShadowParameters",
    "DEFAULT_ELEVATION_CURVE",

    # Blur
    "FastGaussianBlur",
    "blur",
    "gaussian_kernel",
    "DEFAULT_BLUR",

    # Shadows
    "ShadowMaskGenerator",
    "ShadowSpec",
    "ShadowType",
    "render",
    "render_shadow",
    "render_circular_shadow",
    "render_round_shadow",
    "DEFAULT_GENERATOR",

    # Caching
    "CachedShadowRenderer",
]
