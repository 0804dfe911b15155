"""
Centralized geometry and elevation constants for shadow rendering.

Use this instead of hard-coding margins or thresholds in the renderers.
"""

from typing import Tuple


class ShadowConfig:
    """
    Single source of truth for shadow geometry.

    The offsets are the margin reserved around the drawn shape so the blur
    can spread without being clipped. They are shared by the mask generator
    (where the shape is drawn) and the blur engine (which strips are
    blurred), so both must read them from here.

    Usage:
        top, left, bottom, right = ShadowConfig.insets()
    """

    # Margin between the shadow border and the component, in pixels
    OFFSET_TOP = 5
    OFFSET_LEFT = 10
    OFFSET_BOTTOM = 10
    OFFSET_RIGHT = 10

    # Below this size (either side) the whole image is blurred instead of
    # the four edge strips
    SMALL_SHADOW_THRESHOLD = 150

    # Elevation levels
    ELEVATION_NONE = 0.0
    ELEVATION_DEFAULT = 1.0
    ELEVATION_HIGHEST = 2.0
    ELEVATION_TOP = 5.0

    @classmethod
    def insets(cls) -> Tuple[int, int, int, int]:
        """Return the (top, left, bottom, right) offsets."""
        return cls.OFFSET_TOP, cls.OFFSET_LEFT, cls.OFFSET_BOTTOM, cls.OFFSET_RIGHT

    @classmethod
    def is_valid_elevation(cls, level: float) -> bool:
        """Check that a level lies in [ELEVATION_NONE, ELEVATION_TOP]."""
        return cls.ELEVATION_NONE <= level <= cls.ELEVATION_TOP
