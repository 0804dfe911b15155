"""
Material shadow renderer.

Shadows are a sign of elevation and help tell elements apart inside a
Material-based GUI. The pipeline for one shadow is:

    ShadowSpec -> ElevationCurve -> filled mask -> FastGaussianBlur -> buffer

The caller composites the returned RGBA buffer beneath its component.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

import numpy as np
from PIL import ImageDraw

from ..utils.errors import InvalidShadowArgument
from ..utils.image_processor import allocate_buffer, buffer_from_image, buffer_to_image
from ..utils.shadow_config import ShadowConfig
from .blur import DEFAULT_BLUR, FastGaussianBlur
from .elevation import DEFAULT_ELEVATION_CURVE, ElevationCurve, ShadowParameters

logger = logging.getLogger(__name__)


class ShadowType(Enum):
    """The types of shadow available for rendering."""

    # Classic shadow for panels, windows and paper components in general
    SQUARE = "square"
    # Perfect circle centered in the canvas, whatever its aspect ratio
    CIRCULAR = "circular"
    # Ellipse filling the shadow area, mainly for FABs
    ROUND = "round"


@dataclass(frozen=True)
class ShadowSpec:
    """
    Geometry and elevation of one shadow.

    Frozen and hashable, so it can key a render cache.

    Attributes:
        width: Width of the shadow canvas in pixels
        height: Height of the shadow canvas in pixels
        corner_radius: Corner radius of a SQUARE component
        elevation_level: Depth of the shadow in [0, 5]
        shape: Shape of the component casting the shadow
    """

    width: int
    height: int
    corner_radius: int = 0
    elevation_level: float = ShadowConfig.ELEVATION_DEFAULT
    shape: ShadowType = ShadowType.SQUARE

    def __post_init__(self):
        if not isinstance(self.shape, ShadowType):
            try:
                object.__setattr__(self, "shape", ShadowType(str(self.shape).lower()))
            except ValueError as e:
                raise InvalidShadowArgument(f"Unknown shadow type: {self.shape!r}") from e

        if self.width < 0 or self.height < 0:
            raise InvalidShadowArgument(
                f"Shadow size must be non-negative, got {self.width}x{self.height}"
            )
        if self.corner_radius < 0:
            raise InvalidShadowArgument(f"Corner radius must be non-negative, got {self.corner_radius}")
        if not ShadowConfig.is_valid_elevation(self.elevation_level):
            raise InvalidShadowArgument(
                f"Shadow level must be between {ShadowConfig.ELEVATION_NONE} and "
                f"{ShadowConfig.ELEVATION_TOP} (inclusive), got {self.elevation_level}"
            )

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to draw."""
        return (self.width == 0 or self.height == 0
                or self.elevation_level == ShadowConfig.ELEVATION_NONE)


def _pixel(value: float) -> int:
    """Round a coordinate half-up to a pixel index."""
    return int(math.floor(value + 0.5))


class ShadowMaskGenerator:
    """
    Renders Material shadows into RGBA pixel buffers.

    Holds no per-render state: every call allocates its own buffers and
    hands the result to the caller, so one generator can serve any number
    of components and threads. Wrap it in a CachedShadowRenderer to reuse
    renders while a component is idle.
    """

    def __init__(self,
                 curve: Optional[ElevationCurve] = None,
                 blur_engine: Optional[FastGaussianBlur] = None):
        """
        Args:
            curve: Elevation curve (default: DEFAULT_ELEVATION_CURVE)
            blur_engine: Blur engine (default: DEFAULT_BLUR)
        """
        self.curve = curve or DEFAULT_ELEVATION_CURVE
        self.blur_engine = blur_engine or DEFAULT_BLUR

    def render(self, spec: ShadowSpec) -> np.ndarray:
        """
        Render the blurred shadow for a spec.

        Returns:
            (height, width, 4) uint8 RGBA buffer, fully transparent when the
            spec is empty (zero size or elevation 0)
        """
        if spec.is_empty:
            return allocate_buffer(spec.width, spec.height)

        parameters = self.curve.evaluate(spec.elevation_level)
        mask = self.build_mask(spec, parameters)

        # Circles and ellipses are small and not rectangular, tiling would cut them
        force_whole = spec.shape is not ShadowType.SQUARE
        radius = int(parameters.radius)

        logger.debug(
            "Rendering %s shadow %dx%d level=%.2f opacity=%.3f radius=%d offset=%.2f",
            spec.shape.value, spec.width, spec.height, spec.elevation_level,
            parameters.opacity, radius, parameters.offset,
        )
        return self.blur_engine.blur(mask, radius, force_whole=force_whole)

    def build_mask(self, spec: ShadowSpec, parameters: Optional[ShadowParameters] = None) -> np.ndarray:
        """
        Draw the unblurred shadow silhouette.

        Args:
            spec: Shadow geometry
            parameters: Precomputed curve values (evaluated from spec if None)

        Returns:
            (height, width, 4) uint8 buffer with the shape filled in black
            at the curve's opacity
        """
        if parameters is None:
            parameters = self.curve.evaluate(spec.elevation_level)

        mask = allocate_buffer(spec.width, spec.height)
        box = self.shape_box(spec, parameters.offset)
        if mask.size == 0 or box is None:
            return mask

        alpha = _pixel(parameters.opacity * 255)
        color = (0, 0, 0, alpha)

        image = buffer_to_image(mask)
        draw = ImageDraw.Draw(image)
        if spec.shape is ShadowType.SQUARE:
            x0, y0, x1, y1 = box
            # Arc diameter is corner_radius * 2
            radius = min(spec.corner_radius, (x1 - x0 + 1) // 2, (y1 - y0 + 1) // 2)
            draw.rounded_rectangle(box, radius=radius, fill=color)
        else:
            draw.ellipse(box, fill=color)

        return buffer_from_image(image)

    def shape_box(self, spec: ShadowSpec, offset: float = 0.0) -> Optional[List[int]]:
        """
        Pixel bounding box [x0, y0, x1, y1] (inclusive) of the filled shape.

        SQUARE and ROUND fill the rectangle inset by (OFFSET_LEFT + offset,
        OFFSET_TOP + offset) at the top-left and (OFFSET_RIGHT, OFFSET_BOTTOM)
        at the bottom-right. CIRCULAR fills the largest circle that fits the
        offset-free inset area, centered in the canvas.

        Returns:
            The box, or None if the shape area is empty
        """
        top, left, bottom, right = ShadowConfig.insets()

        if spec.shape is ShadowType.CIRCULAR:
            d = min(spec.width - left - right, spec.height - top - bottom)
            if d <= 0:
                return None
            x0 = _pixel((spec.width - d) / 2)
            y0 = _pixel((spec.height - d) / 2)
            return [x0, y0, x0 + d - 1, y0 + d - 1]

        x0 = _pixel(left + offset)
        y0 = _pixel(top + offset)
        x1 = spec.width - right - 1
        y1 = spec.height - bottom - 1

        if x1 < x0 or y1 < y0:
            return None
        return [x0, y0, x1, y1]


DEFAULT_GENERATOR = ShadowMaskGenerator()


def render(width: int,
           height: int,
           corner_radius: int,
           level: float,
           shape: Union[ShadowType, str] = ShadowType.SQUARE) -> np.ndarray:
    """Render a shadow of any type with the shared default generator."""
    return DEFAULT_GENERATOR.render(ShadowSpec(width, height, corner_radius, level, shape))


def render_shadow(width: int, height: int, level: float, border_radius: int = 5) -> np.ndarray:
    """Shadow projected by a square component with rounded borders."""
    return render(width, height, border_radius, level, ShadowType.SQUARE)


def render_circular_shadow(width: int, height: int, level: float) -> np.ndarray:
    """Shadow projected by a circular component centered in the canvas."""
    return render(width, height, 0, level, ShadowType.CIRCULAR)


def render_round_shadow(width: int, height: int, level: float) -> np.ndarray:
    """Shadow projected by an elliptical component filling the canvas."""
    return render(width, height, 0, level, ShadowType.ROUND)
