"""
Elevation curves for Material shadows.

An elevation level in [0, 5] is normalized to t = level / 5 and mapped to
three shadow parameters by independent keyframe curves:

    opacity(t), radius(t), offset(t)

Each curve starts at t=0 and has control points at t=1/5 and t=2/5. Past
the last control point the curve holds its final value, so every level
above 2 renders like level 2.
"""

from typing import Callable, Dict, NamedTuple, Sequence, Tuple, Union

import numpy as np

from ..utils.errors import InvalidShadowArgument
from ..utils.shadow_config import ShadowConfig


def linear(u: float) -> float:
    return u


def ease(u: float) -> float:
    """Smoothstep easing: zero slope at both ends of a segment."""
    return u * u * (3.0 - 2.0 * u)


INTERPOLATORS: Dict[str, Callable[[float], float]] = {
    "linear": linear,
    "ease": ease,
}


class ShadowParameters(NamedTuple):
    """Shadow parameters for one elevation level."""
    opacity: float
    radius: float
    offset: float


class KeyFrameCurve:
    """
    A single piecewise-interpolated curve over t in [0, 1].

    Frames are (time, value) pairs with strictly increasing times, the
    first one at t=0. Between two frames the value is interpolated with
    the configured interpolator; after the last frame it is held.
    """

    def __init__(self,
                 frames: Sequence[Tuple[float, float]],
                 interpolator: Union[str, Callable[[float], float]] = "linear"):
        """
        Args:
            frames: (time, value) pairs, first time 0, times increasing
            interpolator: "linear", "ease" or a callable mapping [0,1] -> [0,1]
        """
        if not frames:
            raise InvalidShadowArgument("A keyframe curve needs at least one frame")

        times = np.array([t for t, _ in frames], dtype=np.float64)
        values = np.array([v for _, v in frames], dtype=np.float64)

        if times[0] != 0.0:
            raise InvalidShadowArgument(f"First keyframe must be at t=0, got {times[0]}")
        if np.any(np.diff(times) <= 0) or times[-1] > 1.0:
            raise InvalidShadowArgument(f"Keyframe times must increase within [0, 1], got {times.tolist()}")

        if isinstance(interpolator, str):
            if interpolator not in INTERPOLATORS:
                raise InvalidShadowArgument(
                    f"Unknown interpolator '{interpolator}', expected one of {sorted(INTERPOLATORS)}"
                )
            interpolator = INTERPOLATORS[interpolator]

        self._times = times
        self._values = values
        self._interpolator = interpolator

    @property
    def frames(self) -> Tuple[Tuple[float, float], ...]:
        return tuple(zip(self._times.tolist(), self._values.tolist()))

    def value_at(self, t: float) -> float:
        """
        Evaluate the curve at a normalized time.

        Raises:
            InvalidShadowArgument: if t is outside [0, 1]
        """
        if not 0.0 <= t <= 1.0:
            raise InvalidShadowArgument(f"Curve time must be in [0, 1], got {t}")

        if t >= self._times[-1]:
            return float(self._values[-1])

        # Index of the first frame strictly after t
        i = int(np.searchsorted(self._times, t, side="right"))
        t0, t1 = self._times[i - 1], self._times[i]
        v0, v1 = self._values[i - 1], self._values[i]

        u = self._interpolator((t - t0) / (t1 - t0))
        return float(v0 + (v1 - v0) * u)


class ElevationCurve:
    """
    Maps an elevation level to (opacity, radius, offset).

    Instances are immutable and hold no per-call state, so one curve can
    be shared by every renderer and thread.
    """

    # (t, value) frames at t = 0, 1/5, 2/5
    OPACITY_FRAMES = ((0.0, 0.0), (1 / 5, 0.2), (2 / 5, 0.4))
    RADIUS_FRAMES = ((0.0, 0.0), (1 / 5, 6.0), (2 / 5, 18.0))
    OFFSET_FRAMES = ((0.0, 0.0), (1 / 5, 1.0), (2 / 5, 3.0))

    # Darker preset, see classic()
    CLASSIC_OPACITY_FRAMES = ((0.0, 0.0), (1 / 5, 0.34), (2 / 5, 0.37))

    def __init__(self,
                 opacity_frames: Sequence[Tuple[float, float]] = OPACITY_FRAMES,
                 radius_frames: Sequence[Tuple[float, float]] = RADIUS_FRAMES,
                 offset_frames: Sequence[Tuple[float, float]] = OFFSET_FRAMES,
                 interpolator: Union[str, Callable[[float], float]] = "linear"):
        self.opacity = KeyFrameCurve(opacity_frames, interpolator)
        self.radius = KeyFrameCurve(radius_frames, interpolator)
        self.offset = KeyFrameCurve(offset_frames, interpolator)

    @classmethod
    def classic(cls, interpolator: Union[str, Callable[[float], float]] = "linear") -> "ElevationCurve":
        """Curve with the darker CLASSIC_OPACITY_FRAMES."""
        return cls(opacity_frames=cls.CLASSIC_OPACITY_FRAMES, interpolator=interpolator)

    def evaluate(self, level: float) -> ShadowParameters:
        """
        Evaluate all three curves for an elevation level.

        Args:
            level: Elevation in [ELEVATION_NONE, ELEVATION_TOP]

        Returns:
            ShadowParameters with opacity in [0, 1], blur radius and
            vertical/horizontal offset in pixels

        Raises:
            InvalidShadowArgument: if level is out of range
        """
        if not ShadowConfig.is_valid_elevation(level):
            raise InvalidShadowArgument(
                f"Shadow level must be between {ShadowConfig.ELEVATION_NONE} and "
                f"{ShadowConfig.ELEVATION_TOP} (inclusive), got {level}"
            )

        t = level / ShadowConfig.ELEVATION_TOP
        opacity = min(max(self.opacity.value_at(t), 0.0), 1.0)
        return ShadowParameters(
            opacity=opacity,
            radius=self.radius.value_at(t),
            offset=self.offset.value_at(t),
        )


DEFAULT_ELEVATION_CURVE = ElevationCurve()
