"""
Exception types raised by the shadow renderers.
"""


class ShadowError(Exception):
    """Base class for all shadow rendering errors."""


class InvalidShadowArgument(ShadowError, ValueError):
    """
    A caller passed a value the renderer cannot work with.

    Raised for elevation levels outside [0, 5], negative blur radii,
    negative sizes and pixel buffers with the wrong layout. These are
    programming errors, so they are never retried.
    """


class ShadowAllocationError(ShadowError, MemoryError):
    """A pixel buffer of the requested size could not be allocated."""
