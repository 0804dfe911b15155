"""
Caller-side cache for rendered shadows.

A component that is not resizing or changing elevation asks for the same
shadow on every repaint. Keeping the latest render avoids blurring again
while the component is idle.
"""

import logging
import threading
from collections import OrderedDict
from typing import Optional

import numpy as np

from ..utils.errors import InvalidShadowArgument
from .shadow import ShadowMaskGenerator, ShadowSpec

logger = logging.getLogger(__name__)


class CachedShadowRenderer:
    """
    LRU cache of renders keyed by ShadowSpec.

    Every call returns a fresh copy, so callers may draw on their buffer
    without corrupting the cached one.
    """

    def __init__(self, generator: Optional[ShadowMaskGenerator] = None, max_entries: int = 1):
        """
        Args:
            generator: Renderer used on cache misses
            max_entries: Number of renders kept (1 keeps only the latest)
        """
        if max_entries < 1:
            raise InvalidShadowArgument(f"max_entries must be at least 1, got {max_entries}")

        self.generator = generator or ShadowMaskGenerator()
        self.max_entries = max_entries
        self._cache: "OrderedDict[ShadowSpec, np.ndarray]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def render(self, spec: ShadowSpec) -> np.ndarray:
        """Return the shadow for spec, rendering it only on a miss."""
        with self._lock:
            cached = self._cache.get(spec)
            if cached is not None:
                self._cache.move_to_end(spec)
                self.hits += 1
                logger.debug("Shadow cache hit for %s", spec)
                return cached.copy()
            self.misses += 1

        logger.debug("Shadow cache miss for %s", spec)
        shadow = self.generator.render(spec)

        with self._lock:
            self._cache[spec] = shadow
            self._cache.move_to_end(spec)
            while len(self._cache) > self.max_entries:
                self._cache.popitem(last=False)

        return shadow.copy()

    def clear(self):
        """Drop every cached render."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, spec: ShadowSpec) -> bool:
        with self._lock:
            return spec in self._cache
