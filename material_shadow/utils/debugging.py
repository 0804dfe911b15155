"""
Debugging and profiling utilities for shadow rendering.

Provides tools for:
- Buffer shape verification between pipeline stages
- Timing of blur passes and full renders
"""

import time
from collections import defaultdict
from typing import Optional, Tuple

import numpy as np


class BufferDebugger:
    """
    Debug pixel buffer shapes and alpha ranges through the pipeline.

    Helps spot buffers that were cropped or resized by mistake.
    """

    def __init__(self, enabled: bool = True):
        """
        Initialize buffer debugger.

        Args:
            enabled: Whether debugging is active
        """
        self.enabled = enabled
        self.shape_log = []

    def log(self, name: str, buffer: np.ndarray, extra_info: str = ""):
        """
        Log buffer shape and alpha range.

        Args:
            name: Identifier for this buffer
            buffer: Pixel buffer to log
            extra_info: Additional information
        """
        if not self.enabled:
            return

        entry = f"{name:30s} | Shape: {str(tuple(buffer.shape)):16s}"
        if buffer.size and buffer.ndim == 3:
            alpha = buffer[..., -1]
            entry += f" | Alpha: [{int(alpha.min())}, {int(alpha.max())}]"
        if extra_info:
            entry += f" | {extra_info}"

        self.shape_log.append(entry)
        print(entry)

    def verify_shape(self, name: str, buffer: np.ndarray, expected_size: Tuple[int, int]):
        """
        Verify a buffer has the expected (width, height).

        Raises:
            AssertionError if the size doesn't match
        """
        if not self.enabled:
            return

        width, height = expected_size
        expected_shape = (height, width, 4)
        if tuple(buffer.shape) != expected_shape:
            raise AssertionError(
                f"Shape mismatch for {name}:\n"
                f"  Expected: {expected_shape}\n"
                f"  Got:      {tuple(buffer.shape)}"
            )

        self.log(name, buffer, "✓ Shape verified")

    def print_summary(self):
        """Print summary of all logged buffers."""
        print("\n" + "="*70)
        print("Buffer Debug Summary")
        print("="*70)
        for entry in self.shape_log:
            print(entry)
        print("="*70 + "\n")

    def clear(self):
        """Clear buffer log."""
        self.shape_log = []


class PerformanceProfiler:
    """
    Profile performance (time) of different operations.
    """

    def __init__(self):
        """Initialize performance profiler."""
        self.timings = defaultdict(list)
        self.current_timers = {}

    def start(self, label: str):
        """Start timing an operation."""
        self.current_timers[label] = time.perf_counter()

    def stop(self, label: str) -> Optional[float]:
        """Stop timing an operation and return the elapsed seconds."""
        if label in self.current_timers:
            elapsed = time.perf_counter() - self.current_timers.pop(label)
            self.timings[label].append(elapsed)
            return elapsed
        return None

    def mean(self, label: str) -> Optional[float]:
        """Mean time recorded for a label, or None if never timed."""
        times = self.timings.get(label)
        if not times:
            return None
        return float(np.mean(times))

    def print_summary(self):
        """Print timing summary."""
        print("\n" + "="*70)
        print("Performance Profile Summary")
        print("="*70)
        print(f"{'Operation':<30s} | {'Mean':>12s} | {'Std':>12s} | {'Min':>12s} | {'Max':>12s}")
        print("-"*70)

        for label, times in self.timings.items():
            if times:
                print(
                    f"{label:<30s} | "
                    f"{np.mean(times)*1000:>9.3f} ms | "
                    f"{np.std(times)*1000:>9.3f} ms | "
                    f"{np.min(times)*1000:>9.3f} ms | "
                    f"{np.max(times)*1000:>9.3f} ms"
                )

        print("="*70 + "\n")
