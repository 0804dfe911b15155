"""
Blur benchmark.

Compares the tiled (edge strips only) and whole-image blur paths over a
range of square shadow sizes, to check where SMALL_SHADOW_THRESHOLD
should sit.
"""

import argparse

from material_shadow.rendering import FastGaussianBlur, ShadowMaskGenerator, ShadowSpec, ShadowType
from material_shadow.utils import BufferDebugger, PerformanceProfiler, ShadowConfig


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Benchmark shadow blur paths")

    parser.add_argument("--sizes", type=int, nargs="+", default=[100, 150, 200, 400, 800],
                        help="Square shadow sizes to render, in pixels")
    parser.add_argument("--level", type=float, default=ShadowConfig.ELEVATION_HIGHEST,
                        help="Elevation level [0-5]")
    parser.add_argument("--repeats", type=int, default=10,
                        help="Renders per size and path")
    parser.add_argument("--debug", action="store_true",
                        help="Log buffer shapes")

    return parser.parse_args()


def main():
    """Run the benchmark."""
    args = parse_args()

    print("\n" + "="*70)
    print("Shadow Blur Benchmark")
    print("="*70 + "\n")

    generator = ShadowMaskGenerator()
    blur_engine = FastGaussianBlur()
    profiler = PerformanceProfiler()
    debugger = BufferDebugger(enabled=args.debug)

    radius = int(generator.curve.evaluate(args.level).radius)
    print(f"Level {args.level} -> blur radius {radius}px\n")

    for size in args.sizes:
        spec = ShadowSpec(size, size, corner_radius=10, elevation_level=args.level, shape=ShadowType.SQUARE)
        mask = generator.build_mask(spec)
        debugger.verify_shape(f"mask {size}", mask, (size, size))

        for _ in range(max(args.repeats, 1)):
            profiler.start(f"whole  {size}x{size}")
            whole = blur_engine.blur(mask, radius, force_whole=True)
            profiler.stop(f"whole  {size}x{size}")

            profiler.start(f"auto   {size}x{size}")
            auto = blur_engine.blur(mask, radius)
            profiler.stop(f"auto   {size}x{size}")

        debugger.verify_shape(f"whole {size}", whole, (size, size))
        debugger.verify_shape(f"auto {size}", auto, (size, size))

        whole_ms = profiler.mean(f"whole  {size}x{size}") * 1000
        auto_ms = profiler.mean(f"auto   {size}x{size}") * 1000
        path = "whole" if size < blur_engine.small_shadow_threshold else "tiled"
        print(f"  {size:>5d}px: whole {whole_ms:8.3f} ms | auto ({path}) {auto_ms:8.3f} ms")

    profiler.print_summary()


if __name__ == "__main__":
    main()
