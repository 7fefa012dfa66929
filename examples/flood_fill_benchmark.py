"""
Performance demonstration for the outline-preserving flood fill.

Builds synthetic coloring pages (a grid of outlined cells) at a few sizes and
times fills of a single cell and of the whole background, so you can check
that a fill finishes within one click on realistic page resolutions.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import time

from CB_Libs.PaintLib.flood_fill import flood_fill
from CB_Libs.PaintLib.pixel_buffer import PixelBuffer


def make_grid_page(size, cell=64):
    """White page with black grid lines every `cell` pixels."""
    page = PixelBuffer.blank(size, size)
    page.data[::cell, :, :3] = 0
    page.data[:, ::cell, :3] = 0
    return page


def benchmark_fill(size, iterations=3):
    print(f"\nBenchmarking {size}x{size} page ({size * size / 1e6:.1f} MP)")
    print("-" * 60)

    snapshot = make_grid_page(size)

    for label, seed, color in (
        ("single cell", (5, 5), "#FF0000"),
        ("open page", (5, 5), "#00FF00"),
    ):
        if label == "open page":
            # worst case: no outlines, every pixel joins the region
            snapshot = PixelBuffer.blank(size, size)

        times = []
        for i in range(iterations):
            live = snapshot.copy()
            start = time.time()
            result = flood_fill(live, snapshot, seed[0], seed[1], color)
            elapsed = time.time() - start
            times.append(elapsed)
            print(f"  {label} run {i + 1}: {elapsed:.3f}s ({result.pixels_filled} pixels)")

        print(f"  {label} average: {sum(times) / len(times):.3f}s")


def main():
    for size in (512, 1024, 2048):
        benchmark_fill(size)


if __name__ == "__main__":
    main()
