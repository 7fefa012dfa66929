"""
Outline-preserving flood fill for coloring pages.

The fill is a 4-connected breadth-first traversal driven by an explicit work
queue, so large regions never grow the call stack. The region is computed
against the live buffer as it was when the fill started and is written back
in one batch once the traversal is complete.

Rules applied to every visited pixel:
- Fully transparent pixels are read as white.
- Pixels that are near-black in the original snapshot are outline pixels:
  they are never recolored and never crossed.
- A pixel joins the region when its color is within the tolerance of the
  seed's color (per channel).
- Filled pixels take the fill RGB; alpha 0 becomes 255, other alpha values
  are kept.

Functions:
    flood_fill: Fill the region under a seed point in place
    find_fill_region: Compute the flat pixel indices a fill would recolor
"""

import logging
import math
from collections import deque
from typing import List

import numpy as np

from CB_Libs.constants import (
    DEFAULT_FILL_TOLERANCE,
    OPAQUE_ALPHA,
    SAME_COLOR_TOLERANCE,
    TRANSPARENT_AS_COLOR,
)
from CB_Libs.PaintLib.color_matcher import colors_match, hex_to_rgb, is_original_outline, outline_mask
from CB_Libs.PaintLib.paint_models import FillResult, RgbColor
from CB_Libs.PaintLib.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


def flood_fill(
    live_buffer: PixelBuffer,
    original_snapshot: PixelBuffer,
    seed_x: float,
    seed_y: float,
    fill_color_hex: str,
    tolerance: int = DEFAULT_FILL_TOLERANCE,
) -> FillResult:
    """
    Fill the contiguous region under a seed point with a color.

    Clicking outside the image, on an outline, with a malformed color, or
    with the color the region already has are expected outcomes: the buffer
    is left untouched and the reason is reported in the result.

    Args:
        live_buffer: PixelBuffer to modify in place
        original_snapshot: PixelBuffer captured at load time (outline source)
        seed_x: Seed column in buffer coordinates (floored)
        seed_y: Seed row in buffer coordinates (floored)
        fill_color_hex: Fill color as a 6-digit hex string
        tolerance: Per-channel tolerance for joining the region (0-255)

    Returns:
        FillResult with the outcome and the number of recolored pixels

    Raises:
        TypeError: If either buffer is not a PixelBuffer
        ValueError: If the buffers differ in size or tolerance is out of range
    """
    if not isinstance(live_buffer, PixelBuffer) or not isinstance(original_snapshot, PixelBuffer):
        raise TypeError(
            f"Expected PixelBuffer arguments, got {type(live_buffer)} and {type(original_snapshot)}"
        )

    if not live_buffer.same_size(original_snapshot):
        raise ValueError(
            f"Live buffer {live_buffer.size} and original snapshot "
            f"{original_snapshot.size} must have the same dimensions"
        )

    if not 0 <= tolerance <= 255:
        raise ValueError(f"tolerance must be 0-255, got {tolerance}")

    x = int(math.floor(seed_x))
    y = int(math.floor(seed_y))
    if not live_buffer.in_bounds(x, y):
        logger.debug(f"Fill ignored, seed ({x}, {y}) outside {live_buffer.size}")
        return FillResult("out_of_bounds")

    target = live_buffer.effective_rgb(x, y)

    if is_original_outline(x, y, original_snapshot):
        logger.debug(f"Fill ignored, seed ({x}, {y}) is on the outline")
        return FillResult("outline")

    fill_rgb = hex_to_rgb(fill_color_hex)
    if fill_rgb is None:
        logger.warning(f"Invalid fill color: {fill_color_hex!r}")
        return FillResult("invalid_color")

    if colors_match(*target, *fill_rgb, SAME_COLOR_TOLERANCE):
        logger.debug(f"Fill ignored, seed ({x}, {y}) already {fill_color_hex}")
        return FillResult("same_color")

    region = find_fill_region(live_buffer, original_snapshot, x, y, target, tolerance)
    _commit_region(live_buffer, region, fill_rgb)

    logger.debug(f"Filled {len(region)} pixels from ({x}, {y}) with {fill_color_hex}")
    return FillResult("filled", len(region))


def find_fill_region(
    live_buffer: PixelBuffer,
    original_snapshot: PixelBuffer,
    seed_x: int,
    seed_y: int,
    target: RgbColor,
    tolerance: int = DEFAULT_FILL_TOLERANCE,
) -> List[int]:
    """
    Collect the pixels connected to the seed that match the target color.

    Returns:
        Flat pixel indices (y * width + x) in breadth-first order
    """
    width, height = live_buffer.size
    fillable = _fillable_mask(live_buffer, original_snapshot, target, tolerance).ravel().tolist()
    visited = bytearray(width * height)
    region: List[int] = []

    queue = deque([(seed_x, seed_y)])
    while queue:
        px, py = queue.popleft()

        if px < 0 or px >= width or py < 0 or py >= height:
            continue

        index = py * width + px
        if visited[index]:
            continue
        visited[index] = 1

        # outline pixels and non-matching colors stop the traversal here
        if not fillable[index]:
            continue

        region.append(index)
        queue.append((px + 1, py))
        queue.append((px - 1, py))
        queue.append((px, py + 1))
        queue.append((px, py - 1))

    return region


def _fillable_mask(
    live_buffer: PixelBuffer,
    original_snapshot: PixelBuffer,
    target: RgbColor,
    tolerance: int,
) -> np.ndarray:
    data = live_buffer.data
    rgb = data[:, :, :3].astype(np.int16)
    rgb[data[:, :, 3] == 0] = TRANSPARENT_AS_COLOR

    diff = np.abs(rgb - np.array(target, dtype=np.int16))
    matches = (diff <= tolerance).all(axis=2)
    return matches & ~outline_mask(original_snapshot)


def _commit_region(live_buffer: PixelBuffer, region: List[int], fill_rgb: RgbColor) -> None:
    if not region:
        return

    ys, xs = np.divmod(np.asarray(region, dtype=np.int64), live_buffer.width)
    data = live_buffer.data
    alpha = data[ys, xs, 3]
    data[ys, xs, :3] = fill_rgb
    data[ys, xs, 3] = np.where(alpha == 0, OPAQUE_ALPHA, alpha)
