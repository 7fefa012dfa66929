"""
Color matching helpers for flood fill.

Colors match when every RGB channel differs by at most the tolerance
(per-channel, not a distance metric). Outline pixels are the near-black
pixels of the original snapshot.

Functions:
    hex_to_rgb: Parse a 6-digit hex color string
    rgb_to_hex: Format an RGB triple as '#RRGGBB'
    colors_match: Per-channel tolerance comparison
    effective_color: Read a fully transparent pixel as white
    is_original_outline: Classify one snapshot pixel as outline
    outline_mask: Classify every snapshot pixel at once
"""

import re
from typing import Any, Optional

import numpy as np

from CB_Libs.constants import OUTLINE_THRESHOLD, DEFAULT_FILL_TOLERANCE, TRANSPARENT_AS_COLOR
from CB_Libs.PaintLib.paint_models import RgbColor
from CB_Libs.PaintLib.pixel_buffer import PixelBuffer

HEX_COLOR_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def hex_to_rgb(hex_color: Any) -> Optional[RgbColor]:
    """
    Parse a hex color string into an RGB tuple.

    Args:
        hex_color: String such as '#FF6B00' or 'ff6b00'

    Returns:
        (r, g, b) tuple, or None if the string is malformed
    """
    if not isinstance(hex_color, str):
        return None

    match = HEX_COLOR_PATTERN.match(hex_color.strip())
    if match is None:
        return None

    return int(match.group(1), 16), int(match.group(2), 16), int(match.group(3), 16)


def rgb_to_hex(color: RgbColor) -> str:
    r, g, b = color[:3]
    for channel in (r, g, b):
        if not 0 <= channel <= 255:
            raise ValueError(f"Channel values must be 0-255, got {color}")
    return f"#{r:02X}{g:02X}{b:02X}"


def colors_match(
    r1: int, g1: int, b1: int,
    r2: int, g2: int, b2: int,
    tolerance: int = DEFAULT_FILL_TOLERANCE,
) -> bool:
    return abs(r1 - r2) <= tolerance and abs(g1 - g2) <= tolerance and abs(b1 - b2) <= tolerance


def effective_color(r: int, g: int, b: int, a: int) -> RgbColor:
    if a == 0:
        return TRANSPARENT_AS_COLOR
    return r, g, b


def is_original_outline(x: int, y: int, original_snapshot: PixelBuffer) -> bool:
    """
    Check whether a pixel belongs to the drawn outline.

    Only the original snapshot is consulted, never the live buffer, so
    colors added by earlier fills cannot create or remove outlines.

    Args:
        x: Pixel column
        y: Pixel row
        original_snapshot: PixelBuffer captured when the drawing was loaded

    Returns:
        True if R, G and B are all at or below the near-black threshold;
        fully transparent pixels read as white and are never outline
    """
    r, g, b = effective_color(*original_snapshot.get_pixel(x, y))
    return r <= OUTLINE_THRESHOLD and g <= OUTLINE_THRESHOLD and b <= OUTLINE_THRESHOLD


def outline_mask(original_snapshot: PixelBuffer) -> np.ndarray:
    """Boolean (height, width) grid, True where is_original_outline holds."""
    data = original_snapshot.data
    return (data[:, :, :3] <= OUTLINE_THRESHOLD).all(axis=2) & (data[:, :, 3] != 0)
