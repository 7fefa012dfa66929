"""
PaintLib - Core coloring functionality

This module provides pixel buffers, color matching, the outline-preserving
flood fill, the color palette, and the canvas session for the Coloring Book
project. The PyQt5 window lives in PaintLib.coloring_window and is imported
separately.
"""

from CB_Libs.PaintLib.paint_models import FillResult, FillStatus, RgbColor, RgbaColor
from CB_Libs.PaintLib.pixel_buffer import PixelBuffer
from CB_Libs.PaintLib.color_matcher import (
    colors_match,
    effective_color,
    hex_to_rgb,
    is_original_outline,
    outline_mask,
    rgb_to_hex,
)
from CB_Libs.PaintLib.flood_fill import flood_fill, find_fill_region
from CB_Libs.PaintLib.color_palette import COLOR_PALETTE, ColorPalette
from CB_Libs.PaintLib.display_transform import DisplayTransform, fit_display_size
from CB_Libs.PaintLib.export_sink import DirectorySink, ExportedImage, ExportSink
from CB_Libs.PaintLib.canvas_session import CanvasSession, composite_on_white

__all__ = [
    "FillResult",
    "FillStatus",
    "RgbColor",
    "RgbaColor",
    "PixelBuffer",
    "colors_match",
    "effective_color",
    "hex_to_rgb",
    "is_original_outline",
    "outline_mask",
    "rgb_to_hex",
    "flood_fill",
    "find_fill_region",
    "COLOR_PALETTE",
    "ColorPalette",
    "DisplayTransform",
    "fit_display_size",
    "DirectorySink",
    "ExportedImage",
    "ExportSink",
    "CanvasSession",
    "composite_on_white",
]
