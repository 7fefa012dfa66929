"""
Fixed 24-color palette for children's coloring.

The palette only holds selection state; changing the selection affects the
next fill and never recolors anything already painted.
"""

import logging
from typing import List, Optional, Tuple

from CB_Libs.PaintLib.color_matcher import hex_to_rgb
from CB_Libs.PaintLib.paint_models import RgbColor

logger = logging.getLogger(__name__)

COLOR_PALETTE: List[Tuple[str, str]] = [
    ("#FF0000", "Red"),
    ("#FF6B00", "Orange"),
    ("#FFD700", "Gold"),
    ("#FFFF00", "Yellow"),
    ("#ADFF2F", "Green Yellow"),
    ("#00FF00", "Green"),
    ("#00CED1", "Turquoise"),
    ("#00BFFF", "Sky Blue"),
    ("#0000FF", "Blue"),
    ("#8A2BE2", "Blue Violet"),
    ("#FF00FF", "Magenta"),
    ("#FF1493", "Deep Pink"),
    ("#FF69B4", "Pink"),
    ("#FFB6C1", "Light Pink"),
    ("#FFA500", "Light Orange"),
    ("#FF6347", "Tomato"),
    ("#32CD32", "Lime Green"),
    ("#00FA9A", "Spring Green"),
    ("#1E90FF", "Dodger Blue"),
    ("#9370DB", "Medium Purple"),
    ("#8B4513", "Brown"),
    ("#000000", "Black"),
    ("#808080", "Gray"),
    ("#FFFFFF", "White"),
]


class ColorPalette:
    """Selection state over COLOR_PALETTE. The first color starts selected."""

    def __init__(self, colors: Optional[List[Tuple[str, str]]] = None) -> None:
        """
        Args:
            colors: (hex, name) entries, defaults to COLOR_PALETTE

        Raises:
            ValueError: If the palette is empty or an entry is not a 6-digit hex color
        """
        self._colors: List[Tuple[str, str]] = list(COLOR_PALETTE if colors is None else colors)
        if not self._colors:
            raise ValueError("Palette must contain at least one color")

        self._rgb: List[RgbColor] = []
        for hex_color, name in self._colors:
            rgb = hex_to_rgb(hex_color)
            if rgb is None:
                raise ValueError(f"Invalid palette color {hex_color!r} for {name}")
            self._rgb.append(rgb)

        self._selected_index = 0

    @property
    def colors(self) -> List[str]:
        return [hex_color for hex_color, _ in self._colors]

    @property
    def names(self) -> List[str]:
        return [name for _, name in self._colors]

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @property
    def selected_hex(self) -> str:
        return self._colors[self._selected_index][0]

    @property
    def selected_name(self) -> str:
        return self._colors[self._selected_index][1]

    @property
    def selected_rgb(self) -> RgbColor:
        return self._rgb[self._selected_index]

    def select(self, index: int) -> str:
        """
        Select a palette entry by position.

        Raises:
            IndexError: If index is outside the palette
        """
        if not 0 <= index < len(self._colors):
            raise IndexError(f"Palette index must be 0-{len(self._colors) - 1}, got {index}")
        self._selected_index = index
        logger.debug(f"Selected color {self.selected_name} ({self.selected_hex})")
        return self.selected_hex

    def select_hex(self, hex_color: str) -> str:
        """
        Select a palette entry by its hex value (case-insensitive, '#' optional).

        Raises:
            ValueError: If the color is not part of the palette
        """
        wanted = hex_to_rgb(hex_color)
        if wanted is not None and wanted in self._rgb:
            return self.select(self._rgb.index(wanted))
        raise ValueError(f"Color {hex_color!r} is not in the palette")

    def reset(self) -> None:
        self._selected_index = 0

    def __len__(self) -> int:
        return len(self._colors)
