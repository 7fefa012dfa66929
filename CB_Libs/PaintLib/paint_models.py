"""
Paint data models for Coloring Book.

This module defines core data structures shared by the painting modules.

Classes:
    FillResult: Outcome of a single flood fill request

Type Aliases:
    RgbColor: A tuple of 3 integers representing RGB color values (0-255)
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
    FillStatus: Literal outcome name of a flood fill request
"""

from dataclasses import dataclass
from typing import Literal, Tuple

RgbColor = Tuple[int, int, int]
RgbaColor = Tuple[int, int, int, int]
FillStatus = Literal["filled", "out_of_bounds", "outline", "invalid_color", "same_color"]


@dataclass(frozen=True)
class FillResult:
    status: FillStatus
    pixels_filled: int = 0

    @property
    def changed(self) -> bool:
        return self.pixels_filled > 0
