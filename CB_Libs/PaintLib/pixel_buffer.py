"""
RGBA pixel buffer used by every painting operation.

`PixelBuffer` is a thin read/write view over a numpy array of shape
`(height, width, 4)` and dtype `uint8`. Pixels are addressed as `(x, y)`
with the origin at the top-left, which maps to array index `[y, x]`.
"""

from typing import Any, Tuple

import numpy as np
from PIL import Image

from CB_Libs.constants import OPAQUE_ALPHA, TRANSPARENT_AS_COLOR
from CB_Libs.PaintLib.paint_models import RgbaColor, RgbColor


class PixelBuffer:
    """A mutable RGBA raster backed by a numpy array."""

    def __init__(self, data: Any) -> None:
        if not isinstance(data, np.ndarray):
            raise TypeError(f"Expected numpy array, got {type(data)}")
        if data.dtype != np.uint8:
            raise TypeError(f"Expected uint8 samples, got {data.dtype}")
        if data.ndim != 3 or data.shape[2] != 4:
            raise ValueError(f"Expected array of shape (height, width, 4), got {data.shape}")
        if data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"Pixel buffer must not be empty, got {data.shape}")
        self.data = data

    @classmethod
    def blank(cls, width: int, height: int, color: RgbaColor = (255, 255, 255, 255)) -> "PixelBuffer":
        data = np.empty((height, width, 4), dtype=np.uint8)
        data[:, :] = color
        return cls(data)

    @classmethod
    def from_image(cls, image: Any) -> "PixelBuffer":
        """Create a buffer from a PIL Image (any mode is converted to RGBA)."""
        if not hasattr(image, "mode"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.array(image, dtype=np.uint8))

    def to_image(self) -> Any:
        return Image.fromarray(self.data)

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> RgbaColor:
        r, g, b, a = self.data[y, x]
        return int(r), int(g), int(b), int(a)

    def set_pixel(self, x: int, y: int, color: RgbaColor) -> None:
        self.data[y, x] = color

    def effective_rgb(self, x: int, y: int) -> RgbColor:
        """Return the pixel's RGB, reading fully transparent pixels as white."""
        r, g, b, a = self.get_pixel(x, y)
        if a == 0:
            return TRANSPARENT_AS_COLOR
        return r, g, b

    def is_opaque(self, x: int, y: int) -> bool:
        return int(self.data[y, x, 3]) == OPAQUE_ALPHA

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.data.copy())

    def same_size(self, other: "PixelBuffer") -> bool:
        return self.size == other.size

    def tobytes(self) -> bytes:
        return self.data.tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.same_size(other) and bool(np.array_equal(self.data, other.data))

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
