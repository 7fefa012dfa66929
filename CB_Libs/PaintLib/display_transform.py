"""
Mapping between on-screen canvas coordinates and pixel buffer coordinates.

Pixel buffers stay at natural resolution; the displayed canvas is scaled to
fit its container while keeping the aspect ratio.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from CB_Libs.constants import CONTAINER_PADDING, USABLE_SPACE_RATIO


def fit_display_size(
    image_width: int,
    image_height: int,
    container_width: float,
    container_height: float,
    padding: float = CONTAINER_PADDING,
    usable_ratio: float = USABLE_SPACE_RATIO,
) -> Tuple[float, float]:
    """
    Compute the displayed canvas size for a container.

    The available space is the container minus padding on each side, reduced
    to `usable_ratio`. The image is fitted to the limiting dimension.

    Returns:
        (display_width, display_height); (0, 0) if the container has no room
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Image size must be positive, got {image_width}x{image_height}")

    usable_width = (container_width - padding * 2) * usable_ratio
    usable_height = (container_height - padding * 2) * usable_ratio
    if usable_width <= 0 or usable_height <= 0:
        return 0.0, 0.0

    image_aspect = image_width / image_height
    container_aspect = usable_width / usable_height

    if image_aspect > container_aspect:
        display_width = usable_width
        display_height = display_width / image_aspect
    else:
        display_height = usable_height
        display_width = display_height * image_aspect

    return display_width, display_height


@dataclass
class DisplayTransform:
    """Current buffer size and displayed size of the canvas.

    Until the canvas has been fitted the displayed size equals the buffer
    size (scale 1:1).
    """
    buffer_width: int
    buffer_height: int
    display_width: float = 0.0
    display_height: float = 0.0

    def __post_init__(self):
        if self.buffer_width <= 0 or self.buffer_height <= 0:
            raise ValueError(
                f"Buffer size must be positive, got {self.buffer_width}x{self.buffer_height}"
            )
        if self.display_width <= 0 or self.display_height <= 0:
            self.display_width = float(self.buffer_width)
            self.display_height = float(self.buffer_height)

    @property
    def scale_x(self) -> float:
        return self.buffer_width / self.display_width

    @property
    def scale_y(self) -> float:
        return self.buffer_height / self.display_height

    def fit(self, container_width: float, container_height: float) -> Tuple[float, float]:
        """Refit to a container; an empty container keeps the previous size."""
        width, height = fit_display_size(
            self.buffer_width, self.buffer_height, container_width, container_height
        )
        if width > 0 and height > 0:
            self.display_width = width
            self.display_height = height
        return self.display_width, self.display_height

    def set_display_size(self, display_width: float, display_height: float) -> None:
        if display_width <= 0 or display_height <= 0:
            raise ValueError(f"Display size must be positive, got {display_width}x{display_height}")
        self.display_width = float(display_width)
        self.display_height = float(display_height)

    def to_buffer(self, screen_x: float, screen_y: float) -> Optional[Tuple[int, int]]:
        """
        Convert element-relative screen coordinates to buffer coordinates.

        Returns:
            (x, y) in the buffer, or None if the point lies outside the image
        """
        x = int(math.floor(screen_x * self.scale_x))
        y = int(math.floor(screen_y * self.scale_y))
        if 0 <= x < self.buffer_width and 0 <= y < self.buffer_height:
            return x, y
        return None

    def to_buffer_unclamped(self, screen_x: float, screen_y: float) -> Tuple[int, int]:
        return int(math.floor(screen_x * self.scale_x)), int(math.floor(screen_y * self.scale_y))
