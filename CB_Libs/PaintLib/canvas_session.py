"""
Canvas session: one loaded drawing and the state needed to color it.

A session owns the pixel buffer pair (immutable original snapshot and
mutable live buffer), the palette selection, and the display transform.
It is created when a drawing finishes loading and discarded when the user
moves to another drawing; nothing is persisted.

Classes:
    CanvasSession: Loads a drawing, routes pointer input to flood fill,
                   and exports the colored or blank drawing
"""

import logging
import mimetypes
from io import BytesIO
from pathlib import Path
from typing import Any, Optional, Tuple

from PIL import Image, features

from CB_Libs.CatalogLib.drawings_catalog import DrawingRef
from CB_Libs.CatalogLib.image_source import ImageLoadError
from CB_Libs.constants import (
    CANVAS_BACKGROUND,
    COLORED_SUFFIX,
    DEFAULT_DRAWING_NAME,
    DEFAULT_EXPORT_FORMAT,
    DEFAULT_FILL_TOLERANCE,
    EXPORT_FORMATS,
)
from CB_Libs.PaintLib.color_palette import ColorPalette
from CB_Libs.PaintLib.display_transform import DisplayTransform
from CB_Libs.PaintLib.export_sink import ExportedImage, ExportSink
from CB_Libs.PaintLib.flood_fill import flood_fill
from CB_Libs.PaintLib.paint_models import FillResult
from CB_Libs.PaintLib.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


def composite_on_white(image: Any) -> Any:
    """Flatten an image onto an opaque white background (RGBA result)."""
    rgba = image.convert("RGBA")
    background = Image.new("RGBA", rgba.size, CANVAS_BACKGROUND)
    background.alpha_composite(rgba)
    return background


def webp_supported() -> bool:
    return bool(features.check("webp"))


class CanvasSession:
    """Coloring state for a single loaded drawing."""

    def __init__(
        self,
        original_snapshot: PixelBuffer,
        drawing: Optional[DrawingRef] = None,
        fill_tolerance: int = DEFAULT_FILL_TOLERANCE,
    ) -> None:
        self.original_snapshot = original_snapshot.copy()
        self.original_snapshot.data.flags.writeable = False
        self.live_buffer = original_snapshot.copy()
        self.drawing = drawing
        self.fill_tolerance = fill_tolerance
        self.palette = ColorPalette()
        self.display = DisplayTransform(self.live_buffer.width, self.live_buffer.height)
        self.hover_position: Optional[Tuple[int, int]] = None
        self.last_result: Optional[FillResult] = None

    @classmethod
    def from_image(
        cls,
        image: Any,
        drawing: Optional[DrawingRef] = None,
        fill_tolerance: int = DEFAULT_FILL_TOLERANCE,
    ) -> "CanvasSession":
        """Start a session from a decoded PIL Image, composited onto white."""
        if not hasattr(image, "mode"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        snapshot = PixelBuffer.from_image(composite_on_white(image))
        return cls(snapshot, drawing=drawing, fill_tolerance=fill_tolerance)

    @classmethod
    def load(
        cls,
        url: str,
        image_source: Any,
        drawing: Optional[DrawingRef] = None,
        fill_tolerance: int = DEFAULT_FILL_TOLERANCE,
    ) -> "CanvasSession":
        """
        Acquire, decode and snapshot a drawing.

        Args:
            url: Where to fetch the drawing from
            image_source: Object with fetch_bytes(url) -> bytes
            drawing: Catalog reference used for export naming
            fill_tolerance: Per-channel tolerance for fills

        Returns:
            A ready CanvasSession

        Raises:
            ImageLoadError: If the bytes cannot be fetched or decoded
        """
        data = image_source.fetch_bytes(url)
        return cls.from_bytes(data, url, drawing=drawing, fill_tolerance=fill_tolerance)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        url: str = "",
        drawing: Optional[DrawingRef] = None,
        fill_tolerance: int = DEFAULT_FILL_TOLERANCE,
    ) -> "CanvasSession":
        """
        Decode already fetched drawing bytes into a session.

        Raises:
            ImageLoadError: If the bytes are not a decodable image
        """
        try:
            with Image.open(BytesIO(data)) as image:
                image.load()
                session = cls.from_image(image, drawing=drawing, fill_tolerance=fill_tolerance)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise ImageLoadError(f"Could not decode image {url}: {e}")

        logger.info(f"Loaded drawing {url} ({session.width}x{session.height})")
        return session

    @property
    def width(self) -> int:
        return self.live_buffer.width

    @property
    def height(self) -> int:
        return self.live_buffer.height

    # Display and pointer input

    def fit_to_container(self, container_width: float, container_height: float) -> Tuple[float, float]:
        """Recompute the displayed size; pixel data is not touched."""
        return self.display.fit(container_width, container_height)

    def set_display_size(self, display_width: float, display_height: float) -> None:
        self.display.set_display_size(display_width, display_height)

    def hover(self, screen_x: float, screen_y: float) -> Optional[Tuple[int, int]]:
        self.hover_position = self.display.to_buffer(screen_x, screen_y)
        return self.hover_position

    def click(self, screen_x: float, screen_y: float) -> FillResult:
        """Fill the region under an element-relative click with the selected color."""
        x, y = self.display.to_buffer_unclamped(screen_x, screen_y)
        return self.fill_at(x, y)

    def fill_at(self, x: int, y: int, color_hex: Optional[str] = None) -> FillResult:
        """Fill in buffer coordinates; defaults to the selected palette color."""
        self.last_result = flood_fill(
            self.live_buffer,
            self.original_snapshot,
            x,
            y,
            color_hex if color_hex is not None else self.palette.selected_hex,
            tolerance=self.fill_tolerance,
        )
        return self.last_result

    def select_color(self, index: int) -> str:
        return self.palette.select(index)

    def select_hex(self, hex_color: str) -> str:
        return self.palette.select_hex(hex_color)

    def reset(self) -> None:
        """Discard all fills."""
        self.live_buffer = self.original_snapshot.copy()
        self.last_result = None

    def render(self) -> Any:
        """PIL Image of the live buffer for display."""
        return self.live_buffer.to_image()

    # Export

    def _base_name(self) -> str:
        if self.drawing is None or not self.drawing.stem:
            return DEFAULT_DRAWING_NAME
        return self.drawing.stem

    def colored_export_format(self) -> Tuple[str, str, str]:
        """
        Pick the encoding for the colored download.

        Mirrors the drawing's format when it is WEBP and Pillow can encode
        WEBP; otherwise PNG.

        Returns:
            (extension, PIL format name, mime type)
        """
        extension = self.drawing.extension if self.drawing else ""
        if extension == "webp" and webp_supported():
            pil_format, mime_type = EXPORT_FORMATS["webp"]
            return "webp", pil_format, mime_type

        pil_format, mime_type = EXPORT_FORMATS[DEFAULT_EXPORT_FORMAT.lower()]
        return DEFAULT_EXPORT_FORMAT.lower(), pil_format, mime_type

    def export_colored(self) -> Optional[ExportedImage]:
        """
        Encode the live buffer for download.

        Returns:
            ExportedImage named '<name>_colored.<ext>', or None if encoding failed
        """
        extension, pil_format, mime_type = self.colored_export_format()
        save_kwargs = {"format": pil_format}
        if pil_format == "WEBP":
            save_kwargs["lossless"] = True

        buffer = BytesIO()
        try:
            self.live_buffer.to_image().save(buffer, **save_kwargs)
        except (OSError, ValueError, KeyError) as e:
            logger.error(f"Failed to encode colored image as {pil_format}: {e}")
            return None

        data = buffer.getvalue()
        if not data:
            logger.error("Encoding the colored image produced no data")
            return None

        return ExportedImage(f"{self._base_name()}{COLORED_SUFFIX}.{extension}", data, mime_type)

    def export_original(self, image_source: Any) -> Optional[ExportedImage]:
        """
        Fetch the pristine drawing bytes for the blank download.

        The bytes are fetched again from the drawing's URL instead of
        re-encoding the snapshot, so the file matches the source exactly.

        Returns:
            ExportedImage named after the drawing, or None on failure
        """
        if self.drawing is None:
            logger.error("No drawing available for blank download")
            return None

        try:
            data = image_source.fetch_bytes(self.drawing.url)
        except ImageLoadError as e:
            logger.error(f"Failed to download original image: {e}")
            return None

        extension = self.drawing.extension or DEFAULT_EXPORT_FORMAT.lower()
        filename = f"{self._base_name()}.{extension}"
        mime_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        return ExportedImage(filename, data, mime_type)

    def download_colored(self, sink: ExportSink) -> Optional[Path]:
        return self.deliver(self.export_colored(), sink)

    def download_original(self, sink: ExportSink, image_source: Any) -> Optional[Path]:
        return self.deliver(self.export_original(image_source), sink)

    def deliver(self, exported: Optional[ExportedImage], sink: ExportSink) -> Optional[Path]:
        if exported is None:
            return None
        try:
            return sink.save(exported)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save {exported.filename}: {e}")
            return None
