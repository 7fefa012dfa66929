"""
Constants and configuration values for Coloring Book.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Color matching constants
OUTLINE_THRESHOLD = 30
DEFAULT_FILL_TOLERANCE = 30
SAME_COLOR_TOLERANCE = 5
TRANSPARENT_AS_COLOR = (255, 255, 255)
OPAQUE_ALPHA = 255

# Canvas background applied before snapshotting
CANVAS_BACKGROUND = (255, 255, 255, 255)

# Display fitting
CONTAINER_PADDING = 16
USABLE_SPACE_RATIO = 0.95
RESIZE_DEBOUNCE_MS = 100

# UI constants
DEFAULT_WINDOW_WIDTH = 1400
DEFAULT_WINDOW_HEIGHT = 850
PALETTE_COLUMNS = 3
PALETTE_SWATCH_SIZE = 36
CURSOR_SWATCH_SIZE = 20

# Catalog
DRAWINGS_DIR_NAME = "drawings"
DRAWING_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp"}
DEFAULT_DRAWING_NAME = "drawing"

# Export
COLORED_SUFFIX = "_colored"
DEFAULT_EXPORT_FORMAT = "PNG"
EXPORT_FORMATS = {
    "webp": ("WEBP", "image/webp"),
    "png": ("PNG", "image/png"),
}

# Web service endpoints
PROXY_IMAGE_PATH = "/api/proxy-image"
GENERATE_DRAWING_PATH = "/api/generate-drawing"
DEFAULT_REQUEST_TIMEOUT = 30.0

# Config file and environment
CONFIG_FILE_NAME = "coloring_book.json"
ENV_DRAWINGS_DIR = "COLORING_BOOK_DRAWINGS_DIR"
ENV_API_URL = "COLORING_BOOK_API_URL"
ENV_LOG_LEVEL = "COLORING_BOOK_LOG_LEVEL"
