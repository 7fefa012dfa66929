"""
CatalogLib - Drawing catalog and external collaborators

This module provides the filesystem drawings catalog, image acquisition by
URL, and the drawing generation client for the Coloring Book project.
"""

from CB_Libs.CatalogLib.drawings_catalog import (
    CategoryEntry,
    DrawingRef,
    filename_to_slug,
    find_drawing_by_slug,
    format_display_name,
    friendly_name,
    list_categories,
)
from CB_Libs.CatalogLib.image_source import (
    ImageLoadError,
    ImageSource,
    get_proxy_url,
    is_s3_url,
)
from CB_Libs.CatalogLib.drawing_generator import (
    DrawingGenerator,
    GeneratedDrawing,
    GenerationError,
)

__all__ = [
    "CategoryEntry",
    "DrawingRef",
    "filename_to_slug",
    "find_drawing_by_slug",
    "format_display_name",
    "friendly_name",
    "list_categories",
    "ImageLoadError",
    "ImageSource",
    "get_proxy_url",
    "is_s3_url",
    "DrawingGenerator",
    "GeneratedDrawing",
    "GenerationError",
]
