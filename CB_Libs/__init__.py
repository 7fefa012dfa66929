"""
CB_Libs - Coloring Book Library Modules

This package contains core functionality for the Coloring Book project,
organized into specialized sub-packages:

- PaintLib: Pixel buffers, flood fill, palette, canvas session and window
- CatalogLib: Drawings catalog, image acquisition and drawing generation client
"""

__version__ = "0.1.0"
