"""
Pytest configuration and shared fixtures for Coloring Book tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest

from CB_Libs.PaintLib.pixel_buffer import PixelBuffer

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)


def draw_square_outline(buffer, left, top, right, bottom, color=BLACK):
    """Draw a 1px rectangle outline with inclusive corners."""
    for x in range(left, right + 1):
        buffer.set_pixel(x, top, color)
        buffer.set_pixel(x, bottom, color)
    for y in range(top, bottom + 1):
        buffer.set_pixel(left, y, color)
        buffer.set_pixel(right, y, color)


def square_interior():
    """The 16 pixels enclosed by the outline drawn in square_canvas."""
    return {(x, y) for x in range(3, 7) for y in range(3, 7)}


@pytest.fixture
def square_canvas():
    """
    10x10 white canvas with a closed 1px black square outline.

    The outline runs from (2, 2) to (7, 7), enclosing a 4x4 interior
    (x and y in 3..6) that contains the point (5, 5).

    Returns:
        PixelBuffer used as the original snapshot
    """
    canvas = PixelBuffer.blank(10, 10, WHITE)
    draw_square_outline(canvas, 2, 2, 7, 7)
    return canvas


@pytest.fixture
def transparent_canvas():
    """
    10x10 canvas with alpha=0 background and an opaque closed shape.

    The outline runs from (2, 2) to (7, 7) and the interior is opaque white.
    """
    canvas = PixelBuffer.blank(10, 10, (0, 0, 0, 0))
    for x in range(3, 7):
        for y in range(3, 7):
            canvas.set_pixel(x, y, WHITE)
    draw_square_outline(canvas, 2, 2, 7, 7)
    return canvas


@pytest.fixture
def sample_rgba_colors():
    """
    Provide a list of sample RGBA color tuples for testing.

    Returns:
        List of (R, G, B, A) tuples with common test colors
    """
    return [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 255, 255),  # White
        (0, 0, 0, 255),      # Black
        (128, 128, 128, 255),  # Gray
    ]
