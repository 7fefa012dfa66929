"""
Unit tests for pixel_buffer module.
"""

import unittest

import numpy as np
from PIL import Image

from CB_Libs.PaintLib.pixel_buffer import PixelBuffer


class TestPixelBuffer(unittest.TestCase):
    """Test PixelBuffer construction and pixel access."""

    def test_blank_buffer(self):
        buffer = PixelBuffer.blank(3, 2, (1, 2, 3, 4))

        self.assertEqual(buffer.size, (3, 2))
        self.assertEqual(buffer.width, 3)
        self.assertEqual(buffer.height, 2)
        self.assertEqual(buffer.get_pixel(2, 1), (1, 2, 3, 4))

    def test_rejects_wrong_shape(self):
        with self.assertRaises(ValueError):
            PixelBuffer(np.zeros((2, 2, 3), dtype=np.uint8))

    def test_rejects_empty(self):
        with self.assertRaises(ValueError):
            PixelBuffer(np.zeros((0, 2, 4), dtype=np.uint8))

    def test_rejects_wrong_dtype(self):
        with self.assertRaises(TypeError):
            PixelBuffer(np.zeros((2, 2, 4), dtype=np.float32))

    def test_rejects_non_array(self):
        with self.assertRaises(TypeError):
            PixelBuffer([[0, 0, 0, 0]])

    def test_set_and_get_use_x_y(self):
        buffer = PixelBuffer.blank(4, 3)
        buffer.set_pixel(3, 1, (9, 8, 7, 6))

        self.assertEqual(buffer.get_pixel(3, 1), (9, 8, 7, 6))
        self.assertEqual(tuple(buffer.data[1, 3]), (9, 8, 7, 6))

    def test_in_bounds(self):
        buffer = PixelBuffer.blank(4, 3)

        self.assertTrue(buffer.in_bounds(0, 0))
        self.assertTrue(buffer.in_bounds(3, 2))
        self.assertFalse(buffer.in_bounds(4, 0))
        self.assertFalse(buffer.in_bounds(0, 3))
        self.assertFalse(buffer.in_bounds(-1, 0))

    def test_effective_rgb(self):
        buffer = PixelBuffer.blank(2, 1, (10, 20, 30, 0))
        buffer.set_pixel(1, 0, (10, 20, 30, 200))

        self.assertEqual(buffer.effective_rgb(0, 0), (255, 255, 255))
        self.assertEqual(buffer.effective_rgb(1, 0), (10, 20, 30))
        self.assertFalse(buffer.is_opaque(1, 0))

    def test_copy_is_independent(self):
        buffer = PixelBuffer.blank(2, 2)
        clone = buffer.copy()
        clone.set_pixel(0, 0, (0, 0, 0, 255))

        self.assertEqual(buffer.get_pixel(0, 0), (255, 255, 255, 255))
        self.assertNotEqual(buffer, clone)

    def test_image_round_trip_keeps_size(self):
        image = Image.new("RGB", (5, 3), (12, 34, 56))

        buffer = PixelBuffer.from_image(image)

        self.assertEqual(buffer.size, (5, 3))
        self.assertEqual(buffer.get_pixel(4, 2), (12, 34, 56, 255))
        self.assertEqual(buffer.to_image().mode, "RGBA")
        self.assertEqual(buffer.to_image().size, (5, 3))

    def test_from_image_rejects_non_images(self):
        with self.assertRaises(TypeError):
            PixelBuffer.from_image("not an image")

    def test_same_size(self):
        self.assertTrue(PixelBuffer.blank(2, 3).same_size(PixelBuffer.blank(2, 3, (0, 0, 0, 0))))
        self.assertFalse(PixelBuffer.blank(2, 3).same_size(PixelBuffer.blank(3, 2)))


if __name__ == "__main__":
    unittest.main()
