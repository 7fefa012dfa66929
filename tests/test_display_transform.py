"""
Unit tests for display_transform module.

Tests container fitting and screen-to-buffer coordinate conversion.
"""

import pytest

from CB_Libs.PaintLib.display_transform import DisplayTransform, fit_display_size


class TestFitDisplaySize:
    """Tests for fit_display_size function."""

    def test_wide_image_limited_by_width(self):
        width, height = fit_display_size(200, 100, 432, 1032)

        # usable: (432 - 32) * 0.95 = 380
        assert width == pytest.approx(380)
        assert height == pytest.approx(190)

    def test_tall_image_limited_by_height(self):
        width, height = fit_display_size(100, 200, 1032, 432)

        assert height == pytest.approx(380)
        assert width == pytest.approx(190)

    def test_keeps_aspect_ratio(self):
        width, height = fit_display_size(640, 480, 1000, 900)

        assert width / height == pytest.approx(640 / 480)

    def test_no_room(self):
        assert fit_display_size(100, 100, 20, 20) == (0.0, 0.0)

    def test_invalid_image_size(self):
        with pytest.raises(ValueError):
            fit_display_size(0, 100, 500, 500)


class TestDisplayTransform:
    """Tests for DisplayTransform conversion."""

    def test_unfitted_is_identity(self):
        transform = DisplayTransform(100, 50)

        assert transform.to_buffer(10.7, 20.2) == (10, 20)

    def test_independent_axis_scales(self):
        transform = DisplayTransform(100, 100, display_width=50, display_height=200)

        assert transform.scale_x == pytest.approx(2.0)
        assert transform.scale_y == pytest.approx(0.5)
        assert transform.to_buffer(10, 10) == (20, 5)

    def test_outside_returns_none(self):
        transform = DisplayTransform(100, 100, display_width=50, display_height=50)

        assert transform.to_buffer(50, 10) is None
        assert transform.to_buffer(-1, 10) is None

    def test_unclamped_conversion(self):
        transform = DisplayTransform(100, 100, display_width=50, display_height=50)

        assert transform.to_buffer_unclamped(-1, 60) == (-2, 120)

    def test_fit_updates_display_size(self):
        transform = DisplayTransform(200, 100)

        transform.fit(432, 1032)

        assert transform.display_width == pytest.approx(380)
        assert transform.to_buffer(379, 189) == (199, 99)

    def test_fit_into_empty_container_keeps_previous(self):
        transform = DisplayTransform(200, 100, display_width=100, display_height=50)

        transform.fit(0, 0)

        assert (transform.display_width, transform.display_height) == (100, 50)

    def test_invalid_buffer_size(self):
        with pytest.raises(ValueError):
            DisplayTransform(0, 10)

    def test_invalid_display_size(self):
        transform = DisplayTransform(10, 10)

        with pytest.raises(ValueError):
            transform.set_display_size(0, 10)
