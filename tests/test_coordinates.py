"""
Tests for the overlay <-> native coordinate mapping.
"""
import pytest

from docmark.core.document.models import PaginatedViewport
from docmark.core.geometry import (
    NativeRect,
    native_rect_to_page_space,
    native_to_page_space,
    raster_to_native,
    screen_to_overlay,
    to_native_point,
    to_native_radius,
    to_native_rect,
    to_overlay_point,
)


class TestPointMapping:
    """Points move between overlay pixels and PDF point space."""

    def test_top_left_maps_to_page_top(self, pdf_viewport):
        """The overlay origin is the top-left corner of the page."""
        assert to_native_point((0, 0), pdf_viewport) == pytest.approx((0, 792))

    def test_bottom_right_maps_to_page_origin_corner(self, pdf_viewport):
        """The overlay bottom-right corner is (page width, 0) in PDF space."""
        point = to_native_point((918, 1188), pdf_viewport)
        assert point == pytest.approx((612, 0))

    def test_scale_follows_zoom(self, pdf_viewport):
        """At 1.5x, 15 overlay pixels are 10 points."""
        x, y = to_native_point((15, 15), pdf_viewport)
        assert x == pytest.approx(10)
        assert y == pytest.approx(782)

    def test_overlay_point_inverts_native_point(self, pdf_viewport):
        """Mapping to native space and back returns the original point."""
        native = to_native_point((123.5, 456.25), pdf_viewport)
        assert to_overlay_point(native, pdf_viewport) == pytest.approx((123.5, 456.25))

    def test_zero_display_size_rejected(self):
        """A viewport without a display surface has no scale."""
        viewport = PaginatedViewport(612, 792, 0, 0)
        with pytest.raises(ValueError):
            to_native_point((1, 1), viewport)

    def test_raster_is_identity(self):
        assert raster_to_native((12.5, 40)) == (12.5, 40)


class TestRectMapping:
    """Dragged boxes keep their on-screen position in the PDF."""

    def test_box_anchored_at_bottom_left(self, pdf_viewport):
        """The top-left is flipped first, then the height subtracted."""
        rect = to_native_rect((10, 10), (50, 40), pdf_viewport)

        assert rect.x == pytest.approx(10 / 1.5)
        assert rect.width == pytest.approx(40 / 1.5)
        assert rect.height == pytest.approx(20)
        assert rect.y == pytest.approx(792 - 10 / 1.5 - 20)

    def test_page_space_rect_matches_drawn_box(self, pdf_viewport):
        """Back in y-down page space the box sits where it was drawn."""
        rect = to_native_rect((10, 10), (50, 40), pdf_viewport)
        x0, y0, x1, y1 = native_rect_to_page_space(rect, 792)

        assert (x0, y0, x1, y1) == pytest.approx((6.6667, 6.6667, 33.3333, 26.6667), abs=1e-3)

    def test_reverse_drag_is_normalized(self, pdf_viewport):
        """Dragging up and left covers the same area as dragging down and right."""
        forward = native_rect_to_page_space(
            to_native_rect((10, 10), (50, 40), pdf_viewport), 792
        )
        backward = native_rect_to_page_space(
            to_native_rect((50, 40), (10, 10), pdf_viewport), 792
        )
        assert backward == pytest.approx(forward)

    def test_native_rect_to_page_space_orders_corners(self):
        x0, y0, x1, y1 = native_rect_to_page_space(NativeRect(100, 700, -50, -20), 792)
        assert x0 < x1
        assert y0 < y1

    def test_radius_scaled_to_points(self, pdf_viewport):
        """A 30-40-50 handle at 1.5x gives a radius of 50 / 1.5 points."""
        radius = to_native_radius((100, 100), (130, 140), pdf_viewport)
        assert radius == pytest.approx(50 / 1.5)

    def test_native_to_page_space_flips_y(self):
        assert native_to_page_space((10, 782), 792) == (10, 10)


class TestScreenMapping:
    """Screen coordinates are resolved against the surface's bounding rect."""

    def test_subtracts_surface_origin(self):
        assert screen_to_overlay((150, 230), (100, 200, 500, 400)) == (50, 30)

    def test_point_outside_surface_is_not_clamped(self):
        assert screen_to_overlay((90, 190), (100, 200, 500, 400)) == (-10, -10)
