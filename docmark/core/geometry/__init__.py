"""
Coordinate mapping between overlay and native document spaces.
"""
from .coordinates import (
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

__all__ = [
    'NativeRect',
    'to_native_point',
    'to_overlay_point',
    'to_native_rect',
    'to_native_radius',
    'raster_to_native',
    'native_to_page_space',
    'native_rect_to_page_space',
    'screen_to_overlay',
]
