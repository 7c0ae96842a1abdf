"""
Utility functions for Voxel Buildings Generator.
"""

from .bresenham import bresenham_line, trace_polyline
from .floodfill import flood_fill_area
from .colors import color_text_to_rgb_tuple, rgb_distance
from .polygon_utils import (
    normalize_ring,
    polygon_signed_area,
    polygon_area,
    is_degenerate,
)

__all__ = [
    'bresenham_line',
    'trace_polyline',
    'flood_fill_area',
    'color_text_to_rgb_tuple',
    'rgb_distance',
    'normalize_ring',
    'polygon_signed_area',
    'polygon_area',
    'is_degenerate',
]
