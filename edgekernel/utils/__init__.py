"""
General utilities for edgekernel
"""
from .validation import check_axes, check_pad_width, check_image, check_tile_size, check_workers, \
    DimensionMismatch, check_bindings

__all__ = [
    "check_axes", "check_pad_width", "check_image", "check_tile_size", "check_workers",
    "DimensionMismatch", "check_bindings",
]
