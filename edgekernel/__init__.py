from .filtering import EdgeKernel, sobel_edges, edge_pixel, SOBEL_WEIGHTS
from .frames import SobelFrameFilter, NotNegotiated, unpack_rgbx, pack_rgba
from .utils import DimensionMismatch

__all__ = [
    "EdgeKernel", "sobel_edges", "edge_pixel", "SOBEL_WEIGHTS",
    "SobelFrameFilter", "NotNegotiated", "unpack_rgbx", "pack_rgba",
    "DimensionMismatch",
]
