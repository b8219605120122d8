from .edges import SOBEL_WEIGHTS, EdgeKernel, sample, edge_pixel, sobel_edges
from .dispatch import Tile, tile_grid, dispatch, DEFAULT_TILE_SIZE, REFERENCE_TILE_SIZE

__all__ = [
    "SOBEL_WEIGHTS", "EdgeKernel", "sample", "edge_pixel", "sobel_edges",
    "Tile", "tile_grid", "dispatch", "DEFAULT_TILE_SIZE", "REFERENCE_TILE_SIZE",
]
