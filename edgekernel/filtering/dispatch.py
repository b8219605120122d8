"""
Parallel grid dispatch.

A kernel invocation is one independent unit of work per output
coordinate. Units are grouped into rectangular tiles purely for
scheduling: every coordinate in ``[0, W) x [0, H)`` belongs to exactly
one tile, tiles never overlap, and there is no ordering between them.

Tiles are run on a thread pool. Torch releases the GIL inside tensor
operations, so tiles writing disjoint regions of the same destination
tensor run concurrently without any locking.

Each tile costs a fixed number of torch calls, so CPU tiles are large
(``DEFAULT_TILE_SIZE``). ``REFERENCE_TILE_SIZE`` is the 8x8
compute-shader workgroup; it gives the same output but is much slower
on a thread pool.
"""
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor

from ..utils.validation import check_tile_size, check_workers

DEFAULT_TILE_SIZE = 256
REFERENCE_TILE_SIZE = 8

Tile = namedtuple("Tile", ["y0", "y1", "x0", "x1"])
Tile.__doc__ = "Half-open coordinate ranges ``[y0, y1) x [x0, x1)`` covered by one tile"


def tile_grid(height: int, width: int, tile_size=DEFAULT_TILE_SIZE):
    """
    Partition a ``height x width`` grid into tiles.

    Parameters
    ----------
    height, width : int
        Grid dimensions

    tile_size : None, int, or pair of int
        ``(tile_h, tile_w)`` of each tile. An integer is used for both.
        If ``None``, a single tile covers the whole grid.

    Returns
    -------
    tiles : list of Tile
        ``ceil(height / tile_h) * ceil(width / tile_w)`` tiles in
        row-major order. Tiles at the bottom and right border are
        cut to the grid.
    """
    tile_size = check_tile_size(tile_size)
    if tile_size is None:
        tile_size = (max(height, 1), max(width, 1))
    tile_h, tile_w = tile_size

    return [Tile(y0, min(y0 + tile_h, height), x0, min(x0 + tile_w, width))
            for y0 in range(0, height, tile_h)
            for x0 in range(0, width, tile_w)]


def dispatch(func, height: int, width: int, *, tile_size=DEFAULT_TILE_SIZE, workers=None):
    """
    Call ``func(tile)`` once for every tile of a ``height x width`` grid.

    Parameters
    ----------
    func : callable
        Unit of work for one tile. Its return value is ignored.

    height, width : int
        Grid dimensions

    tile_size : None, int, or pair of int
        See ``tile_grid``.

    workers : None or int
        Number of worker threads. ``1`` runs every tile in the calling
        thread. ``None`` uses the default of ``ThreadPoolExecutor``.

    Returns
    -------
    n_tiles : int
        Number of dispatched tiles
    """
    workers = check_workers(workers)
    tiles = tile_grid(height, width, tile_size=tile_size)

    if workers == 1 or len(tiles) == 1:
        for tile in tiles:
            func(tile)
        return len(tiles)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(func, tile) for tile in tiles]
        for future in futures:
            future.result()  # re-raise the first failure
    return len(tiles)
