"""
Directional Sobel edge kernel

The kernel is the transposed (horizontal-edge) Sobel operator applied
to the red, green and blue channels of a color image. Only one
directional gradient is computed; there is no second pass and no
magnitude combination.

Each output coordinate ``(x, y)`` is an independent unit of work:

1. read the 3x3 neighborhood centered at ``(x, y)``, clamping every
   out-of-range coordinate to the nearest edge pixel
2. cross-correlate it with ``SOBEL_WEIGHTS`` (center included)
3. take the absolute value and clamp each channel to ``[0, 1]``
4. write ``(r, g, b, 1.0)`` to the destination at ``(x, y)``

Coordinates in row 0 or column 0 are skipped without reading or
writing anything, so the destination keeps its previous contents there.
Row ``H - 1`` and column ``W - 1`` are computed from clamped samples.

Images are channel-first tensors ``(..., C, H, W)`` and the coordinate
``(x, y)`` is ``image[..., y, x]``.
"""
import torch
from torch import nn

from .dispatch import dispatch, DEFAULT_TILE_SIZE
from ..padding import Padder
from ..utils.validation import check_bindings, check_tile_size, check_workers

# SOBEL_WEIGHTS[dy + 1][dx + 1], weight of the sample at (x + dx, y + dy)
SOBEL_WEIGHTS = (
    (1, 2, 1),
    (0, 0, 0),
    (-1, -2, -1),
)

# (dx, dy, weight) in column-major order; every sum below follows this order
_TAPS = tuple((dx, dy, SOBEL_WEIGHTS[dy + 1][dx + 1])
              for dx in (-1, 0, 1)
              for dy in (-1, 0, 1))


def sample(image: torch.Tensor, x: int, y: int):
    """
    Edge-clamp read of the RGB value at ``(x, y)``.

    Out-of-range coordinates are clamped to ``[0, W - 1] x [0, H - 1]``,
    so reading past the border returns the border pixel.

    Returns
    -------
    rgb : torch.Tensor
        Tensor of shape ``(..., 3)``
    """
    h, w = image.shape[-2:]
    x = min(max(x, 0), w - 1)
    y = min(max(y, 0), h - 1)
    return image[..., :3, y, x]


def edge_pixel(image: torch.Tensor, x: int, y: int):
    """
    Compute the output of one unit of work.

    This is the scalar reference of the kernel; ``EdgeKernel`` computes
    the same sums in the same order over whole tiles.

    Parameters
    ----------
    image : torch.Tensor
        Source image of shape ``(..., C, H, W)`` with ``C >= 3``

    x, y : int
        Coordinate of the output pixel

    Returns
    -------
    pixel : None or torch.Tensor
        ``None`` if ``x == 0`` or ``y == 0`` (nothing is written there).
        Otherwise the ``(..., 4)`` RGBA pixel, with alpha equal to 1.
    """
    if x == 0 or y == 0:
        return None

    acc = None
    for dx, dy, weight in _TAPS:
        term = weight * sample(image, x + dx, y + dy)
        acc = term if acc is None else acc + term

    rgb = torch.clamp(torch.abs(acc), 0.0, 1.0)
    alpha = torch.ones_like(rgb[..., :1])
    return torch.cat([rgb, alpha], dim=-1)


class EdgeKernel(nn.Module):
    def __init__(self, tile_size=DEFAULT_TILE_SIZE, workers=None):
        """
        Parallel directional Sobel kernel.

        Parameters
        ----------
        tile_size : None, int, or pair of int
            ``(tile_h, tile_w)`` of a scheduling tile. The output does not
            depend on it. ``None`` launches the whole image as one tile.

        workers : None or int
            Number of threads running tiles. ``1`` runs every tile in the
            calling thread.
        """
        super(EdgeKernel, self).__init__()
        self.tile_size = check_tile_size(tile_size)
        self.workers = check_workers(workers)
        self.padder = Padder(pad_width=1)

    def _run_tile(self, padded: torch.Tensor, dst: torch.Tensor, tile):
        # interior part of the tile; row 0 and column 0 are skipped
        y0, y1 = max(tile.y0, 1), tile.y1
        x0, x1 = max(tile.x0, 1), tile.x1
        if y0 >= y1 or x0 >= x1:
            return

        # padded[..., y + 1, x + 1] is the clamped sample at (x, y)
        acc = None
        for dx, dy, weight in _TAPS:
            window = padded[..., y0 + 1 + dy:y1 + 1 + dy, x0 + 1 + dx:x1 + 1 + dx]
            term = weight * window
            acc = term if acc is None else acc + term

        dst[..., :3, y0:y1, x0:x1] = torch.clamp(torch.abs(acc), 0.0, 1.0)
        dst[..., 3, y0:y1, x0:x1] = 1.0

    def forward(self, src: torch.Tensor, dst: torch.Tensor):
        """
        Run the kernel over every coordinate of ``src`` and write
        the result into ``dst`` in place.

        Parameters
        ----------
        src : torch.Tensor
            Source image ``(..., C, H, W)``, ``C >= 3``, values in ``[0, 1]``

        dst : torch.Tensor
            Destination image ``(..., 4, H, W)`` with the same leading
            and spatial shape as ``src``

        Returns
        -------
        dst : torch.Tensor
            The destination image, with row 0 and column 0 unchanged
        """
        height, width = check_bindings(src, dst)
        padded = self.padder.forward(src[..., :3, :, :], axes=(-2, -1))

        dispatch(lambda tile: self._run_tile(padded, dst, tile), height, width,
                 tile_size=self.tile_size, workers=self.workers)
        return dst


def sobel_edges(src: torch.Tensor, dst: torch.Tensor, *, tile_size=DEFAULT_TILE_SIZE, workers=None):
    """
    Functional form of ``EdgeKernel``; writes into ``dst`` and returns it.
    """
    return EdgeKernel(tile_size=tile_size, workers=workers).forward(src, dst)
