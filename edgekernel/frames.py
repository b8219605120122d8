"""
Host binding for packed video frames

A streaming filter receives frames as packed 8-bit RGBx rows. This
module converts them to normalized float images, runs ``EdgeKernel``
into a persistent output image and packs the result back to 8-bit RGBA.

The output image is allocated once per negotiated frame size and is
zero-initialized (transparent black). The kernel never writes row 0 and
column 0, so those pixels keep the output image's previous contents.
"""
import logging

import numpy as np
import torch

from .filtering.edges import EdgeKernel
from .filtering.dispatch import DEFAULT_TILE_SIZE
from .utils.validation import DimensionMismatch

logger = logging.getLogger(__name__)

CHANNELS = 4  # RGBx / RGBA


class NotNegotiated(RuntimeError):
    """A frame was transformed before the frame size was set."""


def unpack_rgbx(data, width: int, height: int, *, bytes_per_row=None, dtype=torch.float32):
    """
    Convert packed 8-bit RGBx (or RGBA) rows to a float image.

    Parameters
    ----------
    data : bytes-like
        ``height`` rows of ``bytes_per_row`` bytes each

    width, height : int
        Frame size in pixels

    bytes_per_row : None or int
        Row stride in bytes. Default: ``4 * width``

    dtype : torch.dtype
        Floating point dtype of the result

    Returns
    -------
    image : torch.Tensor
        Tensor of shape ``(4, height, width)`` with ``value / 255``
    """
    if bytes_per_row is None:
        bytes_per_row = CHANNELS * width
    if bytes_per_row < CHANNELS * width:
        raise DimensionMismatch(f"bytes_per_row={bytes_per_row} is too small for width={width}")

    buf = np.frombuffer(data, dtype=np.uint8)
    if buf.size != bytes_per_row * height:
        raise DimensionMismatch(f"expected {bytes_per_row * height} bytes for a {width}x{height} frame, "
                                f"got {buf.size} instead")

    rows = buf.reshape(height, bytes_per_row)[:, :CHANNELS * width]
    pixels = rows.reshape(height, width, CHANNELS).transpose(2, 0, 1).copy()
    return torch.from_numpy(pixels).to(dtype) / 255


def pack_rgba(image: torch.Tensor) -> bytes:
    """
    Convert a float ``(4, H, W)`` image to packed 8-bit RGBA rows.

    Values are clamped to ``[0, 1]`` and rounded to the nearest
    representable 8-bit value.
    """
    if image.ndim != 3 or image.shape[0] != CHANNELS:
        raise ValueError(f"image must have shape (4, H, W), got {tuple(image.shape)} instead")
    quantized = torch.round(torch.clamp(image, 0.0, 1.0) * 255).to(torch.uint8)
    return quantized.permute(1, 2, 0).contiguous().cpu().numpy().tobytes()


class SobelFrameFilter:
    def __init__(self, tile_size=DEFAULT_TILE_SIZE, workers=None, device="cpu"):
        """
        Edge filter over a stream of packed RGBx frames.

        Parameters
        ----------
        tile_size, workers
            Forwarded to ``EdgeKernel``

        device : str or torch.device
            Device holding the input and output images
        """
        self.kernel = EdgeKernel(tile_size=tile_size, workers=workers)
        self.device = torch.device(device)
        self.width = None
        self.height = None
        self.bytes_per_row = None
        self.output = None

    @property
    def negotiated(self):
        return self.output is not None

    def set_info(self, width: int, height: int, bytes_per_row=None):
        """
        Set the frame size and allocate the persistent output image.

        Parameters
        ----------
        width, height : int
            Frame size in pixels

        bytes_per_row : None or int
            Row stride of the input frames. Default: ``4 * width``.
            Output frames are always packed tightly.
        """
        width, height = int(width), int(height)
        if width < 1 or height < 1:
            raise ValueError(f"frame size must be at least 1x1, got {width}x{height} instead")

        if bytes_per_row is None:
            bytes_per_row = CHANNELS * width
        bytes_per_row = int(bytes_per_row)
        if bytes_per_row < CHANNELS * width:
            raise DimensionMismatch(f"bytes_per_row={bytes_per_row} is too small for width={width}")

        self.width, self.height, self.bytes_per_row = width, height, bytes_per_row
        self.output = torch.zeros(CHANNELS, height, width, dtype=torch.float32, device=self.device)
        logger.info("negotiated %dx%d frames (%d bytes per row) on %s", width, height, bytes_per_row, self.device)

    def reset(self):
        self.width = self.height = self.bytes_per_row = self.output = None

    def transform(self, data) -> bytes:
        """
        Run the edge kernel on one packed RGBx frame.

        Returns
        -------
        frame : bytes
            Packed RGBA frame of the same size
        """
        if not self.negotiated:
            raise NotNegotiated("frame size has not been set, call set_info first")

        src = unpack_rgbx(data, self.width, self.height, bytes_per_row=self.bytes_per_row).to(self.device)
        logger.debug("dispatching %dx%d frame", self.width, self.height)
        self.kernel.forward(src, self.output)
        return pack_rgba(self.output)
