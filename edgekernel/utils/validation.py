import torch


def check_axes(x, axes):
    """
    Checks if a list of axes is valid for a tensor or ndarray.

    If the input axis indices are not valid, a ValueError
    will be raised. Otherwise, the axes will be processed into
    a tuple of nonnegative integers

    Parameters
    ----------
    x : torch.Tensor or np.ndarray
        The input tensor. Axis indices cannot exceed its number
        of dimensions.

    axes : int or sequence of int
        An axis index or a sequence of distinct axis indices.

    Returns
    -------
    axes : tuple of int
        Processed tuple of int axis indices
    """
    if isinstance(axes, int):
        axes = (axes, )
    axes = tuple(int(a) if a >= 0 else x.ndim + int(a) for a in axes)
    if not all(0 <= a < x.ndim for a in axes):
        raise ValueError(f"axes {axes} out of range for a tensor with {x.ndim} dimensions")
    if len(set(axes)) != len(axes):
        raise ValueError(f"axes {axes} contain repeated dimensions")
    return axes


def check_pad_width(pad_width):
    try:
        pad_width = int(pad_width)
    except (TypeError, ValueError):
        raise ValueError(f"padding width must be integer, got {pad_width} instead")

    if pad_width < 0:
        raise ValueError(f"padding width must be nonnegative, got {pad_width} instead")
    return pad_width


def check_image(x, name="image"):
    """
    Checks that ``x`` is a floating point image tensor laid out as
    ``(..., C, H, W)`` with nonempty height and width.

    Returns
    -------
    shape : tuple of int
        ``(C, H, W)`` of the image
    """
    if not torch.is_tensor(x):
        raise ValueError(f"{name} must be a torch.Tensor, got {type(x)} instead")
    if x.ndim < 3:
        raise ValueError(f"{name} must have shape (..., C, H, W), got {tuple(x.shape)} instead")
    if not x.is_floating_point():
        raise ValueError(f"{name} must have a floating point dtype, got {x.dtype} instead")
    c, h, w = x.shape[-3:]
    if h < 1 or w < 1:
        raise ValueError(f"{name} must be at least 1x1, got height={h} and width={w} instead")
    return c, h, w


def check_tile_size(tile_size):
    """
    Processes a tile size into a ``(tile_h, tile_w)`` pair of positive integers.

    ``None`` is passed through and means a single tile covering the whole image.
    """
    if tile_size is None:
        return None

    if isinstance(tile_size, int):
        tile_size = (tile_size, tile_size)

    try:
        tile_h, tile_w = (int(t) for t in tile_size)
    except (TypeError, ValueError):
        raise ValueError(f"tile_size must be an integer or a pair of integers, got {tile_size} instead")

    if tile_h < 1 or tile_w < 1:
        raise ValueError(f"tile_size must be positive, got {tile_size} instead")
    return tile_h, tile_w


def check_workers(workers):
    if workers is None:
        return workers

    try:
        workers = int(workers)
    except TypeError:
        raise ValueError(f"workers must be integer, got {workers} of type {type(workers)} instead")

    if workers < 1:
        raise ValueError(f"workers must be positive, got {workers} instead")
    return workers


class DimensionMismatch(ValueError):
    """Source and destination images (or a packed frame buffer) do not have matching dimensions."""


def check_bindings(src, dst):
    """
    Checks that a source image and a destination image can be bound
    to one kernel invocation.

    The source must be ``(..., C, H, W)`` with ``C >= 3`` (red, green, blue
    and optional extra channels); the destination must be
    ``(..., 4, H, W)`` with the same leading and spatial shape, on the
    same device.

    Returns
    -------
    height, width : int
        Spatial size shared by both images
    """
    c_src, h, w = check_image(src, name="source image")
    c_dst = check_image(dst, name="destination image")[0]

    if c_src < 3:
        raise ValueError(f"source image needs at least 3 channels (RGB), got {c_src} instead")
    if c_dst != 4:
        raise ValueError(f"destination image needs exactly 4 channels (RGBA), got {c_dst} instead")
    if src.shape[:-3] != dst.shape[:-3] or src.shape[-2:] != dst.shape[-2:]:
        raise DimensionMismatch(f"source image {tuple(src.shape)} and destination image "
                                f"{tuple(dst.shape)} have different dimensions")
    if src.device != dst.device:
        raise ValueError(f"source image is on {src.device} but destination image is on {dst.device}")
    return h, w
