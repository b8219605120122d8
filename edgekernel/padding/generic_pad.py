import torch

from . import pad_1d
from .utils import modify_idx
from ..utils.validation import check_axes, check_pad_width


class Padder:
    def __init__(self, pad_width=1):
        """
        Parameters
        ----------
        pad_width : int
            Number of replicated entries before and after the ground
            truth region, at every axis of interest (specified by the
            ``axes`` parameter in forward function).
        """
        self.pad_width = check_pad_width(pad_width)

    def forward(self, x: torch.Tensor, axes=(-2, -1)):
        """
        Pads a tensor sequentially at all specified dimensions,
        replicating its border entries.

        Parameters
        ----------
        x : torch.Tensor
            The input n-dimensional tensor to be padded.

        axes : int or sequence of int
            The sequence of dimensions to be padded. Default: the
            last two (height and width) axes of an image.

        Returns
        -------
        y : torch.Tensor
            Padded tensor. ``x`` itself if no padding is needed.
        """
        axes = check_axes(x, axes)
        pw = self.pad_width
        if not axes or pw == 0:
            return x  # avoid creating a new tensor

        new_shape = list(x.shape)
        for a in axes:
            new_shape[a] += 2 * pw

        y = torch.empty(new_shape, dtype=x.dtype, device=x.device)
        idx = tuple(slice(pw, pw + s) if a in axes else slice(None) for a, s in enumerate(x.shape))
        y[idx] = x

        for a in axes:
            pad_1d.replicate_1d(y, idx=idx, dim=a)
            # the padded region now counts as ground truth for the next axis
            idx = modify_idx(None, idx=idx, dim=a)
        return y

    __call__ = forward
