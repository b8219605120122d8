"""
Pad a torch tensor along a certain dimension.

**Important note**: This is an in-place function.

To avoid re-copying the input tensor, the 1d padding utility function
only accepts an empty tensor that has the same shape as the final padded output
and copies the values of the input tensor at its center.

The function will return its input x after modifying it.

Parameters
----------
x : torch.Tensor
    The input tensor to be padded.

    Let ``u`` be the original tensor, then ``x`` is an empty tensor
    holding ``u`` values at center such that ``x[idx] == u``

idx : tuple of slice
    Indices for the ground truth tensor located at the center of the
    empty-padded tensor x.

    Has the same length as the number of dimensions ``len(idx) == x.ndim``.
    Each element is a ``slice(beg, end)`` where at dimension ``dim``,
    ``x.shape[dim] - end`` is the amount of padding in the end and
    ``beg`` is the amount of padding in the beginning.

dim : int
    The dimension to pad.

Returns
-------
x : torch.Tensor
    The same tensor after the padded values at ``dim`` are filled in.
"""
from .utils import modify_idx


def replicate_1d(x, idx, dim):
    head, tail = idx[dim].start, idx[dim].stop

    def f(*args):  # fast idx modification
        return modify_idx(*args, idx=idx, dim=dim)

    if head > 0:  # should pad before
        x[f(head)] = x[f(head, head + 1)]

    if tail < x.shape[dim]:  # should pad after
        x[f(tail, None)] = x[f(tail - 1, tail)]

    return x
