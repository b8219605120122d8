"""
Border extension for image tensors.

Padding extends the border of the original signal so that a 3x3
neighborhood can be read at every pixel without going out of range.

The border pixels are replicated (edge-clamp sampling):
    ``a a a a | a b c d | d d d d``

Reading the padded tensor at ``i + pad`` is the same as reading the
original tensor at ``clamp(i, 0, n - 1)``.

=============        ===========     ==============================  =======
edgekernel           Matlab          numpy.pad                       Scipy
=============        ===========     ==============================  =======
replicate            sp0             edge                            nearest
=============        ===========     ==============================  =======
"""
from .generic_pad import Padder

__all__ = ["Padder"]
