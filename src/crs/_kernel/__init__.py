"""CRS Private Kernels (_kernel).

Low-level algorithms over raw CRS buffers (CRSStorage). The public
matrix type in crs.sparse validates operands and wraps these.

Modules:
    - convert: Dense <-> CRS conversion
    - algebra: Transpose, add, negate, scale, multiply

Usage (Internal only):
    >>> from crs._kernel import algebra
    >>> t = algebra.transpose_csr(storage, rows, cols)
"""

from . import convert
from . import algebra

__all__ = [
    'convert',
    'algebra',
]
