"""CRS Sparse Matrix Module.

Compressed sparse row matrices with owned buffers, value semantics
and sparse-aware arithmetic.

Type Hierarchy:

    SparseBase (ABC)
    └── CSRBase                       # Row-oriented interface
        └── CRSMatrix (CSRMatrix)     # Owned (data, indices, indptr)

Quick Start:
    >>> from crs.sparse import CRSMatrix
    >>>
    >>> a = CRSMatrix.from_dense([[0, 2], [3, 0]])
    >>> b = a.T                 # transpose
    >>> c = a @ b + a           # multiply, add
    >>> (a * 0).nnz             # zeros are never stored
    0
    >>> print(c.dump())         # raw buffers

Key Classes:
    - Array: Owned, bounds-checked ctypes buffer
    - CRSStorage: The three buffers of a matrix
    - CRSMatrix: The sparse matrix value type
"""

# Data types
from ._dtypes import (
    DType,
    float32,
    float64,
    int32,
    int64,
)

# Buffers
from ._array import (
    Array,
    empty,
    zeros,
    from_list,
)
from ._storage import CRSStorage

# Matrix
from ._base import SparseBase, CSRBase, SparseFormat
from ._csr import CRSMatrix, CSRMatrix

# Functional operations
from ._ops import (
    transpose,
    negate,
    scale,
    add,
    subtract,
    matmul,
    from_dense,
    from_scipy,
    to_scipy,
)

__all__ = [
    # Data types
    'DType',
    'float32',
    'float64',
    'int32',
    'int64',

    # Buffers
    'Array',
    'empty',
    'zeros',
    'from_list',
    'CRSStorage',

    # Matrix
    'SparseBase',
    'CSRBase',
    'SparseFormat',
    'CRSMatrix',
    'CSRMatrix',

    # Operations
    'transpose',
    'negate',
    'scale',
    'add',
    'subtract',
    'matmul',
    'from_dense',
    'from_scipy',
    'to_scipy',
]
