"""
CRS - Compressed Sparse Row matrices

Sparse matrix value type with:
- Owned data/indices/indptr buffers with copy and move semantics
- Canonical storage (column-sorted rows, no stored zeros)
- Sparse-aware transpose, add, subtract, scale and multiply

Modules:
- sparse: Sparse matrix data structures and operations
- core: Error types and global configuration

Example:
    >>> import crs
    >>> from crs import CRSMatrix
    >>>
    >>> a = CRSMatrix.from_dense([[1, 0], [0, 2]])
    >>> b = CRSMatrix.from_dense([[3, 4], [5, 6]])
    >>> print(a @ b)
    [  3.0  4.0 ]
    [ 10.0 12.0 ]
"""

__version__ = '0.1.0'

# Import main modules
from . import sparse
from . import core

# Re-export common types
from .sparse import (
    # Core classes
    Array,
    CRSMatrix,
    CSRMatrix,

    # Type constants
    DType,
    float32,
    float64,
    int32,
    int64,

    # Operations
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

from .core import (
    CRSError,
    DimensionMismatch,
    EmptyMatrixError,
    get_config,
    set_default_dtype,
    get_default_dtype,
    reset_config,
)

__all__ = [
    # Version
    '__version__',

    # Modules
    'sparse',
    'core',

    # Core classes
    'Array',
    'CRSMatrix',
    'CSRMatrix',

    # Type constants
    'DType',
    'float32',
    'float64',
    'int32',
    'int64',

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

    # Errors
    'CRSError',
    'DimensionMismatch',
    'EmptyMatrixError',

    # Configuration
    'get_config',
    'set_default_dtype',
    'get_default_dtype',
    'reset_config',
]
