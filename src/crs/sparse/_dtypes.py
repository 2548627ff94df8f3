"""
Data Type Definitions

Provides type-safe dtype constants, validation and promotion rules
for the scalar stored in a CRS matrix.
"""

from typing import Union
from enum import Enum

__all__ = ['DType', 'float32', 'float64', 'int32', 'int64']


class DType(Enum):
    """
    CRS Data Type Enumeration.

    Every matrix stores a single scalar type. Index buffers
    (column indices, row pointers) are always int64.

    Example:
        >>> from crs.sparse import DType, CRSMatrix
        >>> mat = CRSMatrix.from_dense([[1, 0]], dtype=DType.int64)
        >>>
        >>> # Or use module-level constants
        >>> import crs.sparse as sp
        >>> mat = CRSMatrix.from_dense([[1, 0]], dtype=sp.float32)
    """

    float32 = 'float32'
    float64 = 'float64'
    int32 = 'int32'
    int64 = 'int64'

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"DType.{self.name}"


# =============================================================================
# Module-Level Constants (For Clean Syntax)
# =============================================================================

float32 = DType.float32
float64 = DType.float64
int32 = DType.int32
int64 = DType.int64

INDEX_DTYPE = 'int64'


# =============================================================================
# Type Utilities
# =============================================================================

def normalize_dtype(dtype: Union[str, DType]) -> str:
    """
    Normalize dtype to string.

    Args:
        dtype: String or DType enum

    Returns:
        String dtype

    Example:
        >>> normalize_dtype(DType.float32)
        'float32'
        >>> normalize_dtype('float64')
        'float64'
    """
    if isinstance(dtype, DType):
        return dtype.value
    elif isinstance(dtype, str):
        return dtype
    else:
        raise TypeError(f"dtype must be str or DType, got {type(dtype)}")


def validate_dtype(dtype: str) -> None:
    """
    Validate dtype string.

    Args:
        dtype: Data type string

    Raises:
        ValueError: If dtype is not supported
    """
    valid = {e.value for e in DType}
    if dtype not in valid:
        raise ValueError(f"Invalid dtype: {dtype}. Valid: {sorted(valid)}")


def is_float_dtype(dtype: Union[str, DType]) -> bool:
    """Check if dtype is floating point."""
    return normalize_dtype(dtype) in ('float32', 'float64')


def is_int_dtype(dtype: Union[str, DType]) -> bool:
    """Check if dtype is integer."""
    return normalize_dtype(dtype) in ('int32', 'int64')


def dtype_itemsize(dtype: Union[str, DType]) -> int:
    """
    Get size in bytes for dtype.

    Args:
        dtype: Data type

    Returns:
        Size in bytes
    """
    size_map = {
        'float32': 4,
        'float64': 8,
        'int32': 4,
        'int64': 8,
    }
    return size_map[normalize_dtype(dtype)]


def result_dtype(a: Union[str, DType], b: Union[str, DType]) -> str:
    """
    Dtype of the result of a binary operation.

    Floating point wins over integer; the wider type wins otherwise.

    Example:
        >>> result_dtype('int32', 'float32')
        'float32'
        >>> result_dtype('int64', 'float32')
        'float64'
    """
    a, b = normalize_dtype(a), normalize_dtype(b)
    if a == b:
        return a

    if is_float_dtype(a) or is_float_dtype(b):
        # float32 cannot hold every int64 or float64 value
        if {a, b} <= {'float32', 'int32'}:
            return 'float32'
        return 'float64'
    return 'int64'


def scalar_dtype(value) -> str:
    """Dtype that holds a Python/numpy scalar without loss."""
    if isinstance(value, bool):
        return 'int64'
    if isinstance(value, int):
        return 'int64'
    if isinstance(value, float):
        return 'float64'

    # numpy scalars expose a dtype name
    name = getattr(getattr(value, 'dtype', None), 'name', None)
    if name in ('float32', 'float64', 'int32', 'int64'):
        return name
    if name is not None and name.startswith(('int', 'uint', 'bool')):
        return 'int64'
    return 'float64'


def scaled_dtype(dtype: Union[str, DType], alpha) -> str:
    """
    Dtype of a matrix scaled by a scalar.

    Python scalars are weakly typed: an int never widens the matrix
    dtype and a float only turns integer matrices into float64.
    numpy scalars promote like a matrix of their dtype would.

    Example:
        >>> scaled_dtype('float32', 2)
        'float32'
        >>> scaled_dtype('int32', 0.5)
        'float64'
    """
    dtype = normalize_dtype(dtype)
    if hasattr(alpha, 'dtype'):
        return result_dtype(dtype, scalar_dtype(alpha))
    if isinstance(alpha, (bool, int)):
        return dtype
    if isinstance(alpha, float):
        return dtype if is_float_dtype(dtype) else 'float64'
    return 'float64'
