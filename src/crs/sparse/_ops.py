"""Functional Sparse Matrix Operations.

Module-level forms of the CRSMatrix arithmetic, convenient for
reductions and functional code:

    >>> from crs.sparse import add, matmul, transpose
    >>> from functools import reduce
    >>> total = reduce(add, [m1, m2, m3])
    >>> gram = matmul(transpose(m), m)
"""

from typing import Any, Iterable

from ._csr import CRSMatrix

__all__ = [
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


def _require_matrix(value: Any, name: str) -> CRSMatrix:
    if not isinstance(value, CRSMatrix):
        raise TypeError(f"{name} must be a CRSMatrix, got {type(value)}")
    return value


# =============================================================================
# Arithmetic
# =============================================================================

def transpose(mat: CRSMatrix) -> CRSMatrix:
    """Transpose of a matrix (new matrix)."""
    return _require_matrix(mat, "mat").transpose()


def negate(mat: CRSMatrix) -> CRSMatrix:
    """Additive inverse of a matrix."""
    return _require_matrix(mat, "mat").negate()


def scale(mat: CRSMatrix, alpha: Any) -> CRSMatrix:
    """alpha * mat, dropping entries that become zero."""
    return _require_matrix(mat, "mat").scale(alpha)


def add(left: CRSMatrix, right: CRSMatrix) -> CRSMatrix:
    """Element-wise sum of two same-shaped matrices.

    Raises:
        DimensionMismatch: If shapes differ.
    """
    return _require_matrix(left, "left").add(_require_matrix(right, "right"))


def subtract(left: CRSMatrix, right: CRSMatrix) -> CRSMatrix:
    """Element-wise difference of two same-shaped matrices.

    Raises:
        DimensionMismatch: If shapes differ.
    """
    return _require_matrix(left, "left").subtract(_require_matrix(right, "right"))


def matmul(left: CRSMatrix, right: CRSMatrix) -> CRSMatrix:
    """Matrix product left @ right.

    Raises:
        DimensionMismatch: If left.cols != right.rows.
    """
    return _require_matrix(left, "left").matmul(_require_matrix(right, "right"))


# =============================================================================
# Conversion
# =============================================================================

def from_dense(dense: Iterable, dtype: Any = None) -> CRSMatrix:
    """Create a CRSMatrix from a dense 2D list or numpy array."""
    return CRSMatrix.from_dense(dense, dtype=dtype)


def from_scipy(mat: Any) -> CRSMatrix:
    """Create a CRSMatrix from a scipy sparse matrix (copied)."""
    return CRSMatrix.from_scipy(mat)


def to_scipy(mat: CRSMatrix) -> Any:
    """Convert a CRSMatrix to scipy.sparse.csr_matrix."""
    return _require_matrix(mat, "mat").to_scipy()
