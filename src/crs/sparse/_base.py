"""
Sparse Matrix Base Classes

Abstract interface shared by row-oriented sparse matrices.

Type Hierarchy:

    SparseBase (ABC)
    └── CSRBase (ABC) - Row-oriented sparse matrices
        └── CRSMatrix - Owned compressed sparse row storage
"""

from abc import ABC, abstractmethod
from typing import Tuple, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    from ._array import Array

__all__ = [
    'SparseBase',
    'CSRBase',
    'SparseFormat',
]


class SparseFormat:
    """Enumeration of sparse matrix formats."""
    CSR = 'csr'


class SparseBase(ABC):
    """
    Abstract base class for all sparse matrices.

    Required Properties (subclasses must implement):
        shape: Matrix dimensions (rows, cols)
        dtype: Data type string
        nnz: Number of stored elements
        format: Sparse format

    Required Methods (subclasses must implement):
        to_dense(): Convert to a dense numpy array
        copy(): Create a deep copy
    """

    __slots__ = ()

    # =========================================================================
    # Abstract Properties
    # =========================================================================

    @property
    @abstractmethod
    def shape(self) -> Tuple[int, int]:
        """Matrix dimensions (rows, cols)."""
        ...

    @property
    @abstractmethod
    def dtype(self) -> str:
        """Data type string."""
        ...

    @property
    @abstractmethod
    def nnz(self) -> int:
        """Number of stored elements."""
        ...

    @property
    @abstractmethod
    def format(self) -> str:
        """Sparse format."""
        ...

    # =========================================================================
    # Derived Properties
    # =========================================================================

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self.shape[0]

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self.shape[1]

    @property
    def ndim(self) -> int:
        """Number of dimensions (always 2 for sparse matrices)."""
        return 2

    @property
    def size(self) -> int:
        """Total number of elements (rows * cols)."""
        return self.shape[0] * self.shape[1]

    @property
    def density(self) -> float:
        """Fraction of stored elements."""
        total = self.size
        return self.nnz / total if total > 0 else 0.0

    # =========================================================================
    # Abstract Methods - Conversion
    # =========================================================================

    @abstractmethod
    def to_dense(self) -> np.ndarray:
        """Convert to dense numpy array."""
        ...

    @abstractmethod
    def copy(self) -> 'SparseBase':
        """Create a deep copy of this matrix.

        Returns:
            New matrix with owned data
        """
        ...

    # =========================================================================
    # Magic Methods
    # =========================================================================

    def __len__(self) -> int:
        """Return number of rows."""
        return self.shape[0]


class CSRBase(SparseBase):
    """
    Abstract base class for CSR (Compressed Sparse Row) matrices.

    Additional Required Methods:
        row_values(i): Get values for row i
        row_indices(i): Get column indices for row i
        row_length(i): Get number of stored elements in row i
    """

    __slots__ = ()

    @property
    def format(self) -> str:
        """Sparse format (always 'csr')."""
        return SparseFormat.CSR

    # =========================================================================
    # Abstract Methods - Row Access
    # =========================================================================

    @abstractmethod
    def row_values(self, i: int) -> 'Array':
        """Get stored values for row i."""
        ...

    @abstractmethod
    def row_indices(self, i: int) -> 'Array':
        """Get column indices of stored values for row i."""
        ...

    @abstractmethod
    def row_length(self, i: int) -> int:
        """Get number of stored elements in row i."""
        ...

    # =========================================================================
    # Convenience Methods
    # =========================================================================

    def get_row(self, i: int) -> Tuple['Array', 'Array']:
        """Get both values and indices for row i.

        Returns:
            Tuple of (values, indices) arrays
        """
        return self.row_values(i), self.row_indices(i)

    def iter_rows(self):
        """Iterate over rows, yielding (values, indices) tuples."""
        for i in range(self.rows):
            yield self.row_values(i), self.row_indices(i)
