"""CRS Storage.

Holds the three buffers of a compressed sparse row matrix:

    data     values of the stored entries, row-major, columns ascending
    indices  column index of each stored entry
    indptr   row offsets into data/indices, length rows + 1

A matrix without storage is "empty" (no matrix assigned). That state
is distinct from a valid matrix with zero rows or zero stored entries,
which still carries an indptr of length rows + 1.
"""

from dataclasses import dataclass
from typing import Tuple

from ._array import Array, zeros
from ._dtypes import INDEX_DTYPE

__all__ = ['CRSStorage']


@dataclass
class CRSStorage:
    """Buffers of a CRS matrix.

    Attributes:
        data: Non-zero values array.
        indices: Column indices array (int64).
        indptr: Row pointer array (int64).
    """
    data: Array
    indices: Array
    indptr: Array

    @classmethod
    def allocate(cls, rows: int, nnz: int, dtype: str) -> 'CRSStorage':
        """Allocate exact-size buffers for a matrix with `nnz` entries."""
        return cls(
            data=zeros(nnz, dtype=dtype),
            indices=zeros(nnz, dtype=INDEX_DTYPE),
            indptr=zeros(rows + 1, dtype=INDEX_DTYPE),
        )

    @property
    def nnz(self) -> int:
        """Number of stored entries."""
        return len(self.data)

    @property
    def dtype(self) -> str:
        return self.data.dtype

    @property
    def nbytes(self) -> int:
        """Total memory usage in bytes."""
        return self.data.nbytes + self.indices.nbytes + self.indptr.nbytes

    def row_bounds(self, i: int) -> Tuple[int, int]:
        """Half-open [start, end) slice of row i."""
        return self.indptr[i], self.indptr[i + 1]

    def copy(self) -> 'CRSStorage':
        """Duplicate all three buffers."""
        return CRSStorage(
            data=self.data.copy(),
            indices=self.indices.copy(),
            indptr=self.indptr.copy(),
        )

    def take(self) -> 'CRSStorage':
        """Move all three buffers into a new storage, releasing these."""
        return CRSStorage(
            data=self.data.take(),
            indices=self.indices.take(),
            indptr=self.indptr.take(),
        )

    def release(self) -> None:
        """Release all three buffers. Idempotent."""
        self.data.release()
        self.indices.release()
        self.indptr.release()
