"""
Conversion Kernels

Dense <-> CRS conversion over raw buffers.
"""

from typing import Any, Iterator, List, Sequence

from ..sparse._array import narrow
from ..sparse._storage import CRSStorage

__all__ = [
    'count_nonzeros',
    'dense_to_csr',
    'iter_dense_rows',
]


def count_nonzeros(
    dense: Sequence[Sequence[Any]],
    rows: int,
    cols: int,
    dtype: str,
) -> int:
    """
    Count cells of a dense matrix that stay non-zero once stored as `dtype`.

    Args:
        dense: Rectangular row-major input, shape (rows, cols)
        rows: Number of rows
        cols: Number of columns
        dtype: Value dtype of the buffer the cells will be stored in

    Returns:
        Number of non-zero cells
    """
    nnz = 0
    for i in range(rows):
        row = dense[i]
        for j in range(cols):
            if narrow(row[j], dtype) != 0:
                nnz += 1
    return nnz


def dense_to_csr(
    dense: Sequence[Sequence[Any]],
    rows: int,
    cols: int,
    dtype: str,
) -> CRSStorage:
    """
    Build CRS buffers from a dense matrix.

    Pass 1 sizes the buffers, pass 2 fills them walking rows in order
    and columns ascending, so each row comes out column-sorted.

    Args:
        dense: Rectangular row-major input, shape (rows, cols)
        rows: Number of rows
        cols: Number of columns
        dtype: Value dtype of the result

    Returns:
        Exact-size storage holding only the non-zero cells
    """
    nnz = count_nonzeros(dense, rows, cols, dtype)
    out = CRSStorage.allocate(rows, nnz, dtype)
    data, indices, indptr = out.data, out.indices, out.indptr

    pos = 0
    for i in range(rows):
        row = dense[i]
        for j in range(cols):
            value = narrow(row[j], dtype)
            if value != 0:
                data[pos] = value
                indices[pos] = j
                pos += 1
        indptr[i + 1] = pos

    assert pos == nnz
    return out


def iter_dense_rows(
    storage: CRSStorage,
    rows: int,
    cols: int,
    zero: Any = 0,
) -> Iterator[List[Any]]:
    """
    Reconstruct the zero-filled grid of a CRS matrix row by row.

    Walks each row's stored entries against the column counter; once
    the stored entries run out the next stored column is taken to be
    `cols` (a sentinel past the last column), so the tail is zero-filled.

    Args:
        storage: CRS buffers
        rows: Number of rows
        cols: Number of columns
        zero: Fill value for cells without a stored entry

    Yields:
        One dense list of length `cols` per row
    """
    data = storage.data.tolist()
    indices = storage.indices.tolist()
    indptr = storage.indptr.tolist()

    for i in range(rows):
        k, end = indptr[i], indptr[i + 1]
        next_col = indices[k] if k < end else cols
        row = []
        for j in range(cols):
            if j == next_col:
                row.append(data[k])
                k += 1
                next_col = indices[k] if k < end else cols
            else:
                row.append(zero)
        yield row
