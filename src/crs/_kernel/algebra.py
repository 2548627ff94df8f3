"""
Sparse Algebra Kernels

Transpose, merge arithmetic, scaling and multiplication over CRS buffers.

Every kernel that builds a new matrix follows the same protocol:
size the result first (pass 1), allocate exact-size buffers once, then
fill them (pass 2). Buffers are never grown during the fill pass and
never alias the operands' buffers.

Values are narrowed to the result dtype before they are tested against
zero, so a value that would read back as zero from the result buffer
is dropped rather than stored.
"""

from typing import Any, Iterator, List, Tuple

from ..core.error import check_error, CRS_ERROR_DIMENSION_MISMATCH, CRS_OK
from ..sparse._array import Array, narrow, zeros
from ..sparse._dtypes import INDEX_DTYPE
from ..sparse._storage import CRSStorage

__all__ = [
    'transpose_csr',
    'add_csr',
    'negate_csr',
    'scale_csr',
    'matmul_csr',
]


def _unpack(storage: CRSStorage) -> Tuple[List[Any], List[int], List[int]]:
    return storage.data.tolist(), storage.indices.tolist(), storage.indptr.tolist()


# =============================================================================
# Transpose
# =============================================================================

def transpose_csr(storage: CRSStorage, rows: int, cols: int) -> CRSStorage:
    """
    Transpose a CRS matrix by counting sort, O(nnz + rows + cols).

    Args:
        storage: CRS buffers of a (rows, cols) matrix
        rows: Number of rows
        cols: Number of columns

    Returns:
        CRS buffers of the (cols, rows) transpose
    """
    data, indices, indptr = _unpack(storage)
    nnz = len(data)

    out = CRSStorage.allocate(cols, nnz, storage.dtype)
    new_data, new_indices, new_indptr = out.data, out.indices, out.indptr

    # Histogram: entries landing in each new row (= old column)
    for col in indices:
        new_indptr[col + 1] += 1

    # Counts -> offsets
    for r in range(cols):
        new_indptr[r + 1] += new_indptr[r]
    next_slot = new_indptr[:cols]

    # Old rows visited ascending, so new rows fill column-sorted
    for i in range(rows):
        for k in range(indptr[i], indptr[i + 1]):
            col = indices[k]
            dest = next_slot[col]
            new_data[dest] = data[k]
            new_indices[dest] = i
            next_slot[col] = dest + 1

    return out


# =============================================================================
# Merge Arithmetic
# =============================================================================

def _merge_row(
    a_indices: List[int], a_data: List[Any], ka: int, ea: int,
    b_indices: List[int], b_data: List[Any], kb: int, eb: int,
) -> Iterator[Tuple[int, Any]]:
    """Yield the surviving (column, value) pairs of row_a + row_b."""
    while ka < ea and kb < eb:
        ca, cb = a_indices[ka], b_indices[kb]
        if ca == cb:
            value = a_data[ka] + b_data[kb]
            if value != 0:
                yield ca, value
            ka += 1
            kb += 1
        elif ca < cb:
            yield ca, a_data[ka]
            ka += 1
        else:
            yield cb, b_data[kb]
            kb += 1

    for k in range(ka, ea):
        yield a_indices[k], a_data[k]
    for k in range(kb, eb):
        yield b_indices[k], b_data[k]


def add_csr(a: CRSStorage, b: CRSStorage, rows: int, dtype: str) -> CRSStorage:
    """
    Element-wise sum of two CRS matrices of identical shape.

    Each row is a linear two-pointer merge of the operands' sorted
    column lists; sums that cancel (or narrow) to zero are dropped.

    Args:
        a: Left operand buffers
        b: Right operand buffers
        rows: Number of rows (shared)
        dtype: Value dtype of the result

    Returns:
        CRS buffers of a + b
    """
    a_data, a_indices, a_indptr = _unpack(a)
    b_data, b_indices, b_indptr = _unpack(b)

    def merged(i):
        for col, value in _merge_row(
            a_indices, a_data, a_indptr[i], a_indptr[i + 1],
            b_indices, b_data, b_indptr[i], b_indptr[i + 1],
        ):
            value = narrow(value, dtype)
            if value != 0:
                yield col, value

    # Pass 1: size
    indptr = zeros(rows + 1, dtype=INDEX_DTYPE)
    nnz = 0
    for i in range(rows):
        for _ in merged(i):
            nnz += 1
        indptr[i + 1] = nnz

    # Pass 2: fill
    data = zeros(nnz, dtype=dtype)
    indices = zeros(nnz, dtype=INDEX_DTYPE)
    pos = 0
    for i in range(rows):
        for col, value in merged(i):
            data[pos] = value
            indices[pos] = col
            pos += 1

    assert pos == nnz
    return CRSStorage(data=data, indices=indices, indptr=indptr)


def negate_csr(a: CRSStorage) -> CRSStorage:
    """
    Additive inverse of every stored value; structure unchanged.

    Args:
        a: Operand buffers

    Returns:
        New CRS buffers holding -a
    """
    values = a.data.tolist()
    data = Array(len(values), a.dtype)
    for k, value in enumerate(values):
        data[k] = -value

    return CRSStorage(data=data, indices=a.indices.copy(), indptr=a.indptr.copy())


def scale_csr(a: CRSStorage, rows: int, alpha: Any, dtype: str) -> CRSStorage:
    """
    Multiply every stored value by a scalar.

    Products equal to zero are dropped, so scaling by zero yields a
    matrix without stored entries.

    Args:
        a: Operand buffers
        rows: Number of rows
        alpha: Scalar factor
        dtype: Value dtype of the result

    Returns:
        CRS buffers of alpha * a
    """
    a_data, a_indices, a_indptr = _unpack(a)

    # Pass 1: size
    indptr = zeros(rows + 1, dtype=INDEX_DTYPE)
    nnz = 0
    for i in range(rows):
        for k in range(a_indptr[i], a_indptr[i + 1]):
            if narrow(a_data[k] * alpha, dtype) != 0:
                nnz += 1
        indptr[i + 1] = nnz

    # Pass 2: fill
    data = zeros(nnz, dtype=dtype)
    indices = zeros(nnz, dtype=INDEX_DTYPE)
    pos = 0
    for k in range(len(a_data)):
        value = narrow(a_data[k] * alpha, dtype)
        if value != 0:
            data[pos] = value
            indices[pos] = a_indices[k]
            pos += 1

    assert pos == nnz
    return CRSStorage(data=data, indices=indices, indptr=indptr)


# =============================================================================
# Multiplication
# =============================================================================

def _dot(
    a_indices: List[int], a_data: List[Any], ka: int, ea: int,
    b_indices: List[int], b_data: List[Any], kb: int, eb: int,
) -> Any:
    """Dot product of two column-sorted sparse rows."""
    acc = 0
    while ka < ea and kb < eb:
        ca, cb = a_indices[ka], b_indices[kb]
        if ca == cb:
            acc += a_data[ka] * b_data[kb]
            ka += 1
            kb += 1
        elif ca < cb:
            ka += 1
        else:
            kb += 1
    return acc


def matmul_csr(
    a: CRSStorage,
    a_shape: Tuple[int, int],
    b: CRSStorage,
    b_shape: Tuple[int, int],
    dtype: str,
) -> CRSStorage:
    """
    Sparse matrix product a @ b.

    The right operand is transposed first so that its columns become
    contiguous, column-sorted rows; each output entry is then a linear
    merge of two sorted rows. Empty rows on either side are skipped.

    Args:
        a: Left operand buffers
        a_shape: (rows, cols) of the left operand
        b: Right operand buffers
        b_shape: (rows, cols) of the right operand
        dtype: Value dtype of the result

    Returns:
        CRS buffers of the (a_rows, b_cols) product

    Raises:
        DimensionMismatch: If a_cols != b_rows
    """
    a_rows, a_cols = a_shape
    b_rows, b_cols = b_shape
    status = CRS_OK if a_cols == b_rows else CRS_ERROR_DIMENSION_MISMATCH
    check_error(status, f"matmul_csr {a_shape} @ {b_shape}")

    a_data, a_indices, a_indptr = _unpack(a)
    bt_data, bt_indices, bt_indptr = _unpack(transpose_csr(b, b_rows, b_cols))

    bt_nonempty = [j for j in range(b_cols) if bt_indptr[j] < bt_indptr[j + 1]]

    def products(i):
        ka, ea = a_indptr[i], a_indptr[i + 1]
        if ka == ea:
            return
        for j in bt_nonempty:
            value = _dot(
                a_indices, a_data, ka, ea,
                bt_indices, bt_data, bt_indptr[j], bt_indptr[j + 1],
            )
            value = narrow(value, dtype)
            if value != 0:
                yield j, value

    # Pass 1: size
    indptr = zeros(a_rows + 1, dtype=INDEX_DTYPE)
    nnz = 0
    for i in range(a_rows):
        for _ in products(i):
            nnz += 1
        indptr[i + 1] = nnz

    # Pass 2: fill, columns ascending because bt rows are visited in order
    data = zeros(nnz, dtype=dtype)
    indices = zeros(nnz, dtype=INDEX_DTYPE)
    pos = 0
    for i in range(a_rows):
        for col, value in products(i):
            data[pos] = value
            indices[pos] = col
            pos += 1

    assert pos == nnz
    return CRSStorage(data=data, indices=indices, indptr=indptr)
