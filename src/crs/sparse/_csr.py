"""CRS (Compressed Sparse Row) Matrix.

This module provides CRSMatrix, a value-type sparse matrix that:
- Exclusively owns its three buffers (data, indices, indptr)
- Supports deep copy and move (ownership transfer) semantics
- Keeps canonical form: rows column-sorted, no stored zeros
- Implements sparse-aware arithmetic without densifying

Lifecycle:
    - Empty: no storage assigned (CRSMatrix()). Distinct from a valid
      matrix with zero rows or zero stored entries.
    - Copy: copy(), copy.copy(), copy.deepcopy(), assign(other)
    - Move: CRSMatrix.take(other), move_assign(other); the source is
      left empty
    - Release: clear()

Example:
    >>> a = CRSMatrix.from_dense([[1, 0], [0, 2]])
    >>> b = CRSMatrix.from_dense([[3, 4], [5, 6]])
    >>> (a @ b).to_list()
    [[3.0, 4.0], [10.0, 12.0]]
    >>> c = CRSMatrix.take(a)   # a is now empty
    >>> a.is_empty
    True
"""

import logging
import numbers
from bisect import bisect_left
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from ._array import Array, from_list, zeros
from ._base import CSRBase
from ._dtypes import (
    DType, INDEX_DTYPE,
    normalize_dtype, validate_dtype, is_float_dtype,
    result_dtype, scaled_dtype,
)
from ._storage import CRSStorage
from .._kernel import algebra, convert
from ..core.config import get_config, get_default_dtype
from ..core.error import DimensionMismatch, EmptyMatrixError

__all__ = ['CRSMatrix', 'CSRMatrix']

logger = logging.getLogger("crs.sparse")

_DTYPE_NAMES = {e.value for e in DType}


def _structure_errors(storage: CRSStorage, shape: Tuple[int, int]) -> Iterator[str]:
    """Yield a message for every violated CRS invariant."""
    rows, cols = shape
    data = storage.data.tolist()
    indices = storage.indices.tolist()
    indptr = storage.indptr.tolist()
    nnz = len(data)

    if rows < 0 or cols < 0:
        yield f"Invalid shape: {shape}"
        return
    if len(indptr) != rows + 1:
        yield f"indptr size mismatch: expected {rows + 1}, got {len(indptr)}"
        return
    if len(indices) != nnz:
        yield f"data/indices size mismatch: {nnz} vs {len(indices)}"
        return
    if indptr[0] != 0:
        yield f"indptr[0] must be 0, got {indptr[0]}"
    if indptr[rows] != nnz:
        yield f"indptr[{rows}] must equal nnz={nnz}, got {indptr[rows]}"

    for i in range(rows):
        start, end = indptr[i], indptr[i + 1]
        if start > end:
            yield f"indptr decreases at row {i}: {start} > {end}"
            continue
        prev = -1
        for k in range(start, min(end, nnz)):
            col = indices[k]
            if col < 0 or col >= cols:
                yield f"Column {col} out of bounds [0, {cols}) in row {i}"
            elif col <= prev:
                yield f"Columns not strictly ascending in row {i}"
            if data[k] == 0:
                yield f"Explicit zero stored at row {i}, column {col}"
            prev = col


def _infer_dense_dtype(dense: Any) -> str:
    """Pick a dtype for dense input when none is given."""
    np_dtype = getattr(dense, 'dtype', None)
    if np_dtype is not None:
        if np_dtype.name in _DTYPE_NAMES:
            return np_dtype.name
        if np_dtype.kind in 'iub':
            return 'int64'
        if np_dtype.kind == 'f':
            return 'float64'
    return get_default_dtype()


def _finish(result: 'CRSMatrix', op: str, *operands: 'CRSMatrix') -> 'CRSMatrix':
    """Validate (when configured) and log an arithmetic result."""
    if get_config().check_invariants:
        result.check_invariants()
    logger.debug(
        "%s %s -> shape=%s nnz=%d",
        op, " ".join(str(m.shape) for m in operands), result.shape, result.nnz,
    )
    return result


class CRSMatrix(CSRBase):
    """Compressed Sparse Row matrix with owned buffers.

    Attributes:
        shape: Matrix dimensions (rows, cols).
        dtype: Value data type ('float32', 'float64', 'int32', 'int64').
        nnz: Number of stored (non-zero) elements.
        data: Stored values, row-major, columns ascending within a row.
        indices: Column index of each stored value.
        indptr: Row offsets into data/indices, length rows + 1.

    Example:
        >>> mat = CRSMatrix.from_dense([[0, 0], [5, 0]])
        >>> mat.data.tolist(), mat.indices.tolist(), mat.indptr.tolist()
        ([5.0], [0], [0, 0, 1])
    """

    __slots__ = ('_shape', '_dtype', '_storage')

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(
        self,
        data: Optional[Array] = None,
        indices: Optional[Array] = None,
        indptr: Optional[Array] = None,
        shape: Optional[Tuple[int, int]] = None,
        *,
        dtype: Optional[Union[str, DType]] = None,
        _storage: Optional[CRSStorage] = None,
    ):
        """Initialize CRSMatrix.

        Note:
            Prefer using factory methods (from_dense, from_arrays, zeros)
            instead of direct initialization. Arrays passed here are
            adopted: the matrix takes their buffers and leaves the
            passed Arrays released.

        Args:
            data: Non-zero values array.
            indices: Column indices array (int64).
            indptr: Row pointer array (int64).
            shape: Matrix dimensions (rows, cols).
            dtype: Value dtype of an empty matrix.
            _storage: Internal pre-built storage.
        """
        self._storage = None
        self._shape = (0, 0)
        self._dtype = normalize_dtype(dtype) if dtype is not None else get_default_dtype()

        if _storage is not None:
            # Internal construction with freshly built buffers
            self._shape = (int(shape[0]), int(shape[1]))
            self._dtype = _storage.dtype
            self._storage = _storage

        elif data is not None:
            if shape is None:
                raise ValueError("shape is required when constructing from arrays")
            self._validate_arrays(data, indices, indptr, shape)

            storage = CRSStorage(data=data.take(), indices=indices.take(), indptr=indptr.take())
            self._shape = (int(shape[0]), int(shape[1]))
            self._dtype = storage.dtype
            self._storage = storage

        elif shape is not None:
            raise ValueError(
                "shape given without data, indices and indptr; "
                "use CRSMatrix.zeros(rows, cols) for a matrix without entries"
            )

    @staticmethod
    def _validate_arrays(
        data: Array,
        indices: Array,
        indptr: Array,
        shape: Tuple[int, int],
    ) -> None:
        """Validate array types, sizes and canonical CRS structure."""
        if indices is None or indptr is None:
            raise ValueError("data, indices and indptr must be given together")
        if data.dtype not in _DTYPE_NAMES:
            raise TypeError(f"Unsupported data dtype: {data.dtype}")
        if indices.dtype != INDEX_DTYPE:
            raise TypeError(f"indices must be int64, got {indices.dtype}")
        if indptr.dtype != INDEX_DTYPE:
            raise TypeError(f"indptr must be int64, got {indptr.dtype}")

        for message in _structure_errors(CRSStorage(data, indices, indptr), tuple(shape)):
            raise ValueError(message)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def shape(self) -> Tuple[int, int]:
        """Matrix dimensions (rows, cols)."""
        return self._shape

    def dim(self) -> Tuple[int, int]:
        """Matrix dimensions (rows, cols)."""
        return self._shape

    @property
    def dtype(self) -> str:
        """Value data type string."""
        return self._dtype

    @property
    def nnz(self) -> int:
        """Number of stored elements (0 for an empty matrix)."""
        if self._storage is None:
            return 0
        return self._storage.nnz

    @property
    def is_empty(self) -> bool:
        """True if no matrix is assigned (no storage)."""
        return self._storage is None

    @property
    def is_zero_matrix(self) -> bool:
        """True if the matrix stores no elements."""
        return self.nnz == 0

    @property
    def nbytes(self) -> int:
        """Memory held by the three buffers."""
        if self._storage is None:
            return 0
        return self._storage.nbytes

    @property
    def data(self) -> Array:
        """Stored values array."""
        return self._require_storage().data

    @property
    def indices(self) -> Array:
        """Column indices array."""
        return self._require_storage().indices

    @property
    def indptr(self) -> Array:
        """Row pointer array."""
        return self._require_storage().indptr

    def _require_storage(self) -> CRSStorage:
        if self._storage is None:
            raise EmptyMatrixError("matrix has no storage assigned")
        return self._storage

    def _storage_or_zero(self) -> CRSStorage:
        """Storage, or that of a zero matrix of the same shape when empty."""
        if self._storage is None:
            return CRSStorage.allocate(self.rows, 0, self._dtype)
        return self._storage

    def same_shape(self, other: 'CRSMatrix') -> bool:
        """Check whether both matrices have the same (rows, cols)."""
        return self._shape == other._shape

    # =========================================================================
    # CSRBase Interface Implementation
    # =========================================================================

    def _check_row(self, i: int) -> int:
        self._require_storage()
        if i < 0:
            i += self.rows
        if i < 0 or i >= self.rows:
            raise IndexError(f"Row {i} out of bounds [0, {self.rows})")
        return i

    def row_values(self, i: int) -> Array:
        """Get stored values for row i (a copy)."""
        i = self._check_row(i)
        start, end = self._storage.row_bounds(i)
        return from_list(self._storage.data[start:end], dtype=self._dtype)

    def row_indices(self, i: int) -> Array:
        """Get column indices of stored values for row i (a copy)."""
        i = self._check_row(i)
        start, end = self._storage.row_bounds(i)
        return from_list(self._storage.indices[start:end], dtype=INDEX_DTYPE)

    def row_length(self, i: int) -> int:
        """Get number of stored elements in row i."""
        i = self._check_row(i)
        start, end = self._storage.row_bounds(i)
        return end - start

    def get_row_dense(self, i: int) -> Array:
        """Get row as dense array."""
        i = self._check_row(i)
        start, end = self._storage.row_bounds(i)

        result = zeros(self.cols, dtype=self._dtype)
        for k in range(start, end):
            result[self._storage.indices[k]] = self._storage.data[k]
        return result

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def from_dense(
        cls,
        dense: Sequence[Sequence[Any]],
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        dtype: Optional[Union[str, DType]] = None,
    ) -> 'CRSMatrix':
        """Create from a dense rectangular matrix.

        Args:
            dense: 2D list [rows][cols] or 2D numpy array.
            rows: Expected number of rows (checked when given).
            cols: Expected number of columns (checked when given; also
                the column count of an input without rows).
            dtype: Value dtype. Defaults to the array's dtype for numpy
                input, else the configured default.

        Returns:
            New CRSMatrix storing only the non-zero cells.

        Raises:
            ValueError: If the input is ragged or does not match rows/cols.

        Example:
            >>> mat = CRSMatrix.from_dense([[1, 0, 2], [0, 3, 0]])
            >>> mat.shape, mat.nnz
            ((2, 3), 3)
        """
        if dtype is None:
            dtype = _infer_dense_dtype(dense)
        dtype = normalize_dtype(dtype)
        validate_dtype(dtype)

        if getattr(dense, 'ndim', 2) != 2:
            raise ValueError(f"Expected a 2D input, got ndim={dense.ndim}")

        n_rows = len(dense)
        if n_rows > 0:
            n_cols = len(dense[0])
        elif hasattr(dense, 'shape'):
            n_cols = dense.shape[1]
        else:
            n_cols = cols or 0

        if rows is not None and rows != n_rows:
            raise ValueError(f"Row count mismatch: expected {rows}, got {n_rows}")
        if cols is not None and cols != n_cols:
            raise ValueError(f"Column count mismatch: expected {cols}, got {n_cols}")
        for i in range(n_rows):
            if len(dense[i]) != n_cols:
                raise ValueError(
                    f"Ragged input: row {i} has {len(dense[i])} columns, expected {n_cols}"
                )

        storage = convert.dense_to_csr(dense, n_rows, n_cols, dtype)
        return cls(shape=(n_rows, n_cols), _storage=storage)

    @classmethod
    def from_arrays(
        cls,
        data: Union[List, Array],
        indices: Union[List, Array],
        indptr: Union[List, Array],
        shape: Tuple[int, int],
        dtype: Optional[Union[str, DType]] = None,
    ) -> 'CRSMatrix':
        """Create from raw CRS arrays (copied).

        Args:
            data: Stored values.
            indices: Column indices.
            indptr: Row pointers.
            shape: Matrix dimensions.
            dtype: Value dtype for list input (default: configured default).

        Returns:
            CRSMatrix owning copies of the arrays.

        Raises:
            ValueError: If the arrays do not describe a canonical CRS matrix.
        """
        if isinstance(data, Array):
            data = data.copy()
        else:
            data = from_list(data, dtype=dtype if dtype is not None else get_default_dtype())
        indices = indices.copy() if isinstance(indices, Array) else from_list(indices, dtype=INDEX_DTYPE)
        indptr = indptr.copy() if isinstance(indptr, Array) else from_list(indptr, dtype=INDEX_DTYPE)

        return cls(data, indices, indptr, shape)

    @classmethod
    def zeros(
        cls,
        rows: int,
        cols: int,
        dtype: Optional[Union[str, DType]] = None,
    ) -> 'CRSMatrix':
        """Create a zero matrix (no stored elements)."""
        if rows < 0 or cols < 0:
            raise ValueError(f"Invalid shape: {(rows, cols)}")
        dtype = normalize_dtype(dtype) if dtype is not None else get_default_dtype()
        validate_dtype(dtype)
        return cls(shape=(rows, cols), _storage=CRSStorage.allocate(rows, 0, dtype))

    @classmethod
    def from_scipy(cls, mat: Any) -> 'CRSMatrix':
        """Create from any scipy sparse matrix (copied, canonicalized).

        Duplicate entries are summed, explicit zeros dropped and column
        indices sorted before copying.
        """
        try:
            import scipy.sparse as sp
        except ImportError:
            raise ImportError("scipy required for from_scipy()")

        if not sp.issparse(mat):
            raise TypeError(f"Expected a scipy sparse matrix, got {type(mat)}")

        csr = sp.csr_matrix(mat, copy=True)
        csr.sum_duplicates()
        csr.eliminate_zeros()
        csr.sort_indices()

        dtype = _infer_dense_dtype(csr)
        return cls.from_arrays(
            csr.data.tolist(), csr.indices.tolist(), csr.indptr.tolist(),
            shape=csr.shape, dtype=dtype,
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _replace(self, storage: Optional[CRSStorage], shape: Tuple[int, int], dtype: str) -> None:
        """Install new storage, releasing the previous buffers first."""
        old = self._storage
        if old is not None and old is not storage:
            old.release()
        self._storage = storage
        self._shape = shape
        self._dtype = dtype

    def clear(self) -> None:
        """Release all buffers and return to the empty state. Idempotent."""
        self._replace(None, (0, 0), self._dtype)

    def copy(self) -> 'CRSMatrix':
        """Create a deep copy with independent buffers."""
        if self._storage is None:
            return CRSMatrix(dtype=self._dtype)
        return CRSMatrix(shape=self._shape, _storage=self._storage.copy())

    def __copy__(self) -> 'CRSMatrix':
        return self.copy()

    def __deepcopy__(self, memo) -> 'CRSMatrix':
        return self.copy()

    def assign(self, other: 'CRSMatrix') -> 'CRSMatrix':
        """Copy-assign: replace this matrix with a duplicate of other."""
        if other is self:
            return self
        storage = other._storage.copy() if other._storage is not None else None
        self._replace(storage, other._shape, other._dtype)
        return self

    def move_assign(self, other: 'CRSMatrix') -> 'CRSMatrix':
        """Move-assign: adopt other's buffers and leave other empty.

        Moving a matrix into itself is a no-op.
        """
        if other is self:
            return self
        storage = other._storage.take() if other._storage is not None else None
        shape, dtype = other._shape, other._dtype
        other._storage = None
        other._shape = (0, 0)

        self._replace(storage, shape, dtype)
        return self

    @classmethod
    def take(cls, other: 'CRSMatrix') -> 'CRSMatrix':
        """Move-construct: new matrix adopting other's buffers.

        The source is left empty; no element is copied.
        """
        return cls(dtype=other._dtype).move_assign(other)

    def check_invariants(self) -> None:
        """Assert the canonical CRS invariants hold.

        A violation is a programming error in this library, not a
        recoverable condition.
        """
        if self._storage is None:
            assert self._shape == (0, 0), f"empty matrix with shape {self._shape}"
            return
        for message in _structure_errors(self._storage, self._shape):
            raise AssertionError(message)

    # =========================================================================
    # Conversion Methods
    # =========================================================================

    def _zero(self) -> Any:
        return 0.0 if is_float_dtype(self._dtype) else 0

    def _dense_rows(self) -> Iterator[List[Any]]:
        return convert.iter_dense_rows(self._storage, self.rows, self.cols, self._zero())

    def to_list(self) -> List[List[Any]]:
        """Convert to a dense nested list."""
        if self._storage is None:
            return []
        return list(self._dense_rows())

    def to_dense(self) -> np.ndarray:
        """Convert to a dense numpy array."""
        if self._storage is None:
            return np.zeros((0, 0), dtype=self._dtype)
        dense = np.zeros(self._shape, dtype=self._dtype)
        for i, row in enumerate(self._dense_rows()):
            dense[i, :] = row
        return dense

    def to_scipy(self) -> Any:
        """Convert to scipy.sparse.csr_matrix."""
        try:
            import scipy.sparse as sp
        except ImportError:
            raise ImportError("scipy required for to_scipy()")

        if self._storage is None:
            return sp.csr_matrix((0, 0), dtype=self._dtype)

        return sp.csr_matrix(
            (self._storage.data.to_numpy(),
             self._storage.indices.to_numpy(),
             self._storage.indptr.to_numpy()),
            shape=self._shape,
        )

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def transpose(self) -> 'CRSMatrix':
        """Return the transpose as a new matrix."""
        if self._storage is None:
            return CRSMatrix(dtype=self._dtype)
        storage = algebra.transpose_csr(self._storage, self.rows, self.cols)
        return _finish(CRSMatrix(shape=(self.cols, self.rows), _storage=storage), "transpose", self)

    @property
    def T(self) -> 'CRSMatrix':
        """Transpose (new matrix)."""
        return self.transpose()

    def transpose_inplace(self) -> 'CRSMatrix':
        """Replace this matrix with its transpose."""
        return self.move_assign(self.transpose())

    def negate(self) -> 'CRSMatrix':
        """Return -self."""
        if self._storage is None:
            return CRSMatrix(dtype=self._dtype)
        storage = algebra.negate_csr(self._storage)
        return _finish(CRSMatrix(shape=self._shape, _storage=storage), "negate", self)

    def scale(self, alpha: Any) -> 'CRSMatrix':
        """Return alpha * self. Entries whose product is zero are dropped."""
        dtype = scaled_dtype(self._dtype, alpha)
        if self._storage is None:
            return CRSMatrix(dtype=dtype)
        storage = algebra.scale_csr(self._storage, self.rows, alpha, dtype)
        return _finish(CRSMatrix(shape=self._shape, _storage=storage), "scale", self)

    def scale_inplace(self, alpha: Any) -> 'CRSMatrix':
        """Multiply this matrix by alpha in place.

        Raises:
            TypeError: If alpha would change the value dtype (e.g. an
                integer matrix scaled by a float).
        """
        dtype = scaled_dtype(self._dtype, alpha)
        if dtype != self._dtype:
            raise TypeError(
                f"Cannot scale {self._dtype} matrix in place by {alpha!r}: result would be {dtype}"
            )
        if self._storage is not None:
            storage = algebra.scale_csr(self._storage, self.rows, alpha, dtype)
            self._replace(storage, self._shape, dtype)
            _finish(self, "scale_inplace", self)
        return self

    def add(self, other: 'CRSMatrix') -> 'CRSMatrix':
        """Return self + other.

        Raises:
            DimensionMismatch: If shapes differ.
        """
        if not self.same_shape(other):
            raise DimensionMismatch.from_shapes("add", self._shape, other._shape)

        dtype = result_dtype(self._dtype, other._dtype)
        if self._storage is None and other._storage is None:
            return CRSMatrix(dtype=dtype)

        storage = algebra.add_csr(self._storage_or_zero(), other._storage_or_zero(), self.rows, dtype)
        return _finish(CRSMatrix(shape=self._shape, _storage=storage), "add", self, other)

    def subtract(self, other: 'CRSMatrix') -> 'CRSMatrix':
        """Return self - other, computed as self + (-other).

        Raises:
            DimensionMismatch: If shapes differ.
        """
        if not self.same_shape(other):
            raise DimensionMismatch.from_shapes("subtract", self._shape, other._shape)
        return self.add(other.negate())

    def matmul(self, other: 'CRSMatrix') -> 'CRSMatrix':
        """Return the matrix product self @ other.

        Raises:
            DimensionMismatch: If self.cols != other.rows.
        """
        if self.cols != other.rows:
            raise DimensionMismatch.from_shapes("matmul", self._shape, other._shape)

        dtype = result_dtype(self._dtype, other._dtype)
        if self._storage is None and other._storage is None:
            return CRSMatrix(dtype=dtype)

        storage = algebra.matmul_csr(
            self._storage_or_zero(), self._shape,
            other._storage_or_zero(), other._shape,
            dtype,
        )
        return _finish(CRSMatrix(shape=(self.rows, other.cols), _storage=storage), "matmul", self, other)

    dot = matmul

    # =========================================================================
    # Operators
    # =========================================================================

    def __add__(self, other):
        if not isinstance(other, CRSMatrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, CRSMatrix):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> 'CRSMatrix':
        return self.negate()

    def __matmul__(self, other):
        if not isinstance(other, CRSMatrix):
            return NotImplemented
        return self.matmul(other)

    def __mul__(self, other):
        """Scalar -> scale; CRSMatrix -> matrix product."""
        if isinstance(other, CRSMatrix):
            return self.matmul(other)
        if isinstance(other, numbers.Number):
            return self.scale(other)
        return NotImplemented

    # numpy scalars on the left defer to __rmul__ instead of densifying
    __array_ufunc__ = None

    def __rmul__(self, other):
        if isinstance(other, numbers.Number):
            return self.scale(other)
        return NotImplemented

    def __imul__(self, other):
        if isinstance(other, CRSMatrix):
            return self.move_assign(self.matmul(other))
        if isinstance(other, numbers.Number):
            return self.scale_inplace(other)
        return NotImplemented

    def __eq__(self, other) -> bool:
        """Structural equality: same shape and same stored entries."""
        if not isinstance(other, CRSMatrix):
            return NotImplemented
        if self._storage is None or other._storage is None:
            return self._storage is None and other._storage is None
        return (
            self._shape == other._shape
            and self._storage.indptr.tolist() == other._storage.indptr.tolist()
            and self._storage.indices.tolist() == other._storage.indices.tolist()
            and self._storage.data.tolist() == other._storage.data.tolist()
        )

    __hash__ = None

    # =========================================================================
    # Indexing
    # =========================================================================

    def __getitem__(self, key) -> Union[Array, Any]:
        """Support mat[i] (dense row) and mat[i, j] (element)."""
        if isinstance(key, numbers.Integral):
            return self.get_row_dense(int(key))

        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
            if isinstance(i, numbers.Integral) and isinstance(j, numbers.Integral):
                return self._get_element(int(i), int(j))

        raise TypeError(f"Invalid index: {key!r}")

    def _get_element(self, i: int, j: int) -> Any:
        """Get single element by binary search within row i."""
        i = self._check_row(i)
        if j < 0:
            j += self.cols
        if j < 0 or j >= self.cols:
            raise IndexError(f"Column {j} out of bounds [0, {self.cols})")

        start, end = self._storage.row_bounds(i)
        indices = self._storage.indices
        k = bisect_left(indices, j, start, end)
        if k < end and indices[k] == j:
            return self._storage.data[k]
        return self._zero()

    # =========================================================================
    # Representation
    # =========================================================================

    def dump(self) -> str:
        """Raw buffers, one per line (values, column indices, row pointers)."""
        if self._storage is None:
            values, columns, offsets = [], [], []
        else:
            values = self._storage.data.tolist()
            columns = self._storage.indices.tolist()
            offsets = self._storage.indptr.tolist()
        return '\n'.join([
            f"V = {values}",
            f"COL_INDEX = {columns}",
            f"ROW_INDEX = {offsets}",
        ])

    def pretty(self) -> str:
        """Dense-style grid with implicit zeros filled in."""
        if self._storage is None:
            return "[]"

        grid = [[str(value) for value in row] for row in self._dense_rows()]
        width = max((len(cell) for row in grid for cell in row), default=1)
        return '\n'.join(
            "[ " + " ".join(cell.rjust(width) for cell in row) + " ]"
            for row in grid
        )

    def __repr__(self) -> str:
        if self._storage is None:
            return f"CRSMatrix(empty, dtype={self._dtype})"
        return (
            f"CRSMatrix(shape={self._shape}, nnz={self.nnz}, "
            f"dtype={self._dtype})"
        )

    def __str__(self) -> str:
        return self.pretty()

    def info(self) -> str:
        """Get detailed information string."""
        lines = [
            "CRSMatrix:",
            f"  shape: {self._shape}",
            f"  nnz: {self.nnz}",
            f"  dtype: {self._dtype}",
            f"  empty: {self.is_empty}",
            f"  density: {self.density:.4f}",
            f"  memory: {self.nbytes / 1024:.2f} KB",
        ]
        return '\n'.join(lines)


# Alias
CSRMatrix = CRSMatrix
