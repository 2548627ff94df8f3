"""
Tests for CRSMatrix construction, inspection and lifecycle.
"""

import copy

import pytest
import numpy as np
from crs.sparse import CRSMatrix, CSRMatrix, Array, from_list
from crs.sparse import float32, int32, int64
from crs.core import EmptyMatrixError


class TestCRSMatrixCreation:
    """Test CRSMatrix creation."""

    def test_create_from_arrays(self, requires_crs):
        """Test creating CRSMatrix from arrays."""
        data = from_list([1.0, 2.0, 3.0])
        indices = from_list([0, 2, 1], dtype=int64)
        indptr = from_list([0, 2, 3, 3], dtype=int64)

        mat = CRSMatrix(data, indices, indptr, shape=(3, 4))
        assert mat.shape == (3, 4)
        assert mat.nnz == 3
        assert mat.rows == 3
        assert mat.cols == 4

    def test_constructor_adopts_arrays(self, requires_crs):
        """Test the constructor takes ownership of the passed arrays."""
        data = from_list([1.0])
        indices = from_list([0], dtype=int64)
        indptr = from_list([0, 1], dtype=int64)
        ptr = data.ptr

        mat = CRSMatrix(data, indices, indptr, shape=(1, 1))

        assert mat.data.ptr == ptr
        assert data.size == 0

    def test_create_default_is_empty(self, requires_crs):
        """Test the default matrix is the empty state."""
        mat = CRSMatrix()
        assert mat.is_empty
        assert mat.shape == (0, 0)
        assert mat.nnz == 0
        assert mat.is_zero_matrix

    def test_create_zeros(self, requires_crs):
        """Test creating zero matrix."""
        mat = CRSMatrix.zeros(10, 20, dtype='float32')
        assert mat.shape == (10, 20)
        assert mat.nnz == 0
        assert mat.dtype == 'float32'
        assert not mat.is_empty
        assert mat.is_zero_matrix
        assert mat.indptr.tolist() == [0] * 11

    def test_zero_rows_is_not_empty(self, requires_crs):
        """Test a valid 0-row matrix differs from the empty state."""
        mat = CRSMatrix.zeros(0, 0)
        assert not mat.is_empty
        assert mat.indptr.tolist() == [0]
        assert mat != CRSMatrix()

    def test_create_from_dense(self, requires_crs, dense_small):
        """Test creating from dense 2D list."""
        mat = CRSMatrix.from_dense(dense_small)
        assert mat.shape == (3, 4)
        assert mat.nnz == 6
        assert mat.dtype == 'float64'

    def test_from_dense_scenario(self, requires_crs):
        """Test [[0, 0], [5, 0]] buffers."""
        mat = CRSMatrix.from_dense([[0, 0], [5, 0]])
        assert mat.data.tolist() == [5]
        assert mat.indices.tolist() == [0]
        assert mat.indptr.tolist() == [0, 0, 1]

    def test_from_dense_matches_arrays(self, small_csr_matrix, small_csr_from_dense):
        """Test dense construction matches raw construction."""
        assert small_csr_from_dense == small_csr_matrix

    def test_from_dense_explicit_dims(self, requires_crs):
        """Test explicit dimensions are checked."""
        mat = CRSMatrix.from_dense([[1, 0, 0]], rows=1, cols=3)
        assert mat.shape == (1, 3)

        with pytest.raises(ValueError):
            CRSMatrix.from_dense([[1, 0, 0]], rows=2)
        with pytest.raises(ValueError):
            CRSMatrix.from_dense([[1, 0, 0]], cols=2)

    def test_from_dense_no_rows(self, requires_crs):
        """Test dense input without rows."""
        mat = CRSMatrix.from_dense([], cols=3)
        assert mat.shape == (0, 3)
        assert not mat.is_empty
        assert mat.to_list() == []

    def test_from_dense_ragged(self, requires_crs):
        """Test ragged input is rejected."""
        with pytest.raises(ValueError):
            CRSMatrix.from_dense([[1, 2], [3]])

    def test_from_dense_numpy(self, requires_crs):
        """Test numpy input keeps its dtype."""
        mat = CRSMatrix.from_dense(np.array([[0, 1], [2, 0]], dtype=np.int32))
        assert mat.dtype == 'int32'
        assert mat.data.tolist() == [1, 2]

    def test_from_dense_numpy_1d(self, requires_crs):
        """Test 1D numpy input is rejected."""
        with pytest.raises(ValueError):
            CRSMatrix.from_dense(np.array([1, 0, 2]))

    def test_from_dense_dtype(self, requires_crs):
        """Test explicit dtype."""
        mat = CRSMatrix.from_dense([[1, 0], [0, 2]], dtype=int64)
        assert mat.dtype == 'int64'
        assert isinstance(mat.data[0], int)

    def test_from_dense_drops_truncated(self, requires_crs):
        """Test cells that truncate to zero in an integer buffer are not stored."""
        mat = CRSMatrix.from_dense([[0.5, 1.0]], dtype=int64)
        assert mat.data.tolist() == [1]
        assert mat.indices.tolist() == [1]
        assert mat.to_list() == [[0, 1]]
        mat.check_invariants()

    def test_from_dense_drops_underflow(self, requires_crs):
        """Test cells that underflow in float32 are not stored."""
        mat = CRSMatrix.from_dense([[1e-50, 1.0]], dtype=float32)
        assert mat.nnz == 1
        assert mat.indices.tolist() == [1]
        mat.check_invariants()

    def test_from_dense_drops_wrapped(self, requires_crs):
        """Test integers that wrap to zero in int32 are not stored."""
        mat = CRSMatrix.from_dense(np.array([[2 ** 32, 3]], dtype=np.int64), dtype=int32)
        assert mat.data.tolist() == [3]
        assert mat.indptr.tolist() == [0, 1]

    def test_alias(self, requires_crs):
        """Test CSRMatrix alias."""
        assert CSRMatrix is CRSMatrix


class TestCRSMatrixValidation:
    """Test validation of raw arrays."""

    def test_from_arrays_lists(self, requires_crs):
        """Test from_arrays() with lists."""
        mat = CRSMatrix.from_arrays([1, 2], [1, 0], [0, 1, 2], shape=(2, 2), dtype=int32)
        assert mat.to_list() == [[0, 1], [2, 0]]

    def test_from_arrays_copies(self, requires_crs):
        """Test from_arrays() leaves Array arguments untouched."""
        data = from_list([1.0])
        mat = CRSMatrix.from_arrays(data, [0], [0, 1], shape=(1, 1))
        assert data.size == 1
        assert mat.data.ptr != data.ptr

    def test_invalid_shape(self, requires_crs):
        """Test invalid shape."""
        with pytest.raises(ValueError):
            CRSMatrix.from_arrays([1.0], [0], [0, 1], shape=(-1, 10))

    def test_indptr_size_mismatch(self, requires_crs):
        """Test indptr size mismatch."""
        with pytest.raises(ValueError):
            CRSMatrix.from_arrays([1.0], [0], [0, 1, 1], shape=(3, 10))

    def test_indices_size_mismatch(self, requires_crs):
        """Test indices size mismatch."""
        with pytest.raises(ValueError):
            CRSMatrix.from_arrays([1.0, 2.0], [0], [0, 2], shape=(1, 10))

    def test_unsorted_columns(self, requires_crs):
        """Test columns must be strictly ascending within a row."""
        with pytest.raises(ValueError):
            CRSMatrix.from_arrays([1.0, 2.0], [2, 0], [0, 2], shape=(1, 3))
        with pytest.raises(ValueError):
            CRSMatrix.from_arrays([1.0, 2.0], [1, 1], [0, 2], shape=(1, 3))

    def test_column_out_of_range(self, requires_crs):
        """Test columns must be within the matrix."""
        with pytest.raises(ValueError):
            CRSMatrix.from_arrays([1.0], [3], [0, 1], shape=(1, 3))

    def test_explicit_zero(self, requires_crs):
        """Test stored zeros are rejected."""
        with pytest.raises(ValueError):
            CRSMatrix.from_arrays([0.0], [0], [0, 1], shape=(1, 3))

    def test_bad_indptr(self, requires_crs):
        """Test indptr must start at 0 and end at nnz."""
        with pytest.raises(ValueError):
            CRSMatrix.from_arrays([1.0], [0], [1, 1], shape=(1, 3))
        with pytest.raises(ValueError):
            CRSMatrix.from_arrays([1.0], [0], [0, 0], shape=(1, 3))

    def test_index_dtype(self, requires_crs):
        """Test index arrays must be int64."""
        data = from_list([1.0])
        indices = from_list([0], dtype=int32)
        indptr = from_list([0, 1], dtype=int64)
        with pytest.raises(TypeError):
            CRSMatrix(data, indices, indptr, shape=(1, 1))

    def test_shape_without_arrays(self, requires_crs):
        """Test a shape alone is rejected instead of building an empty matrix."""
        with pytest.raises(ValueError, match="zeros"):
            CRSMatrix(shape=(2, 2))

    def test_shape_required(self, requires_crs):
        """Test shape is required with arrays."""
        with pytest.raises(ValueError):
            CRSMatrix(from_list([1.0]), from_list([0], dtype=int64), from_list([0, 1], dtype=int64))


class TestCRSMatrixInspection:
    """Test properties and element access."""

    def test_dim(self, small_csr_matrix):
        """Test dim() and shape."""
        assert small_csr_matrix.dim() == (3, 4)
        assert small_csr_matrix.shape == (3, 4)
        assert len(small_csr_matrix) == 3

    def test_density(self, small_csr_matrix):
        """Test density."""
        assert small_csr_matrix.density == pytest.approx(0.5)

    def test_nbytes(self, small_csr_matrix):
        """Test nbytes counts all three buffers."""
        assert small_csr_matrix.nbytes == 6 * 8 + 6 * 8 + 4 * 8
        assert CRSMatrix().nbytes == 0

    def test_element_access(self, small_csr_matrix):
        """Test mat[i, j]."""
        assert small_csr_matrix[0, 0] == 1.0
        assert small_csr_matrix[1, 3] == 4.0
        assert small_csr_matrix[2, 1] == 0.0
        assert small_csr_matrix[-1, -1] == 6.0

    def test_element_out_of_bounds(self, small_csr_matrix):
        """Test bounds checks on element access."""
        with pytest.raises(IndexError):
            small_csr_matrix[3, 0]
        with pytest.raises(IndexError):
            small_csr_matrix[0, 4]

    def test_invalid_key(self, small_csr_matrix):
        """Test unsupported keys."""
        with pytest.raises(TypeError):
            small_csr_matrix["a"]

    def test_row_access(self, small_csr_matrix):
        """Test mat[i] returns the dense row."""
        assert small_csr_matrix[1].tolist() == [0.0, 3.0, 0.0, 4.0]

    def test_get_row(self, small_csr_matrix):
        """Test get_row() returns (values, indices)."""
        values, indices = small_csr_matrix.get_row(2)
        assert values.tolist() == [5.0, 6.0]
        assert indices.tolist() == [0, 3]
        assert small_csr_matrix.row_length(2) == 2

    def test_iter_rows(self, small_csr_matrix):
        """Test iter_rows() visits every row."""
        lengths = [len(values) for values, _ in small_csr_matrix.iter_rows()]
        assert lengths == [2, 2, 2]

    def test_empty_access(self, requires_crs):
        """Test buffer and element access on the empty state."""
        mat = CRSMatrix()
        with pytest.raises(EmptyMatrixError):
            mat.data
        with pytest.raises(EmptyMatrixError):
            mat[0, 0]


class TestCRSMatrixConversion:
    """Test dense reconstruction and printing."""

    def test_round_trip(self, small_csr_from_dense, dense_small):
        """Test dense -> sparse -> dense."""
        assert small_csr_from_dense.to_list() == dense_small
        np.testing.assert_array_equal(small_csr_from_dense.to_dense(), np.array(dense_small))

    def test_round_trip_all_zero(self, requires_crs):
        """Test all-zero input."""
        dense = [[0, 0, 0], [0, 0, 0]]
        mat = CRSMatrix.from_dense(dense, dtype=int64)
        assert mat.nnz == 0
        assert mat.indptr.tolist() == [0, 0, 0]
        assert mat.to_list() == dense

    def test_round_trip_fully_dense(self, requires_crs):
        """Test input without zeros."""
        dense = [[1, 2], [3, 4]]
        mat = CRSMatrix.from_dense(dense, dtype=int64)
        assert mat.nnz == 4
        assert mat.to_list() == dense

    def test_round_trip_random(self, requires_crs, random_dense, assert_canonical):
        """Test random integer matrices."""
        for rows, cols in [(1, 1), (3, 7), (8, 2), (6, 6)]:
            dense = random_dense(rows, cols)
            mat = CRSMatrix.from_dense(dense)
            assert_canonical(mat)
            assert mat.nnz == np.count_nonzero(dense)
            np.testing.assert_array_equal(mat.to_dense(), dense)

    def test_to_dense_empty(self, requires_crs):
        """Test to_dense() of the empty state."""
        assert CRSMatrix().to_dense().shape == (0, 0)
        assert CRSMatrix().to_list() == []

    def test_dump(self, requires_crs):
        """Test raw buffer dump."""
        mat = CRSMatrix.from_dense([[0, 0], [5, 0]])
        assert mat.dump() == "V = [5.0]\nCOL_INDEX = [0]\nROW_INDEX = [0, 0, 1]"

    def test_dump_empty(self, requires_crs):
        """Test dump of the empty state."""
        assert CRSMatrix().dump() == "V = []\nCOL_INDEX = []\nROW_INDEX = []"

    def test_pretty(self, requires_crs):
        """Test dense-style printing."""
        mat = CRSMatrix.from_dense([[0, 2], [3, 0]], dtype=int64)
        assert mat.pretty() == "[ 0 2 ]\n[ 3 0 ]"
        assert str(mat) == mat.pretty()

    def test_pretty_alignment(self, requires_crs):
        """Test columns are right-aligned to the widest cell."""
        mat = CRSMatrix.from_dense([[10, 0], [0, 2]], dtype=int64)
        assert mat.pretty() == "[ 10  0 ]\n[  0  2 ]"

    def test_repr(self, small_csr_matrix):
        """Test repr."""
        assert repr(small_csr_matrix) == "CRSMatrix(shape=(3, 4), nnz=6, dtype=float64)"
        assert repr(CRSMatrix()).startswith("CRSMatrix(empty")

    def test_info(self, small_csr_matrix):
        """Test info()."""
        text = small_csr_matrix.info()
        assert "shape: (3, 4)" in text
        assert "nnz: 6" in text


class TestCRSMatrixScipy:
    """Test scipy interoperability."""

    def test_to_scipy(self, small_csr_matrix, requires_scipy, dense_small):
        """Test converting to scipy matrix."""
        import scipy.sparse as sp

        scipy_mat = small_csr_matrix.to_scipy()
        assert sp.issparse(scipy_mat)
        assert scipy_mat.shape == (3, 4)
        assert scipy_mat.nnz == 6
        np.testing.assert_array_equal(scipy_mat.toarray(), dense_small)

    def test_from_scipy(self, requires_crs, requires_scipy, dense_small):
        """Test converting from scipy."""
        import scipy.sparse as sp

        mat = CRSMatrix.from_scipy(sp.csr_matrix(np.array(dense_small)))
        assert mat == CRSMatrix.from_dense(dense_small)

    def test_from_scipy_canonicalizes(self, requires_crs, requires_scipy):
        """Test duplicates are summed and explicit zeros dropped."""
        import scipy.sparse as sp

        coo = sp.coo_matrix(
            (np.array([1.0, 2.0, 0.0]), (np.array([0, 0, 1]), np.array([1, 1, 0]))),
            shape=(2, 2),
        )
        mat = CRSMatrix.from_scipy(coo)
        assert mat.to_list() == [[0.0, 3.0], [0.0, 0.0]]
        assert mat.nnz == 1

    def test_from_scipy_rejects_dense(self, requires_crs, requires_scipy):
        """Test non-sparse input is rejected."""
        with pytest.raises(TypeError):
            CRSMatrix.from_scipy(np.eye(2))


class TestCRSMatrixLifecycle:
    """Test copy, move and release semantics."""

    def test_copy_is_deep(self, small_csr_matrix):
        """Test copy() duplicates all three buffers."""
        dup = small_csr_matrix.copy()

        assert dup == small_csr_matrix
        assert dup.data.ptr != small_csr_matrix.data.ptr
        assert dup.indices.ptr != small_csr_matrix.indices.ptr
        assert dup.indptr.ptr != small_csr_matrix.indptr.ptr

        dup.data[0] = 42.0
        assert small_csr_matrix.data[0] == 1.0

    def test_copy_module(self, small_csr_matrix):
        """Test copy.copy and copy.deepcopy produce independent matrices."""
        for dup in (copy.copy(small_csr_matrix), copy.deepcopy(small_csr_matrix)):
            assert dup == small_csr_matrix
            assert dup.data.ptr != small_csr_matrix.data.ptr

    def test_copy_empty(self, requires_crs):
        """Test copying the empty state stays empty."""
        dup = CRSMatrix().copy()
        assert dup.is_empty

    def test_assign(self, small_csr_matrix):
        """Test copy-assignment releases old buffers and duplicates new ones."""
        target = CRSMatrix.from_dense([[7.0]])
        old_data = target.data

        target.assign(small_csr_matrix)

        assert target == small_csr_matrix
        assert target.data.ptr != small_csr_matrix.data.ptr
        assert old_data.size == 0

    def test_assign_self(self, small_csr_matrix):
        """Test self copy-assignment is a no-op."""
        ptr = small_csr_matrix.data.ptr
        small_csr_matrix.assign(small_csr_matrix)
        assert small_csr_matrix.data.ptr == ptr
        assert small_csr_matrix.nnz == 6

    def test_take(self, small_csr_matrix):
        """Test move construction transfers buffers and empties the source."""
        ptrs = (small_csr_matrix.data.ptr, small_csr_matrix.indices.ptr, small_csr_matrix.indptr.ptr)

        moved = CRSMatrix.take(small_csr_matrix)

        assert (moved.data.ptr, moved.indices.ptr, moved.indptr.ptr) == ptrs
        assert moved.shape == (3, 4)
        assert moved.nnz == 6
        assert small_csr_matrix.is_empty
        assert small_csr_matrix.shape == (0, 0)

    def test_move_assign(self, small_csr_matrix):
        """Test move assignment releases the target's old buffers."""
        target = CRSMatrix.from_dense([[7.0]])
        old_data = target.data
        ptr = small_csr_matrix.data.ptr

        target.move_assign(small_csr_matrix)

        assert target.data.ptr == ptr
        assert old_data.size == 0
        assert small_csr_matrix.is_empty

    def test_move_assign_self(self, small_csr_matrix):
        """Test self move-assignment is a no-op."""
        small_csr_matrix.move_assign(small_csr_matrix)
        assert not small_csr_matrix.is_empty
        assert small_csr_matrix.nnz == 6

    def test_move_from_empty(self, small_csr_matrix):
        """Test moving the empty state into a matrix empties it."""
        small_csr_matrix.move_assign(CRSMatrix())
        assert small_csr_matrix.is_empty

    def test_clear(self, small_csr_matrix):
        """Test clear() releases buffers and is idempotent."""
        data = small_csr_matrix.data
        small_csr_matrix.clear()

        assert small_csr_matrix.is_empty
        assert small_csr_matrix.shape == (0, 0)
        assert small_csr_matrix.nnz == 0
        assert data.size == 0

        small_csr_matrix.clear()
        assert small_csr_matrix.is_empty

    def test_check_invariants(self, small_csr_matrix):
        """Test invariant checking catches corrupted buffers."""
        small_csr_matrix.check_invariants()

        small_csr_matrix.data[0] = 0.0
        with pytest.raises(AssertionError):
            small_csr_matrix.check_invariants()

    def test_unhashable(self, small_csr_matrix):
        """Test matrices are unhashable."""
        with pytest.raises(TypeError):
            hash(small_csr_matrix)
