"""
Pytest configuration and shared fixtures for CRS tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

# Try to import crs - if it fails, skip tests that require it
try:
    import crs
    from crs.sparse import Array, CRSMatrix, from_list, int64
    from crs.core import get_config, reset_config
    HAS_CRS = True
except ImportError as e:
    HAS_CRS = False
    CRS_IMPORT_ERROR = str(e)


# Try to import scipy
try:
    import scipy.sparse as sp
    HAS_SCIPY = True
except ImportError:
    HAS_SCIPY = False


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def requires_crs():
    """Skip test if CRS is not available."""
    if not HAS_CRS:
        pytest.skip(f"CRS not available: {CRS_IMPORT_ERROR}")


@pytest.fixture(scope="session")
def requires_scipy():
    """Skip test if scipy is not available."""
    if not HAS_SCIPY:
        pytest.skip("scipy not available")


@pytest.fixture(autouse=True)
def strict_invariants():
    """Validate every arithmetic result; restore configuration afterwards."""
    if HAS_CRS:
        get_config().check_invariants = True
    yield
    if HAS_CRS:
        reset_config()


@pytest.fixture
def dense_small():
    """Dense reference for the small test matrix (3x4).

    Matrix:
    [[1, 0, 2, 0],
     [0, 3, 0, 4],
     [5, 0, 0, 6]]
    """
    return [
        [1.0, 0.0, 2.0, 0.0],
        [0.0, 3.0, 0.0, 4.0],
        [5.0, 0.0, 0.0, 6.0],
    ]


@pytest.fixture
def small_csr_matrix(requires_crs):
    """Small test matrix (3x4) built from raw arrays."""
    data = Array.from_list([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], dtype='float64')
    indices = Array.from_list([0, 2, 1, 3, 0, 3], dtype=int64)
    indptr = Array.from_list([0, 2, 4, 6], dtype=int64)

    return CRSMatrix(data, indices, indptr, shape=(3, 4))


@pytest.fixture
def small_csr_from_dense(requires_crs, dense_small):
    """Same matrix as small_csr_matrix, built from dense."""
    return CRSMatrix.from_dense(dense_small)


@pytest.fixture
def random_dense():
    """Factory for random sparse-ish integer matrices (numpy, int64)."""
    rng = np.random.default_rng(42)

    def make(rows, cols, density=0.4):
        values = rng.integers(-4, 5, size=(rows, cols), dtype=np.int64)
        mask = rng.random((rows, cols)) < density
        return np.where(mask, values, 0)

    return make


@pytest.fixture
def assert_canonical():
    """Check the CRS invariants of a matrix explicitly."""

    def check(mat):
        data = mat.data.tolist()
        indices = mat.indices.tolist()
        indptr = mat.indptr.tolist()

        assert len(indptr) == mat.rows + 1
        assert indptr[0] == 0
        assert indptr[mat.rows] == mat.nnz == len(data) == len(indices)
        for i in range(mat.rows):
            row = indices[indptr[i]:indptr[i + 1]]
            assert all(a < b for a, b in zip(row, row[1:]))
            assert all(0 <= c < mat.cols for c in row)
        assert all(v != 0 for v in data)

    return check
