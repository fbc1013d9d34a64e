"""
Pytest configuration and shared fixtures for polymat tests.
"""

import pytest
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

import polymat
from polymat import (
    DenseMatrix,
    SparseMatrix,
    IdentityMatrix,
    ZeroMatrix,
)

# Try to import numpy / scipy
try:
    import numpy as np
    HAS_NUMPY = True
except ImportError:
    HAS_NUMPY = False

try:
    import scipy.sparse as sp
    HAS_SCIPY = True
except ImportError:
    HAS_SCIPY = False


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def requires_numpy():
    """Skip test if numpy is not available."""
    if not HAS_NUMPY:
        pytest.skip("numpy not available")


@pytest.fixture(scope="session")
def requires_scipy():
    """Skip test if scipy is not available."""
    if not HAS_SCIPY:
        pytest.skip("scipy not available")


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts and ends with default configuration."""
    polymat.config.reset()
    yield polymat.config
    polymat.config.reset()


@pytest.fixture
def dense_3x3():
    """Dense matrix with the same elements as sparse_3x3.

    Matrix:
    [[0, -1, 0],
     [0,  0, 0],
     [3,  0, 0]]
    """
    return DenseMatrix([[0, -1, 0], [0, 0, 0], [3, 0, 0]])


@pytest.fixture
def sparse_3x3():
    """Sparse matrix from triples {(0, 1, -1), (2, 0, 3)} over (3, 3)."""
    return SparseMatrix.from_triples([(0, 1, -1), (2, 0, 3)], 3, 3)


@pytest.fixture
def dense_4x4():
    """Dense 4x4 holding 1..16 row by row."""
    return DenseMatrix([[1, 2, 3, 4], [5, 6, 7, 8], [9, 10, 11, 12], [13, 14, 15, 16]])


@pytest.fixture
def dense_2x3():
    """Rectangular dense matrix [[1, 2, 3], [4, 5, 6]]."""
    return DenseMatrix([[1, 2, 3], [4, 5, 6]])


# =============================================================================
# Helper Functions
# =============================================================================

def _representations(m, n):
    """One matrix of each representation with shape (m, n).

    Identity is only included for square shapes. Dense and Sparse hold a
    non-trivial pattern so they differ from both structural matrices.
    """
    values = [[(i * n + j) % 3 for j in range(n)] for i in range(m)]
    values[0][0] = 5
    triples = [(i, j, v) for i, row in enumerate(values) for j, v in enumerate(row) if v]
    mats = [
        DenseMatrix(values),
        SparseMatrix.from_triples(triples, m, n),
        ZeroMatrix(m, n),
    ]
    if m == n:
        mats.append(IdentityMatrix(n))
    return mats


@pytest.fixture
def representations():
    """Factory: representations(m, n) -> one matrix per representation."""
    return _representations


@pytest.fixture
def grid():
    """Factory: grid(mat) -> nested lists of elements, row by row."""
    def _grid(mat):
        return [[mat.get(i, j) for j in range(mat.cols)] for i in range(mat.rows)]
    return _grid
