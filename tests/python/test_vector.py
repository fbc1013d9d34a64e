"""
Tests for DenseRow / DenseColumn.
"""

import pytest

from polymat import (
    DenseRow,
    DenseColumn,
    DenseMatrix,
    IdentityMatrix,
    SparseMatrix,
    ZeroMatrix,
    DType,
    InvalidDimensionsError,
    IndexOutOfBoundsError,
)


class TestVectorCreation:
    """Test vector construction."""

    def test_row(self):
        r = DenseRow([1, 2, 3])
        assert len(r) == 3
        assert r.dims() == (1, 3)
        assert r.elements() == [1, 2, 3]

    def test_column(self):
        c = DenseColumn([1, 2])
        assert c.dims() == (2, 1)

    def test_empty(self):
        with pytest.raises(InvalidDimensionsError):
            DenseRow([])
        with pytest.raises(InvalidDimensionsError):
            DenseColumn([])

    def test_zeros_ones(self):
        assert DenseRow.zeros(3).elements() == [0, 0, 0]
        assert DenseColumn.ones(2, DType.float64).elements() == [1.0, 1.0]
        with pytest.raises(InvalidDimensionsError):
            DenseRow.zeros(0)


class TestVectorAccess:
    """Test element access."""

    def test_get_set(self):
        r = DenseRow([1, 2, 3])
        assert r.get(2) == 3
        assert r.get(3) is None
        assert r.get(-1) is None
        assert r.set(0, 9) == 9
        assert r.set(5, 9) is None
        assert r[0] == 9

    def test_indexing_out_of_range(self):
        c = DenseColumn([1])
        with pytest.raises(IndexOutOfBoundsError):
            c[1]
        with pytest.raises(IndexOutOfBoundsError):
            c[1] = 0

    def test_iteration(self):
        assert list(DenseColumn([4, 5])) == [4, 5]


class TestVectorTranspose:
    """Test Row <-> Column duality."""

    def test_row_to_column(self):
        r = DenseRow([1, 2, 3])
        c = r.transpose()
        assert isinstance(c, DenseColumn)
        assert c.elements() == [1, 2, 3]

    def test_shares_elements(self):
        r = DenseRow([1, 2, 3])
        c = r.T
        c.set(0, 7)
        assert r.get(0) == 7

    def test_involution(self):
        c = DenseColumn([1, 2])
        assert c.T.T == c

    def test_row_not_equal_to_column(self):
        assert DenseRow([1, 2]) != DenseColumn([1, 2])


class TestVectorArithmetic:
    """Test vector add / subtract / scale and products."""

    def test_add_sub(self):
        a, b = DenseRow([1, 2, 3]), DenseRow([10, 20, 30])
        assert (a + b) == DenseRow([11, 22, 33])
        assert (b - a) == DenseRow([9, 18, 27])
        assert (-a) == DenseRow([-1, -2, -3])

    def test_add_length_mismatch(self):
        with pytest.raises(InvalidDimensionsError):
            DenseColumn([1, 2]) + DenseColumn([1, 2, 3])

    def test_add_mixed_orientation(self):
        with pytest.raises(TypeError):
            DenseRow([1, 2]) + DenseColumn([1, 2])

    def test_scale(self):
        assert 2 * DenseRow([1, 2]) == DenseRow([2, 4])
        half = DenseColumn([1, 2]) * 0.5
        assert half.dtype is DType.float64
        assert half.elements() == [0.5, 1.0]

    def test_inner_product(self):
        r = DenseRow([1, 2, 3, 4, 5])
        c = DenseColumn([1, 2, 3, 4, 5])
        assert r @ c == 55

    def test_inner_length_mismatch(self):
        with pytest.raises(InvalidDimensionsError):
            DenseRow([1, 2]) @ DenseColumn([1, 2, 3])

    def test_outer_product(self):
        c = DenseColumn([1, 2, 3, 4])
        r = DenseRow([1, 2, 3])
        m = c @ r
        assert isinstance(m, DenseMatrix)
        assert m.shape == (4, 3)
        assert m == DenseMatrix([[1, 2, 3], [2, 4, 6], [3, 6, 9], [4, 8, 12]])

    def test_repr_str(self):
        assert repr(DenseRow([1, 2])) == "DenseRow([1, 2], dtype=int64)"
        assert str(DenseRow([1, 2])) == "[1 2]"
        assert str(DenseColumn([1, 2])) == "[1]\n[2]"


class TestVectorMatrixOuter:
    """Test products of a vector with a single-column or single-row matrix."""

    def test_column_matrix_times_row(self):
        mat = DenseMatrix([[1], [2], [3]])
        result = mat @ DenseRow([4, 5])
        assert isinstance(result, DenseMatrix)
        assert result == DenseMatrix([[4, 5], [8, 10], [12, 15]])

    def test_column_times_row_matrix(self):
        result = DenseColumn([1, 2]) @ DenseMatrix([[3, 4, 5]])
        assert result == DenseMatrix([[3, 4, 5], [6, 8, 10]])

    def test_sparse_and_identity(self):
        sp = SparseMatrix.from_triples([(1, 0, 2)], 2, 1)
        assert sp @ DenseRow([1, 3]) == DenseMatrix([[0, 0], [2, 6]])
        assert IdentityMatrix(1) @ DenseRow([7, 8]) == DenseMatrix([[7, 8]])
        assert DenseColumn([7, 8]) @ IdentityMatrix(1) == DenseMatrix([[7], [8]])

    def test_zero_stays_zero(self):
        assert isinstance(ZeroMatrix(3, 1) @ DenseRow([1, 2]), ZeroMatrix)
        result = DenseColumn([1, 2]) @ ZeroMatrix(1, 4)
        assert isinstance(result, ZeroMatrix)
        assert result.shape == (2, 4)

    def test_dimension_mismatch(self):
        with pytest.raises(InvalidDimensionsError):
            DenseMatrix([[1, 2]]) @ DenseRow([1, 2])
        with pytest.raises(InvalidDimensionsError):
            DenseColumn([1, 2]) @ DenseMatrix([[1], [2]])
