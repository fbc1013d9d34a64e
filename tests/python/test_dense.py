"""
Tests for DenseMatrix.
"""

import pytest

from polymat import (
    DenseMatrix,
    DenseRow,
    DenseColumn,
    ReadOrder,
    LayoutConfig,
    InvalidDimensionsError,
    IndexOutOfBoundsError,
    DType,
    config,
)


class TestDenseCreation:
    """Test DenseMatrix construction and validation."""

    @pytest.mark.parametrize("rows", [
        [[1]],
        [[1, 2, 3]],
        [[1], [2], [3]],
        [[1, 2], [3, 4], [5, 6]],
    ])
    def test_round_trip(self, rows):
        """Test elements() equals the flattened row list."""
        mat = DenseMatrix(rows)
        assert mat.elements() == [x for row in rows for x in row]
        assert mat.shape == (len(rows), len(rows[0]))

    def test_empty_row_list(self):
        with pytest.raises(InvalidDimensionsError):
            DenseMatrix([])

    def test_empty_rows(self):
        with pytest.raises(InvalidDimensionsError):
            DenseMatrix([[], []])

    def test_ragged(self):
        with pytest.raises(InvalidDimensionsError):
            DenseMatrix([[1, 2], [3]])

    def test_dtype_inferred(self):
        assert DenseMatrix([[1, 2]]).dtype is DType.int64
        assert DenseMatrix([[1, 2.5]]).dtype is DType.float64

    def test_explicit_dtype_casts(self):
        mat = DenseMatrix([[1, 2]], dtype='float64')
        assert mat.dtype is DType.float64
        assert all(isinstance(x, float) for x in mat.elements())

    def test_from_vec_row_major(self):
        mat = DenseMatrix.from_vec([1, 2, 3, 4, 5, 6], 2, 3)
        assert mat.get(1, 0) == 4
        assert mat.read_order is ReadOrder.ROW_MAJOR

    def test_from_vec_col_major(self):
        mat = DenseMatrix.from_vec([1, 3, 2, 4], 2, 2, ReadOrder.COL_MAJOR)
        assert mat.get(0, 1) == 2
        assert mat.elements() == [1, 2, 3, 4]

    def test_from_vec_length_mismatch(self):
        with pytest.raises(InvalidDimensionsError):
            DenseMatrix.from_vec([1, 2, 3], 2, 2)

    def test_from_vec_non_positive(self):
        with pytest.raises(InvalidDimensionsError):
            DenseMatrix.from_vec([], 0, 0)

    def test_from_vec_ignores_config_read_order(self):
        """Test an omitted read order always means a row-major buffer."""
        with config.local(layout=LayoutConfig(default_read_order=ReadOrder.COL_MAJOR)):
            mat = DenseMatrix.from_vec([1, 2, 3, 4], 2, 2)
        assert mat.read_order is ReadOrder.ROW_MAJOR
        assert mat.elements() == [1, 2, 3, 4]

    def test_zeros_uses_config_read_order(self):
        with config.local(layout=LayoutConfig(default_read_order=ReadOrder.COL_MAJOR)):
            mat = DenseMatrix.zeros(2, 3)
        assert mat.read_order is ReadOrder.COL_MAJOR
        assert mat.shape == (2, 3)

    def test_zeros(self):
        mat = DenseMatrix.zeros(2, 3)
        assert mat.elements() == [0] * 6

    def test_identity(self):
        mat = DenseMatrix.identity(3)
        assert mat.elements() == [1, 0, 0, 0, 1, 0, 0, 0, 1]
        assert mat.is_identity()


class TestDenseAccess:
    """Test get / set / indexing."""

    def test_get(self, dense_2x3):
        assert dense_2x3.get(0, 2) == 3
        assert dense_2x3.get(1, 1) == 5

    @pytest.mark.parametrize("i,j", [(2, 0), (0, 3), (-1, 0), (0, -1)])
    def test_get_out_of_range(self, dense_2x3, i, j):
        assert dense_2x3.get(i, j) is None

    def test_set(self, dense_2x3):
        assert dense_2x3.set(0, 0, 10) == 10
        assert dense_2x3.get(0, 0) == 10

    def test_set_out_of_range(self, dense_2x3):
        assert dense_2x3.set(5, 5, 1) is None
        assert dense_2x3.elements() == [1, 2, 3, 4, 5, 6]

    def test_set_casts(self, dense_2x3):
        assert dense_2x3.set(0, 0, 7.0) == 7
        assert isinstance(dense_2x3.get(0, 0), int)
        with pytest.raises(TypeError):
            dense_2x3.set(0, 0, 7.5)

    def test_indexing(self, dense_2x3):
        assert dense_2x3[1, 2] == 6
        dense_2x3[1, 2] = 60
        assert dense_2x3.get(1, 2) == 60
        with pytest.raises(IndexOutOfBoundsError):
            dense_2x3[2, 0]
        with pytest.raises(IndexOutOfBoundsError):
            dense_2x3[2, 0] = 1

    def test_iteration(self, dense_2x3):
        assert list(dense_2x3) == [1, 2, 3, 4, 5, 6]

    def test_get_row_col(self, dense_2x3):
        row = dense_2x3.get_row(1)
        col = dense_2x3.get_col(2)
        assert isinstance(row, DenseRow)
        assert isinstance(col, DenseColumn)
        assert row.elements() == [4, 5, 6]
        assert col.elements() == [3, 6]
        with pytest.raises(IndexOutOfBoundsError):
            dense_2x3.get_row(2)

    def test_unhashable(self, dense_2x3):
        with pytest.raises(TypeError):
            hash(dense_2x3)


class TestDenseTranspose:
    """Test O(1) transpose by read-order flip."""

    def test_shape_and_order(self, dense_2x3):
        t = dense_2x3.transpose()
        assert t.shape == (3, 2)
        assert t.read_order is ReadOrder.COL_MAJOR

    def test_elements(self, dense_2x3, grid):
        t = dense_2x3.T
        assert grid(t) == [[1, 4], [2, 5], [3, 6]]
        assert t.elements() == [1, 4, 2, 5, 3, 6]

    def test_get_mirrors(self, dense_2x3):
        t = dense_2x3.transpose()
        for i in range(2):
            for j in range(3):
                assert t.get(j, i) == dense_2x3.get(i, j)

    def test_involution(self, dense_2x3):
        tt = dense_2x3.transpose().transpose()
        assert tt == dense_2x3
        assert tt.read_order is ReadOrder.ROW_MAJOR

    def test_shares_storage(self, dense_2x3):
        t = dense_2x3.transpose()
        dense_2x3.set(0, 1, 9)
        assert t.get(1, 0) == 9

    def test_copy_is_independent(self, dense_2x3):
        c = dense_2x3.copy()
        c.set(0, 0, 100)
        assert dense_2x3.get(0, 0) == 1
        assert c.get(0, 0) == 100

    def test_set_through_transpose(self, dense_2x3):
        t = dense_2x3.transpose()
        t.set(2, 0, 30)
        assert dense_2x3.get(0, 2) == 30


class TestDenseReductions:
    """Test diags / trace / astype / repr."""

    def test_trace(self, dense_4x4):
        assert dense_4x4.trace() == 1 + 6 + 11 + 16

    def test_trace_rectangular(self, dense_2x3):
        assert dense_2x3.diags() == [1, 5]
        assert dense_2x3.trace() == 6
        assert dense_2x3.transpose().trace() == 6

    def test_trace_col_major(self):
        mat = DenseMatrix.from_vec([1, 2, 3, 4, 5, 6], 3, 2, ReadOrder.COL_MAJOR)
        assert mat.diags() == [1, 5]
        assert mat.trace() == sum(mat.diags())

    def test_astype(self, dense_2x3):
        f = dense_2x3.astype(DType.float64)
        assert f.dtype is DType.float64
        assert f.elements() == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        assert dense_2x3.dtype is DType.int64

    def test_repr(self, dense_2x3):
        text = repr(dense_2x3)
        assert text.startswith("DenseMatrix(rows=2, cols=3")
        assert "ROW_MAJOR" in text

    def test_str(self, dense_2x3):
        assert str(dense_2x3) == "1 2 3\n4 5 6"
