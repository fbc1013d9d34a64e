"""
Dense Matrix

Holds all rows*cols elements in one flat list plus a ReadOrder flag.

Storage layout:
    ROW_MAJOR: element (i, j) at offset i * cols + j
    COL_MAJOR: element (i, j) at offset j * rows + i

transpose() swaps the logical dimensions and flips the read order; the
storage list is shared, never reordered. Use copy() for an independent
matrix.
"""

from typing import List, Optional, Sequence, Union

from .._config import ReadOrder, config
from .._dtypes import DType, Scalar, infer_dtype, normalize_dtype
from .._errors import InvalidDimensionsError, check_positive_dims
from ._base import Matrix, MatrixKind

__all__ = ['DenseMatrix']


class DenseMatrix(Matrix):
    """
    Dense matrix over a flat element list.

    Attributes:
        read_order (ReadOrder): Interpretation of the flat storage
        dtype (DType): Element type

    Example:
        >>> a = DenseMatrix([[1, 2, 3], [4, 5, 6]])
        >>> a.shape
        (2, 3)
        >>> a.transpose().get(2, 1)
        6
    """

    __slots__ = ('_data', '_rows', '_cols', '_read_order', '_dtype')

    def __init__(
        self,
        rows: Sequence[Sequence[Scalar]],
        dtype: Optional[Union[str, DType]] = None,
    ):
        """
        Build from an explicit list of rows.

        Args:
            rows: Non-empty list of equally long, non-empty rows
            dtype: Element type (inferred from the values if omitted)

        Raises:
            InvalidDimensionsError: If rows is empty or ragged
        """
        if len(rows) == 0:
            raise InvalidDimensionsError("DenseMatrix: at least one row is required")
        n = len(rows[0])
        if n == 0:
            raise InvalidDimensionsError("DenseMatrix: rows must not be empty")
        flat: List[Scalar] = []
        for k, row in enumerate(rows):
            if len(row) != n:
                raise InvalidDimensionsError(
                    f"DenseMatrix: row {k} has length {len(row)}, expected {n}"
                )
            flat.extend(row)

        dtype = infer_dtype(flat) if dtype is None else normalize_dtype(dtype)
        self._data = [dtype.cast(x) for x in flat]
        self._rows = len(rows)
        self._cols = n
        self._read_order = ReadOrder.ROW_MAJOR
        self._dtype = dtype

    @classmethod
    def _wrap(
        cls,
        data: List[Scalar],
        rows: int,
        cols: int,
        read_order: ReadOrder,
        dtype: DType,
    ) -> "DenseMatrix":
        """Internal constructor: adopt data without validation or copy."""
        mat = object.__new__(cls)
        mat._data = data
        mat._rows = rows
        mat._cols = cols
        mat._read_order = read_order
        mat._dtype = dtype
        return mat

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def from_vec(
        cls,
        data: Sequence[Scalar],
        m: int,
        n: int,
        read_order: Optional[ReadOrder] = None,
        dtype: Optional[Union[str, DType]] = None,
    ) -> "DenseMatrix":
        """
        Build an m x n matrix from a flat buffer.

        Args:
            data: m*n elements laid out according to read_order
            m: Number of rows
            n: Number of columns
            read_order: Buffer layout (ROW_MAJOR if omitted)
            dtype: Element type (inferred if omitted)

        Raises:
            InvalidDimensionsError: If m*n != len(data) or a dimension is not positive

        Example:
            >>> DenseMatrix.from_vec([1, 3, 2, 4], 2, 2, ReadOrder.COL_MAJOR).elements()
            [1, 2, 3, 4]
        """
        check_positive_dims(m, n, "DenseMatrix.from_vec")
        if m * n != len(data):
            raise InvalidDimensionsError(
                f"DenseMatrix.from_vec: buffer of length {len(data)} cannot be shaped ({m}, {n})"
            )
        if read_order is None:
            read_order = ReadOrder.ROW_MAJOR
        dtype = infer_dtype(data) if dtype is None else normalize_dtype(dtype)
        return cls._wrap([dtype.cast(x) for x in data], int(m), int(n),
                         ReadOrder(read_order), dtype)

    @classmethod
    def zeros(cls, m: int, n: int, dtype: Union[str, DType] = DType.int64) -> "DenseMatrix":
        """m x n matrix of zeros."""
        check_positive_dims(m, n, "DenseMatrix.zeros")
        dtype = normalize_dtype(dtype)
        return cls._wrap([dtype.zero()] * (m * n), int(m), int(n),
                         config.layout.default_read_order, dtype)

    @classmethod
    def identity(cls, n: int, dtype: Union[str, DType] = DType.int64) -> "DenseMatrix":
        """n x n identity, fully materialized."""
        check_positive_dims(n, n, "DenseMatrix.identity")
        dtype = normalize_dtype(dtype)
        data = [dtype.zero()] * (n * n)
        one = dtype.one()
        for i in range(n):
            data[i * n + i] = one
        return cls._wrap(data, int(n), int(n), config.layout.default_read_order, dtype)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def kind(self) -> MatrixKind:
        return MatrixKind.DENSE

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def dtype(self) -> DType:
        return self._dtype

    @property
    def read_order(self) -> ReadOrder:
        return self._read_order

    # =========================================================================
    # Element Access
    # =========================================================================

    def _offset(self, i: int, j: int) -> int:
        if self._read_order is ReadOrder.ROW_MAJOR:
            return i * self._cols + j
        return j * self._rows + i

    def get(self, i: int, j: int) -> Optional[Scalar]:
        if not self._in_bounds(i, j):
            return None
        return self._data[self._offset(i, j)]

    def set(self, i: int, j: int, value: Scalar) -> Optional[Scalar]:
        if not self._in_bounds(i, j):
            return None
        value = self._dtype.cast(value)
        self._data[self._offset(i, j)] = value
        return value

    def elements(self) -> List[Scalar]:
        if self._read_order is ReadOrder.ROW_MAJOR:
            return list(self._data)
        return super().elements()

    def trace(self) -> Scalar:
        step = (self._cols if self._read_order is ReadOrder.ROW_MAJOR else self._rows) + 1
        total = self._dtype.zero()
        for k in range(min(self._rows, self._cols)):
            total = total + self._data[k * step]
        return total

    # =========================================================================
    # Transformations
    # =========================================================================

    def flip_read_order(self) -> "DenseMatrix":
        """Toggle between row-major and column-major reading of the same storage."""
        return self._wrap(self._data, self._cols, self._rows,
                          self._read_order.flipped(), self._dtype)

    def transpose(self) -> "DenseMatrix":
        """O(1) transpose: a new handle over the same storage."""
        return self.flip_read_order()

    def copy(self) -> "DenseMatrix":
        return self._wrap(list(self._data), self._rows, self._cols,
                          self._read_order, self._dtype)

    def astype(self, dtype: Union[str, DType]) -> "DenseMatrix":
        """Copy with every element cast to dtype."""
        dtype = normalize_dtype(dtype)
        return self._wrap([dtype.cast(x) for x in self._data], self._rows, self._cols,
                          self._read_order, dtype)

    def __repr__(self) -> str:
        return (f"DenseMatrix(rows={self._rows}, cols={self._cols}, "
                f"dtype={self._dtype.value}, read_order={self._read_order.name})")
