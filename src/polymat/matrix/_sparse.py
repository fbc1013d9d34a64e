"""
Sparse Matrix

Maps coordinate pairs to stored values; absent pairs read as the dtype's
zero. Keys are kept in storage orientation:

    ROW_MAJOR: logical (i, j) stored under key (i, j)
    COL_MAJOR: logical (i, j) stored under key (j, i)

so transpose() only flips the read order and swaps the dimensions. The
transposed handle shares the entry map with its source. set() inserts or
overwrites and never prunes stored zeros.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .._config import ReadOrder, config
from .._dtypes import DType, Scalar, infer_dtype, normalize_dtype
from .._errors import IndexOutOfBoundsError, check_positive_dims
from ._base import Matrix, MatrixKind

__all__ = ['SparseMatrix']

Triple = Tuple[int, int, Scalar]


class SparseMatrix(Matrix):
    """
    Coordinate-map sparse matrix.

    Attributes:
        read_order (ReadOrder): Orientation of stored keys
        dtype (DType): Element type
        nnz (int): Number of stored entries

    Example:
        >>> s = SparseMatrix.from_triples([(0, 1, -1), (2, 0, 3)], 3, 3)
        >>> s.get(0, 1), s.get(1, 1)
        (-1, 0)
        >>> s.nnz
        2
    """

    __slots__ = ('_entries', '_rows', '_cols', '_read_order', '_dtype')

    def __init__(
        self,
        m: int,
        n: int,
        dtype: Union[str, DType] = DType.int64,
        read_order: Optional[ReadOrder] = None,
    ):
        """
        Create an empty m x n sparse matrix.

        Raises:
            InvalidDimensionsError: If m or n is not positive
        """
        check_positive_dims(m, n, "SparseMatrix")
        self._entries: Dict[Tuple[int, int], Scalar] = {}
        self._rows = int(m)
        self._cols = int(n)
        self._read_order = ReadOrder(read_order or config.layout.default_read_order)
        self._dtype = normalize_dtype(dtype)

    @classmethod
    def _wrap(
        cls,
        entries: Dict[Tuple[int, int], Scalar],
        rows: int,
        cols: int,
        read_order: ReadOrder,
        dtype: DType,
    ) -> "SparseMatrix":
        """Internal constructor: adopt an entry map without validation or copy."""
        mat = object.__new__(cls)
        mat._entries = entries
        mat._rows = rows
        mat._cols = cols
        mat._read_order = read_order
        mat._dtype = dtype
        return mat

    @classmethod
    def _from_logical(
        cls,
        entries: Dict[Tuple[int, int], Scalar],
        rows: int,
        cols: int,
        dtype: DType,
    ) -> "SparseMatrix":
        """Row-major matrix from logical-coordinate entries, honouring prune_zeros."""
        if config.compute.prune_zeros:
            zero = dtype.zero()
            entries = {k: v for k, v in entries.items() if v != zero}
        return cls._wrap(entries, rows, cols, ReadOrder.ROW_MAJOR, dtype)

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def from_triples(
        cls,
        triples: Iterable[Triple],
        m: int,
        n: int,
        dtype: Optional[Union[str, DType]] = None,
        read_order: Optional[ReadOrder] = None,
    ) -> "SparseMatrix":
        """
        Build from (i, j, value) triples in logical coordinates.

        Later duplicates overwrite earlier ones.

        Args:
            triples: Iterable of (row, col, value)
            m: Number of rows
            n: Number of columns
            dtype: Element type (inferred from the values if omitted)
            read_order: Storage orientation (config default if omitted)

        Raises:
            InvalidDimensionsError: If m or n is not positive
            IndexOutOfBoundsError: If a triple lies outside [0, m) x [0, n)
        """
        triples = list(triples)
        if dtype is None:
            dtype = infer_dtype(v for _, _, v in triples)
        mat = cls(m, n, dtype=dtype, read_order=read_order)
        for i, j, value in triples:
            if mat.set(i, j, value) is None:
                raise IndexOutOfBoundsError(
                    f"SparseMatrix.from_triples: ({i}, {j}) outside shape ({m}, {n})"
                )
        return mat

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def kind(self) -> MatrixKind:
        return MatrixKind.SPARSE

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

    @property
    def nnz(self) -> int:
        """Number of stored entries (stored zeros included)."""
        return len(self._entries)

    @property
    def density(self) -> float:
        """Fraction of positions holding a stored entry."""
        return self.nnz / self.size

    # =========================================================================
    # Element Access
    # =========================================================================

    def _key(self, i: int, j: int) -> Tuple[int, int]:
        if self._read_order is ReadOrder.ROW_MAJOR:
            return (i, j)
        return (j, i)

    def items(self) -> Iterator[Tuple[Tuple[int, int], Scalar]]:
        """Stored entries as ((i, j), value) in logical coordinates, unordered."""
        if self._read_order is ReadOrder.ROW_MAJOR:
            return iter(self._entries.items())
        return (((j, i), v) for (i, j), v in self._entries.items())

    def get(self, i: int, j: int) -> Optional[Scalar]:
        if not self._in_bounds(i, j):
            return None
        return self._entries.get(self._key(i, j), self._dtype.zero())

    def set(self, i: int, j: int, value: Scalar) -> Optional[Scalar]:
        if not self._in_bounds(i, j):
            return None
        value = self._dtype.cast(value)
        self._entries[self._key(i, j)] = value
        return value

    def elements(self) -> List[Scalar]:
        self._warn_materialize()
        data = [self._dtype.zero()] * self.size
        for (i, j), v in self.items():
            data[i * self._cols + j] = v
        return data

    def trace(self) -> Scalar:
        total = self._dtype.zero()
        for (i, j), v in self._entries.items():
            if i == j:
                total = total + v
        return total

    # =========================================================================
    # Structural Predicates (stored entries only)
    # =========================================================================

    def _all_zero_where(self, pred) -> bool:
        zero = self._dtype.zero()
        return all(v == zero for (i, j), v in self.items() if pred(i, j))

    def _pairs_hold(self, relation) -> bool:
        if not self.is_square():
            return False
        return all(relation(v, self.get(j, i)) for (i, j), v in self.items())

    # =========================================================================
    # Transformations
    # =========================================================================

    def flip_read_order(self) -> "SparseMatrix":
        """Toggle the key orientation; the entry map is shared."""
        return self._wrap(self._entries, self._cols, self._rows,
                          self._read_order.flipped(), self._dtype)

    def transpose(self) -> "SparseMatrix":
        """O(1) transpose: a new handle over the same entry map."""
        return self.flip_read_order()

    def copy(self) -> "SparseMatrix":
        return self._wrap(dict(self._entries), self._rows, self._cols,
                          self._read_order, self._dtype)

    def prune(self) -> "SparseMatrix":
        """Drop stored entries equal to zero, in place. Returns self."""
        zero = self._dtype.zero()
        for key in [k for k, v in self._entries.items() if v == zero]:
            del self._entries[key]
        return self

    def __repr__(self) -> str:
        return (f"SparseMatrix(rows={self._rows}, cols={self._cols}, nnz={self.nnz}, "
                f"dtype={self._dtype.value}, read_order={self._read_order.name})")
