"""
Zero Matrix

Stores only (rows, cols) and the dtype. Immutable, never allocates
unless elements() is requested.
"""

from typing import List, Optional, Union

from .._dtypes import DType, Scalar, normalize_dtype
from .._errors import UnsupportedMutationError, check_positive_dims
from ._base import Matrix, MatrixKind

__all__ = ['ZeroMatrix']


class ZeroMatrix(Matrix):
    """
    m x n matrix of zeros without storage.

    Example:
        >>> z = ZeroMatrix(2, 5)
        >>> z.transpose().shape
        (5, 2)
    """

    __slots__ = ('_rows', '_cols', '_dtype')

    def __init__(self, m: int, n: int, dtype: Union[str, DType] = DType.int64):
        check_positive_dims(m, n, "ZeroMatrix")
        self._rows = int(m)
        self._cols = int(n)
        self._dtype = normalize_dtype(dtype)

    @property
    def kind(self) -> MatrixKind:
        return MatrixKind.ZERO

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def dtype(self) -> DType:
        return self._dtype

    def get(self, i: int, j: int) -> Optional[Scalar]:
        if not self._in_bounds(i, j):
            return None
        return self._dtype.zero()

    def set(self, i: int, j: int, value: Scalar) -> Optional[Scalar]:
        if not self._in_bounds(i, j):
            return None
        raise UnsupportedMutationError(
            f"ZeroMatrix is immutable: cannot set ({i}, {j})"
        )

    def elements(self) -> List[Scalar]:
        self._warn_materialize()
        return [self._dtype.zero()] * self.size

    def diags(self) -> List[Scalar]:
        return [self._dtype.zero()] * min(self._rows, self._cols)

    def trace(self) -> Scalar:
        return self._dtype.zero()

    # =========================================================================
    # Structural Predicates
    # =========================================================================

    def _all_zero_where(self, pred) -> bool:
        return True

    def _pairs_hold(self, relation) -> bool:
        return self.is_square()

    def is_unilower_triangular(self) -> bool:
        return False

    def is_uniupper_triangular(self) -> bool:
        return False

    def is_orthogonal(self) -> bool:
        return False

    def is_unitary(self) -> bool:
        return False

    def is_identity(self) -> bool:
        return False

    # =========================================================================
    # Transformations
    # =========================================================================

    def transpose(self) -> "ZeroMatrix":
        return ZeroMatrix(self._cols, self._rows, self._dtype)

    def copy(self) -> "ZeroMatrix":
        return ZeroMatrix(self._rows, self._cols, self._dtype)

    def __repr__(self) -> str:
        return f"ZeroMatrix(rows={self._rows}, cols={self._cols}, dtype={self._dtype.value})"
