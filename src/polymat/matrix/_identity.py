"""
Identity Matrix

Stores only the dimension n and the dtype. Every element is computed on
read, every predicate is answered from the structure, and the matrix is
immutable.
"""

from typing import List, Optional, Union

from .._dtypes import DType, Scalar, normalize_dtype
from .._errors import UnsupportedMutationError, check_positive_dims
from ._base import Matrix, MatrixKind

__all__ = ['IdentityMatrix']


class IdentityMatrix(Matrix):
    """
    n x n identity matrix without storage.

    Example:
        >>> eye = IdentityMatrix(3)
        >>> eye.get(1, 1), eye.get(0, 2), eye.get(3, 0)
        (1, 0, None)
        >>> eye.trace()
        3
    """

    __slots__ = ('_n', '_dtype')

    def __init__(self, n: int, dtype: Union[str, DType] = DType.int64):
        check_positive_dims(n, n, "IdentityMatrix")
        self._n = int(n)
        self._dtype = normalize_dtype(dtype)

    @property
    def kind(self) -> MatrixKind:
        return MatrixKind.IDENTITY

    @property
    def n(self) -> int:
        """Side length."""
        return self._n

    @property
    def rows(self) -> int:
        return self._n

    @property
    def cols(self) -> int:
        return self._n

    @property
    def dtype(self) -> DType:
        return self._dtype

    # =========================================================================
    # Element Access
    # =========================================================================

    def get(self, i: int, j: int) -> Optional[Scalar]:
        if not self._in_bounds(i, j):
            return None
        return self._dtype.one() if i == j else self._dtype.zero()

    def set(self, i: int, j: int, value: Scalar) -> Optional[Scalar]:
        if not self._in_bounds(i, j):
            return None
        raise UnsupportedMutationError(
            f"IdentityMatrix is immutable: cannot set ({i}, {j})"
        )

    def elements(self) -> List[Scalar]:
        self._warn_materialize()
        n = self._n
        data = [self._dtype.zero()] * (n * n)
        one = self._dtype.one()
        for k in range(n):
            data[k * n + k] = one
        return data

    def diags(self) -> List[Scalar]:
        return [self._dtype.one()] * self._n

    def trace(self) -> Scalar:
        return self._dtype.from_int(self._n)

    # =========================================================================
    # Structural Predicates
    # =========================================================================

    def is_square(self) -> bool:
        return True

    def is_diagonal(self) -> bool:
        return True

    def is_lower_triangular(self) -> bool:
        return True

    def is_strictly_lower_triangular(self) -> bool:
        return False

    def is_unilower_triangular(self) -> bool:
        return True

    def is_upper_triangular(self) -> bool:
        return True

    def is_strictly_upper_triangular(self) -> bool:
        return False

    def is_uniupper_triangular(self) -> bool:
        return True

    def is_lower_hessenberg(self) -> bool:
        return True

    def is_upper_hessenberg(self) -> bool:
        return True

    def is_symmetric(self) -> bool:
        return True

    def is_skew_symmetric(self) -> bool:
        # the diagonal would need 1 == -1
        return False

    def is_hermitian(self) -> bool:
        return True

    def is_skew_hermitian(self) -> bool:
        return False

    def is_orthogonal(self) -> bool:
        return True

    def is_unitary(self) -> bool:
        return True

    def is_identity(self) -> bool:
        return True

    # =========================================================================
    # Transformations
    # =========================================================================

    def transpose(self) -> "IdentityMatrix":
        return self

    def copy(self) -> "IdentityMatrix":
        return IdentityMatrix(self._n, self._dtype)

    def __repr__(self) -> str:
        return f"IdentityMatrix(n={self._n}, dtype={self._dtype.value})"
