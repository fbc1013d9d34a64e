"""
Dense Vectors

DenseRow and DenseColumn are dual 1-D containers. transpose() turns one into
the other over the same element list (no copy), and the pair expresses the
two vector products:

    DenseRow @ DenseColumn  -> scalar (inner product)
    DenseColumn @ DenseRow  -> DenseMatrix (outer product)

Both also combine with matrices: ``matrix @ column`` and ``row @ matrix``
keep the vector type; ``matrix @ row`` (m x 1 matrix) and ``column @ matrix``
(1 x n matrix) are outer products and give a matrix.
"""

import numbers
from typing import Any, List, Optional, Sequence, Union

from .._dtypes import DType, Scalar, classify, infer_dtype, normalize_dtype, result_dtype
from .._errors import (
    IndexOutOfBoundsError,
    InvalidDimensionsError,
    check_positive_dims,
    check_vector_lengths,
)

__all__ = ['DenseRow', 'DenseColumn']


class _DenseVector:
    """Shared storage and element protocol for DenseRow / DenseColumn."""

    __slots__ = ('_data', '_dtype')

    def __init__(self, values: Sequence[Scalar], dtype: Optional[Union[str, DType]] = None):
        """
        Args:
            values: Non-empty sequence of numbers
            dtype: Element type (inferred from the values if omitted)

        Raises:
            InvalidDimensionsError: If values is empty
        """
        values = list(values)
        if not values:
            raise InvalidDimensionsError(f"{type(self).__name__}: at least one element is required")
        dtype = infer_dtype(values) if dtype is None else normalize_dtype(dtype)
        self._data = [dtype.cast(v) for v in values]
        self._dtype = dtype

    @classmethod
    def _wrap(cls, data: List[Scalar], dtype: DType):
        """Internal constructor: adopt data without validation or copy."""
        vec = object.__new__(cls)
        vec._data = data
        vec._dtype = dtype
        return vec

    @classmethod
    def zeros(cls, n: int, dtype: Union[str, DType] = DType.int64):
        check_positive_dims(n, 1, f"{cls.__name__}.zeros")
        dtype = normalize_dtype(dtype)
        return cls._wrap([dtype.zero()] * n, dtype)

    @classmethod
    def ones(cls, n: int, dtype: Union[str, DType] = DType.int64):
        check_positive_dims(n, 1, f"{cls.__name__}.ones")
        dtype = normalize_dtype(dtype)
        return cls._wrap([dtype.one()] * n, dtype)

    # -------------------------------------------------------------------------
    # Element access
    # -------------------------------------------------------------------------

    @property
    def dtype(self) -> DType:
        return self._dtype

    def get(self, k: int) -> Optional[Scalar]:
        if not 0 <= k < len(self._data):
            return None
        return self._data[k]

    def set(self, k: int, value: Scalar) -> Optional[Scalar]:
        if not 0 <= k < len(self._data):
            return None
        value = self._dtype.cast(value)
        self._data[k] = value
        return value

    def elements(self) -> List[Scalar]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self):
        return iter(self._data)

    def __getitem__(self, k: int) -> Scalar:
        value = self.get(k)
        if value is None:
            raise IndexOutOfBoundsError(f"index {k} out of range for length {len(self)}")
        return value

    def __setitem__(self, k: int, value: Scalar) -> None:
        if self.set(k, value) is None:
            raise IndexOutOfBoundsError(f"index {k} out of range for length {len(self)}")

    @property
    def T(self):
        return self.transpose()

    def copy(self):
        return self._wrap(list(self._data), self._dtype)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    __hash__ = None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, _DenseVector):
            return NotImplemented
        return type(self) is type(other) and self._data == other._data

    def _combine(self, other, op, what: str):
        check_vector_lengths(self, other, what)
        dtype = result_dtype(self._dtype, other._dtype)
        return self._wrap([dtype.cast(op(a, b)) for a, b in zip(self._data, other._data)], dtype)

    def __add__(self, other: Any):
        if type(other) is not type(self):
            return NotImplemented
        return self._combine(other, lambda a, b: a + b, "Cannot add vectors of given lengths")

    def __sub__(self, other: Any):
        if type(other) is not type(self):
            return NotImplemented
        return self._combine(other, lambda a, b: a - b, "Cannot subtract vectors of given lengths")

    def __neg__(self):
        return self._wrap([-x for x in self._data], self._dtype)

    def __mul__(self, scalar: Any):
        if not isinstance(scalar, numbers.Number):
            return NotImplemented
        dtype = result_dtype(self._dtype, classify(scalar))
        return self._wrap([dtype.cast(x * scalar) for x in self._data], dtype)

    def __rmul__(self, scalar: Any):
        return self.__mul__(scalar)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r}, dtype={self._dtype.value})"


class DenseRow(_DenseVector):
    """
    1 x n dense vector.

    Example:
        >>> r = DenseRow([1, 2, 3, 4, 5])
        >>> r @ r.transpose()
        55
    """

    __slots__ = ()

    @property
    def rows(self) -> int:
        return 1

    @property
    def cols(self) -> int:
        return len(self._data)

    def dims(self):
        return (1, len(self._data))

    def transpose(self) -> "DenseColumn":
        """Column over the same element list."""
        return DenseColumn._wrap(self._data, self._dtype)

    def __matmul__(self, other: Any) -> Any:
        from ._base import Matrix
        from ._ops import inner, vecmat

        if isinstance(other, DenseColumn):
            return inner(self, other)
        if isinstance(other, Matrix):
            return vecmat(self, other)
        return NotImplemented

    def __str__(self) -> str:
        return "[" + " ".join(str(x) for x in self._data) + "]"


class DenseColumn(_DenseVector):
    """
    n x 1 dense vector.

    Example:
        >>> c = DenseColumn([1, 2, 3, 4])
        >>> (c @ DenseRow([1, 2, 3])).shape
        (4, 3)
    """

    __slots__ = ()

    @property
    def rows(self) -> int:
        return len(self._data)

    @property
    def cols(self) -> int:
        return 1

    def dims(self):
        return (len(self._data), 1)

    def transpose(self) -> DenseRow:
        """Row over the same element list."""
        return DenseRow._wrap(self._data, self._dtype)

    def __matmul__(self, other: Any) -> Any:
        from ._base import Matrix
        from ._ops import colmat, outer

        if isinstance(other, DenseRow):
            return outer(self, other)
        if isinstance(other, Matrix):
            return colmat(self, other)
        return NotImplemented

    def __str__(self) -> str:
        return "\n".join(f"[{x}]" for x in self._data)
