"""
Construction helpers.

Short functional spellings of the public constructors:

    dense([[1, 2], [3, 4]])          DenseMatrix from rows
    dense_fill(0, 4, 20)             DenseMatrix filled with one value
    eye(3)                           IdentityMatrix(3)
    zeros(2, 5)                      ZeroMatrix(2, 5)
    sparse([(0, 1, -1)], 3, 3)       SparseMatrix.from_triples
    row([1, 2, 3]), column([1, 2])   DenseRow / DenseColumn
"""

from typing import Iterable, Optional, Sequence, Union

from .._dtypes import DType, Scalar, classify
from .._errors import check_positive_dims
from ._dense import DenseMatrix
from ._identity import IdentityMatrix
from ._sparse import SparseMatrix, Triple
from ._vector import DenseColumn, DenseRow
from ._zero import ZeroMatrix

__all__ = [
    'dense',
    'dense_fill',
    'eye',
    'zeros',
    'sparse',
    'row',
    'column',
]

DTypeLike = Optional[Union[str, DType]]


def dense(rows: Sequence[Sequence[Scalar]], dtype: DTypeLike = None) -> DenseMatrix:
    return DenseMatrix(rows, dtype=dtype)


def dense_fill(value: Scalar, m: int, n: int, dtype: DTypeLike = None) -> DenseMatrix:
    """m x n DenseMatrix with every element equal to value."""
    check_positive_dims(m, n, "dense_fill")
    if dtype is None:
        dtype = classify(value)
    return DenseMatrix.from_vec([value] * (m * n), m, n, dtype=dtype)


def eye(n: int, dtype: Union[str, DType] = DType.int64) -> IdentityMatrix:
    return IdentityMatrix(n, dtype=dtype)


def zeros(m: int, n: int, dtype: Union[str, DType] = DType.int64) -> ZeroMatrix:
    return ZeroMatrix(m, n, dtype=dtype)


def sparse(triples: Iterable[Triple], m: int, n: int, dtype: DTypeLike = None) -> SparseMatrix:
    return SparseMatrix.from_triples(triples, m, n, dtype=dtype)


def row(values: Sequence[Scalar], dtype: DTypeLike = None) -> DenseRow:
    return DenseRow(values, dtype=dtype)


def column(values: Sequence[Scalar], dtype: DTypeLike = None) -> DenseColumn:
    return DenseColumn(values, dtype=dtype)
