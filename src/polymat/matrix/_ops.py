"""Cross-Representation Matrix Operations.

This module resolves every binary operator between matrices by the pair of
MatrixKind tags of its operands:

- Addition and subtraction (add, subtract)
- Matrix product (matmul)
- Equality (equals)
- Unary and scalar operations (negate, scale)
- Vector products (inner, outer, matvec, vecmat, matrow, colmat)

Each binary operator owns one table mapping (lhs.kind, rhs.kind) to a rule.
Mirrored pairs reuse the rule of their counterpart with the arguments
swapped. Structural operands short-cut wherever algebra allows:

    Zero + X      -> X                     (no copy)
    Identity @ X  -> X                     (no copy)
    Zero @ X      -> Zero(lhs.rows, rhs.cols)
    Identity + Identity -> Sparse diagonal of 1 + 1

Example:
    >>> from polymat.matrix import DenseMatrix, IdentityMatrix, ZeroMatrix
    >>> a = DenseMatrix([[1, 2], [3, 4]])
    >>> (a + IdentityMatrix(2)).elements()
    [2, 2, 3, 5]
    >>> (ZeroMatrix(3, 2) @ a).shape
    (3, 2)
"""

import logging
import numbers
import operator
from typing import Any, Callable, Dict, List, Tuple

from .._config import ReadOrder
from .._dtypes import DType, Scalar, classify, result_dtype
from .._errors import (
    check_product_dims,
    check_same_dims,
    check_vector_lengths,
)
from ._base import Matrix, MatrixKind
from ._dense import DenseMatrix
from ._identity import IdentityMatrix
from ._sparse import SparseMatrix
from ._vector import DenseColumn, DenseRow
from ._zero import ZeroMatrix

logger = logging.getLogger("polymat.ops")

__all__ = [
    # Binary
    'add',
    'subtract',
    'matmul',
    'equals',

    # Unary / scalar
    'negate',
    'scale',

    # Vectors
    'inner',
    'outer',
    'matvec',
    'vecmat',
    'matrow',
    'colmat',
]

DENSE = MatrixKind.DENSE
SPARSE = MatrixKind.SPARSE
IDENTITY = MatrixKind.IDENTITY
ZERO = MatrixKind.ZERO

Rule = Callable[[Matrix, Matrix], Any]
Table = Dict[Tuple[MatrixKind, MatrixKind], Rule]


# =============================================================================
# Helpers
# =============================================================================

def _flat(mat: Matrix) -> List[Scalar]:
    """Row-major element list; never emits a MaterializationWarning."""
    if mat.kind is DENSE:
        return mat.elements()
    zero = mat.dtype.zero()
    data = [zero] * mat.size
    if mat.kind is SPARSE:
        cols = mat.cols
        for (i, j), v in mat.items():
            data[i * cols + j] = v
    elif mat.kind is IDENTITY:
        n = mat.n
        one = mat.dtype.one()
        for k in range(n):
            data[k * n + k] = one
    return data


def _entries(mat: Matrix) -> Dict[Tuple[int, int], Scalar]:
    """Logical-coordinate entries of a Sparse or Identity matrix."""
    if mat.kind is IDENTITY:
        one = mat.dtype.one()
        return {(k, k): one for k in range(mat.n)}
    return dict(mat.items())


def _dense_result(data: List[Scalar], rows: int, cols: int, dtype: DType) -> DenseMatrix:
    return DenseMatrix._wrap([dtype.cast(x) for x in data], rows, cols,
                             ReadOrder.ROW_MAJOR, dtype)


def _diagonal(n: int, value: Scalar, dtype: DType) -> SparseMatrix:
    return SparseMatrix._from_logical({(k, k): value for k in range(n)}, n, n, dtype)


def _swap(rule: Rule) -> Rule:
    """Mirror of rule: evaluates rule(rhs, lhs)."""
    def swapped(lhs, rhs):
        return rule(rhs, lhs)
    swapped.__name__ = f"{rule.__name__}[swapped]"
    return swapped


def _dispatch(table: Table, name: str, lhs: Matrix, rhs: Matrix) -> Any:
    rule = table[(lhs.kind, rhs.kind)]
    logger.debug("%s(%s %s, %s %s) -> %s", name, lhs.kind.value, lhs.shape,
                 rhs.kind.value, rhs.shape, rule.__name__)
    return rule(lhs, rhs)


# =============================================================================
# Element-wise Rules (add / subtract)
# =============================================================================

def _dense_rule(op: Callable[[Scalar, Scalar], Scalar]) -> Rule:
    """Element-wise op over the full grid, Dense result."""
    def rule(lhs, rhs):
        dtype = result_dtype(lhs.dtype, rhs.dtype)
        data = [op(a, b) for a, b in zip(_flat(lhs), _flat(rhs))]
        return _dense_result(data, lhs.rows, lhs.cols, dtype)
    rule.__name__ = f"dense_{op.__name__}"
    return rule


def _sparse_rule(op: Callable[[Scalar, Scalar], Scalar]) -> Rule:
    """Element-wise op over the union of stored coordinates, Sparse result."""
    def rule(lhs, rhs):
        dtype = result_dtype(lhs.dtype, rhs.dtype)
        zero = dtype.zero()
        a, b = _entries(lhs), _entries(rhs)
        out = {k: dtype.cast(op(a.get(k, zero), b.get(k, zero))) for k in a.keys() | b.keys()}
        return SparseMatrix._from_logical(out, lhs.rows, lhs.cols, dtype)
    rule.__name__ = f"sparse_{op.__name__}"
    return rule


def _elementwise_table(op: Callable[[Scalar, Scalar], Scalar]) -> Table:
    dense, sparse = _dense_rule(op), _sparse_rule(op)
    table: Table = {}
    for a in MatrixKind:
        for b in MatrixKind:
            table[(a, b)] = dense if DENSE in (a, b) else sparse
    return table


def _zero_plus(zero, other):
    return other


def _identity_plus_identity(lhs, rhs):
    dtype = result_dtype(lhs.dtype, rhs.dtype)
    return _diagonal(lhs.n, dtype.cast(lhs.dtype.one() + rhs.dtype.one()), dtype)


def _minus_zero(other, zero):
    return other


def _zero_minus(zero, other):
    return negate(other)


def _identity_minus_identity(lhs, rhs):
    return ZeroMatrix(lhs.n, lhs.n, result_dtype(lhs.dtype, rhs.dtype))


_ADD = _elementwise_table(operator.add)
_ADD[(IDENTITY, IDENTITY)] = _identity_plus_identity
for _k in MatrixKind:
    _ADD[(ZERO, _k)] = _zero_plus
    _ADD[(_k, ZERO)] = _swap(_zero_plus)

_SUB = _elementwise_table(operator.sub)
_SUB[(IDENTITY, IDENTITY)] = _identity_minus_identity
for _k in MatrixKind:
    _SUB[(ZERO, _k)] = _zero_minus
    _SUB[(_k, ZERO)] = _minus_zero


def add(lhs: Matrix, rhs: Matrix) -> Matrix:
    """
    Matrix sum lhs + rhs.

    Args:
        lhs: Left operand
        rhs: Right operand with the same shape

    Returns:
        Zero + X returns X itself; Identity + Identity a diagonal Sparse;
        Sparse/Identity mixes a Sparse; anything involving Dense a new Dense.

    Raises:
        InvalidDimensionsError: If the shapes differ
    """
    check_same_dims(lhs, rhs)
    return _dispatch(_ADD, "add", lhs, rhs)


def subtract(lhs: Matrix, rhs: Matrix) -> Matrix:
    """
    Matrix difference lhs - rhs.

    X - Zero returns X itself, Zero - X is -X and Identity - Identity is Zero;
    other pairs follow add().

    Raises:
        InvalidDimensionsError: If the shapes differ
    """
    check_same_dims(lhs, rhs, "Cannot subtract matrices of given dimensions")
    return _dispatch(_SUB, "subtract", lhs, rhs)


# =============================================================================
# Unary and Scalar Operations
# =============================================================================

def negate(mat: Matrix) -> Matrix:
    """Additive inverse. Zero is returned unchanged, Identity becomes Sparse."""
    dtype = mat.dtype
    if mat.kind is ZERO:
        return mat
    if mat.kind is IDENTITY:
        return _diagonal(mat.n, -dtype.one(), dtype)
    if mat.kind is SPARSE:
        return SparseMatrix._from_logical({k: -v for k, v in mat.items()},
                                          mat.rows, mat.cols, dtype)
    return _dense_result([-x for x in _flat(mat)], mat.rows, mat.cols, dtype)


def scale(mat: Matrix, scalar: Scalar) -> Matrix:
    """
    Scalar multiple scalar * mat.

    Zero stays Zero, Identity becomes a diagonal Sparse, Dense and Sparse keep
    their representation. The result dtype is promoted to hold the scalar.

    Raises:
        TypeError: If scalar is not a number
    """
    if not isinstance(scalar, numbers.Number):
        raise TypeError(f"scale: expected a number, got {type(scalar).__name__}")
    dtype = result_dtype(mat.dtype, classify(scalar))
    logger.debug("scale(%s %s, %r)", mat.kind.value, mat.shape, scalar)
    if mat.kind is ZERO:
        return ZeroMatrix(mat.rows, mat.cols, dtype)
    if mat.kind is IDENTITY:
        return _diagonal(mat.n, dtype.cast(mat.dtype.one() * scalar), dtype)
    if mat.kind is SPARSE:
        return SparseMatrix._from_logical({k: dtype.cast(v * scalar) for k, v in mat.items()},
                                          mat.rows, mat.cols, dtype)
    return _dense_result([x * scalar for x in _flat(mat)], mat.rows, mat.cols, dtype)


# =============================================================================
# Matrix Product
# =============================================================================

def _zero_product(lhs, rhs):
    return ZeroMatrix(lhs.rows, rhs.cols, result_dtype(lhs.dtype, rhs.dtype))


def _identity_times(identity, other):
    return other


def _dense_product(lhs, rhs):
    """Standard O(m*k*n) product; Sparse operands contribute stored entries only."""
    dtype = result_dtype(lhs.dtype, rhs.dtype)
    m, k, n = lhs.rows, lhs.cols, rhs.cols
    out = [dtype.zero()] * (m * n)

    if lhs.kind is SPARSE:
        b = _flat(rhs)
        for (i, p), v in lhs.items():
            base, row = i * n, p * n
            for j in range(n):
                out[base + j] = out[base + j] + v * b[row + j]
    elif rhs.kind is SPARSE:
        a = _flat(lhs)
        for (p, j), w in rhs.items():
            for i in range(m):
                out[i * n + j] = out[i * n + j] + a[i * k + p] * w
    else:
        a, b = _flat(lhs), _flat(rhs)
        for i in range(m):
            base = i * n
            for p in range(k):
                v = a[i * k + p]
                row = p * n
                for j in range(n):
                    out[base + j] = out[base + j] + v * b[row + j]

    return _dense_result(out, m, n, dtype)


def _sparse_product(lhs, rhs):
    """Product over stored entries, Sparse result."""
    dtype = result_dtype(lhs.dtype, rhs.dtype)
    zero = dtype.zero()
    by_row: Dict[int, List[Tuple[int, Scalar]]] = {}
    for (p, j), w in rhs.items():
        by_row.setdefault(p, []).append((j, w))

    acc: Dict[Tuple[int, int], Scalar] = {}
    for (i, p), v in lhs.items():
        for j, w in by_row.get(p, ()):
            acc[(i, j)] = acc.get((i, j), zero) + v * w
    out = {key: dtype.cast(x) for key, x in acc.items()}
    return SparseMatrix._from_logical(out, lhs.rows, rhs.cols, dtype)


def _matmul_table() -> Table:
    table: Table = {}
    for a in MatrixKind:
        for b in MatrixKind:
            if ZERO in (a, b):
                table[(a, b)] = _zero_product
            elif a is IDENTITY:
                table[(a, b)] = _identity_times
            elif b is IDENTITY:
                table[(a, b)] = _swap(_identity_times)
            elif a is SPARSE and b is SPARSE:
                table[(a, b)] = _sparse_product
            else:
                table[(a, b)] = _dense_product
    return table


_MATMUL = _matmul_table()


def matmul(lhs: Matrix, rhs: Matrix) -> Matrix:
    """
    Matrix product lhs @ rhs.

    Args:
        lhs: m x k matrix
        rhs: k x n matrix

    Returns:
        m x n matrix. Zero operands give ZeroMatrix(m, n); an Identity
        operand returns the other operand itself; Sparse @ Sparse stays
        Sparse; other pairs give a new Dense.

    Raises:
        InvalidDimensionsError: If lhs.cols != rhs.rows
    """
    check_product_dims(lhs, rhs)
    return _dispatch(_MATMUL, "matmul", lhs, rhs)


# =============================================================================
# Equality
# =============================================================================

def _eq_grid(lhs, rhs):
    return _flat(lhs) == _flat(rhs)


def _eq_sparse(lhs, rhs):
    zero = lhs.dtype.zero()
    a, b = _entries(lhs), _entries(rhs)
    return all(a.get(k, zero) == b.get(k, zero) for k in a.keys() | b.keys())


def _eq_identity(candidate, identity):
    return candidate.is_diagonal() and candidate._diags_all_one()


def _eq_zero(candidate, zero):
    return candidate._all_zero_where(lambda i, j: True)


def _eq_same_structure(lhs, rhs):
    return True


def _eq_never(lhs, rhs):
    return False


_EQ: Table = {
    (DENSE, DENSE): _eq_grid,
    (DENSE, SPARSE): _eq_grid,
    (SPARSE, DENSE): _eq_grid,
    (SPARSE, SPARSE): _eq_sparse,
    (DENSE, IDENTITY): _eq_identity,
    (SPARSE, IDENTITY): _eq_identity,
    (IDENTITY, DENSE): _swap(_eq_identity),
    (IDENTITY, SPARSE): _swap(_eq_identity),
    (DENSE, ZERO): _eq_zero,
    (SPARSE, ZERO): _eq_zero,
    (ZERO, DENSE): _swap(_eq_zero),
    (ZERO, SPARSE): _swap(_eq_zero),
    (IDENTITY, IDENTITY): _eq_same_structure,
    (ZERO, ZERO): _eq_same_structure,
    (IDENTITY, ZERO): _eq_never,
    (ZERO, IDENTITY): _eq_never,
}


def equals(lhs: Matrix, rhs: Matrix) -> bool:
    """
    Representation-independent equality.

    Matrices of different shapes are never equal; otherwise the logical
    element grids are compared without materializing Identity or Zero.
    """
    if lhs.dims() != rhs.dims():
        logger.debug("equals: shape mismatch %s vs %s", lhs.shape, rhs.shape)
        return False
    return _dispatch(_EQ, "equals", lhs, rhs)


# =============================================================================
# Vector Products
# =============================================================================

def inner(row: DenseRow, col: DenseColumn) -> Scalar:
    """
    Inner product row @ col.

    Raises:
        InvalidDimensionsError: If the lengths differ

    Example:
        >>> inner(DenseRow([1, 2, 3]), DenseColumn([4, 5, 6]))
        32
    """
    check_vector_lengths(row, col, "Cannot take inner product of vectors of given lengths")
    dtype = result_dtype(row.dtype, col.dtype)
    acc = dtype.zero()
    for a, b in zip(row, col):
        acc = acc + a * b
    return dtype.cast(acc)


def outer(col: DenseColumn, row: DenseRow) -> DenseMatrix:
    """Outer product col @ row: Dense (len(col), len(row)) with (i, j) = col[i] * row[j]."""
    dtype = result_dtype(col.dtype, row.dtype)
    data = [a * b for a in col for b in row]
    return _dense_result(data, len(col), len(row), dtype)


def matvec(mat: Matrix, col: DenseColumn) -> DenseColumn:
    """
    Matrix-vector product mat @ col.

    Raises:
        InvalidDimensionsError: If mat.cols != len(col)
    """
    check_product_dims(mat, col)
    logger.debug("matvec(%s %s, column %d)", mat.kind.value, mat.shape, len(col))
    dtype = result_dtype(mat.dtype, col.dtype)
    if mat.kind is ZERO:
        return DenseColumn.zeros(mat.rows, dtype)
    if mat.kind is IDENTITY:
        return col

    out = [dtype.zero()] * mat.rows
    if mat.kind is SPARSE:
        for (i, p), v in mat.items():
            out[i] = out[i] + v * col.get(p)
    else:
        a, k = _flat(mat), mat.cols
        for i in range(mat.rows):
            acc = out[i]
            for p, x in enumerate(col):
                acc = acc + a[i * k + p] * x
            out[i] = acc
    return DenseColumn._wrap([dtype.cast(x) for x in out], dtype)


def vecmat(row: DenseRow, mat: Matrix) -> DenseRow:
    """
    Vector-matrix product row @ mat.

    Raises:
        InvalidDimensionsError: If len(row) != mat.rows
    """
    check_product_dims(row, mat)
    logger.debug("vecmat(row %d, %s %s)", len(row), mat.kind.value, mat.shape)
    dtype = result_dtype(row.dtype, mat.dtype)
    if mat.kind is ZERO:
        return DenseRow.zeros(mat.cols, dtype)
    if mat.kind is IDENTITY:
        return row

    n = mat.cols
    out = [dtype.zero()] * n
    if mat.kind is SPARSE:
        for (p, j), w in mat.items():
            out[j] = out[j] + row.get(p) * w
    else:
        b = _flat(mat)
        for p, x in enumerate(row):
            base = p * n
            for j in range(n):
                out[j] = out[j] + x * b[base + j]
    return DenseRow._wrap([dtype.cast(x) for x in out], dtype)


def matrow(mat: Matrix, row: DenseRow) -> Matrix:
    """
    Product mat @ row of an m x 1 matrix and a 1 x n row: the m x n outer
    product of mat's only column with row.

    Raises:
        InvalidDimensionsError: If mat.cols != 1
    """
    check_product_dims(mat, row)
    logger.debug("matrow(%s %s, row %d)", mat.kind.value, mat.shape, len(row))
    if mat.kind is ZERO:
        return ZeroMatrix(mat.rows, len(row), result_dtype(mat.dtype, row.dtype))
    return outer(mat.get_col(0), row)


def colmat(col: DenseColumn, mat: Matrix) -> Matrix:
    """
    Product col @ mat of an m x 1 column and a 1 x n matrix: the m x n outer
    product of col with mat's only row.

    Raises:
        InvalidDimensionsError: If mat.rows != 1
    """
    check_product_dims(col, mat)
    logger.debug("colmat(column %d, %s %s)", len(col), mat.kind.value, mat.shape)
    if mat.kind is ZERO:
        return ZeroMatrix(len(col), mat.cols, result_dtype(col.dtype, mat.dtype))
    return outer(col, mat.get_row(0))
