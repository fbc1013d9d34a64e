"""
Matrix Base Class

This module defines the abstract base class for the polymat matrix type
system. It establishes the interface that all four representations implement,
so client code can work with any of them through one contract.

Type Hierarchy:

    Matrix (ABC)
    ├── DenseMatrix      - flat storage of all rows*cols elements
    ├── SparseMatrix     - {(i, j): value} map, absent entries are zero
    ├── IdentityMatrix   - only n, never allocates
    └── ZeroMatrix       - only (rows, cols), never allocates

Design Philosophy:

1. One Contract: get/set/rows/cols/transpose/trace/equality/predicates behave
   the same for every representation.

2. Structure Aware: Identity and Zero answer predicates analytically and never
   build their element grid unless elements() is asked for explicitly.

3. Central Dispatch: +, -, @ and == are resolved by the pair of MatrixKind
   tags in polymat.matrix._ops, one table per operator.

Example:

    for mat in [DenseMatrix([[1, 0], [0, 1]]), IdentityMatrix(2),
                SparseMatrix.from_triples([(0, 0, 1), (1, 1, 1)], 2, 2)]:
        assert mat.is_identity()
        assert mat.trace() == 2
"""

import numbers
import warnings
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional, Tuple, TYPE_CHECKING

from .._config import ReadOrder, config
from .._dtypes import DType, Scalar
from .._errors import IndexOutOfBoundsError, MaterializationWarning

if TYPE_CHECKING:
    from ._vector import DenseColumn, DenseRow

__all__ = [
    'Matrix',
    'MatrixKind',
    'ReadOrder',
]


class MatrixKind(Enum):
    """Representation tag used by the operator dispatch tables."""
    DENSE = 'dense'
    SPARSE = 'sparse'
    IDENTITY = 'identity'
    ZERO = 'zero'


class Matrix(ABC):
    """
    Abstract base class for all matrices.

    Required Properties (subclasses must implement):
        kind: MatrixKind tag
        rows: Number of rows
        cols: Number of columns
        dtype: Element DType

    Required Methods (subclasses must implement):
        get(i, j): Element or None when out of range
        set(i, j, value): Assigned value or None when out of range
        transpose(): Transposed matrix
        copy(): Independent matrix equal to this one

    Predicates (is_diagonal, is_symmetric, ...) have generic implementations
    here in terms of get(); representations override them when their
    structure gives a cheaper answer.
    """

    __slots__ = ()

    # =========================================================================
    # Abstract Properties
    # =========================================================================

    @property
    @abstractmethod
    def kind(self) -> MatrixKind:
        """Representation tag."""
        ...

    @property
    @abstractmethod
    def rows(self) -> int:
        """Number of rows."""
        ...

    @property
    @abstractmethod
    def cols(self) -> int:
        """Number of columns."""
        ...

    @property
    @abstractmethod
    def dtype(self) -> DType:
        """Element type."""
        ...

    # =========================================================================
    # Abstract Methods
    # =========================================================================

    @abstractmethod
    def get(self, i: int, j: int) -> Optional[Scalar]:
        """Element at (i, j), or None if (i, j) is out of range."""
        ...

    @abstractmethod
    def set(self, i: int, j: int, value: Scalar) -> Optional[Scalar]:
        """Assign element at (i, j). Returns the stored value, or None if out of range."""
        ...

    @abstractmethod
    def transpose(self) -> "Matrix":
        """Transposed matrix."""
        ...

    @abstractmethod
    def copy(self) -> "Matrix":
        """Independent matrix equal to this one."""
        ...

    # =========================================================================
    # Derived Properties
    # =========================================================================

    @property
    def shape(self) -> Tuple[int, int]:
        """Matrix dimensions (rows, cols)."""
        return (self.rows, self.cols)

    @property
    def size(self) -> int:
        """Total number of elements (rows * cols)."""
        return self.rows * self.cols

    @property
    def T(self) -> "Matrix":
        """Alias for transpose()."""
        return self.transpose()

    def dims(self) -> Tuple[int, int]:
        """Matrix dimensions (rows, cols)."""
        return (self.rows, self.cols)

    def is_square(self) -> bool:
        return self.rows == self.cols

    def _in_bounds(self, i: int, j: int) -> bool:
        return 0 <= i < self.rows and 0 <= j < self.cols

    # =========================================================================
    # Element Views
    # =========================================================================

    def elements(self) -> List[Scalar]:
        """All rows*cols elements in row-major logical order."""
        return [self.get(i, j) for i in range(self.rows) for j in range(self.cols)]

    def diags(self) -> List[Scalar]:
        """Diagonal elements get(i, i) for i < min(rows, cols)."""
        return [self.get(i, i) for i in range(min(self.rows, self.cols))]

    def trace(self) -> Scalar:
        """Sum of diags()."""
        total = self.dtype.zero()
        for d in self.diags():
            total = total + d
        return total

    def get_row(self, i: int) -> "DenseRow":
        """Copy of row i as a DenseRow."""
        from ._vector import DenseRow

        if not 0 <= i < self.rows:
            raise IndexOutOfBoundsError(f"row {i} out of range for shape {self.shape}")
        return DenseRow._wrap([self.get(i, j) for j in range(self.cols)], self.dtype)

    def get_col(self, j: int) -> "DenseColumn":
        """Copy of column j as a DenseColumn."""
        from ._vector import DenseColumn

        if not 0 <= j < self.cols:
            raise IndexOutOfBoundsError(f"column {j} out of range for shape {self.shape}")
        return DenseColumn._wrap([self.get(i, j) for i in range(self.rows)], self.dtype)

    def _warn_materialize(self) -> None:
        threshold = config.materialize.warn_threshold
        if self.size > threshold:
            warnings.warn(
                f"materializing {self.kind.value} matrix of shape {self.shape} "
                f"({self.size} elements > warn_threshold={threshold})",
                MaterializationWarning,
                stacklevel=3,
            )

    # =========================================================================
    # Structural Predicates
    # =========================================================================

    def _all_zero_where(self, pred: Callable[[int, int], bool]) -> bool:
        """True if every element at a position satisfying pred is zero."""
        zero = self.dtype.zero()
        for i in range(self.rows):
            for j in range(self.cols):
                if pred(i, j) and self.get(i, j) != zero:
                    return False
        return True

    def _pairs_hold(self, relation: Callable[[Scalar, Scalar], bool]) -> bool:
        """True if relation(a[i][j], a[j][i]) holds for every i <= j (square only)."""
        if not self.is_square():
            return False
        for i in range(self.rows):
            for j in range(i, self.cols):
                if not relation(self.get(i, j), self.get(j, i)):
                    return False
        return True

    def _diags_all_one(self) -> bool:
        one = self.dtype.one()
        return all(d == one for d in self.diags())

    def _close(self, a: Scalar, b: Scalar) -> bool:
        tol = config.compute.tolerance
        if self.dtype.is_exact or tol == 0:
            return a == b
        return abs(a - b) <= tol

    def _gram_is_identity(self, conjugate: bool) -> bool:
        """True if A^T A (or A^H A) equals the identity."""
        if not self.is_square():
            return False
        n = self.rows
        conj = self.dtype.conj if conjugate else (lambda x: x)
        columns = [[self.get(k, j) for k in range(n)] for j in range(n)]
        zero, one = self.dtype.zero(), self.dtype.one()
        for i in range(n):
            for j in range(i, n):
                acc = zero
                for a, b in zip(columns[i], columns[j]):
                    acc = acc + conj(a) * b
                if not self._close(acc, one if i == j else zero):
                    return False
        return True

    def is_diagonal(self) -> bool:
        return self._all_zero_where(lambda i, j: i != j)

    def is_lower_triangular(self) -> bool:
        return self._all_zero_where(lambda i, j: j > i)

    def is_strictly_lower_triangular(self) -> bool:
        return self._all_zero_where(lambda i, j: j >= i)

    def is_unilower_triangular(self) -> bool:
        return self.is_lower_triangular() and self._diags_all_one()

    def is_upper_triangular(self) -> bool:
        return self._all_zero_where(lambda i, j: i > j)

    def is_strictly_upper_triangular(self) -> bool:
        return self._all_zero_where(lambda i, j: i >= j)

    def is_uniupper_triangular(self) -> bool:
        return self.is_upper_triangular() and self._diags_all_one()

    def is_lower_hessenberg(self) -> bool:
        return self._all_zero_where(lambda i, j: j > i + 1)

    def is_upper_hessenberg(self) -> bool:
        return self._all_zero_where(lambda i, j: i > j + 1)

    def is_symmetric(self) -> bool:
        return self._pairs_hold(lambda a, b: a == b)

    def is_skew_symmetric(self) -> bool:
        return self._pairs_hold(lambda a, b: a == -b)

    def is_hermitian(self) -> bool:
        conj = self.dtype.conj
        return self._pairs_hold(lambda a, b: a == conj(b))

    def is_skew_hermitian(self) -> bool:
        conj = self.dtype.conj
        return self._pairs_hold(lambda a, b: a == -conj(b))

    def is_orthogonal(self) -> bool:
        """A^T A == I. Inexact dtypes compare within config.compute.tolerance."""
        return self._gram_is_identity(conjugate=False)

    def is_unitary(self) -> bool:
        """A^H A == I. Inexact dtypes compare within config.compute.tolerance."""
        return self._gram_is_identity(conjugate=True)

    def is_identity(self) -> bool:
        return self.is_square() and self.is_diagonal() and self._diags_all_one()

    # =========================================================================
    # Python Protocols
    # =========================================================================

    def __iter__(self) -> Iterator[Scalar]:
        return iter(self.elements())

    def __getitem__(self, key: Tuple[int, int]) -> Scalar:
        i, j = key
        value = self.get(i, j)
        if value is None:
            raise IndexOutOfBoundsError(f"index ({i}, {j}) out of range for shape {self.shape}")
        return value

    def __setitem__(self, key: Tuple[int, int], value: Scalar) -> None:
        i, j = key
        if self.set(i, j, value) is None:
            raise IndexOutOfBoundsError(f"index ({i}, {j}) out of range for shape {self.shape}")

    __hash__ = None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        from ._ops import equals
        return equals(self, other)

    def __add__(self, other: Any) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        from ._ops import add
        return add(self, other)

    def __sub__(self, other: Any) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        from ._ops import subtract
        return subtract(self, other)

    def __neg__(self) -> "Matrix":
        from ._ops import negate
        return negate(self)

    def __mul__(self, scalar: Any) -> "Matrix":
        if isinstance(scalar, Matrix) or not isinstance(scalar, numbers.Number):
            return NotImplemented
        from ._ops import scale
        return scale(self, scalar)

    def __rmul__(self, scalar: Any) -> "Matrix":
        return self.__mul__(scalar)

    def __matmul__(self, other: Any) -> Any:
        from ._ops import matmul, matrow, matvec
        from ._vector import DenseColumn, DenseRow

        if isinstance(other, Matrix):
            return matmul(self, other)
        if isinstance(other, DenseColumn):
            return matvec(self, other)
        if isinstance(other, DenseRow):
            return matrow(self, other)
        return NotImplemented

    def __str__(self) -> str:
        width = max((len(str(x)) for x in self.elements()), default=1)
        lines = []
        for i in range(self.rows):
            lines.append(" ".join(str(self.get(i, j)).rjust(width) for j in range(self.cols)))
        return "\n".join(lines)
