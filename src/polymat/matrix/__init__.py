"""polymat Matrix Module.

Four matrix representations behind one interface, with dimension-checked
arithmetic across every pairing of them.

Type Hierarchy:

    Matrix (ABC)
    ├── DenseMatrix          # flat list + ReadOrder
    ├── SparseMatrix         # {(i, j): value} + ReadOrder
    ├── IdentityMatrix       # n only
    └── ZeroMatrix           # (rows, cols) only

    DenseRow <-> DenseColumn # dual vectors under transpose

Operators:
    +, -        add / subtract    (same shape)
    @           matmul            (lhs.cols == rhs.rows)
    ==          equals            (representation independent)
    -m, k * m   negate / scale

Quick Start:
    >>> from polymat.matrix import DenseMatrix, IdentityMatrix, SparseMatrix
    >>>
    >>> a = DenseMatrix([[0, -1, 0], [0, 0, 0], [3, 0, 0]])
    >>> s = SparseMatrix.from_triples([(0, 1, -1), (2, 0, 3)], 3, 3)
    >>> a == s
    True
    >>> IdentityMatrix(3) @ s is s
    True
"""

from ._base import Matrix, MatrixKind, ReadOrder
from ._dense import DenseMatrix
from ._sparse import SparseMatrix
from ._identity import IdentityMatrix
from ._zero import ZeroMatrix
from ._vector import DenseRow, DenseColumn
from ._ops import (
    add,
    subtract,
    matmul,
    equals,
    negate,
    scale,
    inner,
    outer,
    matvec,
    vecmat,
    matrow,
    colmat,
)
from ._construct import (
    dense,
    dense_fill,
    eye,
    zeros,
    sparse,
    row,
    column,
)
from ._interop import (
    to_numpy,
    from_numpy,
    to_scipy,
    from_scipy,
)

__all__ = [
    # Base
    'Matrix',
    'MatrixKind',
    'ReadOrder',

    # Representations
    'DenseMatrix',
    'SparseMatrix',
    'IdentityMatrix',
    'ZeroMatrix',

    # Vectors
    'DenseRow',
    'DenseColumn',

    # Operations
    'add',
    'subtract',
    'matmul',
    'equals',
    'negate',
    'scale',
    'inner',
    'outer',
    'matvec',
    'vecmat',
    'matrow',
    'colmat',

    # Construction
    'dense',
    'dense_fill',
    'eye',
    'zeros',
    'sparse',
    'row',
    'column',

    # Interop
    'to_numpy',
    'from_numpy',
    'to_scipy',
    'from_scipy',
]
