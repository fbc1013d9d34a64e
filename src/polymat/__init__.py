"""
polymat - Polymorphic Matrix Algebra

One matrix interface over four representations:
- Dense: flat storage, O(1) transpose by read-order flip
- Sparse: coordinate map, absent entries are zero
- Identity / Zero: structural, never allocate

Arithmetic (+, -, @, ==) is dimension checked and dispatched on the pair of
representations, so structural operands short-cut instead of materializing.

Modules:
- matrix: representations, vectors, operations, construction, interop
- config: layout / compute / materialize settings (thread-local overrides)

Example:
    >>> import polymat as pm
    >>>
    >>> a = pm.dense([[1, 2, 3, 4], [5, 6, 7, 8], [9, 10, 11, 12], [13, 14, 15, 16]])
    >>> (a + pm.eye(4)).diags()
    [2, 7, 12, 17]
    >>> pm.row([1, 2, 3, 4, 5]) @ pm.column([1, 2, 3, 4, 5])
    55
    >>> pm.dense_fill(0, 4, 20) == pm.zeros(4, 20)
    True
"""

__version__ = '0.1.0'

from . import matrix

from ._config import (
    ReadOrder,
    LayoutConfig,
    ComputeConfig,
    MaterializeConfig,
    PolymatConfig,
    config,
    get_config,
    set_default_read_order,
    set_tolerance,
)
from ._dtypes import (
    DType,
    int64,
    rational,
    float64,
    complex128,
    decimal,
    infer_dtype,
    result_dtype,
)
from ._errors import (
    PolymatError,
    InvalidDimensionsError,
    IndexOutOfBoundsError,
    UnsupportedMutationError,
    DTypeMismatchError,
    MaterializationWarning,
)
from .matrix import (
    # Core classes
    Matrix,
    MatrixKind,
    DenseMatrix,
    SparseMatrix,
    IdentityMatrix,
    ZeroMatrix,
    DenseRow,
    DenseColumn,

    # Operations
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

    # Construction
    dense,
    dense_fill,
    eye,
    zeros,
    sparse,
    row,
    column,

    # Interop
    to_numpy,
    from_numpy,
    to_scipy,
    from_scipy,
)

__all__ = [
    '__version__',

    # Modules
    'matrix',

    # Config
    'ReadOrder',
    'LayoutConfig',
    'ComputeConfig',
    'MaterializeConfig',
    'PolymatConfig',
    'config',
    'get_config',
    'set_default_read_order',
    'set_tolerance',

    # Types
    'DType',
    'int64',
    'rational',
    'float64',
    'complex128',
    'decimal',
    'infer_dtype',
    'result_dtype',

    # Errors
    'PolymatError',
    'InvalidDimensionsError',
    'IndexOutOfBoundsError',
    'UnsupportedMutationError',
    'DTypeMismatchError',
    'MaterializationWarning',

    # Matrices
    'Matrix',
    'MatrixKind',
    'DenseMatrix',
    'SparseMatrix',
    'IdentityMatrix',
    'ZeroMatrix',
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
