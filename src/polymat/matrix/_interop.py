"""Conversions to and from numpy / scipy.

numpy and scipy are imported lazily inside each function so the core matrix
types stay importable without them.

Example:
    >>> import scipy.sparse as sp
    >>> s = from_scipy(sp.csr_matrix([[0, 2], [3, 0]]))
    >>> s.nnz
    2
    >>> to_numpy(IdentityMatrix(2)).tolist()
    [[1, 0], [0, 1]]
"""

from typing import Any, Optional, Union

from .._dtypes import DType, normalize_dtype
from .._errors import InvalidDimensionsError
from ._base import Matrix, MatrixKind
from ._dense import DenseMatrix
from ._sparse import SparseMatrix

__all__ = [
    'to_numpy',
    'from_numpy',
    'to_scipy',
    'from_scipy',
]

_SCIPY_FORMATS = ('csr', 'csc', 'coo')


def _dtype_from_numpy(np_dtype: Any) -> Optional[DType]:
    """polymat dtype for a numpy dtype, or None to infer from the values."""
    kind = np_dtype.kind
    if kind in 'biu':
        return DType.int64
    if kind == 'f':
        return DType.float64
    if kind == 'c':
        return DType.complex128
    return None


def to_numpy(mat: Matrix) -> Any:
    """Convert any matrix to a 2D numpy array.

    rational and decimal matrices give an object array holding the Python
    values.

    Args:
        mat: Any polymat matrix.

    Returns:
        numpy.ndarray of shape mat.shape.
    """
    try:
        import numpy as np
    except ImportError:
        raise ImportError("numpy required for to_numpy()")

    dtype = mat.dtype
    if mat.kind is MatrixKind.DENSE:
        return np.array(mat.elements(), dtype=dtype.numpy_dtype).reshape(mat.shape)

    arr = np.full(mat.shape, dtype.zero(), dtype=dtype.numpy_dtype)
    if mat.kind is MatrixKind.IDENTITY:
        np.fill_diagonal(arr, dtype.one())
    elif mat.kind is MatrixKind.SPARSE:
        for (i, j), v in mat.items():
            arr[i, j] = v
    return arr


def from_numpy(arr: Any, dtype: Optional[Union[str, DType]] = None) -> DenseMatrix:
    """Create a DenseMatrix from a 2D array-like.

    Args:
        arr: 2D numpy array (or anything np.asarray accepts).
        dtype: Target dtype (derived from the array dtype if omitted).

    Raises:
        InvalidDimensionsError: If arr is not 2D or has an empty axis.
    """
    try:
        import numpy as np
    except ImportError:
        raise ImportError("numpy required for from_numpy()")

    arr = np.asarray(arr)
    if arr.ndim != 2:
        raise InvalidDimensionsError(f"from_numpy: expected 2D array, got {arr.ndim}D")
    if dtype is None:
        dtype = _dtype_from_numpy(arr.dtype)
    return DenseMatrix(arr.tolist(), dtype=dtype)


def to_scipy(mat: Matrix, format: str = 'csr') -> Any:
    """Convert any matrix to a scipy.sparse matrix.

    Identity maps to scipy.sparse.identity and Zero to an empty matrix;
    Sparse keeps exactly its stored entries.

    Args:
        mat: polymat matrix with an int64, float64 or complex128 dtype.
        format: 'csr', 'csc' or 'coo'.

    Raises:
        ValueError: If format is not supported.
        TypeError: If the dtype has no scipy equivalent.
    """
    try:
        import numpy as np
        import scipy.sparse as sp
    except ImportError:
        raise ImportError("scipy required for to_scipy()")

    if format not in _SCIPY_FORMATS:
        raise ValueError(f"Invalid format: {format}. Valid: {list(_SCIPY_FORMATS)}")
    np_dtype = mat.dtype.numpy_dtype
    if np_dtype == 'object':
        raise TypeError(f"to_scipy: dtype {mat.dtype.value} has no scipy equivalent")

    if mat.kind is MatrixKind.IDENTITY:
        return sp.identity(mat.rows, dtype=np_dtype, format=format)
    if mat.kind is MatrixKind.ZERO:
        return sp.coo_matrix(mat.shape, dtype=np_dtype).asformat(format)
    if mat.kind is MatrixKind.SPARSE:
        rows, cols, data = [], [], []
        for (i, j), v in mat.items():
            rows.append(i)
            cols.append(j)
            data.append(v)
        coo = sp.coo_matrix(
            (np.array(data, dtype=np_dtype), (np.array(rows, dtype=np.int64),
                                              np.array(cols, dtype=np.int64))),
            shape=mat.shape,
        )
        return coo.asformat(format)
    return sp.coo_matrix(to_numpy(mat)).asformat(format)


def from_scipy(mat: Any, dtype: Optional[Union[str, DType]] = None) -> SparseMatrix:
    """Create a SparseMatrix from any scipy.sparse matrix.

    Duplicate coordinates are summed first, as scipy defines them.

    Args:
        mat: scipy sparse matrix (any format).
        dtype: Target dtype (derived from mat.dtype if omitted).
    """
    coo = mat.tocoo(copy=True)
    coo.sum_duplicates()
    if dtype is None:
        dtype = _dtype_from_numpy(coo.dtype)
    else:
        dtype = normalize_dtype(dtype)
    m, n = coo.shape
    triples = zip(coo.row.tolist(), coo.col.tolist(), coo.data.tolist())
    return SparseMatrix.from_triples(triples, m, n, dtype=dtype)
