"""
Element Type Definitions

Every matrix element type must provide zero, one, +, -, *, == and conversion
to and from a canonical integer. DType enumerates the Python number types
that satisfy this and carries the per-type capabilities.

Promotion lattice:

    int64 -> rational -> float64 -> complex128
    int64 -> decimal

decimal does not mix with rational, float64 or complex128 (Python refuses
Decimal + float), so promoting across those raises DTypeMismatchError.
"""

import numbers
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Iterable, Union

from ._errors import DTypeMismatchError

__all__ = [
    'DType',
    'Scalar',
    'int64',
    'rational',
    'float64',
    'complex128',
    'decimal',
    'normalize_dtype',
    'validate_dtype',
    'classify',
    'infer_dtype',
    'result_dtype',
]

Scalar = Union[int, Fraction, float, complex, Decimal]


class DType(Enum):
    """
    Element type enumeration.

    Example:
        >>> from polymat import DType
        >>> DType.rational.one()
        Fraction(1, 1)
        >>> DType.float64.from_int(3)
        3.0
    """

    int64 = 'int64'
    rational = 'rational'
    float64 = 'float64'
    complex128 = 'complex128'
    decimal = 'decimal'

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"DType.{self.name}"

    # -------------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------------

    @property
    def py_type(self) -> type:
        """Python type used to hold elements of this dtype."""
        return _PY_TYPES[self]

    @property
    def is_exact(self) -> bool:
        """Whether == on this dtype is free of rounding error."""
        return self not in (DType.float64, DType.complex128)

    @property
    def numpy_dtype(self) -> str:
        """numpy dtype string used by to_numpy()."""
        return _NUMPY_DTYPES[self]

    def zero(self) -> Scalar:
        """Additive identity."""
        return self.from_int(0)

    def one(self) -> Scalar:
        """Multiplicative identity."""
        return self.from_int(1)

    def from_int(self, n: int) -> Scalar:
        """Convert a canonical integer into this dtype."""
        return self.py_type(int(n))

    def to_int(self, x: Any) -> int:
        """
        Convert an element into a canonical integer (truncating toward zero).

        Raises:
            ValueError: If x is complex with a non-zero imaginary part
        """
        if isinstance(x, complex):
            if x.imag != 0:
                raise ValueError(f"cannot convert {x!r} to int: non-zero imaginary part")
            x = x.real
        return int(x)

    def cast(self, x: Any) -> Scalar:
        """
        Convert a value into this dtype without losing information.

        Raises:
            TypeError: If x is not a number, or cannot be held by this dtype
        """
        kind = classify(x)
        if kind is self:
            return self.py_type(x) if self is not DType.int64 else int(x)

        if self is DType.int64:
            if kind is DType.complex128:
                raise TypeError(f"cannot hold complex value {x!r} in int64")
            if x != int(x):
                raise TypeError(f"cannot hold non-integral value {x!r} in int64")
            return int(x)
        if kind is DType.complex128 and self is not DType.complex128:
            raise TypeError(f"cannot hold complex value {x!r} in {self.value}")
        if self is DType.decimal and isinstance(x, Fraction):
            return Decimal(x.numerator) / Decimal(x.denominator)
        if self is DType.complex128:
            return complex(x)
        return self.py_type(x)

    def conj(self, x: Scalar) -> Scalar:
        """Complex conjugate (identity for real dtypes)."""
        if isinstance(x, complex):
            return x.conjugate()
        return x


_PY_TYPES = {
    DType.int64: int,
    DType.rational: Fraction,
    DType.float64: float,
    DType.complex128: complex,
    DType.decimal: Decimal,
}

_NUMPY_DTYPES = {
    DType.int64: 'int64',
    DType.rational: 'object',
    DType.float64: 'float64',
    DType.complex128: 'complex128',
    DType.decimal: 'object',
}

_RANK = {
    DType.int64: 0,
    DType.rational: 1,
    DType.float64: 2,
    DType.complex128: 3,
}


# =============================================================================
# Module-Level Constants
# =============================================================================

int64 = DType.int64
rational = DType.rational
float64 = DType.float64
complex128 = DType.complex128
decimal = DType.decimal


# =============================================================================
# Type Utilities
# =============================================================================

def normalize_dtype(dtype: Union[str, DType]) -> DType:
    """
    Normalize a dtype given as string or DType.

    Example:
        >>> normalize_dtype('float64')
        DType.float64
    """
    if isinstance(dtype, DType):
        return dtype
    if isinstance(dtype, str):
        validate_dtype(dtype)
        return DType(dtype)
    raise TypeError(f"dtype must be str or DType, got {type(dtype)}")


def validate_dtype(dtype: str) -> None:
    """
    Validate dtype string.

    Raises:
        ValueError: If dtype is not supported
    """
    valid = {e.value for e in DType}
    if dtype not in valid:
        raise ValueError(f"Invalid dtype: {dtype}. Valid: {sorted(valid)}")


def classify(x: Any) -> DType:
    """
    Narrowest dtype able to hold a single value.

    Raises:
        TypeError: If x is not a number
    """
    if isinstance(x, numbers.Integral):
        return DType.int64
    if isinstance(x, Decimal):
        return DType.decimal
    if isinstance(x, numbers.Rational):
        return DType.rational
    if isinstance(x, numbers.Real):
        return DType.float64
    if isinstance(x, numbers.Complex):
        return DType.complex128
    raise TypeError(f"non-numeric element {x!r} of type {type(x).__name__}")


def result_dtype(a: DType, b: DType) -> DType:
    """
    Promote two dtypes to the one able to hold results of mixing them.

    Raises:
        DTypeMismatchError: If decimal is mixed with rational, float64 or complex128
    """
    if a is b:
        return a
    if DType.decimal in (a, b):
        other = b if a is DType.decimal else a
        if other is DType.int64:
            return DType.decimal
        raise DTypeMismatchError(f"cannot mix dtypes {a.value} and {b.value}")
    return a if _RANK[a] >= _RANK[b] else b


def infer_dtype(values: Iterable[Any]) -> DType:
    """Narrowest dtype able to hold every value (int64 when empty)."""
    dtype = DType.int64
    for v in values:
        dtype = result_dtype(dtype, classify(v))
    return dtype
