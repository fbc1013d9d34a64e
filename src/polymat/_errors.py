"""
Error handling for polymat.

Two tiers of failure:

- Construction failures (ragged row lists, a flat buffer whose length does not
  match the requested shape) raise InvalidDimensionsError. Callers are
  expected to catch or propagate it.
- Operation failures (dimension mismatch in +, -, @; mutating an identity or
  zero matrix) are programmer errors. They raise InvalidDimensionsError or
  UnsupportedMutationError at the call site.

Out-of-range get/set is not an error: both return None.
"""

from __future__ import annotations

import numbers
from typing import Any, Optional


# =============================================================================
# Error Codes
# =============================================================================

POLYMAT_OK = 0

# General errors (1-9)
POLYMAT_ERROR_UNKNOWN = 1

# Argument errors (10-19)
POLYMAT_ERROR_INVALID_DIMENSIONS = 11
POLYMAT_ERROR_INDEX_OUT_OF_BOUNDS = 14

# Type errors (20-29)
POLYMAT_ERROR_TYPE_MISMATCH = 21

# Feature errors (40-49)
POLYMAT_ERROR_UNSUPPORTED_MUTATION = 42


_ERROR_MESSAGES = {
    POLYMAT_OK: "Success",
    POLYMAT_ERROR_UNKNOWN: "Unknown error",
    POLYMAT_ERROR_INVALID_DIMENSIONS: "Supplied matrix has invalid dimensions",
    POLYMAT_ERROR_INDEX_OUT_OF_BOUNDS: "Index out of bounds",
    POLYMAT_ERROR_TYPE_MISMATCH: "Type mismatch",
    POLYMAT_ERROR_UNSUPPORTED_MUTATION: "Matrix does not support mutation",
}


# =============================================================================
# Exception Classes
# =============================================================================

class PolymatError(Exception):
    """
    Base exception for all polymat errors.

    Every instance carries a numeric ``code`` so callers can branch on the
    cause without matching message text.
    """

    OK = POLYMAT_OK
    ERROR_UNKNOWN = POLYMAT_ERROR_UNKNOWN
    ERROR_INVALID_DIMENSIONS = POLYMAT_ERROR_INVALID_DIMENSIONS
    ERROR_INDEX_OUT_OF_BOUNDS = POLYMAT_ERROR_INDEX_OUT_OF_BOUNDS
    ERROR_TYPE_MISMATCH = POLYMAT_ERROR_TYPE_MISMATCH
    ERROR_UNSUPPORTED_MUTATION = POLYMAT_ERROR_UNSUPPORTED_MUTATION

    default_code = POLYMAT_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        """
        Create a polymat exception.

        Args:
            message: Optional detailed message (looked up from code if omitted)
            code: Error code (defaults to the class's default_code)
        """
        if code is None:
            code = self.default_code
        self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")
        self.message = message
        super().__init__(message)

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "PolymatError":
        """Create exception from error code with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        for sub in (InvalidDimensionsError, IndexOutOfBoundsError,
                    DTypeMismatchError, UnsupportedMutationError):
            if sub.default_code == code:
                return sub(msg, code)
        return cls(msg, code)


class InvalidDimensionsError(PolymatError, ValueError):
    """Shape is invalid for construction, or incompatible for an operation."""

    default_code = POLYMAT_ERROR_INVALID_DIMENSIONS


class IndexOutOfBoundsError(PolymatError, IndexError):
    """Coordinate outside the matrix, where an absent result is not an option."""

    default_code = POLYMAT_ERROR_INDEX_OUT_OF_BOUNDS


class DTypeMismatchError(PolymatError, TypeError):
    """Two element types have no common dtype to promote to."""

    default_code = POLYMAT_ERROR_TYPE_MISMATCH


class UnsupportedMutationError(PolymatError, TypeError):
    """Attempted to assign into a structural (identity or zero) matrix."""

    default_code = POLYMAT_ERROR_UNSUPPORTED_MUTATION


class MaterializationWarning(UserWarning):
    """A structural or sparse matrix was expanded into its full element grid."""


# =============================================================================
# Dimension Checks
# =============================================================================

ADD_DIM_ERROR = "Cannot add matrices of given dimensions"
MUL_DIM_ERROR = "Cannot multiply matrices of given dimensions"


def check_same_dims(lhs: Any, rhs: Any, what: str = ADD_DIM_ERROR) -> None:
    """
    Require two matrices to have identical (rows, cols).

    Raises:
        InvalidDimensionsError: If the shapes differ
    """
    if lhs.dims() != rhs.dims():
        raise InvalidDimensionsError(f"{what}: lhs={lhs.dims()} rhs={rhs.dims()}")


def check_product_dims(lhs: Any, rhs: Any) -> None:
    """
    Require lhs.cols == rhs.rows.

    Raises:
        InvalidDimensionsError: If the inner dimensions differ
    """
    if lhs.cols != rhs.rows:
        raise InvalidDimensionsError(
            f"{MUL_DIM_ERROR}: lhs={lhs.dims()} rhs={rhs.dims()}"
        )


def check_vector_lengths(lhs: Any, rhs: Any, what: str) -> None:
    """Require two vectors to have the same length."""
    if len(lhs) != len(rhs):
        raise InvalidDimensionsError(f"{what}: lhs={len(lhs)} rhs={len(rhs)}")


def check_positive_dims(rows: int, cols: int, context: str = "") -> None:
    """Require both dimensions to be positive integers."""
    if (not isinstance(rows, numbers.Integral) or not isinstance(cols, numbers.Integral)
            or rows < 1 or cols < 1):
        msg = f"dimensions must be positive integers, got ({rows!r}, {cols!r})"
        raise InvalidDimensionsError(f"{context}: {msg}" if context else msg)


__all__ = [
    "PolymatError",
    "InvalidDimensionsError",
    "IndexOutOfBoundsError",
    "UnsupportedMutationError",
    "DTypeMismatchError",
    "MaterializationWarning",
    "check_same_dims",
    "check_product_dims",
    "check_vector_lengths",
    "check_positive_dims",
    "ADD_DIM_ERROR",
    "MUL_DIM_ERROR",
    "POLYMAT_OK",
    "POLYMAT_ERROR_UNKNOWN",
    "POLYMAT_ERROR_INVALID_DIMENSIONS",
    "POLYMAT_ERROR_INDEX_OUT_OF_BOUNDS",
    "POLYMAT_ERROR_TYPE_MISMATCH",
    "POLYMAT_ERROR_UNSUPPORTED_MUTATION",
]
