"""
Error types raised by sparse polynomial operations.

Every failure is a caller-visible exception: nothing here is retried or
replaced by a default value. Each class also derives from the closest
builtin so callers may catch either.
"""

from __future__ import annotations
from typing import Any


class SparsePolynomialError(Exception):
    """Base class for all sparse polynomial errors."""


class EmptyPolynomialError(SparsePolynomialError, ValueError):
    """The operation needs a degree, but the polynomial has no terms."""

    def __init__(self, operation: str = "degree"):
        self.operation = operation
        super().__init__(f"{operation}: polynomial has no terms, so it has no degree")


class DivisionByZeroError(SparsePolynomialError, ZeroDivisionError):
    """Scalar division by the field's zero element."""

    def __init__(self, message: str = "Cannot divide a polynomial by the zero scalar"):
        super().__init__(message)


class UnsupportedOperationError(SparsePolynomialError, ValueError):
    """An operator tag outside the {multiply, divide} vocabulary."""

    def __init__(self, operator: Any):
        self.operator = operator
        super().__init__(f"Unsupported operation: {operator!r}")


class FieldMismatchError(SparsePolynomialError, ValueError):
    """Values from two different prime fields were combined."""
