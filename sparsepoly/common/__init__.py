"""
Common utilities for sparse polynomial evaluation.

This module provides:
    - Finite field arithmetic (PrimeField, FieldElement)
    - The error taxonomy shared by every polynomial operation
"""

from .field import (
    PrimeField,
    FieldElement,
    BLS12_381_BASE_PRIME,
    BLS12_381_SCALAR_PRIME,
    GOLDILOCKS_PRIME,
    SMALL_TEST_PRIME,
)
from .errors import (
    SparsePolynomialError,
    EmptyPolynomialError,
    DivisionByZeroError,
    UnsupportedOperationError,
    FieldMismatchError,
)

__all__ = [
    "PrimeField",
    "FieldElement",
    "BLS12_381_BASE_PRIME",
    "BLS12_381_SCALAR_PRIME",
    "GOLDILOCKS_PRIME",
    "SMALL_TEST_PRIME",
    "SparsePolynomialError",
    "EmptyPolynomialError",
    "DivisionByZeroError",
    "UnsupportedOperationError",
    "FieldMismatchError",
]
