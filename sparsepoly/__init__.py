"""
Sparse Field Polynomials
========================

Sparse univariate polynomials over prime fields (BLS12-381 by default),
with several evaluation strategies and a cost model to choose between them.

Modules:
    - common: field arithmetic and error types
    - polynomial: SparsePolynomial, scalar chains, batch evaluation
    - simulator: operation-count cost model for the evaluation strategies

Quick Start:
    >>> from sparsepoly import PrimeField, SparsePolynomial
    >>> field = PrimeField.from_name("bls12-381")
    >>> p = SparsePolynomial.new(field, [(0, 5), (1, 2), (3, 3)])
    >>> print(p.evaluate(2))
    33
"""

__version__ = "0.1.0"

from . import common
from . import polynomial
from . import simulator

from .common import (
    PrimeField,
    FieldElement,
    SparsePolynomialError,
    EmptyPolynomialError,
    DivisionByZeroError,
    UnsupportedOperationError,
    FieldMismatchError,
)
from .polynomial import SparsePolynomial, ScalarOp, EvaluationStrategy, evaluate_many

__all__ = [
    "PrimeField",
    "FieldElement",
    "SparsePolynomial",
    "ScalarOp",
    "EvaluationStrategy",
    "evaluate_many",
    "SparsePolynomialError",
    "EmptyPolynomialError",
    "DivisionByZeroError",
    "UnsupportedOperationError",
    "FieldMismatchError",
]
