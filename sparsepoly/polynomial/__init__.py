"""
Sparse polynomial representation and evaluation.

Key Components:
    - SparsePolynomial: exponent -> non-zero coefficient mapping
    - Four evaluation strategies (naive, accumulated powers, Horner,
      precomputed powers)
    - In-place scalar scaling and copy-then-scale chains
    - evaluate_many: batch evaluation at a shared point

Usage:
    >>> from sparsepoly.common import PrimeField
    >>> from sparsepoly.polynomial import SparsePolynomial, evaluate_many
    >>> field = PrimeField.from_name("bls12-381")
    >>> p = SparsePolynomial.new(field, [(0, 1), (1, 2), (3, 3)])
    >>> p.apply_chain([("*", 2), ("/", 2)], 2) == p.evaluate(2)
    True
"""

from .operations import (
    ScalarOp,
    EvaluationStrategy,
    parse_operator,
    parse_strategy,
)
from .sparse import SparsePolynomial, power_table
from .batch import evaluate_many

__all__ = [
    "SparsePolynomial",
    "ScalarOp",
    "EvaluationStrategy",
    "parse_operator",
    "parse_strategy",
    "power_table",
    "evaluate_many",
]
