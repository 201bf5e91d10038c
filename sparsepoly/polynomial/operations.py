"""
Operator and strategy vocabularies.

Scalar operations are the two coefficient-wise mutations a chain may
contain; evaluation strategies name the four ways a polynomial can be
evaluated. Both accept their enum member, its symbol/value, or its name.
"""

from __future__ import annotations
from enum import Enum
from typing import Union

from ..common.errors import UnsupportedOperationError


class ScalarOp(Enum):
    """Coefficient-wise scalar operation."""
    MULTIPLY = "*"
    DIVIDE = "/"


class EvaluationStrategy(Enum):
    """
    How to evaluate a polynomial at a point.

    NAIVE: one exponentiation per term
    ACCUMULATED: ascending walk with a running power of x
    HORNER: descending nested multiply-add
    PRECOMPUTED: table of x^0..x^degree, then one multiply per term
    """
    NAIVE = "naive"
    ACCUMULATED = "accumulated"
    HORNER = "horner"
    PRECOMPUTED = "precomputed"


def parse_operator(tag: Union[ScalarOp, str]) -> ScalarOp:
    """
    Resolve an operator tag.

    Accepts a ScalarOp, the symbols "*" and "/", or the names
    "multiply" and "divide" (any case).

    Raises:
        UnsupportedOperationError: For any other tag
    """
    if isinstance(tag, ScalarOp):
        return tag
    if isinstance(tag, str):
        for op in ScalarOp:
            if tag == op.value or tag.lower() == op.name.lower():
                return op
    raise UnsupportedOperationError(tag)


def parse_strategy(name: Union[EvaluationStrategy, str]) -> EvaluationStrategy:
    """Resolve a strategy name; unknown names raise ValueError."""
    if isinstance(name, EvaluationStrategy):
        return name
    try:
        return EvaluationStrategy(str(name).lower())
    except ValueError:
        known = ", ".join(s.value for s in EvaluationStrategy)
        raise ValueError(f"Unknown evaluation strategy '{name}' (known: {known})") from None
