"""
Batch evaluation of many polynomials at one point.

With the precomputed strategy a single power table, long enough for the
highest-degree polynomial, is built once and shared by every polynomial.
Each evaluation only reads its polynomial, so callers may also fan the
work out across threads without locking.
"""

from __future__ import annotations
from typing import List, Sequence, Union
import logging

from ..common.field import FieldElement
from ..common.errors import FieldMismatchError
from .operations import EvaluationStrategy, parse_strategy
from .sparse import SparsePolynomial, Scalar, power_table

_logger = logging.getLogger(__name__)

__all__ = ["evaluate_many", "power_table"]


def evaluate_many(polynomials: Sequence[SparsePolynomial], x: Scalar,
                  strategy: Union[EvaluationStrategy, str] = EvaluationStrategy.NAIVE
                  ) -> List[FieldElement]:
    """
    Evaluate every polynomial at x, returning results in input order.

    Args:
        polynomials: Polynomials over one common field
        x: Evaluation point
        strategy: Evaluation strategy used for each polynomial

    Raises:
        FieldMismatchError: If the polynomials do not share a field
    """
    if not polynomials:
        return []

    field = polynomials[0].field
    for poly in polynomials[1:]:
        if poly.field != field:
            raise FieldMismatchError(
                f"Cannot batch Z_{field.prime} with Z_{poly.field.prime}"
            )

    strategy = parse_strategy(strategy)
    if strategy is not EvaluationStrategy.PRECOMPUTED:
        return [poly.evaluate_with(x, strategy) for poly in polynomials]

    degrees = [poly.degree() for poly in polynomials if not poly.is_zero()]
    if not degrees:
        return [field.zero() for _ in polynomials]

    point = polynomials[0]._coerce(x)
    powers = power_table(point, max(degrees))
    _logger.debug("Sharing a %d-entry power table across %d polynomials",
                  len(powers), len(polynomials))
    return [
        poly.evaluate_with_precomputed_powers(point, powers) if not poly.is_zero()
        else field.zero()
        for poly in polynomials
    ]

