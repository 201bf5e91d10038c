"""
Sparse Univariate Polynomials over a Prime Field.

A sparse polynomial stores only its non-zero terms, keyed by exponent:

    P(x) = 3x^1000 + 2x + 1    is stored as    {1000: 3, 1: 2, 0: 1}

so storage grows with the number of terms, not with the degree.

Evaluation Strategies:
    - Naive: one exponentiation x^e per term. Simple, no state shared
      between terms, ~2*log2(e) multiplications each.
    - Accumulated powers: walk exponents low to high, keeping a running
      x^e that is advanced by exactly (e_next - e_prev) multiplications.
    - Horner: walk exponents high to low, acc = acc * x^gap + c. The nested
      form of the same sum; again only multiplications by x.
    - Precomputed powers: build [x^0, x^1, ..., x^degree] once, then one
      multiplication per term. Costs O(degree) memory, so it loses to the
      sparse walks when degree >> number of terms, and wins when the same
      table is shared by many polynomials (see batch.evaluate_many).

The gap matters: advancing once per stored term instead of once per unit
of exponent gap gives wrong answers as soon as an exponent is skipped.

    >>> field = PrimeField(97)
    >>> p = SparsePolynomial.new(field, [(0, 5), (1, 2), (3, 3)])
    >>> print(p.evaluate_horner(field.element(2)))  # 5 + 2*2 + 3*8
    33

Scaling mutates the polynomial in place; apply_chain works on a copy.
"""

from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union
import logging

from ..common.field import PrimeField, FieldElement
from ..common.errors import (
    EmptyPolynomialError,
    DivisionByZeroError,
    FieldMismatchError,
)
from .operations import (
    ScalarOp,
    EvaluationStrategy,
    parse_operator,
    parse_strategy,
)

_logger = logging.getLogger(__name__)

Scalar = Union[FieldElement, int]
Operation = Tuple[Union[ScalarOp, str], Scalar]


def _advance(value: FieldElement, x: FieldElement, steps: int) -> FieldElement:
    """Multiply value by x exactly `steps` times."""
    for _ in range(steps):
        value = value * x
    return value


def power_table(x: FieldElement, degree: int) -> List[FieldElement]:
    """
    Build [x^0, x^1, ..., x^degree] by repeated multiplication.

    powers[0] is one even when x is zero.
    """
    if degree < 0:
        raise ValueError(f"degree must be non-negative, got {degree}")
    powers = [x.field.one()]
    for _ in range(degree):
        powers.append(powers[-1] * x)
    return powers


def _check_exponent(exponent: int) -> None:
    if isinstance(exponent, bool) or not isinstance(exponent, int):
        raise ValueError(f"Exponent must be an integer, got {exponent!r}")
    if exponent < 0:
        raise ValueError(f"Exponent must be non-negative, got {exponent}")


class SparsePolynomial:
    """
    A univariate polynomial over a prime field, storing non-zero terms only.

    Invariant: no stored coefficient is zero. It is enforced when the
    polynomial is built and kept by every mutator (multiplying by the zero
    scalar removes all terms).

    Attributes:
        field: The coefficient field
        terms: Copy of the exponent -> coefficient mapping. The stored
               mapping is private; editing the copy has no effect.

    Example:
        >>> field = PrimeField(97)
        >>> p = SparsePolynomial(field, {0: 1, 1: 2, 3: 3, 5: 0})
        >>> print(p)
        1 + 2*x + 3*x^3
        >>> p.degree()
        3
    """

    def __init__(self, field: PrimeField,
                 terms: Optional[Mapping[int, Scalar]] = None):
        """Coerce coefficients and drop zero terms."""
        self.field = field
        normalized: Dict[int, FieldElement] = {}
        dropped = 0
        for exponent, coeff in dict(terms or {}).items():
            _check_exponent(exponent)
            value = self._coerce(coeff)
            if value.is_zero():
                dropped += 1
                continue
            normalized[exponent] = value
        if dropped:
            _logger.debug("Dropped %d zero term(s) on construction", dropped)
        self._terms = normalized

    @property
    def terms(self) -> Dict[int, FieldElement]:
        """Exponent -> coefficient, as a fresh dict."""
        return dict(self._terms)

    @classmethod
    def new(cls, field: PrimeField,
            pairs: Iterable[Tuple[int, Scalar]]) -> SparsePolynomial:
        """
        Build a polynomial from (exponent, coefficient) pairs.

        Zero coefficients are discarded before insertion, so when an
        exponent repeats the last NON-ZERO coefficient for it wins:

            [(1, 4), (1, 7)]  ->  7x
            [(1, 4), (1, 0)]  ->  4x

        Repeated exponents are never summed. O(n) in the number of pairs.
        """
        polynomial = cls(field)
        for exponent, coeff in pairs:
            _check_exponent(exponent)
            value = polynomial._coerce(coeff)
            if value.is_zero():
                continue
            polynomial._terms[exponent] = value
        return polynomial

    @classmethod
    def from_dense(cls, field: PrimeField,
                   coefficients: Sequence[Scalar]) -> SparsePolynomial:
        """Build from a dense list [c0, c1, ...], keeping only non-zero entries."""
        return cls.new(field, enumerate(coefficients))

    @classmethod
    def zero(cls, field: PrimeField) -> SparsePolynomial:
        """The polynomial with no terms."""
        return cls(field)

    def _coerce(self, value: Scalar) -> FieldElement:
        try:
            return self.field.coerce(value)
        except ValueError as exc:
            raise FieldMismatchError(str(exc)) from exc

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def degree(self) -> Optional[int]:
        """Largest exponent with a non-zero coefficient, or None if there are no terms."""
        if not self._terms:
            return None
        return max(self._terms)

    def require_degree(self, operation: str = "degree") -> int:
        """Like degree(), but raise EmptyPolynomialError instead of returning None."""
        degree = self.degree()
        if degree is None:
            raise EmptyPolynomialError(operation)
        return degree

    def coefficient(self, exponent: int) -> FieldElement:
        """Coefficient of x^exponent (zero when the term is absent)."""
        return self._terms.get(exponent, self.field.zero())

    def is_zero(self) -> bool:
        return not self._terms

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[Tuple[int, FieldElement]]:
        """Terms as (exponent, coefficient), lowest exponent first."""
        for exponent in sorted(self._terms):
            yield exponent, self._terms[exponent]

    def __contains__(self, exponent: object) -> bool:
        return exponent in self._terms

    def __str__(self) -> str:
        if not self._terms:
            return "0"
        parts = []
        for exponent, coeff in self:
            if exponent == 0:
                parts.append(str(coeff))
            elif exponent == 1:
                parts.append(f"{coeff}*x")
            else:
                parts.append(f"{coeff}*x^{exponent}")
        return " + ".join(parts)

    def __repr__(self) -> str:
        return f"SparsePolynomial({self}, mod {self.field.prime})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparsePolynomial):
            return NotImplemented
        return self.field == other.field and self._terms == other._terms

    __hash__ = None  # mutable

    def copy(self) -> SparsePolynomial:
        """An independent copy; scaling the copy leaves this polynomial alone."""
        return SparsePolynomial(self.field, dict(self._terms))

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def evaluate(self, x: Scalar) -> FieldElement:
        """
        Naive evaluation: sum of coeff * x^e, one exponentiation per term.

        Returns zero for a polynomial with no terms. At x = 0 only the
        constant term survives, since 0^0 = 1.
        """
        x = self._coerce(x)
        result = self.field.zero()
        for exponent, coeff in self._terms.items():
            result = result + coeff * x ** exponent
        return result

    __call__ = evaluate

    def evaluate_by_accumulated_powers(self, x: Scalar) -> FieldElement:
        """
        Evaluate without exponentiation, walking exponents in ascending order.

        A running power starts at x^0 and is advanced by exactly
        (exponent - previous_exponent) multiplications before each term is
        added, so skipped exponents are accounted for. O(degree)
        multiplications plus one per term.
        """
        x = self._coerce(x)
        result = self.field.zero()
        power = self.field.one()
        previous = 0
        for exponent in sorted(self._terms):
            power = _advance(power, x, exponent - previous)
            result = result + self._terms[exponent] * power
            previous = exponent
        return result

    def evaluate_horner(self, x: Scalar) -> FieldElement:
        """
        Horner's method over sparse terms.

        Walks exponents from highest to lowest computing acc = acc * x^gap + c,
        where x^gap is applied as gap single multiplications. After the
        lowest term the accumulator is shifted by x^(lowest exponent).
        """
        x = self._coerce(x)
        acc = self.field.zero()
        exponents = sorted(self._terms, reverse=True)
        if not exponents:
            return acc
        previous = exponents[0]
        for exponent in exponents:
            acc = _advance(acc, x, previous - exponent) + self._terms[exponent]
            previous = exponent
        return _advance(acc, x, previous)

    def evaluate_with_precomputed_powers(
            self, x: Scalar,
            powers: Optional[Sequence[FieldElement]] = None) -> FieldElement:
        """
        Evaluate from a table powers[i] = x^i, i = 0..degree.

        Args:
            x: Evaluation point
            powers: Optional table built earlier for the same x. It must
                    reach at least this polynomial's degree.

        Raises:
            EmptyPolynomialError: If the polynomial has no terms
            ValueError: If a supplied table is too short or was not built at x
        """
        degree = self.require_degree("evaluate_with_precomputed_powers")
        x = self._coerce(x)
        if powers is None:
            powers = power_table(x, degree)
        elif len(powers) <= degree:
            raise ValueError(
                f"Power table covers degree {len(powers) - 1}, polynomial has degree {degree}"
            )
        elif not powers[0].is_one() or (degree >= 1 and powers[1] != x):
            raise ValueError(f"Power table was not built at x = {x}")
        result = self.field.zero()
        for exponent, coeff in self._terms.items():
            result = result + coeff * powers[exponent]
        return result

    def evaluate_with(self, x: Scalar,
                      strategy: Union[EvaluationStrategy, str] = EvaluationStrategy.NAIVE
                      ) -> FieldElement:
        """Evaluate using the named strategy."""
        strategy = parse_strategy(strategy)
        if strategy is EvaluationStrategy.NAIVE:
            return self.evaluate(x)
        if strategy is EvaluationStrategy.ACCUMULATED:
            return self.evaluate_by_accumulated_powers(x)
        if strategy is EvaluationStrategy.HORNER:
            return self.evaluate_horner(x)
        return self.evaluate_with_precomputed_powers(x)

    # -------------------------------------------------------------------------
    # Scalar scaling (in place)
    # -------------------------------------------------------------------------

    def multiply_by_scalar(self, scalar: Scalar) -> SparsePolynomial:
        """
        Multiply every coefficient by scalar, in place.

        Multiplying by zero removes every term, leaving the zero polynomial.
        Returns self so calls can be chained.
        """
        scalar = self._coerce(scalar)
        if scalar.is_zero():
            _logger.debug("Multiply by zero: removing %d term(s)", len(self._terms))
            self._terms.clear()
            return self
        for exponent in self._terms:
            self._terms[exponent] = self._terms[exponent] * scalar
        return self

    def divide_by_scalar(self, scalar: Scalar) -> SparsePolynomial:
        """
        Multiply every coefficient by scalar^(-1), in place.

        Raises:
            DivisionByZeroError: If scalar is zero. The polynomial is unchanged.
        """
        scalar = self._coerce(scalar)
        if scalar.is_zero():
            raise DivisionByZeroError()
        return self.multiply_by_scalar(scalar.inverse())

    def scale_by(self, scalar: Scalar,
                 operator: Union[ScalarOp, str] = ScalarOp.MULTIPLY) -> SparsePolynomial:
        """
        Apply one scalar operation in place.

        Raises:
            UnsupportedOperationError: If operator is not multiply or divide
            DivisionByZeroError: On division by zero
        """
        op = parse_operator(operator)
        if op is ScalarOp.MULTIPLY:
            return self.multiply_by_scalar(scalar)
        return self.divide_by_scalar(scalar)

    # -------------------------------------------------------------------------
    # Chained operations (on a copy)
    # -------------------------------------------------------------------------

    def scaled(self, operations: Iterable[Operation]) -> SparsePolynomial:
        """
        Fold (operator, scalar) steps over a copy and return the copy.

        The receiver is never modified, even when a step fails.
        """
        result = self.copy()
        for step, (operator, scalar) in enumerate(operations):
            _logger.debug("Chain step %d: %s %s", step, operator, scalar)
            result.scale_by(scalar, operator)
        return result

    def apply_chain(self, operations: Iterable[Operation], x: Scalar) -> FieldElement:
        """
        Apply the operations to a copy, in order, then evaluate it at x.

        Raises:
            UnsupportedOperationError: On an unknown operator tag
            DivisionByZeroError: On division by zero
        """
        return self.scaled(operations).evaluate(x)
