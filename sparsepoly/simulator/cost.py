"""
Evaluation Cost Model for Sparse Polynomials.

Counts the field operations each evaluation strategy performs on a given
polynomial and converts them to cycles and memory, so the trade-offs
between strategies can be compared on real term sets instead of asymptotics.

Operation counts mirror the implementation exactly:
    - naive:       per term e, square-and-multiply costs bit_length(e)
                   squarings + popcount(e) multiplies, then 1 coefficient
                   multiply
    - accumulated: degree multiplies advancing the running power,
                   + 1 coefficient multiply per term
    - horner:      degree multiplies, coefficients are added not multiplied
    - precomputed: degree multiplies to build the table, + 1 per term,
                   and degree + 1 stored elements
Every strategy performs one addition per term.

Key insight: the sparse walks and the power table all pay O(degree)
multiplications, so for a very sparse, very high degree polynomial
(degree >> terms) the naive O(terms * log degree) strategy wins. The power
table only pays off when it is shared (see estimate_batch).

Usage:
    >>> model = EvaluationCostModel(create_bls12_381_config())
    >>> costs = model.compare(poly)
    >>> model.recommend(poly)
    <EvaluationStrategy.HORNER: 'horner'>
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence
import logging

import numpy as np

from ..common.field import PrimeField
from ..polynomial.operations import EvaluationStrategy, parse_strategy
from ..polynomial.sparse import SparsePolynomial

_logger = logging.getLogger(__name__)


@dataclass
class CostConfig:
    """
    Cost parameters for field arithmetic.

    Attributes:
        name: Configuration name for identification
        modmul_latency: Cycles per modular multiplication
        modadd_latency: Cycles per modular addition
        bytes_per_element: Storage for one field element
        frequency_ghz: Clock used to turn cycles into time
    """
    name: str = "default"
    modmul_latency: int = 22
    modadd_latency: int = 1
    bytes_per_element: int = 48  # 381 bits -> 48 bytes
    frequency_ghz: float = 1.0

    def __post_init__(self):
        """Validate configuration."""
        if self.modmul_latency < 1:
            raise ValueError("modmul_latency must be at least 1")
        if self.modadd_latency < 0:
            raise ValueError("modadd_latency must be non-negative")
        if self.bytes_per_element < 1:
            raise ValueError("bytes_per_element must be at least 1")
        if self.frequency_ghz <= 0:
            raise ValueError("frequency must be positive")

    @classmethod
    def for_field(cls, field: PrimeField, **overrides) -> CostConfig:
        """Config sized for the given field's element width."""
        params = {
            "name": f"Z_p ({field.bits}-bit)",
            "bytes_per_element": (field.bits + 7) // 8,
        }
        params.update(overrides)
        return cls(**params)


def create_bls12_381_config() -> CostConfig:
    """BLS12-381 base field Fq: 381-bit elements."""
    return CostConfig(name="BLS12-381 Fq", modmul_latency=22, bytes_per_element=48)


def create_scalar_field_config() -> CostConfig:
    """BLS12-381 scalar field Fr: 255-bit elements, cheaper multiplies."""
    return CostConfig(name="BLS12-381 Fr", modmul_latency=16, bytes_per_element=32)


@dataclass
class StrategyCost:
    """
    Estimated cost of one evaluation strategy.

    Attributes:
        strategy: The strategy costed
        multiplications: Field multiplications
        additions: Field additions
        table_elements: Field elements held in a power table (0 if none)
        cycles: multiplications * modmul_latency + additions * modadd_latency
        memory_bytes: table_elements * bytes_per_element
    """
    strategy: EvaluationStrategy
    multiplications: int
    additions: int
    table_elements: int
    cycles: int
    memory_bytes: int

    @property
    def runtime_us(self) -> float:
        """Runtime in microseconds at 1 GHz."""
        return self.cycles / 1e3

    def runtime_us_at_freq(self, freq_ghz: float) -> float:
        """Runtime in microseconds at given frequency."""
        return self.cycles / (freq_ghz * 1e3)

    def summary(self) -> str:
        return (
            f"{self.strategy.value}:\n"
            f"  Multiplications: {self.multiplications:,}\n"
            f"  Additions: {self.additions:,}\n"
            f"  Cycles: {self.cycles:,}\n"
            f"  Table memory: {self.memory_bytes:,} bytes"
        )

    def __repr__(self) -> str:
        return (f"StrategyCost({self.strategy.value}, muls={self.multiplications:,}, "
                f"cycles={self.cycles:,})")


_bit_length = np.frompyfunc(int.bit_length, 1, 1)
_popcount = np.frompyfunc(lambda e: bin(e).count("1"), 1, 1)


def exponent_bit_profile(exponents: Sequence[int]):
    """
    Bit length and popcount of each exponent.

    Returns two int64 arrays. Exponents that fit in 64 bits are unpacked
    bitwise; larger ones fall back to per-element Python int methods.
    """
    exponents = [int(e) for e in exponents]
    if not exponents:
        empty = np.zeros(0, dtype=np.int64)
        return empty, empty
    if max(exponents) >= 1 << 64:
        values = np.array(exponents, dtype=object)
        return (_bit_length(values).astype(np.int64),
                _popcount(values).astype(np.int64))
    exps = np.asarray(exponents, dtype=np.uint64)
    bits = np.unpackbits(exps.astype(">u8").view(np.uint8).reshape(-1, 8), axis=1)
    popcount = bits.sum(axis=1).astype(np.int64)
    bit_length = np.where(popcount > 0, 64 - bits.argmax(axis=1), 0).astype(np.int64)
    return bit_length, popcount


class EvaluationCostModel:
    """
    Operation-count model for the four evaluation strategies.

    Usage:
        >>> model = EvaluationCostModel()
        >>> cost = model.estimate(poly, "naive")
        >>> print(cost.summary())
    """

    def __init__(self, config: Optional[CostConfig] = None):
        self.config = config if config is not None else CostConfig()

    def _cost(self, strategy: EvaluationStrategy, multiplications: int,
              additions: int, table_elements: int = 0) -> StrategyCost:
        cycles = (multiplications * self.config.modmul_latency
                  + additions * self.config.modadd_latency)
        return StrategyCost(
            strategy=strategy,
            multiplications=int(multiplications),
            additions=int(additions),
            table_elements=int(table_elements),
            cycles=int(cycles),
            memory_bytes=int(table_elements * self.config.bytes_per_element),
        )

    def estimate(self, poly: SparsePolynomial,
                 strategy: EvaluationStrategy) -> Optional[StrategyCost]:
        """
        Cost of one evaluation of poly with the given strategy.

        Returns None for the precomputed strategy on a polynomial with no
        terms, which that strategy cannot evaluate.
        """
        strategy = parse_strategy(strategy)
        num_terms = len(poly)
        degree = poly.degree()

        if degree is None:
            if strategy is EvaluationStrategy.PRECOMPUTED:
                return None
            return self._cost(strategy, 0, 0)

        if strategy is EvaluationStrategy.NAIVE:
            bit_length, popcount = exponent_bit_profile(sorted(poly.terms))
            muls = int(bit_length.sum() + popcount.sum()) + num_terms
            return self._cost(strategy, muls, num_terms)
        if strategy is EvaluationStrategy.ACCUMULATED:
            return self._cost(strategy, degree + num_terms, num_terms)
        if strategy is EvaluationStrategy.HORNER:
            return self._cost(strategy, degree, num_terms)
        return self._cost(strategy, degree + num_terms, num_terms, degree + 1)

    def compare(self, poly: SparsePolynomial) -> Dict[EvaluationStrategy, Optional[StrategyCost]]:
        """Costs of every strategy for one evaluation of poly."""
        return {strategy: self.estimate(poly, strategy) for strategy in EvaluationStrategy}

    def estimate_batch(self, polys: Sequence[SparsePolynomial],
                       strategy: EvaluationStrategy) -> StrategyCost:
        """
        Cost of evaluate_many over polys at one point.

        The precomputed strategy builds a single table for the highest
        degree and shares it, so only the per-term multiplies repeat.
        """
        strategy = parse_strategy(strategy)
        if strategy is not EvaluationStrategy.PRECOMPUTED:
            costs = [self.estimate(poly, strategy) for poly in polys]
            return self._cost(
                strategy,
                sum(c.multiplications for c in costs),
                sum(c.additions for c in costs),
            )

        # degrees stay Python ints; they may exceed 64 bits
        degrees = [p.degree() for p in polys if not p.is_zero()]
        if not degrees:
            return self._cost(strategy, 0, 0)
        max_degree = max(degrees)
        total_terms = sum(len(p) for p in polys)
        return self._cost(strategy, max_degree + total_terms, total_terms, max_degree + 1)

    def recommend(self, poly: SparsePolynomial) -> EvaluationStrategy:
        """Cheapest strategy by cycles; ties prefer the table-free strategies."""
        costs = [c for c in self.compare(poly).values() if c is not None]
        best = min(costs, key=lambda c: (c.cycles, c.memory_bytes))
        _logger.debug("Recommended %s for %d terms, degree %s",
                      best.strategy.value, len(poly), poly.degree())
        return best.strategy

    def recommend_batch(self, polys: Sequence[SparsePolynomial]) -> EvaluationStrategy:
        """Cheapest strategy by cycles for evaluating all polys at one point."""
        costs: List[StrategyCost] = [
            self.estimate_batch(polys, strategy) for strategy in EvaluationStrategy
        ]
        return min(costs, key=lambda c: (c.cycles, c.memory_bytes)).strategy
