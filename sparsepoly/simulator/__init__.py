"""
Evaluation Cost Simulator

Estimates how many field multiplications, additions, cycles and bytes of
table memory each evaluation strategy spends on a concrete polynomial.

Key Components:
    - CostConfig: field arithmetic latencies and element width
    - EvaluationCostModel: per-strategy and batch estimates
    - StrategyCost: results and summary

Usage:
    >>> from sparsepoly.simulator import EvaluationCostModel, create_bls12_381_config
    >>> model = EvaluationCostModel(create_bls12_381_config())
    >>> for strategy, cost in model.compare(poly).items():
    ...     print(cost)
"""

from .cost import (
    CostConfig,
    StrategyCost,
    EvaluationCostModel,
    create_bls12_381_config,
    create_scalar_field_config,
    exponent_bit_profile,
)

__all__ = [
    "CostConfig",
    "StrategyCost",
    "EvaluationCostModel",
    "create_bls12_381_config",
    "create_scalar_field_config",
    "exponent_bit_profile",
]
