"""
Sparse Field Polynomials - Demo Entry Point

Walks through every operation on the sample polynomial 1 + 2x + 3x^3:
degree, the four evaluation strategies, scaling, a scalar chain, batch
evaluation and the cost comparison.

Run with:
    python -m sparsepoly.main --field bls12-381 -x 2
"""

import argparse
import logging

from sparsepoly.common.field import PrimeField
from sparsepoly.polynomial import (
    SparsePolynomial,
    EvaluationStrategy,
    evaluate_many,
)
from sparsepoly.simulator.cost import CostConfig, EvaluationCostModel

SAMPLE_TERMS = [(0, 1), (1, 2), (3, 3)]


def print_banner(field: PrimeField):
    """Print the demo banner."""
    print()
    print("=" * 70)
    print("SPARSE FIELD POLYNOMIAL DEMO")
    print(f"Field: Z_p, p has {field.bits} bits")
    print("=" * 70)


def run_demo(field: PrimeField, x_value: int):
    """Run every operation once and print the results."""
    x = field.element(x_value)
    poly = SparsePolynomial.new(field, SAMPLE_TERMS)

    print(f"\nPolynomial: {poly}")
    print(f"Degree: {poly.degree()}")

    print("\n" + "-" * 70)
    print(f"EVALUATION AT x = {x}")
    print("-" * 70)
    for strategy in EvaluationStrategy:
        print(f"  {strategy.value:<12} {poly.evaluate_with(x, strategy)}")

    print("\n" + "-" * 70)
    print("SCALAR OPERATIONS")
    print("-" * 70)
    scaled = poly.copy().multiply_by_scalar(2)
    print(f"  After multiplication by 2: {scaled}")
    scaled.divide_by_scalar(2)
    print(f"  After division by 2:       {scaled}")

    operations = [("*", 2), ("/", 2)]
    print(f"  Chain {operations}: {poly.apply_chain(operations, x)}")

    doubled = poly.copy().multiply_by_scalar(2)
    results = evaluate_many([poly, doubled], x)
    print(f"  Batch [p, 2p] at {x}: {[str(r) for r in results]}")

    print("\n" + "-" * 70)
    print("COST COMPARISON")
    print("-" * 70)
    model = EvaluationCostModel(CostConfig.for_field(field))
    for strategy, cost in model.compare(poly).items():
        print(f"  {strategy.value:<12} {cost!r}")
    print(f"  Recommended: {model.recommend(poly).value}")


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Sparse field polynomial demo")
    parser.add_argument("--field", default="bls12-381",
                        choices=sorted(PrimeField.PRESETS),
                        help="coefficient field preset")
    parser.add_argument("-x", type=int, default=2, help="evaluation point")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )

    field = PrimeField.from_name(args.field)
    print_banner(field)
    run_demo(field, args.x)


if __name__ == "__main__":
    main()
