"""Tests for the evaluation cost model."""

import numpy as np
import pytest

from sparsepoly.common.field import PrimeField, FieldElement
from sparsepoly.polynomial import SparsePolynomial, EvaluationStrategy
from sparsepoly.simulator.cost import (
    CostConfig,
    EvaluationCostModel,
    create_bls12_381_config,
    create_scalar_field_config,
    exponent_bit_profile,
)

BLS = PrimeField.from_name("bls12-381")


class TestCostConfig:
    def test_defaults(self):
        config = create_bls12_381_config()
        assert config.modmul_latency == 22
        assert config.bytes_per_element == 48

    def test_scalar_field(self):
        assert create_scalar_field_config().bytes_per_element == 32

    def test_for_field(self):
        assert CostConfig.for_field(BLS).bytes_per_element == 48
        assert CostConfig.for_field(PrimeField(97)).bytes_per_element == 1
        assert CostConfig.for_field(BLS, modmul_latency=30).modmul_latency == 30

    @pytest.mark.parametrize("kwargs", [
        {"modmul_latency": 0},
        {"modadd_latency": -1},
        {"bytes_per_element": 0},
        {"frequency_ghz": 0},
    ])
    def test_validation(self, kwargs):
        with pytest.raises(ValueError):
            CostConfig(**kwargs)


class TestBitProfile:
    def test_profile(self):
        bit_length, popcount = exponent_bit_profile([0, 1, 3, 8, 255])
        np.testing.assert_array_equal(bit_length, [0, 1, 2, 4, 8])
        np.testing.assert_array_equal(popcount, [0, 1, 2, 1, 8])

    def test_large_exponent(self):
        bit_length, popcount = exponent_bit_profile([2**40 + 1])
        assert bit_length[0] == 41
        assert popcount[0] == 2

    def test_exponent_beyond_64_bits(self):
        bit_length, popcount = exponent_bit_profile([3, 2**64, 2**100 + 2**70 + 1])
        np.testing.assert_array_equal(bit_length, [2, 65, 101])
        np.testing.assert_array_equal(popcount, [2, 1, 3])

    def test_empty(self):
        bit_length, popcount = exponent_bit_profile([])
        assert bit_length.size == 0 and popcount.size == 0


class TestEstimate:
    def setup_method(self):
        self.model = EvaluationCostModel(create_bls12_381_config())
        self.poly = SparsePolynomial.new(BLS, [(0, 1), (1, 2), (3, 3)])

    def test_naive(self):
        cost = self.model.estimate(self.poly, EvaluationStrategy.NAIVE)
        # x^0: 0, x^1: 1 + 1, x^3: 2 + 2, plus 3 coefficient multiplies
        assert cost.multiplications == 9
        assert cost.additions == 3
        assert cost.cycles == 9 * 22 + 3
        assert cost.memory_bytes == 0

    def test_horner(self):
        cost = self.model.estimate(self.poly, "horner")
        assert cost.multiplications == 3
        assert cost.cycles == 3 * 22 + 3

    def test_accumulated(self):
        assert self.model.estimate(self.poly, "accumulated").multiplications == 6

    def test_precomputed(self):
        cost = self.model.estimate(self.poly, EvaluationStrategy.PRECOMPUTED)
        assert cost.multiplications == 6
        assert cost.table_elements == 4
        assert cost.memory_bytes == 4 * 48

    def test_empty_polynomial(self):
        empty = SparsePolynomial.zero(BLS)
        costs = self.model.compare(empty)
        assert costs[EvaluationStrategy.PRECOMPUTED] is None
        assert costs[EvaluationStrategy.NAIVE].cycles == 0

    def test_runtime(self):
        cost = self.model.estimate(self.poly, "naive")
        assert cost.runtime_us == pytest.approx(cost.cycles / 1e3)
        assert cost.runtime_us_at_freq(2.0) == pytest.approx(cost.cycles / 2e3)
        assert "Multiplications: 9" in cost.summary()

    @pytest.mark.parametrize("strategy", list(EvaluationStrategy))
    @pytest.mark.parametrize("terms", [
        [(0, 1), (1, 2), (3, 3)],
        [(2, 5), (9, 4), (17, 11)],
        [(64, 3)],
    ])
    def test_counts_match_implementation(self, monkeypatch, strategy, terms):
        poly = SparsePolynomial.new(BLS, terms)
        x = BLS.element(3)
        counts = {"mul": 0, "add": 0}
        original_mul = FieldElement.__mul__
        original_add = FieldElement.__add__

        def counting_mul(self, other):
            counts["mul"] += 1
            return original_mul(self, other)

        def counting_add(self, other):
            counts["add"] += 1
            return original_add(self, other)

        monkeypatch.setattr(FieldElement, "__mul__", counting_mul)
        monkeypatch.setattr(FieldElement, "__add__", counting_add)
        poly.evaluate_with(x, strategy)
        monkeypatch.undo()

        cost = self.model.estimate(poly, strategy)
        assert cost.multiplications == counts["mul"]
        assert cost.additions == counts["add"]


class TestRecommend:
    def setup_method(self):
        self.model = EvaluationCostModel()

    def test_dense_prefers_horner(self):
        poly = SparsePolynomial.new(BLS, [(0, 1), (1, 2), (3, 3)])
        assert self.model.recommend(poly) is EvaluationStrategy.HORNER

    def test_very_sparse_prefers_naive(self):
        poly = SparsePolynomial.new(BLS, [(0, 1), (10**6, 1)])
        assert self.model.recommend(poly) is EvaluationStrategy.NAIVE

    def test_exponent_beyond_64_bits(self):
        poly = SparsePolynomial.new(BLS, [(0, 1), (2**64, 1)])
        assert poly.evaluate(1) == 2
        naive = self.model.estimate(poly, EvaluationStrategy.NAIVE)
        # x^(2^64): 65 squarings + 1 multiply, plus 2 coefficient multiplies
        assert naive.multiplications == 68
        assert self.model.recommend(poly) is EvaluationStrategy.NAIVE

    def test_batch_with_exponent_beyond_64_bits(self):
        polys = [SparsePolynomial.new(BLS, [(2**64, 1)]), SparsePolynomial.new(BLS, [(1, 1)])]
        cost = self.model.estimate_batch(polys, EvaluationStrategy.PRECOMPUTED)
        assert cost.table_elements == 2**64 + 1
        assert self.model.recommend_batch(polys) is EvaluationStrategy.NAIVE

    def test_batch_prefers_shared_table(self):
        polys = [SparsePolynomial.new(BLS, [(0, c), (5, c), (10, c)]) for c in (1, 2, 3)]
        assert self.model.recommend_batch(polys) is EvaluationStrategy.PRECOMPUTED

    def test_batch_precomputed_cost(self):
        polys = [SparsePolynomial.new(BLS, [(0, 1), (10, 1)]),
                 SparsePolynomial.new(BLS, [(4, 1)]),
                 SparsePolynomial.zero(BLS)]
        cost = self.model.estimate_batch(polys, EvaluationStrategy.PRECOMPUTED)
        assert cost.multiplications == 10 + 3
        assert cost.table_elements == 11

    def test_batch_horner_cost(self):
        polys = [SparsePolynomial.new(BLS, [(0, 1), (10, 1)]),
                 SparsePolynomial.new(BLS, [(4, 1)])]
        cost = self.model.estimate_batch(polys, "horner")
        assert cost.multiplications == 14
        assert cost.additions == 3
