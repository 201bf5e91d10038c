"""Tests for prime field arithmetic."""

import pytest

from sparsepoly.common.field import (
    PrimeField,
    FieldElement,
    BLS12_381_BASE_PRIME,
    BLS12_381_SCALAR_PRIME,
    GOLDILOCKS_PRIME,
)


class TestPrimeField:
    def test_rejects_small_prime(self):
        with pytest.raises(ValueError):
            PrimeField(1)

    def test_identities(self):
        field = PrimeField(97)
        assert field.zero().is_zero()
        assert field.one().is_one()

    def test_element_reduces(self):
        field = PrimeField(97)
        assert field.element(100).value == 3
        assert field.element(-1).value == 96

    def test_presets(self):
        assert PrimeField.from_name("bls12-381").prime == BLS12_381_BASE_PRIME
        assert PrimeField.from_name("BLS12-381-FR").prime == BLS12_381_SCALAR_PRIME
        assert PrimeField.from_name("small").prime == 97

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown field"):
            PrimeField.from_name("bn254")

    def test_bits(self):
        assert PrimeField.from_name("bls12-381").bits == 381
        assert PrimeField.from_name("bls12-381-fr").bits == 255

    def test_coerce(self):
        field = PrimeField(97)
        a = field.element(5)
        assert field.coerce(a) is a
        assert field.coerce(102) == a

    def test_coerce_rejects_other_field(self):
        with pytest.raises(ValueError):
            PrimeField(97).coerce(PrimeField(101).element(5))

    def test_coerce_rejects_non_integers(self):
        with pytest.raises(TypeError):
            PrimeField(97).coerce(1.5)

    def test_random_nonzero(self):
        field = PrimeField(5)
        assert all(not field.random(exclude_zero=True).is_zero() for _ in range(50))

    def test_presets_live_at_module_level(self):
        assert PrimeField.PRESETS["goldilocks"] == GOLDILOCKS_PRIME
        assert not hasattr(PrimeField, "GOLDILOCKS_PRIME")


class TestFieldElement:
    def setup_method(self):
        self.field = PrimeField(97)
        self.a = self.field.element(45)
        self.b = self.field.element(67)

    def test_add(self):
        assert (self.a + self.b).value == 15

    def test_sub(self):
        assert (self.a - self.b).value == 75

    def test_mul(self):
        assert (self.a * self.b).value == 8

    def test_int_operands(self):
        assert 2 * self.a == 90
        assert self.a + 60 == 8
        assert 50 - self.a == 5

    def test_neg(self):
        assert (-self.a + self.a).is_zero()

    def test_inverse(self):
        assert (self.a * self.a.inverse()).is_one()

    def test_inverse_of_zero(self):
        with pytest.raises(ValueError, match="zero has no inverse"):
            self.field.zero().inverse()

    def test_division(self):
        assert (self.a / self.b) * self.b == self.a

    def test_pow(self):
        assert self.field.element(2) ** 10 == 1024 % 97

    def test_zero_to_the_zero_is_one(self):
        assert (self.field.zero() ** 0).is_one()

    def test_negative_pow(self):
        assert self.a ** -1 == self.a.inverse()

    def test_mixed_fields_rejected(self):
        with pytest.raises(ValueError):
            self.a + PrimeField(101).element(1)

    def test_equality_and_hash(self):
        assert self.field.element(3) == FieldElement(100, self.field)
        assert hash(self.field.element(3)) == hash(FieldElement(100, self.field))
        assert self.field.element(3) != PrimeField(101).element(3)

    def test_large_field_inverse(self):
        field = PrimeField.from_name("bls12-381")
        x = field.element(123456789)
        assert (x * x.inverse()).is_one()

    def test_composite_modulus_inverse(self):
        with pytest.raises(ValueError, match="not invertible mod 91"):
            PrimeField(91).element(7).inverse()

    def test_pow_counts_one_multiply_per_set_bit(self, monkeypatch):
        calls = []
        original = FieldElement.__mul__
        monkeypatch.setattr(FieldElement, "__mul__",
                            lambda a, b: calls.append(1) or original(a, b))
        assert self.field.element(3) ** 0 == 1
        assert calls == []
        assert self.field.element(3) ** 5 == 243 % 97
        # 3 squarings + 2 set bits
        assert len(calls) == 5
