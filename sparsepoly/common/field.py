"""
Prime Field Arithmetic for Sparse Polynomial Evaluation.

Every coefficient and every evaluation point of a sparse polynomial lives
in a prime field Z_p. This module supplies that field: a small, explicit
implementation of modular arithmetic that works equally well for toy
primes (handy in tests, easy to check by hand) and for the 381-bit
BLS12-381 base field used by pairing-based constructions.

What the polynomial code relies on:
    - zero() and one() identities from the field
    - + and * reduced mod p, with ints accepted on either side
    - inverse() raising on zero, so division by zero never goes unnoticed
    - a ** 0 == one() for every a, zero included

Example:
    >>> f = PrimeField(97)
    >>> f.element(90) + 10  # 100 mod 97
    FieldElement(3, mod 97)

Cost Context:
    - A BLS12-381 modular multiplication is the unit of work every
      evaluation strategy is measured in (see simulator.cost)
    - Exponentiation by e costs about 2 * log2(e) multiplications, which is
      why the Horner-style and precomputed strategies avoid it
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union, Dict
import random


# Base field Fq of BLS12-381 (381 bits). The default coefficient field.
BLS12_381_BASE_PRIME = int(
    "1a0111ea397fe69a4b1ba7b6434bacd764774b84f38512bf6730d2a0f6b0f624"
    "1eabfffeb153ffffb9feffffffffaaab",
    16,
)

# Scalar field Fr of BLS12-381 (255 bits).
BLS12_381_SCALAR_PRIME = int(
    "73eda753299d7d483339d80809a1d80553bda402fffe5bfeffffffff00000001",
    16,
)

GOLDILOCKS_PRIME = (1 << 64) - (1 << 32) + 1
SMALL_TEST_PRIME = 97


@dataclass
class FieldElement:
    """
    A residue mod p, tied to the PrimeField it came from.

    Results of every operator are reduced on construction; combining
    residues of two different moduli raises ValueError.

    Attributes:
        value: Canonical representative, 0 <= value < p
        field: Owning PrimeField

    Example:
        >>> print(PrimeField(97).element(50) * 2)  # 100 mod 97
        3
    """
    value: int
    field: 'PrimeField'

    def __post_init__(self):
        """Reduce into [0, p)."""
        self.value = self.value % self.field.prime

    def __repr__(self) -> str:
        return f"FieldElement({self.value}, mod {self.field.prime})"

    def __str__(self) -> str:
        return str(self.value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            return self.value == other.value and self.field.prime == other.field.prime
        if isinstance(other, int):
            return self.value == (other % self.field.prime)
        return False

    def __hash__(self) -> int:
        return hash((self.value, self.field.prime))

    def _other_value(self, other: Union[FieldElement, int]) -> int:
        if isinstance(other, FieldElement):
            if other.field.prime != self.field.prime:
                raise ValueError(
                    f"Cannot combine elements of Z_{self.field.prime} "
                    f"and Z_{other.field.prime}"
                )
            return other.value
        return other

    def __add__(self, other: Union[FieldElement, int]) -> FieldElement:
        return FieldElement(self.value + self._other_value(other), self.field)

    def __radd__(self, other: int) -> FieldElement:
        return self.__add__(other)

    def __sub__(self, other: Union[FieldElement, int]) -> FieldElement:
        return FieldElement(self.value - self._other_value(other), self.field)

    def __rsub__(self, other: int) -> FieldElement:
        return FieldElement(other - self.value, self.field)

    def __mul__(self, other: Union[FieldElement, int]) -> FieldElement:
        return FieldElement(self.value * self._other_value(other), self.field)

    def __rmul__(self, other: int) -> FieldElement:
        return self.__mul__(other)

    def __truediv__(self, other: Union[FieldElement, int]) -> FieldElement:
        """Multiply by the inverse of other; raises ValueError when other is zero."""
        return self * self.field.coerce(other).inverse()

    def __neg__(self) -> FieldElement:
        return FieldElement(-self.value, self.field)

    def __pow__(self, exp: int) -> FieldElement:
        """
        Square-and-multiply, scanning exp from its lowest bit.

        One squaring per bit plus one multiply per set bit; simulator.cost
        charges naive evaluation exactly that. Negative exponents invert first.
        """
        if exp < 0:
            return self.inverse() ** (-exp)

        result = self.field.one()
        square = self
        while exp:
            exp, bit = divmod(exp, 2)
            if bit:
                result = result * square
            square = square * square
        return result

    def inverse(self) -> FieldElement:
        """
        Multiplicative inverse via extended Euclid on (value, p).

        Raises:
            ValueError: For zero, or when gcd(value, p) != 1
        """
        if self.is_zero():
            raise ValueError("zero has no inverse")

        a, b = self.value, self.field.prime
        x0, x1 = 1, 0
        while b:
            q, rem = divmod(a, b)
            a, b = b, rem
            x0, x1 = x1, x0 - q * x1

        # a is gcd(value, p) here
        if a != 1:
            raise ValueError(f"{self.value} is not invertible mod {self.field.prime} (gcd {a})")
        return FieldElement(x0, self.field)

    def is_zero(self) -> bool:
        """True for the additive identity."""
        return self.value == 0

    def is_one(self) -> bool:
        """True for the multiplicative identity."""
        return self.value == 1


class PrimeField:
    """
    Modulus p plus factories for its elements.

    The polynomial code takes its zero/one identities from here when it
    has no terms to take them from.

    Attributes:
        prime: Modulus p

    Named presets (see from_name):
        - "small": 97, easy to verify by hand
        - "goldilocks": 2^64 - 2^32 + 1
        - "bls12-381": the 381-bit base field Fq
        - "bls12-381-fr": the 255-bit scalar field Fr

    Example:
        >>> field = PrimeField.from_name("bls12-381")
        >>> print(field.element(2) ** 3)
        8
    """

    PRESETS: Dict[str, int] = {
        "small": SMALL_TEST_PRIME,
        "goldilocks": GOLDILOCKS_PRIME,
        "bls12-381": BLS12_381_BASE_PRIME,
        "bls12-381-fr": BLS12_381_SCALAR_PRIME,
    }

    def __init__(self, prime: int):
        """
        Args:
            prime: Modulus, at least 2. Primality is assumed, not checked;
                   a composite modulus surfaces later as a failed inverse().
        """
        if prime < 2:
            raise ValueError(f"Modulus must be at least 2, got {prime}")
        self.prime = prime

    @classmethod
    def from_name(cls, name: str) -> PrimeField:
        """Create one of the preset fields by name."""
        try:
            return cls(cls.PRESETS[name.lower()])
        except KeyError:
            known = ", ".join(sorted(cls.PRESETS))
            raise ValueError(f"Unknown field '{name}' (known: {known})") from None

    def __repr__(self) -> str:
        return f"PrimeField({self.prime})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PrimeField) and self.prime == other.prime

    def __hash__(self) -> int:
        return hash(self.prime)

    @property
    def bits(self) -> int:
        """Bit length of the modulus."""
        return self.prime.bit_length()

    def element(self, value: int) -> FieldElement:
        """Reduce an int into the field."""
        return FieldElement(value, self)

    def coerce(self, value: Union[FieldElement, int]) -> FieldElement:
        """
        Lift an integer into the field, or pass through one of our elements.

        Raises:
            ValueError: For elements of a different field
            TypeError: For anything that is neither an int nor an element
        """
        if isinstance(value, FieldElement):
            if value.field.prime != self.prime:
                raise ValueError(
                    f"Element of Z_{value.field.prime} does not belong to Z_{self.prime}"
                )
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return FieldElement(value, self)
        raise TypeError(f"Cannot convert {type(value).__name__} to a field element")

    def zero(self) -> FieldElement:
        """Additive identity."""
        return FieldElement(0, self)

    def one(self) -> FieldElement:
        """Multiplicative identity."""
        return FieldElement(1, self)

    def random(self, exclude_zero: bool = False) -> FieldElement:
        """Uniform element; with exclude_zero, uniform over the invertible ones."""
        low = 1 if exclude_zero else 0
        return FieldElement(random.randrange(low, self.prime), self)
