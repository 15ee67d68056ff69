"""Coefficient fields backing polynomial rings.

Every algorithm in polycert is written against the CoefficientField
interface below; there is one implementation per concrete field:

  RationalField   QQ, the rational numbers
  PrimeField(p)   GF(p), integers modulo a prime p

Field elements are the native elements of the wrapped SymPy domain
(``field.domain``), so they can be stored directly as coefficients of
SymPy ``PolyElement`` objects.  Conversion between fields is explicit:
a rational number only embeds into GF(p) when its denominator is
invertible modulo p.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Tuple

import sympy
from sympy.polys.domains import GF, QQ
from sympy.polys.polyerrors import CoercionFailed

from ..errors import DivisionByZero, ValueNotRepresentable


def _as_ratio(value: Any) -> Tuple[int, int]:
    """Return (numerator, denominator) integers for an int-like or rational value."""
    if isinstance(value, Fraction):
        return value.numerator, value.denominator
    try:
        q = QQ.convert(value)
    except CoercionFailed as exc:
        raise ValueNotRepresentable(f"{value!r} is not a rational number") from exc
    return int(QQ.numer(q)), int(QQ.denom(q))


class CoefficientField:
    """Capabilities every coefficient field provides.

    Subclasses set ``domain`` to the backing SymPy domain and implement
    ``from_rational`` and ``convert``.
    """

    domain = None

    @property
    def zero(self):
        return self.domain.zero

    @property
    def one(self):
        return self.domain.one

    def add(self, a, b):
        return a + b

    def mul(self, a, b):
        return a * b

    def is_zero(self, a) -> bool:
        return self.domain.is_zero(a)

    def inv(self, a):
        """Multiplicative inverse of a nonzero element."""
        if self.is_zero(a):
            raise DivisionByZero(f"Cannot invert zero in {self}")
        return self.domain.one / a

    def from_rational(self, value):
        raise NotImplementedError

    def convert(self, a, source: "CoefficientField"):
        """Embed an element of ``source`` into this field."""
        raise NotImplementedError

    def coerce(self, value):
        """Accept a native element as is, embed anything else as a rational."""
        if self.domain.of_type(value):
            return value
        return self.from_rational(value)

    def random_element(self, rng: random.Random, low: int, high: int):
        """Uniform integer in [low, high], embedded into the field."""
        return self.from_rational(rng.randint(low, high))


@dataclass(frozen=True)
class RationalField(CoefficientField):
    """The field QQ of rational numbers."""

    @property
    def domain(self):
        return QQ

    def from_rational(self, value):
        numerator, denominator = _as_ratio(value)
        if denominator == 0:
            raise ValueNotRepresentable(f"{value!r} has a zero denominator")
        return QQ(numerator, denominator)

    def convert(self, a, source: CoefficientField):
        if isinstance(source, RationalField):
            return a
        raise ValueNotRepresentable(f"Cannot embed {a} from {source} into {self}")

    def __str__(self) -> str:
        return "QQ"


@dataclass(frozen=True)
class PrimeField(CoefficientField):
    """The finite field GF(p) for a prime p."""

    p: int

    def __post_init__(self):
        if self.p < 2 or not sympy.isprime(self.p):
            raise ValueError(f"GF(p) requires a prime modulus, got {self.p}")

    @property
    def domain(self):
        return GF(self.p)

    def inv(self, a):
        value = int(a) % self.p
        if value == 0:
            raise DivisionByZero(f"Cannot invert zero in {self}")
        return self.domain(pow(value, -1, self.p))

    def from_rational(self, value):
        numerator, denominator = _as_ratio(value)
        if denominator % self.p == 0:
            raise ValueNotRepresentable(f"Denominator of {value} vanishes in {self}")
        return self.domain(numerator * pow(denominator, -1, self.p))

    def convert(self, a, source: CoefficientField):
        if isinstance(source, PrimeField) and source.p == self.p:
            return a
        if isinstance(source, RationalField):
            return self.from_rational(a)
        raise ValueNotRepresentable(f"Cannot embed {a} from {source} into {self}")

    def __str__(self) -> str:
        return f"GF({self.p})"


def field_of(ring_or_domain) -> CoefficientField:
    """Return the CoefficientField for a SymPy ring or domain."""
    domain = getattr(ring_or_domain, "domain", ring_or_domain)
    if domain.is_QQ:
        return RationalField()
    if domain.is_FiniteField:
        return PrimeField(int(domain.characteristic()))
    raise ValueError(f"Unsupported coefficient domain {domain}; expected QQ or GF(p)")
