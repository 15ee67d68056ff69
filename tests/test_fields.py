"""Tests for coefficient fields and their embeddings."""

import random
from fractions import Fraction

import pytest
import sympy
from sympy.polys.domains import GF, QQ

from polycert.core.fields import PrimeField, RationalField, field_of
from polycert.errors import DivisionByZero, ValueNotRepresentable


class TestRationalField:
    def setup_method(self):
        self.field = RationalField()

    def test_from_fraction(self):
        assert self.field.from_rational(Fraction(1, 3)) == QQ(1, 3)

    def test_from_int_and_sympy_rational(self):
        assert self.field.from_rational(4) == QQ(4)
        assert self.field.from_rational(sympy.Rational(-2, 5)) == QQ(-2, 5)

    def test_from_domain_element_and_bool(self):
        assert self.field.from_rational(QQ(3, 4)) == QQ(3, 4)
        assert self.field.from_rational(True) == self.field.one

    def test_rejects_non_rational(self):
        with pytest.raises(ValueNotRepresentable):
            self.field.from_rational(object())

    def test_arithmetic(self):
        a = self.field.from_rational(Fraction(2, 3))
        b = self.field.from_rational(Fraction(1, 3))
        assert self.field.add(a, b) == self.field.one
        assert self.field.mul(a, self.field.inv(a)) == self.field.one

    def test_invert_zero(self):
        with pytest.raises(DivisionByZero):
            self.field.inv(self.field.zero)

    def test_is_zero(self):
        assert self.field.is_zero(self.field.zero)
        assert not self.field.is_zero(self.field.one)

    def test_random_element_range(self):
        rng = random.Random(0)
        for _ in range(20):
            value = self.field.random_element(rng, 5, 10)
            assert 5 <= value <= 10

    def test_no_embedding_from_finite_field(self):
        with pytest.raises(ValueNotRepresentable):
            self.field.convert(GF(5)(2), PrimeField(5))


class TestPrimeField:
    def setup_method(self):
        self.field = PrimeField(7)

    def test_from_domain_rational(self):
        # 3/4 = 3 * 2 = 6 (mod 7)
        assert self.field.from_rational(QQ(3, 4)) == self.field.from_rational(6)
        assert self.field.from_rational(sympy.Rational(-1, 2)) == self.field.from_rational(3)

    def test_rejects_composite_modulus(self):
        with pytest.raises(ValueError):
            PrimeField(8)

    def test_from_rational_inverts_denominator(self):
        third = self.field.from_rational(Fraction(1, 3))
        assert self.field.mul(third, self.field.from_rational(3)) == self.field.one

    def test_vanishing_denominator(self):
        with pytest.raises(ValueNotRepresentable):
            self.field.from_rational(Fraction(1, 7))

    def test_convert_from_rationals(self):
        field = PrimeField(5)
        # 2/3 = 2 * 2 = 4 (mod 5)
        assert field.convert(QQ(2, 3), RationalField()) == field.from_rational(4)

    def test_invert(self):
        a = self.field.from_rational(3)
        assert self.field.mul(a, self.field.inv(a)) == self.field.one

    def test_invert_zero(self):
        with pytest.raises(ZeroDivisionError):
            self.field.inv(self.field.zero)

    def test_wraparound(self):
        a = self.field.from_rational(5)
        b = self.field.from_rational(4)
        assert self.field.add(a, b) == self.field.from_rational(2)


class TestFieldOf:
    def test_rationals(self):
        assert field_of(QQ) == RationalField()

    def test_finite_field(self):
        assert field_of(GF(5)) == PrimeField(5)

    def test_unsupported(self):
        with pytest.raises(ValueError):
            field_of(sympy.ZZ)
