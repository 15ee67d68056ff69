"""Tests for rational functions: unpacking, simplification, evaluation."""

from fractions import Fraction

import pytest
from sympy.polys.domains import QQ

from polycert.core.fields import PrimeField, RationalField
from polycert.core.rational import (
    RationalFunction, eval_at_dict, exact_divide, simplify, simplify_fraction, unpack_fraction,
)
from polycert.core.rings import polynomial_ring
from polycert.errors import DivisionByZero, InternalInconsistency


class TestUnpackFraction:
    def setup_method(self):
        self.R, (self.x, self.y) = polynomial_ring(["x", "y"], RationalField())

    def test_polynomial(self):
        assert unpack_fraction(self.x) == (self.x, self.R.one)

    def test_rational_function(self):
        assert unpack_fraction(RationalFunction(self.x, self.y)) == (self.x, self.y)

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            unpack_fraction(3)

    def test_zero_denominator(self):
        with pytest.raises(DivisionByZero):
            RationalFunction(self.x, self.R.zero)


class TestSimplifyFraction:
    def setup_method(self):
        self.R, (self.x, self.y) = polynomial_ring(["x", "y"], RationalField())

    def test_common_factor_removed(self):
        numer = (self.x + 1) * (self.x - 1) * self.y
        denom = (self.x + 1) * self.y**2
        a, b = simplify_fraction(numer, denom)
        assert a.gcd(b).is_ground
        # same ratio
        assert a * denom == b * numer
        assert a.monic() == self.x - 1
        assert b.monic() == self.y

    def test_idempotent(self):
        numer = 2 * (self.x + self.y) ** 2
        denom = 4 * (self.x + self.y) * self.x
        once = simplify_fraction(numer, denom)
        assert simplify_fraction(*once) == once

    def test_simplified_pair_with_integer_content_is_stable(self):
        x, y = self.x, self.y
        a, b = simplify_fraction(2 * x + 2 * y, 4 * x)
        assert (a, b) == simplify_fraction(a, b)
        assert (a, b) == (2 * x + 2 * y, 4 * x)

    def test_coprime_input_unchanged_ratio(self):
        a, b = simplify_fraction(self.x + 1, self.y)
        assert a * self.y == b * (self.x + 1)

    def test_zero_numerator(self):
        a, b = simplify_fraction(self.R.zero, self.x**2 + 1)
        assert not a
        assert b.is_ground

    def test_zero_denominator(self):
        with pytest.raises(DivisionByZero):
            simplify_fraction(self.x, self.R.zero)

    def test_simplify_dataclass(self):
        rf = simplify(RationalFunction(self.x * self.y, self.y**2))
        assert rf.numer * self.y == rf.denom * self.x

    def test_inexact_division_is_internal_error(self):
        with pytest.raises(InternalInconsistency):
            exact_divide(self.x, self.y)


class TestEvalAtDict:
    def setup_method(self):
        self.R, (self.x, self.y) = polynomial_ring(["x", "y"], RationalField())

    def test_empty_assignment_is_zero_point(self):
        assert eval_at_dict(self.x**2 + 3 * self.y + 5, {}) == 5

    def test_constant_ignores_assignment(self):
        assert eval_at_dict(self.R(7), {self.x: 3, self.y: 4}) == 7

    def test_polynomial(self):
        value = eval_at_dict(self.x**2 * self.y + 1, {self.x: 2, "y": Fraction(1, 2)})
        assert value == 3

    def test_missing_variable_is_zero(self):
        assert eval_at_dict(self.x * self.y + self.x, {self.x: 5}) == 5

    def test_unknown_keys_ignored(self):
        assert eval_at_dict(self.x + 1, {"w": 9, "x": 1}) == 2

    def test_fraction(self):
        rf = RationalFunction(self.x, self.y + 1)
        assert eval_at_dict(rf, {self.x: 3, self.y: 2}) == 1
        assert eval_at_dict(rf, {self.x: 1, self.y: 2}) == QQ(1, 3)

    def test_fraction_denominator_vanishes(self):
        rf = RationalFunction(self.x, self.y)
        with pytest.raises(DivisionByZero):
            eval_at_dict(rf, {self.x: 1})

    def test_finite_field(self):
        G, (gx, gy) = polynomial_ring(["x", "y"], PrimeField(5))
        field = PrimeField(5)
        value = eval_at_dict(RationalFunction(gx, gy), {gx: 1, gy: 3})
        # 1/3 = 2 (mod 5)
        assert value == field.from_rational(2)
