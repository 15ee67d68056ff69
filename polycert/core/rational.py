"""Rational functions as (numerator, denominator) pairs of polynomials."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple

from sympy.polys.fields import FracElement
from sympy.polys.polyerrors import ExactQuotientFailed
from sympy.polys.rings import PolyElement

from ..errors import DivisionByZero, InternalInconsistency
from .fields import field_of
from .rings import Variable, evaluate_at_point, ring_names, var_to_str


@dataclass(frozen=True)
class RationalFunction:
    """numer / denom with both polynomials in the same ring.

    The denominator is never the zero polynomial.  The pair is stored as
    given; use simplify() to bring it to coprime form.
    """

    numer: PolyElement
    denom: PolyElement

    def __post_init__(self):
        if self.numer.ring != self.denom.ring:
            raise ValueError("Numerator and denominator must belong to the same ring")
        if not self.denom:
            raise DivisionByZero(f"Zero denominator for numerator {self.numer}")

    @property
    def ring(self):
        return self.numer.ring

    def __str__(self) -> str:
        return f"({self.numer}) / ({self.denom})"


def unpack_fraction(expr) -> Tuple[PolyElement, PolyElement]:
    """Return (numerator, denominator); a polynomial has denominator 1."""
    if isinstance(expr, PolyElement):
        return expr, expr.ring.one
    if isinstance(expr, RationalFunction):
        return expr.numer, expr.denom
    if isinstance(expr, FracElement):
        return expr.numer, expr.denom
    raise TypeError(f"Expected a polynomial or a rational function, got {type(expr).__name__}")


def exact_divide(a: PolyElement, b: PolyElement) -> PolyElement:
    """a / b when b divides a; anything else is an internal error."""
    try:
        return a.exquo(b)
    except ExactQuotientFailed as exc:
        raise InternalInconsistency(f"Expected exact division of {a} by {b}") from exc


def simplify_fraction(numer: PolyElement, denom: PolyElement) -> Tuple[PolyElement, PolyElement]:
    """Divide numerator and denominator by their monic gcd."""
    if not denom:
        raise DivisionByZero(f"Zero denominator for numerator {numer}")
    # the ring gcd may carry an integer content; constants are units here
    gcd = numer.gcd(denom).monic()
    return exact_divide(numer, gcd), exact_divide(denom, gcd)


def simplify(expr) -> RationalFunction:
    """Coprime RationalFunction equal to ``expr``."""
    return RationalFunction(*simplify_fraction(*unpack_fraction(expr)))


def eval_at_dict(expr, assignment: Mapping[Variable, object]):
    """Evaluate a polynomial or rational function at ``assignment``.

    ``assignment`` maps variables (generators or names) to values; variables
    of the ring missing from it are evaluated as zero and keys naming no
    variable of the ring are ignored.  For a fraction the denominator must
    not vanish at the point.
    """
    numer, denom = unpack_fraction(expr)
    ring = numer.ring
    field = field_of(ring)
    names = ring_names(ring)
    point = [field.zero] * ring.ngens
    for var, value in assignment.items():
        name = var if isinstance(var, str) else var_to_str(var)
        if name in names:
            point[names.index(name)] = field.coerce(value)

    if isinstance(expr, PolyElement):
        return evaluate_at_point(numer, point)
    denom_value = evaluate_at_point(denom, point)
    if field.is_zero(denom_value):
        raise DivisionByZero(f"Denominator {denom} vanishes at {dict(zip(names, point))}")
    return field.mul(evaluate_at_point(numer, point), field.inv(denom_value))
