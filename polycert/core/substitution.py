"""Substituting a variable by a rational expression."""

from __future__ import annotations

import logging
from typing import List

from sympy.polys.rings import PolyElement

from ..errors import DivisionByZero
from .rings import Variable, coefficient_slices, convert, degree_in

logger = logging.getLogger(__name__)


def _powers(base: PolyElement, d: int) -> List[PolyElement]:
    """[base**0, base**1, ..., base**d], each from the previous one."""
    powers = [base.ring.one]
    for _ in range(d):
        powers.append(powers[-1] * base)
    return powers


def make_substitution(
    f: PolyElement, var_sub: Variable, val_numer: PolyElement, val_denom: PolyElement
) -> PolyElement:
    """Substitute ``var_sub`` by ``val_numer / val_denom`` in ``f``.

    With d the degree of ``f`` in ``var_sub`` the result is multiplied by
    ``val_denom**d`` to stay a polynomial:

        sum_{i=0..d} coeff(f, var_sub^i) * val_numer^i * val_denom^(d - i)

    ``val_numer`` and ``val_denom`` are converted into ``f``'s ring first.
    """
    ring = f.ring
    val_numer = convert(val_numer, ring)
    val_denom = convert(val_denom, ring)
    if not val_denom:
        raise DivisionByZero(f"Substituting {var_sub} with a zero denominator")

    d = degree_in(f, var_sub)
    if d < 0:
        return ring.zero
    logger.debug("Substitution in a polynomial of degree %d", d)

    slices = coefficient_slices(f, var_sub)
    numer_powers = _powers(val_numer, d)
    denom_powers = _powers(val_denom, d)
    result = ring.zero
    for i in range(d + 1):
        coeff = slices.get(i)
        if coeff is None:
            continue
        result += coeff * numer_powers[i] * denom_powers[d - i]
        logger.debug("Degree %d: intermediate result has %d terms", i, len(result))
    return result
