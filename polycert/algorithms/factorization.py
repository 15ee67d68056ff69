"""Polynomial factorization: cheap randomized certificate first, exact engine second.

Mechanism
---------
1. uncertain_factorization() splits f into its content and primitive part with
   respect to a main variable (the last variable of the ring that occurs in
   f), recursing on the content.  The primitive part is specialized at a
   random integer point in all other variables.  If the univariate
   specialization is irreducible and kept its degree, the primitive part is
   irreducible over QQ: any factorization of it would survive the
   specialization.  Such factors are returned as certain.

2. Whatever could not be certified is handed to SymPy's exact factorization
   (factor_via_external_engine).

3. fast_factor() returns the union of both.  The product of the returned
   factors, each raised to its multiplicity in f, is f up to a constant.

The content recursion terminates because the content never involves the main
variable, so every recursive call sees strictly fewer variables.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence, Tuple

import sympy
from sympy.polys.rings import PolyElement

from ..config import Config
from ..core.fields import RationalField, field_of
from ..core.rational import eval_at_dict, exact_divide
from ..core.rings import (
    coefficient_slices, convert, evaluate_partial, from_sympy, polynomial_ring,
    to_sympy, var_to_str, variables_of,
)
from ..retry import retry_until
from ..timings import Timings, count, timed

logger = logging.getLogger(__name__)


def is_irreducible(poly: PolyElement) -> bool:
    """True iff ``poly`` is non-constant and has no nontrivial factorization.

    Meant for univariate polynomials; multivariate ones work over QQ only.
    """
    if poly.is_ground:
        return False
    _, factors = poly.factor_list()
    return len(factors) == 1 and factors[0][1] == 1


def _is_squarefree(poly: PolyElement, var: PolyElement) -> bool:
    return poly.gcd(poly.diff(var)).is_ground


def uncertain_factorization(
    f: PolyElement,
    config: Optional[Config] = None,
    rng: Optional[random.Random] = None,
    timings: Optional[Timings] = None,
) -> List[Tuple[PolyElement, bool]]:
    """Split ``f`` into divisors tagged with an irreducibility certificate.

    Returns:
        List of (divisor, certain) pairs.  f is the product of the divisors
        raised to some powers, up to a constant.  When ``certain`` is True the
        divisor is irreducible over QQ; otherwise nothing is known about it.
    """
    config = config or Config()
    rng = rng or config.make_rng()
    count(timings, "uncertain_factorization.calls")

    variables = variables_of(f)
    if not variables:
        return []
    ring = f.ring
    field = field_of(ring)
    main_var = variables[-1]
    main_name = var_to_str(main_var)
    other_names = [var_to_str(v) for v in variables[:-1]]

    slices = coefficient_slices(f, main_var)
    d = max(slices)
    content = slices[d]
    for i in range(d - 1, -1, -1):
        if i in slices:
            content = content.gcd(slices[i])
    f = exact_divide(f, content)
    lc = coefficient_slices(f, main_var)[d]

    def draw():
        return {name: rng.randint(config.factor_eval_low, config.factor_eval_high) for name in other_names}

    def keeps_degree(point):
        return not field.is_zero(eval_at_dict(lc, point))

    with timed(timings, "uncertain_factorization.evaluate"):
        point = retry_until(
            draw, keeps_degree, config.max_evaluation_attempts,
            description=f"evaluation point for the leading coefficient in {main_name}",
        )
        uni_ring, (uni_var,) = polynomial_ring([main_name], field)
        f_uni = evaluate_partial(f, point, uni_ring)

    if not _is_squarefree(f_uni, uni_var):
        f = exact_divide(f, f.gcd(f.diff(main_var)))
    with timed(timings, "uncertain_factorization.irreducibility"):
        is_irr = is_irreducible(f_uni)
    logger.debug("Specialization at %s of degree %d: irreducible=%s", point, d, is_irr)

    coeff_factors = uncertain_factorization(content, config, rng, timings)
    coeff_factors.append((f, is_irr))
    return coeff_factors


def _require_rationals(ring) -> None:
    if not isinstance(field_of(ring), RationalField):
        raise ValueError(f"Factorization is only supported over QQ, got {ring.domain}")


def factor_via_external_engine(polys: Sequence[PolyElement]) -> List[PolyElement]:
    """Factor each polynomial exactly with SymPy over QQ.

    Factors are returned in the ring of the input polynomials; constant
    factors and multiplicities are dropped.  Rings over other fields are
    rejected with ValueError.
    """
    if not polys:
        return []
    ring = polys[0].ring
    _require_rationals(ring)
    result: List[PolyElement] = []
    for p in polys:
        logger.debug("Factoring with SymPy a polynomial with %d terms", len(p))
        expr = to_sympy(convert(p, ring))
        if expr.is_number:
            continue
        _, factors = sympy.factor_list(expr, *ring.symbols, domain=ring.domain)
        for factor_expr, _mult in factors:
            if factor_expr.is_number:
                continue
            logger.debug("Factor: %s", factor_expr)
            result.append(from_sympy(factor_expr, ring))
    return result


def fast_factor(
    poly: PolyElement,
    config: Optional[Config] = None,
    rng: Optional[random.Random] = None,
    timings: Optional[Timings] = None,
) -> List[PolyElement]:
    """Irreducible factors of ``poly`` over QQ, certified randomly where possible.

    The zero polynomial and constants have no factors.  ``poly`` must live in
    a ring over QQ; other coefficient fields raise ValueError.
    """
    _require_rationals(poly.ring)
    config = config or Config()
    rng = rng or config.make_rng()
    with timed(timings, "fast_factor"):
        prelim_factors = uncertain_factorization(poly, config, rng, timings)
        cert_factors = [f for f, certain in prelim_factors if certain]
        uncert_factors = [f for f, certain in prelim_factors if not certain]
        count(timings, "fast_factor.certified", len(cert_factors))
        count(timings, "fast_factor.uncertain", len(uncert_factors))
        with timed(timings, "fast_factor.external_engine"):
            cert_factors.extend(factor_via_external_engine(uncert_factors))
    return cert_factors
