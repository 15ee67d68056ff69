"""Monte Carlo primality check for zero-dimensional ideals.

For a zero-dimensional ideal I in K[x1..xn] the quotient A = K[x]/I is a
finite-dimensional K-vector space.  Multiplication by each variable is a
linear map on A; a random linear combination of these commuting maps has an
irreducible characteristic polynomial exactly when I is prime, except with a
probability that shrinks as the range of the random coefficients grows.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from sympy.polys.groebnertools import groebner
from sympy.polys.matrices import DomainMatrix
from sympy.polys.rings import PolyElement

from ..config import Config
from ..core.fields import field_of
from ..core.rings import (
    Variable, coefficient_slices, convert, degree_in, evaluate_partial,
    polynomial_ring, ring_names, str_to_var, var_to_str,
)
from ..errors import InternalInconsistency, NotZeroDimensional
from ..retry import retry_until
from ..timings import Timings, count, timed
from .factorization import is_irreducible

logger = logging.getLogger(__name__)

Exponent = Tuple[int, ...]


def standard_monomials(basis: Sequence[PolyElement], ngens: int) -> List[Exponent]:
    """Exponents of the monomials not divisible by any leading monomial of ``basis``.

    ``basis`` must be a Groebner basis of a zero-dimensional ideal, i.e. for
    every variable some leading monomial is a pure power of it; the standard
    monomials then lie in the box bounded by those powers.
    """
    if not basis:
        raise NotZeroDimensional("The zero ideal is not zero-dimensional")
    leading = np.array([g.LM for g in basis], dtype=np.int64).reshape(len(basis), ngens)
    if np.any(np.all(leading == 0, axis=1)):
        # unit ideal, the quotient is the zero space
        return []

    bounds = []
    for i in range(ngens):
        others = np.delete(leading, i, axis=1)
        pure = leading[np.all(others == 0, axis=1) & (leading[:, i] > 0), i]
        if pure.size == 0:
            raise NotZeroDimensional(f"No leading monomial is a pure power of variable {i}")
        bounds.append(int(pure.min()))

    result = []
    for monom in np.ndindex(*bounds):
        if not np.any(np.all(leading <= np.array(monom), axis=1)):
            result.append(tuple(int(e) for e in monom))
    return result


def multiplication_matrices(
    basis: Sequence[PolyElement], monomials: Sequence[Exponent]
) -> List[DomainMatrix]:
    """Matrices of multiplication by each ring variable on the quotient space.

    Row i of the matrix for variable v holds the coordinates of
    normal_form(v * monomials[i]) in the basis ``monomials``.
    """
    ring = basis[0].ring
    domain = ring.domain
    n = len(monomials)
    position = {m: i for i, m in enumerate(monomials)}
    monomial_polys = [ring.from_dict({m: domain.one}) for m in monomials]

    matrices = []
    for gen in ring.gens:
        rows = []
        for vec in monomial_polys:
            image = (gen * vec).rem(list(basis))
            row = [domain.zero] * n
            for monom, coeff in image.items():
                if monom not in position:
                    raise InternalInconsistency(
                        f"Normal form {image} leaves the span of the standard monomials"
                    )
                row[position[monom]] = coeff
            rows.append(row)
        matrix = DomainMatrix(rows, (n, n), domain)
        logger.debug("Multiplication by %s: %s", gen, matrix)
        matrices.append(matrix)
    return matrices


def check_primality_zerodim(
    generators: Sequence[PolyElement],
    config: Optional[Config] = None,
    rng: Optional[random.Random] = None,
    timings: Optional[Timings] = None,
) -> bool:
    """Decide whether the zero-dimensional ideal spanned by ``generators`` is prime.

    A True answer may be wrong with a small probability controlled by
    ``config.primality_coeff_low/high``; ideals that are not zero-dimensional
    raise NotZeroDimensional.
    """
    config = config or Config()
    rng = rng or config.make_rng()
    generators = list(generators)
    if not generators:
        raise NotZeroDimensional("An ideal without generators is not zero-dimensional")

    source_ring = generators[0].ring
    field = field_of(source_ring)
    ring, _ = polynomial_ring(ring_names(source_ring), field, config.monomial_order)
    polys = [convert(g, ring) for g in generators]

    with timed(timings, "primality.groebner"):
        basis = groebner(polys, ring)
    with timed(timings, "primality.quotient_basis"):
        monomials = standard_monomials(basis, ring.ngens)
    dim = len(monomials)
    count(timings, "primality.quotient_dimension", dim)
    logger.debug("Groebner basis %s, quotient basis of dimension %d", basis, dim)
    if dim == 0:
        return False

    with timed(timings, "primality.matrices"):
        matrices = multiplication_matrices(basis, monomials)
        generic_multiplication = None
        for matrix in matrices:
            coeff = field.random_element(rng, config.primality_coeff_low, config.primality_coeff_high)
            term = matrix * coeff
            generic_multiplication = term if generic_multiplication is None else generic_multiplication + term

    with timed(timings, "primality.charpoly"):
        charpoly_coeffs = generic_multiplication.charpoly()
        t_ring, _ = polynomial_ring(["t"], field)
        charpoly = t_ring.from_dict(
            {(dim - k,): c for k, c in enumerate(charpoly_coeffs)}
        )
        logger.debug("Characteristic polynomial %s", charpoly)
        return is_irreducible(charpoly)


def _leader_name(leader: Variable) -> str:
    return leader if isinstance(leader, str) else var_to_str(leader)


def check_primality(
    polys: Mapping[Variable, PolyElement],
    extra_relations: Sequence[PolyElement] = (),
    config: Optional[Config] = None,
    rng: Optional[random.Random] = None,
    timings: Optional[Timings] = None,
) -> bool:
    """Primality of the ideal of ``polys`` saturated at their leading coefficients.

    ``polys`` maps each leader variable (a generator or its name) to a
    polynomial.  All non-leader variables are replaced by a random generic
    integer point, chosen so that no polynomial loses its degree in its
    leader; the result is a zero-dimensional ideal over the leaders.
    ``extra_relations`` are added to the generators as they are, so they may
    only involve leader variables.
    """
    config = config or Config()
    rng = rng or config.make_rng()
    if not polys:
        raise ValueError("check_primality needs at least one leader polynomial")

    leaders = [_leader_name(leader) for leader in polys]
    generators = list(polys.values())
    ring = generators[0].ring
    for name in leaders:
        str_to_var(name, ring)
    field = field_of(ring)
    leader_ring, _ = polynomial_ring(leaders, field)
    others = [name for name in ring_names(ring) if name not in leaders]

    leading_coeffs = []
    for name, poly in zip(leaders, generators):
        d = degree_in(poly, name)
        if d >= 0:
            leading_coeffs.append(coefficient_slices(poly, name)[d])

    def draw() -> Dict[str, int]:
        return {name: rng.randint(config.generic_point_low, config.generic_point_high) for name in others}

    def keeps_leading(point) -> bool:
        return all(evaluate_partial(lc, point, leader_ring) for lc in leading_coeffs)

    with timed(timings, "primality.evaluate"):
        point = retry_until(
            draw, keeps_leading, config.max_generic_point_attempts,
            description="generic point",
        )
        zerodim_ideal = [evaluate_partial(p, point, leader_ring) for p in generators]
        zerodim_ideal.extend(convert(r, leader_ring) for r in extra_relations)

    return check_primality_zerodim(zerodim_ideal, config, rng, timings)
