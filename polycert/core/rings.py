"""Polynomial rings and conversion between them.

Rings are SymPy ``PolyRing`` objects and polynomials are ``PolyElement``
objects: sparse dictionaries mapping exponent tuples (one entry per ring
variable) to nonzero coefficients of the ring's domain.

  x**2*y + 3  in QQ[x, y]  ->  {(2, 1): 1, (0, 0): 3}

Variables are matched across rings by name only, never by position, so a
polynomial can move between rings that order their variables differently or
carry extra variables.  Conversion fails with VariableNotFound as soon as a
variable that actually occurs in the polynomial is missing from the target.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence, Tuple, Union

import sympy
from sympy.polys.rings import PolyElement, PolyRing

from ..errors import VariableNotFound
from .fields import CoefficientField, field_of

Exponent = Tuple[int, ...]
Variable = Union[PolyElement, str]


def polynomial_ring(
    names: Sequence[str], field: CoefficientField, order: str = "lex"
) -> Tuple[PolyRing, List[PolyElement]]:
    """Create the ring field[names] and return it with its generators."""
    ring = PolyRing(list(names), field.domain, order)
    return ring, list(ring.gens)


def ring_names(ring: PolyRing) -> List[str]:
    return [str(s) for s in ring.symbols]


def var_to_str(var: PolyElement) -> str:
    """Name of a generator of its ring."""
    ring = var.ring
    for name, gen in zip(ring_names(ring), ring.gens):
        if var == gen:
            return name
    raise ValueError(f"{var} is not a variable of {ring}")


def var_index(ring: PolyRing, var: Variable) -> int:
    """Position in ``ring`` of the variable with the same name as ``var``."""
    name = var if isinstance(var, str) else var_to_str(var)
    names = ring_names(ring)
    if name not in names:
        raise VariableNotFound(name, names)
    return names.index(name)


def str_to_var(name: str, ring: PolyRing) -> PolyElement:
    """The generator of ``ring`` called ``name``."""
    return ring.gens[var_index(ring, name)]


def switch_ring(var: PolyElement, ring: PolyRing) -> PolyElement:
    """For a variable ``var``, the variable of ``ring`` with the same name."""
    return str_to_var(var_to_str(var), ring)


def variables_of(poly: PolyElement) -> List[PolyElement]:
    """Variables occurring in ``poly``, in the ring's order."""
    ring = poly.ring
    used = [False] * ring.ngens
    for monom in poly.keys():
        for i, e in enumerate(monom):
            if e:
                used[i] = True
    return [gen for gen, flag in zip(ring.gens, used) if flag]


def degree_in(poly: PolyElement, var: Variable) -> int:
    """Degree of ``poly`` in ``var``; -1 for the zero polynomial."""
    i = var_index(poly.ring, var)
    return max((monom[i] for monom in poly.keys()), default=-1)


def dict_to_poly(terms: Mapping[Sequence[int], object], ring: PolyRing) -> PolyElement:
    """Build a polynomial of ``ring`` from ``{exponent: coefficient}``.

    Coefficients are embedded with the ring's field, so plain ints, Fractions
    and sympy Rationals are accepted next to native domain elements.
    """
    field = field_of(ring)
    native = {}
    for monom, coeff in terms.items():
        monom = tuple(int(e) for e in monom)
        if len(monom) != ring.ngens:
            raise ValueError(f"Exponent {monom} does not fit a ring with {ring.ngens} variables")
        value = field.coerce(coeff)
        if monom in native:
            value = native[monom] + value
        native[monom] = value
    return ring.from_dict(native)


def convert(expr, target_ring: PolyRing):
    """Move a polynomial or rational function into ``target_ring``.

    Every variable that occurs in ``expr`` must exist, by name, in
    ``target_ring``; otherwise VariableNotFound is raised and nothing is
    returned.  Coefficients are embedded with the target field
    (QQ -> GF(p) raises ValueNotRepresentable on a vanishing denominator).
    Rational functions convert numerator and denominator separately and are
    not re-simplified.
    """
    from .rational import RationalFunction, unpack_fraction

    if not isinstance(expr, PolyElement):
        numer, denom = unpack_fraction(expr)
        return RationalFunction(convert(numer, target_ring), convert(denom, target_ring))

    source_ring = expr.ring
    if source_ring == target_ring:
        return expr.copy()

    source_names = ring_names(source_ring)
    target_names = ring_names(target_ring)
    target_pos = {name: j for j, name in enumerate(target_names)}
    mapping = [target_pos.get(name) for name in source_names]
    source_field = field_of(source_ring)
    target_field = field_of(target_ring)

    terms: Dict[Exponent, object] = {}
    for monom, coeff in expr.items():
        new_monom = [0] * target_ring.ngens
        for i, e in enumerate(monom):
            if e == 0:
                continue
            j = mapping[i]
            if j is None:
                raise VariableNotFound(source_names[i], target_names)
            new_monom[j] = e
        terms[tuple(new_monom)] = target_field.convert(coeff, source_field)
    return target_ring.from_dict(terms)


def coefficient_slices(poly: PolyElement, var: Variable) -> Dict[int, PolyElement]:
    """Coefficients of ``poly`` with respect to the powers of ``var``.

    Returns ``{i: c_i}`` with poly = sum(c_i * var**i); each c_i lives in the
    same ring and does not involve ``var``.  Powers with a zero coefficient
    are absent.
    """
    ring = poly.ring
    i = var_index(ring, var)
    grouped: Dict[int, Dict[Exponent, object]] = {}
    for monom, coeff in poly.items():
        rest = monom[:i] + (0,) + monom[i + 1:]
        grouped.setdefault(monom[i], {})[rest] = coeff
    return {power: ring.from_dict(terms) for power, terms in grouped.items()}


def extract_coefficients(
    poly: PolyElement, variables: Sequence[Variable]
) -> Dict[Exponent, PolyElement]:
    """Split ``poly`` into coefficients at monomials in ``variables``.

    Returns a dictionary whose keys are exponent tuples (one entry per element
    of ``variables``) and whose values are the matching coefficients, as
    polynomials in a new ring over the remaining variables.
    """
    ring = poly.ring
    names = ring_names(ring)
    indices = [var_index(ring, v) for v in variables]
    selected = set(indices)
    rest_indices = [i for i in range(ring.ngens) if i not in selected]
    coeff_ring, _ = polynomial_ring(
        [names[i] for i in rest_indices], field_of(ring), str(ring.order)
    )

    grouped: Dict[Exponent, Dict[Exponent, object]] = {}
    for monom, coeff in poly.items():
        key = tuple(monom[i] for i in indices)
        grouped.setdefault(key, {})[tuple(monom[i] for i in rest_indices)] = coeff
    return {key: coeff_ring.from_dict(terms) for key, terms in grouped.items()}


def evaluate_at_point(poly: PolyElement, point: Sequence):
    """Value of ``poly`` at a full point (one field element per ring variable)."""
    domain = poly.ring.domain
    total = domain.zero
    for monom, coeff in poly.items():
        term = coeff
        for value, e in zip(point, monom):
            if e:
                term = term * value ** e
        total += term
    return total


def evaluate_partial(
    poly: PolyElement, values: Mapping[Variable, object], target_ring: PolyRing
) -> PolyElement:
    """Substitute field values for some variables, then convert into ``target_ring``.

    ``values`` maps variables (or their names) of ``poly``'s ring to values;
    the variables left over must all exist in ``target_ring``.
    """
    ring = poly.ring
    field = field_of(ring)
    fixed = {var_index(ring, var): field.coerce(value) for var, value in values.items()}

    terms: Dict[Exponent, object] = {}
    for monom, coeff in poly.items():
        term = coeff
        rest = list(monom)
        for i, value in fixed.items():
            if monom[i]:
                term = term * value ** monom[i]
                rest[i] = 0
        rest = tuple(rest)
        terms[rest] = terms.get(rest, field.zero) + term
    return convert(ring.from_dict(terms), target_ring)


def to_sympy(poly: PolyElement) -> sympy.Expr:
    """Convert to a SymPy expression in the ring's symbols."""
    return poly.as_expr()


def from_sympy(expr: sympy.Expr, ring: PolyRing) -> PolyElement:
    """Convert a SymPy polynomial expression in ``ring``'s symbols back into ``ring``."""
    expr = sympy.sympify(expr)
    if expr.is_number:
        return dict_to_poly({(0,) * ring.ngens: sympy.Rational(expr)}, ring)
    poly = sympy.Poly(expr, *ring.symbols, domain=ring.domain)
    return dict_to_poly(poly.as_dict(native=True), ring)


