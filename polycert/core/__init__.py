"""Core primitives: coefficient fields, rings, rational functions, substitution."""

from .fields import CoefficientField, RationalField, PrimeField, field_of
from .rings import (
    polynomial_ring, ring_names, var_to_str, var_index, str_to_var, switch_ring,
    variables_of, degree_in, dict_to_poly, convert, coefficient_slices,
    extract_coefficients, evaluate_at_point, evaluate_partial, to_sympy, from_sympy,
)
from .rational import (
    RationalFunction, unpack_fraction, exact_divide, simplify_fraction, simplify, eval_at_dict,
)
from .substitution import make_substitution
