"""polycert: polynomial algebra with randomized certificates.

Ring conversion, rational-function simplification and evaluation,
substitution, certified factorization and Monte Carlo primality checks for
zero-dimensional ideals, on top of SymPy's sparse polynomial rings.
"""

from .config import Config
from .errors import (
    PolyCertError, VariableNotFound, ValueNotRepresentable, DivisionByZero,
    NoGoodEvaluationPoint, InternalInconsistency, NotZeroDimensional,
)
from .timings import Timings
from .retry import retry_until
from .core import (
    CoefficientField, RationalField, PrimeField, field_of,
    polynomial_ring, ring_names, var_to_str, str_to_var, switch_ring, variables_of,
    degree_in, dict_to_poly, convert, coefficient_slices, extract_coefficients,
    evaluate_partial, RationalFunction, unpack_fraction, simplify_fraction, simplify,
    eval_at_dict, make_substitution,
)
from .algorithms import (
    is_irreducible, uncertain_factorization, factor_via_external_engine, fast_factor,
    check_primality_zerodim, check_primality,
)

__version__ = "0.1.0"
