from .factorization import is_irreducible, uncertain_factorization, factor_via_external_engine, fast_factor
from .primality import standard_monomials, multiplication_matrices, check_primality_zerodim, check_primality
