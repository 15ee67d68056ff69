"""Central configuration dataclass for polycert.

All tunable knobs of the randomized algorithms live in one frozen dataclass
so that a run is reproducible from a single object.  Every public algorithm
accepts an optional ``config`` and falls back to ``Config()``.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

_MONOMIAL_ORDERS = ("lex", "grlex", "grevlex")


@dataclass(frozen=True)
class Config:
    """Frozen settings for factorization and primality checking.

    Groups:
        Factorization:  factor_eval_low/high, max_evaluation_attempts
        Primality:      primality_coeff_low/high, generic_point_low/high,
                        max_generic_point_attempts, monomial_order
        Randomness:     seed
    """
    # --- Factorization ---
    # Evaluation points for the non-main variables are drawn from
    # [factor_eval_low, factor_eval_high]; small values keep the
    # univariate specialization's coefficients small.
    factor_eval_low: int = 5
    factor_eval_high: int = 10
    # Draws allowed before giving up on a non-vanishing leading coefficient.
    max_evaluation_attempts: int = 1000

    # --- Primality ---
    # Coefficients of the random combination of multiplication matrices.
    primality_coeff_low: int = 1
    primality_coeff_high: int = 100
    # Values substituted for the non-leader variables in check_primality.
    generic_point_low: int = 1
    generic_point_high: int = 100
    max_generic_point_attempts: int = 100
    # Monomial order used for the Groebner basis computation.
    monomial_order: str = "grevlex"

    # --- Randomness ---
    seed: Optional[int] = None  # None -> fresh OS entropy on each make_rng()

    def __post_init__(self):
        for low, high, name in (
            (self.factor_eval_low, self.factor_eval_high, "factor_eval"),
            (self.primality_coeff_low, self.primality_coeff_high, "primality_coeff"),
            (self.generic_point_low, self.generic_point_high, "generic_point"),
        ):
            if low > high:
                raise ValueError(f"{name}_low={low} exceeds {name}_high={high}")
        if self.max_evaluation_attempts < 1:
            raise ValueError("max_evaluation_attempts must be positive")
        if self.max_generic_point_attempts < 1:
            raise ValueError("max_generic_point_attempts must be positive")
        if self.monomial_order not in _MONOMIAL_ORDERS:
            raise ValueError(
                f"Unknown monomial order {self.monomial_order!r}, expected one of {_MONOMIAL_ORDERS}"
            )

    def make_rng(self) -> random.Random:
        """Return a fresh random source seeded with ``seed``."""
        return random.Random(self.seed)
