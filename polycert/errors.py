"""Exception hierarchy for polycert.

Every error raised on purpose by the library derives from PolyCertError, and
each kind also derives from the closest built-in exception so that callers
catching ``KeyError`` or ``ZeroDivisionError`` keep working.
"""


class PolyCertError(Exception):
    """Base class for all polycert errors."""


class VariableNotFound(PolyCertError, KeyError):
    """A variable name has no counterpart in the target ring."""

    def __init__(self, variable: str, ring_names=None):
        self.variable = variable
        self.ring_names = tuple(ring_names) if ring_names is not None else None
        if self.ring_names is None:
            message = f"Variable {variable} is not found"
        else:
            message = f"Variable {variable} is not found in ring with variables {list(self.ring_names)}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError.__str__ would wrap the message in quotes
        return self.args[0]


class ValueNotRepresentable(PolyCertError, ValueError):
    """A coefficient cannot be embedded into the target coefficient field."""


class DivisionByZero(PolyCertError, ZeroDivisionError):
    """A denominator vanished (fraction evaluation, substitution, inversion)."""


class NoGoodEvaluationPoint(PolyCertError, RuntimeError):
    """A randomized search for a usable point ran out of attempts."""

    def __init__(self, description: str, attempts: int):
        self.description = description
        self.attempts = attempts
        super().__init__(f"No acceptable {description} found after {attempts} attempts")


class InternalInconsistency(PolyCertError, ArithmeticError):
    """An operation that must be exact was not (logic or precondition violation)."""


class NotZeroDimensional(PolyCertError, ValueError):
    """The ideal handed to the zero-dimensional primality check has infinitely many standard monomials."""
