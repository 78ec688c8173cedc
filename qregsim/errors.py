# qregsim/errors.py
"""Errors raised by the engine, the gate catalog and the measurement unit.

Every error is raised before the register is touched, so the caller's
State is still valid after any of them.
"""


class QregsimError(Exception):
    """Base class for every error raised by qregsim."""


class InvalidArity(QregsimError, ValueError):
    """Operand count does not match the gate's arity."""


class OperandOutOfRange(QregsimError, ValueError):
    """Qubit index is negative or >= the register's qubit count."""


class DuplicateOperand(QregsimError, ValueError):
    """The same qubit appears twice in an operand list."""


class DimensionMismatch(QregsimError, ValueError):
    """Shapes do not line up (matrix product, register length, gate matrix)."""


class UnsupportedGate(QregsimError, NotImplementedError):
    """The gate kind exists but has no matrix in the catalog."""


class NumericalDegeneracy(QregsimError, ArithmeticError):
    """A norm is numerically zero, or an amplitude is not finite."""
