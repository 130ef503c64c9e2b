"""Exceptions raised by the kinetics engine."""


class KineticsError(Exception):
    """Base class for kinetics errors."""


class InvalidRateError(KineticsError, ValueError):
    """A rate law or reaction is structurally invalid.

    Raised when a rate or reaction is built, or when it is added to (or
    modified in) a kinetics manager. The manager is left unchanged.
    """


class EvaluationError(KineticsError, ArithmeticError):
    """Rate constants cannot be produced for the requested state."""


class PreconditionError(KineticsError, RuntimeError):
    """The kinetics manager was used in an inconsistent state."""
