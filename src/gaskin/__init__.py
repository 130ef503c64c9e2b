"""Rate-constant evaluation for gas-phase chemical kinetics."""

from . import const, data, error, kin
from .error import (
    EvaluationError,
    InvalidRateError,
    KineticsError,
    PreconditionError,
)
from .kin import GasKinetics, KineticsOptions

__all__ = [
    "const",
    "data",
    "error",
    "kin",
    "EvaluationError",
    "InvalidRateError",
    "KineticsError",
    "PreconditionError",
    "GasKinetics",
    "KineticsOptions",
]
