"""Grouped rate evaluation and the gas-phase kinetics manager."""

from . import cache, equil, falloff, multi_rate, third_body
from .cache import StateCache
from .falloff import FalloffManager
from .gas_kinetics import GasKinetics, RateGroups, RegisteredReaction
from .multi_rate import (
    ArrheniusRates,
    BlowersMaselRates,
    ChebyshevRates,
    MultiRate,
    PlogRates,
)
from .options import KineticsOptions
from .third_body import ThirdBodyCalc

__all__ = [
    "cache",
    "equil",
    "falloff",
    "multi_rate",
    "third_body",
    "StateCache",
    "FalloffManager",
    "GasKinetics",
    "RateGroups",
    "RegisteredReaction",
    "ArrheniusRates",
    "BlowersMaselRates",
    "ChebyshevRates",
    "MultiRate",
    "PlogRates",
    "KineticsOptions",
    "ThirdBodyCalc",
]
