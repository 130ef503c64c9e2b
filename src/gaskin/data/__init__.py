"""Dataclasses for storing kinetic and thermodynamic information."""

from . import rate, reac, thermo
from .rate import (
    ArrheniusFunction,
    BlendingFunction,
    BlendType,
    BlowersMaselRate,
    ChebRate,
    PlogRate,
    Rate,
    RateType,
    SimpleRate,
)
from .reac import Reaction
from .thermo import Nasa7Thermo, Thermo

__all__ = [
    "rate",
    "reac",
    "thermo",
    "ArrheniusFunction",
    "BlendingFunction",
    "BlendType",
    "BlowersMaselRate",
    "ChebRate",
    "PlogRate",
    "Rate",
    "RateType",
    "SimpleRate",
    "Reaction",
    "Nasa7Thermo",
    "Thermo",
]
