"""Falloff and chemically activated rates."""

import numpy

from ..const import SMALL_NUMBER
from ..data import rate as rt_
from ..data.rate import BlendType, Rate, RateType, SimpleRate
from ..error import InvalidRateError
from .multi_rate import ArrheniusRates


class FalloffManager:
    """Pressure-dependent blending of low- and high-pressure limit rates.

    The temperature stage evaluates both limits and the temperature-only part of
    each blending function. The concentration stage forms the reduced pressure,
    P_r = k0 [M] / k_inf, and blends:

        falloff:    k = k_inf * P_r / (1 + P_r) * F(T, P_r)
        activated:  k = k0 / (1 + P_r) * F(T, P_r)
    """

    def __init__(self):
        self._indices: list[int] = []
        self._activated: list[bool] = []
        self._troe: list[tuple[int, list[float]]] = []
        self._sri: list[tuple[int, list[float]]] = []
        self.low = ArrheniusRates()
        self.high = ArrheniusRates()
        self._values = numpy.zeros(0)
        self._compiled = False

    def __len__(self) -> int:
        return len(self._indices)

    @property
    def indices(self) -> numpy.ndarray:
        """The reaction index of each slot."""
        return numpy.array(self._indices, dtype=int)

    @property
    def values(self) -> numpy.ndarray:
        """The blended rate constant of each slot, as of the last update."""
        return self._values

    @property
    def reduced_pressures(self) -> numpy.ndarray:
        """The reduced pressure of each slot, as of the last update."""
        return self._pr

    def add_member(self, index: int, rate: Rate):
        """Append a falloff or chemically activated reaction.

        :param index: The reaction index
        :param rate: The reaction's rate
        """
        if not isinstance(rate, SimpleRate) or not rt_.is_falloff(rate):
            raise InvalidRateError(f"Not a falloff rate: {rate}")

        slot = len(self)
        self._indices.append(index)
        self._activated.append(rt_.type_(rate) == RateType.ACTIVATED)
        self.low.add_member(slot, rate.k0)
        self.high.add_member(slot, rate.k)

        f = rt_.blend_function(rate)
        if rt_.f_type(f) == BlendType.TROE:
            self._troe.append((slot, rt_.f_coeffs(f)))
        if rt_.f_type(f) == BlendType.SRI:
            self._sri.append((slot, rt_.f_coeffs(f)))
        self._compiled = False

    def _compile(self):
        self._activated_mask = numpy.array(self._activated, dtype=bool)

        troe_slots, troe_coeffs = (
            zip(*self._troe, strict=True) if self._troe else ((), ())
        )
        troe = [(*c, numpy.inf)[:4] for c in troe_coeffs]
        a, t3, t1, t2 = numpy.array(troe, dtype=float).reshape(-1, 4).T
        self._troe_slots = numpy.array(troe_slots, dtype=int)
        self._troe_params = (
            a, rt_.reciprocal_or_inf(t3), rt_.reciprocal_or_inf(t1), t2
        )

        sri_slots, sri_coeffs = zip(*self._sri, strict=True) if self._sri else ((), ())
        sri = [(*c, 1.0, 0.0)[:5] for c in sri_coeffs]
        self._sri_slots = numpy.array(sri_slots, dtype=int)
        self._sri_params = numpy.array(sri, dtype=float).reshape(-1, 5).T

        self._values = numpy.zeros(len(self))
        self._pr = numpy.zeros(len(self))
        self._compiled = True

    def update_for_temperature(self, t: float):
        """Update the limiting rates and blending terms for a new temperature.

        :param t: Temperature [K]
        """
        if not self._compiled:
            self._compile()

        self.low.update_for_temperature(t)
        self.high.update_for_temperature(t)
        self._log10_fcent = rt_.troe_log10_fcent(t, *self._troe_params)
        self._sri_terms = rt_.sri_temperature_terms(t, *self._sri_params)

    def update_for_concentrations(self, concm: numpy.ndarray):
        """Blend the limiting rates for new third-body concentrations.

        :param concm: The effective third-body concentration of each slot [kmol/m^3]
        """
        k0 = self.low.values
        k_inf = self.high.values
        pr = concm * k0 / (k_inf + SMALL_NUMBER)

        f = numpy.ones(len(self))
        f[self._troe_slots] = rt_.troe_value(self._log10_fcent, pr[self._troe_slots])
        f[self._sri_slots] = rt_.sri_value(*self._sri_terms, pr[self._sri_slots])

        self._pr = pr
        self._values = numpy.where(
            self._activated_mask, k0 / (1.0 + pr) * f, k_inf * pr / (1.0 + pr) * f
        )

    def write_rate_constants(self, out: numpy.ndarray):
        """Scatter the rate constants into a per-reaction array.

        :param out: The array, indexed by reaction
        """
        if len(self):
            out[self._indices] = self._values
