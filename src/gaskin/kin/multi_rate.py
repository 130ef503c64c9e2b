"""Grouped rate evaluators, one per rate-law family.

Each group holds only the reactions of its kind, in a stable slot order, and
evaluates all of them in one vectorised pass.
"""

import abc
import logging

import numpy
from numpy.polynomial import chebyshev

from ..data import rate as rt_
from ..data.rate import ArrheniusFunction, Rate, RateType
from ..error import EvaluationError, InvalidRateError, PreconditionError

logger = logging.getLogger(__name__)


class MultiRate(abc.ABC):
    """Base class for grouped rate evaluators.

    Members are appended with `add_member()`; parameter arrays are rebuilt lazily on
    the next update.
    """

    rate_types: tuple[RateType, ...] = ()

    def __init__(self):
        self._indices: list[int] = []
        self._rates: list = []
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
        """The rate constant of each slot, as of the last update."""
        return self._values

    def add_member(self, index: int, rate: Rate | ArrheniusFunction):
        """Append a reaction to the group.

        :param index: The reaction index
        :param rate: The reaction's rate
        """
        if not self.accepts(rate):
            raise InvalidRateError(
                f"{type(self).__name__} cannot evaluate {type(rate).__name__}"
            )
        self._indices.append(index)
        self._rates.append(rate)
        self._compiled = False

    def accepts(self, rate: Rate | ArrheniusFunction) -> bool:
        """Whether a rate belongs in this group."""
        return isinstance(rate, Rate) and rt_.type_(rate) in self.rate_types

    def ensure_compiled(self):
        """Rebuild the parameter arrays, if members were added."""
        if not self._compiled:
            self._values = numpy.zeros(len(self))
            self._compile()
            self._compiled = True

    @abc.abstractmethod
    def _compile(self):
        pass

    @abc.abstractmethod
    def update_for_temperature(self, t: float):
        """Update the rate constants for a new temperature.

        :param t: Temperature [K]
        """
        pass

    def update_for_pressure(self, p: float):
        """Update the rate constants for a new pressure (pressure-independent here).

        :param p: Pressure [Pa]
        """
        pass

    def write_rate_constants(self, out: numpy.ndarray):
        """Scatter the rate constants into a per-reaction array.

        :param out: The array, indexed by reaction
        """
        if len(self):
            out[self._indices] = self._values


def arrhenius_arrays(ks: list[ArrheniusFunction]) -> tuple[numpy.ndarray, ...]:
    """Collect Arrhenius parameters into arrays.

    :param ks: The Arrhenius functions
    :return: The A, b, E, B, and C arrays (absent Landau-Teller factors are zero)
    """
    params = [
        (k.A, k.b, k.E, 0.0 if k.B is None else k.B, 0.0 if k.C is None else k.C)
        for k in ks
    ]
    if not params:
        return (numpy.zeros(0),) * 5

    return tuple(numpy.array(p, dtype=float) for p in zip(*params, strict=True))


class ArrheniusRates(MultiRate):
    """Arrhenius and three-body Arrhenius rates (without the [M] factor).

    Also accepts bare Arrhenius functions, for falloff limits.
    """

    rate_types = (RateType.CONSTANT, RateType.THIRD_BODY)

    def accepts(self, rate: Rate | ArrheniusFunction) -> bool:
        """Whether a rate belongs in this group."""
        return isinstance(rate, ArrheniusFunction) or super().accepts(rate)

    def _compile(self):
        ks = [
            k if isinstance(k, ArrheniusFunction) else rt_.high_p_arrhenius_function(k)
            for k in self._rates
        ]
        self._params = arrhenius_arrays(ks)

    def update_for_temperature(self, t: float):
        """Update the rate constants for a new temperature.

        :param t: Temperature [K]
        """
        self.ensure_compiled()
        self._values = rt_.arrhenius_expression(t, *self._params)


class BlowersMaselRates(MultiRate):
    """Blowers-Masel rates, whose barriers depend on the enthalpy of reaction."""

    rate_types = (RateType.BLOWERS_MASEL,)

    def _compile(self):
        self._params = arrhenius_arrays([r.k for r in self._rates])
        self._w = numpy.array([r.w for r in self._rates], dtype=float)

    def update_for_temperature(self, t: float, dh: numpy.ndarray | None = None):
        """Update the rate constants for a new temperature.

        :param t: Temperature [K]
        :param dh: The enthalpy of reaction [J/kmol] of each slot
        """
        self.ensure_compiled()
        if not len(self):
            return

        if dh is None or numpy.shape(dh) != (len(self),):
            raise PreconditionError(f"Need one enthalpy per Blowers-Masel slot: {dh}")

        a, b, e0, lt_b, lt_c = self._params
        ea = rt_.blowers_masel_activation_energy(e0, self._w, dh)
        self._values = rt_.arrhenius_expression(t, a, b, ea, lt_b, lt_c)


class PlogRates(MultiRate):
    """Pressure-logarithmic interpolation rates.

    The temperature stage evaluates every node; the pressure stage locates the
    bracketing nodes. Either stage re-interpolates once both have run.
    """

    rate_types = (RateType.PLOG,)

    def _compile(self):
        ks = []
        node_ids = []
        self._log_ps = []
        self._offsets = []
        nnodes = 0
        for rate in self._rates:
            node_dct = rt_.plog_nodes(rate)
            self._offsets.append(nnodes)
            self._log_ps.append(numpy.log(list(node_dct)))
            for node_ks in node_dct.values():
                ks.extend(node_ks)
                node_ids.extend([nnodes] * len(node_ks))
                nnodes += 1

        self._params = arrhenius_arrays(ks)
        self._node_ids = numpy.array(node_ids, dtype=int)
        self._nnodes = nnodes
        self._log_k_nodes = None
        self._brackets = None

    def update_for_temperature(self, t: float):
        """Update the rate constants for a new temperature.

        :param t: Temperature [K]
        """
        self.ensure_compiled()
        k_exprs = rt_.arrhenius_expression(t, *self._params)
        k_nodes = numpy.bincount(
            self._node_ids, weights=k_exprs, minlength=self._nnodes
        )
        if numpy.any(k_nodes <= 0.0):
            nodes = numpy.flatnonzero(k_nodes <= 0.0)
            bad = sorted({self._indices[self._member(n)] for n in nodes})
            raise EvaluationError(
                f"Non-positive sum of P-Log Arrhenius expressions at T={t} for "
                f"reactions {bad}"
            )
        self._log_k_nodes = numpy.log(k_nodes)
        self._interpolate()

    def update_for_pressure(self, p: float):
        """Locate the bracketing nodes for a new pressure.

        Pressures outside a reaction's table are clamped to its end nodes.

        :param p: Pressure [Pa]
        """
        self.ensure_compiled()
        log_p = numpy.log(p)
        brackets = []
        for index, offset, log_ps in zip(
            self._indices, self._offsets, self._log_ps, strict=True
        ):
            if not log_ps[0] <= log_p <= log_ps[-1]:
                logger.debug("P-Log reaction %d clamped at P=%g Pa", index, p)
            lo, hi, weight = rt_.plog_interpolation(log_ps, log_p)
            brackets.append((offset + lo, offset + hi, weight))

        self._brackets = tuple(
            numpy.array(x) for x in zip(*brackets, strict=True)
        ) or (numpy.zeros(0, dtype=int), numpy.zeros(0, dtype=int), numpy.zeros(0))
        self._interpolate()

    def _member(self, node: int) -> int:
        return int(numpy.searchsorted(self._offsets, node, side="right")) - 1

    def _interpolate(self):
        if self._log_k_nodes is None or self._brackets is None:
            return

        lo, hi, weight = self._brackets
        log_k_lo = self._log_k_nodes[lo]
        log_k_hi = self._log_k_nodes[hi]
        self._values = numpy.exp(log_k_lo + weight * (log_k_hi - log_k_lo))


class ChebyshevRates(MultiRate):
    """Chebyshev polynomial rates.

    Coefficient matrices are zero-padded to a common shape. The pressure stage
    contracts them with the pressure polynomials; the temperature stage finishes the
    sum. Reduced variables are clamped to [-1, 1].
    """

    rate_types = (RateType.CHEB,)

    def _compile(self):
        nt = max((r.coeffs.shape[0] for r in self._rates), default=1)
        np_ = max((r.coeffs.shape[1] for r in self._rates), default=1)
        self._coeffs = numpy.zeros((len(self), nt, np_))
        for slot, rate in enumerate(self._rates):
            mt, mp = rate.coeffs.shape
            self._coeffs[slot, :mt, :mp] = rate.coeffs

        t_limits = numpy.array([r.t_limits for r in self._rates]).reshape(-1, 2)
        p_limits = numpy.array([r.p_limits for r in self._rates]).reshape(-1, 2)
        self._rtmin, self._rtmax = (1.0 / t_limits).T
        self._log_pmin, self._log_pmax = numpy.log10(p_limits).T
        self._t_polys = None
        self._p_dot = None

    def update_for_temperature(self, t: float):
        """Update the rate constants for a new temperature.

        :param t: Temperature [K]
        """
        self.ensure_compiled()
        tr = (2.0 / t - self._rtmin - self._rtmax) / (self._rtmax - self._rtmin)
        self._log_clamped(tr, "T", t)
        tr = numpy.clip(tr, -1.0, 1.0)
        self._t_polys = chebyshev.chebvander(tr, self._coeffs.shape[1] - 1)
        self._evaluate()

    def update_for_pressure(self, p: float):
        """Update the pressure-dependent contraction for a new pressure.

        :param p: Pressure [Pa]
        """
        self.ensure_compiled()
        pr = (2.0 * numpy.log10(p) - self._log_pmin - self._log_pmax) / (
            self._log_pmax - self._log_pmin
        )
        self._log_clamped(pr, "P", p)
        pr = numpy.clip(pr, -1.0, 1.0)
        p_polys = chebyshev.chebvander(pr, self._coeffs.shape[2] - 1)
        self._p_dot = numpy.einsum("itp,ip->it", self._coeffs, p_polys)
        self._evaluate()

    def _log_clamped(self, reduced: numpy.ndarray, name: str, value: float):
        clamped = numpy.flatnonzero(numpy.abs(reduced) > 1.0)
        if clamped.size:
            logger.debug(
                "Chebyshev reactions %s clamped at %s=%g",
                [self._indices[i] for i in clamped],
                name,
                value,
            )

    def _evaluate(self):
        if self._t_polys is None or self._p_dot is None:
            return

        log10_k = numpy.sum(self._t_polys * self._p_dot, axis=1)
        self._values = numpy.power(10.0, log10_k)

