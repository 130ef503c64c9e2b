"""Thermodynamic property providers consumed by the kinetics engine."""

import abc
import dataclasses
from collections.abc import Mapping, Sequence

import numpy

from ..error import InvalidRateError


class Thermo(abc.ABC):
    """Base class for standard-state thermodynamic property providers."""

    @property
    @abc.abstractmethod
    def species_names(self) -> tuple[str, ...]:
        """The species names, in the order of the property arrays."""
        pass

    @abc.abstractmethod
    def standard_enthalpies_rt(self, t: float) -> numpy.ndarray:
        """Get the standard-state enthalpies, H°/RT, for each species.

        :param t: Temperature [K]
        :return: The dimensionless enthalpies
        """
        pass

    @abc.abstractmethod
    def standard_gibbs_rt(self, t: float) -> numpy.ndarray:
        """Get the standard-state Gibbs energies, G°/RT, for each species.

        :param t: Temperature [K]
        :return: The dimensionless Gibbs energies
        """
        pass


@dataclasses.dataclass
class Nasa7Thermo(Thermo):
    """Two-range, 7-coefficient NASA polynomial thermodynamics.

    :param names: The species names
    :param t_mids: The temperature [K] dividing the ranges, for each species
    :param low_coeffs: Coefficients a1-a7 below the midpoint, one row per species
    :param high_coeffs: Coefficients a1-a7 above the midpoint, one row per species
    """

    names: tuple[str, ...]
    t_mids: numpy.ndarray
    low_coeffs: numpy.ndarray
    high_coeffs: numpy.ndarray

    def __post_init__(self):
        """Initialize attributes."""
        self.names = tuple(map(str, self.names))
        nspc = len(self.names)
        self.t_mids = numpy.array(self.t_mids, dtype=float).reshape(nspc)
        self.low_coeffs = numpy.array(self.low_coeffs, dtype=float).reshape(nspc, 7)
        self.high_coeffs = numpy.array(self.high_coeffs, dtype=float).reshape(nspc, 7)
        if len(set(self.names)) != nspc:
            raise InvalidRateError(f"Duplicate species names: {self.names}")

    @property
    def species_names(self) -> tuple[str, ...]:
        """The species names, in the order of the property arrays."""
        return self.names

    def coefficients(self, t: float) -> numpy.ndarray:
        """Get the polynomial coefficients that apply at a temperature.

        :param t: Temperature [K]
        :return: The coefficients, one row per species
        """
        is_low = (t < self.t_mids)[:, None]
        return numpy.where(is_low, self.low_coeffs, self.high_coeffs)

    def standard_enthalpies_rt(self, t: float) -> numpy.ndarray:
        """Get the standard-state enthalpies, H°/RT, for each species.

        :param t: Temperature [K]
        :return: The dimensionless enthalpies
        """
        a = self.coefficients(t)
        tpow = numpy.array([1.0, t / 2.0, t**2 / 3.0, t**3 / 4.0, t**4 / 5.0])
        return a[:, :5] @ tpow + a[:, 5] / t

    def standard_entropies_r(self, t: float) -> numpy.ndarray:
        """Get the standard-state entropies, S°/R, for each species.

        :param t: Temperature [K]
        :return: The dimensionless entropies
        """
        a = self.coefficients(t)
        tpow = numpy.array([numpy.log(t), t, t**2 / 2.0, t**3 / 3.0, t**4 / 4.0])
        return a[:, :5] @ tpow + a[:, 6]

    def standard_gibbs_rt(self, t: float) -> numpy.ndarray:
        """Get the standard-state Gibbs energies, G°/RT, for each species.

        :param t: Temperature [K]
        :return: The dimensionless Gibbs energies
        """
        return self.standard_enthalpies_rt(t) - self.standard_entropies_r(t)


def nasa7_from_data(
    data: Mapping[str, tuple[float, Sequence[float], Sequence[float]]],
) -> Nasa7Thermo:
    """Build NASA polynomial thermodynamics from data.

    :param data: A mapping of species names onto (T_mid, low coeffs, high coeffs)
    :return: The thermo object
    """
    names = tuple(data)
    t_mids, lows, highs = zip(*data.values(), strict=True) if data else ((), (), ())
    return Nasa7Thermo(
        names=names,
        t_mids=numpy.array(t_mids, dtype=float),
        low_coeffs=numpy.array(lows, dtype=float).reshape(len(names), 7),
        high_coeffs=numpy.array(highs, dtype=float).reshape(len(names), 7),
    )
