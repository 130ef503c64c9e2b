"""Staleness tracking for the rate-update stages."""

import dataclasses

import numpy


@dataclasses.dataclass
class StateCache:
    """The state at which rates were last evaluated.

    Two validity flags drive recomputation: `valid_t` covers the temperature stage,
    `valid_tc` the concentration stage. Committing a new temperature clears
    `valid_tc`, since blended rates depend on the temperature-stage limits.

    :param temperature: The last temperature [K]
    :param pressure: The last pressure [Pa]
    :param concentrations: The last concentrations [kmol/m^3]
    :param valid_t: Whether temperature-dependent quantities are current
    :param valid_tc: Whether concentration-dependent quantities are current
    """

    temperature: float = numpy.nan
    pressure: float = numpy.nan
    concentrations: numpy.ndarray | None = None
    valid_t: bool = False
    valid_tc: bool = False

    def temperature_changed(self, t: float) -> bool:
        """Whether the temperature stage must be recomputed."""
        return not self.valid_t or t != self.temperature

    def pressure_changed(self, p: float) -> bool:
        """Whether pressure-dependent rates must be recomputed."""
        return not self.valid_t or p != self.pressure

    def state_changed(self, t: float, p: float, conc: numpy.ndarray) -> bool:
        """Whether the concentration stage must be recomputed."""
        if not self.valid_tc or t != self.temperature or p != self.pressure:
            return True

        return self.concentrations is None or not numpy.array_equal(
            conc, self.concentrations
        )

    def commit_temperature(self, t: float):
        """Record a completed temperature-stage update."""
        if t != self.temperature:
            self.valid_tc = False
        self.temperature = t
        self.valid_t = True

    def commit_pressure(self, p: float):
        """Record a completed update of pressure-dependent rates."""
        if p != self.pressure:
            self.valid_tc = False
        self.pressure = p

    def commit_state(self, conc: numpy.ndarray):
        """Record a completed concentration-stage update.

        The temperature and pressure are the ones committed by the temperature stage.
        """
        self.concentrations = numpy.array(conc, dtype=float)
        self.valid_tc = True

    def invalidate_concentrations(self):
        """Force recomputation of the concentration stage only."""
        self.valid_tc = False

    def invalidate(self):
        """Force full recomputation at the next update."""
        self.valid_t = False
        self.valid_tc = False
