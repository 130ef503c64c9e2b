"""Test gaskin.kin.cache functions."""

import numpy

from gaskin.kin import StateCache


def test__transitions():
    """Test the two-flag cache transitions."""
    cache = StateCache()
    conc = numpy.array([1.0, 2.0])
    assert cache.temperature_changed(300.0)
    assert cache.pressure_changed(1e5)
    assert cache.state_changed(300.0, 1e5, conc)

    # Temperature stage
    cache.commit_temperature(300.0)
    cache.commit_pressure(1e5)
    assert cache.valid_t and not cache.valid_tc
    assert not cache.temperature_changed(300.0)
    assert not cache.pressure_changed(1e5)
    assert cache.pressure_changed(2e5)
    assert cache.state_changed(300.0, 1e5, conc)

    # Concentration stage
    cache.commit_state(conc)
    assert cache.valid_tc
    assert not cache.state_changed(300.0, 1e5, conc)
    assert cache.state_changed(300.0, 1e5, conc * 2.0)

    # The cache owns a copy of the concentrations
    conc[0] = 5.0
    assert cache.state_changed(300.0, 1e5, conc)

    # A new temperature clears the concentration flag
    cache.commit_temperature(400.0)
    assert cache.valid_t and not cache.valid_tc

    # The same temperature does not
    cache.commit_state(conc)
    cache.commit_temperature(400.0)
    assert cache.valid_tc

    # A new pressure does
    cache.commit_pressure(2e5)
    assert not cache.valid_tc


def test__invalidate():
    """Test gaskin.kin.cache.StateCache.invalidate."""
    cache = StateCache()
    conc = numpy.array([1.0])
    cache.commit_temperature(300.0)
    cache.commit_pressure(1e5)
    cache.commit_state(conc)
    cache.invalidate()
    assert not cache.valid_t and not cache.valid_tc
    assert cache.temperature_changed(300.0)
    assert cache.pressure_changed(1e5)
    assert cache.state_changed(300.0, 1e5, conc)


def test__invalidate_concentrations():
    """Test gaskin.kin.cache.StateCache.invalidate_concentrations."""
    cache = StateCache()
    conc = numpy.array([1.0])
    cache.commit_temperature(300.0)
    cache.commit_pressure(1e5)
    cache.commit_state(conc)
    cache.invalidate_concentrations()
    assert cache.valid_t and not cache.valid_tc
    assert not cache.temperature_changed(300.0)
    assert cache.state_changed(300.0, 1e5, conc)


if __name__ == "__main__":
    test__transitions()
