"""Test gaskin.kin.falloff functions."""

import numpy
import pytest

from gaskin import InvalidRateError, data
from gaskin.kin import FalloffManager

RATES = [
    data.rate.from_data(k=(1e6, 0.0, 0.0), k0=(2e8, 0.0, 0.0), type_="Falloff"),
    data.rate.from_data(
        k=(7.4e10, -0.37, 0.0),
        k0=(2.3e12, -0.9, -7.1e6),
        f=("Troe", [0.7346, 94.0, 1756.0, 5182.0]),
        type_="Falloff",
    ),
    data.rate.from_data(
        k=(1.2e11, 0.0, 1e7),
        k0=(4.0e15, -1.5, 0.0),
        f=("SRI", [1.1, 400.0, 800.0]),
        type_="Falloff",
    ),
    data.rate.from_data(
        k=(5e9, 0.2, 4e6),
        k0=(1e13, -1.0, 2e6),
        f=("Troe", [0.5, 0.0, 800.0]),
        type_="Activated",
    ),
]


@pytest.mark.parametrize("t", [300.0, 1000.0, 2500.0])
@pytest.mark.parametrize("concm", [0.0, 1e-4, 0.04, 10.0])
def test__update(t, concm):
    """Test gaskin.kin.falloff.FalloffManager against single-rate evaluation."""
    falloff = FalloffManager()
    for index, rate in enumerate(RATES):
        falloff.add_member(index * 2, rate)

    falloff.update_for_temperature(t)
    falloff.update_for_concentrations(numpy.full(len(RATES), concm))
    vals = falloff.values
    ref_vals = [data.rate.falloff_value(rate, t, concm) for rate in RATES]
    assert numpy.allclose(vals, ref_vals, rtol=1e-10), f"{vals} != {ref_vals}"

    out = numpy.full(2 * len(RATES), -1.0)
    falloff.write_rate_constants(out)
    assert numpy.allclose(out[::2], ref_vals), f"{out} != {ref_vals}"
    assert numpy.all(out[1::2] == -1.0), f"{out}"


def test__lindemann_half():
    """Test a Lindemann falloff rate at a reduced pressure of one."""
    falloff = FalloffManager()
    falloff.add_member(0, RATES[0])
    falloff.update_for_temperature(1000.0)
    falloff.update_for_concentrations(numpy.array([1e6 / 2e8]))
    pr = falloff.reduced_pressures
    val = falloff.values[0]
    assert numpy.allclose(pr, [1.0]), f"{pr} != [1.0]"
    assert numpy.isclose(val, 5e5), f"{val} != 5e5"


def test__not_falloff():
    """Test that non-falloff rates are rejected."""
    falloff = FalloffManager()
    with pytest.raises(InvalidRateError):
        falloff.add_member(0, data.rate.from_data(k=(1.0, 0.0, 0.0)))
    assert len(falloff) == 0


if __name__ == "__main__":
    test__update(1000.0, 0.04)
