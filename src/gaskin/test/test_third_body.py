"""Test gaskin.kin.third_body functions."""

import numpy
import pytest

from gaskin.kin import ThirdBodyCalc


@pytest.mark.parametrize(
    "default, eff_dct, conc, ref_concm",
    [
        (1.0, {0: 5.0}, [2.0, 8.0], 18.0),
        (1.0, {}, [2.0, 8.0], 10.0),
        (0.0, {1: 1.0}, [2.0, 8.0], 8.0),
        (2.0, {0: 0.0, 1: 3.0}, [2.0, 8.0], 24.0),
        (1.0, {0: 5.0}, [0.0, 0.0], 0.0),
    ],
)
def test__update(default, eff_dct, conc, ref_concm):
    """Test gaskin.kin.third_body.ThirdBodyCalc.update."""
    calc = ThirdBodyCalc()
    calc.install(7, default, eff_dct)
    concm = calc.update(numpy.array(conc))
    assert numpy.allclose(concm, [ref_concm]), f"{concm} != {[ref_concm]}"
    assert list(calc.indices) == [7], f"{calc.indices}"


def test__several_members():
    """Test third-body concentrations for several members at once."""
    calc = ThirdBodyCalc()
    calc.install(0, 1.0, {0: 5.0})
    calc.install(3, 1.0, {})
    calc.install(5, 0.0, {1: 2.0, 2: 1.0})
    conc = numpy.array([2.0, 3.0, 5.0])
    concm = calc.update(conc)
    ref_concm = [18.0, 10.0, 11.0]
    assert numpy.allclose(concm, ref_concm), f"{concm} != {ref_concm}"

    # Members added after an update are picked up
    calc.install(6, 1.0, {2: 0.0})
    concm = calc.update(conc, total=20.0)
    ref_concm = [28.0, 20.0, 11.0, 15.0]
    assert numpy.allclose(concm, ref_concm), f"{concm} != {ref_concm}"


if __name__ == "__main__":
    test__update(1.0, {0: 5.0}, [2.0, 8.0], 18.0)
