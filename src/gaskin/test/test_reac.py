"""Test gaskin.data.reac functions."""

import pytest

from gaskin import InvalidRateError, data
from gaskin.data.rate import RateType

ARRHENIUS = {"k": (1e10, 0.0, 0.0)}
FALLOFF = {"k": (1e10, 0.0, 0.0), "k0": (1e12, 0.0, 0.0), "type_": "Falloff"}


@pytest.mark.parametrize(
    "eq, rate_, rcts, prds, coll_dct, type_, is_rev",
    [
        (
            "H + O2 = O + OH",
            ARRHENIUS,
            ("H", "O2"),
            ("O", "OH"),
            None,
            "Constant",
            True,
        ),
        (
            "H + OH => H2O",
            ARRHENIUS,
            ("H", "OH"),
            ("H2O",),
            None,
            "Constant",
            False,
        ),
        (
            "2 O + M <=> O2 + M",
            ARRHENIUS,
            ("O", "O"),
            ("O2",),
            {"M": 1.0},
            "ThirdBody",
            True,
        ),
        (
            "H + O2 (+M) = HO2 (+M)",
            FALLOFF,
            ("H", "O2"),
            ("HO2",),
            {"M": 1.0},
            "Falloff",
            True,
        ),
        (
            "H + O2 (+AR) = HO2 (+AR)",
            FALLOFF,
            ("H", "O2"),
            ("HO2",),
            {"M": 0.0, "AR": 1.0},
            "Falloff",
            True,
        ),
    ],
)
def test__from_equation(eq, rate_, rcts, prds, coll_dct, type_, is_rev):
    """Test gaskin.data.reac.from_equation."""
    rxn = data.reac.from_equation(eq, rate_)
    assert data.reac.reactants(rxn) == rcts, f"{data.reac.reactants(rxn)} != {rcts}"
    assert data.reac.products(rxn) == prds, f"{data.reac.products(rxn)} != {prds}"
    assert data.reac.colliders(rxn) == coll_dct, f"{rxn.colliders} != {coll_dct}"
    assert data.reac.rate_type(rxn) == type_, f"{data.reac.rate_type(rxn)} != {type_}"
    assert data.reac.is_reversible(rxn) == is_rev


@pytest.mark.parametrize(
    "eq, coll_dct, default, effs",
    [
        ("O + O + M = O2 + M", {"AR": 0.5, "H2O": 5.0}, 1.0, {"AR": 0.5, "H2O": 5.0}),
        ("O + O + M = O2 + M", {"M": 2.0}, 2.0, {}),
        ("H + O2 (+AR) = HO2 (+AR)", None, 0.0, {"AR": 1.0}),
    ],
)
def test__efficiencies(eq, coll_dct, default, effs):
    """Test gaskin.data.reac.default_efficiency and efficiencies."""
    rate_ = FALLOFF if "(+" in eq else ARRHENIUS
    rxn = data.reac.from_equation(eq, rate_, coll_dct=coll_dct)
    default_ = data.reac.default_efficiency(rxn)
    effs_ = data.reac.efficiencies(rxn)
    assert default_ == default, f"{default_} != {default}"
    assert effs_ == effs, f"{effs_} != {effs}"


@pytest.mark.parametrize(
    "rate_, coll_dct, default, effs",
    [
        ({**ARRHENIUS, "type_": "ThirdBody"}, {"AR": 5.0}, 1.0, {"AR": 5.0}),
        (FALLOFF, {"H2O": 12.0}, 1.0, {"H2O": 12.0}),
        (FALLOFF, {"M": 0.0, "AR": 1.0}, 0.0, {"AR": 1.0}),
        (ARRHENIUS, None, 0.0, {}),
    ],
)
def test__efficiencies_from_data(rate_, coll_dct, default, effs):
    """Test gaskin.data.reac.default_efficiency for reactions built from data."""
    rxn = data.reac.from_data(("O", "O"), ("O2",), rate_, coll_dct=coll_dct)
    default_ = data.reac.default_efficiency(rxn)
    effs_ = data.reac.efficiencies(rxn)
    assert default_ == default, f"{default_} != {default}"
    assert effs_ == effs, f"{effs_} != {effs}"


def test__stoichiometry():
    """Test reactant and product stoichiometry."""
    rxn = data.reac.from_equation("2 H + O2 = H2O + O", ARRHENIUS)
    rct_dct = data.reac.reactant_stoichiometry(rxn)
    prd_dct = data.reac.product_stoichiometry(rxn)
    assert rct_dct == {"H": 2, "O2": 1}, f"{rct_dct}"
    assert prd_dct == {"H2O": 1, "O": 1}, f"{prd_dct}"
    assert data.reac.net_mole_change(rxn) == -1
    assert data.reac.species(rxn) == ("H", "O2", "H2O", "O")


@pytest.mark.parametrize(
    "eq, rate_, ref_eq",
    [
        ("H+O2=O+OH", ARRHENIUS, "H + O2 = O + OH"),
        ("O + O + M => O2 + M", ARRHENIUS, "O + O + M => O2 + M"),
        ("H + O2 (+M) = HO2 (+M)", FALLOFF, "H + O2 (+M) = HO2 (+M)"),
        ("H + O2 (+AR) = HO2 (+AR)", FALLOFF, "H + O2 (+AR) = HO2 (+AR)"),
    ],
)
def test__equation(eq, rate_, ref_eq):
    """Test gaskin.data.reac.equation."""
    eq_ = data.reac.equation(data.reac.from_equation(eq, rate_))
    assert eq_ == ref_eq, f"{eq_} != {ref_eq}"


def test__set_rate():
    """Test that setting a collider-free rate drops the colliders."""
    rxn = data.reac.from_equation("O + O + M = O2 + M", ARRHENIUS, {"AR": 0.5})
    rxn = data.reac.set_rate(rxn, data.rate.from_data(k=(1.0, 0.0, 0.0)))
    assert data.reac.rate_type(rxn) == RateType.CONSTANT
    assert data.reac.colliders(rxn) is None, f"{data.reac.colliders(rxn)}"

    rxn = data.reac.set_rate(rxn, data.rate.from_data(**FALLOFF))
    assert data.reac.colliders(rxn) == {"M": 1.0}, f"{data.reac.colliders(rxn)}"


@pytest.mark.parametrize(
    "eq, coll_dct",
    [
        ("O + O + M = O2 + M", {"AR": -1.0}),
        ("H + O2 (+M) = HO2", None),
    ],
)
def test__invalid_reaction(eq, coll_dct):
    """Test that invalid reactions are rejected."""
    with pytest.raises(InvalidRateError):
        data.reac.from_equation(eq, ARRHENIUS, coll_dct=coll_dct)


if __name__ == "__main__":
    test__stoichiometry()
    test__equation("O + O + M => O2 + M", ARRHENIUS, "O + O + M => O2 + M")
