"""Reaction dataclasses."""

import collections
import dataclasses
import re
from collections.abc import Sequence

import more_itertools as mit
import pyparsing as pp

from ..error import InvalidRateError
from . import rate as rt_
from .rate import Rate, RateType

GENERIC_COLLIDER = "M"


@dataclasses.dataclass
class Reaction:
    """A reaction.

    Stoichiometric coefficients are given by repetition, e.g. ("H", "H") for 2 H.

    :param reactants: Names for the reactants
    :param products: Names for the products
    :param rate: The reaction rate
    :param colliders: Colliders along with their efficiencies, e.g. {"M": 1, "Ar": 1.2};
        the generic collider "M" carries the default efficiency, which is 1 unless
        given (0 for a specific collider, e.g. (+AR))
    """

    reactants: tuple[str, ...]
    products: tuple[str, ...]
    rate: Rate | None = None
    colliders: dict[str, float] | None = None

    def __post_init__(self):
        """Initialize attributes."""
        self.reactants = tuple(map(str, self.reactants))
        self.products = tuple(map(str, self.products))

        if not self.colliders or all(v is None for v in self.colliders.values()):
            self.colliders = None

        if rt_.needs_collider(self.rate):
            self.colliders = {GENERIC_COLLIDER: 1.0, **(self.colliders or {})}

        if self.colliders is not None:
            self.colliders = {
                k: float(v) for k, v in self.colliders.items() if v is not None
            }
            if any(v < 0.0 for v in self.colliders.values()):
                raise InvalidRateError(f"Negative efficiency in {self.colliders}")


# constructors
def from_data(
    rcts: Sequence[str],
    prds: Sequence[str],
    rate_: Rate | dict | None = None,
    coll_dct: dict[str, float] | None = None,
) -> Reaction:
    """Construct a reaction object from data.

    :param rcts: Names for the reactants
    :param prds: Names for the products
    :param rate_: The reaction rate, as an object or as `gaskin.data.rate.from_data()`
        keyword arguments
    :param coll_dct: Colliders along with their efficiencies, e.g. {"M": 1, "Ar": 1.2}
    :return: The reaction object
    """
    rate_ = rt_.from_data(**rate_) if isinstance(rate_, dict) else rate_
    return Reaction(reactants=rcts, products=prds, rate=rate_, colliders=coll_dct)


def from_equation(
    eq: str, rate_: Rate | dict | None = None, coll_dct: dict[str, float] | None = None
) -> Reaction:
    """Construct a reaction object from a CHEMKIN equation.

    A bare collider (e.g. "+ M") turns a constant rate into a third-body rate.
    The arrow sets reversibility when the rate is given as keyword arguments.

    :param eq: The equation
    :param rate_: The reaction rate, defaults to None
    :param coll_dct: Colliders along with their efficiencies, e.g. {"M": 1, "Ar": 1.2}
    :return: The reaction object
    """
    rcts, prds, coll, arrow = read_chemkin_equation(eq, bare_coll=True)
    if isinstance(rate_, dict):
        rate_ = rt_.from_data(**{"is_rev": arrow != "=>", **rate_})

    if coll is not None:
        # A specific collider, e.g. (+AR), leaves other species with no efficiency
        default = 1.0 if coll == GENERIC_COLLIDER else 0.0
        coll_dct = {GENERIC_COLLIDER: default, coll: 1.0, **(coll_dct or {})}
        if rate_ is not None and rt_.type_(rate_) == RateType.CONSTANT:
            rate_ = dataclasses.replace(rate_, type_=RateType.THIRD_BODY)

    return from_data(rcts=rcts, prds=prds, rate_=rate_, coll_dct=coll_dct)


# getters
def reactants(rxn: Reaction) -> tuple[str, ...]:
    """Get the list of reactants.

    :param rxn: A reaction object
    :return: The names of the reactants
    """
    return rxn.reactants


def products(rxn: Reaction) -> tuple[str, ...]:
    """Get the list of products.

    :param rxn: A reaction object
    :return: The names of the products
    """
    return rxn.products


def rate(rxn: Reaction) -> Rate:
    """Get the rate constant.

    :param rxn: A reaction object
    :return: The rate object
    """
    return rxn.rate


def colliders(rxn: Reaction) -> dict[str, float] | None:
    """Get the colliders, if there are any.

    :param rxn: A reaction object
    :return: A dictionary mapping collider names onto efficiencies
    """
    return rxn.colliders


# setters
def set_rate(rxn: Reaction, rate_: Rate) -> Reaction:
    """Set the rate constant.

    Colliders are dropped if the new rate does not use them.

    :param rxn: A reaction object
    :param rate_: The rate object
    :return: The new reaction object
    """
    coll_dct = colliders(rxn) if rt_.needs_collider(rate_) else None
    return from_data(
        rcts=reactants(rxn), prds=products(rxn), rate_=rate_, coll_dct=coll_dct
    )


# properties
def species(rxn: Reaction) -> tuple[str, ...]:
    """Get the species that are involved in the reaction.

    :param rxn: A reaction object
    :return: The list of species
    """
    return tuple(mit.unique_everseen(reactants(rxn) + products(rxn)))


def reactant_stoichiometry(rxn: Reaction) -> dict[str, int]:
    """Get the stoichiometric coefficients of the reactants.

    :param rxn: A reaction object
    :return: A dictionary mapping species names onto coefficients
    """
    return dict(collections.Counter(reactants(rxn)))


def product_stoichiometry(rxn: Reaction) -> dict[str, int]:
    """Get the stoichiometric coefficients of the products.

    :param rxn: A reaction object
    :return: A dictionary mapping species names onto coefficients
    """
    return dict(collections.Counter(products(rxn)))


def net_mole_change(rxn: Reaction) -> int:
    """Get the net change in moles of gas-phase species.

    :param rxn: A reaction object
    :return: The number of product molecules minus reactant molecules
    """
    return len(products(rxn)) - len(reactants(rxn))


def rate_type(rxn: Reaction) -> RateType:
    """Get the rate type for a reaction object.

    :param rxn: A reaction object
    :return: The rate type
    """
    return rt_.type_(rate(rxn))


def is_reversible(rxn: Reaction) -> bool:
    """Whether this is a reversible reaction.

    :param rxn: A reaction object
    :return: `True` if it is, `False` if it isn't
    """
    return rt_.is_reversible(rate(rxn))


def is_falloff(rxn: Reaction) -> bool:
    """Whether this is a falloff reaction.

    :param rxn: A reaction object
    :return: `True` if it is, `False` if it isn't
    """
    return rt_.is_falloff(rate(rxn))


def default_efficiency(rxn: Reaction) -> float:
    """Get the third-body efficiency of species without an explicit one.

    Collider-dependent rates default to 1; a reaction with a specific collider,
    e.g. (+AR), has a default efficiency of 0.

    :param rxn: A reaction object
    :return: The default efficiency
    """
    coll_dct = colliders(rxn)
    if coll_dct is None:
        return 0.0

    return coll_dct.get(GENERIC_COLLIDER, 0.0)


def efficiencies(rxn: Reaction) -> dict[str, float]:
    """Get the explicit third-body efficiencies, excluding the generic collider.

    :param rxn: A reaction object
    :return: A dictionary mapping species names onto efficiencies
    """
    coll_dct = colliders(rxn) or {}
    return {k: v for k, v in coll_dct.items() if k != GENERIC_COLLIDER}


def primary_collider(rxn: Reaction) -> str | None:
    """Get the primary collider, if there is one.

    This is the collider that would appear in the chemical equation.

    :param rxn: A reaction object
    :return: The primary collider
    """
    coll_dct = colliders(rxn)

    if coll_dct is None:
        return None

    if coll_dct.get(GENERIC_COLLIDER, 0.0) > 0.0:
        return GENERIC_COLLIDER

    return next((k for k, v in sorted(coll_dct.items()) if v == 1.0), None)


def equation(rxn: Reaction) -> str:
    """Get the CHEMKIN equation of a reaction (includes collider term).

    :param rxn: A reaction object
    :return: The reaction CHEMKIN equation
    """
    coll = primary_collider(rxn)
    if coll is not None and is_falloff(rxn):
        coll = f"(+{coll})"

    arrow = "=" if rate(rxn) is None or is_reversible(rxn) else "=>"
    return write_chemkin_equation(reactants(rxn), products(rxn), coll=coll, arrow=arrow)


# Chemkin equation helpers
ARROW = pp.Literal("<=>") | pp.Literal("=>") | pp.Literal("=")
FALLOFF = pp.Combine(
    pp.Literal("(") + pp.Literal("+") + pp.Word(pp.alphanums) + pp.Literal(")"),
    adjacent=False,
)
BARE_COLLIDERS = ("M", "He", "HE", "Ne", "NE", "Ar", "AR")


def write_chemkin_equation(
    rcts: Sequence[str],
    prds: Sequence[str],
    coll: str | None = None,
    arrow: str = "=",
) -> str:
    """Write the CHEMKIN equation of a reaction to a string.

    :param rcts: The reactant names
    :param prds: The product names
    :param coll: The collider
    :param arrow: The reaction arrow
    :return: The reaction CHEMKIN equation
    """
    rcts_str = " + ".join(rcts)
    prds_str = " + ".join(prds)

    if coll is not None:
        sep = " " if "+" in coll else " + "
        rcts_str = sep.join([rcts_str, coll])
        prds_str = sep.join([prds_str, coll])

    return f" {arrow} ".join([rcts_str, prds_str])


def read_chemkin_equation(
    eq: str, bare_coll: bool = False
) -> tuple[tuple[str, ...], tuple[str, ...], str | None, str]:
    """Parse a CHEMKIN reaction equation.

    :param eq: The reaction CHEMKIN equation
    :param bare_coll: Return a bare collider, without parentheses?
    :return: The reactants and products, along with the collider and the arrow
    """
    eq_expr = (
        pp.SkipTo(ARROW)("side1") + ARROW("arrow") + pp.SkipTo(pp.StringEnd())("side2")
    )
    res = eq_expr.parseString(eq)
    arrow = res.get("arrow")

    rcts, falloff = read_chemkin_equation_side(res.get("side1"))
    prds, falloff_ = read_chemkin_equation_side(res.get("side2"))
    if (falloff is None) ^ (falloff_ is None) or falloff != falloff_:
        raise InvalidRateError(f"Inconsistent collider in equation: {eq}")

    rcts, prds, coll = extract_collider(rcts, prds, falloff)

    # If requested, remove (+ ) for falloff reactions and return only the bare collider
    if bare_coll and coll is not None and coll.startswith("("):
        coll = coll[1:-1].lstrip(" +")

    return rcts, prds, coll, arrow


def read_chemkin_equation_side(side: str) -> tuple[list[str], str | None]:
    """Read one side of a CHEMKIN equation.

    Integer coefficients are expanded by repetition, e.g. "2 O" -> ["O", "O"].

    :param side: One side of a CHEMKIN equation
    :return: The reagent names and the falloff collider, if any
    """
    end = FALLOFF | pp.StringEnd()
    side_expr = (
        pp.SkipTo(end)("side") + pp.Optional(FALLOFF)("falloff") + pp.StringEnd()
    )
    res = side_expr.parseString(side)
    coll = res.get("falloff")
    coll = None if not coll else "".join(coll.split())

    names = []
    for term in re.split(r"\+(?!\+|$)", res.get("side")):
        term = term.strip()
        match = re.fullmatch(r"(\d+)\s*([A-Za-z(].*)", term)
        count, name = (int(match.group(1)), match.group(2)) if match else (1, term)
        names.extend([name] * count)

    if not all(names):
        raise InvalidRateError(f"Empty species name in equation side: {side}")

    return names, coll


def extract_collider(
    rcts: Sequence[str],
    prds: Sequence[str],
    falloff: str | None = None,
) -> tuple[tuple[str, ...], tuple[str, ...], str | None]:
    """Extract a collider from a list of reactants and products.

    :param rcts: The reactant names
    :param prds: The product names
    :param falloff: A falloff string, if present
    :return: The reactants and products (without collider), and the collider
    """
    coll = falloff
    if rcts[-1] == prds[-1] and rcts[-1] in BARE_COLLIDERS:
        if falloff is not None:
            raise InvalidRateError(f"Collider inconsistency: {falloff} {rcts} {prds}")
        coll = rcts[-1]
        rcts = rcts[:-1]
        prds = prds[:-1]

    return tuple(rcts), tuple(prds), coll
