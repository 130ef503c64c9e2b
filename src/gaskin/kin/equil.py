"""Equilibrium constants and enthalpies of reaction."""

import numpy

from ..const import GAS_CONSTANT


def equilibrium_constants(
    gibbs_rt: numpy.ndarray,
    net_stoich: numpy.ndarray,
    dn: numpy.ndarray,
    t: float,
    p_ref: float,
    reversible: numpy.ndarray | None = None,
) -> numpy.ndarray:
    """Calculate concentration-based equilibrium constants.

    K_c = exp(-dG°/RT) (P°/RT)^dn

    :param gibbs_rt: The standard-state Gibbs energies, G°/RT, of each species
    :param net_stoich: Net stoichiometric coefficients (reactions x species)
    :param dn: The net mole change of each reaction
    :param t: Temperature [K]
    :param p_ref: The standard-state pressure [Pa]
    :param reversible: Which reactions are reversible; others get NaN
    :return: The equilibrium constants, in (kmol/m^3)^dn
    """
    dg_rt = net_stoich @ gibbs_rt
    log_c0 = numpy.log(p_ref / (GAS_CONSTANT * t))
    kc = numpy.exp(-dg_rt + dn * log_c0)
    if reversible is not None:
        kc = numpy.where(reversible, kc, numpy.nan)
    return kc


def reaction_enthalpies(
    h_rt: numpy.ndarray, net_stoich: numpy.ndarray, t: float
) -> numpy.ndarray:
    """Calculate standard-state enthalpies of reaction.

    :param h_rt: The standard-state enthalpies, H°/RT, of each species
    :param net_stoich: Net stoichiometric coefficients (reactions x species)
    :param t: Temperature [K]
    :return: The enthalpies of reaction [J/kmol]
    """
    return (net_stoich @ h_rt) * GAS_CONSTANT * t
