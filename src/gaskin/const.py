"""Physical constants, in the kmol-based SI units used throughout."""

import pint

U = pint.UnitRegistry()

GAS_CONSTANT = U.Quantity(1.0, "molar_gas_constant").m_as("J/kmol/K")
ONE_ATM = U.Quantity(1.0, "atm").m_as("Pa")

# Floor for quantities that are logged or divided by (e.g. reduced pressure)
SMALL_NUMBER = 1e-300
