"""Kinetics manager options."""

from pydantic import BaseModel, ConfigDict, Field

from ..const import ONE_ATM


class KineticsOptions(BaseModel):
    """Options controlling reaction registration and evaluation.

    :param standard_pressure: The standard-state pressure for equilibrium constants
        [Pa]
    :param skip_undeclared_species: Silently skip reactions with undeclared species?
    :param skip_undeclared_third_bodies: Drop undeclared third-body efficiencies,
        instead of rejecting the reaction?
    :param allow_negative_a: Allow negative pre-exponential factors?
    """

    model_config = ConfigDict(frozen=True)

    standard_pressure: float = Field(default=ONE_ATM, gt=0.0)
    skip_undeclared_species: bool = False
    skip_undeclared_third_bodies: bool = False
    allow_negative_a: bool = False
