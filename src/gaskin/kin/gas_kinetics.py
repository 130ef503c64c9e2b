"""Gas-phase kinetics manager.

Reactions are registered in a flat list (their index is their position) and each is
also installed as a member of the rate groups for its kind. Evaluation runs in two
stages:

    1. `update_rates_T()`: temperature- and pressure-dependent rate constants,
       equilibrium constants
    2. `update_rates_C()`: third-body concentrations, falloff blending, and assembly
       of the forward rate constant array
"""

import copy
import dataclasses
import logging
from collections.abc import Sequence

import numpy

from ..data import rate as rt_
from ..data import reac as rx_
from ..data.rate import RateType
from ..data.reac import Reaction
from ..data.thermo import Thermo
from ..error import EvaluationError, InvalidRateError, PreconditionError
from . import equil
from .cache import StateCache
from .falloff import FalloffManager
from .multi_rate import ArrheniusRates, BlowersMaselRates, ChebyshevRates, PlogRates
from .options import KineticsOptions
from .third_body import ThirdBodyCalc

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class RegisteredReaction:
    """A reaction, as stored by the kinetics manager.

    :param reaction: A private copy of the reaction
    :param kind: The rate type
    :param default_efficiency: The third-body efficiency of unlisted species
    :param efficiencies: Explicit third-body efficiencies, by species index
    :param reactant_counts: Reactant stoichiometric coefficients, by species index
    :param product_counts: Product stoichiometric coefficients, by species index
    """

    reaction: Reaction
    kind: RateType
    default_efficiency: float
    efficiencies: dict[int, float]
    reactant_counts: dict[int, int]
    product_counts: dict[int, int]


@dataclasses.dataclass(frozen=True)
class RateGroups:
    """The grouped evaluators, one field per group."""

    arrhenius: ArrheniusRates = dataclasses.field(default_factory=ArrheniusRates)
    third_body: ThirdBodyCalc = dataclasses.field(default_factory=ThirdBodyCalc)
    falloff: FalloffManager = dataclasses.field(default_factory=FalloffManager)
    falloff_concm: ThirdBodyCalc = dataclasses.field(default_factory=ThirdBodyCalc)
    plog: PlogRates = dataclasses.field(default_factory=PlogRates)
    cheb: ChebyshevRates = dataclasses.field(default_factory=ChebyshevRates)
    blowers_masel: BlowersMaselRates = dataclasses.field(
        default_factory=BlowersMaselRates
    )


# The groups in which each kind of reaction is a member
GROUPS_BY_TYPE = {
    RateType.CONSTANT: ("arrhenius",),
    RateType.THIRD_BODY: ("arrhenius", "third_body"),
    RateType.FALLOFF: ("falloff", "falloff_concm"),
    RateType.ACTIVATED: ("falloff", "falloff_concm"),
    RateType.PLOG: ("plog",),
    RateType.CHEB: ("cheb",),
    RateType.BLOWERS_MASEL: ("blowers_masel",),
}

# Groups that contribute rate constants, in the order they are written
RATE_GROUPS = ("arrhenius", "falloff", "plog", "cheb", "blowers_masel")


def install_member(
    group: ThirdBodyCalc | FalloffManager | ArrheniusRates,
    index: int,
    entry: RegisteredReaction,
):
    """Install a registered reaction as a member of one group.

    :param group: The group
    :param index: The reaction index
    :param entry: The registered reaction
    """
    if isinstance(group, ThirdBodyCalc):
        group.install(index, entry.default_efficiency, entry.efficiencies)
    else:
        group.add_member(index, rx_.rate(entry.reaction))


class GasKinetics:
    """Forward, reverse, and equilibrium rate constants for a gas-phase mechanism.

    Example:
    -------
    ```
    >>> kin = GasKinetics(thermo)
    >>> kin.add_reaction(rxn)
    0
    >>> kin.update(t=1000.0, p=101325.0, conc=conc)
    >>> kin.fwd_rate_constants()
    array([...])
    ```

    :param thermo: The thermodynamic property provider; its species order is the
        species order of every concentration array
    :param options: Registration and evaluation options
    """

    def __init__(self, thermo: Thermo, options: KineticsOptions | None = None):
        self.thermo = thermo
        self.options = KineticsOptions() if options is None else options
        self._species_index = {n: i for i, n in enumerate(thermo.species_names)}
        self._entries: list[RegisteredReaction] = []
        self._multipliers: list[float] = []
        self._groups = RateGroups()
        self._cache = StateCache()
        self._nresized = 0

        nspc = self.species_count
        self._reactant_stoich = numpy.zeros((0, nspc))
        self._product_stoich = numpy.zeros((0, nspc))
        self._net_stoich = numpy.zeros((0, nspc))
        self._reversible = numpy.zeros(0, dtype=bool)
        self._kf = numpy.zeros(0)
        self._kc = numpy.zeros(0)
        self._concm = numpy.zeros(0)

    # properties
    @property
    def reaction_count(self) -> int:
        """The number of registered reactions."""
        return len(self._entries)

    @property
    def species_count(self) -> int:
        """The number of species."""
        return len(self._species_index)

    @property
    def groups(self) -> RateGroups:
        """The grouped evaluators."""
        return self._groups

    @property
    def cache(self) -> StateCache:
        """The state at which rates were last evaluated."""
        return self._cache

    def species_index(self, name: str) -> int:
        """Get the index of a species.

        :param name: The species name
        :return: The index
        """
        if name not in self._species_index:
            raise KeyError(f"Unknown species: {name}")

        return self._species_index[name]

    def reaction(self, i: int) -> Reaction:
        """Get a copy of a registered reaction.

        :param i: The reaction index
        :return: The reaction
        """
        self._check_index(i)
        return copy.deepcopy(self._entries[i].reaction)

    def kind(self, i: int) -> RateType:
        """Get the rate type of a registered reaction.

        :param i: The reaction index
        :return: The rate type
        """
        self._check_index(i)
        return self._entries[i].kind

    def multiplier(self, i: int) -> float:
        """Get the rate multiplier of a reaction.

        :param i: The reaction index
        :return: The multiplier
        """
        self._check_index(i)
        return self._multipliers[i]

    def set_multiplier(self, i: int, factor: float):
        """Set the rate multiplier of a reaction.

        Multipliers scale the forward (and so the reverse) rate constant.

        :param i: The reaction index
        :param factor: The multiplier
        """
        self._check_index(i)
        self._multipliers[i] = float(factor)

    # registration
    def add_reaction(self, rxn: Reaction, resize: bool = True) -> int | None:
        """Register a reaction.

        If the reaction is invalid, this raises and the manager is left unchanged.

        :param rxn: The reaction
        :param resize: Resize the per-reaction arrays? Pass `False` when adding many
            reactions, then call `resize_reactions()`
        :return: The reaction index, or `None` if the reaction was skipped
        """
        entry = self._prepare(rxn)
        if entry is None:
            return None

        index = self._append(entry)
        if resize:
            self.resize_reactions()
        return index

    def add_reactions(self, rxns: Sequence[Reaction]) -> list[int | None]:
        """Register several reactions at once.

        Every reaction is validated before any is registered.

        :param rxns: The reactions
        :return: The reaction indices (`None` for skipped reactions)
        """
        entries = [self._prepare(rxn) for rxn in rxns]
        indices = [None if e is None else self._append(e) for e in entries]
        self.resize_reactions()
        return indices

    def resize_reactions(self):
        """Extend the per-reaction arrays to cover newly added reactions."""
        new_entries = self._entries[self._nresized :]
        rct_rows, prd_rows = self._stoichiometry_rows(new_entries)
        self._reactant_stoich = numpy.vstack([self._reactant_stoich, rct_rows])
        self._product_stoich = numpy.vstack([self._product_stoich, prd_rows])
        self._net_stoich = self._product_stoich - self._reactant_stoich
        self._reversible = numpy.concatenate(
            [
                self._reversible,
                numpy.array([rx_.is_reversible(e.reaction) for e in new_entries]),
            ]
        ).astype(bool)

        nrxn = self.reaction_count
        self._kf = numpy.zeros(nrxn)
        self._kc = numpy.full(nrxn, numpy.nan)
        self._concm = numpy.full(nrxn, numpy.nan)
        self._nresized = nrxn
        self.invalidate_cache()

    def modify_reaction(self, i: int, rxn: Reaction):
        """Replace the reaction at an index.

        The reaction may change kind. The groups for the old and new kinds are
        rebuilt in reaction order; other groups are untouched. If the new reaction
        is invalid, this raises and the manager is left unchanged.

        :param i: The reaction index
        :param rxn: The new reaction
        """
        self._check_index(i)
        self._check_resized()
        entry = self._prepare(rxn, skippable=False)

        entries = [*self._entries[:i], entry, *self._entries[i + 1 :]]
        names = (*GROUPS_BY_TYPE[self._entries[i].kind], *GROUPS_BY_TYPE[entry.kind])
        rebuilt = {n: type(getattr(self._groups, n))() for n in dict.fromkeys(names)}
        for index, entry_ in enumerate(entries):
            for name in GROUPS_BY_TYPE[entry_.kind]:
                if name in rebuilt:
                    install_member(rebuilt[name], index, entry_)

        (rct_row,), (prd_row,) = self._stoichiometry_rows([entry])
        self._entries = entries
        self._groups = dataclasses.replace(self._groups, **rebuilt)
        self._reactant_stoich[i] = rct_row
        self._product_stoich[i] = prd_row
        self._net_stoich[i] = prd_row - rct_row
        self._reversible[i] = rx_.is_reversible(entry.reaction)
        logger.debug(
            "Modified reaction %d: %s (%s)",
            i,
            rx_.equation(entry.reaction),
            entry.kind.value,
        )
        self.invalidate_cache()

    def invalidate_cache(self):
        """Force full recomputation at the next update."""
        logger.debug("Invalidated rate cache")
        self._cache.invalidate()

    def _prepare(
        self, rxn: Reaction, skippable: bool = True
    ) -> RegisteredReaction | None:
        """Validate a reaction and resolve its species indices.

        :param rxn: The reaction
        :param skippable: Whether undeclared species may cause the reaction to be
            skipped (per the options)
        :return: The registered reaction, or `None` if it should be skipped
        """
        rate = rx_.rate(rxn)
        if rate is None:
            raise InvalidRateError(
                f"Reaction has no rate: {rx_.reactants(rxn)} -> {rx_.products(rxn)}"
            )

        eq = rx_.equation(rxn)
        kind = rt_.type_(rate)
        undeclared = [s for s in rx_.species(rxn) if s not in self._species_index]
        if undeclared and skippable and self.options.skip_undeclared_species:
            logger.debug("Skipping %s with undeclared species %s", eq, undeclared)
            return None

        if undeclared:
            raise InvalidRateError(f"Undeclared species {undeclared} in {eq}")

        if rx_.colliders(rxn) is not None and not rt_.needs_collider(rate):
            raise InvalidRateError(f"{kind.value} reaction cannot have colliders: {eq}")

        if kind != RateType.PLOG and not self.options.allow_negative_a:
            if any(k.A < 0.0 for k in rt_.arrhenius_functions(rate)):
                raise InvalidRateError(f"Negative pre-exponential factor in {eq}")

        eff_dct = {}
        for name, eff in rx_.efficiencies(rxn).items():
            if name in self._species_index:
                eff_dct[self._species_index[name]] = eff
            elif self.options.skip_undeclared_third_bodies:
                logger.warning("Dropping undeclared third body %s in %s", name, eq)
            else:
                raise InvalidRateError(f"Undeclared third body {name} in {eq}")

        return RegisteredReaction(
            reaction=copy.deepcopy(rxn),
            kind=kind,
            default_efficiency=rx_.default_efficiency(rxn),
            efficiencies=eff_dct,
            reactant_counts={
                self._species_index[n]: c
                for n, c in rx_.reactant_stoichiometry(rxn).items()
            },
            product_counts={
                self._species_index[n]: c
                for n, c in rx_.product_stoichiometry(rxn).items()
            },
        )

    def _append(self, entry: RegisteredReaction) -> int:
        index = self.reaction_count
        for name in GROUPS_BY_TYPE[entry.kind]:
            install_member(getattr(self._groups, name), index, entry)
        self._entries.append(entry)
        self._multipliers.append(1.0)
        logger.debug(
            "Added reaction %d: %s (%s)",
            index,
            rx_.equation(entry.reaction),
            entry.kind.value,
        )
        return index

    def _stoichiometry_rows(
        self, entries: Sequence[RegisteredReaction]
    ) -> tuple[numpy.ndarray, numpy.ndarray]:
        rct_rows = numpy.zeros((len(entries), self.species_count))
        prd_rows = numpy.zeros((len(entries), self.species_count))
        for row, entry in enumerate(entries):
            for i, count in entry.reactant_counts.items():
                rct_rows[row, i] = count
            for i, count in entry.product_counts.items():
                prd_rows[row, i] = count
        return rct_rows, prd_rows

    def _check_index(self, i: int):
        if not 0 <= i < self.reaction_count:
            raise PreconditionError(
                f"Reaction index {i} out of range for {self.reaction_count} reactions"
            )

    def _check_resized(self):
        if self._nresized != self.reaction_count:
            raise PreconditionError(
                f"{self.reaction_count - self._nresized} reaction(s) added without "
                "resize_reactions()"
            )

    # evaluation
    def update_rates_T(self, t: float, p: float):
        """Update temperature- and pressure-dependent quantities.

        :param t: Temperature [K]
        :param p: Pressure [Pa]
        """
        self._check_resized()
        t = float(t)
        p = float(p)
        if not (numpy.isfinite(t) and t > 0.0):
            raise EvaluationError(f"Temperature must be positive and finite: {t}")

        if not (numpy.isfinite(p) and p > 0.0):
            raise EvaluationError(f"Pressure must be positive and finite: {p}")

        groups = self._groups
        t_changed = self._cache.temperature_changed(t)
        p_changed = self._cache.pressure_changed(p)
        # Mark stale before touching any group; a pressure change keeps the T stage
        if t_changed:
            self._cache.invalidate()
        elif p_changed:
            self._cache.invalidate_concentrations()

        if t_changed:
            groups.arrhenius.update_for_temperature(t)
            groups.falloff.update_for_temperature(t)
            if len(groups.blowers_masel):
                h_rt = self.thermo.standard_enthalpies_rt(t)
                net_stoich = self._net_stoich[groups.blowers_masel.indices]
                dh = equil.reaction_enthalpies(h_rt, net_stoich, t)
                groups.blowers_masel.update_for_temperature(t, dh)

            self._kc = equil.equilibrium_constants(
                self.thermo.standard_gibbs_rt(t),
                self._net_stoich,
                numpy.sum(self._net_stoich, axis=1),
                t,
                self.options.standard_pressure,
                reversible=self._reversible,
            )
            groups.plog.update_for_temperature(t)
            groups.cheb.update_for_temperature(t)

        if p_changed:
            groups.plog.update_for_pressure(p)
            groups.cheb.update_for_pressure(p)

        self._cache.commit_temperature(t)
        self._cache.commit_pressure(p)

    def update_rates_C(self, t: float, p: float, conc: Sequence[float]):
        """Update concentration-dependent quantities and the forward rate constants.

        Must follow `update_rates_T()` for the same temperature and pressure.

        :param t: Temperature [K]
        :param p: Pressure [Pa]
        :param conc: The species concentrations [kmol/m^3]
        """
        self._check_resized()
        conc = self._concentration_array(conc)
        if not self._cache.valid_t:
            raise PreconditionError("update_rates_T() must be called first")

        if not self._cache.state_changed(float(t), float(p), conc):
            return

        groups = self._groups
        total = numpy.sum(conc)
        concm = numpy.full(self.reaction_count, numpy.nan)
        concm[groups.third_body.indices] = groups.third_body.update(conc, total)
        falloff_concm = groups.falloff_concm.update(conc, total)
        concm[groups.falloff_concm.indices] = falloff_concm
        groups.falloff.update_for_concentrations(falloff_concm)

        kf = numpy.zeros(self.reaction_count)
        for name in RATE_GROUPS:
            getattr(groups, name).write_rate_constants(kf)
        third_body_indices = groups.third_body.indices
        kf[third_body_indices] *= concm[third_body_indices]

        self._kf = kf
        self._concm = concm
        self._cache.commit_state(conc)

    def update(self, t: float, p: float, conc: Sequence[float]):
        """Update all rate quantities for a new state.

        :param t: Temperature [K]
        :param p: Pressure [Pa]
        :param conc: The species concentrations [kmol/m^3]
        """
        self.update_rates_T(t, p)
        self.update_rates_C(t, p, conc)

    def fwd_rate_constants(self) -> numpy.ndarray:
        """Get the forward rate constants, including multipliers.

        For third-body reactions, these include the factor of [M].

        :return: The rate constants, one per reaction
        """
        self._check_current(concentrations=True)
        return self._kf * numpy.array(self._multipliers)

    def equilibrium_constants(self) -> numpy.ndarray:
        """Get the concentration-based equilibrium constants.

        :return: The equilibrium constants, one per reaction (NaN if irreversible)
        """
        self._check_current(concentrations=False)
        return numpy.array(self._kc)

    def rev_rate_constants(self) -> numpy.ndarray:
        """Get the reverse rate constants, k_f / K_c.

        :return: The rate constants, one per reaction (zero if irreversible)
        """
        kf = self.fwd_rate_constants()
        with numpy.errstate(divide="ignore", invalid="ignore"):
            kr = kf / self._kc
        return numpy.where(self._reversible, kr, 0.0)

    def third_body_concentrations(self) -> numpy.ndarray:
        """Get the effective third-body concentrations.

        :return: The concentrations [kmol/m^3], one per reaction (NaN if the
            reaction has no third body)
        """
        self._check_current(concentrations=True)
        return numpy.array(self._concm)

    def rates_of_progress(
        self, conc: Sequence[float] | None = None
    ) -> tuple[numpy.ndarray, numpy.ndarray, numpy.ndarray]:
        """Get the mass-action rates of progress.

        New concentrations run the concentration stage at the last temperature and
        pressure first, so third-body and falloff rate constants match them.

        :param conc: The species concentrations [kmol/m^3], defaulting to those of
            the last update
        :return: The forward, reverse, and net rates of progress [kmol/m^3/s]
        """
        if conc is not None:
            self.update_rates_C(self._cache.temperature, self._cache.pressure, conc)

        kf = self.fwd_rate_constants()
        kr = self.rev_rate_constants()
        conc = self._cache.concentrations
        fwd = kf * numpy.prod(conc**self._reactant_stoich, axis=1)
        rev = kr * numpy.prod(conc**self._product_stoich, axis=1)
        return fwd, rev, fwd - rev

    def _concentration_array(self, conc: Sequence[float]) -> numpy.ndarray:
        conc = numpy.asarray(conc, dtype=float)
        if conc.shape != (self.species_count,):
            raise PreconditionError(
                f"Expected {self.species_count} concentrations, got {conc.shape}"
            )
        return conc

    def _check_current(self, concentrations: bool):
        self._check_resized()
        if not self._cache.valid_t or (concentrations and not self._cache.valid_tc):
            raise PreconditionError("Rates are out of date; call update() first")
