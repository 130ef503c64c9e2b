"""Effective third-body concentrations."""

import numpy


class ThirdBodyCalc:
    """Effective collision-partner concentrations for a set of reactions.

    For each member, [M] = default * total + sum_k (eff_k - default) * C_k, where the
    sum runs over species with an explicit efficiency.
    """

    def __init__(self):
        self._indices: list[int] = []
        self._defaults: list[float] = []
        self._species: list[list[int]] = []
        self._deltas: list[list[float]] = []
        self._arrays = None

    def __len__(self) -> int:
        return len(self._indices)

    @property
    def indices(self) -> numpy.ndarray:
        """The reaction index of each member."""
        return numpy.array(self._indices, dtype=int)

    def install(self, index: int, default: float, eff_dct: dict[int, float]):
        """Add a member reaction.

        :param index: The reaction index
        :param default: The efficiency of species without an explicit one
        :param eff_dct: Explicit efficiencies, by species index
        """
        self._indices.append(index)
        self._defaults.append(float(default))
        self._species.append(list(eff_dct))
        self._deltas.append([float(e) - float(default) for e in eff_dct.values()])
        self._arrays = None

    def _compile(self):
        members = [[i] * len(s) for i, s in enumerate(self._species)]
        self._arrays = (
            numpy.array(self._defaults, dtype=float),
            numpy.array(sum(members, []), dtype=int),
            numpy.array(sum(self._species, []), dtype=int),
            numpy.array(sum(self._deltas, []), dtype=float),
        )

    def update(self, conc: numpy.ndarray, total: float | None = None) -> numpy.ndarray:
        """Compute the effective third-body concentration of every member.

        :param conc: The species concentrations [kmol/m^3]
        :param total: The total concentration, defaulting to the sum of `conc`
        :return: One concentration per member, in member order
        """
        if self._arrays is None:
            self._compile()

        defaults, members, species, deltas = self._arrays
        total = numpy.sum(conc) if total is None else total
        corrections = numpy.bincount(
            members, weights=deltas * conc[species], minlength=len(defaults)
        )
        return defaults * total + corrections
