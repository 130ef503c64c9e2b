"""Rate-law dataclasses and their closed-form evaluation.

The evaluation functions broadcast over numpy arrays, so the same expressions serve
for single rates and for the grouped evaluators in `gaskin.kin`.
"""

import abc
import copy
import dataclasses
import enum
from collections.abc import Sequence

import more_itertools as mit
import numpy
from numpy.polynomial import chebyshev

from ..const import GAS_CONSTANT, SMALL_NUMBER, U
from ..error import InvalidRateError

MatrixLike = Sequence[Sequence[float]] | numpy.ndarray
ArrayLike = float | numpy.ndarray


class RateType(str, enum.Enum):
    """The type of reaction rate (type of pressure dependence)."""

    CONSTANT = "Constant"
    THIRD_BODY = "ThirdBody"
    FALLOFF = "Falloff"
    ACTIVATED = "Activated"
    PLOG = "Plog"
    CHEB = "Chebyshev"
    BLOWERS_MASEL = "BlowersMasel"


class BlendType(str, enum.Enum):
    """The type of blending function for high and low-pressure rates."""

    LIND = "Lind"
    TROE = "Troe"
    SRI = "SRI"


# Allowed coefficient counts for each blending function
BLEND_COEFF_COUNTS = {
    BlendType.LIND: (0,),
    BlendType.TROE: (3, 4),
    BlendType.SRI: (3, 5),
}


@dataclasses.dataclass
class ArrheniusFunction:
    """An Arrhenius or Landau-Teller function.

    :param A: The pre-exponential factor [(m^3/kmol)**o/s]
    :param b: The temperature exponent
    :param E: The activation energy E [J/kmol]
    :param B: The Landau-Teller B-factor (optional)
    :param C: The Landau-Teller C-factor (optional)
    """

    A: float = 1.0
    b: float = 0.0
    E: float = 0.0
    B: float | None = None
    C: float | None = None

    def __post_init__(self):
        """Initialize attributes."""
        self.A = float(self.A)
        self.b = float(self.b)
        self.E = float(self.E)
        self.B = None if self.B is None else float(self.B)
        self.C = None if self.C is None else float(self.C)

    def __mul__(self, factor: float | int):
        """Multiply this Arrhenius function by a scalar factor.

        Example:
        -------
        ```
        >>> k = gaskin.data.rate.ArrheniusFunction(A=1, b=0, E=0)
        >>> print(k * 2)
        ArrheniusFunction(A=2.0, b=0.0, E=0.0, B=None, C=None)
        ```

        :param factor: The scale factor
        :return: The new Arrhenius function
        """
        return ArrheniusFunction(
            A=self.A * factor, b=self.b, E=self.E, B=self.B, C=self.C
        )

    __rmul__ = __mul__

    def scale_e(self, factor: float | int):
        """Scale the energy parameter by a factor (For converting energy units).

        :param factor: The energy scale factor
        :return: The new Arrhenius function
        """
        return ArrheniusFunction(
            A=self.A, b=self.b, E=self.E * factor, B=self.B, C=self.C
        )


def arrhenius_function_from_data(
    data: Sequence[float] | dict[str, float | None] | ArrheniusFunction,
) -> ArrheniusFunction | None:
    """Build an Arrhenius function object from data.

    :param data: The Arrhenius parameters (A, b, E), optionally followed by the two
        Landau factors (B, C)
    :return: The Arrhenius function object
    """
    if isinstance(data, ArrheniusFunction):
        return ArrheniusFunction(*arrhenius_params(data))

    if isinstance(data, dict):
        if all(v is None for v in data.values()):
            return None

        return ArrheniusFunction(**data)

    if not 3 <= len(data) <= 5:
        raise InvalidRateError(f"Expected 3 to 5 Arrhenius parameters, got {data}")

    return ArrheniusFunction(*data)


def arrhenius_params(k: ArrheniusFunction, lt: bool = True) -> tuple[float, ...]:
    """Get the parameters for an Arrhenius or Landau-Teller function.

    :param k: The Arrhenius function object
    :param lt: Include Landau-Teller parameters, if defined?
    :return: The parameters A, b, E, (B*, C*)
    """
    lt = False if k.B is None and k.C is None else lt
    return (k.A, k.b, k.E, k.B, k.C) if lt else (k.A, k.b, k.E)


@dataclasses.dataclass
class BlendingFunction:
    """A blending function for high and low-pressure rates.

    Types:
        Lind   - coeffs: (None)
        Troe   - coeffs: a, T***, T*, (T**)
        SRI    - coeffs: a, b, c, (d, e)

    :param coeffs: A list of coefficients for the parametrization
    :param type_: The type of parametrization: "Lind", "Troe", "SRI"
    """

    type_: BlendType = BlendType.LIND
    coeffs: list[float] | None = None

    def __post_init__(self):
        """Initialize attributes."""
        self.type_ = BlendType(self.type_)
        self.coeffs = None if self.coeffs is None else list(map(float, self.coeffs))

        ncoeffs = 0 if self.coeffs is None else len(self.coeffs)
        if ncoeffs not in BLEND_COEFF_COUNTS[self.type_]:
            raise InvalidRateError(
                f"{self.type_.value} blending takes {BLEND_COEFF_COUNTS[self.type_]} "
                f"coefficients, got {self.coeffs}"
            )

        if self.type_ == BlendType.SRI and self.coeffs[2] <= 0.0:
            raise InvalidRateError(f"SRI parameter c must be positive: {self.coeffs}")

        if self.type_ == BlendType.SRI and ncoeffs == 5 and self.coeffs[3] <= 0.0:
            raise InvalidRateError(f"SRI parameter d must be positive: {self.coeffs}")


def blending_function_from_data(
    data: tuple[str | BlendType, Sequence[float]] | dict[str, object] | BlendingFunction
) -> BlendingFunction | None:
    """Build a blending function object from data.

    :param data: The blend type and coefficients, as a tuple, dictionary, or object
    :return: The blending function object
    """
    if isinstance(data, BlendingFunction):
        return BlendingFunction(type_=f_type(data), coeffs=f_coeffs(data))

    if isinstance(data, dict):
        if all(v is None for v in data.values()):
            return None

        return BlendingFunction(**data)

    return BlendingFunction(*data)


def f_coeffs(f: BlendingFunction) -> list[float] | None:
    """Get the coefficients of a blending function.

    :param f: The blending function object
    :return: The blend function coefficients
    """
    return f.coeffs


def f_type(f: BlendingFunction) -> BlendType:
    """Get the blend type of a blending function.

    :param f: The blending function object
    :return: The blend type
    """
    return f.type_


class Rate(abc.ABC):
    """Base class for reaction rates.

    :param is_rev: Whether this rate describes a reversible reaction
    :param type_: The type of reaction
    """

    @property
    @abc.abstractmethod
    def type_(self):
        """The type of reaction."""
        pass

    @property
    @abc.abstractmethod
    def is_rev(self):
        """Whether this rate describes a reversible reaction."""
        pass

    @abc.abstractmethod
    def __mul__(self, factor: float | int):
        """Multiply this rate by a scalar factor.

        :param factor: The scale factor
        :return: The new rate
        """
        pass

    @abc.abstractmethod
    def __rmul__(self, factor: float | int):
        """Multiply this rate by a scalar factor.

        :param factor: The scale factor
        :return: The new rate
        """
        pass

    @abc.abstractmethod
    def scale_e(self, factor: float | int):
        """Scale the energy parameters by a factor (For converting energy units).

        :param factor: The energy scale factor
        :return: The new rate
        """
        pass


@dataclasses.dataclass
class SimpleRate(Rate):
    """Simple reaction rate, k(T,P) parametrization.

    Types:
        Constant    - k: The rate coefficient
        ThirdBody   - k: The rate coefficient (multiplied by [M])
        Falloff     - k: The high-pressure rate coefficient (M-independent)
                    - k0: The low-pressure rate coefficient
                    - f: The blending function, F(T, P_r)
        Activated   - k: The high-pressure rate coefficient
                    - k0: The low-pressure rate coefficient (M-independent)
                    - f: The blending function, F(T, P_r)

    :param k: The (high-pressure limiting) Arrhenius function for the reaction
    :param k0: The low-pressure limiting Arrhenius function for the reaction
    :param f: Falloff function for blending the high- and low-pressure rate coefficients
    :param is_rev: Is this a reversible reaction?
    :param type_: The type of reaction: "Constant", "ThirdBody", "Falloff", "Activated"
    """

    k: ArrheniusFunction | None = dataclasses.field(default_factory=ArrheniusFunction)
    k0: ArrheniusFunction | None = None
    f: BlendingFunction | None = None
    is_rev: bool = True
    type_: RateType = RateType.CONSTANT

    def __post_init__(self):
        """Initialize attributes."""
        self.k = None if self.k is None else arrhenius_function_from_data(self.k)
        self.k0 = None if self.k0 is None else arrhenius_function_from_data(self.k0)
        self.f = None if self.f is None else blending_function_from_data(self.f)
        self.is_rev = bool(self.is_rev)

        self.type_ = RateType.CONSTANT if self.type_ is None else RateType(self.type_)
        if self.type_ not in SIMPLE_RATE_TYPES:
            raise InvalidRateError(f"Not a simple rate type: {self.type_}")

        if self.k is None:
            raise InvalidRateError(f"{self.type_.value} rate requires k")

        if self.type_ in (RateType.CONSTANT, RateType.THIRD_BODY):
            if self.f is not None:
                raise InvalidRateError(f"f={self.f} requires P-dependent reaction type")
            if self.k0 is not None:
                raise InvalidRateError(
                    f"k0={self.k0} requires P-dependent reaction type"
                )

        if self.type_ in (RateType.FALLOFF, RateType.ACTIVATED):
            if self.k0 is None:
                raise InvalidRateError(
                    f"{self.type_.value} rate requires a low-pressure limit k0"
                )
            self.f = BlendingFunction() if self.f is None else self.f

    def __mul__(self, factor: float | int):
        """Multiply this rate by a scalar factor.

        :param factor: The scale factor
        :return: The new rate
        """
        return SimpleRate(
            k=self.k * factor,
            k0=None if self.k0 is None else self.k0 * factor,
            f=self.f,
            is_rev=self.is_rev,
            type_=self.type_,
        )

    __rmul__ = __mul__

    def scale_e(self, factor: float | int):
        """Scale the energy parameters by a factor (For converting energy units).

        :param factor: The energy scale factor
        :return: The new rate
        """
        return SimpleRate(
            k=self.k.scale_e(factor),
            k0=None if self.k0 is None else self.k0.scale_e(factor),
            f=self.f,
            is_rev=self.is_rev,
            type_=self.type_,
        )


SIMPLE_RATE_TYPES = (
    RateType.CONSTANT,
    RateType.THIRD_BODY,
    RateType.FALLOFF,
    RateType.ACTIVATED,
)


@dataclasses.dataclass
class PlogRate(Rate):
    """P-Log reaction rate, k(T,P) parametrization.

    Several Arrhenius functions may share a pressure; they are summed.

    :param ks: Rate coefficients at specific pressures, k_P1, k_P2, ...
    :param ps: An array of pressures, P1, P2, ... [Pa]
    :param is_rev: Is this a reversible reaction?
    """

    ks: tuple[ArrheniusFunction, ...]
    ps: tuple[float, ...]
    is_rev: bool = True
    type_: RateType = RateType.PLOG

    def __post_init__(self):
        """Initialize attributes."""
        self.ks = tuple(map(arrhenius_function_from_data, self.ks))
        self.ps = tuple(map(float, self.ps))
        self.is_rev = bool(self.is_rev)
        self.type_ = RateType.PLOG if self.type_ is None else RateType(self.type_)
        if self.type_ != RateType.PLOG:
            raise InvalidRateError(f"Not a P-Log rate type: {self.type_}")

        if not self.ks:
            raise InvalidRateError("P-Log rate requires at least one pressure")

        if len(self.ks) != len(self.ps):
            raise InvalidRateError(f"Mismatched P-Log data:\n{self.ks}\n{self.ps}")

        if any(p <= 0.0 for p in self.ps):
            raise InvalidRateError(f"P-Log pressures must be positive: {self.ps}")

    def __mul__(self, factor: float | int):
        """Multiply this rate by a scalar factor.

        :param factor: The scale factor
        :return: The new rate
        """
        return PlogRate(
            ks=[k * factor for k in self.ks],
            ps=self.ps,
            is_rev=self.is_rev,
            type_=self.type_,
        )

    __rmul__ = __mul__

    def scale_e(self, factor: float | int):
        """Scale the energy parameters by a factor (For converting energy units).

        :param factor: The energy scale factor
        :return: The new rate
        """
        return PlogRate(
            ks=[k.scale_e(factor) for k in self.ks],
            ps=self.ps,
            is_rev=self.is_rev,
            type_=self.type_,
        )


@dataclasses.dataclass
class ChebRate(Rate):
    """Chebyshev reaction rate, k(T,P) parametrization.

    log10(k) = sum_ij coeffs[i, j] * T_i(reduced T) * T_j(reduced P)

    :param t_limits: The min/max temperature limits [K] for the Chebyshev fit
    :param p_limits: The min/max pressure limits [Pa] for the Chebyshev fit
    :param coeffs: The Chebyshev expansion coefficients (temperature x pressure)
    :param is_rev: Is this a reversible reaction?
    """

    t_limits: tuple[float, float]
    p_limits: tuple[float, float]
    coeffs: numpy.ndarray
    is_rev: bool = True
    type_: RateType = RateType.CHEB

    def __post_init__(self):
        """Initialize attributes."""
        self.t_limits = tuple(map(float, self.t_limits))
        self.p_limits = tuple(map(float, self.p_limits))
        self.coeffs = numpy.array(self.coeffs, dtype=float)
        self.is_rev = bool(self.is_rev)
        self.type_ = RateType.CHEB if self.type_ is None else RateType(self.type_)
        if self.type_ != RateType.CHEB:
            raise InvalidRateError(f"Not a Chebyshev rate type: {self.type_}")

        if numpy.ndim(self.coeffs) != 2 or not numpy.size(self.coeffs):
            raise InvalidRateError(
                f"Must be non-empty and 2-dimensional: {self.coeffs}"
            )

        if len(self.t_limits) != 2 or not self.t_limits[0] < self.t_limits[1]:
            raise InvalidRateError(f"Bad temperature limits: {self.t_limits}")

        if (
            len(self.p_limits) != 2
            or not 0.0 < self.p_limits[0] < self.p_limits[1]
        ):
            raise InvalidRateError(f"Bad pressure limits: {self.p_limits}")

    def __mul__(self, factor: float | int):
        """Multiply this rate by a scalar factor.

        The leading coefficient carries the shift in log10(k).

        :param factor: The scale factor
        :return: The new rate
        """
        coeffs = numpy.array(self.coeffs)
        coeffs[0, 0] += numpy.log10(factor)
        return ChebRate(
            t_limits=self.t_limits,
            p_limits=self.p_limits,
            coeffs=coeffs,
            is_rev=self.is_rev,
            type_=self.type_,
        )

    __rmul__ = __mul__

    def scale_e(self, factor: float | int):
        """Scale the energy parameters by a factor (For converting energy units).

        (Does nothing for Chebyshev parametrization.)

        :param factor: The energy scale factor
        :return: The new rate
        """
        return copy.deepcopy(self)


@dataclasses.dataclass
class BlowersMaselRate(Rate):
    """Blowers-Masel reaction rate.

    An Arrhenius function whose activation energy shifts with the enthalpy of
    reaction.

    :param k: The Arrhenius function; its `E` is the intrinsic barrier E0 [J/kmol]
    :param w: The average bond dissociation energy [J/kmol]
    :param is_rev: Is this a reversible reaction?
    """

    k: ArrheniusFunction
    w: float
    is_rev: bool = True
    type_: RateType = RateType.BLOWERS_MASEL

    def __post_init__(self):
        """Initialize attributes."""
        self.k = arrhenius_function_from_data(self.k)
        self.w = float(self.w)
        self.is_rev = bool(self.is_rev)
        self.type_ = (
            RateType.BLOWERS_MASEL if self.type_ is None else RateType(self.type_)
        )
        if self.type_ != RateType.BLOWERS_MASEL:
            raise InvalidRateError(f"Not a Blowers-Masel rate type: {self.type_}")

        if self.k.E < 0.0 or self.w <= self.k.E:
            raise InvalidRateError(
                f"Blowers-Masel requires 0 <= E0 < w: E0={self.k.E}, w={self.w}"
            )

    def __mul__(self, factor: float | int):
        """Multiply this rate by a scalar factor.

        :param factor: The scale factor
        :return: The new rate
        """
        return BlowersMaselRate(
            k=self.k * factor, w=self.w, is_rev=self.is_rev, type_=self.type_
        )

    __rmul__ = __mul__

    def scale_e(self, factor: float | int):
        """Scale the energy parameters by a factor (For converting energy units).

        :param factor: The energy scale factor
        :return: The new rate
        """
        return BlowersMaselRate(
            k=self.k.scale_e(factor),
            w=self.w * factor,
            is_rev=self.is_rev,
            type_=self.type_,
        )


# constructors
def from_data(
    k: Sequence[float] | ArrheniusFunction | None = None,
    k0: Sequence[float] | ArrheniusFunction | None = None,
    f: tuple[str, Sequence[float]] | BlendingFunction | None = None,
    ks: Sequence[Sequence[float] | ArrheniusFunction] | None = None,
    ps: Sequence[float] | None = None,
    t_limits: Sequence[float] | None = None,
    p_limits: Sequence[float] | None = None,
    coeffs: MatrixLike | None = None,
    w: float | None = None,
    type_: str | RateType | None = None,
    is_rev: bool = True,
) -> Rate:
    """Build a rate object from data.

    :param k: The (high-pressure limiting) Arrhenius function for the reaction
    :param k0: The low-pressure limiting Arrhenius function for the reaction
    :param f: Falloff function for blending the high- and low-pressure rate coefficients
    :param ks: P-Log rate coefficients at specific pressures, k_P1, k_P2, ...
    :param ps: P-Log pressures, P1, P2, ... [Pa]
    :param t_limits: The min/max temperature limits [K] for the Chebyshev fit
    :param p_limits: The min/max pressure limits [Pa] for the Chebyshev fit
    :param coeffs: The Chebyshev expansion coefficients
    :param w: The Blowers-Masel bond dissociation energy [J/kmol]
    :param type_: The type of reaction, e.g. "Constant", "Falloff", "Plog"
    :param is_rev: Is this a reversible reaction?
    :return: The rate object
    """
    type_ = None if type_ is None else RateType(type_)

    plog_args = (ks, ps)
    if any(arg is not None for arg in plog_args) or type_ == RateType.PLOG:
        return PlogRate(ks=ks or (), ps=ps or (), is_rev=is_rev, type_=type_)

    cheb_args = (t_limits, p_limits, coeffs)
    if any(arg is not None for arg in cheb_args) or type_ == RateType.CHEB:
        if any(arg is None for arg in cheb_args):
            raise InvalidRateError(f"Incomplete Chebyshev data: {cheb_args}")

        return ChebRate(
            t_limits=t_limits,
            p_limits=p_limits,
            coeffs=coeffs,
            is_rev=is_rev,
            type_=type_,
        )

    if w is not None or type_ == RateType.BLOWERS_MASEL:
        if w is None or k is None:
            raise InvalidRateError(f"Blowers-Masel rate requires k and w: {k}, {w}")

        return BlowersMaselRate(k=k, w=w, is_rev=is_rev, type_=type_)

    return SimpleRate(k=k, k0=k0, f=f, is_rev=is_rev, type_=type_)


# getters
# # common
def type_(rate: Rate) -> RateType:
    """Get the type of reaction.

    :param rate: The rate object
    :return: The type of reaction
    """
    return rate.type_


def is_reversible(rate: Rate) -> bool:
    """Whether this rate describes a reversible reaction.

    :param rate: The rate object
    :return: `True` if it does, `False` if it doesn't
    """
    return rate.is_rev


def arrhenius_functions(rate: Rate) -> tuple[ArrheniusFunction, ...]:
    """Get every Arrhenius function used by a rate.

    :param rate: The rate object
    :return: The Arrhenius functions
    """
    if isinstance(rate, PlogRate):
        return rate.ks

    if isinstance(rate, SimpleRate):
        return tuple(k for k in (rate.k, rate.k0) if k is not None)

    if isinstance(rate, BlowersMaselRate):
        return (rate.k,)

    return ()


# # simple
def high_p_arrhenius_function(rate: Rate) -> ArrheniusFunction | None:
    """Get the high-pressure limiting Arrhenius function for the reaction.

    :param rate: The rate object
    :return: The Arrhenius function
    """
    if not isinstance(rate, SimpleRate | BlowersMaselRate):
        return None

    return rate.k


def low_p_arrhenius_function(rate: Rate) -> ArrheniusFunction | None:
    """Get the low-pressure limiting Arrhenius function for the reaction.

    :param rate: The rate object
    :return: The Arrhenius function
    """
    if not isinstance(rate, SimpleRate):
        return None

    return rate.k0


def blend_function(rate: Rate) -> BlendingFunction | None:
    """Get the function for blending high- and low-pressure rates.

    :param rate: The rate object
    :return: The blend function
    """
    if not isinstance(rate, SimpleRate):
        return None

    return rate.f


# # plog
def plog_nodes(rate: Rate) -> dict[float, list[ArrheniusFunction]] | None:
    """Get the P-Log Arrhenius functions, grouped by pressure in ascending order.

    :param rate: The rate object
    :return: A dictionary mapping each pressure onto its Arrhenius functions
    """
    if not isinstance(rate, PlogRate):
        return None

    node_dct = mit.map_reduce(
        zip(rate.ps, rate.ks, strict=True),
        keyfunc=lambda x: x[0],
        valuefunc=lambda x: x[1],
    )
    return {p: node_dct[p] for p in sorted(node_dct)}


# properties
def needs_collider(rate: Rate | None) -> bool:
    """Whether this rate type involves a collider.

    :param rate: The rate object
    :return: `True` if it does, `False` if it doesn't
    """
    if rate is None:
        return False

    return type_(rate) in (RateType.THIRD_BODY, RateType.ACTIVATED, RateType.FALLOFF)


def is_falloff(rate: Rate) -> bool:
    """Whether this is a falloff (or chemically activated) reaction.

    :param rate: The rate object
    :return: `True` if it is, `False` if it isn't
    """
    return type_(rate) in (RateType.FALLOFF, RateType.ACTIVATED)


def is_pressure_dependent(rate: Rate) -> bool:
    """Whether this rate depends explicitly on pressure.

    :param rate: The rate object
    :return: `True` if it does, `False` if it doesn't
    """
    return type_(rate) in (RateType.PLOG, RateType.CHEB)


def blend_type(rate: Rate) -> BlendType | None:
    """Get the function type for blending high- and low-pressure rates.

    :param rate: The rate object
    :return: The blend type
    """
    f = blend_function(rate)
    if f is None:
        return None

    return f_type(f)


# transformations
def convert_energy_units(rate: Rate, unit0: str, unit: str) -> Rate:
    """Convert the energy units for a reaction rate.

    :param rate: The rate object
    :param unit0: The current energy unit, e.g. "cal/mol"
    :param unit: The desired energy unit, e.g. "J/kmol"
    :return: The rate object, with new energy units
    """
    factor = U.parse_expression(unit0).m_as(unit)
    return rate.scale_e(factor)


# evaluation
def arrhenius_expression(
    t: ArrayLike,
    a: ArrayLike,
    b: ArrayLike,
    e: ArrayLike,
    lt_b: ArrayLike = 0.0,
    lt_c: ArrayLike = 0.0,
) -> ArrayLike:
    """Evaluate k = A T^b exp(-E/RT + B T^(-1/3) + C T^(-2/3)).

    :param t: Temperature [K]
    :param a: Pre-exponential factor(s)
    :param b: Temperature exponent(s)
    :param e: Activation energy(ies) [J/kmol]
    :param lt_b: Landau-Teller B-factor(s)
    :param lt_c: Landau-Teller C-factor(s)
    :return: The rate coefficient(s)
    """
    log_t = numpy.log(t)
    t13 = numpy.exp(-log_t / 3.0)
    expo = b * log_t - e / (GAS_CONSTANT * t) + lt_b * t13 + lt_c * t13 * t13
    return a * numpy.exp(expo)


def arrhenius_value(k: ArrheniusFunction, t: ArrayLike) -> ArrayLike:
    """Evaluate an Arrhenius function.

    :param k: The Arrhenius function object
    :param t: Temperature [K]
    :return: The rate coefficient
    """
    lt_b = 0.0 if k.B is None else k.B
    lt_c = 0.0 if k.C is None else k.C
    return arrhenius_expression(t, k.A, k.b, k.E, lt_b=lt_b, lt_c=lt_c)


def reciprocal_or_inf(x: ArrayLike) -> ArrayLike:
    """Get 1/x, mapping vanishing values onto infinity (so exp(-t/x) -> 0).

    :param x: The value(s)
    :return: The reciprocal(s)
    """
    x = numpy.asarray(x, dtype=float)
    small = numpy.abs(x) < SMALL_NUMBER
    return numpy.where(small, numpy.inf, 1.0 / numpy.where(small, 1.0, x))


def troe_log10_fcent(
    t: ArrayLike, a: ArrayLike, rt3: ArrayLike, rt1: ArrayLike, t2: ArrayLike
) -> ArrayLike:
    """Evaluate log10 of the Troe broadening factor, F_cent.

    F_cent = (1 - a) exp(-T/T***) + a exp(-T/T*) + exp(-T**/T)

    :param t: Temperature [K]
    :param a: The Troe a parameter(s)
    :param rt3: Reciprocal(s) of T***
    :param rt1: Reciprocal(s) of T*
    :param t2: The T** parameter(s); infinite where absent
    :return: log10(F_cent)
    """
    fcent = (1.0 - a) * numpy.exp(-t * rt3) + a * numpy.exp(-t * rt1)
    fcent = fcent + numpy.exp(-t2 / t)
    return numpy.log10(numpy.maximum(fcent, SMALL_NUMBER))


def troe_value(log10_fcent: ArrayLike, pr: ArrayLike) -> ArrayLike:
    """Evaluate the Troe blending function from F_cent and the reduced pressure.

    :param log10_fcent: log10(F_cent)
    :param pr: The reduced pressure(s)
    :return: F(T, P_r)
    """
    log10_pr = numpy.log10(numpy.maximum(pr, SMALL_NUMBER))
    cc = -0.4 - 0.67 * log10_fcent
    nn = 0.75 - 1.27 * log10_fcent
    f1 = (log10_pr + cc) / (nn - 0.14 * (log10_pr + cc))
    return numpy.power(10.0, log10_fcent / (1.0 + f1 * f1))


def sri_temperature_terms(
    t: ArrayLike, a: ArrayLike, b: ArrayLike, c: ArrayLike, d: ArrayLike, e: ArrayLike
) -> tuple[ArrayLike, ArrayLike]:
    """Evaluate the temperature-only parts of the SRI blending function.

    :param t: Temperature [K]
    :param a: The SRI parameters a, b, c, d, e
    :return: The base, a exp(-b/T) + exp(-T/c), and the prefactor, d T^e
    """
    base = a * numpy.exp(-b / t) + numpy.exp(-t / c)
    return base, d * numpy.power(t, e)


def sri_value(base: ArrayLike, prefactor: ArrayLike, pr: ArrayLike) -> ArrayLike:
    """Evaluate the SRI blending function from its temperature terms.

    :param base: a exp(-b/T) + exp(-T/c)
    :param prefactor: d T^e
    :param pr: The reduced pressure(s)
    :return: F(T, P_r)
    """
    log10_pr = numpy.log10(numpy.maximum(pr, SMALL_NUMBER))
    return prefactor * numpy.power(base, 1.0 / (1.0 + log10_pr * log10_pr))


def blend_value(f: BlendingFunction, t: float, pr: ArrayLike) -> ArrayLike:
    """Evaluate a blending function.

    :param f: The blending function object
    :param t: Temperature [K]
    :param pr: The reduced pressure(s)
    :return: F(T, P_r)
    """
    if f_type(f) == BlendType.TROE:
        a, t3, t1, *t2 = f_coeffs(f)
        t2 = t2[0] if t2 else numpy.inf
        log10_fcent = troe_log10_fcent(
            t, a, reciprocal_or_inf(t3), reciprocal_or_inf(t1), t2
        )
        return troe_value(log10_fcent, pr)

    if f_type(f) == BlendType.SRI:
        a, b, c, d, e = (*f_coeffs(f), 1.0, 0.0)[:5]
        base, prefactor = sri_temperature_terms(t, a, b, c, d, e)
        return sri_value(base, prefactor, pr)

    return numpy.ones_like(pr, dtype=float)


def falloff_value(rate: SimpleRate, t: float, concm: ArrayLike) -> ArrayLike:
    """Evaluate a falloff or chemically activated rate coefficient.

    :param rate: The rate object
    :param t: Temperature [K]
    :param concm: The effective third-body concentration(s) [kmol/m^3]
    :return: The rate coefficient
    """
    k_inf = arrhenius_value(rate.k, t)
    k_0 = arrhenius_value(rate.k0, t)
    pr = concm * k_0 / (k_inf + SMALL_NUMBER)
    f = blend_value(rate.f, t, pr)
    if type_(rate) == RateType.ACTIVATED:
        return k_0 * f / (1.0 + pr)

    return k_inf * pr / (1.0 + pr) * f


def plog_interpolation(
    log_ps: numpy.ndarray, log_p: float
) -> tuple[int, int, float]:
    """Locate the P-Log nodes bracketing a pressure.

    Pressures outside the table are clamped to the nearest end node.

    :param log_ps: Natural logarithms of the node pressures, ascending
    :param log_p: Natural logarithm of the pressure
    :return: The lower and upper node indices and the interpolation weight of the
        upper node
    """
    if log_p <= log_ps[0]:
        return 0, 0, 0.0

    if log_p >= log_ps[-1]:
        return len(log_ps) - 1, len(log_ps) - 1, 0.0

    hi = int(numpy.searchsorted(log_ps, log_p, side="right"))
    lo = hi - 1
    weight = (log_p - log_ps[lo]) / (log_ps[hi] - log_ps[lo])
    return lo, hi, float(weight)


def plog_value(rate: PlogRate, t: float, p: float) -> float:
    """Evaluate a P-Log rate coefficient.

    :param rate: The rate object
    :param t: Temperature [K]
    :param p: Pressure [Pa]
    :return: The rate coefficient
    """
    node_dct = plog_nodes(rate)
    log_ps = numpy.log(list(node_dct))
    k_nodes = [sum(arrhenius_value(k, t) for k in ks) for ks in node_dct.values()]
    lo, hi, weight = plog_interpolation(log_ps, numpy.log(p))
    log_k_lo = numpy.log(k_nodes[lo])
    log_k_hi = numpy.log(k_nodes[hi])
    return float(numpy.exp(log_k_lo + weight * (log_k_hi - log_k_lo)))


def chebyshev_reduced_temperature(t: float, t_limits: tuple[float, float]) -> float:
    """Map a temperature onto [-1, 1] in inverse temperature, clamping.

    :param t: Temperature [K]
    :param t_limits: The min/max temperature limits [K]
    :return: The reduced temperature
    """
    tmin, tmax = t_limits
    tr = (2.0 / t - 1.0 / tmin - 1.0 / tmax) / (1.0 / tmax - 1.0 / tmin)
    return float(numpy.clip(tr, -1.0, 1.0))


def chebyshev_reduced_pressure(p: float, p_limits: tuple[float, float]) -> float:
    """Map a pressure onto [-1, 1] in log pressure, clamping.

    :param p: Pressure [Pa]
    :param p_limits: The min/max pressure limits [Pa]
    :return: The reduced pressure
    """
    log_pmin, log_pmax = numpy.log10(p_limits)
    pr = (2.0 * numpy.log10(p) - log_pmin - log_pmax) / (log_pmax - log_pmin)
    return float(numpy.clip(pr, -1.0, 1.0))


def chebyshev_value(rate: ChebRate, t: float, p: float) -> float:
    """Evaluate a Chebyshev rate coefficient.

    :param rate: The rate object
    :param t: Temperature [K]
    :param p: Pressure [Pa]
    :return: The rate coefficient
    """
    tr = chebyshev_reduced_temperature(t, rate.t_limits)
    pr = chebyshev_reduced_pressure(p, rate.p_limits)
    return float(10.0 ** chebyshev.chebval2d(tr, pr, rate.coeffs))


def blowers_masel_activation_energy(
    e0: ArrayLike, w: ArrayLike, dh: ArrayLike
) -> ArrayLike:
    """Evaluate the Blowers-Masel effective activation energy.

    :param e0: The intrinsic barrier(s) [J/kmol]
    :param w: The bond dissociation energy(ies) [J/kmol]
    :param dh: The enthalpy(ies) of reaction [J/kmol]
    :return: The effective activation energy(ies) [J/kmol]
    """
    e0, w, dh = numpy.broadcast_arrays(*map(numpy.asarray, (e0, w, dh)))
    vp = 2.0 * w * (w + e0) / (w - e0)
    vp_2w_dh = vp - 2.0 * w + dh
    with numpy.errstate(divide="ignore", invalid="ignore"):
        ea = (w + dh / 2.0) * vp_2w_dh**2 / (vp**2 - 4.0 * w**2 + dh**2)

    ea = numpy.where(dh >= 4.0 * e0, dh, ea)
    ea = numpy.where(dh < -4.0 * e0, 0.0, ea)
    return ea[()] if numpy.ndim(ea) == 0 else ea


def blowers_masel_value(rate: BlowersMaselRate, t: float, dh: float) -> float:
    """Evaluate a Blowers-Masel rate coefficient.

    :param rate: The rate object
    :param t: Temperature [K]
    :param dh: The enthalpy of reaction [J/kmol]
    :return: The rate coefficient
    """
    ea = blowers_masel_activation_energy(rate.k.E, rate.w, dh)
    k = dataclasses.replace(rate.k, E=ea)
    return float(arrhenius_value(k, t))
