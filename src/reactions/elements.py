"""Immutable element types, the leaves of a reaction or decay tree.

Three kinds of elements exist (see `ElementKind`):

- `StringElement`: a free-form name, used when no database is needed.
- `PDGElement`: a particle from the Particle Data Group tables.
- `NuBaseElement`: a nuclide from the NuBase tables.

An element is identified by its name (string elements) or by its numeric ID
(PDG and NuBase elements), so two elements are equal if their IDs are equal,
no matter the rest of their properties. Elements of different kinds can not
be compared, and trying to do so raises a `TypeError`.

Physical values of PDG and NuBase elements are stored in the native units of
their table. The values returned by the properties (like `PDGElement.mass`)
are converted on access with the `.SystemOfUnits` of the database the
element comes from.
"""

import re
from enum import Enum
from math import sqrt
from typing import Hashable, Optional, Tuple, Union

import attr
from attr.converters import optional
from attr.validators import instance_of

from reactions.units import SystemOfUnits


class ElementKind(Enum):
    STRING = "string"
    PDG = "pdg"
    NUBASE = "nubase"


def to_element_kind(kind: Union[str, ElementKind]) -> ElementKind:
    if isinstance(kind, ElementKind):
        return kind
    try:
        return ElementKind(kind)
    except ValueError:
        valid = [k.value for k in ElementKind]
        raise ValueError(
            f'Unknown element kind "{kind}"; valid kinds are {valid}'
        ) from None


class Element:
    """Base class of all the elements.

    Subclasses define the `kind` class attribute and the `_identity` method,
    that returns the key used to compare and hash the element.
    """

    kind: ElementKind

    def _identity(self) -> Hashable:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Element):
            if other.kind is not self.kind:
                raise TypeError(
                    f"Can not compare a {self.kind.value} element with a "
                    f"{other.kind.value} element"
                )
            return self._identity() == other._identity()
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash((self.kind, self._identity()))

    def __str__(self) -> str:
        return self.name  # type: ignore  # pylint: disable=no-member


@attr.s(frozen=True, eq=False)
class StringElement(Element):
    name: str = attr.ib(validator=instance_of(str))

    kind = ElementKind.STRING

    def _identity(self) -> Hashable:
        return self.name


@attr.s(frozen=True)
class ValueAndErrors:
    """Value with asymmetric errors, as quoted by the PDG."""

    value: float = attr.ib(converter=float)
    error_lower: float = attr.ib(converter=float, default=0.0)
    error_upper: float = attr.ib(converter=float, default=0.0)

    @property
    def error(self) -> float:
        return sqrt(self.error_lower ** 2 + self.error_upper ** 2)


@attr.s(frozen=True)
class ValueAndErrorWithTag:
    """Value with a symmetric error and a flag, as quoted by NuBase.

    The `tag` tells whether the value has been estimated from systematics.
    """

    value: float = attr.ib(converter=float)
    error: float = attr.ib(converter=float, default=0.0)
    tag: bool = attr.ib(converter=bool, default=False)


def _to_value_and_errors(
    value: Union[ValueAndErrors, Tuple[float, float, float]]
) -> ValueAndErrors:
    if isinstance(value, ValueAndErrors):
        return value
    return ValueAndErrors(*value)


def _to_value_and_error_with_tag(
    value: Union[ValueAndErrorWithTag, Tuple[float, float, bool]]
) -> ValueAndErrorWithTag:
    if isinstance(value, ValueAndErrorWithTag):
        return value
    return ValueAndErrorWithTag(*value)


@attr.s(frozen=True, eq=False)
class PDGElement(Element):  # pylint: disable=too-many-instance-attributes
    """Particle as defined in the PDG tables.

    Mass and width (and their errors) might be missing for some particles, in
    which case the corresponding properties are `None`. Energies are stored
    in GeV.
    """

    name: str = attr.ib(validator=instance_of(str))
    pdg_id: int = attr.ib(validator=instance_of(int))
    three_charge: int = attr.ib(validator=instance_of(int))
    mass_and_errors: Optional[ValueAndErrors] = attr.ib(
        default=None, converter=optional(_to_value_and_errors)
    )
    width_and_errors: Optional[ValueAndErrors] = attr.ib(
        default=None, converter=optional(_to_value_and_errors)
    )
    is_self_cc: bool = attr.ib(default=False, converter=bool)
    units: Optional[SystemOfUnits] = attr.ib(
        default=None, kw_only=True, repr=False
    )

    kind = ElementKind.PDG

    def _identity(self) -> Hashable:
        return self.pdg_id

    def __energy(self, value: float) -> float:
        if self.units is None:
            return value
        return value * self.units.energy_scale_factor()

    @property
    def charge(self) -> float:
        return self.three_charge / 3.0

    @property
    def mass(self) -> Optional[float]:
        if self.mass_and_errors is None:
            return None
        return self.__energy(self.mass_and_errors.value)

    @property
    def mass_error_lower(self) -> Optional[float]:
        if self.mass_and_errors is None:
            return None
        return self.__energy(self.mass_and_errors.error_lower)

    @property
    def mass_error_upper(self) -> Optional[float]:
        if self.mass_and_errors is None:
            return None
        return self.__energy(self.mass_and_errors.error_upper)

    @property
    def mass_error(self) -> Optional[float]:
        if self.mass_and_errors is None:
            return None
        return self.__energy(self.mass_and_errors.error)

    @property
    def width(self) -> Optional[float]:
        if self.width_and_errors is None:
            return None
        return self.__energy(self.width_and_errors.value)

    @property
    def width_error_lower(self) -> Optional[float]:
        if self.width_and_errors is None:
            return None
        return self.__energy(self.width_and_errors.error_lower)

    @property
    def width_error_upper(self) -> Optional[float]:
        if self.width_and_errors is None:
            return None
        return self.__energy(self.width_and_errors.error_upper)

    @property
    def width_error(self) -> Optional[float]:
        if self.width_and_errors is None:
            return None
        return self.__energy(self.width_and_errors.error)

    @property
    def latex_name(self) -> str:
        return _pdg_latex_name(self.name)


@attr.s(frozen=True, eq=False)
class NuBaseElement(Element):  # pylint: disable=too-many-instance-attributes
    """Nuclide as defined in the NuBase tables.

    The ID is built from the mass number, atomic number and isomer as
    :code:`AAAZZZIII`. Mass excesses are stored in keV and half-lives in
    seconds. Stable nuclides have no half-life.
    """

    name: str = attr.ib(validator=instance_of(str))
    nubase_id: int = attr.ib(validator=instance_of(int))
    atomic_number: int = attr.ib(validator=instance_of(int))
    mass_number: int = attr.ib(validator=instance_of(int))
    mass_excess_and_error_with_tag: Optional[ValueAndErrorWithTag] = attr.ib(
        default=None, converter=optional(_to_value_and_error_with_tag)
    )
    is_stable: bool = attr.ib(default=False, converter=bool)
    half_life_and_error_with_tag: Optional[ValueAndErrorWithTag] = attr.ib(
        default=None, converter=optional(_to_value_and_error_with_tag)
    )
    is_ground_state: bool = attr.ib(default=True, converter=bool)
    units: Optional[SystemOfUnits] = attr.ib(
        default=None, kw_only=True, repr=False
    )

    kind = ElementKind.NUBASE

    def _identity(self) -> Hashable:
        return self.nubase_id

    def __energy(self, value: float) -> float:
        if self.units is None:
            return value
        return value * self.units.energy_scale_factor()

    def __time(self, value: float) -> float:
        if self.units is None:
            return value
        return value * self.units.time_scale_factor()

    @property
    def mass_excess(self) -> Optional[float]:
        if self.mass_excess_and_error_with_tag is None:
            return None
        return self.__energy(self.mass_excess_and_error_with_tag.value)

    @property
    def mass_excess_error(self) -> Optional[float]:
        if self.mass_excess_and_error_with_tag is None:
            return None
        return self.__energy(self.mass_excess_and_error_with_tag.error)

    @property
    def mass_excess_from_systematics(self) -> Optional[bool]:
        if self.mass_excess_and_error_with_tag is None:
            return None
        return self.mass_excess_and_error_with_tag.tag

    @property
    def half_life(self) -> Optional[float]:
        if self.half_life_and_error_with_tag is None:
            return None
        return self.__time(self.half_life_and_error_with_tag.value)

    @property
    def half_life_error(self) -> Optional[float]:
        if self.half_life_and_error_with_tag is None:
            return None
        return self.__time(self.half_life_and_error_with_tag.error)

    @property
    def half_life_from_systematics(self) -> Optional[bool]:
        if self.half_life_and_error_with_tag is None:
            return None
        return self.half_life_and_error_with_tag.tag

    @property
    def latex_name(self) -> str:
        return _nubase_latex_name(self.name)


def nubase_id(mass_number: int, atomic_number: int, isomer: str = "") -> int:
    """Compute the ID of a nuclide, with the isomer given as a letter."""
    isomer_number = ord(isomer) if isomer else 0
    return mass_number * 1000000 + atomic_number * 1000 + isomer_number


_GREEK_LETTERS = {
    "alpha",
    "beta",
    "gamma",
    "delta",
    "epsilon",
    "zeta",
    "eta",
    "theta",
    "iota",
    "kappa",
    "lambda",
    "mu",
    "nu",
    "xi",
    "pi",
    "rho",
    "sigma",
    "tau",
    "upsilon",
    "phi",
    "chi",
    "psi",
    "omega",
    "Gamma",
    "Delta",
    "Theta",
    "Lambda",
    "Xi",
    "Pi",
    "Sigma",
    "Upsilon",
    "Phi",
    "Psi",
    "Omega",
}

_PDG_NAME_PATTERN = re.compile(
    r"^(?P<base>[A-Za-z]+(?:/[A-Za-z]+)?)"
    r"(?:\((?P<sub>[A-Za-z]+[0-9]*|[0-9])\))?"
    r"(?P<primes>'*)"
    r"(?P<star>\*?)"
    r"(?:\((?P<mass>[0-9]+[A-Z]?)\))?"
    r"(?P<bar>~?)"
    r"(?P<charge>[+\-0]*)$"
)

_NUBASE_NAME_PATTERN = re.compile(
    r"^(?P<mass_number>[0-9]+)(?P<symbol>[A-Za-z]+)"
    r"(?:\((?P<isomer>[a-z]+)\))?$"
)

_NUBASE_SPECIAL_LATEX_NAMES = {
    "gamma": r"\gamma",
    "e-": "e^{-}",
    "e+": "e^{+}",
}


def _to_latex_symbol(symbol: str) -> str:
    if symbol in _GREEK_LETTERS:
        return f"\\{symbol}"
    return symbol


def _pdg_latex_name(name: str) -> str:
    match = _PDG_NAME_PATTERN.match(name)
    if match is None:
        return name
    base = "/".join(_to_latex_symbol(s) for s in match["base"].split("/"))
    if match["bar"]:
        base = f"\\bar{{{base}}}"
    latex = base
    if match["sub"]:
        latex += f"_{{{_to_latex_symbol(match['sub'])}}}"
    modifiers = match["primes"] + match["star"]
    charge = match["charge"]
    if match["mass"]:
        if modifiers:
            latex += f"^{{{modifiers}}}"
        latex += f"({match['mass']})"
        if charge:
            latex += f"^{{{charge}}}"
    elif modifiers or charge:
        latex += f"^{{{modifiers}{charge}}}"
    return latex


def _nubase_latex_name(name: str) -> str:
    if name in _NUBASE_SPECIAL_LATEX_NAMES:
        return _NUBASE_SPECIAL_LATEX_NAMES[name]
    match = _NUBASE_NAME_PATTERN.match(name)
    if match is None:
        return f"\\ce{{{name}}}"
    latex = f"^{{{match['mass_number']}}}{match['symbol']}"
    if match["isomer"]:
        latex += f"^{{{match['isomer']}}}"
    return f"\\ce{{{latex}}}"
