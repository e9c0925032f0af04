"""Systems of units applied to the values stored in the databases.

Databases keep their values in the units of the table they read (GeV for
PDG, keV and seconds for NuBase). A `SystemOfUnits` only determines the
factor applied to those raw values every time they are accessed, so
switching units affects every element of a database, including the ones
that were retrieved before the switch.
"""

from typing import Dict, Optional

import attr

ENERGY_UNITS: Dict[str, float] = {
    "eV": 1.0,
    "keV": 1e3,
    "MeV": 1e6,
    "GeV": 1e9,
    "TeV": 1e12,
    "PeV": 1e15,
}
"""Scale of each energy unit with respect to :code:`eV`."""

TIME_UNITS: Dict[str, float] = {
    "ys": 1e-24,
    "zs": 1e-21,
    "as": 1e-18,
    "fs": 1e-15,
    "ps": 1e-12,
    "ns": 1e-9,
    "us": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
}
TIME_UNITS["m"] = 60 * TIME_UNITS["s"]
TIME_UNITS["h"] = 60 * TIME_UNITS["m"]
TIME_UNITS["d"] = 24 * TIME_UNITS["h"]
TIME_UNITS["y"] = 365 * TIME_UNITS["d"]
TIME_UNITS["ky"] = 1e3 * TIME_UNITS["y"]
TIME_UNITS["My"] = 1e6 * TIME_UNITS["y"]
TIME_UNITS["Gy"] = 1e9 * TIME_UNITS["y"]


def _check_units(name: str, known: Dict[str, float], magnitude: str) -> str:
    if name not in known:
        raise ValueError(
            f'Unknown {magnitude} units "{name}"; '
            f"valid units are {list(known)}"
        )
    return name


def _validate_energy_units(_: object, __: attr.Attribute, value: str) -> None:
    _check_units(value, ENERGY_UNITS, "energy")


def _validate_time_units(
    _: object, __: attr.Attribute, value: Optional[str]
) -> None:
    if value is not None:
        _check_units(value, TIME_UNITS, "time")


@attr.s(eq=False)
class SystemOfUnits:
    """Mutable set of units used to report the values of a database.

    The native units are those in which the values are stored, and they can
    not be changed. The current units start equal to the native ones.
    """

    native_energy_units: str = attr.ib(validator=_validate_energy_units)
    native_time_units: Optional[str] = attr.ib(
        default=None, validator=_validate_time_units
    )
    _energy_units: str = attr.ib(init=False)
    _time_units: Optional[str] = attr.ib(init=False)

    def __attrs_post_init__(self) -> None:
        self._energy_units = self.native_energy_units
        self._time_units = self.native_time_units

    @property
    def has_time_units(self) -> bool:
        return self.native_time_units is not None

    def get_energy_units(self) -> str:
        return self._energy_units

    def set_energy_units(self, name: str) -> None:
        self._energy_units = _check_units(name, ENERGY_UNITS, "energy")

    def get_time_units(self) -> str:
        if self._time_units is None:
            raise ValueError("This system of units has no time units")
        return self._time_units

    def set_time_units(self, name: str) -> None:
        if not self.has_time_units:
            raise ValueError("This system of units has no time units")
        self._time_units = _check_units(name, TIME_UNITS, "time")

    def energy_scale_factor(self) -> float:
        """Factor converting a native energy into the current units."""
        if self._energy_units == self.native_energy_units:
            return 1.0
        return (
            ENERGY_UNITS[self.native_energy_units]
            / ENERGY_UNITS[self._energy_units]
        )

    def time_scale_factor(self) -> float:
        """Factor converting a native time into the current units."""
        if self._time_units is None or self.native_time_units is None:
            raise ValueError("This system of units has no time units")
        if self._time_units == self.native_time_units:
            return 1.0
        return (
            TIME_UNITS[self.native_time_units] / TIME_UNITS[self._time_units]
        )

    def reset(self) -> None:
        """Go back to the native units."""
        self._energy_units = self.native_energy_units
        self._time_units = self.native_time_units
