"""Fixed-width format of the PDG and NuBase tables.

Each element occupies one line, where fields have a fixed size and are
separated by a single space. Strings and numbers are right-aligned, and
missing values are left blank. Lines starting with :code:`*` are comments.

The same field definitions are used to read (`parse_pdg_line`,
`parse_nubase_line`) and to write (`format_pdg_element`,
`format_nubase_element`) the tables, so both operations are always
consistent.
"""

from typing import Dict, Optional, Sequence, Tuple

from reactions.elements import (
    NuBaseElement,
    PDGElement,
    ValueAndErrors,
    ValueAndErrorWithTag,
)
from reactions.units import SystemOfUnits

COMMENT_PREFIX = "*"

NAME_SIZE = 16
NUBASE_NAME_SIZE = 8
PDG_ID_SIZE = 10
NUBASE_ID_SIZE = 9
THREE_CHARGE_SIZE = 2
AZ_SIZE = 3
VALUE_SIZE = 16
ERROR_SIZE = 9
BOOL_SIZE = 1

PDG_FIELDS: Sequence[Tuple[str, int]] = (
    ("name", NAME_SIZE),
    ("pdg_id", PDG_ID_SIZE),
    ("three_charge", THREE_CHARGE_SIZE),
    ("mass", VALUE_SIZE),
    ("mass_error_lower", ERROR_SIZE),
    ("mass_error_upper", ERROR_SIZE),
    ("width", VALUE_SIZE),
    ("width_error_lower", ERROR_SIZE),
    ("width_error_upper", ERROR_SIZE),
    ("is_self_cc", BOOL_SIZE),
)

NUBASE_FIELDS: Sequence[Tuple[str, int]] = (
    ("name", NUBASE_NAME_SIZE),
    ("nubase_id", NUBASE_ID_SIZE),
    ("atomic_number", AZ_SIZE),
    ("mass_number", AZ_SIZE),
    ("mass_excess", VALUE_SIZE),
    ("mass_excess_error", ERROR_SIZE),
    ("mass_excess_from_systematics", BOOL_SIZE),
    ("is_stable", BOOL_SIZE),
    ("half_life", VALUE_SIZE),
    ("half_life_error", ERROR_SIZE),
    ("half_life_from_systematics", BOOL_SIZE),
    ("is_ground_state", BOOL_SIZE),
)


def line_size(fields: Sequence[Tuple[str, int]]) -> int:
    """Number of characters of a line, without the line break."""
    return sum(size for _, size in fields) + len(fields) - 1


def is_comment(line: str) -> bool:
    return line.startswith(COMMENT_PREFIX) or not line.strip()


def split_line(
    line: str, fields: Sequence[Tuple[str, int]]
) -> Dict[str, Optional[str]]:
    """Split a line into its fields, with `None` for the blank ones."""
    line = line.rstrip("\r\n")
    expected_size = line_size(fields)
    if len(line) != expected_size:
        raise ValueError(
            f"Expected a line with {expected_size} characters, "
            f"got {len(line)}"
        )
    values: Dict[str, Optional[str]] = dict()
    start = 0
    for name, size in fields:
        stop = start + size
        if stop < len(line) and line[stop] != " ":
            raise ValueError(
                f'Field "{name}" is not followed by a space '
                f"(column {stop + 1})"
            )
        value = line[start:stop].strip()
        values[name] = value if value else None
        start = stop + 1
    return values


def _required(values: Dict[str, Optional[str]], name: str) -> str:
    value = values[name]
    if value is None:
        raise ValueError(f'Field "{name}" can not be empty')
    return value


def _to_bool(value: str) -> bool:
    if value not in ("0", "1"):
        raise ValueError(f'Invalid boolean flag "{value}"')
    return value == "1"


def _optional_float(value: Optional[str]) -> float:
    if value is None:
        return 0.0
    return float(value)


def parse_pdg_line(
    line: str, units: Optional[SystemOfUnits] = None
) -> PDGElement:
    values = split_line(line, PDG_FIELDS)
    mass_and_errors = None
    if values["mass"] is not None:
        mass_and_errors = ValueAndErrors(
            float(values["mass"]),
            _optional_float(values["mass_error_lower"]),
            _optional_float(values["mass_error_upper"]),
        )
    width_and_errors = None
    if values["width"] is not None:
        width_and_errors = ValueAndErrors(
            float(values["width"]),
            _optional_float(values["width_error_lower"]),
            _optional_float(values["width_error_upper"]),
        )
    return PDGElement(
        name=_required(values, "name"),
        pdg_id=int(_required(values, "pdg_id")),
        three_charge=int(_required(values, "three_charge")),
        mass_and_errors=mass_and_errors,
        width_and_errors=width_and_errors,
        is_self_cc=_to_bool(_required(values, "is_self_cc")),
        units=units,
    )


def parse_nubase_line(
    line: str, units: Optional[SystemOfUnits] = None
) -> NuBaseElement:
    values = split_line(line, NUBASE_FIELDS)
    mass_excess = None
    if values["mass_excess"] is not None:
        mass_excess = ValueAndErrorWithTag(
            float(values["mass_excess"]),
            _optional_float(values["mass_excess_error"]),
            _to_bool(_required(values, "mass_excess_from_systematics")),
        )
    half_life = None
    if values["half_life"] is not None:
        half_life = ValueAndErrorWithTag(
            float(values["half_life"]),
            _optional_float(values["half_life_error"]),
            _to_bool(_required(values, "half_life_from_systematics")),
        )
    return NuBaseElement(
        name=_required(values, "name"),
        nubase_id=int(_required(values, "nubase_id")),
        atomic_number=int(_required(values, "atomic_number")),
        mass_number=int(_required(values, "mass_number")),
        mass_excess_and_error_with_tag=mass_excess,
        is_stable=_to_bool(_required(values, "is_stable")),
        half_life_and_error_with_tag=half_life,
        is_ground_state=_to_bool(_required(values, "is_ground_state")),
        units=units,
    )


def _fit(field: str, text: str, size: int) -> str:
    if len(text) > size:
        raise ValueError(
            f'Value "{text}" does not fit in field "{field}" '
            f"({size} characters)"
        )
    return f"{text:>{size}}"


def _format_value(value: Optional[float]) -> str:
    if value is None:
        return ""
    return f"{value:.{VALUE_SIZE - 7}e}"


def _format_error(value: Optional[float], digits: int) -> str:
    if value is None:
        return ""
    return f"{abs(value):.{digits}e}"


def _format_bool(value: bool) -> str:
    return str(int(bool(value)))


def _join(
    fields: Sequence[Tuple[str, int]], values: Dict[str, str]
) -> str:
    return " ".join(_fit(name, values[name], size) for name, size in fields)


def format_pdg_element(element: PDGElement) -> str:
    """Represent a `.PDGElement` as a line of a table (without line break).

    Values are written in the native units of the table (GeV).
    """
    mass = element.mass_and_errors
    width = element.width_and_errors
    values = {
        "name": element.name,
        "pdg_id": str(element.pdg_id),
        "three_charge": f"{element.three_charge:+d}",
        "mass": _format_value(mass.value if mass else None),
        "mass_error_lower": _format_error(
            mass.error_lower if mass else None, ERROR_SIZE - 7
        ),
        "mass_error_upper": _format_error(
            mass.error_upper if mass else None, ERROR_SIZE - 7
        ),
        "width": _format_value(width.value if width else None),
        "width_error_lower": _format_error(
            width.error_lower if width else None, ERROR_SIZE - 7
        ),
        "width_error_upper": _format_error(
            width.error_upper if width else None, ERROR_SIZE - 7
        ),
        "is_self_cc": _format_bool(element.is_self_cc),
    }
    return _join(PDG_FIELDS, values)


def format_nubase_element(element: NuBaseElement) -> str:
    """Represent a `.NuBaseElement` as a line of a table.

    Values are written in the native units of the table (keV and seconds).
    """
    mass_excess = element.mass_excess_and_error_with_tag
    half_life = element.half_life_and_error_with_tag
    values = {
        "name": element.name,
        "nubase_id": str(element.nubase_id),
        "atomic_number": str(element.atomic_number),
        "mass_number": str(element.mass_number),
        "mass_excess": _format_value(
            mass_excess.value if mass_excess else None
        ),
        "mass_excess_error": _format_error(
            mass_excess.error if mass_excess else None, 1
        ),
        "mass_excess_from_systematics": _format_bool(
            mass_excess.tag if mass_excess else False
        ),
        "is_stable": _format_bool(element.is_stable),
        "half_life": _format_value(half_life.value if half_life else None),
        "half_life_error": _format_error(
            half_life.error if half_life else None, 1
        ),
        "half_life_from_systematics": _format_bool(
            half_life.tag if half_life else False
        ),
        "is_ground_state": _format_bool(element.is_ground_state),
    }
    return _join(NUBASE_FIELDS, values)

