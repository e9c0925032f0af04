"""Write database tables.

The PDG table bundled with the package can be regenerated from the
`particle <https://github.com/scikit-hep/particle>`_ package with
`write_pdg_table`.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Union

from particle import Particle as PdgDatabase

from reactions.elements import (
    Element,
    ElementKind,
    NuBaseElement,
    PDGElement,
    ValueAndErrors,
    to_element_kind,
)
from reactions.table_format import (
    COMMENT_PREFIX,
    NAME_SIZE,
    NUBASE_FIELDS,
    PDG_FIELDS,
    format_nubase_element,
    format_pdg_element,
)


def _format_element(element: Element, kind: ElementKind) -> str:
    if kind is ElementKind.PDG and isinstance(element, PDGElement):
        return format_pdg_element(element)
    if kind is ElementKind.NUBASE and isinstance(element, NuBaseElement):
        return format_nubase_element(element)
    raise TypeError(
        f"Can not write a {element.__class__.__name__} in a "
        f"{kind.value} table"
    )


def _default_header(kind: ElementKind) -> List[str]:
    fields = PDG_FIELDS if kind is ElementKind.PDG else NUBASE_FIELDS
    return [
        f"{kind.value} table",
        "fields: " + ", ".join(name for name, _ in fields),
    ]


def write_table(
    filename: str,
    elements: Iterable[Element],
    kind: Union[str, ElementKind],
    header: Optional[Iterable[str]] = None,
) -> None:
    """Write elements to a file in the format read by the databases.

    Every line of the header is written as a comment.
    """
    kind = to_element_kind(kind)
    if kind is ElementKind.STRING:
        raise ValueError("String elements can not be written to a table")
    if header is None:
        header = _default_header(kind)
    lines = [f"{COMMENT_PREFIX} {line}".rstrip() for line in header]
    lines += [_format_element(element, kind) for element in elements]
    with open(filename, "w") as stream:
        stream.write("\n".join(lines) + "\n")
    logging.info(f'Wrote {len(lines)} lines to "{filename}"')


def _to_gev(value: Optional[float]) -> float:
    if value is None:
        return 0.0
    return float(value) / 1e3


def _to_value_and_errors(
    value: Optional[float],
    error_lower: Optional[float],
    error_upper: Optional[float],
) -> Optional[ValueAndErrors]:
    if value is None:
        return None
    return ValueAndErrors(
        _to_gev(value), _to_gev(error_lower), _to_gev(error_upper)
    )


# nuclei use ion codes, 10LZZZAAAI
_FIRST_ION_ID = 1000000000


# cspell:ignore pdgid
def _convert_pdg_instance(pdg_particle: PdgDatabase) -> PDGElement:
    if pdg_particle.three_charge is None:
        raise ValueError(f"PDG instance has no charge:\n{pdg_particle}")
    return PDGElement(
        name=str(pdg_particle.name),
        pdg_id=int(pdg_particle.pdgid),
        three_charge=int(pdg_particle.three_charge),
        mass_and_errors=_to_value_and_errors(
            pdg_particle.mass, pdg_particle.mass_lower, pdg_particle.mass_upper
        ),
        width_and_errors=_to_value_and_errors(
            pdg_particle.width,
            pdg_particle.width_lower,
            pdg_particle.width_upper,
        ),
        is_self_cc=bool(pdg_particle.is_self_conjugate),
    )


def load_pdg_elements(
    function: Optional[Callable[[PdgDatabase], bool]] = None
) -> List[PDGElement]:
    """Convert the particles of the `particle` package into `.PDGElement`.

    Masses and widths are converted from MeV to GeV. Nuclei, particles
    without charge and particles whose name, or the name of their
    antiparticle, does not fit in a table are skipped. An additional
    selection can be given with ``function``.
    """
    too_long = {
        int(item.pdgid)
        for item in PdgDatabase.findall(
            lambda item: len(str(item.name)) > NAME_SIZE
        )
    }
    all_pdg_particles = PdgDatabase.findall(
        lambda item: abs(int(item.pdgid)) < _FIRST_ION_ID
        and item.three_charge is not None
        and int(item.pdgid) not in too_long
        and -int(item.pdgid) not in too_long
        and (function is None or function(item))
    )
    elements: Dict[str, PDGElement] = dict()
    for pdg_particle in all_pdg_particles:
        element = _convert_pdg_instance(pdg_particle)
        if element.name in elements:
            logging.warning(
                f'Skipping particle with duplicated name "{element.name}"'
                f" (PDG ID {element.pdg_id})"
            )
            continue
        elements[element.name] = element
    return list(elements.values())


def write_pdg_table(
    filename: str, function: Optional[Callable[[PdgDatabase], bool]] = None
) -> None:
    elements = load_pdg_elements(function)
    write_table(
        filename,
        elements,
        ElementKind.PDG,
        header=_default_header(ElementKind.PDG)
        + ["generated with the particle package, energies in GeV"],
    )
