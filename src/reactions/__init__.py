"""Parse and compare particle reactions and decays.

Reactions and decays are written as text, like :code:`"pi+ -> mu+ nu(mu)"`,
and converted into trees whose leaves are elements. Elements can be plain
strings, particles from the PDG or nuclides from NuBase:

  `reactions.elements`
    ― the element types and their kinds.

  `reactions.database`
    ― databases of PDG and NuBase elements, read from tables bundled with
    the package. The values of the elements are reported in the units of
    the `.SystemOfUnits` of each database.

  `reactions.parser` and `reactions.nodes`
    ― build `.Reaction` and `.Decay` trees from text and compare them
    regardless of the order of reactants and products.

Finally, the `.tables` module writes the tables read by the databases.
"""

__all__ = [
    # Main modules
    "context",
    "database",
    "elements",
    "errors",
    "nodes",
    "parser",
    "tables",
    "units",
    # Facade
    "Decay",
    "NodeKind",
    "Reaction",
    "ElementKind",
    "NuBaseElement",
    "PDGElement",
    "StringElement",
    "SystemOfUnits",
    "DatabaseError",
    "MissingElementError",
    "ProcessSyntaxError",
    "ReactionsError",
    "decay",
    "reaction",
    "is_element",
    "node_type",
    "make_decay",
    "make_reaction",
    "nubase_database",
    "nubase_element",
    "nubase_system_of_units",
    "pdg_database",
    "pdg_element",
    "pdg_system_of_units",
    "get_context",
    "reset_context",
]

from typing import Union

from . import (
    context,
    database,
    elements,
    errors,
    nodes,
    parser,
    tables,
    units,
)
from .context import (
    get_context,
    nubase_database,
    nubase_system_of_units,
    pdg_database,
    pdg_system_of_units,
    reset_context,
)
from .elements import ElementKind, NuBaseElement, PDGElement, StringElement
from .errors import (
    DatabaseError,
    MissingElementError,
    ProcessSyntaxError,
    ReactionsError,
)
from .nodes import Decay, NodeKind, Reaction, is_element, node_type
from .parser import make_decay, make_reaction
from .units import SystemOfUnits

__version__ = "0.1.0"

reaction = make_reaction
"""An alias to `.make_reaction`."""

decay = make_decay
"""An alias to `.make_decay`."""


def pdg_element(key: Union[str, int]) -> PDGElement:
    """Search for a particle in the default PDG database.

    >>> pdg_element("pi+") == pdg_element(211)
    True
    """
    return pdg_database().lookup(key)  # type: ignore


def nubase_element(key: Union[str, int]) -> NuBaseElement:
    """Search for a nuclide in the default NuBase database."""
    return nubase_database().lookup(key)  # type: ignore
