"""Databases and systems of units shared by the whole process.

A `Context` holds one database (and its system of units) per element kind.
The default context, returned by `get_context`, is created the first time it
is needed and reads the tables bundled with the package. Tests and
applications that need a fresh state can call `reset_context`.
"""

from os.path import dirname, join, realpath
from typing import Callable, Dict, Optional, Union

from reactions.database import Database, NuBaseDatabase, PDGDatabase
from reactions.elements import (
    Element,
    ElementKind,
    StringElement,
    to_element_kind,
)
from reactions.units import SystemOfUnits

__DATA_DIRECTORY = join(dirname(realpath(__file__)), "data")

DEFAULT_PDG_TABLE = join(__DATA_DIRECTORY, "pdg_table.txt")
DEFAULT_NUBASE_TABLE = join(__DATA_DIRECTORY, "nubase_table.txt")

Resolver = Callable[[str], Element]


class Context:
    def __init__(
        self,
        pdg_table: Optional[str] = DEFAULT_PDG_TABLE,
        nubase_table: Optional[str] = DEFAULT_NUBASE_TABLE,
    ) -> None:
        self.__databases: Dict[ElementKind, Database] = {
            ElementKind.PDG: PDGDatabase(pdg_table),
            ElementKind.NUBASE: NuBaseDatabase(nubase_table),
        }

    def database(self, kind: Union[str, ElementKind]) -> Database:
        kind = to_element_kind(kind)
        if kind not in self.__databases:
            raise ValueError(f'There is no database for "{kind.value}"')
        return self.__databases[kind]

    @property
    def pdg_database(self) -> PDGDatabase:
        return self.__databases[ElementKind.PDG]  # type: ignore

    @property
    def nubase_database(self) -> NuBaseDatabase:
        return self.__databases[ElementKind.NUBASE]  # type: ignore

    @property
    def pdg_system_of_units(self) -> SystemOfUnits:
        return self.pdg_database.units

    @property
    def nubase_system_of_units(self) -> SystemOfUnits:
        return self.nubase_database.units

    def resolver(self, kind: Union[str, ElementKind]) -> Resolver:
        """Function converting a name into an element of the given kind."""
        kind = to_element_kind(kind)
        if kind is ElementKind.STRING:
            return StringElement
        return self.database(kind).lookup


_DEFAULT_CONTEXT: Optional[Context] = None


def get_context() -> Context:
    global _DEFAULT_CONTEXT  # pylint: disable=global-statement
    if _DEFAULT_CONTEXT is None:
        _DEFAULT_CONTEXT = Context()
    return _DEFAULT_CONTEXT


def reset_context() -> None:
    """Forget the default context, so it is created again when needed."""
    global _DEFAULT_CONTEXT  # pylint: disable=global-statement
    _DEFAULT_CONTEXT = None


def pdg_database() -> PDGDatabase:
    return get_context().pdg_database


def nubase_database() -> NuBaseDatabase:
    return get_context().nubase_database


def pdg_system_of_units() -> SystemOfUnits:
    return get_context().pdg_system_of_units


def nubase_system_of_units() -> SystemOfUnits:
    return get_context().nubase_system_of_units


def get_resolver(
    kind: Union[str, ElementKind], context: Optional[Context] = None
) -> Resolver:
    if context is None:
        context = get_context()
    return context.resolver(kind)
