"""Databases of elements backed by fixed-width tables.

A `Database` maps names and numeric IDs to elements. Elements are read from
a table file (see :mod:`.table_format`) whose path can be changed at
runtime. By default the table is parsed every time it is accessed; calling
`~Database.enable_cache` keeps the parsed elements in memory until the path
changes or the cache is cleared.

Besides the table elements, a database holds the elements registered by the
user with `~Database.register`. Names and IDs must be unique among all of
them.
"""

import logging
import os
from abc import ABC, abstractmethod
from difflib import get_close_matches
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Optional,
    Set,
    Type,
    Union,
)

import attr

from reactions.elements import Element, NuBaseElement, PDGElement
from reactions.errors import DatabaseError, MissingElementError
from reactions.table_format import (
    is_comment,
    parse_nubase_line,
    parse_pdg_line,
)
from reactions.units import SystemOfUnits


class _ElementIndex:
    """Elements indexed both by name and by ID."""

    def __init__(self) -> None:
        self.by_name: Dict[str, Element] = dict()
        self.by_id: Dict[int, Element] = dict()

    def __iter__(self) -> Iterator[Element]:
        return iter(self.by_name.values())

    def __len__(self) -> int:
        return len(self.by_name)

    def find_conflict(self, name: str, element_id: int) -> Optional[str]:
        if name in self.by_name:
            return f'An element with name "{name}" already exists'
        if element_id in self.by_id:
            existing = self.by_id[element_id]
            return (
                f"An element with ID {element_id} already exists: "
                f'"{existing.name}"'  # type: ignore
            )
        return None

    def add(self, name: str, element_id: int, element: Element) -> None:
        self.by_name[name] = element
        self.by_id[element_id] = element


class Database(ABC):
    """Searchable collection of elements of a single kind.

    Subclasses define the element type and how a line of the table is
    converted into an element.
    """

    element_type: Type[Element]

    def __init__(
        self,
        path: Optional[str] = None,
        units: Optional[SystemOfUnits] = None,
    ) -> None:
        if units is None:
            units = self._default_units()
        self.__units = units
        self.__path: Optional[str] = None
        self.__cache_enabled = False
        self.__table: Optional[_ElementIndex] = None
        self.__user_elements = _ElementIndex()
        if path is not None:
            self.set_database_path(path)

    @staticmethod
    @abstractmethod
    def _default_units() -> SystemOfUnits:
        pass

    @staticmethod
    @abstractmethod
    def element_id(element: Any) -> int:
        """Numeric identifier of an element of this database."""

    @abstractmethod
    def _parse_line(self, line: str) -> Element:
        pass

    @property
    def units(self) -> SystemOfUnits:
        return self.__units

    @property
    def cache_enabled(self) -> bool:
        return self.__cache_enabled

    @property
    def is_loaded(self) -> bool:
        """Whether the table is currently held in memory."""
        return self.__table is not None

    def get_database_path(self) -> Optional[str]:
        return self.__path

    def set_database_path(self, path: str) -> None:
        """Set the path to the table file.

        If the cache is enabled or there are user elements, the new table is
        loaded right away. On failure the previous path and table are kept.
        """
        path = str(path)
        if not os.path.isfile(path) or not os.access(path, os.R_OK):
            raise DatabaseError(f'Unable to read database table "{path}"')
        table = None
        if self.__cache_enabled or len(self.__user_elements):
            table = self.__load(path)
        self.__path = path
        self.__table = table if self.__cache_enabled else None

    def enable_cache(self) -> None:
        """Keep the elements of the table in memory after the first access."""
        logging.debug(f"Enabling cache of {self.__class__.__name__}")
        self.__cache_enabled = True

    def disable_cache(self) -> None:
        """Read the table every time it is accessed.

        Elements registered by the user are kept.
        """
        logging.debug(f"Disabling cache of {self.__class__.__name__}")
        self.__cache_enabled = False
        self.__table = None

    def clear_cache(self) -> None:
        """Remove the elements in memory, including the user elements."""
        logging.debug(f"Clearing cache of {self.__class__.__name__}")
        self.__table = None
        self.__user_elements = _ElementIndex()

    def __load(self, path: Optional[str]) -> _ElementIndex:
        if path is None:
            raise DatabaseError(
                f"No table has been set for {self.__class__.__name__}"
            )
        table = _ElementIndex()
        try:
            with open(path) as stream:
                for line_number, line in enumerate(stream, start=1):
                    if is_comment(line):
                        continue
                    try:
                        element = self._parse_line(line)
                    except (TypeError, ValueError) as exception:
                        raise DatabaseError(
                            f'Unable to parse line {line_number} of "{path}":'
                            f" {exception}"
                        ) from exception
                    name = element.name  # type: ignore
                    element_id = self.element_id(element)
                    conflict = table.find_conflict(name, element_id)
                    if conflict is not None:
                        raise DatabaseError(
                            f'{conflict} (line {line_number} of "{path}")'
                        )
                    table.add(name, element_id, element)
        except OSError as exception:
            raise DatabaseError(
                f'Unable to read database table "{path}"'
            ) from exception
        for element in self.__user_elements:
            conflict = table.find_conflict(
                element.name, self.element_id(element)  # type: ignore
            )
            if conflict is not None:
                raise DatabaseError(
                    f'Table "{path}" clashes with a registered element: '
                    f"{conflict}"
                )
        logging.info(f'Loaded {len(table)} elements from "{path}"')
        return table

    def __get_table(self) -> _ElementIndex:
        if self.__table is not None:
            return self.__table
        table = self.__load(self.__path)
        if self.__cache_enabled:
            self.__table = table
        return table

    def __indices(self) -> List[_ElementIndex]:
        return [self.__get_table(), self.__user_elements]

    def lookup(self, key: Union[str, int]) -> Element:
        """Search for an element by either name (`str`) or ID (`int`)."""
        if isinstance(key, bool) or not isinstance(key, (str, int)):
            raise TypeError(
                "Elements can only be searched by name (str) or ID (int), "
                f"not by {key.__class__.__name__}"
            )
        indices = self.__indices()
        for index in indices:
            if isinstance(key, str) and key in index.by_name:
                return index.by_name[key]
            if isinstance(key, int) and key in index.by_id:
                return index.by_id[key]
        if isinstance(key, int):
            raise MissingElementError(f"No element with ID {key}")
        names = {name for index in indices for name in index.by_name}
        raise MissingElementError(_missing_name_message(key, names))

    def __call__(self, key: Union[str, int]) -> Element:
        return self.lookup(key)

    def register(self, *args: Any, **kwargs: Any) -> Element:
        """Add a new element to the database.

        The element can be given directly or through the arguments needed to
        build it. The returned element uses the units of this database.
        """
        if len(args) == 1 and not kwargs and isinstance(args[0], Element):
            element = args[0]
            if not isinstance(element, self.element_type):
                raise TypeError(
                    f"Can not register a {element.__class__.__name__} in a "
                    f"{self.__class__.__name__}"
                )
        else:
            element = self.element_type(*args, **kwargs)  # type: ignore
        element = attr.evolve(element, units=self.__units)
        name = element.name  # type: ignore
        element_id = self.element_id(element)
        for index in self.__indices():
            conflict = index.find_conflict(name, element_id)
            if conflict is not None:
                raise DatabaseError(f"Unable to register element: {conflict}")
        self.__user_elements.add(name, element_id, element)
        logging.debug(f'Registered element "{name}" with ID {element_id}')
        return element

    def all_elements(self) -> List[Element]:
        return [element for index in self.__indices() for element in index]

    def filter(  # noqa: A003
        self, function: Callable[[Any], bool]
    ) -> List[Element]:
        """Search by element properties using a :code:`lambda` function.

        >>> from reactions import pdg_database
        >>> sorted(p.name for p in pdg_database().filter(
        ...     lambda p: p.mass is not None and 0.1 < p.mass < 0.135
        ... ))
        ['mu+', 'mu-', 'pi0']
        """
        return [e for e in self.all_elements() if function(e)]

    def __contains__(self, key: object) -> bool:
        indices = self.__indices()
        if isinstance(key, str):
            return any(key in index.by_name for index in indices)
        if isinstance(key, int) and not isinstance(key, bool):
            return any(key in index.by_id for index in indices)
        if isinstance(key, self.element_type):
            element_id = self.element_id(key)
            return any(element_id in index.by_id for index in indices)
        return False

    def __iter__(self) -> Iterator[Element]:
        return iter(self.all_elements())

    def __len__(self) -> int:
        return sum(len(index) for index in self.__indices())

    @property
    def names(self) -> Set[str]:
        return {name for index in self.__indices() for name in index.by_name}


def _missing_name_message(name: str, names: Set[str]) -> str:
    message = f"No element with name '{name}' in the database"
    candidates = sorted(n for n in names if n.startswith(name))
    if not candidates:
        candidates = get_close_matches(name, names, n=5)
    if len(candidates) == 1:
        message += f". Did you mean '{candidates[0]}'?"
    elif len(candidates) > 1:
        message += f". Did you mean one of these? {candidates}"
    return message


class PDGDatabase(Database):
    """Database of particles from the PDG, with energies in GeV."""

    element_type = PDGElement

    @staticmethod
    def _default_units() -> SystemOfUnits:
        return SystemOfUnits(native_energy_units="GeV")

    @staticmethod
    def element_id(element: PDGElement) -> int:
        return element.pdg_id

    def _parse_line(self, line: str) -> PDGElement:
        return parse_pdg_line(line, self.units)

    def charge_conjugate(self, element: PDGElement) -> PDGElement:
        """Get the antiparticle of an element.

        Self charge-conjugate elements are their own antiparticle.
        """
        if not isinstance(element, PDGElement):
            raise TypeError(
                "Can only compute the charge conjugate of a PDG element, "
                f"not of a {element.__class__.__name__}"
            )
        if element.is_self_cc:
            return element
        try:
            return self.lookup(-element.pdg_id)  # type: ignore
        except MissingElementError:
            raise MissingElementError(
                f'No charge conjugate for "{element.name}" '
                f"(ID {-element.pdg_id})"
            ) from None


class NuBaseDatabase(Database):
    """Database of nuclides from NuBase.

    Mass excesses are given in keV and half-lives in seconds.
    """

    element_type = NuBaseElement

    @staticmethod
    def _default_units() -> SystemOfUnits:
        return SystemOfUnits(native_energy_units="keV", native_time_units="s")

    @staticmethod
    def element_id(element: NuBaseElement) -> int:
        return element.nubase_id

    def _parse_line(self, line: str) -> NuBaseElement:
        return parse_nubase_line(line, self.units)
