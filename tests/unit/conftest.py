# pylint: disable=redefined-outer-name
import logging
from pathlib import Path
from typing import Callable, Iterator, List

import pytest

from reactions import reset_context
from reactions.context import Context
from reactions.elements import NuBaseElement, PDGElement
from reactions.table_format import format_nubase_element, format_pdg_element

logging.basicConfig(level=logging.ERROR)


@pytest.fixture(autouse=True)
def fresh_context() -> Iterator[None]:
    reset_context()
    yield
    reset_context()


@pytest.fixture()
def context() -> Context:
    return Context()


def pdg_elements() -> List[PDGElement]:
    return [
        PDGElement("A", 1, 3, (1.0, 0.1, 0.2), (0.5, 0.01, 0.01)),
        PDGElement("A~", -1, -3, (1.0, 0.1, 0.2), (0.5, 0.01, 0.01)),
        PDGElement("B", 2, 0, (2.0, 0.0, 0.0), None, is_self_cc=True),
        PDGElement("C", 3, 0),
    ]


def nubase_elements() -> List[NuBaseElement]:
    return [
        NuBaseElement("1X", 1001000, 1, 1, (100.0, 1.0, False), True),
        NuBaseElement(
            "2X", 2001000, 1, 2, (200.0, 2.0, True), False, (60.0, 1.0, False)
        ),
    ]


def _write_lines(path: Path, lines: List[str]) -> str:
    path.write_text("* test table\n" + "\n".join(lines) + "\n")
    return str(path)


@pytest.fixture()
def write_pdg_lines(tmp_path: Path) -> Callable[[List[str]], str]:
    def write(lines: List[str], name: str = "pdg_table.txt") -> str:
        return _write_lines(tmp_path / name, lines)

    return write


@pytest.fixture()
def pdg_table(write_pdg_lines: Callable[[List[str]], str]) -> str:
    return write_pdg_lines([format_pdg_element(e) for e in pdg_elements()])


@pytest.fixture()
def nubase_table(tmp_path: Path) -> str:
    return _write_lines(
        tmp_path / "nubase_table.txt",
        [format_nubase_element(e) for e in nubase_elements()],
    )
