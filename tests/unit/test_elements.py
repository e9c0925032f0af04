# pylint: disable=no-self-use
from copy import deepcopy

import pytest
from attr.exceptions import FrozenInstanceError

from reactions.elements import (
    ElementKind,
    NuBaseElement,
    PDGElement,
    StringElement,
    ValueAndErrors,
    ValueAndErrorWithTag,
    nubase_id,
    to_element_kind,
)
from reactions.units import SystemOfUnits


def test_to_element_kind():
    assert to_element_kind("pdg") is ElementKind.PDG
    assert to_element_kind(ElementKind.NUBASE) is ElementKind.NUBASE
    with pytest.raises(ValueError):
        to_element_kind("nuclide")


class TestStringElement:
    @staticmethod
    def test_eq_and_hash():
        element = StringElement("A")
        assert element == StringElement("A")
        assert element != StringElement("B")
        assert {element, deepcopy(element)} == {StringElement("A")}
        assert str(element) == "A"
        assert element != "A"

    @staticmethod
    def test_immutable():
        element = StringElement("A")
        with pytest.raises(FrozenInstanceError):
            element.name = "B"  # type: ignore
        with pytest.raises(TypeError):
            StringElement(1)  # type: ignore

    @staticmethod
    def test_compare_kinds():
        pdg = PDGElement("A", 1, 0)
        with pytest.raises(TypeError):
            assert StringElement("A") == pdg
        with pytest.raises(TypeError):
            assert pdg != StringElement("A")


class TestPDGElement:
    @staticmethod
    def test_init():
        element = PDGElement(
            "pi+", 211, 3, (0.13957, 1e-6, 2e-6), (2.5e-17, 0.0, 0.0)
        )
        assert element.charge == 1.0
        assert element.mass == 0.13957
        assert element.mass_error_lower == 1e-6
        assert element.mass_error_upper == 2e-6
        assert element.mass_error == pytest.approx((1e-12 + 4e-12) ** 0.5)
        assert element.width == 2.5e-17
        assert isinstance(element.mass_and_errors, ValueAndErrors)
        assert not element.is_self_cc

    @staticmethod
    def test_missing_values():
        element = PDGElement("nu(e)", 12, 0)
        assert element.mass is None
        assert element.mass_error is None
        assert element.width is None
        assert element.width_error_upper is None
        zero = PDGElement("gamma", 22, 0, (0, 0, 0), (0, 0, 0), True)
        assert zero.mass == 0.0
        assert zero.width == 0.0

    @staticmethod
    def test_eq():
        element = PDGElement("A", 1, 0, (1.0, 0.0, 0.0))
        same_id = PDGElement("B", 1, 3, (2.0, 0.0, 0.0))
        assert element == same_id
        assert hash(element) == hash(same_id)
        assert element != PDGElement("A", 2, 0, (1.0, 0.0, 0.0))

    @staticmethod
    def test_units():
        units = SystemOfUnits("GeV")
        element = PDGElement("A", 1, 0, (1.5, 0.1, 0.1), units=units)
        units.set_energy_units("MeV")
        assert element.mass == pytest.approx(1500.0, rel=1e-9)
        assert element.mass_error_lower == pytest.approx(100.0, rel=1e-9)
        assert element.mass_and_errors.value == 1.5  # type: ignore
        assert element == PDGElement("A", 1, 0)

    @staticmethod
    @pytest.mark.parametrize(
        "name, latex",
        [
            ("pi+", r"\pi^{+}"),
            ("pi0", r"\pi^{0}"),
            ("K(S)0", r"K_{S}^{0}"),
            ("p~", r"\bar{p}"),
            ("Lambda~", r"\bar{\Lambda}"),
            ("nu(mu)~", r"\bar{\nu}_{\mu}"),
            ("rho(770)0", r"\rho(770)^{0}"),
            ("K*(892)+", r"K^{*}(892)^{+}"),
            ("eta'(958)", r"\eta^{'}(958)"),
            ("J/psi(1S)", r"J/\psi(1S)"),
            ("Delta(1232)++", r"\Delta(1232)^{++}"),
        ],
    )
    def test_latex_name(name: str, latex: str):
        assert PDGElement(name, 1, 0).latex_name == latex


class TestNuBaseElement:
    @staticmethod
    def test_init():
        element = NuBaseElement(
            "3H",
            nubase_id(3, 1),
            1,
            3,
            (14949.8, 0.1, False),
            False,
            ValueAndErrorWithTag(3.9e8, 6e5, True),
        )
        assert element.nubase_id == 3001000
        assert element.mass_excess == 14949.8
        assert element.mass_excess_error == 0.1
        assert element.mass_excess_from_systematics is False
        assert element.half_life == 3.9e8
        assert element.half_life_error == 6e5
        assert element.half_life_from_systematics is True
        assert element.is_ground_state

    @staticmethod
    def test_stable():
        element = NuBaseElement(
            "1H", 1001000, 1, 1, (7289.0, 0.0, False), True
        )
        assert element.is_stable
        assert element.half_life is None
        assert element.half_life_from_systematics is None

    @staticmethod
    def test_units():
        units = SystemOfUnits("keV", "s")
        element = NuBaseElement(
            "3H",
            3001000,
            1,
            3,
            (1000.0, 1.0, False),
            False,
            (3600.0, 60.0),
            units=units,
        )
        units.set_energy_units("MeV")
        units.set_time_units("h")
        assert element.mass_excess == pytest.approx(1.0, rel=1e-9)
        assert element.half_life == pytest.approx(1.0, rel=1e-9)
        assert element.half_life_error == pytest.approx(1.0 / 60, rel=1e-9)

    @staticmethod
    def test_compare_kinds():
        with pytest.raises(TypeError):
            assert NuBaseElement("A", 1, 0, 0) == PDGElement("A", 1, 0)

    @staticmethod
    @pytest.mark.parametrize(
        "name, latex",
        [
            ("gamma", r"\gamma"),
            ("e-", "e^{-}"),
            ("1n", r"\ce{^{1}n}"),
            ("3He", r"\ce{^{3}He}"),
            ("60Co(m)", r"\ce{^{60}Co^{m}}"),
        ],
    )
    def test_latex_name(name: str, latex: str):
        assert NuBaseElement(name, 1, 0, 0).latex_name == latex


@pytest.mark.parametrize(
    "mass_number, atomic_number, isomer, expected",
    [
        (1, 0, "", 1000000),
        (238, 92, "", 238092000),
        (60, 27, "m", 60027109),
    ],
)
def test_nubase_id(mass_number, atomic_number, isomer, expected):
    assert nubase_id(mass_number, atomic_number, isomer) == expected
