import pytest

import reactions
from reactions import (
    get_context,
    nubase_database,
    nubase_element,
    nubase_system_of_units,
    pdg_database,
    pdg_element,
    pdg_system_of_units,
    reset_context,
)
from reactions.context import (
    DEFAULT_NUBASE_TABLE,
    DEFAULT_PDG_TABLE,
    Context,
    get_resolver,
)
from reactions.elements import ElementKind, StringElement


class TestDefaultContext:
    @staticmethod
    def test_singletons():
        context = get_context()
        assert get_context() is context
        assert pdg_database() is context.pdg_database
        assert nubase_database() is context.nubase_database
        assert pdg_system_of_units() is context.pdg_database.units
        assert nubase_system_of_units() is context.nubase_database.units
        reset_context()
        assert get_context() is not context

    @staticmethod
    def test_default_tables():
        assert pdg_database().get_database_path() == DEFAULT_PDG_TABLE
        assert nubase_database().get_database_path() == DEFAULT_NUBASE_TABLE
        assert pdg_system_of_units().get_energy_units() == "GeV"
        assert nubase_system_of_units().get_energy_units() == "keV"
        assert nubase_system_of_units().get_time_units() == "s"

    @staticmethod
    def test_database_by_kind(context: Context):
        assert context.database("pdg") is context.pdg_database
        assert context.database(ElementKind.NUBASE) is context.nubase_database
        with pytest.raises(ValueError):
            context.database("string")

    @staticmethod
    def test_resolvers():
        assert get_resolver("string")("A") == StringElement("A")
        assert get_resolver("pdg")("pi+").pdg_id == 211  # type: ignore
        resolver = get_resolver(ElementKind.NUBASE, Context())
        assert resolver("3H").nubase_id == 3001000  # type: ignore


class TestBundledPDG:
    @staticmethod
    def test_identity_consistency():
        database = pdg_database()
        database.enable_cache()
        for element in database.all_elements():
            by_name = database(element.name)  # type: ignore
            by_id = database(element.pdg_id)  # type: ignore
            assert by_name is by_id

    @staticmethod
    def test_size():
        assert len(pdg_database()) > 600

    @staticmethod
    @pytest.mark.parametrize(
        "name, pdg_id",
        [
            ("p", 2212),
            ("p~", -2212),
            ("n", 2112),
            ("gamma", 22),
            ("Z0", 23),
            ("W-", -24),
            ("e+", -11),
            ("tau-", 15),
            ("nu(e)~", -12),
            ("K+", 321),
            ("K(L)0", 130),
            ("K~0", -311),
            ("D(s)+", 431),
            ("B0", 511),
            ("J/psi(1S)", 443),
            ("Upsilon(1S)", 553),
            ("Lambda~", -3122),
            ("Sigma(c)(2455)0", 4112),
            ("Xi-", 3312),
            ("Omega-", 3334),
            ("Lambda(b)0", 5122),
            ("Delta(1232)++", 2224),
        ],
    )
    def test_names(name: str, pdg_id: int):
        element = pdg_element(name)
        assert element.pdg_id == pdg_id  # type: ignore
        assert pdg_element(pdg_id).name == name  # type: ignore

    @staticmethod
    def test_reaction():
        process = reactions.make_reaction(
            "p p~ -> {pi+ -> mu+ nu(mu)} pi-", kind="pdg"
        )
        assert [e.pdg_id for e in process.reactants] == [2212, -2212]
        assert process == reactions.make_reaction(
            "p~ p -> pi- {pi+ -> nu(mu) mu+}", kind="pdg"
        )

    @staticmethod
    def test_charge_conjugate():
        database = pdg_database()
        assert database.charge_conjugate(pdg_element("pi+")) == pdg_element(
            "pi-"
        )
        k_short = pdg_element("K(S)0")
        assert database.charge_conjugate(k_short) == k_short
        for element in database.all_elements():
            conjugate = database.charge_conjugate(element)  # type: ignore
            three_charge = element.three_charge  # type: ignore
            assert conjugate.three_charge == -three_charge

    @staticmethod
    def test_energy_units():
        mass = pdg_element("pi+").mass
        pdg_system_of_units().set_energy_units("MeV")
        assert pdg_element("pi+").mass == pytest.approx(
            mass * 1000, rel=1e-9  # type: ignore
        )

    @staticmethod
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("pi+", r"\pi^{+}"),
            ("K(S)0", r"K_{S}^{0}"),
            ("D~0", r"\bar{D}^{0}"),
        ],
    )
    def test_latex_names(name: str, expected: str):
        assert pdg_element(name).latex_name == expected


class TestBundledNuBase:
    @staticmethod
    def test_identity_consistency():
        database = nubase_database()
        for element in database.all_elements():
            by_name = database(element.name)  # type: ignore
            by_id = database(element.nubase_id)  # type: ignore
            assert by_name == by_id
            assert by_name.name == by_id.name  # type: ignore

    @staticmethod
    def test_values():
        tritium = nubase_element("3H")
        assert tritium.atomic_number == 1
        assert tritium.mass_number == 3
        assert not tritium.is_stable
        nubase_system_of_units().set_time_units("y")
        assert tritium.half_life == pytest.approx(12.32, rel=1e-2)
        assert nubase_element("12C").mass_excess == 0.0
        assert not nubase_element(60027109).is_ground_state


def test_facade():
    assert reactions.reaction is reactions.make_reaction
    assert reactions.decay is reactions.make_decay
    assert isinstance(reactions.__version__, str)
    for name in reactions.__all__:
        assert hasattr(reactions, name)
