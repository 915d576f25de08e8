"""
Testy dla ConfigLoader.

Testuje:
- Wczytywanie danych pakietu (defaults, units, scenarios)
- Merge defaults z definicjami
- Błędy dla nieznanych ID
- Własny folder danych i reload
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from combat_units.core.config_loader import ConfigLoader, DEFAULT_DATA_PATH
from combat_units.units.unit import Unit
from combat_units.units.profile import UnitVariant
from combat_units.events.narrator import Narrator


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def loader():
    """Loader danych pakietu."""
    return ConfigLoader()


@pytest.fixture
def custom_data(tmp_path):
    """Minimalny folder danych."""
    (tmp_path / "defaults.yaml").write_text(
        "unit_defaults:\n"
        "  variant: heavy_offense\n"
        "narration:\n"
        "  echo: false\n",
        encoding="utf-8",
    )
    (tmp_path / "units.yaml").write_text(
        "units:\n"
        "  striker: {name: STRIKER}\n"
        "  wall: {variant: heavy_defense}\n",
        encoding="utf-8",
    )
    (tmp_path / "scenarios.yaml").write_text(
        "scenarios:\n"
        "  empty_one: {}\n",
        encoding="utf-8",
    )
    return tmp_path


# ═══════════════════════════════════════════════════════════════════════════
# TEST: DANE PAKIETU
# ═══════════════════════════════════════════════════════════════════════════

def test_default_data_path_exists():
    """Dane pakietu są dostępne."""
    assert (DEFAULT_DATA_PATH / "defaults.yaml").exists()
    assert (DEFAULT_DATA_PATH / "scenarios.yaml").exists()


def test_shipped_units_load(loader):
    """Każda jednostka z units.yaml tworzy poprawny Unit."""
    for unit_id, config in loader.load_all_units().items():
        assert config["id"] == unit_id
        unit = Unit.from_config(config, narrator=Narrator(echo=False))
        assert unit.variant is UnitVariant.parse(config["variant"])


def test_unit_defaults_merged(loader):
    """Jednostka bez wariantu dostaje wariant z unit_defaults."""
    assert loader.load_unit("clap")["variant"] == "base"
    assert loader.load_unit("gatekeeper") == {
        "id": "gatekeeper",
        "variant": "heavy_defense",
        "name": "GUARDIAN",
    }


def test_shipped_scenarios(loader):
    """Scenariusze demonstracyjne są dostępne."""
    ids = loader.get_scenario_ids()
    assert ids == ["base_unit", "heavy_defense", "heavy_offense"]

    scenario = loader.load_scenario("heavy_defense")
    assert scenario["variant"] == "heavy_defense"
    assert scenario["title"] == "Heavy-defense units"
    assert len(scenario["steps"]) > 0


def test_narration_config(loader):
    """Ustawienia narracji mają wartości domyślne."""
    narration = loader.get_narration_config()
    assert narration["echo"] is True
    assert narration["record"] is True
    assert narration["save_log"] is None


def test_unknown_ids_raise_key_error(loader):
    """Nieznane ID -> KeyError z nazwą pliku."""
    with pytest.raises(KeyError, match="units.yaml"):
        loader.load_unit("claptrap")
    with pytest.raises(KeyError, match="scenarios.yaml"):
        loader.load_scenario("ex03")


def test_loaded_config_is_a_copy(loader):
    """Modyfikacja wyniku nie psuje cache."""
    scenario = loader.load_scenario("base_unit")
    scenario["steps"].clear()

    assert len(loader.load_scenario("base_unit")["steps"]) > 0


# ═══════════════════════════════════════════════════════════════════════════
# TEST: WŁASNE DANE
# ═══════════════════════════════════════════════════════════════════════════

def test_custom_defaults(custom_data):
    """Defaults z własnego folderu."""
    loader = ConfigLoader(custom_data)

    assert loader.load_unit("striker")["variant"] == "heavy_offense"
    assert loader.load_unit("wall")["variant"] == "heavy_defense"
    assert loader.get_narration_config()["echo"] is False


def test_scenario_defaults_filled(custom_data):
    """Pusty scenariusz dostaje tytuł i pustą listę kroków."""
    scenario = ConfigLoader(custom_data).load_scenario("empty_one")

    assert scenario["title"] == "Empty One"
    assert scenario["steps"] == []


def test_missing_defaults_file(tmp_path):
    """Brak defaults.yaml = puste defaults."""
    (tmp_path / "units.yaml").write_text("units:\n  a: {}\n", encoding="utf-8")
    loader = ConfigLoader(tmp_path)

    assert loader.get_defaults() == {}
    assert loader.load_unit("a") == {"id": "a"}


def test_reload(custom_data):
    """reload() wczytuje zmienione pliki."""
    loader = ConfigLoader(custom_data)
    assert loader.get_unit_ids() == ["striker", "wall"]

    (custom_data / "units.yaml").write_text("units:\n  solo: {}\n", encoding="utf-8")
    assert loader.get_unit_ids() == ["striker", "wall"]

    loader.reload()
    assert loader.get_unit_ids() == ["solo"]


def test_deep_merge():
    """Zagnieżdżone słowniki są łączone rekurencyjnie."""
    merged = ConfigLoader._deep_merge(
        {"narration": {"echo": True, "record": True}, "x": 1},
        {"narration": {"echo": False}, "y": 2},
    )
    assert merged == {"narration": {"echo": False, "record": True}, "x": 1, "y": 2}


def test_empty_sections_in_defaults(tmp_path):
    """Puste sekcje (null) w defaults.yaml traktowane jak puste słowniki."""
    (tmp_path / "defaults.yaml").write_text(
        "narration:\n"
        "unit_defaults:\n"
        "scenario_defaults:\n",
        encoding="utf-8",
    )
    (tmp_path / "units.yaml").write_text("units:\n  a: {name: A}\n", encoding="utf-8")
    (tmp_path / "scenarios.yaml").write_text("scenarios:\n  s: {}\n", encoding="utf-8")
    loader = ConfigLoader(tmp_path)

    assert loader.get_narration_config() == {"echo": True, "record": True, "save_log": None}
    assert loader.get_unit_defaults() == {}
    assert loader.get_scenario_defaults() == {}
    assert loader.load_unit("a") == {"id": "a", "name": "A"}
    assert loader.load_scenario("s")["steps"] == []
