"""
Loader konfiguracji z automatycznym uzupełnianiem wartości domyślnych.

Pliki YAML w folderze data/:
- defaults.yaml: ustawienia narracji, wartości domyślne jednostek i scenariuszy
- units.yaml: nazwane jednostki (wariant + nazwa)
- scenarios.yaml: scenariusze demonstracyjne (listy kroków)

Logika merge (uzupełniania defaults):
    1. Wczytaj defaults.yaml
    2. Wczytaj konkretną definicję (np. jednostka "gatekeeper")
    3. Klucze brakujące w definicji biorą wartość z defaults
    4. Definicja może nadpisać defaults

Przykład:
    defaults.yaml:
        unit_defaults:
            variant: base

    units.yaml:
        units:
          gatekeeper:
            variant: heavy_defense   # nadpisuje default
            name: GUARDIAN

Użycie:
    >>> loader = ConfigLoader()
    >>> loader.load_unit("gatekeeper")["variant"]
    'heavy_defense'
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, Optional, Union
import yaml
import copy


DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data"


class ConfigLoader:
    """
    Ładuje konfigurację z plików YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Ścieżka do folderu data/
        _defaults (Dict): Cache wczytanych defaults
        _units (Dict): Cache wczytanych jednostek
        _scenarios (Dict): Cache wczytanych scenariuszy
    """

    def __init__(self, data_path: Union[str, Path, None] = None):
        """
        Inicjalizuje loader z ścieżką do danych.

        Args:
            data_path: Folder z plikami YAML (None = dane pakietu)
        """
        self.data_path = Path(data_path) if data_path is not None else DEFAULT_DATA_PATH
        self._defaults: Optional[Dict] = None
        self._units: Optional[Dict] = None
        self._scenarios: Optional[Dict] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> Dict:
        """
        Wczytuje plik YAML.

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
        """
        filepath = self.data_path / filename
        with open(filepath, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_defaults(self) -> Dict:
        """
        Zwraca słownik z wartościami domyślnymi.

        Brak pliku defaults.yaml = pusty słownik.
        """
        if self._defaults is None:
            if (self.data_path / "defaults.yaml").exists():
                self._defaults = self._load_yaml("defaults.yaml")
            else:
                self._defaults = {}
        return self._defaults

    def get_narration_config(self) -> Dict:
        """
        Zwraca ustawienia narratora.

        Returns:
            Dict: echo, record, save_log
        """
        result = {"echo": True, "record": True, "save_log": None}
        result.update(self.get_defaults().get("narration") or {})
        return result

    def get_unit_defaults(self) -> Dict:
        """Zwraca domyślne wartości dla jednostek."""
        return self.get_defaults().get("unit_defaults") or {}

    def get_scenario_defaults(self) -> Dict:
        """Zwraca domyślne wartości dla scenariuszy."""
        return self.get_defaults().get("scenario_defaults") or {}

    # ─────────────────────────────────────────────────────────────────────────
    # ŁADOWANIE JEDNOSTEK
    # ─────────────────────────────────────────────────────────────────────────

    def _get_all_units_raw(self) -> Dict:
        """Zwraca wszystkie surowe definicje jednostek."""
        if self._units is None:
            data = self._load_yaml("units.yaml")
            self._units = data.get("units") or {}
        return self._units

    def load_unit(self, unit_id: str) -> Dict:
        """
        Wczytuje definicję jednostki z uzupełnionymi defaults.

        Args:
            unit_id: ID jednostki (klucz w units.yaml)

        Returns:
            Dict: Definicja jednostki (variant, name, id)

        Raises:
            KeyError: Jeśli jednostka nie istnieje
        """
        units = self._get_all_units_raw()

        if unit_id not in units:
            raise KeyError(f"Unit '{unit_id}' not found in units.yaml")

        result = self._deep_merge(self.get_unit_defaults(), units[unit_id] or {})
        result["id"] = unit_id

        return result

    def load_all_units(self) -> Dict[str, Dict]:
        """Wczytuje wszystkie definicje jednostek."""
        units = self._get_all_units_raw()
        return {uid: self.load_unit(uid) for uid in units.keys()}

    def get_unit_ids(self) -> list[str]:
        """Zwraca listę wszystkich ID jednostek."""
        return list(self._get_all_units_raw().keys())

    # ─────────────────────────────────────────────────────────────────────────
    # ŁADOWANIE SCENARIUSZY
    # ─────────────────────────────────────────────────────────────────────────

    def _get_all_scenarios_raw(self) -> Dict:
        """Zwraca wszystkie surowe definicje scenariuszy."""
        if self._scenarios is None:
            data = self._load_yaml("scenarios.yaml")
            self._scenarios = data.get("scenarios") or {}
        return self._scenarios

    def load_scenario(self, scenario_id: str) -> Dict:
        """
        Wczytuje definicję scenariusza z uzupełnionymi defaults.

        Args:
            scenario_id: ID scenariusza (klucz w scenarios.yaml)

        Returns:
            Dict: Definicja scenariusza (title, steps, defaults..., id)

        Raises:
            KeyError: Jeśli scenariusz nie istnieje
        """
        scenarios = self._get_all_scenarios_raw()

        if scenario_id not in scenarios:
            raise KeyError(f"Scenario '{scenario_id}' not found in scenarios.yaml")

        result = self._deep_merge(self.get_scenario_defaults(), scenarios[scenario_id] or {})
        result["id"] = scenario_id
        result.setdefault("title", scenario_id.replace("_", " ").title())
        result.setdefault("steps", [])

        return result

    def get_scenario_ids(self) -> list[str]:
        """Zwraca listę wszystkich ID scenariuszy."""
        return list(self._get_all_scenarios_raw().keys())

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Głęboko łączy dwa słowniki.

        Override nadpisuje wartości w base.
        Nested dicts są merge'owane rekurencyjnie.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def reload(self) -> None:
        """
        Czyści cache i wymusza ponowne wczytanie plików.

        Przydatne podczas edycji plików YAML w runtime.
        """
        self._defaults = None
        self._units = None
        self._scenarios = None
