"""
Scenariusz demonstracyjny - sekwencja akcji na jednostkach.

Scenariusz to lista kroków z scenarios.yaml. Każdy krok to słownik
z JEDNYM kluczem (nazwa kroku) i argumentami:

KROKI:
═══════════════════════════════════════════════════════════════════

    section: "Tytuł"                      nagłówek w narracji
    create: {id, variant?, name?, unit?}  nowa jednostka (unit = ID z units.yaml)
    copy: {id, source}                    kopia istniejącej jednostki
    assign: {id, source}                  przypisanie stanu (ten sam wariant)
    attack: {unit, target, repeat?}       atak (repeat = liczba powtórzeń)
    take_damage: {unit, amount}           obrażenia
    be_repaired: {unit, amount}           naprawa
    special: {unit}                       akcja specjalna wariantu
    scope: [kroki...]                     zagnieżdżony zasięg - jednostki
                                          utworzone w środku są likwidowane
                                          przy wyjściu (od najnowszej)

Jednostki żyjące na końcu scenariusza są likwidowane w kolejności
odwrotnej do utworzenia.

Przykład:
    >>> loader = ConfigLoader()
    >>> scenario = Scenario.from_config(loader.load_scenario("base_unit"), loader=loader)
    >>> result = scenario.run()
    >>> result["units"]["energy_test"]["energy_points"]
    0
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set

from ..core.config_loader import ConfigLoader
from ..events.narrator import Narrator
from ..units.profile import UnitVariant
from ..units.scope import UnitScope
from ..units.unit import Unit


@dataclass
class ScenarioConfig:
    """
    Konfiguracja scenariusza.

    Attributes:
        scenario_id (str): ID scenariusza (klucz w YAML)
        title (str): Tytuł wypisywany na starcie
        steps (List[Dict]): Kroki do wykonania
        variant (str): Domyślny wariant kroku "create"
    """
    scenario_id: str = "custom"
    title: str = "Custom scenario"
    steps: List[Dict[str, Any]] = field(default_factory=list)
    variant: str = UnitVariant.BASE.value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScenarioConfig":
        """Tworzy konfigurację z ConfigLoader.load_scenario()."""
        scenario_id = data.get("id", "custom")
        return cls(
            scenario_id=scenario_id,
            title=data.get("title", scenario_id),
            steps=list(data.get("steps") or []),
            variant=data.get("variant", UnitVariant.BASE.value),
        )


class Scenario:
    """
    Wykonuje kroki scenariusza na jednostkach.

    Attributes:
        config (ScenarioConfig): Konfiguracja
        narrator (Narrator): Narrator wszystkich jednostek scenariusza
        loader (Optional[ConfigLoader]): Loader dla kroków create z "unit"
        units (Dict[str, Unit]): Aktualnie widoczne jednostki (handle -> Unit)
        used_handles (Set[str]): Wszystkie handle użyte w scenariuszu (unikalne)
        snapshots (Dict[str, Dict]): Stan jednostek w chwili likwidacji
        is_finished (bool): Czy run() został już wywołany
    """

    def __init__(
        self,
        config: Optional[ScenarioConfig] = None,
        narrator: Optional[Narrator] = None,
        loader: Optional[ConfigLoader] = None,
    ):
        self.config = config or ScenarioConfig()
        self.narrator = narrator or Narrator()
        self.loader = loader

        self.units: Dict[str, Unit] = {}
        self.used_handles: Set[str] = set()
        self.snapshots: Dict[str, Dict[str, Any]] = {}
        self.disposal_order: List[str] = []
        self.is_finished = False

        self._handlers: Dict[str, Callable[[Any, UnitScope], Optional[str]]] = {
            "section": self._step_section,
            "create": self._step_create,
            "copy": self._step_copy,
            "assign": self._step_assign,
            "attack": self._step_attack,
            "take_damage": self._step_take_damage,
            "be_repaired": self._step_be_repaired,
            "special": self._step_special,
            "scope": self._step_scope,
        }

    @classmethod
    def from_config(
        cls,
        data: Dict[str, Any],
        narrator: Optional[Narrator] = None,
        loader: Optional[ConfigLoader] = None,
    ) -> "Scenario":
        """
        Tworzy scenariusz ze słownika (z ConfigLoader.load_scenario).

        Args:
            data: Definicja scenariusza
            narrator: Narrator (None = nowy, echo na stdout)
            loader: Loader do rozwiązywania jednostek z units.yaml
        """
        return cls(ScenarioConfig.from_dict(data), narrator=narrator, loader=loader)

    # ─────────────────────────────────────────────────────────────────────────
    # GŁÓWNA PĘTLA
    # ─────────────────────────────────────────────────────────────────────────

    def run(self) -> Dict[str, Any]:
        """
        Wykonuje wszystkie kroki.

        Returns:
            Dict: Wynik scenariusza
                - scenario: ID
                - units: handle -> snapshot w chwili likwidacji
                - disposal_order: handle w kolejności likwidacji
                - event_count: liczba zdarzeń narratora

        Raises:
            RuntimeError: Jeśli scenariusz już został wykonany
            KeyError: Nieznany handle jednostki
            ValueError: Niepoprawny krok
        """
        if self.is_finished:
            raise RuntimeError(f"Scenario '{self.config.scenario_id}' already ran")

        # scenariusz jest jednorazowy, także gdy krok rzuci wyjątek
        self.is_finished = True
        self.narrator.log_scenario_start(self.config.scenario_id, self.config.title)
        self._run_steps(self.config.steps)
        self.narrator.log_scenario_end(self.config.scenario_id, len(self.snapshots))

        return self.get_result()

    def _run_steps(self, steps: List[Dict[str, Any]]) -> None:
        """Wykonuje kroki w nowym zasięgu jednostek."""
        created: List[str] = []
        with UnitScope(self.narrator) as scope:
            try:
                for step in steps:
                    name, args = self._parse_step(step)
                    handle = self._handlers[name](args, scope)
                    if handle is not None:
                        created.append(handle)
            finally:
                # UnitScope likwiduje przy wyjściu z `with`, od najnowszej
                for handle in reversed(created):
                    self.snapshots[handle] = self.units.pop(handle).to_dict()
                    self.disposal_order.append(handle)

    def _parse_step(self, step: Any) -> tuple:
        if not isinstance(step, dict) or len(step) != 1:
            raise ValueError(f"Scenario step must be a single-key mapping, got {step!r}")

        name, args = next(iter(step.items()))
        if name not in self._handlers:
            raise ValueError(f"Unknown scenario step '{name}'")
        return name, args

    # ─────────────────────────────────────────────────────────────────────────
    # KROKI
    # ─────────────────────────────────────────────────────────────────────────

    def _step_section(self, args: Any, scope: UnitScope) -> None:
        self.narrator.log_section(str(args))

    def _step_create(self, args: Dict[str, Any], scope: UnitScope) -> str:
        handle = self._new_handle(args, "create")

        definition: Dict[str, Any] = {"variant": self.config.variant}
        if "unit" in args:
            if self.loader is None:
                raise ValueError("Step 'create' with 'unit' requires a ConfigLoader")
            definition.update(self.loader.load_unit(args["unit"]))
        definition.update({k: v for k, v in args.items() if k in ("variant", "name")})

        unit = Unit.from_config(definition, narrator=self.narrator)
        self.units[handle] = scope.adopt(unit)
        return handle

    def _step_copy(self, args: Dict[str, Any], scope: UnitScope) -> str:
        handle = self._new_handle(args, "copy")
        source = self.get_unit(self._require(args, "source", "copy"))
        self.units[handle] = scope.copy_of(source)
        return handle

    def _step_assign(self, args: Dict[str, Any], scope: UnitScope) -> None:
        unit = self.get_unit(self._require(args, "id", "assign"))
        source = self.get_unit(self._require(args, "source", "assign"))
        unit.assign_from(source)

    def _step_attack(self, args: Dict[str, Any], scope: UnitScope) -> None:
        unit = self.get_unit(self._require(args, "unit", "attack"))
        target = str(args.get("target", "target"))
        repeat = int(args.get("repeat", 1))
        for _ in range(repeat):
            unit.attack(target)

    def _step_take_damage(self, args: Dict[str, Any], scope: UnitScope) -> None:
        unit = self.get_unit(self._require(args, "unit", "take_damage"))
        unit.take_damage(self._require(args, "amount", "take_damage"))

    def _step_be_repaired(self, args: Dict[str, Any], scope: UnitScope) -> None:
        unit = self.get_unit(self._require(args, "unit", "be_repaired"))
        unit.be_repaired(self._require(args, "amount", "be_repaired"))

    def _step_special(self, args: Dict[str, Any], scope: UnitScope) -> None:
        unit = self.get_unit(self._require(args, "unit", "special"))
        unit.special_action()

    def _step_scope(self, args: Any, scope: UnitScope) -> None:
        if not isinstance(args, list):
            raise ValueError("Step 'scope' expects a list of steps")
        self._run_steps(args)

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _require(args: Any, key: str, step: str) -> Any:
        if not isinstance(args, dict) or key not in args:
            raise ValueError(f"Step '{step}' requires '{key}'")
        return args[key]

    def _new_handle(self, args: Dict[str, Any], step: str) -> str:
        handle = str(self._require(args, "id", step))
        if handle in self.used_handles:
            raise ValueError(f"Unit handle '{handle}' is already in use")
        self.used_handles.add(handle)
        return handle

    def get_unit(self, handle: str) -> Unit:
        """
        Zwraca widoczną jednostkę po handle.

        Raises:
            KeyError: Jeśli jednostka nie istnieje (lub jej zasięg się skończył)
        """
        if handle not in self.units:
            raise KeyError(f"Unit '{handle}' is not defined in scenario '{self.config.scenario_id}'")
        return self.units[handle]

    # ─────────────────────────────────────────────────────────────────────────
    # WYNIKI
    # ─────────────────────────────────────────────────────────────────────────

    def get_result(self) -> Dict[str, Any]:
        """Zwraca wynik scenariusza."""
        return {
            "scenario": self.config.scenario_id,
            "title": self.config.title,
            "units": dict(self.snapshots),
            "disposal_order": list(self.disposal_order),
            "event_count": self.narrator.get_event_count(),
        }

    def save_log(self, filepath: str) -> None:
        """Zapisuje log narracji do pliku JSON."""
        self.narrator.save(filepath)

    def get_log(self) -> Dict[str, Any]:
        """Zwraca log jako słownik."""
        return self.narrator.to_dict()
