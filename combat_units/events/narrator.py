"""
Narracja zdarzeń jednostek - strumień tekstowy + log JSON.

Każde zdarzenie cyklu życia (utworzenie, kopia, przypisanie,
likwidacja) i każdy wynik akcji (przyjęta / odrzucona) jest
zapisywany jako NarrationEvent. Narrator może:
- wypisywać komunikat na stdout (echo)
- przechowywać zdarzenia (record) do asercji w testach lub zapisu

TYPY ZDARZEŃ:
═══════════════════════════════════════════════════════════════════

    UNIT_CREATED / UNIT_COPIED / UNIT_ASSIGNED / UNIT_DISPOSED
    ─────────────────────────────────────────────────────────────
    Cykl życia jednostki.
    Data: snapshot stanu (hit_points, energy_points, attack_damage),
          source (dla kopii i przypisania)

    UNIT_ATTACK / ATTACK_REJECTED
    ─────────────────────────────────────────────────────────────
    Atak przyjęty lub odrzucony przez bramkę energii/HP.
    Data: damage, energy_after / reason

    UNIT_DAMAGE
    ─────────────────────────────────────────────────────────────
    Otrzymanie obrażeń (zawsze przyjęte).
    Data: amount, hp_after

    UNIT_REPAIR / REPAIR_REJECTED
    ─────────────────────────────────────────────────────────────
    Naprawa przyjęta lub odrzucona.
    Data: amount, hp_after, energy_after / reason

    SPECIAL_ACTION
    ─────────────────────────────────────────────────────────────
    Akcja specjalna wariantu (guard_gate, high_fives_guys).
    Data: action

    SCENARIO_START / SCENARIO_END / SECTION
    ─────────────────────────────────────────────────────────────
    Znaczniki scenariusza demonstracyjnego.

FORMAT LOGU:
═══════════════════════════════════════════════════════════════════

{
    "metadata": {"version": "1.0", "timestamp": "2026-01-01T12:00:00"},
    "events": [
        {
            "seq": 0,
            "type": "UNIT_CREATED",
            "unit": "SC4V-TP",
            "variant": "heavy_defense",
            "message": "HeavyDefense SC4V-TP is created",
            "data": {...}
        },
        ...
    ]
}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, TextIO, TYPE_CHECKING
from datetime import datetime
from pathlib import Path
import json
import sys

if TYPE_CHECKING:
    from ..units.unit import Unit
    from ..units.profile import SpecialAction


class EventType(Enum):
    """Typ zdarzenia narracji."""

    # Cykl życia
    UNIT_CREATED = auto()
    UNIT_COPIED = auto()
    UNIT_ASSIGNED = auto()
    UNIT_DISPOSED = auto()

    # Akcje
    UNIT_ATTACK = auto()
    ATTACK_REJECTED = auto()
    UNIT_DAMAGE = auto()
    UNIT_REPAIR = auto()
    REPAIR_REJECTED = auto()
    SPECIAL_ACTION = auto()

    # Scenariusz
    SCENARIO_START = auto()
    SCENARIO_END = auto()
    SECTION = auto()

    def is_rejection(self) -> bool:
        """Czy zdarzenie oznacza odrzuconą akcję."""
        return self in (EventType.ATTACK_REJECTED, EventType.REPAIR_REJECTED)


@dataclass
class NarrationEvent:
    """
    Pojedyncze zdarzenie narracji.

    Attributes:
        sequence (int): Numer kolejny zdarzenia w narratorze
        event_type (EventType): Typ zdarzenia
        message (str): Czytelny komunikat (wypisywany na stdout)
        unit_name (Optional[str]): Nazwa jednostki (jeśli dotyczy)
        variant (Optional[str]): Klucz wariantu (np. "heavy_offense")
        target (Optional[str]): Cel ataku (jeśli dotyczy)
        data (Dict): Dodatkowe dane specyficzne dla typu zdarzenia
    """
    sequence: int
    event_type: EventType
    message: str
    unit_name: Optional[str] = None
    variant: Optional[str] = None
    target: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje zdarzenie do słownika."""
        result = {
            "seq": self.sequence,
            "type": self.event_type.name,
            "message": self.message,
        }

        if self.unit_name is not None:
            result["unit"] = self.unit_name
        if self.variant is not None:
            result["variant"] = self.variant
        if self.target is not None:
            result["target"] = self.target
        if self.data:
            result["data"] = self.data

        return result

    def __str__(self) -> str:
        return self.message


class Narrator:
    """
    Zbiera i wypisuje zdarzenia narracji.

    Attributes:
        echo (bool): Czy wypisywać komunikaty na strumień
        record (bool): Czy przechowywać zdarzenia w `events`
        stream (Optional[TextIO]): Strumień wyjścia (None = sys.stdout)
        events (List[NarrationEvent]): Zapisane zdarzenia
        metadata (Dict): Metadane logu

    Example:
        >>> narrator = Narrator(echo=False)
        >>> unit = Unit(UnitVariant.BASE, "CL4P", narrator=narrator)
        >>> unit.attack("dummy")
        >>> narrator.get_events_by_type(EventType.UNIT_ATTACK)[0].target
        'dummy'
    """

    def __init__(
        self,
        echo: bool = True,
        record: bool = True,
        stream: Optional[TextIO] = None,
    ):
        self.echo = echo
        self.record = record
        self.stream = stream
        self.events: List[NarrationEvent] = []
        self.metadata: Dict[str, Any] = {
            "version": "1.0",
            "timestamp": datetime.now().isoformat(),
        }
        self._sequence = 0

    # ─────────────────────────────────────────────────────────────────────────
    # LOGOWANIE OGÓLNE
    # ─────────────────────────────────────────────────────────────────────────

    def log(self, event: NarrationEvent) -> None:
        """
        Dodaje zdarzenie do logu i wypisuje komunikat.

        Args:
            event: Zdarzenie do zalogowania
        """
        if self.record:
            self.events.append(event)
        if self.echo:
            # sys.stdout czytany przy każdym wypisaniu, nie przy tworzeniu
            print(event.message, file=self.stream or sys.stdout)

    def log_event(
        self,
        event_type: EventType,
        message: str,
        unit_name: Optional[str] = None,
        variant: Optional[str] = None,
        target: Optional[str] = None,
        **data: Any,
    ) -> NarrationEvent:
        """
        Tworzy i loguje zdarzenie.

        Args:
            event_type: Typ zdarzenia
            message: Komunikat dla człowieka
            unit_name: Nazwa jednostki
            variant: Klucz wariantu
            target: Cel akcji
            **data: Dodatkowe dane

        Returns:
            NarrationEvent: Utworzone zdarzenie
        """
        event = NarrationEvent(
            sequence=self._sequence,
            event_type=event_type,
            message=message,
            unit_name=unit_name,
            variant=variant,
            target=target,
            data=dict(data),
        )
        self._sequence += 1
        self.log(event)
        return event

    # ─────────────────────────────────────────────────────────────────────────
    # CYKL ŻYCIA
    # ─────────────────────────────────────────────────────────────────────────

    def log_created(self, unit: "Unit", default_name: bool = False) -> NarrationEvent:
        """Loguje utworzenie jednostki."""
        if default_name:
            message = f"{unit.variant.label} {unit.name} is created with default name"
        else:
            message = f"{unit.variant.label} {unit.name} is created"
        return self._log_unit(EventType.UNIT_CREATED, unit, message, **unit.resources())

    def log_copied(self, unit: "Unit", source: "Unit") -> NarrationEvent:
        """Loguje utworzenie kopii."""
        return self._log_unit(
            EventType.UNIT_COPIED,
            unit,
            f"{unit.variant.label} {unit.name} is copied",
            source=source.name,
            **unit.resources(),
        )

    def log_assigned(
        self,
        unit: "Unit",
        source: "Unit",
        previous_name: Optional[str] = None,
    ) -> NarrationEvent:
        """
        Loguje przypisanie stanu z innej jednostki.

        Zdarzenie jest zapisywane pod nazwą sprzed przypisania.
        """
        previous_name = unit.name if previous_name is None else previous_name
        return self.log_event(
            EventType.UNIT_ASSIGNED,
            f"{unit.variant.label} {previous_name} is assigned from {source.name}",
            unit_name=previous_name,
            variant=unit.variant.value,
            source=source.name,
            previous_name=previous_name,
            self_assignment=unit is source,
            **unit.resources(),
        )

    def log_disposed(self, unit: "Unit") -> NarrationEvent:
        """Loguje likwidację jednostki."""
        return self._log_unit(
            EventType.UNIT_DISPOSED,
            unit,
            f"{unit.variant.label} {unit.name} is disposed",
            **unit.resources(),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # AKCJE
    # ─────────────────────────────────────────────────────────────────────────

    def log_attack(self, unit: "Unit", target: str) -> NarrationEvent:
        """Loguje przyjęty atak."""
        return self._log_unit(
            EventType.UNIT_ATTACK,
            unit,
            f"{unit.variant.label} {unit.name} attacks {target}, "
            f"causing {unit.attack_damage} points of damage!",
            target=target,
            damage=unit.attack_damage,
            energy_after=unit.energy_points,
        )

    def log_attack_rejected(self, unit: "Unit", target: str, reason: str) -> NarrationEvent:
        """Loguje odrzucony atak."""
        return self._log_unit(
            EventType.ATTACK_REJECTED,
            unit,
            f"{unit.variant.label} {unit.name} cannot attack {target} ({reason})!",
            target=target,
            reason=reason,
        )

    def log_damage(self, unit: "Unit", amount: int) -> NarrationEvent:
        """Loguje otrzymanie obrażeń."""
        message = f"{unit.variant.label} {unit.name} takes {amount} points of damage!"
        if not unit.is_alive():
            message += " It is out of hit points."
        return self._log_unit(
            EventType.UNIT_DAMAGE,
            unit,
            message,
            amount=amount,
            hp_after=unit.hit_points,
        )

    def log_repair(self, unit: "Unit", amount: int) -> NarrationEvent:
        """Loguje przyjętą naprawę."""
        return self._log_unit(
            EventType.UNIT_REPAIR,
            unit,
            f"{unit.variant.label} {unit.name} is repaired for {amount} points!",
            amount=amount,
            hp_after=unit.hit_points,
            energy_after=unit.energy_points,
        )

    def log_repair_rejected(self, unit: "Unit", amount: int, reason: str) -> NarrationEvent:
        """Loguje odrzuconą naprawę."""
        return self._log_unit(
            EventType.REPAIR_REJECTED,
            unit,
            f"{unit.variant.label} {unit.name} cannot be repaired ({reason})!",
            amount=amount,
            reason=reason,
        )

    def log_special(self, unit: "Unit", action: "SpecialAction") -> NarrationEvent:
        """Loguje akcję specjalną wariantu."""
        messages = {
            "guard_gate": "is now in Gate keeper mode.",
            "high_fives_guys": "requests a positive high five!",
        }
        return self._log_unit(
            EventType.SPECIAL_ACTION,
            unit,
            f"{unit.variant.label} {unit.name} {messages[action.method_name]}",
            action=action.method_name,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # SCENARIUSZ
    # ─────────────────────────────────────────────────────────────────────────

    def log_section(self, title: str) -> NarrationEvent:
        """Loguje nagłówek sekcji scenariusza."""
        return self.log_event(EventType.SECTION, f"\n=== {title} ===", title=title)

    def log_scenario_start(self, scenario_id: str, title: str) -> NarrationEvent:
        """Loguje start scenariusza."""
        return self.log_event(
            EventType.SCENARIO_START,
            f"=== {title} ===",
            scenario=scenario_id,
        )

    def log_scenario_end(self, scenario_id: str, unit_count: int) -> NarrationEvent:
        """Loguje koniec scenariusza."""
        return self.log_event(
            EventType.SCENARIO_END,
            f"=== Scenario {scenario_id} finished ({unit_count} units) ===",
            scenario=scenario_id,
            unit_count=unit_count,
        )

    def _log_unit(
        self,
        event_type: EventType,
        unit: "Unit",
        message: str,
        target: Optional[str] = None,
        **data: Any,
    ) -> NarrationEvent:
        return self.log_event(
            event_type,
            message,
            unit_name=unit.name,
            variant=unit.variant.value,
            target=target,
            **data,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializuje cały log do słownika.

        Returns:
            Dict: Pełny log w formacie dla JSON
        """
        return {
            "metadata": self.metadata,
            "events": [e.to_dict() for e in self.events],
        }

    def save(self, filepath: str) -> None:
        """
        Zapisuje log do pliku JSON.

        Args:
            filepath: Ścieżka do pliku
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """
        Zwraca log jako string JSON.

        Args:
            indent: Wcięcie (None = compact)
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # ─────────────────────────────────────────────────────────────────────────
    # STATYSTYKI
    # ─────────────────────────────────────────────────────────────────────────

    def get_event_count(self) -> int:
        """Zwraca liczbę zdarzeń."""
        return len(self.events)

    def get_events_by_type(self, event_type: EventType) -> List[NarrationEvent]:
        """Filtruje zdarzenia po typie."""
        return [e for e in self.events if e.event_type == event_type]

    def get_events_for_unit(self, unit_name: str) -> List[NarrationEvent]:
        """Filtruje zdarzenia dla jednostki."""
        return [e for e in self.events if e.unit_name == unit_name]

    def last_event(self) -> Optional[NarrationEvent]:
        """Zwraca ostatnie zapisane zdarzenie."""
        return self.events[-1] if self.events else None

    def clear(self) -> None:
        """Czyści zapisane zdarzenia (numeracja leci dalej)."""
        self.events.clear()


# Narrator używany przez jednostki bez własnego narratora:
# wypisuje na stdout, nie przechowuje zdarzeń.
STDOUT_NARRATOR = Narrator(echo=True, record=False)
