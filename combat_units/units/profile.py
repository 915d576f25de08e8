"""
Profile wariantów jednostek - stałe wartości startowe.

Każdy wariant jednostki dzieli ten sam kształt stanu (HP, energia,
obrażenia ataku). Różnią się tylko:
1. Wartościami startowymi (profil)
2. Etykietą używaną w narracji ataku
3. Jedną dodatkową akcją (opcjonalną)

Tabela profili:
─────────────────────────────────────────────────────────────────
Wariant          | HP  | Energia | Obrażenia | Akcja specjalna
─────────────────────────────────────────────────────────────────
BASE             | 10  | 10      | 0         | -
HEAVY_DEFENSE    | 100 | 50      | 20        | guard_gate
HEAVY_OFFENSE    | 100 | 100     | 30        | high_fives_guys
─────────────────────────────────────────────────────────────────

Profil jest ustawiany RAZ przy tworzeniu jednostki i nigdy nie
jest resetowany.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union


DEFAULT_NAME = "Default"


class SpecialAction(Enum):
    """
    Dodatkowa akcja wariantu.

    Akcje specjalne są bezwarunkowe - nie mają bramki energii/HP
    i nie zmieniają stanu jednostki (tylko narracja).
    """

    GUARD_GATE = auto()       # HEAVY_DEFENSE - tryb strażnika bramy
    HIGH_FIVES_GUYS = auto()  # HEAVY_OFFENSE - prośba o przybicie piątki

    @property
    def method_name(self) -> str:
        """Nazwa metody na Unit wywołującej tę akcję."""
        return self.name.lower()


@dataclass(frozen=True)
class UnitProfile:
    """
    Niezmienny profil startowy wariantu.

    Attributes:
        label (str): Etykieta wariantu w narracji (np. "HeavyDefense")
        hit_points (int): Startowe HP
        energy_points (int): Startowa energia
        attack_damage (int): Stałe obrażenia zadawane jednym atakiem
        special (Optional[SpecialAction]): Dodatkowa akcja (None = brak)
    """
    label: str
    hit_points: int
    energy_points: int
    attack_damage: int
    special: Optional[SpecialAction] = None

    def to_dict(self) -> dict:
        """Serializuje profil do słownika."""
        return {
            "label": self.label,
            "hit_points": self.hit_points,
            "energy_points": self.energy_points,
            "attack_damage": self.attack_damage,
            "special": self.special.method_name if self.special else None,
        }


class UnitVariant(Enum):
    """
    Tag wariantu jednostki.

    Wartość enuma to klucz używany w YAML (np. "heavy_defense").
    """

    BASE = "base"
    HEAVY_DEFENSE = "heavy_defense"
    HEAVY_OFFENSE = "heavy_offense"

    @property
    def profile(self) -> UnitProfile:
        """Zwraca profil startowy wariantu."""
        return VARIANT_PROFILES[self]

    @property
    def label(self) -> str:
        return self.profile.label

    @property
    def special(self) -> Optional[SpecialAction]:
        return self.profile.special

    @classmethod
    def parse(cls, value: Union[str, "UnitVariant"]) -> "UnitVariant":
        """
        Zamienia klucz z YAML na wariant.

        Akceptuje wartość ("heavy_defense"), nazwę enuma ("HEAVY_DEFENSE")
        lub myślnik zamiast podkreślnika ("heavy-defense").

        Raises:
            ValueError: Jeśli wariant nie istnieje

        Example:
            >>> UnitVariant.parse("heavy-offense")
            <UnitVariant.HEAVY_OFFENSE: 'heavy_offense'>
        """
        if isinstance(value, cls):
            return value

        key = str(value).strip().lower().replace("-", "_")
        for variant in cls:
            if variant.value == key:
                return variant

        valid = ", ".join(v.value for v in cls)
        raise ValueError(f"Unknown unit variant '{value}' (expected one of: {valid})")


VARIANT_PROFILES = {
    UnitVariant.BASE: UnitProfile(
        label="Base",
        hit_points=10,
        energy_points=10,
        attack_damage=0,
    ),
    UnitVariant.HEAVY_DEFENSE: UnitProfile(
        label="HeavyDefense",
        hit_points=100,
        energy_points=50,
        attack_damage=20,
        special=SpecialAction.GUARD_GATE,
    ),
    UnitVariant.HEAVY_OFFENSE: UnitProfile(
        label="HeavyOffense",
        hit_points=100,
        energy_points=100,
        attack_damage=30,
        special=SpecialAction.HIGH_FIVES_GUYS,
    ),
}
