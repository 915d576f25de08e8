"""
Unit - jednostka bojowa z ograniczonymi zasobami.

Jednostka łączy:
- UnitVariant: tag wariantu (profil startowy + akcja specjalna)
- Zasoby: hit_points, energy_points (nigdy ujemne)
- attack_damage: stałe obrażenia wariantu
- Narrator: strumień zdarzeń (cykl życia + wyniki akcji)

Cykl życia jednostki:
═══════════════════════════════════════════════════════════════════

    1. TWORZENIE
       - Unit(variant, name) - profil wariantu, narracja UNIT_CREATED
       - Bez nazwy -> DEFAULT_NAME ("Default")
       - Z konfiguracji YAML (Unit.from_config)

    2. KOPIA / PRZYPISANIE
       - copy() / copy.copy() - niezależna jednostka, UNIT_COPIED
       - assign_from(other) - nadpisuje wszystkie pola, UNIT_ASSIGNED
       - Tylko w obrębie TEGO SAMEGO wariantu (inaczej TypeError)

    3. AKCJE
       - attack / be_repaired - bramka: energia > 0 ORAZ HP > 0
       - take_damage - zawsze (HP obcinane do 0)
       - akcja specjalna wariantu - zawsze, bez kosztu

    4. LIKWIDACJA
       - dispose() lub wyjście z bloku `with unit:` / UnitScope
       - UNIT_DISPOSED emitowane dokładnie raz

Maszyna stanów (dwa niezależne warunki):
═══════════════════════════════════════════════════════════════════

    has_energy = energy_points > 0
    is_alive   = hit_points > 0

    Akcja          | wymaga has_energy | wymaga is_alive
    ───────────────┼───────────────────┼────────────────
    attack         | tak               | tak
    be_repaired    | tak               | tak
    take_damage    | nie               | nie
    akcja specjalna| nie               | nie

    Nic nie przywraca energii. HP = 0 jest końcowe dla attack/be_repaired.

Przykład użycia:
    >>> unit = Unit(UnitVariant.HEAVY_DEFENSE, "SC4V-TP")
    >>> unit.take_damage(150)
    >>> unit.hit_points
    0
    >>> unit.attack("intruder")   # odrzucone, stan bez zmian
    >>> unit.guard_gate()         # zawsze działa
"""

from __future__ import annotations
from typing import Optional, Dict, Any, Union

from ..events.narrator import Narrator, STDOUT_NARRATOR
from .profile import UnitVariant, SpecialAction, DEFAULT_NAME


REASON_NO_HIT_POINTS = "out of hit points"
REASON_NO_ENERGY = "out of energy"


def require_unsigned(value: int, name: str = "amount") -> int:
    """
    Sprawdza, że wartość jest nieujemną liczbą całkowitą.

    Raises:
        TypeError: Jeśli wartość nie jest int (bool też odrzucany)
        ValueError: Jeśli wartość jest ujemna
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


class Unit:
    """
    Jednostka bojowa - wspólny rekord stanu dla wszystkich wariantów.

    Attributes:
        name (str): Nazwa (narracja/identyfikacja)
        variant (UnitVariant): Wariant jednostki
        hit_points (int): Aktualne HP (>= 0)
        energy_points (int): Aktualna energia (>= 0)
        attack_damage (int): Stałe obrażenia ataku (tylko do odczytu)
        narrator (Narrator): Odbiorca zdarzeń
        disposed (bool): Czy jednostka została zlikwidowana

    Note:
        - Jednostki porównywane są wartościowo (wariant + wszystkie pola)
        - Narrator NIE jest częścią stanu - kopia dzieli narratora
    """

    __hash__ = None  # mutowalny obiekt wartościowy

    def __init__(
        self,
        variant: Union[UnitVariant, str] = UnitVariant.BASE,
        name: Optional[str] = None,
        narrator: Optional[Narrator] = None,
    ):
        """
        Tworzy jednostkę z profilem wariantu.

        Args:
            variant: Wariant (enum lub klucz z YAML)
            name: Nazwa (None = DEFAULT_NAME)
            narrator: Narrator (None = wspólny narrator stdout)
        """
        self.variant = UnitVariant.parse(variant)
        self.narrator = narrator if narrator is not None else STDOUT_NARRATOR
        self.disposed = False

        self.name = DEFAULT_NAME if name is None else str(name)
        self._apply_profile()

        self.narrator.log_created(self, default_name=name is None)

    def _apply_profile(self) -> None:
        profile = self.variant.profile
        self.hit_points = profile.hit_points
        self.energy_points = profile.energy_points
        self._attack_damage = profile.attack_damage

    # ─────────────────────────────────────────────────────────────────────────
    # FACTORY METHODS
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_config(
        cls,
        config: Dict[str, Any],
        narrator: Optional[Narrator] = None,
    ) -> "Unit":
        """
        Tworzy jednostkę z konfiguracji (słownika z ConfigLoader).

        Args:
            config: Słownik z kluczami "variant" i opcjonalnie "name"
            narrator: Narrator

        Returns:
            Unit: Nowa jednostka

        Example:
            >>> config = loader.load_unit("gatekeeper")
            >>> unit = Unit.from_config(config)
        """
        return cls(
            variant=config.get("variant", UnitVariant.BASE.value),
            name=config.get("name"),
            narrator=narrator,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # STAN
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def attack_damage(self) -> int:
        """Stałe obrażenia ataku wariantu."""
        return self._attack_damage

    def is_alive(self) -> bool:
        """Sprawdza czy jednostka ma HP."""
        return self.hit_points > 0

    def has_energy(self) -> bool:
        """Sprawdza czy jednostka ma energię."""
        return self.energy_points > 0

    def can_act(self) -> bool:
        """
        Bramka akcji attack / be_repaired.

        Returns:
            bool: True jeśli energia > 0 ORAZ HP > 0
        """
        return self.has_energy() and self.is_alive()

    def _rejection_reason(self) -> str:
        if not self.is_alive():
            return REASON_NO_HIT_POINTS
        return REASON_NO_ENERGY

    def resources(self) -> Dict[str, int]:
        """Zwraca aktualne zasoby jednostki."""
        return {
            "hit_points": self.hit_points,
            "energy_points": self.energy_points,
            "attack_damage": self.attack_damage,
        }

    # ─────────────────────────────────────────────────────────────────────────
    # AKCJE
    # ─────────────────────────────────────────────────────────────────────────

    def attack(self, target: str) -> None:
        """
        Atakuje cel.

        Przyjęty tylko gdy energia > 0 i HP > 0: zużywa 1 energii,
        zadaje pełne attack_damage. W przeciwnym razie nic nie zmienia
        (tylko narracja odrzucenia).

        Args:
            target: Nazwa celu
        """
        target = str(target)
        if not self.can_act():
            self.narrator.log_attack_rejected(self, target, self._rejection_reason())
            return

        self.energy_points -= 1
        self.narrator.log_attack(self, target)

    def take_damage(self, amount: int) -> None:
        """
        Otrzymuje obrażenia - zawsze, bez bramki.

        HP nigdy nie spada poniżej 0.

        Args:
            amount: Ilość obrażeń (nieujemna)

        Raises:
            TypeError / ValueError: Jeśli amount nie jest nieujemnym int
        """
        require_unsigned(amount)

        if amount >= self.hit_points:
            self.hit_points = 0
        else:
            self.hit_points -= amount

        self.narrator.log_damage(self, amount)

    def be_repaired(self, amount: int) -> None:
        """
        Naprawia jednostkę.

        Przyjęte tylko gdy energia > 0 i HP > 0: HP += amount (bez
        górnego limitu), energia -= 1.

        Args:
            amount: Ilość HP do przywrócenia (nieujemna)

        Raises:
            TypeError / ValueError: Jeśli amount nie jest nieujemnym int
        """
        require_unsigned(amount)

        if not self.can_act():
            self.narrator.log_repair_rejected(self, amount, self._rejection_reason())
            return

        # Brak limitu max HP - leczenie może przekroczyć wartość startową
        self.hit_points += amount
        self.energy_points -= 1
        self.narrator.log_repair(self, amount)

    def guard_gate(self) -> None:
        """Tryb strażnika bramy (tylko HEAVY_DEFENSE)."""
        self._perform_special(SpecialAction.GUARD_GATE)

    def high_fives_guys(self) -> None:
        """Prośba o przybicie piątki (tylko HEAVY_OFFENSE)."""
        self._perform_special(SpecialAction.HIGH_FIVES_GUYS)

    def special_action(self) -> SpecialAction:
        """
        Wykonuje akcję specjalną wariantu, jakakolwiek by nie była.

        Returns:
            SpecialAction: Wykonana akcja

        Raises:
            TypeError: Jeśli wariant nie ma akcji specjalnej
        """
        action = self.variant.special
        if action is None:
            raise TypeError(f"{self.variant.label} unit has no special action")
        self._perform_special(action)
        return action

    def _perform_special(self, action: SpecialAction) -> None:
        if self.variant.special is not action:
            raise TypeError(
                f"{self.variant.label} unit does not support {action.method_name}()"
            )
        self.narrator.log_special(self, action)

    # ─────────────────────────────────────────────────────────────────────────
    # KOPIA I PRZYPISANIE
    # ─────────────────────────────────────────────────────────────────────────

    def copy(self) -> "Unit":
        """
        Tworzy niezależną kopię jednostki tego samego wariantu.

        Returns:
            Unit: Nowa jednostka z identycznymi polami
        """
        clone = self.__class__.__new__(self.__class__)
        clone.variant = self.variant
        clone.narrator = self.narrator
        clone.disposed = False
        clone._copy_fields(self)
        self.narrator.log_copied(clone, self)
        return clone

    def __copy__(self) -> "Unit":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Unit":
        # pola są skalarami - płytka kopia jest już niezależna
        return self.copy()

    def assign_from(self, other: "Unit") -> "Unit":
        """
        Nadpisuje wszystkie pola (łącznie z nazwą) polami innej jednostki.

        Przypisanie do samego siebie nie zmienia stanu.

        Args:
            other: Jednostka źródłowa (ten sam wariant)

        Returns:
            Unit: self (do łańcuchowania)

        Raises:
            TypeError: Jeśli other nie jest Unit tego samego wariantu
        """
        self._check_same_variant(other)
        previous_name = self.name
        if other is not self:
            self._copy_fields(other)
        self.narrator.log_assigned(self, other, previous_name=previous_name)
        return self

    def _copy_fields(self, other: "Unit") -> None:
        self.name = other.name
        self.hit_points = other.hit_points
        self.energy_points = other.energy_points
        self._attack_damage = other._attack_damage

    def _check_same_variant(self, other: object) -> None:
        if not isinstance(other, Unit):
            raise TypeError(f"Cannot assign {type(other).__name__} to Unit")
        if other.variant is not self.variant:
            raise TypeError(
                f"Cannot assign {other.variant.label} unit to {self.variant.label} unit"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # LIKWIDACJA
    # ─────────────────────────────────────────────────────────────────────────

    def dispose(self) -> None:
        """
        Likwiduje jednostkę (zdarzenie UNIT_DISPOSED).

        Kolejne wywołania nic nie robią.
        """
        if self.disposed:
            return
        self.disposed = True
        self.narrator.log_disposed(self)

    def __enter__(self) -> "Unit":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje stan jednostki do słownika."""
        return {
            "name": self.name,
            "variant": self.variant.value,
            **self.resources(),
        }

    # ─────────────────────────────────────────────────────────────────────────
    # COMPARISON
    # ─────────────────────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unit):
            return NotImplemented
        return self.variant is other.variant and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"Unit({self.variant.label}, {self.name}, "
            f"hp={self.hit_points}, ep={self.energy_points}, ad={self.attack_damage})"
        )
