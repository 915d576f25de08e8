"""
Testy dla jednostek i ich akcji.

Testuje:
- Profile wariantów (HP, energia, obrażenia)
- Bramkę energii/HP dla attack i be_repaired
- Obcinanie HP do 0 w take_damage
- Nieograniczone leczenie w be_repaired
- Akcje specjalne wariantów
- Walidację argumentów (unsigned)
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from combat_units.units.unit import Unit
from combat_units.units.profile import (
    UnitVariant, SpecialAction, VARIANT_PROFILES, DEFAULT_NAME,
)
from combat_units.events.narrator import Narrator, EventType


ALL_VARIANTS = list(UnitVariant)


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def narrator():
    """Narrator bez wypisywania - tylko zbiera zdarzenia."""
    return Narrator(echo=False)


def create_unit(variant=UnitVariant.BASE, name="TEST", narrator=None):
    """Helper do tworzenia jednostek testowych."""
    return Unit(variant, name, narrator=narrator or Narrator(echo=False))


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PROFILE I KONSTRUKCJA
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("variant, hp, ep, ad", [
    (UnitVariant.BASE, 10, 10, 0),
    (UnitVariant.HEAVY_DEFENSE, 100, 50, 20),
    (UnitVariant.HEAVY_OFFENSE, 100, 100, 30),
])
def test_named_construction_uses_variant_profile(variant, hp, ep, ad):
    """Nazwana jednostka ma nazwę i profil wariantu."""
    unit = create_unit(variant, "n")

    assert unit.name == "n"
    assert unit.variant is variant
    assert unit.hit_points == hp
    assert unit.energy_points == ep
    assert unit.attack_damage == ad


@pytest.mark.parametrize("variant", ALL_VARIANTS)
def test_default_construction_uses_default_name(variant, narrator):
    """Bez nazwy jednostka dostaje DEFAULT_NAME."""
    unit = Unit(variant, narrator=narrator)

    assert unit.name == DEFAULT_NAME == "Default"
    assert unit.hit_points == variant.profile.hit_points


def test_default_variant_is_base(narrator):
    """Unit() bez argumentów to jednostka BASE."""
    unit = Unit(narrator=narrator)
    assert unit.variant is UnitVariant.BASE


def test_variant_accepts_yaml_key(narrator):
    """Wariant można podać jako klucz z YAML."""
    unit = Unit("heavy-defense", "X", narrator=narrator)
    assert unit.variant is UnitVariant.HEAVY_DEFENSE


def test_unknown_variant_rejected(narrator):
    """Nieznany wariant -> ValueError."""
    with pytest.raises(ValueError, match="Unknown unit variant"):
        Unit("medium_support", "X", narrator=narrator)


def test_attack_damage_is_read_only():
    """attack_damage nie może być zmienione po utworzeniu."""
    unit = create_unit(UnitVariant.HEAVY_OFFENSE)
    with pytest.raises(AttributeError):
        unit.attack_damage = 99


def test_profiles_special_actions():
    """Tylko ciężkie warianty mają akcję specjalną."""
    assert VARIANT_PROFILES[UnitVariant.BASE].special is None
    assert UnitVariant.HEAVY_DEFENSE.special is SpecialAction.GUARD_GATE
    assert UnitVariant.HEAVY_OFFENSE.special is SpecialAction.HIGH_FIVES_GUYS


def test_from_config():
    """Unit.from_config czyta wariant i nazwę ze słownika."""
    unit = Unit.from_config(
        {"variant": "heavy_offense", "name": "FR4G-TP"},
        narrator=Narrator(echo=False),
    )
    assert unit.variant is UnitVariant.HEAVY_OFFENSE
    assert unit.name == "FR4G-TP"
    assert unit.energy_points == 100


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ATTACK
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("variant", ALL_VARIANTS)
def test_attack_spends_one_energy(variant):
    """Atak zużywa dokładnie 1 energii i nie zmienia HP."""
    unit = create_unit(variant)
    hp_before = unit.hit_points
    ep_before = unit.energy_points

    unit.attack("dummy")

    assert unit.energy_points == ep_before - 1
    assert unit.hit_points == hp_before


@pytest.mark.parametrize("variant", ALL_VARIANTS)
def test_attack_deals_full_damage(variant, narrator):
    """Atak zawsze zadaje pełne attack_damage wariantu."""
    unit = create_unit(variant, narrator=narrator)
    unit.attack("dummy")

    event = narrator.last_event()
    assert event.event_type == EventType.UNIT_ATTACK
    assert event.target == "dummy"
    assert event.data["damage"] == variant.profile.attack_damage


@pytest.mark.parametrize("variant", ALL_VARIANTS)
def test_attack_exhausts_energy_to_zero(variant, narrator):
    """Powtarzane ataki wyczerpują energię dokładnie do 0."""
    unit = create_unit(variant, narrator=narrator)
    energy = unit.energy_points

    for _ in range(energy):
        unit.attack("dummy")
    assert unit.energy_points == 0

    # dalsze próby to idempotentne odrzucenia
    for _ in range(3):
        unit.attack("dummy")
        unit.be_repaired(5)

    assert unit.energy_points == 0
    assert unit.hit_points == variant.profile.hit_points
    assert len(narrator.get_events_by_type(EventType.ATTACK_REJECTED)) == 3
    assert len(narrator.get_events_by_type(EventType.REPAIR_REJECTED)) == 3


@pytest.mark.parametrize("variant", ALL_VARIANTS)
def test_attack_rejected_without_hit_points(variant, narrator):
    """Jednostka bez HP nie atakuje - stan bez zmian."""
    unit = create_unit(variant, narrator=narrator)
    unit.take_damage(unit.hit_points)
    ep_before = unit.energy_points

    unit.attack("dummy")

    assert unit.energy_points == ep_before
    assert unit.hit_points == 0
    event = narrator.last_event()
    assert event.event_type == EventType.ATTACK_REJECTED
    assert event.data["reason"] == "out of hit points"


def test_base_unit_eleventh_attack_rejected(narrator):
    """BASE: 10 ataków -> energia 0, 11. atak odrzucony."""
    unit = create_unit(UnitVariant.BASE, narrator=narrator)

    for _ in range(10):
        unit.attack("target")
    assert unit.energy_points == 0

    unit.attack("target")

    assert unit.energy_points == 0
    event = narrator.last_event()
    assert event.event_type == EventType.ATTACK_REJECTED
    assert event.data["reason"] == "out of energy"
    assert len(narrator.get_events_by_type(EventType.UNIT_ATTACK)) == 10


# ═══════════════════════════════════════════════════════════════════════════
# TEST: TAKE DAMAGE
# ═══════════════════════════════════════════════════════════════════════════

def test_take_damage_subtracts():
    """amount < HP -> HP - amount."""
    unit = create_unit(UnitVariant.HEAVY_DEFENSE)
    unit.take_damage(30)
    assert unit.hit_points == 70


@pytest.mark.parametrize("amount", [10, 11, 150, 2 ** 64])
def test_take_damage_clamps_to_zero(amount):
    """amount >= HP -> HP == 0 (bez przekręcenia licznika)."""
    unit = create_unit(UnitVariant.BASE)
    unit.take_damage(amount)
    assert unit.hit_points == 0


def test_take_damage_zero_amount():
    """0 obrażeń nie zmienia HP, ale zdarzenie jest logowane."""
    narrator = Narrator(echo=False)
    unit = create_unit(narrator=narrator)
    unit.take_damage(0)

    assert unit.hit_points == 10
    assert narrator.last_event().event_type == EventType.UNIT_DAMAGE


def test_take_damage_ignores_energy():
    """take_damage działa niezależnie od energii."""
    unit = create_unit(UnitVariant.BASE)
    for _ in range(10):
        unit.attack("x")
    assert unit.energy_points == 0

    unit.take_damage(4)
    assert unit.hit_points == 6


def test_take_damage_on_destroyed_unit():
    """take_damage nadal działa przy HP = 0."""
    narrator = Narrator(echo=False)
    unit = create_unit(narrator=narrator)
    unit.take_damage(100)
    unit.take_damage(5)

    assert unit.hit_points == 0
    assert len(narrator.get_events_by_type(EventType.UNIT_DAMAGE)) == 2


# ═══════════════════════════════════════════════════════════════════════════
# TEST: BE REPAIRED
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("variant", ALL_VARIANTS)
def test_repair_adds_hit_points_and_spends_energy(variant):
    """Naprawa: HP += amount, energia -= 1."""
    unit = create_unit(variant)
    hp_before = unit.hit_points
    ep_before = unit.energy_points

    unit.be_repaired(7)

    assert unit.hit_points == hp_before + 7
    assert unit.energy_points == ep_before - 1


def test_repair_is_unbounded():
    """Leczenie nie ma limitu - HP może przekroczyć wartość startową."""
    unit = create_unit(UnitVariant.BASE)

    for _ in range(10):
        unit.be_repaired(1000)

    assert unit.hit_points == 10 + 10 * 1000
    assert unit.energy_points == 0


def test_repair_rejected_without_hit_points():
    """Jednostki z HP = 0 nie da się już naprawić."""
    narrator = Narrator(echo=False)
    unit = create_unit(narrator=narrator)
    unit.take_damage(15)

    unit.be_repaired(1)

    assert unit.hit_points == 0
    assert unit.energy_points == 10
    assert narrator.last_event().event_type == EventType.REPAIR_REJECTED


def test_heavy_offense_damage_then_repair():
    """HEAVY_OFFENSE: take_damage(30) + be_repaired(20) -> HP 90, energia -1."""
    unit = create_unit(UnitVariant.HEAVY_OFFENSE)

    unit.take_damage(30)
    unit.be_repaired(20)

    assert unit.hit_points == 90
    assert unit.energy_points == 99


# ═══════════════════════════════════════════════════════════════════════════
# TEST: AKCJE SPECJALNE
# ═══════════════════════════════════════════════════════════════════════════

def test_heavy_defense_destroyed_still_guards(narrator):
    """HEAVY_DEFENSE po take_damage(150): attack/repair odrzucone, guard_gate działa."""
    unit = create_unit(UnitVariant.HEAVY_DEFENSE, narrator=narrator)
    assert (unit.hit_points, unit.energy_points) == (100, 50)

    unit.take_damage(150)
    assert unit.hit_points == 0

    unit.attack("intruder")
    unit.be_repaired(10)
    assert (unit.hit_points, unit.energy_points) == (0, 50)

    unit.guard_gate()
    event = narrator.last_event()
    assert event.event_type == EventType.SPECIAL_ACTION
    assert event.data["action"] == "guard_gate"
    assert "Gate keeper mode" in event.message


def test_high_fives_without_energy(narrator):
    """high_fives_guys działa bez energii i nic nie kosztuje."""
    unit = create_unit(UnitVariant.HEAVY_OFFENSE, narrator=narrator)
    for _ in range(101):
        unit.attack("dummy")
    assert unit.energy_points == 0

    unit.high_fives_guys()

    assert unit.energy_points == 0
    assert unit.hit_points == 100
    assert narrator.last_event().data["action"] == "high_fives_guys"


def test_special_action_dispatches_by_variant(narrator):
    """special_action() wykonuje akcję właściwą dla wariantu."""
    defender = create_unit(UnitVariant.HEAVY_DEFENSE, narrator=narrator)
    striker = create_unit(UnitVariant.HEAVY_OFFENSE, narrator=narrator)

    assert defender.special_action() is SpecialAction.GUARD_GATE
    assert striker.special_action() is SpecialAction.HIGH_FIVES_GUYS


def test_special_action_wrong_variant():
    """Akcja specjalna innego wariantu -> TypeError."""
    base = create_unit(UnitVariant.BASE)
    defender = create_unit(UnitVariant.HEAVY_DEFENSE)

    with pytest.raises(TypeError):
        base.special_action()
    with pytest.raises(TypeError):
        base.guard_gate()
    with pytest.raises(TypeError):
        defender.high_fives_guys()


# ═══════════════════════════════════════════════════════════════════════════
# TEST: WALIDACJA ARGUMENTÓW
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("amount", [-1, -100])
def test_negative_amount_rejected(amount):
    """Ujemne wartości -> ValueError, stan bez zmian."""
    unit = create_unit()

    with pytest.raises(ValueError):
        unit.take_damage(amount)
    with pytest.raises(ValueError):
        unit.be_repaired(amount)

    assert (unit.hit_points, unit.energy_points) == (10, 10)


@pytest.mark.parametrize("amount", [1.5, "3", True, None])
def test_non_int_amount_rejected(amount):
    """Nie-int (również bool) -> TypeError."""
    unit = create_unit()

    with pytest.raises(TypeError):
        unit.take_damage(amount)
    with pytest.raises(TypeError):
        unit.be_repaired(amount)
