"""
Units module - jednostki bojowe i ich warianty.

Zawiera:
- UnitVariant: Tag wariantu (BASE, HEAVY_DEFENSE, HEAVY_OFFENSE)
- UnitProfile: Niezmienny profil startowy wariantu
- SpecialAction: Dodatkowe akcje wariantów
- Unit: Wspólny rekord stanu jednostki z akcjami
- UnitScope: Likwidacja grupy jednostek w odwrotnej kolejności
"""

from .profile import (
    UnitVariant,
    UnitProfile,
    SpecialAction,
    VARIANT_PROFILES,
    DEFAULT_NAME,
)
from .unit import Unit, require_unsigned
from .scope import UnitScope

__all__ = [
    "UnitVariant", "UnitProfile", "SpecialAction", "VARIANT_PROFILES",
    "DEFAULT_NAME", "Unit", "require_unsigned", "UnitScope",
]
