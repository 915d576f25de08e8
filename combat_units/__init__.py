"""
combat_units - jednostki bojowe z ograniczonymi zasobami.

Moduły:
- units: Unit, warianty i ich profile, UnitScope
- events: narracja zdarzeń (Narrator)
- core: ConfigLoader (YAML)
- scenario: scenariusze demonstracyjne
"""

from .units import Unit, UnitVariant, UnitProfile, SpecialAction, UnitScope, DEFAULT_NAME
from .events import Narrator, NarrationEvent, EventType
from .core import ConfigLoader
from .scenario import Scenario, ScenarioConfig

__version__ = "1.0.0"

__all__ = [
    "Unit", "UnitVariant", "UnitProfile", "SpecialAction", "UnitScope", "DEFAULT_NAME",
    "Narrator", "NarrationEvent", "EventType",
    "ConfigLoader",
    "Scenario", "ScenarioConfig",
]
