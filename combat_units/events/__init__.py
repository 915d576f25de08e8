"""
Events module - narracja zdarzeń jednostek.

Zawiera:
- NarrationEvent: Dataclass reprezentująca zdarzenie
- EventType: Enum typów zdarzeń
- Narrator: Klasa wypisująca i zbierająca zdarzenia
"""

from .narrator import NarrationEvent, EventType, Narrator, STDOUT_NARRATOR

__all__ = ["NarrationEvent", "EventType", "Narrator", "STDOUT_NARRATOR"]
