"""
Scenario module - scenariusze demonstracyjne.

Zawiera:
- ScenarioConfig: Konfiguracja scenariusza
- Scenario: Wykonanie kroków na jednostkach
"""

from .scenario import Scenario, ScenarioConfig

__all__ = ["Scenario", "ScenarioConfig"]
