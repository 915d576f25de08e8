"""
Core module - podstawowe komponenty.

Zawiera:
- ConfigLoader: Wczytywanie konfiguracji YAML z defaults
"""

from .config_loader import ConfigLoader, DEFAULT_DATA_PATH

__all__ = ["ConfigLoader", "DEFAULT_DATA_PATH"]
