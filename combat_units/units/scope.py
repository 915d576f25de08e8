"""
UnitScope - zasięg życia grupy jednostek.

Jednostki utworzone (lub zarejestrowane) w zasięgu są likwidowane
przy wyjściu z bloku `with` w kolejności ODWROTNEJ do utworzenia:

    with UnitScope(narrator) as scope:
        a = scope.create(UnitVariant.BASE, "A")
        b = scope.create(UnitVariant.BASE, "B")
    # -> "Base B is disposed", potem "Base A is disposed"
"""

from __future__ import annotations
from contextlib import ExitStack
from typing import List, Optional, Union

from ..events.narrator import Narrator
from .profile import UnitVariant
from .unit import Unit


class UnitScope:
    """
    Zarządza likwidacją jednostek (LIFO).

    Attributes:
        narrator (Optional[Narrator]): Narrator nowych jednostek
        units (List[Unit]): Jednostki w kolejności utworzenia
    """

    def __init__(self, narrator: Optional[Narrator] = None):
        self.narrator = narrator
        self.units: List[Unit] = []
        self._stack = ExitStack()

    def create(
        self,
        variant: Union[UnitVariant, str] = UnitVariant.BASE,
        name: Optional[str] = None,
    ) -> Unit:
        """Tworzy jednostkę należącą do zasięgu."""
        return self.adopt(Unit(variant, name, narrator=self.narrator))

    def copy_of(self, source: Unit) -> Unit:
        """Tworzy kopię jednostki należącą do zasięgu."""
        return self.adopt(source.copy())

    def adopt(self, unit: Unit) -> Unit:
        """
        Rejestruje istniejącą jednostkę w zasięgu.

        Returns:
            Unit: Ta sama jednostka
        """
        self.units.append(unit)
        self._stack.callback(unit.dispose)
        return unit

    def close(self) -> None:
        """Likwiduje wszystkie jednostki (od najnowszej)."""
        self._stack.close()

    def __enter__(self) -> "UnitScope":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
