from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from atomengine.production import DerivedValues
    from atomengine.state import GameState


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of state plus settled derived values for predicates."""

    state: GameState
    derived: DerivedValues

    @property
    def atoms(self) -> float:
        return self.state.atoms

    @property
    def total_clicks(self) -> int:
        return self.state.total_clicks

    @property
    def total_xp(self) -> float:
        return self.state.total_xp

    @property
    def player_level(self) -> int:
        return self.derived.player_level

    @property
    def atoms_per_second(self) -> float:
        return self.derived.atoms_per_second

    @property
    def unlocked(self) -> tuple[str, ...]:
        return tuple(self.state.achievements)

    def building_count(self, id: str) -> int:
        return self.state.building_count(id)

    def building_level(self, id: str) -> int:
        return self.state.building_level(id)

    def total_buildings(self) -> int:
        return self.state.total_buildings()

    def total_building_levels(self) -> int:
        return self.state.total_building_levels()
