from __future__ import annotations

from typing import Any

from atomengine.building import BuildingState
from atomengine.powerup import PowerUp


class GameState:
    """Mutable runtime container holding all primitive game facts."""

    def __init__(self) -> None:
        self.atoms: float = 0.0
        self.buildings: dict[str, BuildingState] = {}
        self.upgrades: list[str] = []
        self.skill_upgrades: list[str] = []
        self.active_power_ups: list[PowerUp] = []
        self.total_clicks: int = 0
        self.total_xp: float = 0.0
        self.achievements: list[str] = []
        self.time_elapsed: float = 0.0

    def building_count(self, id: str) -> int:
        bs = self.buildings.get(id)
        return bs.count if bs else 0

    def building_level(self, id: str) -> int:
        bs = self.buildings.get(id)
        return bs.level if bs else 0

    def total_buildings(self) -> int:
        return sum(b.count for b in self.buildings.values())

    def total_building_levels(self) -> int:
        return sum(b.level for b in self.buildings.values())

    def has_upgrade(self, id: str) -> bool:
        return id in self.upgrades or id in self.skill_upgrades

    def has_achievement(self, id: str) -> bool:
        return id in self.achievements

    def ensure_building(self, id: str) -> BuildingState:
        """Return the state for building *id*, creating it if absent."""
        bs = self.buildings.get(id)
        if bs is None:
            bs = BuildingState()
            self.buildings[id] = bs
        return bs

    # ── Wholesale replacement ────────────────────────────────────────

    def replace_with(self, other: GameState) -> None:
        """Swap every field for *other*'s contents, e.g. after a load."""
        self.atoms = other.atoms
        self.buildings = {
            k: BuildingState(v.count, v.level) for k, v in other.buildings.items()
        }
        self.upgrades = list(other.upgrades)
        self.skill_upgrades = list(other.skill_upgrades)
        self.active_power_ups = list(other.active_power_ups)
        self.total_clicks = other.total_clicks
        self.total_xp = other.total_xp
        self.achievements = list(other.achievements)
        self.time_elapsed = other.time_elapsed

    def to_dict(self) -> dict[str, Any]:
        return {
            "atoms": self.atoms,
            "buildings": {
                k: {"count": v.count, "level": v.level}
                for k, v in self.buildings.items()
            },
            "upgrades": list(self.upgrades),
            "skill_upgrades": list(self.skill_upgrades),
            "active_power_ups": [
                {
                    "id": p.id,
                    "name": p.name,
                    "multiplier": p.multiplier,
                    "duration": p.duration,
                    "started_at": p.started_at,
                }
                for p in self.active_power_ups
            ],
            "total_clicks": self.total_clicks,
            "total_xp": self.total_xp,
            "achievements": list(self.achievements),
            "time_elapsed": self.time_elapsed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameState:
        """Rebuild a state from :meth:`to_dict` output. Missing keys default."""
        state = cls()
        state.atoms = float(data.get("atoms", 0.0))
        state.buildings = {
            k: BuildingState(int(v.get("count", 0)), int(v.get("level", 0)))
            for k, v in data.get("buildings", {}).items()
        }
        state.upgrades = list(data.get("upgrades", []))
        state.skill_upgrades = list(data.get("skill_upgrades", []))
        state.active_power_ups = [PowerUp(**p) for p in data.get("active_power_ups", [])]
        state.total_clicks = int(data.get("total_clicks", 0))
        state.total_xp = float(data.get("total_xp", 0.0))
        state.achievements = list(data.get("achievements", []))
        state.time_elapsed = float(data.get("time_elapsed", 0.0))
        return state
