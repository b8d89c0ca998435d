from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BuildingDef:
    """Static definition of a building type."""

    id: str
    name: str = ""
    base_rate: float = 0.0
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.id


@dataclass
class BuildingState:
    """Mutable runtime state for a building. Count and level only grow."""

    count: int = 0
    level: int = 0


def level_multiplier(count: int, level: int) -> float:
    """Production multiplier granted by building levels."""
    if level == 0:
        return 1.0
    return (count / 2) ** (level + 1) / 5
