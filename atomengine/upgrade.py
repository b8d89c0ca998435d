from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from atomengine.effect import Effect, EffectKind, ValueType

if TYPE_CHECKING:
    from atomengine.resolver import Feedback

_PERCENT_RE = re.compile(r"(\d+)%")


class EffectSource(ABC):
    """Something the player can own that modifies derived values."""

    id: str

    @abstractmethod
    def matches(
        self,
        target: str | None = None,
        type: EffectKind | None = None,
        value_type: ValueType | None = None,
    ) -> bool: ...

    @abstractmethod
    def apply(self, multiplier: float, feedback: Feedback) -> float:
        """Fold this source into *multiplier* and return the new value."""


@dataclass(frozen=True)
class Upgrade(EffectSource):
    """A currency-bought upgrade carrying an ordered list of effects."""

    id: str
    name: str = ""
    description: str = ""
    cost: float = 0.0
    effects: tuple[Effect, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", self.id)
        object.__setattr__(self, "effects", tuple(self.effects))

    def matches(
        self,
        target: str | None = None,
        type: EffectKind | None = None,
        value_type: ValueType | None = None,
    ) -> bool:
        # Each supplied field needs at least one matching effect, not the same one.
        if target is not None and not any(e.target == target for e in self.effects):
            return False
        if type is not None and not any(e.type is type for e in self.effects):
            return False
        if value_type is not None and not any(
            e.value_type is value_type for e in self.effects
        ):
            return False
        return True

    def sum_of(self, value_type: ValueType) -> float:
        return sum(e.value for e in self.effects if e.value_type is value_type)

    def apply(self, multiplier: float, feedback: Feedback) -> float:
        multiplier += self.sum_of(ValueType.ADD)

        for e in self.effects:
            if e.value_type is ValueType.MULTIPLY:
                multiplier *= e.value

        multiplier += self.sum_of(ValueType.ADD_APS) * feedback.atoms_per_second
        multiplier += self.sum_of(ValueType.ADD_ACH) * feedback.achievement_count
        multiplier += self.sum_of(ValueType.ADD_LEVELS) * feedback.player_level
        return multiplier


@dataclass(frozen=True)
class SkillUpgrade(EffectSource):
    """A skill-point purchase whose bonus is the percentage in its description."""

    id: str
    name: str = ""
    description: str = ""
    building_level: int = 0
    requires: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", self.id)
        object.__setattr__(self, "requires", tuple(self.requires))

    @property
    def percentage(self) -> int | None:
        m = _PERCENT_RE.search(self.description)
        return int(m.group(1)) if m else None

    def matches(
        self,
        target: str | None = None,
        type: EffectKind | None = None,
        value_type: ValueType | None = None,
    ) -> bool:
        return False

    def apply(self, multiplier: float, feedback: Feedback) -> float:
        pct = self.percentage
        if pct is None:
            return multiplier
        return multiplier * (1 + pct / 100)
