from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from atomengine.building import BuildingDef
from atomengine.effect import EffectKind
from atomengine.powerup import PowerUpInterval
from atomengine.upgrade import EffectSource, SkillUpgrade, Upgrade

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    """Top-level game configuration."""

    name: str = "Atom Clicker"
    power_up_interval: PowerUpInterval = PowerUpInterval(60.0, 180.0)
    xp_per_click: float = 0.0


@dataclass
class ContentTables:
    """Immutable catalogs of buildings, upgrades and skill upgrades."""

    config: GameConfig = field(default_factory=GameConfig)
    buildings: list[BuildingDef] = field(default_factory=list)
    upgrades: list[Upgrade] = field(default_factory=list)
    skill_upgrades: list[SkillUpgrade] = field(default_factory=list)

    # Lookup dicts built in __post_init__
    _buildings_by_id: dict[str, BuildingDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _upgrades_by_id: dict[str, Upgrade] = field(
        default_factory=dict, init=False, repr=False
    )
    _skills_by_id: dict[str, SkillUpgrade] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._buildings_by_id = {b.id: b for b in self.buildings}
        self._upgrades_by_id = {u.id: u for u in self.upgrades}
        self._skills_by_id = {s.id: s for s in self.skill_upgrades}

    @property
    def building_ids(self) -> list[str]:
        return [b.id for b in self.buildings]

    def get_building(self, id: str) -> BuildingDef | None:
        return self._buildings_by_id.get(id)

    def get_upgrade(self, id: str) -> Upgrade | None:
        return self._upgrades_by_id.get(id)

    def get_skill_upgrade(self, id: str) -> SkillUpgrade | None:
        return self._skills_by_id.get(id)

    def get_source(self, id: str) -> EffectSource | None:
        """Look up an upgrade first, then a skill upgrade."""
        return self._upgrades_by_id.get(id) or self._skills_by_id.get(id)

    def resolve(self, ids: Iterable[str]) -> list[EffectSource]:
        """Map owned ids to definitions, dropping ids that no longer exist."""
        result: list[EffectSource] = []
        for id in ids:
            source = self.get_source(id)
            if source is None:
                logger.debug("Ignoring unknown upgrade id %r", id)
                continue
            result.append(source)
        return result

    def validate(self) -> list[str]:
        """Check for common content errors. Returns list of error messages."""
        errors: list[str] = []

        seen: set[str] = set()
        for b in self.buildings:
            if b.id in seen:
                errors.append(f"Duplicate building ID: {b.id!r}")
            seen.add(b.id)

        # Upgrades and skill upgrades share one id space
        seen = set()
        for u in [*self.upgrades, *self.skill_upgrades]:
            if u.id in seen:
                errors.append(f"Duplicate upgrade ID: {u.id!r}")
            seen.add(u.id)

        for u in self.upgrades:
            for eff in u.effects:
                if eff.type is EffectKind.BUILDING and eff.target not in self._buildings_by_id:
                    errors.append(
                        f"Upgrade {u.id!r} has effect targeting unknown building {eff.target!r}"
                    )

        for s in self.skill_upgrades:
            for req in s.requires:
                if req not in self._skills_by_id:
                    errors.append(
                        f"Skill upgrade {s.id!r} requires unknown skill upgrade {req!r}"
                    )

        interval = self.config.power_up_interval
        if interval.min > interval.max:
            errors.append(
                f"Power-up interval min {interval.min} is greater than max {interval.max}"
            )

        return errors
