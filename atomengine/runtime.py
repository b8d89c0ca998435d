from __future__ import annotations

import logging
from typing import Mapping

from atomengine.achievement import AchievementDef, build_catalog, evaluate_achievements
from atomengine.content import ContentTables
from atomengine.leveling import LevelProgress
from atomengine.powerup import PowerUp, PowerUpInterval
from atomengine.production import DerivedValues, ProductionGraph
from atomengine.snapshot import GameSnapshot
from atomengine.state import GameState

logger = logging.getLogger(__name__)


class GameRuntime:
    """Single game session: owns the state and keeps derived values settled.

    Every mutator ends with one settle pass: recompute the production graph,
    then evaluate achievements against the fresh snapshot.
    """

    derived: DerivedValues

    def __init__(self, content: ContentTables, state: GameState | None = None) -> None:
        errors = content.validate()
        if errors:
            raise ValueError(
                "Invalid ContentTables:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        self.content = content
        self.state = state if state is not None else GameState()
        self.graph = ProductionGraph(content)
        self.achievement_catalog: Mapping[str, AchievementDef] = build_catalog(content)
        self.last_unlocked: list[str] = []
        self._settle(from_scratch=True)

    # ── Core loop ────────────────────────────────────────────────────

    def tick(self, delta: float) -> None:
        """Advance the game by *delta* seconds."""
        earned = self.derived.atoms_per_second * delta
        self.state.atoms += earned
        self.state.time_elapsed += delta

        now = self.state.time_elapsed
        expired = [p for p in self.state.active_power_ups if p.is_expired(now)]
        if expired:
            self.state.active_power_ups = [
                p for p in self.state.active_power_ups if not p.is_expired(now)
            ]
            logger.debug("Power-ups expired: %s", [p.id for p in expired])

        self._settle()

    # ── Mutators ─────────────────────────────────────────────────────

    def add_atoms(self, amount: float) -> None:
        self.state.atoms += amount
        self._settle()

    def add_building(self, building_id: str, count: int = 1) -> None:
        self._require_building(building_id)
        if count < 0:
            raise ValueError("Building count cannot decrease")
        self.state.ensure_building(building_id).count += count
        self._settle()

    def upgrade_building(self, building_id: str, levels: int = 1) -> None:
        self._require_building(building_id)
        if levels < 0:
            raise ValueError("Building level cannot decrease")
        self.state.ensure_building(building_id).level += levels
        self._settle()

    def purchase_upgrade(self, upgrade_id: str) -> bool:
        """Mark an upgrade as owned. Returns False if it already was."""
        if upgrade_id in self.state.upgrades:
            return False
        self.state.upgrades.append(upgrade_id)
        self._settle()
        return True

    def purchase_skill_upgrade(self, skill_id: str) -> bool:
        if skill_id in self.state.skill_upgrades:
            return False
        self.state.skill_upgrades.append(skill_id)
        self._settle()
        return True

    def add_power_up(self, power_up: PowerUp) -> None:
        self.state.active_power_ups.append(power_up)
        self._settle()

    def remove_power_up(self, power_up_id: str) -> bool:
        before = len(self.state.active_power_ups)
        self.state.active_power_ups = [
            p for p in self.state.active_power_ups if p.id != power_up_id
        ]
        if len(self.state.active_power_ups) == before:
            return False
        self._settle()
        return True

    def click(self) -> float:
        """Register one click. Returns the atoms it produced."""
        value = self.derived.click_power
        self.state.atoms += value
        self.state.total_clicks += 1
        self.state.total_xp += self.content.config.xp_per_click
        self._settle()
        return value

    def add_xp(self, amount: float) -> None:
        self.state.total_xp += amount
        self._settle()

    def load(self, state: GameState) -> None:
        """Replace the whole state, e.g. with one restored from a save."""
        self.state.replace_with(state)
        # A loaded state has no settled history to lag behind
        self._settle(from_scratch=True)

    # ── Queries ──────────────────────────────────────────────────────

    def get_state(self) -> GameState:
        """Return live reference to game state."""
        return self.state

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(self.state, self.derived)

    @property
    def atoms_per_second(self) -> float:
        return self.derived.atoms_per_second

    @property
    def click_power(self) -> float:
        return self.derived.click_power

    @property
    def global_multiplier(self) -> float:
        return self.derived.global_multiplier

    @property
    def bonus_multiplier(self) -> float:
        return self.derived.bonus_multiplier

    @property
    def power_up_interval(self) -> PowerUpInterval:
        return self.derived.power_up_interval

    @property
    def level_progress(self) -> LevelProgress:
        return self.derived.level

    def building_production(self, building_id: str) -> float:
        return self.derived.building_production.get(building_id, 0.0)

    def get_achievement(self, achievement_id: str) -> AchievementDef | None:
        return self.achievement_catalog.get(achievement_id)

    def evaluate_achievements(self) -> list[str]:
        """Ids whose condition holds now but are not yet unlocked."""
        return evaluate_achievements(
            self.achievement_catalog, self.snapshot(), self.state.achievements
        )

    # ── Private helpers ──────────────────────────────────────────────

    def _settle(self, from_scratch: bool = False) -> None:
        previous = None if from_scratch else self.derived
        self.derived = self.graph.compute(self.state, previous)

        newly = self.evaluate_achievements()
        for aid in newly:
            if aid not in self.state.achievements:
                self.state.achievements.append(aid)
                logger.info("Achievement unlocked: %s", aid)
        self.last_unlocked = newly

    def _require_building(self, building_id: str) -> None:
        if self.content.get_building(building_id) is None:
            raise ValueError(f"Unknown building: {building_id!r}")
