"""Derived production graph.

Every derived value is recomputed from scratch in a fixed topological order:

    leveling -> owned sources -> bonus -> global -> per-building
             -> atoms/s -> click power -> power-up interval -> skill points

so no value ever observes a half-updated upstream value from the same event.

``add_aps``, ``add_ach`` and ``add_levels`` effects read values that are
themselves outputs of this graph. Rather than iterating to a fixed point they
read the latest value that is already settled when they run:

* ``add_aps`` in global, building and power-up-interval folds sees the
  previous event's atoms/s. In the click fold it sees this event's atoms/s,
  which is upstream of click power.
* ``add_ach`` sees the unlocked count held in state, i.e. before this event's
  achievements are evaluated.
* ``add_levels`` sees this event's level, since leveling runs first.

A node is only refolded when its own inputs changed since ``previous``:
global multiplier and power-up interval on the owned-id list, building
production on owned ids, building counts and levels, and the global and
bonus multipliers. Otherwise the previous value is carried over, so events
such as ticks and clicks never feed atoms/s back into itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from atomengine.building import level_multiplier
from atomengine.content import ContentTables
from atomengine.effect import EffectKind, ValueType
from atomengine.leveling import LevelProgress, level_progress
from atomengine.powerup import PowerUpInterval, bonus_multiplier
from atomengine.resolver import Feedback, fold_effects, select_by_filter
from atomengine.state import GameState
from atomengine.upgrade import EffectSource


@dataclass(frozen=True)
class DerivedValues:
    """Settled outputs of one recompute pass."""

    level: LevelProgress
    owned_sources: tuple[EffectSource, ...] = ()
    bonus_multiplier: float = 1.0
    global_multiplier: float = 1.0
    building_production: dict[str, float] = field(default_factory=dict)
    atoms_per_second: float = 0.0
    click_power: float = 0.0
    power_up_interval: PowerUpInterval = PowerUpInterval(0.0, 0.0)
    skill_points_total: int = 0
    skill_points_available: int = 0
    has_bonus: bool = False

    # Inputs the cached nodes were folded from
    owned_ids: tuple[str, ...] = field(default=(), repr=False)
    building_inputs: tuple[tuple[str, int, int], ...] = field(default=(), repr=False)

    @property
    def player_level(self) -> int:
        return self.level.level


class ProductionGraph:
    """Computes every derived value from a GameState."""

    def __init__(self, content: ContentTables) -> None:
        self.content = content

    def compute(
        self,
        state: GameState,
        previous: DerivedValues | None = None,
    ) -> DerivedValues:
        level = level_progress(state.total_xp)

        owned = self.content.resolve([*state.upgrades, *state.skill_upgrades])

        feedback = Feedback(
            atoms_per_second=previous.atoms_per_second if previous else 0.0,
            achievement_count=len(state.achievements),
            player_level=level.level,
        )

        owned_ids = tuple(s.id for s in owned)
        building_inputs = tuple(
            (bid, bs.count, bs.level) for bid, bs in state.buildings.items()
        )
        same_owned = previous is not None and previous.owned_ids == owned_ids

        bonus = bonus_multiplier(state.active_power_ups)
        if same_owned:
            global_mult = previous.global_multiplier
        else:
            global_mult = self.global_multiplier(owned, feedback)

        if (
            same_owned
            and previous.building_inputs == building_inputs
            and previous.global_multiplier == global_mult
            and previous.bonus_multiplier == bonus
        ):
            production = dict(previous.building_production)
        else:
            production = self.building_production(
                state, owned, global_mult, bonus, feedback
            )
        aps = sum(production.values())

        click = self.click_power(
            owned, global_mult, bonus, replace(feedback, atoms_per_second=aps)
        )
        if same_owned:
            interval = previous.power_up_interval
        else:
            interval = self.power_up_interval(owned, feedback)

        skill_total = state.total_building_levels()

        return DerivedValues(
            level=level,
            owned_sources=tuple(owned),
            bonus_multiplier=bonus,
            global_multiplier=global_mult,
            building_production=production,
            atoms_per_second=aps,
            click_power=click,
            power_up_interval=interval,
            skill_points_total=skill_total,
            skill_points_available=skill_total - len(state.skill_upgrades),
            has_bonus=len(state.active_power_ups) > 0,
            owned_ids=owned_ids,
            building_inputs=building_inputs,
        )

    # ── Individual nodes ─────────────────────────────────────────────

    def global_multiplier(
        self, owned: list[EffectSource], feedback: Feedback
    ) -> float:
        sources = select_by_filter(owned, type=EffectKind.GLOBAL)
        return fold_effects(sources, 1.0, feedback)

    def building_production(
        self,
        state: GameState,
        owned: list[EffectSource],
        global_mult: float,
        bonus: float,
        feedback: Feedback,
    ) -> dict[str, float]:
        """Production per building type, 0 for types not owned."""
        result: dict[str, float] = {bid: 0.0 for bid in self.content.building_ids}
        for bid, bs in state.buildings.items():
            bdef = self.content.get_building(bid)
            if bdef is None:
                result[bid] = 0.0
                continue
            sources = select_by_filter(owned, target=bid, type=EffectKind.BUILDING)
            rate = fold_effects(sources, bdef.base_rate, feedback)
            result[bid] = (
                bs.count
                * rate
                * level_multiplier(bs.count, bs.level)
                * global_mult
                * bonus
            )
        return result

    def click_power(
        self,
        owned: list[EffectSource],
        global_mult: float,
        bonus: float,
        feedback: Feedback,
    ) -> float:
        click_sources = select_by_filter(owned, type=EffectKind.CLICK)
        aps_sources = select_by_filter(click_sources, value_type=ValueType.ADD_APS)
        rest = [s for s in click_sources if s not in aps_sources]

        # The atoms/s share is not scaled by global or bonus multipliers
        aps_part = fold_effects(aps_sources, 1.0, feedback)
        return fold_effects(rest, 1.0, feedback) * global_mult * bonus + aps_part

    def power_up_interval(
        self, owned: list[EffectSource], feedback: Feedback
    ) -> PowerUpInterval:
        sources = select_by_filter(owned, type=EffectKind.POWER_UP_INTERVAL)
        default = self.content.config.power_up_interval
        return default.map(lambda bound: fold_effects(sources, bound, feedback))
