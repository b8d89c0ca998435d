# atomengine: Atom Clicker progression and economy core

from atomengine._types import compare
from atomengine.leveling import (
    LevelProgress,
    xp_cost,
    cumulative_xp,
    level_of,
    xp_into_level,
    xp_for_next_level,
    progress_fraction,
    level_progress,
)
from atomengine.effect import Effect, EffectKind, Effects, ValueType
from atomengine.upgrade import EffectSource, Upgrade, SkillUpgrade
from atomengine.resolver import Feedback, ZERO_FEEDBACK, select_by_filter, fold_effects
from atomengine.building import BuildingDef, BuildingState, level_multiplier
from atomengine.powerup import PowerUp, PowerUpInterval, bonus_multiplier
from atomengine.content import ContentTables, GameConfig
from atomengine.state import GameState
from atomengine.production import DerivedValues, ProductionGraph
from atomengine.snapshot import GameSnapshot
from atomengine.requirement import Requirement, Req
from atomengine.achievement import (
    AchievementDef,
    build_catalog,
    evaluate_achievements,
    expected_catalog_size,
)
from atomengine.runtime import GameRuntime
from atomengine.formatting import format_number, format_state_report

__all__ = [
    # Types
    "compare",
    # Leveling
    "LevelProgress",
    "xp_cost",
    "cumulative_xp",
    "level_of",
    "xp_into_level",
    "xp_for_next_level",
    "progress_fraction",
    "level_progress",
    # Effects
    "Effect",
    "EffectKind",
    "Effects",
    "ValueType",
    "EffectSource",
    "Upgrade",
    "SkillUpgrade",
    # Resolver
    "Feedback",
    "ZERO_FEEDBACK",
    "select_by_filter",
    "fold_effects",
    # Data model
    "BuildingDef",
    "BuildingState",
    "level_multiplier",
    "PowerUp",
    "PowerUpInterval",
    "bonus_multiplier",
    # Content
    "ContentTables",
    "GameConfig",
    # State
    "GameState",
    # Production
    "DerivedValues",
    "ProductionGraph",
    # Achievements
    "GameSnapshot",
    "Requirement",
    "Req",
    "AchievementDef",
    "build_catalog",
    "evaluate_achievements",
    "expected_catalog_size",
    # Runtime
    "GameRuntime",
    # Formatting
    "format_number",
    "format_state_report",
]
