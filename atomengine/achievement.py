"""Achievement catalog generation and evaluation.

The catalog is built once per session from the content tables and never
changes afterwards. Evaluation is a single pass over the locked entries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping

from atomengine.formatting import format_number
from atomengine.requirement import Req, Requirement

if TYPE_CHECKING:
    from atomengine.building import BuildingDef
    from atomengine.content import ContentTables
    from atomengine.snapshot import GameSnapshot

logger = logging.getLogger(__name__)

BUILDING_COUNT_TIERS: list[tuple[str, int]] = [
    ("One", 1),
    ("Ten", 10),
    ("Fifty", 50),
    ("Hundred", 100),
    ("Two hundred", 200),
    ("Three hundred", 300),
    ("Five hundred", 500),
]
TOTAL_BUILDING_TIERS = [50, 100, 150, 200, 250, 300, 400, 500, 600, 800, 1000, 1500, 2000, 2500, 3000]
BUILDING_LEVEL_TIERS = [1, 2, 3, 5, 7, 10, 15, 20, 30, 50]
ATOMS_PER_SECOND_TIERS = [10 ** (k * 2) * 10 for k in range(10)]
TOTAL_CLICK_TIERS = [
    1, 100, 500, 1000, 5000, 10_000, 50_000, 100_000, 500_000,
    1_000_000, 5_000_000, 10_000_000, 50_000_000, 100_000_000,
]
PLAYER_LEVEL_TIERS = [
    1, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000, 10_000,
    25_000, 50_000, 100_000, 250_000, 500_000, 1_000_000,
]
SECRET_BUILDING_TOTAL = 100


@dataclass(frozen=True)
class AchievementDef:
    """A named unlock whose condition is checked against a GameSnapshot.

    ``hidden_condition`` only controls display: while it holds and the
    achievement is still locked, a UI shows a placeholder instead of details.
    """

    id: str
    name: str
    description: str
    condition: Requirement
    hidden_condition: Requirement | None = None

    def is_unlocked_by(self, snapshot: GameSnapshot) -> bool:
        return self.condition.evaluate(snapshot)

    def is_hidden(self, snapshot: GameSnapshot) -> bool:
        if self.hidden_condition is None:
            return False
        if self.id in snapshot.state.achievements:
            return False
        return self.hidden_condition.evaluate(snapshot)


# ── Generators ───────────────────────────────────────────────────────


def special_achievements() -> list[AchievementDef]:
    """``first_atom`` plus ``secret_achievement``.

    The secret one stays masked for exactly as long as it is locked: its
    hidden condition is the negation of its unlock condition.
    """
    secret = Req.total_buildings(">=", SECRET_BUILDING_TOTAL)
    return [
        AchievementDef(
            id="first_atom",
            name="Baby Steps",
            description="Click your first atom",
            condition=Req.total_clicks(">=", 1) | Req.atoms(">=", 1),
        ),
        AchievementDef(
            id="secret_achievement",
            name=f"Have more than {SECRET_BUILDING_TOTAL} buildings",
            description="A mysterious achievement",
            condition=secret,
            hidden_condition=~secret,
        ),
    ]


def building_achievements(building: BuildingDef) -> list[AchievementDef]:
    """Seven count tiers for a single building type."""
    result: list[AchievementDef] = []
    not_owned = Req.building_count(building.id, "==", 0)
    for tier_name, count in BUILDING_COUNT_TIERS:
        if count == 1:
            description = f"Buy your first {building.name} building"
        else:
            description = f"Own {count} {building.name} buildings"
        result.append(
            AchievementDef(
                id=f"{count}_{building.id}",
                name=f"{tier_name} {building.name}",
                description=description,
                condition=Req.building_count(building.id, ">=", count),
                hidden_condition=not_owned,
            )
        )
    return result


def total_building_achievements() -> list[AchievementDef]:
    return [
        AchievementDef(
            id=f"total_{count}",
            name=f"{count} Buildings",
            description=f"Own a total of {count} buildings",
            condition=Req.total_buildings(">=", count),
            hidden_condition=Req.no_buildings(),
        )
        for count in TOTAL_BUILDING_TIERS
    ]


def building_level_achievements() -> list[AchievementDef]:
    return [
        AchievementDef(
            id=f"buildings_levels_{level}",
            name=f"Levels {level}",
            description=f"Have a total of {level} buildings levels",
            condition=Req.total_building_levels(">=", level),
            hidden_condition=Req.no_building_levels(),
        )
        for level in BUILDING_LEVEL_TIERS
    ]


def atoms_per_second_achievements() -> list[AchievementDef]:
    result: list[AchievementDef] = []
    for count in ATOMS_PER_SECOND_TIERS:
        label = format_number(count)
        result.append(
            AchievementDef(
                id=f"aps_{label.lower()}",
                name=f"{label} Atoms per Second",
                description=f"Produce {label} atoms per second",
                condition=Req.atoms_per_second(">=", count),
            )
        )
    return result


def total_click_achievements() -> list[AchievementDef]:
    return [
        AchievementDef(
            id=f"clicks_{count}",
            name=f"{format_number(count)} Clicks",
            description=f"Click {format_number(count)} times",
            condition=Req.total_clicks(">=", count),
            hidden_condition=Req.total_clicks("==", 0),
        )
        for count in TOTAL_CLICK_TIERS
    ]


def player_level_achievements() -> list[AchievementDef]:
    return [
        AchievementDef(
            id=f"levels_{level}",
            name=f"Level {level}",
            description=f"Be at least {level} xp level",
            condition=Req.player_level(">=", level),
        )
        for level in PLAYER_LEVEL_TIERS
    ]


def expected_catalog_size(building_count: int) -> int:
    return (
        len(BUILDING_COUNT_TIERS) * building_count
        + len(TOTAL_BUILDING_TIERS)
        + len(BUILDING_LEVEL_TIERS)
        + len(ATOMS_PER_SECOND_TIERS)
        + len(TOTAL_CLICK_TIERS)
        + len(PLAYER_LEVEL_TIERS)
        + 2
    )


# ── Catalog ──────────────────────────────────────────────────────────


def index_achievements(
    achievements: Iterable[AchievementDef],
) -> Mapping[str, AchievementDef]:
    """Key achievements by id. A repeated id raises ValueError."""
    catalog: dict[str, AchievementDef] = {}
    for ach in achievements:
        if ach.id in catalog:
            raise ValueError(f"Duplicate achievement ID: {ach.id!r}")
        catalog[ach.id] = ach
    return MappingProxyType(catalog)


def build_catalog(content: ContentTables) -> Mapping[str, AchievementDef]:
    """Generate every achievement for *content*, keyed by id."""
    achievements: list[AchievementDef] = []
    for building in content.buildings:
        achievements.extend(building_achievements(building))
    achievements.extend(total_building_achievements())
    achievements.extend(building_level_achievements())
    achievements.extend(atoms_per_second_achievements())
    achievements.extend(total_click_achievements())
    achievements.extend(player_level_achievements())
    achievements.extend(special_achievements())

    catalog = index_achievements(achievements)
    logger.debug("Built achievement catalog with %d entries", len(catalog))
    return catalog


def evaluate_achievements(
    catalog: Mapping[str, AchievementDef],
    snapshot: GameSnapshot,
    unlocked: Iterable[str] = (),
) -> list[str]:
    """Return ids whose condition now holds and that are not yet unlocked.

    Result is in catalog order. Nothing is mutated.
    """
    already = set(unlocked)
    return [
        ach.id
        for ach in catalog.values()
        if ach.id not in already and ach.condition.evaluate(snapshot)
    ]
