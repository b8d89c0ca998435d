"""Selects owned effect sources and folds them into a single multiplier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from atomengine.effect import EffectKind, ValueType
from atomengine.upgrade import EffectSource


@dataclass(frozen=True)
class Feedback:
    """Live derived values read by ``add_aps``, ``add_ach`` and ``add_levels``."""

    atoms_per_second: float = 0.0
    achievement_count: int = 0
    player_level: int = 0


ZERO_FEEDBACK = Feedback()


def select_by_filter(
    sources: Iterable[EffectSource],
    target: str | None = None,
    type: EffectKind | None = None,
    value_type: ValueType | None = None,
) -> list[EffectSource]:
    """Keep sources with at least one effect matching each supplied field.

    Order is preserved. Skill upgrades never match.
    """
    return [
        s for s in sources
        if s.matches(target=target, type=type, value_type=value_type)
    ]


def fold_effects(
    sources: Iterable[EffectSource],
    base: float,
    feedback: Feedback = ZERO_FEEDBACK,
) -> float:
    """Fold sources into a multiplier starting at *base*, in the given order."""
    multiplier = base
    for source in sources:
        multiplier = source.apply(multiplier, feedback)
    return multiplier
