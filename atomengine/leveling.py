"""Player XP levels on a geometric cost curve."""

from __future__ import annotations

import math
from dataclasses import dataclass

XP_BASE = 100
XP_GROWTH = 0.42


def xp_cost(level: int) -> int:
    """XP needed to go from ``level - 1`` to ``level``. Level 0 is free."""
    if level <= 0:
        return 0
    return math.floor(XP_BASE * math.pow(1 + XP_GROWTH, level - 1))


def cumulative_xp(level: int) -> int:
    """Total XP spent to reach *level* from zero."""
    return sum(xp_cost(k) for k in range(1, level + 1))


def level_of(total_xp: float) -> int:
    # Each step truncates on its own, so this stays a loop.
    level = 0
    remaining = max(0.0, total_xp)
    while remaining >= xp_cost(level + 1):
        remaining -= xp_cost(level + 1)
        level += 1
    return level


def xp_into_level(total_xp: float) -> float:
    level = level_of(total_xp)
    if level == 0:
        return 0
    return max(0, total_xp - cumulative_xp(level))


def xp_for_next_level(total_xp: float) -> int:
    return xp_cost(level_of(total_xp) + 1)


def progress_fraction(total_xp: float) -> float:
    """Percentage (0-100) of the way to the next level."""
    return level_progress(total_xp).progress


@dataclass(frozen=True)
class LevelProgress:
    """Read-only view of where a total XP amount sits on the curve."""

    total_xp: float
    level: int
    xp_into_level: float
    xp_for_next_level: int

    @property
    def progress(self) -> float:
        return self.xp_into_level / self.xp_for_next_level * 100


def level_progress(total_xp: float) -> LevelProgress:
    """Compute level, XP into level and next-level cost in one scan."""
    level = level_of(total_xp)
    into = 0 if level == 0 else max(0, total_xp - cumulative_xp(level))
    return LevelProgress(
        total_xp=total_xp,
        level=level,
        xp_into_level=into,
        xp_for_next_level=xp_cost(level + 1),
    )
