from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from atomengine.runtime import GameRuntime

# Short-scale suffixes, one per factor of 1000
SUFFIXES = ["", "K", "M", "B", "T", "Qa", "Qi", "Sx", "Sp", "Oc", "No", "Dc"]


def format_number(n: float) -> str:
    """Format a number with short-scale suffixes, e.g. ``1500 -> '1.5K'``."""
    if n < 0:
        return f"-{format_number(-n)}"

    tier = 0
    while n >= 1000 ** (tier + 1) and tier < len(SUFFIXES) - 1:
        tier += 1

    value = n / 1000 ** tier
    if value >= 100:
        text = f"{value:.0f}"
    else:
        text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text}{SUFFIXES[tier]}"


def format_state_report(runtime: GameRuntime) -> str:
    """Format the current state and derived values for console output."""
    state = runtime.state
    derived = runtime.derived
    lines: list[str] = []

    lines.append("=" * 30 + f" {runtime.content.config.name} " + "=" * 30)
    lines.append(f"Atoms: {format_number(state.atoms)}")
    lines.append(f"Atoms/s: {format_number(derived.atoms_per_second)}")
    lines.append(f"Click power: {format_number(derived.click_power)}")
    lines.append(
        f"Multipliers: global x{derived.global_multiplier:.2f}, "
        f"bonus x{derived.bonus_multiplier:.2f}"
    )
    lo, hi = derived.power_up_interval
    lines.append(f"Power-up interval: {lo:.1f}s - {hi:.1f}s")
    lvl = derived.level
    lines.append(
        f"Level {lvl.level}: {lvl.xp_into_level:.0f}/{lvl.xp_for_next_level} XP "
        f"({lvl.progress:.1f}%)"
    )
    lines.append("")

    if state.buildings:
        lines.append("BUILDINGS:")
        for bid, bs in state.buildings.items():
            prod = derived.building_production.get(bid, 0.0)
            lines.append(
                f"  {bid:.<24s} x{bs.count:<5d} lvl {bs.level:<3d} "
                f"{format_number(prod)}/s"
            )
        lines.append("")

    total = len(runtime.achievement_catalog)
    lines.append(f"ACHIEVEMENTS: {len(state.achievements)}/{total}")
    return "\n".join(lines)
