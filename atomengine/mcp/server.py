"""MCP server wrapping GameRuntime for interactive AI playtesting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mcp.server.fastmcp import FastMCP

from atomengine.content import ContentTables
from atomengine.powerup import PowerUp
from atomengine.runtime import GameRuntime

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400
# Maximum clicks per click() call
_MAX_CLICKS = 1000


@dataclass
class _GameHolder:
    """Holds the active content tables and runtime."""

    content: ContentTables
    runtime: GameRuntime
    _power_up_serial: int = field(default=0)


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_game_info(holder: _GameHolder) -> dict[str, Any]:
    content = holder.content
    return {
        "name": content.config.name,
        "buildings": [
            {"id": b.id, "name": b.name, "base_rate": b.base_rate}
            for b in content.buildings
        ],
        "upgrades": [
            {"id": u.id, "name": u.name, "description": u.description}
            for u in content.upgrades
        ],
        "skill_upgrades": [
            {"id": s.id, "name": s.name, "description": s.description}
            for s in content.skill_upgrades
        ],
        "achievement_count": len(holder.runtime.achievement_catalog),
    }


def _tool_get_game_state(holder: _GameHolder) -> dict[str, Any]:
    state = holder.runtime.get_state()
    derived = holder.runtime.derived
    buildings = {}
    for bid, bs in state.buildings.items():
        buildings[bid] = {
            "count": bs.count,
            "level": bs.level,
            "production": round(derived.building_production.get(bid, 0.0), 4),
        }
    lvl = derived.level
    return {
        "time_elapsed": round(state.time_elapsed, 2),
        "atoms": round(state.atoms, 2),
        "atoms_per_second": round(derived.atoms_per_second, 4),
        "click_power": round(derived.click_power, 4),
        "global_multiplier": round(derived.global_multiplier, 4),
        "bonus_multiplier": round(derived.bonus_multiplier, 4),
        "power_up_interval": [round(v, 2) for v in derived.power_up_interval],
        "level": {
            "level": lvl.level,
            "xp_into_level": round(lvl.xp_into_level, 2),
            "xp_for_next_level": lvl.xp_for_next_level,
            "progress": round(lvl.progress, 2),
        },
        "skill_points_available": derived.skill_points_available,
        "buildings": buildings,
        "upgrades": list(state.upgrades),
        "skill_upgrades": list(state.skill_upgrades),
        "active_power_ups": [
            {"id": p.id, "multiplier": p.multiplier, "expires_at": p.expires_at}
            for p in state.active_power_ups
        ],
        "total_clicks": state.total_clicks,
        "achievements_unlocked": len(state.achievements),
    }


def _tool_buy_building(
    holder: _GameHolder, building_id: str, count: int = 1
) -> dict[str, Any]:
    if holder.content.get_building(building_id) is None:
        return {"error": f"Unknown building: {building_id!r}"}
    if count < 1:
        return {"error": "Count must be at least 1"}

    holder.runtime.add_building(building_id, count)
    return _with_unlocks(holder, {
        "success": True,
        "building_id": building_id,
        "new_count": holder.runtime.state.building_count(building_id),
        "atoms_per_second": round(holder.runtime.atoms_per_second, 4),
    })


def _tool_upgrade_building(holder: _GameHolder, building_id: str) -> dict[str, Any]:
    if holder.content.get_building(building_id) is None:
        return {"error": f"Unknown building: {building_id!r}"}

    holder.runtime.upgrade_building(building_id)
    return _with_unlocks(holder, {
        "success": True,
        "building_id": building_id,
        "new_level": holder.runtime.state.building_level(building_id),
        "atoms_per_second": round(holder.runtime.atoms_per_second, 4),
    })


def _tool_purchase_upgrade(holder: _GameHolder, upgrade_id: str) -> dict[str, Any]:
    if holder.content.get_upgrade(upgrade_id) is not None:
        bought = holder.runtime.purchase_upgrade(upgrade_id)
    elif holder.content.get_skill_upgrade(upgrade_id) is not None:
        if holder.runtime.derived.skill_points_available <= 0:
            return {"success": False, "reason": "No skill points available"}
        bought = holder.runtime.purchase_skill_upgrade(upgrade_id)
    else:
        return {"error": f"Unknown upgrade: {upgrade_id!r}"}

    if not bought:
        return {"success": False, "reason": "Already owned"}
    return _with_unlocks(holder, {
        "success": True,
        "upgrade_id": upgrade_id,
        "atoms_per_second": round(holder.runtime.atoms_per_second, 4),
        "click_power": round(holder.runtime.click_power, 4),
    })


def _tool_activate_power_up(
    holder: _GameHolder, multiplier: float, duration: float
) -> dict[str, Any]:
    if multiplier <= 0:
        return {"error": "Multiplier must be positive"}
    if duration <= 0:
        return {"error": "Duration must be positive"}

    holder._power_up_serial += 1
    power_up = PowerUp(
        id=f"power_up_{holder._power_up_serial}",
        multiplier=multiplier,
        duration=duration,
        started_at=holder.runtime.state.time_elapsed,
    )
    holder.runtime.add_power_up(power_up)
    return {
        "success": True,
        "power_up_id": power_up.id,
        "bonus_multiplier": round(holder.runtime.bonus_multiplier, 4),
        "expires_at": power_up.expires_at,
    }


def _tool_click(holder: _GameHolder, count: int = 1) -> dict[str, Any]:
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_CLICKS:
        return {"error": f"Count cannot exceed {_MAX_CLICKS}"}

    before = set(holder.runtime.state.achievements)
    total = 0.0
    for _ in range(count):
        total += holder.runtime.click()
    result: dict[str, Any] = {
        "clicks": count,
        "total_earned": round(total, 2),
        "new_balance": round(holder.runtime.state.atoms, 2),
    }
    return _with_unlocks(holder, result, before)


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}

    before = set(holder.runtime.state.achievements)

    # Subdivide into 1-second ticks
    remaining = seconds
    while remaining > 0:
        dt = min(1.0, remaining)
        holder.runtime.tick(dt)
        remaining -= dt

    state = holder.runtime.state
    result: dict[str, Any] = {
        "waited": seconds,
        "time_elapsed": round(state.time_elapsed, 2),
        "atoms": round(state.atoms, 2),
        "atoms_per_second": round(holder.runtime.atoms_per_second, 4),
    }
    return _with_unlocks(holder, result, before)


def _tool_get_achievements(
    holder: _GameHolder, include_locked: bool = False
) -> dict[str, Any]:
    snapshot = holder.runtime.snapshot()
    unlocked = set(holder.runtime.state.achievements)
    result = []
    for ach in holder.runtime.achievement_catalog.values():
        is_unlocked = ach.id in unlocked
        if not is_unlocked and not include_locked:
            continue
        if ach.is_hidden(snapshot):
            result.append({"id": ach.id, "name": "???", "unlocked": False})
            continue
        result.append({
            "id": ach.id,
            "name": ach.name,
            "description": ach.description,
            "unlocked": is_unlocked,
        })
    return {
        "unlocked": len(unlocked),
        "total": len(holder.runtime.achievement_catalog),
        "achievements": result,
    }


def _tool_new_game(holder: _GameHolder) -> dict[str, Any]:
    holder.runtime = GameRuntime(holder.content)
    holder._power_up_serial = 0
    return {"success": True, "message": "Game reset to initial state"}


def _with_unlocks(
    holder: _GameHolder,
    result: dict[str, Any],
    before: set[str] | None = None,
) -> dict[str, Any]:
    if before is None:
        new = holder.runtime.last_unlocked
    else:
        new = [a for a in holder.runtime.state.achievements if a not in before]
    if new:
        result["new_achievements"] = list(new)
    return result


# ── Server factory ──────────────────────────────────────────────────


def create_server(content: ContentTables) -> FastMCP:
    """Create an MCP server wrapping a GameRuntime for the given content."""
    holder = _GameHolder(
        content=content,
        runtime=GameRuntime(content),
    )

    mcp = FastMCP(
        name=f"atomengine: {content.config.name}",
    )

    @mcp.tool()
    def get_game_info() -> dict[str, Any]:
        """Get static game overview: buildings, upgrades, skill upgrades, achievement count."""
        return _tool_get_game_info(holder)

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get current state snapshot: atoms, rates, multipliers, level, buildings."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def buy_building(building_id: str, count: int = 1) -> dict[str, Any]:
        """Add buildings of a type. Costs are not charged."""
        return _tool_buy_building(holder, building_id, count)

    @mcp.tool()
    def upgrade_building(building_id: str) -> dict[str, Any]:
        """Raise a building type's level by one."""
        return _tool_upgrade_building(holder, building_id)

    @mcp.tool()
    def purchase_upgrade(upgrade_id: str) -> dict[str, Any]:
        """Buy an upgrade or skill upgrade by id."""
        return _tool_purchase_upgrade(holder, upgrade_id)

    @mcp.tool()
    def activate_power_up(multiplier: float, duration: float) -> dict[str, Any]:
        """Start a power-up with the given production multiplier and duration in seconds."""
        return _tool_activate_power_up(holder, multiplier, duration)

    @mcp.tool()
    def click(count: int = 1) -> dict[str, Any]:
        """Click the atom N times (max 1000). Returns total earned."""
        return _tool_click(holder, count)

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Advance game time by the given seconds (max 86400). Time is subdivided into 1s ticks."""
        return _tool_wait(holder, seconds)

    @mcp.tool()
    def get_achievements(include_locked: bool = False) -> dict[str, Any]:
        """List unlocked achievements, optionally with locked ones."""
        return _tool_get_achievements(holder, include_locked)

    @mcp.tool()
    def new_game() -> dict[str, Any]:
        """Reset the game to initial state."""
        return _tool_new_game(holder)

    return mcp
