"""Tests for runtime module."""
import pytest

from atomengine.building import BuildingDef, BuildingState
from atomengine.content import ContentTables, GameConfig
from atomengine.effect import Effects, ValueType
from atomengine.leveling import cumulative_xp
from atomengine.powerup import PowerUp
from atomengine.runtime import GameRuntime
from atomengine.state import GameState
from atomengine.upgrade import SkillUpgrade, Upgrade


def _make_content(xp_per_click: float = 0.0) -> ContentTables:
    """A minimal content table for testing runtime."""
    return ContentTables(
        config=GameConfig(name="Test", xp_per_click=xp_per_click),
        buildings=[
            BuildingDef("electron", "Electron", base_rate=1.0),
            BuildingDef("proton", "Proton", base_rate=5.0),
        ],
        upgrades=[
            Upgrade("e2", effects=[Effects.building("electron", 2.0)]),
            Upgrade("g_aps", effects=[Effects.global_mult(0.1, ValueType.ADD_APS)]),
            Upgrade("g_ach", effects=[Effects.global_mult(0.5, ValueType.ADD_ACH)]),
        ],
        skill_upgrades=[SkillUpgrade("s1", description="+10%")],
    )


def test_initialization():
    rt = GameRuntime(_make_content())
    state = rt.get_state()
    assert state.atoms == 0
    assert state.achievements == []
    assert rt.atoms_per_second == 0
    assert rt.click_power == pytest.approx(2.0)
    assert len(rt.achievement_catalog) == 7 * 2 + 68


def test_invalid_content_rejected():
    content = ContentTables(buildings=[BuildingDef("electron"), BuildingDef("electron")])
    with pytest.raises(ValueError, match="Invalid ContentTables"):
        GameRuntime(content)


def test_add_building_updates_production():
    rt = GameRuntime(_make_content())
    rt.add_building("electron", 10)
    assert rt.state.building_count("electron") == 10
    assert rt.atoms_per_second == pytest.approx(10.0)
    assert rt.building_production("electron") == pytest.approx(10.0)
    assert rt.building_production("proton") == 0


def test_upgrade_building_updates_production():
    rt = GameRuntime(_make_content())
    rt.add_building("electron", 10)
    rt.upgrade_building("electron", 2)
    assert rt.state.building_level("electron") == 2
    assert rt.atoms_per_second == pytest.approx(250.0)


def test_unknown_building_rejected():
    rt = GameRuntime(_make_content())
    with pytest.raises(ValueError, match="Unknown building"):
        rt.add_building("positron")
    with pytest.raises(ValueError, match="Unknown building"):
        rt.upgrade_building("positron")
    assert "positron" not in rt.state.buildings


def test_negative_count_rejected():
    rt = GameRuntime(_make_content())
    with pytest.raises(ValueError):
        rt.add_building("electron", -1)


def test_purchase_upgrade():
    rt = GameRuntime(_make_content())
    rt.add_building("electron", 10)
    assert rt.purchase_upgrade("e2")
    assert rt.atoms_per_second == pytest.approx(20.0)
    assert not rt.purchase_upgrade("e2")
    assert rt.state.upgrades == ["e2"]


def test_purchase_skill_upgrade():
    rt = GameRuntime(_make_content())
    assert rt.purchase_skill_upgrade("s1")
    assert not rt.purchase_skill_upgrade("s1")
    assert rt.state.skill_upgrades == ["s1"]


# ── Clicking and XP ──────────────────────────────────────────────────


def test_click():
    rt = GameRuntime(_make_content())
    earned = rt.click()
    assert earned == pytest.approx(2.0)
    assert rt.state.atoms == pytest.approx(2.0)
    assert rt.state.total_clicks == 1
    assert rt.last_unlocked == ["clicks_1", "first_atom"]


def test_click_grants_configured_xp():
    rt = GameRuntime(_make_content(xp_per_click=10.0))
    for _ in range(10):
        rt.click()
    assert rt.state.total_xp == pytest.approx(100.0)
    assert rt.level_progress.level == 1
    assert rt.state.has_achievement("levels_1")


def test_click_without_xp_config():
    rt = GameRuntime(_make_content())
    rt.click()
    assert rt.state.total_xp == 0


def test_add_xp():
    rt = GameRuntime(_make_content())
    rt.add_xp(cumulative_xp(3) + 5)
    progress = rt.level_progress
    assert progress.level == 3
    assert progress.xp_into_level == pytest.approx(5)


# ── Power-ups and ticks ──────────────────────────────────────────────


def test_tick_accrues_atoms():
    rt = GameRuntime(_make_content())
    rt.add_building("electron", 10)
    rt.tick(2.5)
    assert rt.state.atoms == pytest.approx(25.0)
    assert rt.state.time_elapsed == pytest.approx(2.5)


def test_power_up_multiplies_and_expires():
    rt = GameRuntime(_make_content())
    rt.add_building("electron", 10)
    rt.add_power_up(PowerUp("frenzy", multiplier=3.0, duration=10.0))
    assert rt.bonus_multiplier == pytest.approx(3.0)
    assert rt.atoms_per_second == pytest.approx(30.0)

    rt.tick(5.0)
    assert rt.state.atoms == pytest.approx(150.0)
    assert rt.atoms_per_second == pytest.approx(30.0)

    rt.tick(5.0)
    assert rt.state.atoms == pytest.approx(300.0)
    assert rt.state.active_power_ups == []
    assert rt.atoms_per_second == pytest.approx(10.0)


def test_remove_power_up():
    rt = GameRuntime(_make_content())
    rt.add_power_up(PowerUp("frenzy", multiplier=2.0))
    assert rt.derived.has_bonus
    assert not rt.remove_power_up("missing")
    assert rt.remove_power_up("frenzy")
    assert rt.bonus_multiplier == 1.0
    assert not rt.derived.has_bonus


# ── Achievements ─────────────────────────────────────────────────────


def test_achievements_unlock_once():
    rt = GameRuntime(_make_content())
    rt.add_building("electron", 10)
    assert rt.last_unlocked == ["1_electron", "10_electron", "aps_10"]
    rt.add_atoms(0)
    assert rt.last_unlocked == []
    assert rt.state.achievements.count("1_electron") == 1
    assert rt.evaluate_achievements() == []


def test_get_achievement():
    rt = GameRuntime(_make_content())
    assert rt.get_achievement("first_atom").name == "Baby Steps"
    assert rt.get_achievement("nope") is None


def test_add_aps_lags_one_event():
    rt = GameRuntime(_make_content())
    rt.add_building("electron", 10)
    assert rt.atoms_per_second == pytest.approx(10.0)

    rt.purchase_upgrade("g_aps")
    assert rt.global_multiplier == pytest.approx(2.0)
    assert rt.atoms_per_second == pytest.approx(20.0)

    rt.add_atoms(0)
    assert rt.global_multiplier == pytest.approx(2.0)
    assert rt.atoms_per_second == pytest.approx(20.0)


def test_ticks_and_clicks_do_not_compound_feedback():
    rt = GameRuntime(_make_content())
    rt.add_building("electron", 100)
    rt.purchase_upgrade("g_aps")
    assert rt.global_multiplier == pytest.approx(11.0)  # 1 + 0.1 * 100

    for _ in range(400):
        rt.tick(1.0)
    rt.click()
    rt.add_atoms(10)
    assert rt.global_multiplier == pytest.approx(11.0)
    assert rt.atoms_per_second == pytest.approx(1100.0)


def test_add_ach_sees_previous_unlocks():
    rt = GameRuntime(_make_content())
    rt.add_building("electron", 10)
    assert len(rt.state.achievements) == 3

    rt.purchase_upgrade("g_ach")
    assert rt.global_multiplier == pytest.approx(2.5)
    assert rt.atoms_per_second == pytest.approx(25.0)


# ── Loading ──────────────────────────────────────────────────────────


def test_load_replaces_state():
    rt = GameRuntime(_make_content())
    rt.click()

    saved = GameState()
    saved.atoms = 500
    saved.buildings["electron"] = BuildingState(count=5)
    saved.achievements = ["first_atom"]
    live = rt.get_state()
    rt.load(saved)

    assert rt.get_state() is live
    assert live.atoms == 500
    assert live.total_clicks == 0
    assert rt.atoms_per_second == pytest.approx(5.0)
    assert rt.last_unlocked == ["1_electron"]
    assert live.achievements == ["first_atom", "1_electron"]


def test_load_from_dict():
    rt = GameRuntime(_make_content())
    rt.add_building("proton", 2)
    data = rt.state.to_dict()

    other = GameRuntime(_make_content())
    other.load(GameState.from_dict(data))
    assert other.atoms_per_second == pytest.approx(10.0)
    assert other.state.achievements == rt.state.achievements


def test_snapshot_reflects_settled_values():
    rt = GameRuntime(_make_content())
    rt.add_building("electron", 3)
    snap = rt.snapshot()
    assert snap.atoms_per_second == pytest.approx(3.0)
    assert snap.building_count("electron") == 3


def test_load_computes_feedback_once():
    rt = GameRuntime(_make_content())
    saved = GameState()
    saved.buildings["electron"] = BuildingState(count=10)
    saved.upgrades = ["g_aps"]

    rt.load(saved)
    # No earlier event to read atoms/s from
    assert rt.global_multiplier == pytest.approx(1.0)
    assert rt.atoms_per_second == pytest.approx(10.0)

    fresh = GameRuntime(_make_content(), GameState.from_dict(saved.to_dict()))
    assert fresh.global_multiplier == pytest.approx(1.0)
