"""Tests for building and powerup modules."""
import pytest

from atomengine.building import BuildingDef, BuildingState, level_multiplier
from atomengine.powerup import PowerUp, PowerUpInterval, bonus_multiplier


def test_building_defaults():
    bdef = BuildingDef("electron", base_rate=0.1)
    assert bdef.name == "electron"
    bs = BuildingState()
    assert bs.count == 0
    assert bs.level == 0


def test_level_multiplier_level_zero():
    assert level_multiplier(0, 0) == 1
    assert level_multiplier(10, 0) == 1
    assert level_multiplier(1000, 0) == 1


def test_level_multiplier_formula():
    assert level_multiplier(10, 2) == pytest.approx(25.0)  # (10/2)^3 / 5
    assert level_multiplier(4, 1) == pytest.approx(0.8)    # (4/2)^2 / 5


def test_level_multiplier_no_buildings():
    assert level_multiplier(0, 1) == 0
    assert level_multiplier(0, 5) == 0


def test_bonus_multiplier_empty():
    assert bonus_multiplier([]) == 1.0


def test_bonus_multiplier_product():
    ups = [PowerUp("a", multiplier=2.0), PowerUp("b", multiplier=1.5)]
    assert bonus_multiplier(ups) == pytest.approx(3.0)


def test_power_up_expiry():
    p = PowerUp("frenzy", multiplier=7.0, duration=10.0, started_at=5.0)
    assert p.expires_at == 15.0
    assert not p.is_expired(14.9)
    assert p.is_expired(15.0)


def test_power_up_without_duration_never_expires():
    p = PowerUp("manual", multiplier=2.0)
    assert p.expires_at is None
    assert not p.is_expired(1e12)


def test_interval_map():
    interval = PowerUpInterval(60.0, 180.0)
    assert interval.map(lambda v: v / 2) == PowerUpInterval(30.0, 90.0)
    lo, hi = interval
    assert (lo, hi) == (60.0, 180.0)
