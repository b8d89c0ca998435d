"""Sample Atom Clicker content tables."""
from __future__ import annotations

from atomengine.building import BuildingDef
from atomengine.content import ContentTables, GameConfig
from atomengine.effect import Effect, EffectKind, Effects, ValueType
from atomengine.powerup import PowerUpInterval
from atomengine.upgrade import SkillUpgrade, Upgrade


def define_content() -> ContentTables:
    return ContentTables(
        config=GameConfig(
            name="Atom Clicker",
            power_up_interval=PowerUpInterval(60.0, 180.0),
            xp_per_click=1.0,
        ),
        buildings=[
            BuildingDef("electron", "Electron", base_rate=0.1),
            BuildingDef("proton", "Proton", base_rate=1.0),
            BuildingDef("neutron", "Neutron", base_rate=8.0),
            BuildingDef("isotope", "Isotope", base_rate=47.0),
            BuildingDef("molecule", "Molecule", base_rate=260.0),
            BuildingDef("crystal", "Crystal", base_rate=1400.0),
        ],
        upgrades=[
            Upgrade(
                id="electron_boost",
                name="Charged Shells",
                description="Electrons are twice as efficient",
                cost=100,
                effects=[Effects.building("electron", 2.0)],
            ),
            Upgrade(
                id="electron_flat",
                name="Extra Orbitals",
                description="+0.1 atoms per electron",
                cost=500,
                effects=[Effects.building("electron", 0.1, ValueType.ADD)],
            ),
            Upgrade(
                id="proton_boost",
                name="Quark Glue",
                description="Protons are twice as efficient",
                cost=1000,
                effects=[Effects.building("proton", 2.0)],
            ),
            Upgrade(
                id="neutron_boost",
                name="Heavy Water",
                description="Neutrons are twice as efficient",
                cost=11_000,
                effects=[Effects.building("neutron", 2.0)],
            ),
            Upgrade(
                id="click_1",
                name="Steady Finger",
                description="+1 atom per click",
                cost=50,
                effects=[Effects.click(1.0)],
            ),
            Upgrade(
                id="click_2",
                name="Double Tap",
                description="Clicks are twice as strong",
                cost=5000,
                effects=[Effects.click(2.0, ValueType.MULTIPLY)],
            ),
            Upgrade(
                id="click_aps",
                name="Resonant Click",
                description="Clicks gain 1% of your atoms per second",
                cost=50_000,
                effects=[Effects.click(0.01, ValueType.ADD_APS)],
            ),
            Upgrade(
                id="global_1",
                name="Fusion",
                description="All production +10%",
                cost=100_000,
                effects=[Effects.global_mult(1.1)],
            ),
            Upgrade(
                id="global_ach",
                name="Hall of Fame",
                description="+1% production per achievement",
                cost=1_000_000,
                effects=[Effects.global_mult(0.01, ValueType.ADD_ACH)],
            ),
            Upgrade(
                id="global_levels",
                name="Experience",
                description="+2% production per player level",
                cost=5_000_000,
                effects=[Effects.global_mult(0.02, ValueType.ADD_LEVELS)],
            ),
            Upgrade(
                id="lucky_atoms",
                name="Lucky Atoms",
                description="Power-ups appear 10% more often",
                cost=200_000,
                effects=[Effects.power_up_interval(0.9)],
            ),
            Upgrade(
                id="synergy",
                name="Electron Capture",
                description="Protons +0.5 each and clicks +2",
                cost=20_000,
                effects=[
                    Effects.building("proton", 0.5, ValueType.ADD),
                    Effect("click", EffectKind.CLICK, ValueType.ADD, 2.0),
                ],
            ),
        ],
        skill_upgrades=[
            SkillUpgrade(
                id="skill_production_1",
                name="Efficiency I",
                description="Increase all production by 10%",
                building_level=1,
            ),
            SkillUpgrade(
                id="skill_production_2",
                name="Efficiency II",
                description="Increase all production by 25%",
                building_level=3,
                requires=["skill_production_1"],
            ),
            SkillUpgrade(
                id="skill_curiosity",
                name="Curiosity",
                description="Unlocks a new branch of the skill tree",
                building_level=2,
            ),
        ],
    )
