from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

GLOBAL_TARGET = "global"
CLICK_TARGET = "click"
POWER_UP_INTERVAL_TARGET = "power_up_interval"


class EffectKind(Enum):
    """Which derived value an effect feeds into."""

    BUILDING = "building"
    GLOBAL = "global"
    CLICK = "click"
    POWER_UP_INTERVAL = "power_up_interval"


class ValueType(Enum):
    """How an effect's value combines with the running multiplier."""

    ADD = "add"
    MULTIPLY = "multiply"
    ADD_APS = "add_aps"
    ADD_ACH = "add_ach"
    ADD_LEVELS = "add_levels"


@dataclass(frozen=True)
class Effect:
    """A single modifier rule attached to an upgrade."""

    target: str
    type: EffectKind
    value_type: ValueType
    value: float = 0.0


class Effects:
    """Convenience constructors for common effect patterns."""

    @staticmethod
    def building(
        building_id: str,
        value: float,
        value_type: ValueType = ValueType.MULTIPLY,
    ) -> Effect:
        """Modifies the per-unit rate of one building type."""
        return Effect(
            target=building_id,
            type=EffectKind.BUILDING,
            value_type=value_type,
            value=value,
        )

    @staticmethod
    def global_mult(
        value: float,
        value_type: ValueType = ValueType.MULTIPLY,
    ) -> Effect:
        """Modifies production of every building."""
        return Effect(
            target=GLOBAL_TARGET,
            type=EffectKind.GLOBAL,
            value_type=value_type,
            value=value,
        )

    @staticmethod
    def click(
        value: float,
        value_type: ValueType = ValueType.ADD,
    ) -> Effect:
        return Effect(
            target=CLICK_TARGET,
            type=EffectKind.CLICK,
            value_type=value_type,
            value=value,
        )

    @staticmethod
    def power_up_interval(
        value: float,
        value_type: ValueType = ValueType.MULTIPLY,
    ) -> Effect:
        """Scales both bounds of the power-up spawn interval."""
        return Effect(
            target=POWER_UP_INTERVAL_TARGET,
            type=EffectKind.POWER_UP_INTERVAL,
            value_type=value_type,
            value=value,
        )

    @staticmethod
    def parse(raw: Mapping[str, Any]) -> Effect:
        """Build an Effect from a raw content mapping.

        Expects the keys ``target``, ``type``, ``value_type`` and ``value``
        with enum members given by their string values.
        """
        try:
            return Effect(
                target=str(raw["target"]),
                type=EffectKind(raw["type"]),
                value_type=ValueType(raw["value_type"]),
                value=float(raw["value"]),
            )
        except KeyError as exc:
            raise ValueError(f"Effect is missing field {exc.args[0]!r}: {dict(raw)!r}") from exc
