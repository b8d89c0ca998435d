from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, NamedTuple

from atomengine._types import product


class PowerUpInterval(NamedTuple):
    """Range, in seconds, between two power-up spawns."""

    min: float
    max: float

    def map(self, fn: Callable[[float], float]) -> PowerUpInterval:
        return PowerUpInterval(fn(self.min), fn(self.max))


@dataclass
class PowerUp:
    """A time-limited production bonus.

    A ``duration`` of None means the bonus lives until removed.
    """

    id: str
    multiplier: float = 1.0
    duration: float | None = None
    started_at: float = 0.0
    name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.id

    @property
    def expires_at(self) -> float | None:
        if self.duration is None:
            return None
        return self.started_at + self.duration

    def is_expired(self, now: float) -> bool:
        expires = self.expires_at
        return expires is not None and now >= expires


def bonus_multiplier(power_ups: Iterable[PowerUp]) -> float:
    """Product of all active power-up multipliers."""
    return product(p.multiplier for p in power_ups)
