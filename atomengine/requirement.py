from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from atomengine._types import Predicate, compare

if TYPE_CHECKING:
    from atomengine.snapshot import GameSnapshot


class Requirement(ABC):
    """Base class for all requirements: boolean conditions on a snapshot."""

    @abstractmethod
    def evaluate(self, snapshot: GameSnapshot) -> bool: ...

    def __call__(self, snapshot: GameSnapshot) -> bool:
        return self.evaluate(snapshot)

    def __and__(self, other: Requirement) -> Requirement:
        return _AllRequirement([self, other])

    def __or__(self, other: Requirement) -> Requirement:
        return _AnyRequirement([self, other])

    def __invert__(self) -> Requirement:
        return _NotRequirement(self)


# ── Private implementations ──────────────────────────────────────────


class _AtomsRequirement(Requirement):
    def __init__(self, op: str, threshold: float) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, snapshot: GameSnapshot) -> bool:
        return compare(snapshot.atoms, self.op, self.threshold)


class _BuildingCountRequirement(Requirement):
    def __init__(self, building_id: str, op: str, threshold: int) -> None:
        self.building_id = building_id
        self.op = op
        self.threshold = threshold

    def evaluate(self, snapshot: GameSnapshot) -> bool:
        return compare(snapshot.building_count(self.building_id), self.op, self.threshold)


class _TotalBuildingsRequirement(Requirement):
    def __init__(self, op: str, threshold: int) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, snapshot: GameSnapshot) -> bool:
        return compare(snapshot.total_buildings(), self.op, self.threshold)


class _TotalLevelsRequirement(Requirement):
    def __init__(self, op: str, threshold: int) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, snapshot: GameSnapshot) -> bool:
        return compare(snapshot.total_building_levels(), self.op, self.threshold)


class _AtomsPerSecondRequirement(Requirement):
    def __init__(self, op: str, threshold: float) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, snapshot: GameSnapshot) -> bool:
        return compare(snapshot.atoms_per_second, self.op, self.threshold)


class _TotalClicksRequirement(Requirement):
    def __init__(self, op: str, threshold: int) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, snapshot: GameSnapshot) -> bool:
        return compare(snapshot.total_clicks, self.op, self.threshold)


class _PlayerLevelRequirement(Requirement):
    def __init__(self, op: str, threshold: int) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, snapshot: GameSnapshot) -> bool:
        return compare(snapshot.player_level, self.op, self.threshold)


class _NoBuildingsRequirement(Requirement):
    def evaluate(self, snapshot: GameSnapshot) -> bool:
        return all(b.count == 0 for b in snapshot.state.buildings.values())


class _NoBuildingLevelsRequirement(Requirement):
    def evaluate(self, snapshot: GameSnapshot) -> bool:
        return all(b.level == 0 for b in snapshot.state.buildings.values())


class _AllRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, snapshot: GameSnapshot) -> bool:
        return all(r.evaluate(snapshot) for r in self.reqs)


class _AnyRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, snapshot: GameSnapshot) -> bool:
        return any(r.evaluate(snapshot) for r in self.reqs)


class _NotRequirement(Requirement):
    def __init__(self, req: Requirement) -> None:
        self.req = req

    def evaluate(self, snapshot: GameSnapshot) -> bool:
        return not self.req.evaluate(snapshot)


class _CustomRequirement(Requirement):
    def __init__(self, fn: Predicate) -> None:
        self.fn = fn

    def evaluate(self, snapshot: GameSnapshot) -> bool:
        return self.fn(snapshot)


# ── Public factory ───────────────────────────────────────────────────


class Req:
    """Factory for built-in requirement types."""

    @staticmethod
    def atoms(op: str, threshold: float) -> Requirement:
        return _AtomsRequirement(op, threshold)

    @staticmethod
    def building_count(building_id: str, op: str, threshold: int) -> Requirement:
        return _BuildingCountRequirement(building_id, op, threshold)

    @staticmethod
    def total_buildings(op: str, threshold: int) -> Requirement:
        return _TotalBuildingsRequirement(op, threshold)

    @staticmethod
    def total_building_levels(op: str, threshold: int) -> Requirement:
        return _TotalLevelsRequirement(op, threshold)

    @staticmethod
    def atoms_per_second(op: str, threshold: float) -> Requirement:
        return _AtomsPerSecondRequirement(op, threshold)

    @staticmethod
    def total_clicks(op: str, threshold: int) -> Requirement:
        return _TotalClicksRequirement(op, threshold)

    @staticmethod
    def player_level(op: str, threshold: int) -> Requirement:
        return _PlayerLevelRequirement(op, threshold)

    @staticmethod
    def no_buildings() -> Requirement:
        """True while every owned building type has a count of zero."""
        return _NoBuildingsRequirement()

    @staticmethod
    def no_building_levels() -> Requirement:
        return _NoBuildingLevelsRequirement()

    @staticmethod
    def all(*reqs: Requirement) -> Requirement:
        return _AllRequirement(list(reqs))

    @staticmethod
    def any(*reqs: Requirement) -> Requirement:
        return _AnyRequirement(list(reqs))

    @staticmethod
    def not_(req: Requirement) -> Requirement:
        return _NotRequirement(req)

    @staticmethod
    def custom(fn: Predicate) -> Requirement:
        return _CustomRequirement(fn)
