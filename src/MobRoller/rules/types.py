from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DieRoll:
    rolls: tuple[int, ...]
    total: int


@dataclass(frozen=True)
class DroppedDieRoll(DieRoll):
    """A roll where the lowest face was excluded from the total.

    ``kept`` is in ascending order (it is the sorted rolls minus the first
    element); ``rolls`` stays in draw order.
    """

    dropped: int
    kept: tuple[int, ...]


@dataclass(frozen=True)
class AttackResolution:
    attack_seed: DieRoll
    modifier_seed: DieRoll
    attack_sides: int
    attack_roll: int
    modifier_sides: int
    modifier_roll: int

    @property
    def total(self) -> int:
        return self.attack_roll + self.modifier_roll


@dataclass(frozen=True)
class RollPackage:
    label: str
    hp: DieRoll
    ac: DieRoll
    attack: AttackResolution
    # Boss level bonus: N extra d6 added to HP for display
    bonus: DieRoll | None = None

    @property
    def hp_total(self) -> int:
        if self.bonus is None:
            return self.hp.total
        return self.hp.total + self.bonus.total
