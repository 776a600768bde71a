"""Dice rules: roller, aggregates and the attack-die table."""  # noqa: N999

from .attack import resolve_attack, select_die_size
from .dice import DiceRNG
from .types import AttackResolution, DieRoll, DroppedDieRoll, RollPackage

__all__ = [
    "AttackResolution",
    "DiceRNG",
    "DieRoll",
    "DroppedDieRoll",
    "RollPackage",
    "resolve_attack",
    "select_die_size",
]
