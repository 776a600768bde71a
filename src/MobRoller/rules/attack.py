from __future__ import annotations

from MobRoller.rules.dice import DiceRNG
from MobRoller.rules.types import AttackResolution, DieRoll

# (highest total inclusive, die size); anything above the last bound is a d12
_ATTACK_DIE_STEPS: tuple[tuple[int, int], ...] = (
    (11, 4),
    (13, 6),
    (15, 8),
    (17, 10),
)
_TOP_DIE = 12


def select_die_size(total: int) -> int:
    for upper, sides in _ATTACK_DIE_STEPS:
        if total <= upper:
            return sides
    return _TOP_DIE


def resolve_attack(rng: DiceRNG, attack_seed: DieRoll, modifier_seed: DieRoll) -> AttackResolution:
    """Pick the attack and modifier dice from their seeds and roll each once.

    The two selections share the lookup table and nothing else.
    """
    attack_sides = select_die_size(attack_seed.total)
    attack_roll = rng.roll_die(attack_sides)
    modifier_sides = select_die_size(modifier_seed.total)
    modifier_roll = rng.roll_die(modifier_sides)
    return AttackResolution(
        attack_seed=attack_seed,
        modifier_seed=modifier_seed,
        attack_sides=attack_sides,
        attack_roll=attack_roll,
        modifier_sides=modifier_sides,
        modifier_roll=modifier_roll,
    )
