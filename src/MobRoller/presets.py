"""The four fixed roll presets (three mob tiers and the BBEG)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import structlog

from MobRoller.formatter import format_package
from MobRoller.rules.attack import resolve_attack
from MobRoller.rules.dice import DiceRNG
from MobRoller.rules.types import DieRoll, RollPackage

log = structlog.get_logger()

_LEADING_INT_RE = re.compile(r"^\s*(?P<num>[+\-]?\d+)")
# Upper bound on boss bonus dice; larger form input is clamped
MAX_LEVEL_BONUS = 30


@dataclass(frozen=True)
class Preset:
    key: str
    label: str
    dice: int
    drop_lowest: bool = False

    @property
    def accepts_level_bonus(self) -> bool:
        return self.drop_lowest


WEAK = Preset(key="weak", label="Weak Mob (3d6)", dice=3)
STRONG = Preset(key="strong", label="Strong Mob (4d6)", dice=4)
THREATENING = Preset(key="threat", label="Threatening Mob (5d6)", dice=5)
# dice is unused when drop_lowest is set; every aggregate is 6d6 drop lowest
BBEG = Preset(key="bbeg", label="BBEG (6d6 drop lowest)", dice=6, drop_lowest=True)

PRESETS: dict[str, Preset] = {p.key: p for p in (WEAK, STRONG, THREATENING, BBEG)}


def get_preset(key: str) -> Preset:
    try:
        return PRESETS[key.strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown preset: {key!r}") from None


def parse_level_bonus(raw: Any) -> int:
    """Coerce a UI value into a non-negative level bonus.

    Mirrors an integer parse of a form field: leading digits win, anything
    unparseable or negative becomes 0, and values above ``MAX_LEVEL_BONUS``
    are clamped to it.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if raw != raw:  # NaN
            return 0
        value = int(max(min(raw, MAX_LEVEL_BONUS), 0))
    else:
        m = _LEADING_INT_RE.match(str(raw))
        if not m:
            return 0
        num = m.group("num")
        # Very long digit runs exceed int() limits; they are over the cap anyway
        if len(num.lstrip("+-").lstrip("0")) > 6:
            return 0 if num.startswith("-") else MAX_LEVEL_BONUS
        value = int(num)
    return min(max(value, 0), MAX_LEVEL_BONUS)


def _aggregate(preset: Preset, rng: DiceRNG) -> DieRoll:
    if preset.drop_lowest:
        return rng.roll_drop_lowest_of_six()
    return rng.roll_sum_of_n(preset.dice)


def roll_package(preset: Preset, rng: DiceRNG | None = None, level_bonus: int = 0) -> RollPackage:
    """Roll HP, AC, and both attack seeds for ``preset``.

    Draw order is HP, AC, attack seed, modifier seed, attack die, modifier die,
    then any level-bonus dice. Level bonus only applies to presets that accept it.
    """
    rng = rng or DiceRNG()
    hp = _aggregate(preset, rng)
    ac = _aggregate(preset, rng)
    attack_seed = _aggregate(preset, rng)
    modifier_seed = _aggregate(preset, rng)
    attack = resolve_attack(rng, attack_seed, modifier_seed)

    bonus = None
    level_bonus = min(level_bonus, MAX_LEVEL_BONUS)
    if preset.accepts_level_bonus and level_bonus > 0:
        bonus = rng.roll_sum_of_n(level_bonus)

    pkg = RollPackage(label=preset.label, hp=hp, ac=ac, attack=attack, bonus=bonus)
    log.info(
        "presets.package.rolled",
        preset=preset.key,
        hp=pkg.hp_total,
        ac=ac.total,
        attack_total=attack.total,
        level_bonus=level_bonus if bonus is not None else 0,
    )
    return pkg


def roll_preset_lines(
    preset: Preset, rng: DiceRNG | None = None, level_bonus: int = 0
) -> list[str]:
    return format_package(roll_package(preset, rng, level_bonus))
