"""Render rolls and roll packages as display lines."""

from __future__ import annotations

from MobRoller.rules.types import DieRoll, DroppedDieRoll, RollPackage

SUMMARY_SEPARATOR = " | "


def _join(values) -> str:
    return ", ".join(str(v) for v in values)


def format_roll(tag: str, roll: DieRoll) -> str:
    # Brackets always show draw order, even for drop-lowest rolls.
    if isinstance(roll, DroppedDieRoll):
        return f"{tag}: [{_join(roll.rolls)}] drop {roll.dropped} = {roll.total}"
    return f"{tag}: [{_join(roll.rolls)}] = {roll.total}"


def format_hp(pkg: RollPackage) -> str:
    line = format_roll("HP", pkg.hp)
    if pkg.bonus is not None and pkg.bonus.rolls:
        line += f"  + [{_join(pkg.bonus.rolls)}] = {pkg.hp_total}"
    return line


def format_package(pkg: RollPackage) -> list[str]:
    atk = pkg.attack
    return [
        f"=== {pkg.label} ===",
        format_hp(pkg),
        format_roll("AC", pkg.ac),
        format_roll("ATK Seed", atk.attack_seed) + f" → d{atk.attack_sides} = {atk.attack_roll}",
        format_roll("Mod Seed", atk.modifier_seed)
        + f" → +d{atk.modifier_sides} = {atk.modifier_roll}",
        f"ATK Total: {atk.total}",
    ]


def summarize(lines: list[str]) -> str:
    return SUMMARY_SEPARATOR.join(lines)
