from MobRoller.formatter import format_package, format_roll, summarize
from MobRoller.rules.types import AttackResolution, DieRoll, DroppedDieRoll, RollPackage


def _attack():
    return AttackResolution(
        attack_seed=DieRoll(rolls=(6, 6, 6), total=18),
        modifier_seed=DieRoll(rolls=(1, 1, 1), total=3),
        attack_sides=12,
        attack_roll=7,
        modifier_sides=4,
        modifier_roll=2,
    )


def test_format_plain_roll():
    roll = DieRoll(rolls=(2, 5, 3), total=10)
    assert format_roll("HP", roll) == "HP: [2, 5, 3] = 10"


def test_format_dropped_roll_shows_draw_order():
    roll = DroppedDieRoll(rolls=(4, 1, 6, 2, 5, 3), total=20, dropped=1, kept=(2, 3, 4, 5, 6))
    assert format_roll("HP", roll) == "HP: [4, 1, 6, 2, 5, 3] drop 1 = 20"


def test_format_package_lines():
    pkg = RollPackage(
        label="Weak Mob (3d6)",
        hp=DieRoll(rolls=(1, 1, 1), total=3),
        ac=DieRoll(rolls=(2, 2, 2), total=6),
        attack=_attack(),
    )
    assert format_package(pkg) == [
        "=== Weak Mob (3d6) ===",
        "HP: [1, 1, 1] = 3",
        "AC: [2, 2, 2] = 6",
        "ATK Seed: [6, 6, 6] = 18 → d12 = 7",
        "Mod Seed: [1, 1, 1] = 3 → +d4 = 2",
        "ATK Total: 9",
    ]


def test_boss_bonus_is_appended_to_hp_line():
    hp = DroppedDieRoll(rolls=(4, 1, 6, 2, 5, 3), total=20, dropped=1, kept=(2, 3, 4, 5, 6))
    pkg = RollPackage(
        label="BBEG (6d6 drop lowest)",
        hp=hp,
        ac=hp,
        attack=_attack(),
        bonus=DieRoll(rolls=(3, 4), total=7),
    )
    hp_line = format_package(pkg)[1]
    assert hp_line == "HP: [4, 1, 6, 2, 5, 3] drop 1 = 20  + [3, 4] = 27"
    assert hp_line.endswith("+ [3, 4] = 27")
    assert pkg.hp_total == 27


def test_no_bonus_suffix_without_bonus_dice():
    pkg = RollPackage(
        label="BBEG (6d6 drop lowest)",
        hp=DieRoll(rolls=(3,), total=3),
        ac=DieRoll(rolls=(3,), total=3),
        attack=_attack(),
        bonus=None,
    )
    assert format_package(pkg)[1] == "HP: [3] = 3"


def test_summarize_joins_with_pipes():
    assert summarize(["a", "b", "c"]) == "a | b | c"
