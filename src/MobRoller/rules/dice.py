# rules/dice.py

from __future__ import annotations

import random

import structlog

from MobRoller.rules.types import DieRoll, DroppedDieRoll

D6 = 6
DROP_LOWEST_POOL = 6


class DiceRNG:
    def __init__(self, seed: int | None = None):
        # Unseeded by default; a seed is only for reproducible tests.
        self._rng = random.Random(seed)
        self._log = structlog.get_logger()

    def roll_die(self, sides: int) -> int:
        if sides <= 0:
            raise ValueError(f"Die must have at least one side, got {sides}")
        return self._rng.randint(1, sides)

    def roll_sum_of_n(self, n: int) -> DieRoll:
        """Roll ``n`` six-sided dice, keeping draw order."""
        if n < 1:
            raise ValueError(f"Need at least one die, got {n}")
        rolls = tuple(self.roll_die(D6) for _ in range(n))
        out = DieRoll(rolls=rolls, total=sum(rolls))
        self._log.debug("rules.dice.sum.result", count=n, rolls=list(rolls), total=out.total)
        return out

    def roll_drop_lowest_of_six(self) -> DroppedDieRoll:
        """
        Roll 6d6 and drop the lowest.

        ``kept`` is the ascending sort minus its first element, not draw order.
        """
        rolls = tuple(self.roll_die(D6) for _ in range(DROP_LOWEST_POOL))
        ordered = sorted(rolls)
        dropped = ordered[0]
        kept = tuple(ordered[1:])
        out = DroppedDieRoll(rolls=rolls, total=sum(kept), dropped=dropped, kept=kept)
        self._log.debug(
            "rules.dice.drop_lowest.result",
            rolls=list(rolls),
            dropped=dropped,
            total=out.total,
        )
        return out
