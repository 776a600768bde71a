# src/MobRoller/commands/mob.py
import structlog
from pydantic import Field, field_validator

from MobRoller.commanding import Invocation, Option, roller_command
from MobRoller.config import load_settings
from MobRoller.pipeline import RollOutcome, run_preset
from MobRoller.presets import (
    BBEG,
    MAX_LEVEL_BONUS,
    STRONG,
    THREATENING,
    WEAK,
    Preset,
    parse_level_bonus,
)

log = structlog.get_logger()


class BbegOpts(Option):
    level: int = Field(
        default=0, ge=0, le=MAX_LEVEL_BONUS, description="Level bonus: extra d6 added to HP"
    )

    @field_validator("level", mode="before")
    @classmethod
    def _coerce_level(cls, v):
        # Form input: blank or non-numeric means no bonus
        return parse_level_bonus(v)


async def _roll(inv: Invocation, preset: Preset, level_bonus: int = 0) -> RollOutcome:
    settings = inv.settings or load_settings()
    outcome = await run_preset(
        inv.gateway,
        preset,
        level_bonus=level_bonus,
        settings=settings,
        rng=inv.rng,
    )
    log.info("command.roll.done", command=inv.name, outcome=type(outcome).__name__)
    return outcome


@roller_command(name="weak", description="Roll a weak mob (3d6).")
async def weak(inv: Invocation, opts: Option):
    return await _roll(inv, WEAK)


@roller_command(name="strong", description="Roll a strong mob (4d6).")
async def strong(inv: Invocation, opts: Option):
    return await _roll(inv, STRONG)


@roller_command(name="threat", description="Roll a threatening mob (5d6).")
async def threat(inv: Invocation, opts: Option):
    return await _roll(inv, THREATENING)


@roller_command(
    name="bbeg",
    description="Roll the BBEG (6d6 drop lowest, optional level bonus on HP).",
    option_model=BbegOpts,
)
async def bbeg(inv: Invocation, opts: BbegOpts):
    return await _roll(inv, BBEG, level_bonus=opts.level)
