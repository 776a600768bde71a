"""One roll action: permission check, optional scene check, roll, present.

Each call to ``run_preset`` is independent. Failures are contained in the
action and reported through the returned outcome; they never propagate to
the host.
"""

from __future__ import annotations

import random
import time
import uuid
from dataclasses import dataclass

import structlog
from structlog.contextvars import bound_contextvars

from MobRoller.config import Settings, load_settings
from MobRoller.errors import (
    AnnotationPlacementFailure,
    NoActiveContext,
    PermissionDenied,
    RollerError,
)
from MobRoller.formatter import SUMMARY_SEPARATOR, summarize
from MobRoller.gateway import (
    NEUTRAL_ANCHOR,
    Anchor,
    MessageLevel,
    PresentationGateway,
    Role,
    chunk_message,
    jitter_anchor,
)
from MobRoller.metrics import inc_counter, observe_histogram
from MobRoller.presets import Preset, roll_preset_lines
from MobRoller.rules.dice import DiceRNG

log = structlog.get_logger()


@dataclass(frozen=True)
class Placed:
    lines: list[str]


@dataclass(frozen=True)
class Fallback:
    lines: list[str]
    reason: str


@dataclass(frozen=True)
class Aborted:
    reason: str


RollOutcome = Placed | Fallback | Aborted


async def _toast(gateway: PresentationGateway, text: str, level: MessageLevel) -> None:
    try:
        await gateway.show_transient_message(text, level)
    except Exception:
        inc_counter("presentation.toast_failed")
        log.warning("pipeline.toast.failed", level=level.value, exc_info=True)


async def _require_privileged(gateway: PresentationGateway) -> Role:
    try:
        role = await gateway.check_caller_role()
    except Exception as exc:
        raise PermissionDenied("caller role unavailable") from exc
    # Hosts may answer with the bare role string
    try:
        role = Role(role)
    except ValueError as exc:
        raise PermissionDenied(f"unknown caller role {role!r}") from exc
    if role != Role.PRIVILEGED:
        raise PermissionDenied(f"caller role is {role.value}")
    return role


async def _scene_is_open(gateway: PresentationGateway) -> bool:
    try:
        return bool(await gateway.has_active_scene())
    except Exception:
        log.warning("pipeline.scene_check.failed", exc_info=True)
        return False


async def _resolve_anchor(
    gateway: PresentationGateway, spread: int, rng: random.Random | None = None
) -> Anchor:
    try:
        anchor = Anchor.coerce(await gateway.get_display_anchor())
    except Exception:
        log.info("pipeline.anchor.unavailable", exc_info=True)
        anchor = NEUTRAL_ANCHOR
    return jitter_anchor(anchor, spread, rng)


async def show_chunked(
    gateway: PresentationGateway, lines: list[str], level: MessageLevel, limit: int
) -> int:
    """Show ``lines`` as one or more transient messages, in order. Returns the count."""
    chunks = chunk_message(summarize(lines), limit, separator=SUMMARY_SEPARATOR)
    for chunk in chunks:
        await _toast(gateway, chunk, level)
    return len(chunks)


async def present(
    gateway: PresentationGateway,
    lines: list[str],
    settings: Settings,
    *,
    scene_open: bool = True,
    jitter_rng: random.Random | None = None,
) -> Placed | Fallback:
    """Place ``lines`` as an annotation, or fall back to transient messages."""
    if not scene_open:
        inc_counter("presentation.fallback")
        await _toast(gateway, settings.no_scene_message, MessageLevel.WARNING)
        await show_chunked(gateway, lines, MessageLevel.INFO, settings.message_chunk_size)
        return Fallback(lines=lines, reason=NoActiveContext.reason)

    anchor = await _resolve_anchor(gateway, settings.anchor_jitter, jitter_rng)
    try:
        await gateway.place_annotation("\n".join(lines), anchor, settings.annotation_style)
    except Exception as exc:
        # Host errors of any type count as a placement failure
        reason = exc.reason if isinstance(exc, RollerError) else AnnotationPlacementFailure.reason
        inc_counter("presentation.fallback")
        log.warning("pipeline.placement.failed", reason=reason, exc_info=True)
        n = await show_chunked(gateway, lines, MessageLevel.INFO, settings.message_chunk_size)
        log.info("pipeline.fallback.shown", chunks=n)
        return Fallback(lines=lines, reason=reason)

    inc_counter("presentation.placed")
    log.info("pipeline.placement.ok", x=anchor.x, y=anchor.y, line_count=len(lines))
    await _toast(gateway, settings.placed_message, MessageLevel.SUCCESS)
    if settings.verbose_toasts:
        await show_chunked(gateway, lines, MessageLevel.SUCCESS, settings.message_chunk_size)
    return Placed(lines=lines)


async def run_preset(
    gateway: PresentationGateway,
    preset: Preset,
    *,
    level_bonus: int = 0,
    settings: Settings | None = None,
    rng: DiceRNG | None = None,
) -> RollOutcome:
    settings = settings or load_settings()
    start = time.perf_counter()
    inc_counter("roll.requested")
    with bound_contextvars(action_id=uuid.uuid4().hex[:12], preset=preset.key):
        try:
            try:
                role = await _require_privileged(gateway)
                scene_open = await _scene_is_open(gateway)
                if not scene_open and settings.strict_scene_check:
                    raise NoActiveContext("no active scene")
            except PermissionDenied as exc:
                inc_counter("pipeline.permission_denied")
                log.warning("pipeline.permission.denied", detail=str(exc))
                await _toast(gateway, settings.permission_denied_message, MessageLevel.WARNING)
                return Aborted(reason=exc.reason)
            except NoActiveContext as exc:
                inc_counter("pipeline.no_scene")
                log.warning("pipeline.scene.missing", strict=True)
                await _toast(gateway, settings.no_scene_message, MessageLevel.WARNING)
                return Aborted(reason=exc.reason)

            if settings.verbose_toasts:
                await _toast(
                    gateway, f"{preset.label} clicked (role: {role.value})", MessageLevel.INFO
                )

            lines = roll_preset_lines(preset, rng, level_bonus)
            inc_counter("roll.completed")
            inc_counter(f"roll.preset.{preset.key}")
            return await present(gateway, lines, settings, scene_open=scene_open)
        finally:
            elapsed_ms = int((time.perf_counter() - start) * 1000)
            observe_histogram("pipeline.latency_ms", elapsed_ms)
