# src/MobRoller/gateway.py
"""Boundary with the host tabletop: the presentation gateway protocol and its value types.

The roller never holds a concrete host object. Anything that implements
``PresentationGateway`` (the host SDK bridge, the console gateway, or a test
double) can be injected.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Protocol

from pydantic import BaseModel

DEFAULT_CHUNK_SIZE = 350


class Role(str, Enum):
    PRIVILEGED = "privileged"
    OTHER = "other"


class MessageLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"


@dataclass(frozen=True)
class Anchor:
    x: float
    y: float

    @classmethod
    def coerce(cls, value: Any) -> Anchor:
        """Accept an ``Anchor`` or a host-style ``{"x": .., "y": ..}`` mapping."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls(x=float(value["x"]), y=float(value["y"]))
        raise TypeError(f"not an anchor: {value!r}")


NEUTRAL_ANCHOR = Anchor(0.0, 0.0)


class TextStyle(BaseModel):
    """Visual style of a placed annotation."""

    font_family: str = "monospace"
    font_size: int = 20
    padding: int = 10
    fill_color: str = "#111111"
    text_color: str = "#ffffff"
    stroke_color: str = "#ffffff"
    stroke_width: int = 2
    text_align: Literal["LEFT", "CENTER", "RIGHT"] = "LEFT"
    width: Literal["AUTO"] | int = "AUTO"


class PresentationGateway(Protocol):
    async def check_caller_role(self) -> Role: ...

    async def has_active_scene(self) -> bool: ...

    async def get_display_anchor(self) -> Anchor: ...

    async def place_annotation(self, text: str, anchor: Anchor, style: TextStyle) -> None: ...

    async def show_transient_message(self, text: str, level: MessageLevel) -> None: ...


def jitter_anchor(anchor: Anchor, spread: int, rng: random.Random | None = None) -> Anchor:
    """Offset each axis by an integer in [-spread/2, spread/2) so notes don't stack."""
    if spread <= 0:
        return anchor
    rng = rng or random.Random()
    half = spread / 2
    return Anchor(
        x=anchor.x + rng.randrange(spread) - half,
        y=anchor.y + rng.randrange(spread) - half,
    )


def chunk_message(text: str, limit: int = DEFAULT_CHUNK_SIZE, separator: str = "\n") -> list[str]:
    """Split ``text`` into ordered chunks no longer than ``limit``.

    Splits on ``separator`` where possible and packs as many pieces per chunk
    as fit; a single piece longer than ``limit`` is cut hard. Empty chunks are
    never returned.
    """
    if limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")
    if not text:
        return []
    chunks: list[str] = []
    # None means no open chunk; "" is a real empty piece still to be joined
    current: str | None = None
    for piece in text.split(separator):
        if len(piece) > limit:
            if current:
                chunks.append(current)
            while len(piece) > limit:
                chunks.append(piece[:limit])
                piece = piece[limit:]
            current = piece or None
            continue
        if current is None:
            current = piece
        elif len(current) + len(separator) + len(piece) <= limit:
            current = f"{current}{separator}{piece}"
        else:
            if current:
                chunks.append(current)
            current = piece
    if current:
        chunks.append(current)
    return chunks
