"""A terminal stand-in for the tabletop host, used by the CLI."""

from __future__ import annotations

from dataclasses import dataclass

import click

from MobRoller.errors import AnnotationPlacementFailure
from MobRoller.gateway import NEUTRAL_ANCHOR, Anchor, MessageLevel, Role, TextStyle

_LEVEL_COLORS = {
    MessageLevel.INFO: "cyan",
    MessageLevel.WARNING: "yellow",
    MessageLevel.SUCCESS: "green",
}


@dataclass
class ConsoleGateway:
    role: Role = Role.PRIVILEGED
    scene_open: bool = True
    anchor: Anchor = NEUTRAL_ANCHOR

    async def check_caller_role(self) -> Role:
        return self.role

    async def has_active_scene(self) -> bool:
        return self.scene_open

    async def get_display_anchor(self) -> Anchor:
        return self.anchor

    async def place_annotation(self, text: str, anchor: Anchor, style: TextStyle) -> None:
        if not self.scene_open:
            raise AnnotationPlacementFailure("no scene to draw on")
        width = max(len(line) for line in text.splitlines()) if text else 0
        pad = " " * max(style.padding // 5, 1)
        border = "+" + "-" * (width + 2 * len(pad)) + "+"
        click.echo(click.style(f"@ ({anchor.x:.0f}, {anchor.y:.0f})", dim=True))
        click.echo(border)
        for line in text.splitlines():
            click.echo(f"|{pad}{line.ljust(width)}{pad}|")
        click.echo(border)

    async def show_transient_message(self, text: str, level: MessageLevel) -> None:
        tag = click.style(f"[{level.value}]", fg=_LEVEL_COLORS.get(level), bold=True)
        click.echo(f"{tag} {text}", err=level == MessageLevel.WARNING)
