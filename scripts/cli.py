#!/usr/bin/env python3
"""
Dynamic CLI that discovers MobRoller commands and runs the same handlers.

Examples:
  PYTHONPATH=./src python scripts/cli.py weak
  PYTHONPATH=./src python scripts/cli.py bbeg --level 3
  PYTHONPATH=./src python scripts/cli.py --no-scene --strict bbeg

The terminal plays the tabletop host: annotations are drawn as boxed text and
transient messages are printed with their level.
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from types import UnionType
from typing import Any, Union, get_args, get_origin

import click
import structlog

from MobRoller.command_loader import load_all_commands
from MobRoller.commanding import Invocation, all_commands, dispatch
from MobRoller.config import load_settings
from MobRoller.console import ConsoleGateway
from MobRoller.gateway import Role
from MobRoller.logging import describe_settings, setup_logging


def _click_type_for(annotation: Any):
    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is None:
        if annotation in (str, int, float):
            return annotation
        return str

    # Optional/Union -> use the first arg type if simple, else str
    if origin in (Union, UnionType) and args:
        base = next((a for a in args if a is not type(None)), str)
        return _click_type_for(base)

    return str


def _params_from_model(option_model: type) -> list[click.Parameter]:
    params: list[click.Parameter] = []
    for name, field in getattr(option_model, "model_fields", {}).items():
        opt_name = f"--{name.replace('_', '-')}"
        ann = field.annotation or str
        default = field.default
        help_text = field.description or ""

        if ann is bool:
            params.append(click.Option([opt_name], is_flag=True, default=bool(default), help=help_text))
            continue

        params.append(
            click.Option(
                [opt_name],
                type=_click_type_for(ann),
                default=default,
                show_default=default is not None,
                help=help_text,
            )
        )
    return params


def _make_click_command(name: str, description: str, option_model: type) -> click.Command:
    params = _params_from_model(option_model)

    @click.pass_obj
    def _callback(host: dict[str, Any], **kwargs: Any):
        async def _run():
            if not Path("config.toml").exists() and not Path(".env").exists():
                msg = click.style(
                    "WARNING: Could not find 'config.toml' or '.env' in the current directory.",
                    fg="yellow",
                    bold=True,
                )
                click.echo(f"{msg}\nContinuing with default settings.", err=True)

            overrides = {k: v for k, v in host["overrides"].items() if v is not None}
            settings = load_settings().model_copy(update=overrides)
            setup_logging(settings)
            structlog.get_logger().debug("cli.settings", **describe_settings(settings))

            gateway = ConsoleGateway(
                role=Role.OTHER if host["as_player"] else Role.PRIVILEGED,
                scene_open=not host["no_scene"],
            )
            inv = Invocation(name=name, options=kwargs, gateway=gateway, settings=settings)
            outcome = await dispatch(inv)
            click.echo(click.style(f"-> {type(outcome).__name__}", dim=True), err=True)

        asyncio.run(_run())

    return click.Command(name=name, params=params, callback=_callback, help=description)


def build_app() -> click.Group:
    load_all_commands()

    @click.group()
    @click.option("--as-player", is_flag=True, help="Call as a non-GM player.")
    @click.option("--no-scene", is_flag=True, help="Pretend no scene is open.")
    @click.option(
        "--strict/--lenient",
        default=None,
        help="Abort before rolling when no scene is open (overrides config).",
    )
    @click.option(
        "--verbose-toasts/--quiet-toasts",
        default=None,
        help="Echo click and summary toasts (overrides config).",
    )
    @click.pass_context
    def app(ctx: click.Context, as_player: bool, no_scene: bool, strict, verbose_toasts):
        ctx.obj = {
            "as_player": as_player,
            "no_scene": no_scene,
            "overrides": {
                "strict_scene_check": strict,
                "verbose_toasts": verbose_toasts,
            },
        }

    for cmd in all_commands().values():
        app.add_command(_make_click_command(cmd.name, cmd.description, cmd.option_model))

    return app


def main() -> None:  # pragma: no cover
    app = build_app()
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
