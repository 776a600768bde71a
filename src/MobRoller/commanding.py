# src/MobRoller/commanding.py
from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from MobRoller.gateway import PresentationGateway


# --- Host-agnostic context the handler receives ---
@dataclass
class Invocation:
    name: str
    options: dict[str, Any]
    gateway: PresentationGateway
    # Optional DI: settings and a dice source for handlers that need them
    settings: Any | None = None
    rng: Any | None = None


# --- Option models for validation & help text ---
class Option(BaseModel):
    """Base for command options; extend per command."""


# --- Command descriptor ---
@dataclass
class Command:
    name: str
    description: str
    option_model: type[Option]
    handler: Callable[[Invocation, Option], Awaitable[Any]]
    metadata: dict[str, Any] = field(default_factory=dict)


# --- Global registry (populated by decorator) ---
_REGISTRY: dict[str, Command] = {}


def roller_command(
    name: str,
    description: str,
    option_model: type[Option] = Option,
    **metadata: Any,
):
    def wrap(func: Callable[[Invocation, Option], Awaitable[Any]]):
        _REGISTRY[name] = Command(name, description, option_model, func, metadata)
        return func

    return wrap


def all_commands() -> dict[str, Command]:
    return dict(_REGISTRY)


def find_command(name: str) -> Command | None:
    return _REGISTRY.get(name)


async def dispatch(inv: Invocation) -> Any:
    """Validate ``inv.options`` against the command's model and run its handler."""
    cmd = find_command(inv.name)
    if cmd is None:
        raise KeyError(f"Unknown command: {inv.name!r}")
    opts = cmd.option_model.model_validate(inv.options)
    return await cmd.handler(inv, opts)
