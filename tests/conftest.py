# tests/conftest.py

from __future__ import annotations

import pytest

from MobRoller.config import Settings
from MobRoller.gateway import Anchor, MessageLevel, Role, TextStyle
from MobRoller.metrics import reset_counters
from MobRoller.rules.dice import DiceRNG


class ScriptedRNG(DiceRNG):
    """DiceRNG that hands out pre-chosen faces in order and records the dice asked for."""

    def __init__(self, faces):
        super().__init__(seed=0)
        self.faces = list(faces)
        self.requested_sides: list[int] = []

    def roll_die(self, sides: int) -> int:
        self.requested_sides.append(sides)
        if not self.faces:
            raise AssertionError("ScriptedRNG ran out of faces")
        face = self.faces.pop(0)
        assert 1 <= face <= sides, f"scripted face {face} does not fit a d{sides}"
        return face


class RecordingGateway:
    """In-memory host double. Records every annotation and transient message."""

    def __init__(
        self,
        *,
        role: Role = Role.PRIVILEGED,
        scene_open: bool = True,
        anchor: Anchor = Anchor(100, 200),
        fail_role: bool = False,
        fail_anchor: bool = False,
        fail_placement: bool = False,
        fail_toasts: bool = False,
    ):
        self.role = role
        self.scene_open = scene_open
        self.anchor = anchor
        self.fail_role = fail_role
        self.fail_anchor = fail_anchor
        self.fail_placement = fail_placement
        self.fail_toasts = fail_toasts
        self.annotations: list[tuple[str, Anchor, TextStyle]] = []
        self.messages: list[tuple[str, MessageLevel]] = []
        self.calls: list[str] = []

    async def check_caller_role(self) -> Role:
        self.calls.append("check_caller_role")
        if self.fail_role:
            raise RuntimeError("host not ready")
        return self.role

    async def has_active_scene(self) -> bool:
        self.calls.append("has_active_scene")
        return self.scene_open

    async def get_display_anchor(self) -> Anchor:
        self.calls.append("get_display_anchor")
        if self.fail_anchor:
            raise RuntimeError("viewport unavailable")
        return self.anchor

    async def place_annotation(self, text: str, anchor: Anchor, style: TextStyle) -> None:
        self.calls.append("place_annotation")
        if self.fail_placement:
            raise RuntimeError("scene.local.addItems rejected")
        self.annotations.append((text, anchor, style))

    async def show_transient_message(self, text: str, level: MessageLevel) -> None:
        self.calls.append("show_transient_message")
        if self.fail_toasts:
            raise RuntimeError("notification bus down")
        self.messages.append((text, level))


# Weak preset: HP [1,1,1], AC [2,2,2], attack seed [6,6,6] -> d12 rolls 7,
# modifier seed [1,1,1] -> d4 rolls 2.
WEAK_FACES = [1, 1, 1, 2, 2, 2, 6, 6, 6, 1, 1, 1, 7, 2]

# BBEG: HP [4,1,6,2,5,3] (20), AC all sixes (30), attack seed all ones (5) -> d4 rolls 3,
# modifier seed all threes (15) -> d8 rolls 8, then level-bonus dice.
BBEG_FACES = [
    4, 1, 6, 2, 5, 3,
    6, 6, 6, 6, 6, 6,
    1, 1, 1, 1, 1, 1,
    3, 3, 3, 3, 3, 3,
    3, 8,
]


@pytest.fixture(autouse=True)
def _reset_metrics():
    reset_counters()
    yield
    reset_counters()


@pytest.fixture
def scripted_rng():
    return ScriptedRNG


@pytest.fixture
def weak_rng():
    return ScriptedRNG(WEAK_FACES)


@pytest.fixture
def bbeg_rng():
    def _make(bonus_faces=()):
        return ScriptedRNG(BBEG_FACES + list(bonus_faces))

    return _make


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def make_gateway():
    return RecordingGateway


@pytest.fixture
def settings():
    # No jitter so anchors are exact in assertions
    return Settings(anchor_jitter=0)
