"""Failure modes of a single roll action. None of them are fatal to the host."""

from __future__ import annotations


class RollerError(Exception):
    """Base class for roll-action failures."""

    reason: str = "error"


class PermissionDenied(RollerError):
    reason = "permission_denied"


class NoActiveContext(RollerError):
    """No open scene to place an annotation in."""

    reason = "no_active_scene"


class AnnotationPlacementFailure(RollerError):
    reason = "placement_failed"
