"""
Diagnostic events emitted by the transformer.

Observers are plain callables taking a DiagnosticEvent. The default one
forwards everything to the stdlib ``logging`` module; tests can pass
``list.append`` to capture events instead.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
import logging

_LOGGER_NAME = "quadmap"


@dataclass(frozen=True)
class DiagnosticEvent:
    kind: str
    level: int
    message: str
    data: Dict[str, Any] = field(default_factory=dict)


Observer = Callable[[DiagnosticEvent], None]


class LoggingObserver:
    """Route diagnostic events to a logger at the event's level."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(_LOGGER_NAME)

    def __call__(self, event: DiagnosticEvent) -> None:
        self.logger.log(event.level, event.message, extra={"kind": event.kind, "data": dict(event.data)})


def margin_unset_event() -> DiagnosticEvent:
    return DiagnosticEvent(
        kind="margin_unset",
        level=logging.WARNING,
        message="No outside margin value set; points will not be restricted to the destination quad",
    )


def margin_set_event(margin: float) -> DiagnosticEvent:
    return DiagnosticEvent(
        kind="margin_set",
        level=logging.WARNING,
        message=(
            f"An outside margin value was set; points further than {margin} distance "
            "outside of the destination quad will be ignored"
        ),
        data={"margin": margin},
    )


def solve_failed_event(error: Exception) -> DiagnosticEvent:
    return DiagnosticEvent(
        kind="solve_failed",
        level=logging.WARNING,
        message=f"Could not build transform from source quad: {error}",
        data={"error": str(error)},
    )


def point_checked_event(point, margin: float, inside: bool) -> DiagnosticEvent:
    x, y = point
    return DiagnosticEvent(
        kind="point_checked",
        level=logging.DEBUG,
        message=f"...Is {x}, {y} outside of {margin}? {'no' if inside else 'yes'}",
        data={"point": (x, y), "margin": margin, "inside": inside},
    )
