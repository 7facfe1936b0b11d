"""Action model and per-window action dispatch.

Each action kind maps to one handler that delegates to the Window Directory.
Dispatch to one window never affects dispatch to the next: request errors are
logged, reported in the outcome and emitted on the event bus.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from core.errors import UsageError, WindowOperationError
from core.event_bus import EventBus
from os_controller.base_controller import InputEvent, WindowDirectory, WindowId

logger = logging.getLogger("xdo.dispatcher")


class ActionKind(enum.Enum):
    CLOSE = "close"
    KILL = "kill"
    HIDE = "hide"
    SHOW = "show"
    ACTIVATE = "activate"
    KEY = "key"
    BUTTON = "button"


@dataclass(frozen=True)
class Action:
    """One requested action; ``code`` is only used by key and button."""

    kind: ActionKind
    code: int = 0

    @classmethod
    def from_name(cls, name: str | None, code: int = 0) -> Action:
        if not name:
            raise UsageError("No arguments given.")
        try:
            kind = ActionKind(name)
        except ValueError:
            raise UsageError("Unknown action: '%s'.", name) from None
        return cls(kind=kind, code=code)

    @property
    def uses_code(self) -> bool:
        return self.kind in (ActionKind.KEY, ActionKind.BUTTON)

    def __str__(self) -> str:
        if self.uses_code:
            return f"{self.kind.value}({self.code})"
        return self.kind.value


@dataclass
class DispatchOutcome:
    window: WindowId
    success: bool
    error: str = ""


@dataclass
class DispatchReport:
    """Outcomes of one batch, in dispatch order."""

    action: Action
    outcomes: list[DispatchOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.succeeded


Handler = Callable[[WindowId, int], None]


class ActionDispatcher:
    """Maps action kinds to Window Directory requests."""

    def __init__(self, directory: WindowDirectory, event_bus: EventBus | None = None) -> None:
        self.directory = directory
        self.event_bus = event_bus or EventBus()
        self._handlers: dict[ActionKind, Handler] = {
            ActionKind.CLOSE: lambda window, _code: directory.close_window(window),
            ActionKind.KILL: lambda window, _code: directory.kill_window(window),
            ActionKind.HIDE: lambda window, _code: directory.hide_window(window),
            ActionKind.SHOW: lambda window, _code: directory.show_window(window),
            ActionKind.ACTIVATE: lambda window, _code: directory.activate_window(window),
            ActionKind.KEY: self._key_press_release,
            ActionKind.BUTTON: self._button_press_release,
        }

    def _key_press_release(self, window: WindowId, code: int) -> None:
        self.directory.synthesize_input(window, InputEvent.KEY_PRESS, code)
        self.directory.synthesize_input(window, InputEvent.KEY_RELEASE, code)

    def _button_press_release(self, window: WindowId, code: int) -> None:
        self.directory.synthesize_input(window, InputEvent.BUTTON_PRESS, code)
        self.directory.synthesize_input(window, InputEvent.BUTTON_RELEASE, code)

    def dispatch(self, action: Action, window: WindowId) -> DispatchOutcome:
        """Apply ``action`` to one window."""
        handler = self._handlers[action.kind]
        try:
            handler(window, action.code)
        except WindowOperationError as exc:
            logger.warning("%s", exc)
            outcome = DispatchOutcome(window=window, success=False, error=str(exc))
        else:
            logger.debug("%s -> 0x%08x", action, window)
            outcome = DispatchOutcome(window=window, success=True)

        self.event_bus.emit_outcome(
            outcome.success,
            {
                "action": action.kind.value,
                "code": action.code if action.uses_code else None,
                "window": window,
                "error": outcome.error,
            },
        )
        return outcome

    def dispatch_all(self, action: Action, windows: Iterable[WindowId]) -> DispatchReport:
        """Apply ``action`` to each window in order."""
        report = DispatchReport(action=action)
        for window in windows:
            report.outcomes.append(self.dispatch(action, window))
        if report.failed:
            logger.info("%s: %d succeeded, %d failed", action, report.succeeded, report.failed)
        return report
