"""Error taxonomy for xdo runs."""

from __future__ import annotations


class XdoError(Exception):
    """Base exception for this project."""

    def __init__(self, msg: object = "", *args: object) -> None:
        super().__init__((str(msg) % args) if args else msg)


class FatalError(XdoError):
    """Aborts the whole run with a nonzero exit status."""


class UsageError(FatalError):
    """Missing or unknown action."""


class ConfigError(FatalError):
    """Configuration files could not be loaded or validated."""


class DisplayError(FatalError):
    """The display connection could not be set up."""


class ReferenceWindowError(FatalError):
    """The active window is required but cannot be determined."""


class WindowTreeError(FatalError):
    """The root window's children could not be listed."""


class WindowOperationError(XdoError):
    """A request about one window failed. Never fatal for the batch."""

    def __init__(self, window: int, msg: object = "", *args: object) -> None:
        super().__init__(msg, *args)
        self.window = window
