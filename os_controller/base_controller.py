"""Window Directory interface consumed by target resolution and dispatch."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from types import TracebackType

WindowId = int


class InputEvent(enum.Enum):
    """Synthetic input event types."""

    KEY_PRESS = "key_press"
    KEY_RELEASE = "key_release"
    BUTTON_PRESS = "button_press"
    BUTTON_RELEASE = "button_release"


class WindowDirectory(ABC):
    """An open session with a display server.

    Query methods that feed the resolver raise ``FatalError`` subclasses when
    the answer is indispensable (active window, root children) and return
    ``None`` when an attribute is simply unavailable. Request methods raise
    ``WindowOperationError`` when the server rejects a request.
    """

    @abstractmethod
    def get_active_window(self) -> WindowId:
        """Return the window the window manager considers active."""

    @abstractmethod
    def get_root_children(self) -> list[WindowId]:
        """Return the root window's children in server order."""

    @abstractmethod
    def get_class(self, window: WindowId) -> str | None:
        """Return the WM_CLASS class name of a window."""

    @abstractmethod
    def get_desktop(self, window: WindowId) -> int | None:
        """Return the desktop index of a window."""

    @abstractmethod
    def get_current_desktop(self) -> int | None:
        """Return the desktop index currently shown."""

    @abstractmethod
    def close_window(self, window: WindowId) -> None:
        """Ask the client to close the window gracefully."""

    @abstractmethod
    def kill_window(self, window: WindowId) -> None:
        """Terminate the connection owning the window."""

    @abstractmethod
    def hide_window(self, window: WindowId) -> None:
        """Unmap the window."""

    @abstractmethod
    def show_window(self, window: WindowId) -> None:
        """Map the window."""

    @abstractmethod
    def activate_window(self, window: WindowId) -> None:
        """Ask the window manager to activate the window."""

    @abstractmethod
    def synthesize_input(self, window: WindowId, event: InputEvent, code: int) -> None:
        """Inject one synthetic key or button event."""

    @abstractmethod
    def flush(self) -> None:
        """Send buffered requests to the server."""

    @abstractmethod
    def close(self) -> None:
        """Flush and disconnect."""

    def __enter__(self) -> WindowDirectory:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
