"""X11 Window Directory backed by python-xlib (EWMH, ICCCM and XTEST)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import Xlib.display
import Xlib.error
import Xlib.X
import Xlib.Xatom
from Xlib.ext import xtest
from Xlib.protocol import event as xevent

from core.errors import DisplayError, ReferenceWindowError, WindowOperationError, WindowTreeError
from os_controller.base_controller import InputEvent, WindowDirectory, WindowId

logger = logging.getLogger("xdo.x11")

ATOM_NAMES = (
    "_NET_ACTIVE_WINDOW",
    "_NET_WM_DESKTOP",
    "_NET_CURRENT_DESKTOP",
    "WM_PROTOCOLS",
    "WM_DELETE_WINDOW",
)

_X_EVENT_TYPES = {
    InputEvent.KEY_PRESS: Xlib.X.KeyPress,
    InputEvent.KEY_RELEASE: Xlib.X.KeyRelease,
    InputEvent.BUTTON_PRESS: Xlib.X.ButtonPress,
    InputEvent.BUTTON_RELEASE: Xlib.X.ButtonRelease,
}

# Source indication for _NET_ACTIVE_WINDOW requests: normal application.
_SOURCE_APPLICATION = 1


class XlibWindowDirectory(WindowDirectory):
    """Window Directory over one python-xlib display connection."""

    def __init__(self, display: Any, check_requests: bool = True) -> None:
        self.display = display
        self.check_requests = check_requests
        self._errors: list[Xlib.error.XError] = []
        self._closed = False
        self.display.set_error_handler(self._on_error)

        try:
            screen = self.display.screen()
        except IndexError:
            screen = None
        if screen is None:
            raise DisplayError("Can't acquire screen.")
        self.root = screen.root

        try:
            self.atoms = {name: self.display.intern_atom(name) for name in ATOM_NAMES}
        except (Xlib.error.XError, Xlib.error.ConnectionClosedError) as exc:
            raise DisplayError("Can't initialize EWMH atoms.") from exc
        if not all(self.atoms.values()):
            raise DisplayError("Can't initialize EWMH atoms.")

    @classmethod
    def open(cls, name: str | None = None, check_requests: bool = True) -> XlibWindowDirectory:
        """Connect to the display named ``name`` (``$DISPLAY`` when None)."""
        try:
            display = Xlib.display.Display(name)
        except (Xlib.error.DisplayError, Xlib.error.ConnectionClosedError, OSError) as exc:
            logger.debug("Display connection failed: %s", exc)
            raise DisplayError("Can't open display.") from exc
        logger.debug("Connected to display %s", display.get_display_name())
        return cls(display, check_requests=check_requests)

    def _on_error(self, err: Xlib.error.XError, request: Any = None) -> None:
        self._errors.append(err)

    def _window(self, window: WindowId) -> Any:
        return self.display.create_resource_object("window", window)

    def _cardinal(self, xwindow: Any, atom_name: str) -> int | None:
        try:
            prop = xwindow.get_full_property(self.atoms[atom_name], Xlib.Xatom.CARDINAL)
        except Xlib.error.XError as exc:
            logger.debug("Can't read %s: %s", atom_name, exc)
            return None
        except Xlib.error.ConnectionClosedError as exc:
            raise DisplayError("Lost the display connection.") from exc
        if prop is None or not len(prop.value):
            return None
        return int(prop.value[0])

    def _request(self, window: WindowId, what: str, send: Callable[[], None]) -> None:
        """Send one request, surfacing server errors when checking is enabled."""
        self._errors.clear()
        try:
            send()
            if self.check_requests:
                self.display.sync()
        except (Xlib.error.XError, Xlib.error.ConnectionClosedError) as exc:
            raise WindowOperationError(window, "Can't %s window 0x%08x: %s", what, window, exc) from exc
        if self._errors:
            err = self._errors[0]
            self._errors.clear()
            raise WindowOperationError(window, "Can't %s window 0x%08x: %s", what, window, err)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_active_window(self) -> WindowId:
        try:
            prop = self.root.get_full_property(self.atoms["_NET_ACTIVE_WINDOW"], Xlib.Xatom.WINDOW)
        except (Xlib.error.XError, Xlib.error.ConnectionClosedError) as exc:
            raise ReferenceWindowError("Can't determine the active window.") from exc
        if prop is None or not len(prop.value) or not prop.value[0]:
            raise ReferenceWindowError("Can't determine the active window.")
        return int(prop.value[0])

    def get_root_children(self) -> list[WindowId]:
        try:
            tree = self.root.query_tree()
        except (Xlib.error.XError, Xlib.error.ConnectionClosedError) as exc:
            raise WindowTreeError("Failed to query the window tree.") from exc
        if tree is None:
            raise WindowTreeError("Failed to query the window tree.")
        return [child.id for child in tree.children]

    def get_class(self, window: WindowId) -> str | None:
        try:
            wm_class = self._window(window).get_wm_class()
        except Xlib.error.XError as exc:
            logger.debug("Can't read WM_CLASS of 0x%08x: %s", window, exc)
            return None
        except Xlib.error.ConnectionClosedError as exc:
            raise DisplayError("Lost the display connection.") from exc
        if not wm_class:
            return None
        class_name = wm_class[1]
        if isinstance(class_name, bytes):
            class_name = class_name.decode("latin-1")
        return class_name

    def get_desktop(self, window: WindowId) -> int | None:
        return self._cardinal(self._window(window), "_NET_WM_DESKTOP")

    def get_current_desktop(self) -> int | None:
        return self._cardinal(self.root, "_NET_CURRENT_DESKTOP")

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def close_window(self, window: WindowId) -> None:
        xwindow = self._window(window)
        message = xevent.ClientMessage(
            window=window,
            client_type=self.atoms["WM_PROTOCOLS"],
            data=(32, [self.atoms["WM_DELETE_WINDOW"], Xlib.X.CurrentTime, 0, 0, 0]),
        )
        self._request(window, "close", lambda: xwindow.send_event(message, event_mask=Xlib.X.NoEventMask))

    def kill_window(self, window: WindowId) -> None:
        self._request(window, "kill", lambda: self.display.kill_client(window))

    def hide_window(self, window: WindowId) -> None:
        self._request(window, "hide", self._window(window).unmap)

    def show_window(self, window: WindowId) -> None:
        self._request(window, "show", self._window(window).map)

    def activate_window(self, window: WindowId) -> None:
        message = xevent.ClientMessage(
            window=window,
            client_type=self.atoms["_NET_ACTIVE_WINDOW"],
            data=(32, [_SOURCE_APPLICATION, Xlib.X.CurrentTime, 0, 0, 0]),
        )
        mask = Xlib.X.StructureNotifyMask | Xlib.X.SubstructureRedirectMask
        self._request(window, "activate", lambda: self.root.send_event(message, event_mask=mask))

    def synthesize_input(self, window: WindowId, event: InputEvent, code: int) -> None:
        if not self.display.has_extension("XTEST"):
            raise WindowOperationError(window, "XTEST extension unavailable on this display.")

        def send() -> None:
            xtest.fake_input(self.display, _X_EVENT_TYPES[event], code & 0xFF, Xlib.X.CurrentTime, window, 0, 0)
            self.display.flush()

        self._request(window, event.value.replace("_", " "), send)

    def flush(self) -> None:
        self.display.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.display.flush()
            self.display.close()
        except Xlib.error.ConnectionClosedError as exc:
            logger.debug("Display connection already closed: %s", exc)
