"""X11 Window Directory tests against a mocked python-xlib display."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import Xlib.X
import Xlib.Xatom
from Xlib.error import ConnectionClosedError

from core.errors import DisplayError, ReferenceWindowError, WindowOperationError, WindowTreeError
from os_controller import linux_controller
from os_controller.base_controller import InputEvent
from os_controller.linux_controller import ATOM_NAMES, XlibWindowDirectory

ATOMS = {name: 100 + i for i, name in enumerate(ATOM_NAMES)}


def build_display(windows: dict[int, MagicMock] | None = None) -> MagicMock:
    display = MagicMock()
    display.intern_atom.side_effect = lambda name: ATOMS[name]
    display.screen.return_value.root = MagicMock(name="root")
    windows = {} if windows is None else windows
    display.create_resource_object.side_effect = lambda kind, wid: windows.setdefault(wid, MagicMock(id=wid))
    display.has_extension.return_value = True
    return display


def prop(*values: int) -> MagicMock:
    return MagicMock(value=list(values))


def test_open_failure_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(linux_controller.Xlib.display, "Display", MagicMock(side_effect=OSError("refused")))
    with pytest.raises(DisplayError, match="Can't open display."):
        XlibWindowDirectory.open(":99")


def test_missing_screen_is_fatal() -> None:
    display = build_display()
    display.screen.return_value = None
    with pytest.raises(DisplayError, match="Can't acquire screen."):
        XlibWindowDirectory(display)


def test_atom_failure_is_fatal() -> None:
    display = build_display()
    display.intern_atom.side_effect = lambda name: 0
    with pytest.raises(DisplayError, match="EWMH atoms"):
        XlibWindowDirectory(display)


def test_active_window_read_from_root() -> None:
    display = build_display()
    root = display.screen.return_value.root
    root.get_full_property.return_value = prop(0x400001)

    assert XlibWindowDirectory(display).get_active_window() == 0x400001
    root.get_full_property.assert_called_once_with(ATOMS["_NET_ACTIVE_WINDOW"], Xlib.Xatom.WINDOW)


@pytest.mark.parametrize("reply", [None, prop(), prop(0)])
def test_undeterminable_active_window_is_fatal(reply: MagicMock | None) -> None:
    display = build_display()
    display.screen.return_value.root.get_full_property.return_value = reply
    with pytest.raises(ReferenceWindowError):
        XlibWindowDirectory(display).get_active_window()


def test_root_children_in_server_order() -> None:
    display = build_display()
    display.screen.return_value.root.query_tree.return_value.children = [MagicMock(id=3), MagicMock(id=1)]
    assert XlibWindowDirectory(display).get_root_children() == [3, 1]


def test_tree_query_failure_is_fatal() -> None:
    display = build_display()
    display.screen.return_value.root.query_tree.side_effect = ConnectionClosedError("display")
    with pytest.raises(WindowTreeError):
        XlibWindowDirectory(display).get_root_children()


def test_class_and_desktop_lookups() -> None:
    windows = {0x10: MagicMock(id=0x10), 0x20: MagicMock(id=0x20)}
    windows[0x10].get_wm_class.return_value = ("xterm", "XTerm")
    windows[0x10].get_full_property.return_value = prop(2)
    windows[0x20].get_wm_class.return_value = None
    windows[0x20].get_full_property.return_value = None
    display = build_display(windows)
    display.screen.return_value.root.get_full_property.return_value = prop(1)
    directory = XlibWindowDirectory(display)

    assert directory.get_class(0x10) == "XTerm"
    assert directory.get_class(0x20) is None
    assert directory.get_desktop(0x10) == 2
    assert directory.get_desktop(0x20) is None
    assert directory.get_current_desktop() == 1
    windows[0x10].get_full_property.assert_called_with(ATOMS["_NET_WM_DESKTOP"], Xlib.Xatom.CARDINAL)


def test_close_sends_delete_window_protocol_message() -> None:
    windows: dict[int, MagicMock] = {}
    display = build_display(windows)
    XlibWindowDirectory(display).close_window(0x10)

    message = windows[0x10].send_event.call_args.args[0]
    assert message.window == 0x10
    assert message.client_type == ATOMS["WM_PROTOCOLS"]
    assert message.data == (32, [ATOMS["WM_DELETE_WINDOW"], Xlib.X.CurrentTime, 0, 0, 0])
    assert windows[0x10].send_event.call_args.kwargs == {"event_mask": Xlib.X.NoEventMask}
    display.sync.assert_called_once()


def test_activate_message_goes_to_root() -> None:
    display = build_display()
    root = display.screen.return_value.root
    XlibWindowDirectory(display).activate_window(0x10)

    message = root.send_event.call_args.args[0]
    assert message.window == 0x10
    assert message.client_type == ATOMS["_NET_ACTIVE_WINDOW"]
    assert message.data[1][0] == 1
    assert root.send_event.call_args.kwargs == {
        "event_mask": Xlib.X.StructureNotifyMask | Xlib.X.SubstructureRedirectMask
    }


def test_kill_hide_show_requests() -> None:
    windows: dict[int, MagicMock] = {}
    display = build_display(windows)
    directory = XlibWindowDirectory(display, check_requests=False)

    directory.kill_window(0x10)
    directory.hide_window(0x20)
    directory.show_window(0x30)

    display.kill_client.assert_called_once_with(0x10)
    windows[0x20].unmap.assert_called_once()
    windows[0x30].map.assert_called_once()
    display.sync.assert_not_called()


def test_async_error_surfaces_as_window_operation_error() -> None:
    display = build_display()
    directory = XlibWindowDirectory(display)
    handler = display.set_error_handler.call_args.args[0]
    display.sync.side_effect = lambda: handler("BadWindow", None)

    with pytest.raises(WindowOperationError, match="BadWindow") as excinfo:
        directory.hide_window(0x20)
    assert excinfo.value.window == 0x20

    display.sync.side_effect = None
    directory.show_window(0x20)


def test_synthesize_input_uses_xtest(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_input = MagicMock()
    monkeypatch.setattr(linux_controller.xtest, "fake_input", fake_input)
    display = build_display()

    XlibWindowDirectory(display).synthesize_input(0x10, InputEvent.KEY_PRESS, 300)

    fake_input.assert_called_once_with(display, Xlib.X.KeyPress, 300 & 0xFF, Xlib.X.CurrentTime, 0x10, 0, 0)
    display.flush.assert_called()


def test_synthesize_input_without_xtest_fails_per_window() -> None:
    display = build_display()
    display.has_extension.return_value = False
    with pytest.raises(WindowOperationError, match="XTEST"):
        XlibWindowDirectory(display).synthesize_input(0x10, InputEvent.BUTTON_PRESS, 1)


def test_close_flushes_and_disconnects_once() -> None:
    display = build_display()
    with XlibWindowDirectory(display) as directory:
        pass
    directory.close()

    display.flush.assert_called_once()
    display.close.assert_called_once()


def test_lost_connection_during_lookups_is_fatal() -> None:
    windows = {0x10: MagicMock(id=0x10)}
    windows[0x10].get_wm_class.side_effect = ConnectionClosedError("display")
    windows[0x10].get_full_property.side_effect = ConnectionClosedError("display")
    display = build_display(windows)
    directory = XlibWindowDirectory(display)

    with pytest.raises(DisplayError, match="Lost the display connection."):
        directory.get_class(0x10)
    with pytest.raises(DisplayError, match="Lost the display connection."):
        directory.get_desktop(0x10)

    display.flush.side_effect = ConnectionClosedError("display")
    directory.close()
    display.close.assert_not_called()
