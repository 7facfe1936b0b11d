"""Criteria flags and token parsing."""

from __future__ import annotations

import pytest

from selection.criteria import Axis, Criteria, Criterion, criteria_from_flags
from selection.parsing import parse_event_code, parse_window_id
from ui.cli.cli import split_options


def test_criteria_default_to_ignore() -> None:
    criteria = Criteria()
    assert criteria.all_ignored
    assert not criteria.needs_reference


def test_flags_map_to_axes() -> None:
    criteria = criteria_from_flags(["-r", "-c", "-D"])
    assert criteria.identity is Criterion.DIFFERENT
    assert criteria.window_class is Criterion.SAME
    assert criteria.desktop is Criterion.DIFFERENT
    assert criteria.needs_reference


def test_desktop_only_does_not_need_reference() -> None:
    criteria = criteria_from_flags(["-d"])
    assert not criteria.all_ignored
    assert not criteria.needs_reference


def test_last_conflicting_flag_wins() -> None:
    assert criteria_from_flags(["-c", "-C"]).window_class is Criterion.DIFFERENT
    assert criteria_from_flags(["-C", "-c"]).window_class is Criterion.SAME
    assert criteria_from_flags(["-D", "-d"]).desktop is Criterion.SAME


def test_identity_cannot_be_same() -> None:
    with pytest.raises(ValueError):
        Criteria().set(Axis.IDENTITY, Criterion.SAME)


def test_unknown_flag_rejected() -> None:
    with pytest.raises(ValueError):
        criteria_from_flags(["-x"])


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("20", 20),
        ("0x10", 0x10),
        ("0X1aF", 0x1AF),
        ("010", 8),
        ("0", 0),
        ("  42", 42),
        ("+5", 5),
        ("-1", 0xFFFFFFFF),
        ("0x1c00003", 0x1C00003),
    ],
)
def test_parse_window_id_accepts_c_integers(token: str, expected: int) -> None:
    assert parse_window_id(token) == expected


@pytest.mark.parametrize("token", ["", "abc", "12abc", "0x", "09", "1.5", "42 ", "0x" + "f" * 17])
def test_parse_window_id_rejects_partial_or_out_of_range(token: str) -> None:
    assert parse_window_id(token) is None


@pytest.mark.parametrize(
    ("token", "expected"),
    [("42", 42), ("38abc", 38), ("abc", 0), ("", 0), (None, 0), (" -3", -3)],
)
def test_parse_event_code_follows_atoi(token: str | None, expected: int) -> None:
    assert parse_event_code(token) == expected


def test_split_options_keeps_repeats_and_expands_clusters() -> None:
    normalized, flags, warnings = split_options(["-C", "-cC", "-d", "-k7", "0x10", "--", "-r"])

    assert flags == ["-C", "-c", "-C", "-d"]
    assert normalized == ["-C", "-c", "-C", "-d", "-k", "7", "0x10", "--", "-r"]
    assert warnings == []


def test_split_options_warns_on_unknown_and_missing_value() -> None:
    normalized, flags, warnings = split_options(["-h", "--long", "-rq", "-k"])

    assert flags == ["-r"]
    assert normalized == ["-r"]
    assert warnings == [
        "Unknown option: '-h'.",
        "Unknown option: '--long'.",
        "Unknown option: '-q'.",
        "Option requires an argument: '-k'.",
    ]
