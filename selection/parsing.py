"""Parsing of window ID and event code tokens with C integer semantics."""

from __future__ import annotations

import re

_LONG_MIN = -(2**63)
_LONG_MAX = 2**63 - 1
_WINDOW_MASK = 0xFFFFFFFF

_STRTOL_RE = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_ATOI_RE = re.compile(r"\s*([+-]?[0-9]+)")


def parse_window_id(token: str) -> int | None:
    """Parse a window ID like ``strtol(token, &end, 0)`` with a full match.

    Returns None when the token is empty, has trailing characters or does
    not fit a signed 64-bit integer.
    """
    match = _STRTOL_RE.fullmatch(token)
    if match is None:
        return None
    sign, digits = match.groups()
    if digits[:2] in ("0x", "0X"):
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    if sign == "-":
        value = -value
    if not _LONG_MIN <= value <= _LONG_MAX:
        return None
    return value & _WINDOW_MASK


def parse_event_code(token: str | None) -> int:
    """Parse an event code like ``atoi``: leading digits only, otherwise 0."""
    if not token:
        return 0
    match = _ATOI_RE.match(token)
    if match is None:
        return 0
    return int(match.group(1))
