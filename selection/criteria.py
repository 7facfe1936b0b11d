"""Tri-state selection criteria over window identity, class and desktop."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Criterion(enum.Enum):
    """How one axis takes part in filtering."""

    IGNORE = "ignore"
    SAME = "same"
    DIFFERENT = "different"


class Axis(enum.Enum):
    IDENTITY = "identity"
    CLASS = "class"
    DESKTOP = "desktop"


@dataclass
class Criteria:
    """Per-axis policies for one invocation.

    Setting an axis twice keeps the last value; conflicting flags such as
    ``-c -C`` are not rejected.
    """

    identity: Criterion = Criterion.IGNORE
    window_class: Criterion = Criterion.IGNORE
    desktop: Criterion = Criterion.IGNORE

    def set(self, axis: Axis, value: Criterion) -> None:
        if axis is Axis.IDENTITY and value is Criterion.SAME:
            raise ValueError("identity axis only supports DIFFERENT")
        if axis is Axis.IDENTITY:
            self.identity = value
        elif axis is Axis.CLASS:
            self.window_class = value
        else:
            self.desktop = value

    @property
    def all_ignored(self) -> bool:
        return (
            self.identity is Criterion.IGNORE
            and self.window_class is Criterion.IGNORE
            and self.desktop is Criterion.IGNORE
        )

    @property
    def needs_reference(self) -> bool:
        """True when identity or class comparisons need the active window."""
        return self.identity is not Criterion.IGNORE or self.window_class is not Criterion.IGNORE


# Command-line flag -> (axis, policy)
FLAGS: dict[str, tuple[Axis, Criterion]] = {
    "-r": (Axis.IDENTITY, Criterion.DIFFERENT),
    "-c": (Axis.CLASS, Criterion.SAME),
    "-C": (Axis.CLASS, Criterion.DIFFERENT),
    "-d": (Axis.DESKTOP, Criterion.SAME),
    "-D": (Axis.DESKTOP, Criterion.DIFFERENT),
}


def criteria_from_flags(flags: list[str]) -> Criteria:
    """Build criteria from flags in command-line order; later flags win."""
    criteria = Criteria()
    for flag in flags:
        if flag not in FLAGS:
            raise ValueError(f"unknown criteria flag: {flag}")
        axis, value = FLAGS[flag]
        criteria.set(axis, value)
    return criteria
