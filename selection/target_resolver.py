"""Target resolution: which windows an action applies to.

Targets come either from explicit window ID tokens or, when none are given,
from the display: the active window alone when no criteria are set,
otherwise every child of the root window that passes all active criteria
relative to the active window (identity, class) and the current desktop.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from os_controller.base_controller import WindowDirectory, WindowId
from selection.criteria import Criteria, Criterion
from selection.parsing import parse_window_id

if TYPE_CHECKING:
    from executor.action_router import Action

logger = logging.getLogger("xdo.resolver")


class SelectionMode(enum.Enum):
    EXPLICIT = "explicit"
    ACTIVE = "active"
    FILTERED = "filtered"


@dataclass
class Resolution:
    """Ordered targets plus the explicit tokens that were rejected."""

    mode: SelectionMode
    targets: list[WindowId] = field(default_factory=list)
    invalid_tokens: list[str] = field(default_factory=list)


@dataclass
class _Reference:
    window: WindowId | None = None
    window_class: str = ""
    desktop: int | None = None


class TargetResolver:
    """Resolves targets against one Window Directory session."""

    def __init__(self, directory: WindowDirectory) -> None:
        self.directory = directory

    def resolve(
        self,
        action: Action,
        criteria: Criteria,
        explicit_ids: Sequence[str] = (),
    ) -> Resolution:
        """Return the ordered windows ``action`` should be dispatched to."""
        if explicit_ids:
            return self._parse_explicit(explicit_ids)
        if criteria.all_ignored:
            active = self.directory.get_active_window()
            logger.debug("%s: targeting active window 0x%08x", action, active)
            return Resolution(mode=SelectionMode.ACTIVE, targets=[active])
        return self._discover(action, criteria)

    @staticmethod
    def _parse_explicit(tokens: Sequence[str]) -> Resolution:
        resolution = Resolution(mode=SelectionMode.EXPLICIT)
        for token in tokens:
            window = parse_window_id(token)
            if window is None:
                logger.debug("Skipping invalid window ID %r", token)
                resolution.invalid_tokens.append(token)
            else:
                resolution.targets.append(window)
        return resolution

    def _discover(self, action: Action, criteria: Criteria) -> Resolution:
        reference = _Reference()
        if criteria.needs_reference:
            reference.window = self.directory.get_active_window()
        if criteria.window_class is not Criterion.IGNORE:
            reference.window_class = self.directory.get_class(reference.window) or ""
        if criteria.desktop is not Criterion.IGNORE:
            reference.desktop = self.directory.get_current_desktop()
            if reference.desktop is None:
                logger.warning("Current desktop unknown; no window can match the desktop criterion.")

        candidates = self.directory.get_root_children()
        targets = [w for w in candidates if self._matches(w, criteria, reference)]
        logger.debug(
            "%s: %d of %d root children match %s",
            action,
            len(targets),
            len(candidates),
            criteria,
        )
        return Resolution(mode=SelectionMode.FILTERED, targets=targets)

    def _matches(self, window: WindowId, criteria: Criteria, reference: _Reference) -> bool:
        # Class and desktop are only fetched for windows that passed the earlier axes.
        if criteria.identity is Criterion.DIFFERENT and window == reference.window:
            return False

        if criteria.window_class is not Criterion.IGNORE:
            window_class = self.directory.get_class(window)
            if window_class is None:
                return False
            same = window_class == reference.window_class
            if same != (criteria.window_class is Criterion.SAME):
                return False

        if criteria.desktop is not Criterion.IGNORE:
            if reference.desktop is None:
                return False
            desktop = self.directory.get_desktop(window)
            if desktop is None:
                return False
            same = desktop == reference.desktop
            if same != (criteria.desktop is Criterion.SAME):
                return False

        return True
