"""Typer command handlers."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import typer

from core.orchestrator import Orchestrator, RuntimeBundle
from core.runtime_config import LoggingConfig
from executor.action_router import Action, DispatchReport
from selection.criteria import criteria_from_flags
from selection.parsing import parse_event_code

logger = logging.getLogger("xdo.cli")


def configure_logging(cfg: LoggingConfig) -> None:
    """Send diagnostics to stderr at the configured level."""
    logging.basicConfig(level=cfg.level, format=cfg.format, stream=sys.stderr)


def _runtime(orchestrator: Orchestrator) -> RuntimeBundle:
    return orchestrator.build()


def run_action(
    action_name: str | None,
    flags: Sequence[str],
    event_code: str | None,
    window_tokens: Sequence[str],
    root: Path | None = None,
) -> DispatchReport:
    """Resolve targets for one action and dispatch it to each of them.

    Raises ``FatalError`` for conditions that abort the run. Invalid window
    tokens are reported on stderr and skipped.
    """
    action = Action.from_name(action_name, parse_event_code(event_code))
    criteria = criteria_from_flags(list(flags))

    orchestrator = Orchestrator(root=root)
    configure_logging(orchestrator.load_config().logging)
    bundle = _runtime(orchestrator)

    with bundle.directory:
        resolution = bundle.resolver.resolve(action, criteria, list(window_tokens))
        for token in resolution.invalid_tokens:
            typer.echo(f"Invalid window ID: '{token}'.", err=True)
        report = bundle.dispatcher.dispatch_all(action, resolution.targets)

    logger.debug(
        "%s via %s selection: %d target(s), %d failed",
        action,
        resolution.mode.value,
        len(report.outcomes),
        report.failed,
    )
    return report
