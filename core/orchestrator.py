"""Top-level wiring of one xdo invocation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from core.event_bus import EventBus
from core.policy_runtime import ensure_runtime_dirs, load_effective_config
from core.runtime_config import RuntimeConfig
from executor.action_router import ActionDispatcher
from governance.audit_logger import AuditLogger
from os_controller.base_controller import WindowDirectory
from os_controller.linux_controller import XlibWindowDirectory
from selection.target_resolver import TargetResolver

logger = logging.getLogger("xdo.orchestrator")


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: RuntimeConfig
    directory: WindowDirectory
    resolver: TargetResolver
    dispatcher: ActionDispatcher
    event_bus: EventBus
    audit: AuditLogger | None = None


class Orchestrator:
    """Creates and wires runtime components for CLI use."""

    def __init__(self, root: Path | None = None, config: RuntimeConfig | None = None) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()
        self._config = config

    def load_config(self) -> RuntimeConfig:
        if self._config is None:
            self._config = load_effective_config(self.root)
        return self._config

    def build(self, directory: WindowDirectory | None = None) -> RuntimeBundle:
        """Connect (unless ``directory`` is given) and wire resolver and dispatcher."""
        config = self.load_config()
        if directory is None:
            directory = XlibWindowDirectory.open(
                config.display.name,
                check_requests=config.display.check_requests,
            )

        event_bus = EventBus()
        audit = None
        if config.audit.enabled:
            paths = ensure_runtime_dirs(self.root, config)
            audit = AuditLogger(paths["audit_log_path"])
            audit.attach(event_bus)
            logger.debug("Auditing dispatches to %s", paths["audit_log_path"])

        return RuntimeBundle(
            config=config,
            directory=directory,
            resolver=TargetResolver(directory),
            dispatcher=ActionDispatcher(directory, event_bus=event_bus),
            event_bus=event_bus,
            audit=audit,
        )
