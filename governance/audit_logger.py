"""Structured JSONL audit trail of dispatched window actions."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from core.event_bus import DISPATCH_COMPLETED, EventBus


class AuditLogger:
    """Appends one JSON line per dispatch outcome."""

    def __init__(self, log_path: Path) -> None:
        self.log_path = log_path
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.logger = logging.getLogger("xdo.audit")

    def attach(self, event_bus: EventBus) -> None:
        """Record every dispatch emitted on ``event_bus``."""
        event_bus.subscribe_all(lambda name, payload: self.log(payload, allowed=name == DISPATCH_COMPLETED))

    def log(self, payload: dict[str, Any], allowed: bool) -> None:
        """Append one JSONL audit event."""
        event = {
            "timestamp": datetime.now(UTC).isoformat(),
            "action": payload.get("action"),
            "window": f"0x{int(payload.get('window', 0)):08x}",
            "code": payload.get("code"),
            "outcome": "ok" if allowed else "failed",
            "reason": payload.get("error", ""),
        }
        line = json.dumps(event, ensure_ascii=True)
        try:
            with self.log_path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError as exc:
            self.logger.warning("Can't write audit log %s: %s", self.log_path, exc)
            return
        self.logger.debug(line)
