"""Validated runtime configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class DisplayConfig(BaseModel):
    """Display connection settings."""

    name: str | None = None
    check_requests: bool = True


class LoggingConfig(BaseModel):
    """Diagnostic logging settings."""

    level: str = "WARNING"
    format: str = "%(name)s: %(levelname)s: %(message)s"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown logging level: {value}")
        return level


class AuditConfig(BaseModel):
    """JSONL audit trail of dispatched actions."""

    enabled: bool = False
    log_path: str = "~/.local/state/xdo/audit.jsonl"


class RuntimeConfig(BaseModel):
    """Effective configuration for one invocation."""

    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    audit: AuditConfig = Field(default_factory=AuditConfig)
