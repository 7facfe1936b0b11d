"""Configuration loading and runtime path bootstrapping."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from core.errors import ConfigError
from core.runtime_config import RuntimeConfig


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError("Can't read config file %s: %s", path, exc) from exc
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping: %s", path)
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def config_sources(root: Path, environ: dict[str, str] | None = None) -> list[Path]:
    """Return config files in increasing order of precedence."""
    env = os.environ if environ is None else environ
    xdg_home = env.get("XDG_CONFIG_HOME") or str(Path("~/.config").expanduser())
    sources = [
        root / "config" / "default.yaml",
        Path(xdg_home) / "xdo" / "config.yaml",
    ]
    explicit = env.get("XDO_CONFIG")
    if explicit:
        sources.append(Path(explicit).expanduser())
    return sources


def load_effective_config(root: Path, environ: dict[str, str] | None = None) -> RuntimeConfig:
    """Load, merge and validate all configuration files."""
    merged: dict[str, Any] = {}
    for path in config_sources(root, environ):
        merged = merge_dicts(merged, load_yaml(path))
    try:
        return RuntimeConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError("Invalid configuration: %s", exc) from exc


def ensure_runtime_dirs(root: Path, config: RuntimeConfig) -> dict[str, Path]:
    """Ensure the audit log directory exists and return resolved paths."""
    audit_log_path = (root / Path(config.audit.log_path).expanduser()).resolve()
    if config.audit.enabled:
        audit_log_path.parent.mkdir(parents=True, exist_ok=True)
    return {"audit_log_path": audit_log_path}
