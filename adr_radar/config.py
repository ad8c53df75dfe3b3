"""Run configuration loaded from an optional YAML file."""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # type: ignore[import-untyped]

from adr_radar.errors import ConfigError

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class RadarConfig:
    """Settings for a radar run; discovery rules are fixed in the loader."""

    root: Path = Path(".")
    output: Optional[Path] = None
    json: Optional[Path] = None
    log_level: str = "INFO"

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level)

    def merged(self, **overrides: Any) -> "RadarConfig":
        """Return a copy with every non-``None`` override applied."""

        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _normalise(payload: Dict[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(RadarConfig)}
    unknown = sorted(set(payload) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {unknown}")

    values: Dict[str, Any] = {}
    for key in ("root", "output", "json"):
        if payload.get(key) is not None:
            values[key] = Path(str(payload[key]))
    if "log_level" in payload:
        level = str(payload["log_level"]).upper()
        if level not in _LEVELS:
            raise ConfigError(f"Invalid log_level: {payload['log_level']!r}")
        values["log_level"] = level
    return values


def load_config(path: Optional[Path] = None) -> RadarConfig:
    """Load the YAML file at ``path``; without one, return the defaults.

    No file is looked up implicitly. A requested file that does not exist is
    an error.
    """

    if path is None:
        return RadarConfig()
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Configuration must be a mapping: {path}")
    return RadarConfig(**_normalise(payload))


__all__ = ["RadarConfig", "load_config"]
