"""Error taxonomy for radar runs; every error here aborts the whole run."""
from __future__ import annotations

from pathlib import Path


class RadarError(Exception):
    """Base class for failures that block report generation."""


class AdrNameError(RadarError, ValueError):
    """ADR filename suffix is not a base-10 non-negative integer."""

    def __init__(self, path: Path, suffix: str) -> None:
        super().__init__(f"ADR number must be a small integer: {path} (got {suffix!r})")
        self.path = path
        self.suffix = suffix


class AdrReadError(RadarError, OSError):
    """ADR file could not be read as text."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to read ADR {path}: {reason}")
        self.path = path


class UnknownActionError(RadarError, ValueError):
    def __init__(self, tag: str) -> None:
        super().__init__(f"Unknown action: {tag}")
        self.tag = tag


class SnapshotSchemaError(RadarError, ValueError):
    """Exported snapshot does not match the JSON schema."""


class ConfigError(RadarError, ValueError):
    """Radar configuration file is malformed."""


__all__ = [
    "RadarError",
    "AdrNameError",
    "AdrReadError",
    "UnknownActionError",
    "ConfigError",
    "SnapshotSchemaError",
]
