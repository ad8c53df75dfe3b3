"""Discover ADR documents under a root directory and parse their events."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from adr_radar.errors import AdrNameError, AdrReadError
from adr_radar.events import Event, extract_events

LOGGER = logging.getLogger(__name__)

ADR_EXTENSIONS = ("md", "org")
ADR_NAME_PREFIX = "adr-"

_ADR_NUMBER = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class Adr:
    id: int
    path: Path
    events: Tuple[Event, ...]


def iter_files(root: Path) -> Iterator[Path]:
    """Yield every non-directory entry below ``root`` in a stable order.

    Symlinked directories are followed. A directory that cannot be listed
    raises ``AdrReadError``; dangling links are yielded so reading them fails.
    """

    if not root.is_dir():
        raise FileNotFoundError(f"ADR root directory not found: {root}")
    yield from _walk(root)


def _walk(directory: Path) -> Iterator[Path]:
    try:
        with os.scandir(directory) as entries:
            ordered = sorted(entries, key=lambda entry: entry.name)
    except OSError as exc:
        raise AdrReadError(directory, str(exc)) from exc
    for entry in ordered:
        path = directory / entry.name
        if entry.is_dir():
            yield from _walk(path)
        else:
            yield path


def adr_suffix(path: Path) -> Optional[str]:
    """Return the text after ``adr-`` for ADR candidates, ``None`` otherwise."""

    if path.suffix[1:] not in ADR_EXTENSIONS:
        return None
    if not path.stem.startswith(ADR_NAME_PREFIX):
        return None
    return path.stem[len(ADR_NAME_PREFIX):]


def parse_adr_id(path: Path, suffix: str) -> int:
    if not _ADR_NUMBER.fullmatch(suffix):
        raise AdrNameError(path, suffix)
    return int(suffix)


def load_adr(path: Path, adr_id: int) -> Adr:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise AdrReadError(path, str(exc)) from exc
    events = tuple(extract_events(text))
    LOGGER.debug("ADR %d (%s): %d events", adr_id, path, len(events))
    return Adr(id=adr_id, path=path, events=events)


def load_adrs(root: Path) -> List[Adr]:
    """Load every ADR below ``root`` sorted by id.

    Malformed ADR numbers and unreadable files raise immediately; no partial
    result is returned. Duplicate ids keep their discovery order.
    """

    adrs: List[Adr] = []
    for path in iter_files(root):
        suffix = adr_suffix(path)
        if suffix is None:
            continue
        adrs.append(load_adr(path, parse_adr_id(path, suffix)))

    adrs.sort(key=lambda adr: adr.id)
    LOGGER.info("Loaded %d ADRs from %s", len(adrs), root)
    return adrs


__all__ = [
    "ADR_EXTENSIONS",
    "ADR_NAME_PREFIX",
    "Adr",
    "iter_files",
    "adr_suffix",
    "parse_adr_id",
    "load_adr",
    "load_adrs",
]
