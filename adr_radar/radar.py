"""Fold ADR events into the per-stack, per-category technology radar."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from adr_radar.events import Action, Event
from adr_radar.loader import Adr

LOGGER = logging.getLogger(__name__)

STATUSES = (Action.DEFAULT, Action.TRIAL, Action.RETIRE)


@dataclass
class TechCategory:
    default: Set[str] = field(default_factory=set)
    trial: Set[str] = field(default_factory=set)
    retire: Set[str] = field(default_factory=set)

    def bucket(self, action: Action) -> Optional[Set[str]]:
        if action is Action.DEFAULT:
            return self.default
        if action is Action.TRIAL:
            return self.trial
        if action is Action.RETIRE:
            return self.retire
        return None

    def discard(self, tech: str) -> None:
        self.default.discard(tech)
        self.trial.discard(tech)
        self.retire.discard(tech)

    def sorted_names(self, action: Action) -> List[str]:
        return sorted(self.bucket(action) or ())


class Stack(Dict[str, TechCategory]):
    """Categories of one stack keyed by name."""

    def category(self, name: str) -> TechCategory:
        if name not in self:
            self[name] = TechCategory()
        return self[name]


class Snapshot(Dict[str, Stack]):
    """Aggregated radar state keyed by stack name."""

    def stack(self, name: str) -> Stack:
        if name not in self:
            self[name] = Stack()
        return self[name]


def apply_event(snapshot: Snapshot, event: Event) -> None:
    """Apply a single event; the last event for a tech decides its status."""

    category = snapshot.stack(event.stack).category(event.category)
    category.discard(event.tech)
    bucket = category.bucket(event.action)
    # Celebrated retirements leave the tech off the radar entirely.
    if bucket is not None:
        bucket.add(event.tech)


def iter_events(adrs: Iterable[Adr]) -> Iterator[Tuple[int, Event]]:
    for adr in adrs:
        for event in adr.events:
            yield adr.id, event


def aggregate(adrs: Iterable[Adr]) -> Snapshot:
    """Replay events of ``adrs`` in the given order into a fresh snapshot."""

    snapshot = Snapshot()
    applied = 0
    for adr_id, event in iter_events(adrs):
        LOGGER.debug(
            "ADR %d: %s/%s %s -> %s",
            adr_id,
            event.stack,
            event.category,
            event.tech,
            event.action.value,
        )
        apply_event(snapshot, event)
        applied += 1
    LOGGER.info("Applied %d events across %d stacks", applied, len(snapshot))
    return snapshot


__all__ = [
    "STATUSES",
    "TechCategory",
    "Stack",
    "Snapshot",
    "apply_event",
    "iter_events",
    "aggregate",
]
