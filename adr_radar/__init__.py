"""ADR technology radar: extract, replay and report radar statements."""
from __future__ import annotations

from .events import Action, Event, extract_events
from .loader import Adr, load_adrs
from .radar import Snapshot, Stack, TechCategory, aggregate, apply_event
from .report import render_markdown, save_json

__all__ = [
    "Action",
    "Event",
    "extract_events",
    "Adr",
    "load_adrs",
    "TechCategory",
    "Stack",
    "Snapshot",
    "aggregate",
    "apply_event",
    "render_markdown",
    "save_json",
]
