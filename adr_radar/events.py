"""Extract technology radar events from free-form ADR text.

An ADR line registers as an event when it reads
``<stack> <category> <action>: <tech>`` with ``action`` one of ``default``,
``trial`` or ``retire``. Everything else in the document is prose and ignored.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from adr_radar.errors import UnknownActionError


class Action(Enum):
    DEFAULT = "default"
    TRIAL = "trial"
    RETIRE = "retire"
    CELEBRATE_RETIREMENT = "celebrate"

    @classmethod
    def from_tag(cls, tag: str) -> "Action":
        try:
            return cls(tag)
        except ValueError:
            raise UnknownActionError(tag) from None


@dataclass(frozen=True)
class Event:
    action: Action
    tech: str
    category: str
    stack: str


# Both leading groups are greedy and ``.`` stops at newlines: the category is
# the last word before the action keyword, the stack is the rest of the line
# in front of it. ``celebrate`` is deliberately absent from the alternation.
EVENT_PATTERN = re.compile(
    r"(?P<stack>.*) (?P<category>.*) (?P<action>default|trial|retire): (?P<tech>.*)"
)


def extract_events(text: str) -> Iterator[Event]:
    """Yield events in match order; never raises for unmatched text."""

    for match in EVENT_PATTERN.finditer(text):
        yield Event(
            action=Action.from_tag(match.group("action")),
            tech=match.group("tech"),
            category=match.group("category"),
            stack=match.group("stack"),
        )


__all__ = ["Action", "Event", "EVENT_PATTERN", "extract_events"]
