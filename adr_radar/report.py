"""Render the aggregated radar as markdown tables and JSON."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
from jsonschema import Draft7Validator

from adr_radar.errors import SnapshotSchemaError
from adr_radar.radar import STATUSES, Snapshot, Stack

LOGGER = logging.getLogger(__name__)

COLUMNS = ["Tech", "Default", "Trial", "Retire"]
SEPARATOR = ", "

_NAME_LIST = {"type": "array", "items": {"type": "string"}, "uniqueItems": True}

SNAPSHOT_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "ADR tech radar snapshot",
    "type": "object",
    "additionalProperties": {
        "type": "object",
        "additionalProperties": {
            "type": "object",
            "properties": {
                "default": _NAME_LIST,
                "trial": _NAME_LIST,
                "retire": _NAME_LIST,
            },
            "required": ["default", "trial", "retire"],
            "additionalProperties": False,
        },
    },
}


def stack_frame(stack: Stack) -> pd.DataFrame:
    rows: List[List[str]] = []
    for name in sorted(stack):
        category = stack[name]
        rows.append([name] + [SEPARATOR.join(category.sorted_names(a)) for a in STATUSES])
    return pd.DataFrame(rows, columns=COLUMNS)


def render_stack(stack: Stack) -> str:
    # Tech names that look numeric must stay verbatim.
    return stack_frame(stack).to_markdown(index=False, disable_numparse=True)


def render_markdown(snapshot: Snapshot) -> str:
    """One ``## <stack>`` section with a table per stack, stacks sorted."""

    sections: List[str] = []
    for name in sorted(snapshot):
        sections.append(f"## {name}\n\n{render_stack(snapshot[name])}\n\n")
    return "".join(sections)


def snapshot_to_dict(snapshot: Snapshot) -> Dict[str, Dict[str, Dict[str, List[str]]]]:
    return {
        stack_name: {
            category_name: {
                action.value: category.sorted_names(action) for action in STATUSES
            }
            for category_name, category in sorted(snapshot[stack_name].items())
        }
        for stack_name in sorted(snapshot)
    }


def validate_payload(payload: Dict[str, Any]) -> List[str]:
    validator = Draft7Validator(SNAPSHOT_SCHEMA)
    return [error.message for error in validator.iter_errors(payload)]


def save_json(snapshot: Snapshot, path: Path) -> Path:
    payload = snapshot_to_dict(snapshot)
    errors = validate_payload(payload)
    if errors:
        raise SnapshotSchemaError(f"Snapshot does not match schema: {'; '.join(errors)}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    LOGGER.info("Wrote radar snapshot JSON to %s", path)
    return path


def write_report(snapshot: Snapshot, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_markdown(snapshot), encoding="utf-8")
    LOGGER.info("Wrote radar report to %s", path)
    return path


__all__ = [
    "COLUMNS",
    "SNAPSHOT_SCHEMA",
    "stack_frame",
    "render_stack",
    "render_markdown",
    "snapshot_to_dict",
    "validate_payload",
    "save_json",
    "write_report",
]
