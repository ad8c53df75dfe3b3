#!/usr/bin/env python3
"""Print the technology radar aggregated from ADRs below a directory."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

from adr_radar.config import load_config
from adr_radar.errors import RadarError
from adr_radar.loader import load_adrs
from adr_radar.radar import aggregate
from adr_radar.report import render_markdown, save_json, write_report

LOGGER = logging.getLogger(__name__)


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Aggregate ADR radar statements into a markdown report")
    parser.add_argument("--root", type=Path, default=None, help="Directory scanned for adr-<n>.md / adr-<n>.org")
    parser.add_argument("--output", type=Path, default=None, help="Write the report here instead of stdout")
    parser.add_argument("--json", type=Path, default=None, help="Also write the snapshot as JSON")
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--verbose", action="store_true", help="Log every applied event")
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        config = load_config(args.config).merged(
            root=args.root,
            output=args.output,
            json=args.json,
            log_level="DEBUG" if args.verbose else None,
        )
    except RadarError as exc:
        raise SystemExit(f"adr-radar: {exc}") from exc

    logging.basicConfig(
        level=config.level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        adrs = load_adrs(config.root)
    except (RadarError, FileNotFoundError) as exc:
        LOGGER.error("Radar aborted: %s", exc)
        raise SystemExit(f"adr-radar: {exc}") from exc

    snapshot = aggregate(adrs)
    try:
        if config.output is not None:
            write_report(snapshot, config.output)
        else:
            print(render_markdown(snapshot))
        if config.json is not None:
            save_json(snapshot, config.json)
    except (RadarError, OSError) as exc:
        LOGGER.error("Radar output failed: %s", exc)
        raise SystemExit(f"adr-radar: {exc}") from exc
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
