#!/usr/bin/env python3
"""Watch uploaded trailers against the yard from the command line.

Loads a CSV/Excel upload, polls the live feed and prints the merged view
after every cycle. Configuration comes from ``YARDWATCH_*`` environment
variables; the flags below override the most common ones.

Examples::

    python scripts/watch_yard.py trailers.xlsx --base-url https://fleet.example.com/api
    python scripts/watch_yard.py trailers.csv --once --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import signal
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from yardwatch import YardConfig, YardError, YardMonitor  # noqa: E402
from yardwatch.models import AssetRecord  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("upload", nargs="?", type=Path, help="CSV or Excel file with id,lastService,lat,lng columns")
    parser.add_argument("--base-url", help="Fleet backend base URL (overrides YARDWATCH_BASE_URL)")
    parser.add_argument("--interval", type=float, help="Poll interval in seconds")
    parser.add_argument("--radius", type=float, help="Yard radius in km")
    parser.add_argument("--include-unmatched", action="store_true", help="List live-only trailers too")
    parser.add_argument("--once", action="store_true", help="Run a single poll cycle and exit")
    parser.add_argument("--json", action="store_true", help="Print the merged view as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> YardConfig:
    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.interval is not None:
        overrides["poll_interval_ms"] = int(args.interval * 1000)
    if args.radius is not None:
        overrides["yard_radius_km"] = args.radius
    if args.include_unmatched:
        overrides["include_unmatched"] = True
    return YardConfig.from_env(**overrides)


def _print_view(view: list[AssetRecord], *, as_json: bool) -> None:
    if as_json:
        print(json.dumps([record.model_dump(mode="json") for record in view], indent=2))
        return
    if not view:
        print("No trailer data uploaded yet.")
        return
    for record in view:
        loc = record.location
        print(f"{record.id:<20} {record.status:<12} last service: {record.last_service_date:<12} ({loc.lat:.5f}, {loc.lng:.5f})")
    print()


async def _run(args: argparse.Namespace) -> int:
    config = _build_config(args)

    async with YardMonitor(config, on_alert=lambda asset_id: print(f"ALERT: {asset_id} is back in the yard")) as monitor:
        if args.upload is not None:
            monitor.load_file(args.upload)

        if args.once:
            await monitor.refresh()
            _print_view(monitor.merged_view(), as_json=args.json)
            return 0

        stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, stop.set)
            except NotImplementedError:
                pass

        monitor.start()
        while not stop.is_set():
            try:
                await asyncio.wait_for(stop.wait(), timeout=config.poll_interval)
            except TimeoutError:
                pass
            _print_view(monitor.merged_view(), as_json=args.json)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except YardError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
