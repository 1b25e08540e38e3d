#!/usr/bin/env python3
"""Console intrusion alarm for an OMLOX Hub.

Lists the hub's fences and trackables, arms the requested fences, watches
the requested trackables and prints every intrusion transition and alarm
change until interrupted.

Configuration comes from ``OMLOX_*`` environment variables (see
``OmloxConfig.from_env``); command-line flags override them.

Examples::

    OMLOX_BASE_URL=https://hub.example.com/v2 python scripts/watch_fences.py --list
    python scripts/watch_fences.py --arm FENCE_ID --watch TRACKABLE_ID --interval 5
    python scripts/watch_fences.py --arm-all --watch-all
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyomlox import (  # noqa: E402
    AlarmEvent,
    AlarmStatus,
    IntrusionMonitor,
    IntrusionTransition,
    InvalidStateError,
    OmloxClient,
    OmloxConfig,
    OmloxError,
)
from pyomlox.monitor.events import MonitorEvent  # noqa: E402

_logger = logging.getLogger("watch_fences")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--base-url", help="OMLOX Hub API root (overrides OMLOX_BASE_URL)")
    parser.add_argument("--list", action="store_true", help="List fences and trackables, then exit")
    parser.add_argument("--arm", action="append", default=[], metavar="FENCE_ID", help="Fence to arm (repeatable)")
    parser.add_argument("--arm-all", action="store_true", help="Arm every fence on the hub")
    parser.add_argument(
        "--watch", action="append", default=[], metavar="TRACKABLE_ID", help="Trackable to watch (repeatable)"
    )
    parser.add_argument("--watch-all", action="store_true", help="Watch every trackable on the hub")
    parser.add_argument("--interval", type=float, help="Seconds between evaluation passes")
    parser.add_argument(
        "--no-spatial-query",
        action="store_true",
        help="Rely on the hub's fence event state instead of a spatial query",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _print_event(event: MonitorEvent) -> None:
    if isinstance(event, IntrusionTransition):
        fences = ", ".join(sorted(event.fence_ids)) or "-"
        print(f"[{event.observed_at:%H:%M:%S}] {event.trackable_id}: {event.kind.value} (fences: {fences})")
    elif isinstance(event, AlarmEvent):
        if event.status is AlarmStatus.ACTIVATED:
            print(f"[{event.observed_at:%H:%M:%S}] ALARM: {event.intrusion_count} trackable(s) inside armed fence(s)")
        else:
            print(f"[{event.observed_at:%H:%M:%S}] alarm cleared")


async def _list_resources(client: OmloxClient) -> None:
    fences = await client.get_fences()
    trackables = await client.get_trackables()
    print(f"Fences ({len(fences)}):")
    for fence in fences:
        region = fence.region.type if fence.region is not None else "?"
        print(f"  {fence.id}  {fence.display_name}  [{region}]")
    print(f"Trackables ({len(trackables)}):")
    for trackable in trackables:
        print(f"  {trackable.id}  {trackable.display_name}  [{trackable.type.value}]")


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.interval is not None:
        overrides["poll_interval"] = args.interval
    if args.no_spatial_query:
        overrides["use_spatial_query"] = False
    config = OmloxConfig.from_env(**overrides)

    async with OmloxClient(config) as client:
        if args.list:
            await _list_resources(client)
            return 0

        monitor = IntrusionMonitor(
            client,
            client,
            poll_interval=config.poll_interval,
            use_spatial_query=config.use_spatial_query,
        )
        fence_ids = [fence.id for fence in await client.get_fences()] if args.arm_all else args.arm
        trackable_ids = [t.id for t in await client.get_trackables()] if args.watch_all else args.watch
        for fence_id in fence_ids:
            monitor.arm_fence(fence_id)
        for trackable_id in trackable_ids:
            monitor.select_trackable(trackable_id)
        monitor.add_listener(_print_event)

        async with monitor:
            try:
                await monitor.start()
            except InvalidStateError as exc:
                print(f"error: {exc}", file=sys.stderr)
                return 2
            print(
                f"Watching {len(monitor.watched)} trackable(s), {len(monitor.armed)} armed fence(s); "
                "press Ctrl-C to stop"
            )
            await asyncio.Event().wait()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        return 0
    except OmloxError as exc:
        _logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
