#!/usr/bin/env python3
"""Run the MyAcuRite poller against a console registry.

Reads credentials from ``ACURITE_EMAIL`` / ``ACURITE_PASSWORD`` (plus the
optional ``ACURITE_*`` variables understood by ``AcuriteConfig.from_env``)
and prints every registry and channel write the poller performs.

Default behavior is a single poll cycle; ``--loop`` keeps polling with the
configured interval and backoff until interrupted.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyacurite import AcuriteConfig, AcuriteError, Channel, WeatherStationPoller  # noqa: E402


class ConsoleRegistry:
    """Registry + sink printing every call; handles are the keys themselves."""

    def upsert(self, key: str, display_name: str) -> str:
        print(f"[registry] upsert  {key} ({display_name})")
        return key

    def remove(self, handle: Any) -> None:
        print(f"[registry] remove  {handle}")

    def set_channel_value(self, handle: Any, channel: Channel, value: float | bool) -> None:
        if isinstance(value, float):
            print(f"[sink]     {handle:<24} {channel.value:<12} {value:.2f}")
        else:
            print(f"[sink]     {handle:<24} {channel.value:<12} {value}")

    def set_metadata(self, handle: Any, manufacturer: str, model: str, serial: str, display_name: str) -> None:
        print(f"[sink]     {handle:<24} metadata     {manufacturer} / {model} / {serial} / {display_name}")

    def set_battery(self, handle: Any, level: float, is_low: bool) -> None:
        print(f"[sink]     {handle:<24} battery      {level:.0f}{' (low)' if is_low else ''}")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Poll MyAcuRite and print registry updates.")
    parser.add_argument("--loop", action="store_true", help="Keep polling until interrupted")
    parser.add_argument("--interval", type=float, help="Override the refresh interval in seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args()


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, Any] = {}
    if args.interval is not None:
        overrides["refresh_interval_seconds"] = args.interval
    config = AcuriteConfig.from_env(**overrides)
    console = ConsoleRegistry()

    async with WeatherStationPoller(config, console, console) as poller:
        if not args.loop:
            try:
                config.validate()
                async with poller.client:
                    await poller.poll_once()
            except AcuriteError as exc:
                print(f"[poll] failed: {exc}", file=sys.stderr)
                return 2
            return 0

        try:
            await poller.start()
        except AcuriteError:
            return 2
        task = poller.scheduler.start()
        try:
            await task
        except asyncio.CancelledError:
            pass
    return 0


def main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
