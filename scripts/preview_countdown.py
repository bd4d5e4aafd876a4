#!/usr/bin/env python3
"""Run a countdown widget in the terminal without a playout host.

Prints one line per published frame. Optionally pushes template data
(JSON or ``<templateData>`` XML) before playing, the way a host would.

Examples::

    python scripts/preview_countdown.py --duration 0:10
    python scripts/preview_countdown.py --data '{"f0": "5", "f1": "false"}'
    CGCOUNTDOWN_SHOW_HOURS=1 python scripts/preview_countdown.py -v
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pycgcountdown import CountdownConfig, CountdownFrame, CountdownWidget  # noqa: E402


def _print_frame(frame: CountdownFrame) -> None:
    state = "shown " if frame.visible else "hidden"
    print(f"[{state}] {frame.text}", flush=True)


async def run() -> None:
    parser = argparse.ArgumentParser(description="Preview a host-driven countdown in the terminal")
    parser.add_argument("--duration", help="Default duration spec (e.g. 90, 1:30, 01:02:03)")
    parser.add_argument("--data", help="Template data to push with update() before play()")
    parser.add_argument("--interval-ms", type=int, help="Tick interval in milliseconds")
    parser.add_argument("--linger", type=float, default=1.5, help="Seconds to keep running after completion")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, object] = {}
    if args.duration:
        overrides["default_duration"] = args.duration
    if args.interval_ms:
        overrides["interval_ms"] = args.interval_ms
    config = CountdownConfig.from_env(**overrides)

    done = asyncio.Event()

    async with CountdownWidget(config) as widget:
        widget.subscribe(_print_frame)
        widget.add_complete_listener(done.set)
        if args.data:
            widget.update(args.data)
            widget.play()
        else:
            widget.start_preview()
        await done.wait()
        await asyncio.sleep(args.linger)


def main() -> None:
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        print("\nDone.")


if __name__ == "__main__":
    main()
