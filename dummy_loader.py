#!/usr/bin/env python3
"""
Dummy measurement loader.

Posts sine-wave shaped temperature readings for a few simulated BLE sensors
to a running thermostore server, the same way a real sensor bridge would.

Usage:
    python dummy_loader.py                                          # defaults
    python dummy_loader.py --endpoint http://127.0.0.1:8000/api/measurements
    python dummy_loader.py --interval 5 -v
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import math
import time
from dataclasses import dataclass

import httpx

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass
class DummyDevice:
    address: str
    trough_c: float      # lowest point of the sine wave
    crest_c: float       # highest point of the sine wave
    period_s: float      # real-world length of one wave


DEFAULT_DEVICES = [
    DummyDevice("f4d55889b1d6", trough_c=16.667, crest_c=20.0, period_s=70.0),
    DummyDevice("d0f7083ca3b1", trough_c=24.88, crest_c=30.0, period_s=120.0),
]


def sine_value(dev: DummyDevice, elapsed_s: float) -> float:
    phase = (math.sin(2 * math.pi * elapsed_s / max(dev.period_s, 1.0)) + 1.0) / 2.0
    return dev.trough_c + (dev.crest_c - dev.trough_c) * phase


# ---------------------------------------------------------------------------
# Loader loop
# ---------------------------------------------------------------------------

async def run_device(
    client: httpx.AsyncClient,
    endpoint: str,
    dev: DummyDevice,
    interval_s: float,
    stop: asyncio.Event,
) -> None:
    log = logging.getLogger(f"loader.{dev.address}")
    start = time.monotonic()

    while not stop.is_set():
        value = sine_value(dev, time.monotonic() - start)
        try:
            resp = await client.post(endpoint, json={"address": dev.address, "temp_c": value})
            resp.raise_for_status()
            log.info("%s: %.3f", dev.address, value)
        except httpx.HTTPError as e:
            log.warning("Post failed: %s", e)

        try:
            await asyncio.wait_for(stop.wait(), timeout=interval_s)
        except asyncio.TimeoutError:
            pass


async def run(endpoint: str, devices: list[DummyDevice], interval_s: float, stagger_s: float) -> None:
    log = logging.getLogger("loader")
    log.info("Loading dummy data into %s for %d device(s)", endpoint, len(devices))

    stop = asyncio.Event()
    async with httpx.AsyncClient(timeout=10.0) as client:
        tasks = []
        for dev in devices:
            tasks.append(asyncio.create_task(run_device(client, endpoint, dev, interval_s, stop)))
            await asyncio.sleep(stagger_s)
        try:
            await asyncio.gather(*tasks)
        finally:
            stop.set()


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def main() -> None:
    p = argparse.ArgumentParser(description="Load dummy temperature measurements")

    p.add_argument("--endpoint", default="http://127.0.0.1:8000/api/measurements",
                   help="Measurement endpoint of the server")
    p.add_argument("--interval", type=float, default=2.0, help="Seconds between posts per device")
    p.add_argument("--stagger", type=float, default=1.0, help="Seconds between starting devices")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = p.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-5s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        asyncio.run(run(args.endpoint, DEFAULT_DEVICES, args.interval, args.stagger))
    except KeyboardInterrupt:
        logging.info("Shutting down")


if __name__ == "__main__":
    main()
