from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from .models import Device, DeviceRef, KnownDevice, UnknownDevice
from .temperature import Celsius

logger = logging.getLogger(__name__)

DEFAULT_MEASUREMENT_COUNT = 10
MAX_MEASUREMENT_COUNT = 100


def resolve_device(address: str, devices: Mapping[str, Device]) -> DeviceRef:
    device = devices.get(address)
    if device is None:
        return UnknownDevice(address)
    return KnownDevice(device)


def adjustment(ref: DeviceRef) -> Celsius:
    """Calibration offset for a device; unknown devices are not adjusted."""
    if isinstance(ref, KnownDevice):
        return ref.device.adjustment
    return Celsius(0.0)


def effective_reading(raw: Celsius, ref: DeviceRef) -> Celsius:
    return raw + adjustment(ref)


def clamp_count(count: Optional[int]) -> int:
    """Bound a requested measurement count to [0, MAX_MEASUREMENT_COUNT].

    `None` means "not specified" and gives DEFAULT_MEASUREMENT_COUNT.
    """
    if count is None:
        return DEFAULT_MEASUREMENT_COUNT
    return max(0, min(int(count), MAX_MEASUREMENT_COUNT))


def load_devices(path: Optional[str]) -> Mapping[str, Device]:
    """
    Load the known-device table from a TOML file of [[sensors]] tables:

        [[sensors]]
        address = "f4d55889b1d6"
        name = "Living room"
        description = "Shelf by the window"
        adjustment = -0.5

    Returns a read-only mapping keyed by address. A missing or invalid file
    is logged and gives an empty table.
    """
    devices: dict[str, Device] = {}
    if not path:
        return MappingProxyType(devices)

    try:
        data = tomllib.loads(Path(path).read_text())
        for s in data.get("sensors", []):
            address = str(s["address"])
            devices[address] = Device(
                address=address,
                name=s.get("name"),
                description=s.get("description"),
                adjustment=Celsius(float(s.get("adjustment", 0.0))),
            )
    except (OSError, tomllib.TOMLDecodeError, KeyError, TypeError, ValueError) as e:
        logger.warning("Could not load sensor configuration from %s: %s", path, e)
        return MappingProxyType({})

    logger.info("Loaded %d known device(s) from %s", len(devices), path)
    return MappingProxyType(devices)
