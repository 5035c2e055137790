from __future__ import annotations
import logging
from datetime import datetime
from typing import Mapping, Optional

from ..domain.devices import clamp_count, resolve_device
from ..domain.interfaces import MeasurementStore
from ..domain.measurement import Measurement
from ..domain.models import Device, DeviceRef
from ..domain.temperature import Celsius

logger = logging.getLogger(__name__)


class MeasurementService:
    """
    Device and measurement operations used by the HTTP layer.

    Only raw readings are persisted; each device's adjustment is applied
    when measurements are handed back.
    """

    def __init__(self, store: MeasurementStore, devices: Mapping[str, Device]) -> None:
        self._store = store
        self._devices = devices

    def resolve_device(self, address: str) -> DeviceRef:
        return resolve_device(address, self._devices)

    async def current_measurement(self, device: DeviceRef) -> Optional[Measurement]:
        rows = await self._store.read_recent(device.address, 1)
        if not rows:
            return None
        return Measurement.from_stored(rows[0], device)

    async def recent_measurements(
        self, device: DeviceRef, count: Optional[int] = None
    ) -> list[Measurement]:
        limit = clamp_count(count)
        rows = await self._store.read_recent(device.address, limit)
        return [Measurement.from_stored(r, device) for r in rows]

    async def record_measurement(
        self, address: str, temp_c: Celsius, date: Optional[datetime] = None
    ) -> Measurement:
        stored = await self._store.write(address, temp_c, date)
        device = self.resolve_device(address)
        logger.info("Recorded %s raw=%.3f at %s", address, float(temp_c), stored.date.isoformat())
        return Measurement.from_stored(stored, device)
