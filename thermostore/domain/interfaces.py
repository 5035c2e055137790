from __future__ import annotations
from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from .models import StoredMeasurement
from .temperature import Celsius


@runtime_checkable
class MeasurementStore(Protocol):
    async def init(self) -> None:
        ...

    async def write(
        self, address: str, temperature: Celsius, date: Optional[datetime] = None
    ) -> StoredMeasurement:
        ...

    async def read_recent(self, address: str, limit: int) -> list[StoredMeasurement]:
        ...
