from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime

from .devices import effective_reading
from .models import DeviceRef, StoredMeasurement
from .temperature import Celsius, Fahrenheit


@dataclass(frozen=True)
class Measurement:
    """A stored reading as seen through its device's calibration."""

    device: DeviceRef
    date: datetime
    temperature: Celsius  # raw

    @classmethod
    def from_stored(cls, stored: StoredMeasurement, device: DeviceRef) -> Measurement:
        return cls(device=device, date=stored.date, temperature=stored.temperature)

    @property
    def temp_c(self) -> Celsius:
        return effective_reading(self.temperature, self.device)

    @property
    def temp_f(self) -> Fahrenheit:
        # adjust in Celsius first, then convert
        return self.temp_c.to_fahrenheit()

    @property
    def temp_raw_c(self) -> Celsius:
        return self.temperature
