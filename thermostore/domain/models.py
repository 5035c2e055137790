from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union

from .temperature import Celsius


@dataclass(frozen=True)
class Device:
    address: str
    name: Optional[str] = None
    description: Optional[str] = None
    adjustment: Celsius = field(default_factory=lambda: Celsius(0.0))


@dataclass(frozen=True)
class KnownDevice:
    device: Device

    @property
    def address(self) -> str:
        return self.device.address

    @property
    def name(self) -> Optional[str]:
        return self.device.name

    @property
    def description(self) -> Optional[str]:
        return self.device.description


@dataclass(frozen=True)
class UnknownDevice:
    address: str

    @property
    def name(self) -> Optional[str]:
        return None

    @property
    def description(self) -> Optional[str]:
        return None


DeviceRef = Union[KnownDevice, UnknownDevice]


@dataclass(frozen=True)
class StoredMeasurement:
    address: str
    date: datetime  # UTC, whole seconds
    temperature: Celsius  # raw, unadjusted
