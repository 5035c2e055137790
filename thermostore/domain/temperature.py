"""Unit-tagged temperature values.

Celsius and Fahrenheit are kept as separate types so a reading in one unit
is never silently used where the other is expected. Arithmetic is only
defined within a unit; converting is always explicit.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Celsius:
    value: float

    def __float__(self) -> float:
        return float(self.value)

    def __add__(self, other: object) -> Celsius:
        if not isinstance(other, Celsius):
            return NotImplemented
        return Celsius(self.value + other.value)

    def __sub__(self, other: object) -> Celsius:
        if not isinstance(other, Celsius):
            return NotImplemented
        return Celsius(self.value - other.value)

    def to_fahrenheit(self) -> Fahrenheit:
        return Fahrenheit(self.value * 1.8 + 32.0)


@dataclass(frozen=True, order=True)
class Fahrenheit:
    value: float

    def __float__(self) -> float:
        return float(self.value)

    def __add__(self, other: object) -> Fahrenheit:
        if not isinstance(other, Fahrenheit):
            return NotImplemented
        return Fahrenheit(self.value + other.value)

    def __sub__(self, other: object) -> Fahrenheit:
        if not isinstance(other, Fahrenheit):
            return NotImplemented
        return Fahrenheit(self.value - other.value)

    def to_celsius(self) -> Celsius:
        return Celsius((self.value - 32.0) / 1.8)
