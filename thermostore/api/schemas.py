from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel
from typing import Optional, List


class RecordMeasurementRequest(BaseModel):
    address: str
    temp_c: float
    date: Optional[datetime] = None  # defaults to now


class MeasurementOut(BaseModel):
    date: datetime
    temp_c: float
    temp_f: float
    temp_raw_c: float


class DeviceOut(BaseModel):
    address: str
    name: Optional[str] = None
    description: Optional[str] = None
    adjustment: float
    known: bool
    current_measurement: Optional[MeasurementOut] = None


class MeasurementsOut(BaseModel):
    address: str
    count: int
    measurements: List[MeasurementOut]
