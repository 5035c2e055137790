from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..core.config import settings
from ..domain.devices import adjustment
from ..domain.measurement import Measurement
from ..domain.models import KnownDevice
from ..domain.temperature import Celsius
from ..services.measurements import MeasurementService
from ..storage.errors import StoreError
from .schemas import DeviceOut, MeasurementOut, MeasurementsOut, RecordMeasurementRequest

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Dependency getters ---
# main.py points this at the real service via app.dependency_overrides.
def get_service() -> MeasurementService:  # overridden in main
    raise RuntimeError("Measurement service dependency not configured")


def _measurement_out(m: Measurement) -> MeasurementOut:
    return MeasurementOut(
        date=m.date,
        temp_c=float(m.temp_c),
        temp_f=float(m.temp_f),
        temp_raw_c=float(m.temp_raw_c),
    )


def _store_failure(e: StoreError) -> HTTPException:
    logger.warning("Store request failed: %s", e)
    return HTTPException(status_code=502, detail=str(e))


@router.get("/health")
async def health():
    return {"status": "ok", "app": settings.app_name, "store_backend": settings.store_backend}


@router.get("/devices/{address}", response_model=DeviceOut)
async def get_device(address: str, svc: MeasurementService = Depends(get_service)):
    device = svc.resolve_device(address)
    try:
        current = await svc.current_measurement(device)
    except StoreError as e:
        raise _store_failure(e)
    return DeviceOut(
        address=device.address,
        name=device.name,
        description=device.description,
        adjustment=float(adjustment(device)),
        known=isinstance(device, KnownDevice),
        current_measurement=_measurement_out(current) if current else None,
    )


@router.get("/devices/{address}/measurements", response_model=MeasurementsOut)
async def get_measurements(
    address: str,
    count: Optional[int] = None,
    svc: MeasurementService = Depends(get_service),
):
    device = svc.resolve_device(address)
    try:
        rows = await svc.recent_measurements(device, count)
    except StoreError as e:
        raise _store_failure(e)
    return MeasurementsOut(
        address=device.address,
        count=len(rows),
        measurements=[_measurement_out(m) for m in rows],
    )


@router.post("/measurements", response_model=MeasurementOut)
async def record_measurement(
    req: RecordMeasurementRequest,
    svc: MeasurementService = Depends(get_service),
):
    try:
        m = await svc.record_measurement(req.address, Celsius(req.temp_c), req.date)
    except StoreError as e:
        raise _store_failure(e)
    return _measurement_out(m)
