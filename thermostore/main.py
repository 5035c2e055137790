from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .core.config import settings
from .core.log import configure_logging

from .api.routes import router as api_router
import thermostore.api.routes as routes_module

from .domain.devices import load_devices
from .domain.interfaces import MeasurementStore
from .services.measurements import MeasurementService
from .storage.elasticsearch_store import ElasticsearchStore
from .storage.sqlite_store import SQLiteStore


logger = logging.getLogger(__name__)


def build_store() -> MeasurementStore:
    if settings.store_backend == "sqlite":
        return SQLiteStore(settings.sqlite_path)

    return ElasticsearchStore(settings.database_url, timeout=settings.request_timeout_s)


# --- Singletons ---
store = build_store()
service: MeasurementService | None = None


def get_service() -> MeasurementService:
    assert service is not None
    return service


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Starting %s (store=%s)", settings.app_name, settings.store_backend)

    await store.init()

    # Known devices are read once and never change while the process runs.
    global service
    service = MeasurementService(store=store, devices=load_devices(settings.sensors_path))

    try:
        yield
    finally:
        logger.info("Shutdown complete")


app = FastAPI(title=settings.app_name, lifespan=lifespan)

# Make the dependency functions in routes resolve to the real ones
app.dependency_overrides[routes_module.get_service] = get_service

app.include_router(api_router, prefix="/api")
