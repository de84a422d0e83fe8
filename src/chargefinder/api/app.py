"""FastAPI application entrypoint."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from chargefinder.api.routes import router
from chargefinder.config import get_settings
from chargefinder.logging import setup_logging
from chargefinder.persistence.in_memory import StationRepository

setup_logging()
logger = logging.getLogger(__name__)

settings = get_settings()
STATIONS_CSV = settings.stations_csv


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Application starting")

    station_repo = StationRepository()
    station_count = station_repo.load_from_csv(STATIONS_CSV)
    app.state.station_repository = station_repo
    logger.info("Loaded %d stations into memory", station_count)
    yield
    logger.info("Application shutting down")


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(router)
