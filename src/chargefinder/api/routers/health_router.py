import logging

from fastapi import APIRouter, Request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")  # type: ignore[misc]
async def health(request: Request) -> dict[str, object]:
    """Health check endpoint; also reports how many stations are loaded."""
    repo = getattr(request.app.state, "station_repository", None)
    stations = len(repo) if repo is not None else 0
    logger.debug("Health check requested (%d stations)", stations)
    return {"status": "ok", "stations": stations}
