import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from chargefinder.api.schemas import NearbyRequest, NearbyResponse
from chargefinder.domain.criteria import FilterCriteria
from chargefinder.domain.errors import InvalidRequestError, UpstreamUnavailableError
from chargefinder.persistence.in_memory import StationRepository
from chargefinder.services.stations_service import (
    find_nearest_station,
    find_stations_nearby,
    get_station,
    list_stations,
    match_to_dict,
    station_to_dict,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chargers", tags=["chargers"])

CONNECTOR_HELP = "Connectors to filter for. Exact matches, comma-separated or repeated."
CURRENT_HELP = (
    "Current types to filter for. Accepts 'AC' (AC (Single-Phase)), "
    "'AC3' (AC (Three-Phase)) and 'DC', comma-separated or repeated."
)
OPERATOR_HELP = "Operators to filter for. Exact matches, comma-separated or repeated."


def _repository(request: Request) -> StationRepository | None:
    repo = getattr(request.app.state, "station_repository", None)
    if repo is None or not isinstance(repo, StationRepository):
        logger.error("station_repository not initialized on app.state")
        return None
    return repo


def _repository_missing() -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"detail": "Station repository not initialized"},
    )


def _bad_request(exc: InvalidRequestError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def _upstream_failed() -> JSONResponse:
    return JSONResponse(
        status_code=500, content={"detail": "Station catalog unavailable"}
    )


@router.get("")  # type: ignore[misc]
async def get_all_stations(
    request: Request,
    connector: list[str] | None = Query(None, description=CONNECTOR_HELP),
    current: list[str] | None = Query(None, description=CURRENT_HELP),
    operator: list[str] | None = Query(None, description=OPERATOR_HELP),
    lat: float | None = Query(None, ge=-90.0, le=90.0),
    lon: float | None = Query(None, ge=-180.0, le=180.0),
    radius: float | None = Query(None, description="Search radius in kilometers"),
) -> JSONResponse:
    """
    List stations matching the filters.

    lat, lon and radius must be given together; when they are, results are
    limited to the radius and sorted nearest first.
    """
    try:
        criteria = FilterCriteria.from_query(
            connector=connector,
            current=current,
            operator=operator,
            lat=lat,
            lon=lon,
            radius=radius,
            require_radius=True,
        )
    except InvalidRequestError as exc:
        return _bad_request(exc)

    repo = _repository(request)
    if repo is None:
        return _repository_missing()

    try:
        matches = list_stations(repo, criteria)
    except UpstreamUnavailableError:
        return _upstream_failed()

    return JSONResponse(
        content={"message": "success", "data": [match_to_dict(m) for m in matches]}
    )


@router.get("/nearest-charger")  # type: ignore[misc]
async def nearest_station(
    request: Request,
    lat: float = Query(..., ge=-90.0, le=90.0),
    lon: float = Query(..., ge=-180.0, le=180.0),
    connector: list[str] | None = Query(None, description=CONNECTOR_HELP),
    current: list[str] | None = Query(None, description=CURRENT_HELP),
    operator: list[str] | None = Query(None, description=OPERATOR_HELP),
) -> JSONResponse:
    """Return the station closest to (lat, lon) among those matching the filters."""
    criteria = FilterCriteria.from_query(
        connector=connector, current=current, operator=operator, lat=lat, lon=lon
    )

    repo = _repository(request)
    if repo is None:
        return _repository_missing()

    try:
        match = find_nearest_station(repo, criteria)
    except UpstreamUnavailableError:
        return _upstream_failed()

    if match is None:
        return JSONResponse(
            status_code=404, content={"detail": "No matching stations available"}
        )

    return JSONResponse(content={"message": "success", "data": match_to_dict(match)})


@router.post("/nearby", response_model=NearbyResponse)  # type: ignore[misc]
async def nearby_stations(request: Request, body: NearbyRequest) -> JSONResponse:
    """Return every station within ``radius`` km of the given point, nearest first."""
    repo = _repository(request)
    if repo is None:
        return _repository_missing()

    try:
        matches = find_stations_nearby(
            repo, lat=body.latitude, lon=body.longitude, radius_km=body.radius
        )
    except UpstreamUnavailableError:
        return _upstream_failed()

    return JSONResponse(
        content={"count": len(matches), "chargers": [match_to_dict(m) for m in matches]}
    )


@router.get("/{station_id}")  # type: ignore[misc]
async def station_by_id(request: Request, station_id: str) -> JSONResponse:
    repo = _repository(request)
    if repo is None:
        return _repository_missing()

    try:
        station = get_station(repo, station_id)
    except UpstreamUnavailableError:
        return _upstream_failed()

    if station is None:
        return JSONResponse(status_code=404, content={"detail": "Station not found"})

    return JSONResponse(content={"message": "success", "data": station_to_dict(station)})
