from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import NamedTuple

from chargefinder.domain.criteria import FilterCriteria
from chargefinder.domain.errors import InvalidRequestError, UpstreamUnavailableError
from chargefinder.domain.stations import Station
from chargefinder.persistence.in_memory import StationRepository
from chargefinder.services.geo import distance_km

logger = logging.getLogger(__name__)


class StationMatch(NamedTuple):
    station: Station
    distance_km: float | None = None


def _fetch_candidates(repo: StationRepository) -> list[Station]:
    try:
        return repo.get_all()
    except UpstreamUnavailableError:
        logger.error("Station catalog unavailable")
        raise
    except OSError as exc:
        logger.error("Station catalog unavailable: %s", exc)
        raise UpstreamUnavailableError("station catalog unavailable") from exc


def list_stations(
    repo: StationRepository,
    criteria: FilterCriteria,
) -> list[StationMatch]:
    """
    Return stations matching ``criteria``.

    Without a reference point the matches come back in catalog order. With
    one, stations lacking coordinates are dropped, the rest are annotated
    with their distance, cut at the radius (inclusive) when given, and sorted
    nearest first. Equal distances keep catalog order.
    """
    candidates = _fetch_candidates(repo)
    matches = criteria.to_predicate()
    selected = [station for station in candidates if matches(station)]

    reference = criteria.reference_point
    if reference is None:
        logger.debug(
            "Matched %d of %d stations without location", len(selected), len(candidates)
        )
        return [StationMatch(station) for station in selected]

    lat, lon = reference
    ranked: list[StationMatch] = []
    for station in selected:
        location = station.location
        if location is None:
            continue
        ranked.append(StationMatch(station, distance_km(lat, lon, *location)))

    radius = criteria.radius_km
    if radius is not None:
        ranked = [m for m in ranked if m.distance_km <= radius]

    ranked.sort(key=lambda m: m.distance_km)
    logger.debug(
        "Matched %d of %d stations around (%s, %s), radius=%s",
        len(ranked),
        len(candidates),
        lat,
        lon,
        radius,
    )
    return ranked


def find_nearest_station(
    repo: StationRepository,
    criteria: FilterCriteria,
) -> StationMatch | None:
    """Return the closest matching station, or None when nothing matches."""
    if criteria.reference_point is None:
        raise InvalidRequestError("nearest station lookup requires lat and lon")

    ranked = list_stations(repo, criteria)
    if not ranked:
        return None
    return ranked[0]


def find_stations_nearby(
    repo: StationRepository,
    *,
    lat: float,
    lon: float,
    radius_km: float,
) -> list[StationMatch]:
    criteria = FilterCriteria(reference_point=(lat, lon), radius_km=radius_km)
    return list_stations(repo, criteria)


def get_station(repo: StationRepository, station_id: str) -> Station | None:
    try:
        return repo.get_by_id(station_id)
    except OSError as exc:
        logger.error("Station catalog unavailable: %s", exc)
        raise UpstreamUnavailableError("station catalog unavailable") from exc


def get_stations_by_ids(
    repo: StationRepository,
    station_ids: Iterable[str],
) -> list[Station]:
    """Stations whose id is in ``station_ids``, in catalog order."""
    wanted = set(station_ids)
    if not wanted:
        return []
    return [s for s in _fetch_candidates(repo) if s.station_id in wanted]


def station_to_dict(
    station: Station,
    distance: float | None = None,
) -> dict[str, object]:
    data: dict[str, object] = {
        "_id": station.station_id,
        "latitude": station.latitude,
        "longitude": station.longitude,
        "operator": station.operator,
        "connection_type": station.connector_type,
        "current_type": station.current_type,
        "cost": station.cost,
        "charging_points": station.charging_points,
        "pay_at_location": station.pay_at_location,
        "membership_required": station.membership_required,
        "access_key_required": station.access_key_required,
        "is_operational": station.is_operational,
    }
    if distance is not None:
        data["distance_km"] = distance
    return data


def match_to_dict(match: StationMatch) -> dict[str, object]:
    return station_to_dict(match.station, match.distance_km)
