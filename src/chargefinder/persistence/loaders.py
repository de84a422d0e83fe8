"""Load charging station data from CSV files."""

import csv
import logging
from pathlib import Path

from chargefinder.domain.stations import Station

logger = logging.getLogger(__name__)

# Expected CSV columns mirror the charging_stations collection:
# _id, cost, charging_points, pay_at_location, membership_required,
# access_key_required, is_operational, latitude, longitude, operator,
# connection_type, current_type
STATION_ID = "_id"
STATION_ID_FALLBACK = "station_id"
LATITUDE = "latitude"
LONGITUDE = "longitude"
OPERATOR = "operator"
CONNECTION_TYPE = "connection_type"
CURRENT_TYPE = "current_type"
COST = "cost"
CHARGING_POINTS = "charging_points"
PAY_AT_LOCATION = "pay_at_location"
MEMBERSHIP_REQUIRED = "membership_required"
ACCESS_KEY_REQUIRED = "access_key_required"
IS_OPERATIONAL = "is_operational"


def _parse_optional_int(value: str | None) -> int | None:
    """Parse string to int, ``None`` when blank."""
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        return None
    return int(float(stripped))


def load_stations_from_csv(path: str | Path) -> list[Station]:
    """
    Load charging stations from a CSV file into memory.

    Expected CSV format (with header):
        _id,cost,charging_points,pay_at_location,membership_required,
        access_key_required,is_operational,latitude,longitude,operator,
        connection_type,current_type

    - _id (or station_id): required, rows without one are skipped
    - latitude / longitude: numbers; rows where they do not parse are kept
      but the station has no location
    - charging_points: integer, optional; unparseable values become None
      and the station is kept

    Args:
        path: Path to the CSV file.

    Returns:
        List of Station instances in file order.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Stations CSV not found at %s", path)
        return []

    stations: list[Station] = []
    seen: set[str] = set()
    unlocated = 0

    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames:
            return []

        for row_num, row in enumerate(reader, start=2):  # 2 = header + 1
            station_id = (
                row.get(STATION_ID) or row.get(STATION_ID_FALLBACK) or ""
            ).strip()
            if not station_id:
                logger.warning("Row %d: missing _id, skipping", row_num)
                continue
            if station_id in seen:
                logger.warning(
                    "Row %d: duplicate _id '%s', skipping", row_num, station_id
                )
                continue

            try:
                charging_points = _parse_optional_int(row.get(CHARGING_POINTS))
            except (ValueError, OverflowError) as e:
                logger.warning(
                    "Row %d: bad charging_points (%s), keeping station without it",
                    row_num,
                    e,
                )
                charging_points = None

            station = Station(
                station_id=station_id,
                latitude=row.get(LATITUDE),
                longitude=row.get(LONGITUDE),
                operator=row.get(OPERATOR),
                connector_type=row.get(CONNECTION_TYPE),
                current_type=row.get(CURRENT_TYPE),
                cost=row.get(COST),
                charging_points=charging_points,
                pay_at_location=row.get(PAY_AT_LOCATION),
                membership_required=row.get(MEMBERSHIP_REQUIRED),
                access_key_required=row.get(ACCESS_KEY_REQUIRED),
                is_operational=row.get(IS_OPERATIONAL),
            )

            if not station.has_location:
                unlocated += 1
            seen.add(station_id)
            stations.append(station)

    if unlocated:
        logger.warning(
            "%d stations in %s have no usable coordinates", unlocated, path
        )
    logger.info("Loaded %d stations from %s", len(stations), path)
    return stations
