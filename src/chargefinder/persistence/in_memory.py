"""In-memory station catalog with CSV loading."""

from pathlib import Path

from chargefinder.domain.stations import Station
from chargefinder.persistence.loaders import load_stations_from_csv


class StationRepository:
    """In-memory repository for stations, optionally loaded from CSV.

    Iteration order is insertion order, which is the catalog order used to
    break distance ties.
    """

    def __init__(self) -> None:
        self._stations: dict[str, Station] = {}

    def load_from_csv(self, path: str | Path) -> int:
        """
        Load stations from a CSV file into memory.

        Args:
            path: Path to the CSV file.

        Returns:
            Number of stations loaded.
        """
        stations = load_stations_from_csv(path)
        for s in stations:
            self._stations[s.station_id] = s
        return len(stations)

    def get_all(self) -> list[Station]:
        """Return all stations in memory."""
        return list(self._stations.values())

    def get_by_id(self, station_id: str) -> Station | None:
        """Return a station by ID, or None if not found."""
        return self._stations.get(station_id)

    def add(self, station: Station) -> None:
        """Add or replace a station."""
        self._stations[station.station_id] = station

    def __len__(self) -> int:
        return len(self._stations)
