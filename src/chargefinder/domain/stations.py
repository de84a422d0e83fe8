import math
from typing import Any


class Station:
    """A charging station record as exported from the station catalog.

    Legacy records store coordinates either as numbers or as numeric text.
    Both are accepted; anything that does not parse to a finite coordinate in
    range is kept as ``None`` so the station still shows up in plain listings
    but never in location-based queries.
    """

    _station_id: str
    _latitude: float | None
    _longitude: float | None
    _operator: str | None
    _connector_type: str | None
    _current_type: str | None

    def __init__(
        self,
        station_id: str,
        latitude: Any = None,
        longitude: Any = None,
        *,
        operator: str | None = None,
        connector_type: str | None = None,
        current_type: str | None = None,
        cost: str | None = None,
        charging_points: int | None = None,
        pay_at_location: str | None = None,
        membership_required: str | None = None,
        access_key_required: str | None = None,
        is_operational: str | None = None,
    ) -> None:

        self._station_id = self._validate_station_id(station_id)
        self._latitude = self._parse_coordinate(latitude, 90.0)
        self._longitude = self._parse_coordinate(longitude, 180.0)
        # a station is only locatable when both halves parse
        if self._latitude is None or self._longitude is None:
            self._latitude = self._longitude = None

        self._operator = self._clean_text(operator)
        self._connector_type = self._clean_text(connector_type)
        self._current_type = self._clean_text(current_type)

        self.cost = self._clean_text(cost)
        self.charging_points = charging_points
        self.pay_at_location = self._clean_text(pay_at_location)
        self.membership_required = self._clean_text(membership_required)
        self.access_key_required = self._clean_text(access_key_required)
        self.is_operational = self._clean_text(is_operational)

    def __repr__(self) -> str:
        return f"Station(station_id={self._station_id!r})"

    # properties
    @property
    def station_id(self) -> str:
        return self._station_id

    @property
    def latitude(self) -> float | None:
        return self._latitude

    @property
    def longitude(self) -> float | None:
        return self._longitude

    @property
    def has_location(self) -> bool:
        return self._latitude is not None

    @property
    def location(self) -> tuple[float, float] | None:
        if self._latitude is None or self._longitude is None:
            return None
        return (self._latitude, self._longitude)

    @property
    def operator(self) -> str | None:
        return self._operator

    @property
    def connector_type(self) -> str | None:
        return self._connector_type

    @property
    def current_type(self) -> str | None:
        return self._current_type

    # validation
    @staticmethod
    def _validate_station_id(station_id: str) -> str:
        if not isinstance(station_id, str) or not station_id.strip():
            raise ValueError("station_id must be a non-empty string")
        return station_id.strip()

    @staticmethod
    def _parse_coordinate(value: Any, limit: float) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
        try:
            parsed = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(parsed) or not (-limit <= parsed <= limit):
            return None
        return parsed

    @staticmethod
    def _clean_text(value: str | None) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None
