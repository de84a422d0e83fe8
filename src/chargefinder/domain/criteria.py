"""Station filter criteria and the predicate built from them."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable

from chargefinder.domain.enums import CurrentType
from chargefinder.domain.errors import InvalidRequestError
from chargefinder.domain.stations import Station

CURRENT_TYPE_SYNONYMS = {
    "AC": CurrentType.AC_SINGLE_PHASE.value,
    "AC3": CurrentType.AC_THREE_PHASE.value,
}

StationPredicate = Callable[[Station], bool]


def split_tokens(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    """Split comma-separated input into trimmed, non-empty tokens.

    Accepts a single string (``"CCS, Type 2"``), an iterable of such strings
    (repeated query parameters), or ``None``. Anything else yields an empty
    tuple.
    """
    if raw is None:
        return ()
    if isinstance(raw, str):
        chunks: Iterable[object] = [raw]
    else:
        try:
            chunks = list(raw)
        except TypeError:
            return ()

    tokens: list[str] = []
    for chunk in chunks:
        if not isinstance(chunk, str):
            continue
        tokens.extend(part.strip() for part in chunk.split(",") if part.strip())
    return tuple(tokens)


def canonicalize_current_types(values: Iterable[str]) -> tuple[str, ...]:
    """Map current type shorthands ("AC", "AC3") onto their canonical names."""
    return tuple(CURRENT_TYPE_SYNONYMS.get(value, value) for value in values)


def field_tokens(value: str | None) -> frozenset[str]:
    """Case-folded comma-separated entries of a stored station field."""
    if not value:
        return frozenset()
    return frozenset(
        part.strip().casefold() for part in value.split(",") if part.strip()
    )


def _dimension_matches(wanted: frozenset[str], value: str | None) -> bool:
    if not wanted:
        return True
    return not wanted.isdisjoint(field_tokens(value))


class FilterCriteria:
    """A single station query: attribute filters plus an optional location.

    Empty attribute sets mean "no filter" on that dimension. A radius is only
    meaningful around a reference point, so one without the other is
    rejected here, before the catalog is touched.
    """

    def __init__(
        self,
        *,
        connector_types: Iterable[str] = (),
        current_types: Iterable[str] = (),
        operators: Iterable[str] = (),
        reference_point: tuple[float, float] | None = None,
        radius_km: float | None = None,
    ) -> None:
        self._connector_types = frozenset(connector_types)
        self._current_types = frozenset(canonicalize_current_types(current_types))
        self._operators = frozenset(operators)

        if reference_point is not None:
            reference_point = self._validate_reference_point(reference_point)
        if radius_km is not None:
            if reference_point is None:
                raise InvalidRequestError("radius requires both lat and lon")
            if not math.isfinite(radius_km) or radius_km <= 0:
                raise InvalidRequestError("radius must be a positive finite number")
        self._reference_point = reference_point
        self._radius_km = None if radius_km is None else float(radius_km)

    @classmethod
    def from_query(
        cls,
        *,
        connector: str | Iterable[str] | None = None,
        current: str | Iterable[str] | None = None,
        operator: str | Iterable[str] | None = None,
        lat: float | None = None,
        lon: float | None = None,
        radius: float | None = None,
        require_radius: bool = False,
    ) -> FilterCriteria:
        """Build canonical criteria from raw request values.

        With ``require_radius`` the location fields are all-or-none: lat, lon
        and radius must be supplied together or not at all.
        """
        if (lat is None) != (lon is None):
            raise InvalidRequestError("lat and lon must be supplied together")

        reference_point = None if lat is None or lon is None else (lat, lon)
        if require_radius and reference_point is not None and radius is None:
            raise InvalidRequestError("lat and lon require a radius")

        return cls(
            connector_types=split_tokens(connector),
            current_types=split_tokens(current),
            operators=split_tokens(operator),
            reference_point=reference_point,
            radius_km=radius,
        )

    # properties
    @property
    def connector_types(self) -> frozenset[str]:
        return self._connector_types

    @property
    def current_types(self) -> frozenset[str]:
        return self._current_types

    @property
    def operators(self) -> frozenset[str]:
        return self._operators

    @property
    def reference_point(self) -> tuple[float, float] | None:
        return self._reference_point

    @property
    def radius_km(self) -> float | None:
        return self._radius_km

    # validation
    @staticmethod
    def _validate_reference_point(point: tuple[float, float]) -> tuple[float, float]:
        lat, lon = point
        if not (math.isfinite(lat) and -90.0 <= lat <= 90.0):
            raise InvalidRequestError("lat must be between -90 and 90")
        if not (math.isfinite(lon) and -180.0 <= lon <= 180.0):
            raise InvalidRequestError("lon must be between -180 and 180")
        return (float(lat), float(lon))

    def to_predicate(self) -> StationPredicate:
        """Return ``matches(station)``; all non-empty dimensions must hold."""
        connectors = frozenset(v.casefold() for v in self._connector_types)
        currents = frozenset(v.casefold() for v in self._current_types)
        operators = frozenset(v.casefold() for v in self._operators)

        def matches(station: Station) -> bool:
            return (
                _dimension_matches(connectors, station.connector_type)
                and _dimension_matches(currents, station.current_type)
                and _dimension_matches(operators, station.operator)
            )

        return matches
