from __future__ import annotations

import csv
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI

from chargefinder.api.app import lifespan
from chargefinder.persistence.loaders import (
    _parse_optional_int,
    load_stations_from_csv,
)

HEADER = [
    "_id",
    "cost",
    "charging_points",
    "pay_at_location",
    "membership_required",
    "access_key_required",
    "is_operational",
    "latitude",
    "longitude",
    "operator",
    "connection_type",
    "current_type",
]


def _make_csv(path: Path, header: list[str], rows: list[list[Any]]) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)


def test_parse_helpers() -> None:
    assert _parse_optional_int(None) is None
    assert _parse_optional_int("  ") is None
    assert _parse_optional_int(" 4 ") == 4
    assert _parse_optional_int("2.0") == 2
    with pytest.raises(ValueError):
        _parse_optional_int("many")


def test_load_stations_missing_file(tmp_path: Path) -> None:
    assert load_stations_from_csv(tmp_path / "nope.csv") == []


def test_load_stations_empty_header(tmp_path: Path) -> None:
    path = tmp_path / "stations.csv"
    path.write_text("", encoding="utf-8")
    assert load_stations_from_csv(path) == []


def test_load_stations_full_row(tmp_path: Path) -> None:
    path = tmp_path / "stations.csv"
    _make_csv(
        path,
        HEADER,
        [
            [
                "st-1",
                "Free",
                "2",
                "FALSE",
                "FALSE",
                "TRUE",
                "TRUE",
                "-37.8136",
                "144.9631",
                "Chargefox",
                "CCS, CHAdeMO",
                "DC",
            ]
        ],
    )

    (station,) = load_stations_from_csv(path)

    assert station.station_id == "st-1"
    assert station.location == (-37.8136, 144.9631)
    assert station.operator == "Chargefox"
    assert station.connector_type == "CCS, CHAdeMO"
    assert station.current_type == "DC"
    assert station.cost == "Free"
    assert station.charging_points == 2
    assert station.access_key_required == "TRUE"
    assert station.is_operational == "TRUE"


def test_load_stations_branches_and_skips(tmp_path: Path) -> None:
    path = tmp_path / "stations.csv"
    path.write_text(
        "station_id,latitude,longitude,operator,charging_points\n"
        # Missing id -> skip
        ",-37.8,144.9,Jolt,1\n"
        # Bad charging_points -> kept, charging_points None
        "s1,-37.8,144.9,Jolt,lots\n"
        # Legacy text coordinates with padding -> kept, located
        "s2, -37.8 , 144.9 ,Jolt,\n"
        # Unparseable coordinates -> kept, no location
        "s3,unknown,,Tesla,2\n"
        # Duplicate id -> skip
        "s2,-37.0,144.0,Evie,1\n",
        encoding="utf-8",
    )

    stations = load_stations_from_csv(path)

    assert [s.station_id for s in stations] == ["s1", "s2", "s3"]
    s1, s2, s3 = stations
    assert s1.charging_points is None
    assert s1.location == (-37.8, 144.9)
    assert s2.location == (-37.8, 144.9)
    assert s2.operator == "Jolt"
    assert s3.has_location is False
    assert s3.charging_points == 2


def test_load_stations_keeps_row_with_unreadable_passive_field(tmp_path: Path) -> None:
    path = tmp_path / "stations.csv"
    path.write_text(
        "_id,latitude,longitude,charging_points\n"
        "x,0,0,n/a\n",
        encoding="utf-8",
    )

    (station,) = load_stations_from_csv(path)

    assert station.station_id == "x"
    assert station.location == (0.0, 0.0)
    assert station.charging_points is None


def test_bundled_sample_catalog_loads() -> None:
    path = Path(__file__).resolve().parent.parent / "data" / "stations.csv"

    stations = load_stations_from_csv(path)

    assert len(stations) == 6
    assert sum(1 for s in stations if not s.has_location) == 1


@pytest.mark.anyio
async def test_app_lifespan_executes_and_sets_state(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    stations_csv = tmp_path / "stations.csv"
    _make_csv(
        stations_csv,
        ["_id", "latitude", "longitude"],
        [["st-1", "-37.8136", "144.9631"]],
    )

    import chargefinder.api.app as app_module

    monkeypatch.setattr(app_module, "STATIONS_CSV", stations_csv)

    app = FastAPI(lifespan=lifespan)

    async with lifespan(app):
        assert hasattr(app.state, "station_repository")
        assert app.state.station_repository.get_by_id("st-1") is not None
