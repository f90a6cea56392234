from __future__ import annotations

import math

import pytest

from yardwatch.exceptions import YardDecodeError
from yardwatch.geofence import Geofence
from yardwatch.ingestion.batch import build_asset_records
from yardwatch.ingestion.feed import decode_feed
from yardwatch.ingestion.normalize import parse_coordinate
from yardwatch.status import YardStatus

FENCE = Geofence(center_lat=-33.870, center_lng=151.200, radius_km=0.5)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("-33.87", -33.87),
        (" 151.2 ", 151.2),
        (12, 12.0),
        (1.5, 1.5),
    ],
)
def test_parse_coordinate_accepts_numbers(value: object, expected: float) -> None:
    assert parse_coordinate(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", ["abc", "", "   ", None, True, "inf", "nan", [1]])
def test_parse_coordinate_degrades_to_nan(value: object) -> None:
    assert math.isnan(parse_coordinate(value))


def test_batch_row_with_unparsable_lat_is_kept_out_for_job() -> None:
    records = build_asset_records(
        [{"id": "T-9", "lastService": "2024-03-01", "lat": "abc", "lng": "151.2"}],
        FENCE,
    )

    assert len(records) == 1
    record = records[0]
    assert record.id == "T-9"
    assert record.last_service_date == "2024-03-01"
    assert math.isnan(record.location.lat)
    assert record.status == YardStatus.OUT_FOR_JOB


def test_batch_missing_fields_get_defaults() -> None:
    records = build_asset_records(
        [
            {"lat": "-33.870", "lng": "151.200"},
            {"id": "", "lastService": "  ", "lat": "0", "lng": "0"},
            {"id": "T-3", "lat": "-33.870", "lng": "151.200"},
        ],
        FENCE,
    )

    assert [record.id for record in records] == ["TRAILER-0", "TRAILER-1", "T-3"]
    assert all(record.last_service_date == "Unknown" for record in records)
    assert [record.status for record in records] == [
        YardStatus.IN_YARD,
        YardStatus.OUT_FOR_JOB,
        YardStatus.IN_YARD,
    ]


def test_batch_ids_are_reproducible() -> None:
    rows = [{"lat": "1", "lng": "2"}, {"lat": "x", "lng": "y"}]

    first = [record.id for record in build_asset_records(rows, FENCE)]
    second = [record.id for record in build_asset_records(rows, FENCE)]

    assert first == second == ["TRAILER-0", "TRAILER-1"]


def test_record_status_is_not_settable() -> None:
    record = build_asset_records([{"id": "T-1", "lat": "0", "lng": "0"}], FENCE)[0]

    with pytest.raises((AttributeError, TypeError, ValueError)):
        record.status = YardStatus.IN_YARD  # type: ignore[misc]
    assert record.status == YardStatus.OUT_FOR_JOB


def test_record_dump_includes_status_but_not_geofence() -> None:
    record = build_asset_records([{"id": "T-1", "lastService": "2024-01-01", "lat": "-33.87", "lng": "151.2"}], FENCE)[0]

    dumped = record.model_dump(mode="json")

    assert dumped["status"] == "In Yard"
    assert dumped["last_service_date"] == "2024-01-01"
    assert "geofence" not in dumped


def test_decode_feed_scales_coordinates() -> None:
    positions = decode_feed(
        {
            "report": [
                {"vehicleexternalid": "T-1", "objectlatitude": -3387000, "objectlongitude": 15120000},
                {"vehicleexternalid": "T-2", "objectlatitude": "-3396000", "objectlongitude": "15120000"},
            ]
        },
        FENCE,
    )

    assert [p.id for p in positions] == ["T-1", "T-2"]
    assert positions[0].location.lat == pytest.approx(-33.87)
    assert positions[0].location.lng == pytest.approx(151.2)
    assert positions[0].status == YardStatus.IN_YARD
    assert positions[1].status == YardStatus.OUT_FOR_JOB


def test_decode_feed_synthesizes_ids_and_tolerates_bad_items() -> None:
    positions = decode_feed(
        {
            "report": [
                {"objectlatitude": -3387000, "objectlongitude": 15120000},
                "garbage",
                {"vehicleexternalid": "T-3", "objectlatitude": "n/a", "objectlongitude": 15120000},
            ]
        },
        FENCE,
    )

    assert [p.id for p in positions] == ["GPS-0", "GPS-1", "T-3"]
    assert positions[0].status == YardStatus.IN_YARD
    assert math.isnan(positions[1].location.lat)
    assert positions[2].status == YardStatus.OUT_FOR_JOB


@pytest.mark.parametrize("payload", [{}, {"report": None}, {"report": {"a": 1}}, [], "nope"])
def test_decode_feed_without_report_list_raises(payload: object) -> None:
    with pytest.raises(YardDecodeError):
        decode_feed(payload, FENCE, endpoint="/gps-data")
