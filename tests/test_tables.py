from __future__ import annotations

from pathlib import Path

import openpyxl
import pytest

from yardwatch.exceptions import YardIngestError
from yardwatch.geofence import Geofence
from yardwatch.ingestion.batch import build_asset_records
from yardwatch.ingestion.tables import read_rows
from yardwatch.status import YardStatus


def test_read_csv_with_bom_and_blank_rows(tmp_path: Path) -> None:
    path = tmp_path / "trailers.csv"
    path.write_text(
        "\ufeffid,lastService,lat,lng\nT-1,2024-02-01,-33.870,151.200\n,,,\n,,abc,151.2\n",
        encoding="utf-8",
    )

    rows = read_rows(path)

    assert rows == [
        {"id": "T-1", "lastService": "2024-02-01", "lat": "-33.870", "lng": "151.200"},
        {"id": "", "lastService": "", "lat": "abc", "lng": "151.2"},
    ]


def test_read_xlsx_first_sheet(tmp_path: Path) -> None:
    path = tmp_path / "trailers.xlsx"
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.append(["id", "lastService", "lat", "lng"])
    sheet.append(["T-1", "2024-02-01", -33.87, 151.2])
    sheet.append([None, None, None, None])
    sheet.append([None, None, 0.0, 0.0])
    other = workbook.create_sheet("ignored")
    other.append(["id", "lat", "lng"])
    other.append(["NOPE", 1, 1])
    workbook.save(path)

    rows = read_rows(path)

    assert rows == [
        {"id": "T-1", "lastService": "2024-02-01", "lat": -33.87, "lng": 151.2},
        {"lat": 0.0, "lng": 0.0},
    ]
    records = build_asset_records(rows, Geofence(center_lat=-33.870, center_lng=151.200))
    assert [(r.id, r.status) for r in records] == [
        ("T-1", YardStatus.IN_YARD),
        ("TRAILER-1", YardStatus.OUT_FOR_JOB),
    ]


def test_unsupported_extension_raises(tmp_path: Path) -> None:
    path = tmp_path / "trailers.txt"
    path.write_text("id,lat,lng\n", encoding="utf-8")

    with pytest.raises(YardIngestError):
        read_rows(path)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(YardIngestError):
        read_rows(tmp_path / "missing.csv")


def test_corrupt_workbook_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"not a zip file")

    with pytest.raises(YardIngestError):
        read_rows(path)
