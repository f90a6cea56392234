"""Batch upload ingestion."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from yardwatch._constants import BATCH_ID_PREFIX
from yardwatch.geofence import Geofence
from yardwatch.ingestion.normalize import parse_coordinate, resolve_id, safe_str
from yardwatch.models.asset import AssetRecord
from yardwatch.models.location import Location

_logger = logging.getLogger(__name__)


def build_asset_record(row: Mapping[str, Any], index: int, geofence: Geofence) -> AssetRecord:
    """Build one record from an uploaded row.

    The row keeps its place even when ``lat``/``lng`` do not parse; the
    resulting NaN location classifies as out for job.
    """
    return AssetRecord(
        id=resolve_id(row.get("id"), prefix=BATCH_ID_PREFIX, index=index),
        last_service_date=safe_str(row.get("lastService")),
        location=Location(lat=parse_coordinate(row.get("lat")), lng=parse_coordinate(row.get("lng"))),
        geofence=geofence,
    )


def build_asset_records(rows: Iterable[Mapping[str, Any]], geofence: Geofence) -> list[AssetRecord]:
    """Convert uploaded rows into records, one per row, in order."""
    records = [build_asset_record(row, index, geofence) for index, row in enumerate(rows)]
    invalid = sum(1 for record in records if not record.location.is_valid)
    if invalid:
        _logger.debug("Batch has %d row(s) with unparsable coordinates", invalid)
    return records
