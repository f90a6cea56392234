"""Ingestion layer.

Adapters that turn uploaded rows and live feed payloads into typed,
geofence-classified models. Field-level problems never raise here.
"""

from yardwatch.ingestion.batch import build_asset_records
from yardwatch.ingestion.feed import decode_feed
from yardwatch.ingestion.tables import read_rows

__all__ = ["build_asset_records", "decode_feed", "read_rows"]
