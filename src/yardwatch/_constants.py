"""Static constants for yardwatch."""

from __future__ import annotations

#: Mean Earth radius used by the haversine distance, in kilometres.
EARTH_RADIUS_KM: float = 6371.0

#: Live feed coordinates are fixed-point degrees scaled by this factor.
FEED_COORDINATE_SCALE: float = 100000.0

#: Prefix for ids synthesized from a batch row index.
BATCH_ID_PREFIX: str = "TRAILER"

#: Prefix for ids synthesized from a live feed item index.
FEED_ID_PREFIX: str = "GPS"

#: Placeholder service date for rows that carry none.
UNKNOWN_SERVICE_DATE: str = "Unknown"

USER_AGENT: str = "yardwatch/1 (+aiohttp)"
