"""Live position feed endpoint.

Endpoint:
  - GET /gps-data (configurable via ``YardConfig.feed_path``)
"""

from __future__ import annotations

from yardwatch._transport import Transport
from yardwatch.config import YardConfig
from yardwatch.geofence import Geofence
from yardwatch.ingestion.feed import decode_feed
from yardwatch.models.asset import LivePosition


async def fetch_live_positions(config: YardConfig, transport: Transport, geofence: Geofence) -> list[LivePosition]:
    """Fetch and decode one snapshot of the live feed.

    Raises
    ------
    YardTransportError
        If the request fails or the payload has no ``report`` list.
    """
    payload = await transport.get_json(config.feed_path)
    return decode_feed(payload, geofence, endpoint=config.feed_path)
