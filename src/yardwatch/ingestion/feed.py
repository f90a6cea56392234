"""Live feed decoding.

The feed reports coordinates as integers in degrees scaled by 1e5::

    {"report": [{"vehicleexternalid": "T-1",
                 "objectlatitude": -3387000,
                 "objectlongitude": 15120000}]}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from yardwatch._constants import FEED_COORDINATE_SCALE, FEED_ID_PREFIX
from yardwatch.exceptions import YardDecodeError
from yardwatch.geofence import Geofence
from yardwatch.ingestion.normalize import parse_coordinate, resolve_id
from yardwatch.models.asset import LivePosition
from yardwatch.models.location import Location

_logger = logging.getLogger(__name__)


def decode_feed_item(item: Any, index: int, geofence: Geofence) -> LivePosition:
    """Decode one report entry; malformed entries degrade rather than raise."""
    data: Mapping[str, Any] = item if isinstance(item, Mapping) else {}
    return LivePosition(
        id=resolve_id(data.get("vehicleexternalid"), prefix=FEED_ID_PREFIX, index=index),
        location=Location(
            lat=parse_coordinate(data.get("objectlatitude"), scale=FEED_COORDINATE_SCALE),
            lng=parse_coordinate(data.get("objectlongitude"), scale=FEED_COORDINATE_SCALE),
        ),
        geofence=geofence,
    )


def decode_feed(payload: Any, geofence: Geofence, *, endpoint: str = "") -> list[LivePosition]:
    """Decode a whole feed response.

    Raises
    ------
    YardDecodeError
        If the payload has no ``report`` list.
    """
    report = payload.get("report") if isinstance(payload, Mapping) else None
    if not isinstance(report, list):
        raise YardDecodeError("Feed response has no 'report' list", endpoint=endpoint)

    positions = [decode_feed_item(item, index, geofence) for index, item in enumerate(report)]
    _logger.debug(
        "Decoded %d live position(s), %d in yard",
        len(positions),
        sum(1 for position in positions if position.in_yard),
    )
    return positions
