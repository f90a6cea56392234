"""Circular yard geofence.

The yard is a single circle on the Earth's surface. Distances use the
haversine great-circle formula on a sphere of radius 6371 km, which is
well inside the accuracy of consumer GPS at yard scale.

Classification never raises: a coordinate that is NaN or infinite is
simply not in the yard.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from yardwatch._constants import EARTH_RADIUS_KM
from yardwatch.status import YardStatus

if TYPE_CHECKING:
    from yardwatch.config import YardConfig
    from yardwatch.models.location import Location


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in kilometres.

    NaN in any argument propagates to a NaN result.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = math.sin(d_lat / 2) ** 2 + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    # Rounding can push ``a`` a hair above 1 for antipodal points.
    if a > 1.0:
        a = 1.0
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


@dataclass(frozen=True)
class Geofence:
    """Fixed circular zone around the yard centre."""

    center_lat: float
    center_lng: float
    radius_km: float = 0.5

    @classmethod
    def from_config(cls, config: YardConfig) -> Geofence:
        return cls(
            center_lat=config.yard_lat,
            center_lng=config.yard_lng,
            radius_km=config.yard_radius_km,
        )

    def distance_km(self, lat: float, lng: float) -> float:
        """Distance from the yard centre, NaN for unusable coordinates."""
        if not (math.isfinite(lat) and math.isfinite(lng)):
            return math.nan
        return haversine_km(self.center_lat, self.center_lng, lat, lng)

    def in_yard(self, lat: float, lng: float) -> bool:
        """Return ``True`` when the point lies within the radius (inclusive)."""
        # NaN compares false, so unusable coordinates land outside.
        return self.distance_km(lat, lng) <= self.radius_km

    def classify(self, location: Location) -> YardStatus:
        if self.in_yard(location.lat, location.lng):
            return YardStatus.IN_YARD
        return YardStatus.OUT_FOR_JOB
