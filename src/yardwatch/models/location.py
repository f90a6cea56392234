"""Coordinate model."""

from __future__ import annotations

import math

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Location(BaseModel):
    """A point in degrees.

    Either coordinate may be NaN when the source value was unparsable;
    such a location is never inside the yard.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    lat: float = Field(validation_alias=AliasChoices("lat", "latitude"))
    lng: float = Field(validation_alias=AliasChoices("lng", "lon", "longitude"))

    @property
    def is_valid(self) -> bool:
        """Whether both coordinates are finite numbers."""
        return math.isfinite(self.lat) and math.isfinite(self.lng)
