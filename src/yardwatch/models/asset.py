"""Asset models: batch records and live positions."""

from __future__ import annotations

from pydantic import AliasChoices, Field, field_validator

from yardwatch._constants import UNKNOWN_SERVICE_DATE
from yardwatch.models._base import ClassifiedModel
from yardwatch.models.location import Location


class LivePosition(ClassifiedModel):
    """A position reported by the live feed for one poll cycle.

    Parameters
    ----------
    id : str
        Vehicle identifier from the feed, or a synthesized ``GPS-<index>``.
    location : Location
        Decoded position in degrees.
    geofence : Geofence
        Zone the ``status`` is derived against.
    """

    id: str


class AssetRecord(ClassifiedModel):
    """An asset as uploaded in a batch, possibly overlaid with live data.

    Parameters
    ----------
    id : str
        Stable join key shared with the live feed.
    last_service_date : str
        Informational; ``"Unknown"`` when the upload carried none.
        Accepts the upload column name ``lastService`` as input.
    location : Location
        Position in degrees; NaN when unparsable.
    geofence : Geofence
        Zone the ``status`` is derived against.
    """

    id: str
    last_service_date: str = Field(
        default=UNKNOWN_SERVICE_DATE,
        validation_alias=AliasChoices("last_service_date", "lastService", "lastServiceDate"),
    )

    @field_validator("last_service_date", mode="before")
    @classmethod
    def _default_service_date(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return UNKNOWN_SERVICE_DATE
        return value if isinstance(value, str) else str(value)

    def with_location(self, location: Location) -> AssetRecord:
        """Return a copy at *location*; ``status`` follows automatically."""
        return self.model_copy(update={"location": location})

    def overlay(self, position: LivePosition) -> AssetRecord:
        """Return a copy placed and classified exactly as *position*."""
        return self.model_copy(update={"location": position.location, "geofence": position.geofence})

    @classmethod
    def from_live(cls, position: LivePosition) -> AssetRecord:
        """Placeholder record for a live position with no uploaded metadata."""
        return cls(id=position.id, location=position.location, geofence=position.geofence)
