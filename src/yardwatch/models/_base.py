"""Base models shared by batch records and live positions.

Every asset-shaped model inherits from :class:`ClassifiedModel`, which
carries a :class:`~yardwatch.models.location.Location` and the
:class:`~yardwatch.geofence.Geofence` it is judged against. ``status`` is
a computed, read-only property: there is no way to construct or update a
model with a status that disagrees with its location.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from yardwatch.geofence import Geofence
from yardwatch.models.location import Location
from yardwatch.status import YardStatus


class YardBaseModel(BaseModel):
    """Frozen base for yardwatch models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )


class ClassifiedModel(YardBaseModel):
    """A located asset whose zone status derives from its location."""

    location: Location
    geofence: Geofence = Field(exclude=True, repr=False)
    """Zone used to derive ``status``; not part of dumps."""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> YardStatus:
        return self.geofence.classify(self.location)

    @property
    def in_yard(self) -> bool:
        return self.status is YardStatus.IN_YARD
