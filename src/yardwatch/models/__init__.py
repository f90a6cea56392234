"""Data models for yardwatch."""

from yardwatch.models._base import ClassifiedModel, YardBaseModel
from yardwatch.models.asset import AssetRecord, LivePosition
from yardwatch.models.location import Location
from yardwatch.status import YardStatus

__all__ = [
    "AssetRecord",
    "ClassifiedModel",
    "LivePosition",
    "Location",
    "YardBaseModel",
    "YardStatus",
]
