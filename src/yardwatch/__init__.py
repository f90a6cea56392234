"""yardwatch - Async geofence monitor for fleet trailers and their home yard."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("yardwatch")
except PackageNotFoundError:
    __version__ = "0+local"
from yardwatch.alerts import AlertDispatcher
from yardwatch.config import YardConfig
from yardwatch.exceptions import (
    YardConfigError,
    YardDecodeError,
    YardError,
    YardIngestError,
    YardTransportError,
)
from yardwatch.geofence import Geofence, haversine_km
from yardwatch.models import AssetRecord, LivePosition, Location, YardStatus
from yardwatch.monitor import YardMonitor
from yardwatch.poller import CancellationToken, LiveFeedPoller
from yardwatch.state.merge import merge_assets
from yardwatch.state.store import LivePositionStore, RecordStore
from yardwatch.state.tracker import TransitionTracker

__all__ = [
    "__version__",
    "AlertDispatcher",
    "AssetRecord",
    "CancellationToken",
    "Geofence",
    "LiveFeedPoller",
    "LivePosition",
    "LivePositionStore",
    "Location",
    "RecordStore",
    "TransitionTracker",
    "YardConfig",
    "YardConfigError",
    "YardDecodeError",
    "YardError",
    "YardIngestError",
    "YardMonitor",
    "YardStatus",
    "YardTransportError",
    "haversine_km",
    "merge_assets",
]
