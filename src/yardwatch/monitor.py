"""High-level async yard monitor."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

import aiohttp

from yardwatch._api.feed import fetch_live_positions
from yardwatch._transport import HttpTransport, Transport
from yardwatch.alerts import AlertDispatcher
from yardwatch.config import YardConfig
from yardwatch.exceptions import YardError
from yardwatch.geofence import Geofence
from yardwatch.ingestion.batch import build_asset_records
from yardwatch.ingestion.tables import read_rows
from yardwatch.models.asset import AssetRecord, LivePosition
from yardwatch.poller import LiveFeedPoller
from yardwatch.state.merge import merge_assets
from yardwatch.state.store import LivePositionStore, RecordStore
from yardwatch.state.tracker import TransitionTracker

_logger = logging.getLogger(__name__)


class YardMonitor:
    """Tracks uploaded assets against the yard using the live feed.

    Usage::

        async with YardMonitor(config) as monitor:
            monitor.load_file("trailers.xlsx")
            monitor.start()
            ...
            view = monitor.merged_view()
    """

    def __init__(
        self,
        config: YardConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        on_alert: Callable[[str], None] | None = None,
    ) -> None:
        self._config = config if config is not None else YardConfig()
        self._geofence = Geofence.from_config(self._config)
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._owns_transport = False
        self._on_alert = on_alert
        self._records = RecordStore()
        self._live = LivePositionStore()
        self._dispatcher: AlertDispatcher | None = None
        self._tracker: TransitionTracker | None = None
        self._poller: LiveFeedPoller[list[LivePosition]] | None = None
        if transport is not None:
            self._bind(transport)

    @property
    def config(self) -> YardConfig:
        return self._config

    @property
    def geofence(self) -> Geofence:
        return self._geofence

    @property
    def tracker(self) -> TransitionTracker:
        return self._require_tracker()

    @property
    def dispatcher(self) -> AlertDispatcher:
        if self._dispatcher is None:
            raise YardError("Monitor not initialized. Use 'async with YardMonitor(...) as monitor:'")
        return self._dispatcher

    @property
    def poller(self) -> LiveFeedPoller[list[LivePosition]]:
        if self._poller is None:
            raise YardError("Monitor not initialized. Use 'async with YardMonitor(...) as monitor:'")
        return self._poller

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> YardMonitor:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._bind(HttpTransport(self._config, self._http_session))
            self._owns_transport = True
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.stop()
        if self._poller is not None:
            await self._poller.wait_idle()
        if self._dispatcher is not None:
            await self._dispatcher.aclose()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if self._owns_transport:
            # The transport is tied to a session that may now be closed.
            self._transport = None
            self._dispatcher = None
            self._tracker = None
            self._poller = None
            self._owns_transport = False

    def _bind(self, transport: Transport) -> None:
        self._transport = transport
        self._dispatcher = AlertDispatcher(self._config, transport, on_sent=self._on_alert)
        self._tracker = TransitionTracker(on_transition=self._dispatcher.alert)
        self._poller = LiveFeedPoller(self._fetch, self._apply_cycle, interval=self._config.poll_interval)

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise YardError("Monitor not initialized. Use 'async with YardMonitor(...) as monitor:'")
        return self._transport

    def _require_tracker(self) -> TransitionTracker:
        if self._tracker is None:
            raise YardError("Monitor not initialized. Use 'async with YardMonitor(...) as monitor:'")
        return self._tracker

    # ------------------------------------------------------------------
    # Batch upload
    # ------------------------------------------------------------------

    def load_rows(self, rows: Iterable[Mapping[str, Any]]) -> list[AssetRecord]:
        """Replace the uploaded asset list with *rows*."""
        records = build_asset_records(rows, self._geofence)
        self._records.replace(records)
        _logger.info("Loaded %d asset record(s)", len(records))
        return records

    def load_file(self, path: str | Path) -> list[AssetRecord]:
        """Read a CSV/Excel upload and replace the asset list with it."""
        return self.load_rows(read_rows(path))

    # ------------------------------------------------------------------
    # Live feed
    # ------------------------------------------------------------------

    async def _fetch(self) -> list[LivePosition]:
        return await fetch_live_positions(self._config, self._require_transport(), self._geofence)

    def _apply_cycle(self, positions: list[LivePosition]) -> None:
        # No awaits here: the tracker and the live store move together.
        self._require_tracker().update(positions)
        self._live.replace(positions)

    async def refresh(self) -> list[LivePosition] | None:
        """Run one poll cycle now and wait for it.

        Waits for a timer fetch already in flight instead of racing it.
        Unlike timer-driven cycles, errors propagate to the caller.
        Returns ``None`` when ``stop`` discarded the cycle.
        """
        return await self.poller.run_once()

    def start(self) -> None:
        """Start polling the live feed on the configured interval."""
        self.poller.start()

    def stop(self) -> None:
        """Stop polling. Any fetch still in flight is discarded."""
        if self._poller is not None:
            self._poller.stop()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def records(self) -> tuple[AssetRecord, ...]:
        return self._records.snapshot()

    def live_positions(self) -> Mapping[str, LivePosition]:
        return self._live.snapshot()

    def merged_view(self, *, include_unmatched: bool | None = None) -> list[AssetRecord]:
        """Uploaded records overlaid with the latest live positions."""
        if include_unmatched is None:
            include_unmatched = self._config.include_unmatched
        return merge_assets(self._records.snapshot(), self._live.snapshot(), include_unmatched=include_unmatched)
