"""Best-effort arrival alerts.

Each alert is a single POST scheduled as its own task. A failed alert is
logged and dropped; it is never retried and never reaches the poll cycle
that raised it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from yardwatch._api.alert import post_alert
from yardwatch._transport import Transport
from yardwatch.config import YardConfig
from yardwatch.exceptions import YardError

_logger = logging.getLogger(__name__)


class AlertDispatcher:
    """Fire-and-forget dispatcher for arrival alerts."""

    def __init__(
        self,
        config: YardConfig,
        transport: Transport,
        *,
        on_sent: Callable[[str], None] | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._on_sent = on_sent
        self._tasks: set[asyncio.Task[bool]] = set()

    @property
    def pending(self) -> int:
        """Number of alerts still in flight."""
        return len(self._tasks)

    def alert(self, asset_id: str) -> None:
        """Schedule an alert for *asset_id* and return immediately.

        Must be called from the event loop thread.
        """
        task = asyncio.get_running_loop().create_task(self.send(asset_id), name=f"yardwatch-alert-{asset_id}")
        # The loop only keeps weak references to tasks.
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def send(self, asset_id: str) -> bool:
        """Deliver one alert now. Returns ``False`` if it failed."""
        try:
            await post_alert(self._config, self._transport, asset_id)
        except YardError as exc:
            _logger.warning("Alert for %s failed: %s", asset_id, exc)
            return False
        except Exception:
            _logger.warning("Alert for %s failed unexpectedly", asset_id, exc_info=True)
            return False

        _logger.info("Alert sent: %s arrived in yard", asset_id)
        if self._on_sent is not None:
            try:
                self._on_sent(asset_id)
            except Exception:
                _logger.debug("on_sent callback failed", exc_info=True)
        return True

    async def aclose(self) -> None:
        """Wait for alerts already in flight."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
