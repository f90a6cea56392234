"""Edge-triggered transition tracking.

Remembers the last observed status of every id ever seen on the live
feed and reports the ``Out for Job -> In Yard`` edges. Entries are never
expired: an id that drops off the feed keeps its last status until it
reappears.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType

from yardwatch.models.asset import LivePosition
from yardwatch.status import YardStatus

_logger = logging.getLogger(__name__)


def is_arrival(previous: YardStatus | None, current: YardStatus) -> bool:
    """Whether moving from *previous* to *current* is a yard arrival."""
    return previous is YardStatus.OUT_FOR_JOB and current is YardStatus.IN_YARD


class TransitionTracker:
    """Per-id status memory with edge detection.

    ``update`` is the only mutating operation and must be called from a
    single writer (the poll completion handler).
    """

    def __init__(self, *, on_transition: Callable[[str], None] | None = None) -> None:
        self._on_transition = on_transition
        self._statuses: Mapping[str, YardStatus] = MappingProxyType({})

    def update(self, positions: Iterable[LivePosition]) -> list[str]:
        """Record one cycle of observations and return the ids that arrived.

        Positions are applied in order, so an id reported twice in one
        cycle is compared against its own earlier entry. The new state is
        published before any ``on_transition`` callback runs.
        """
        working = dict(self._statuses)
        arrivals: list[str] = []
        for position in positions:
            current = position.status
            if is_arrival(working.get(position.id), current):
                arrivals.append(position.id)
            working[position.id] = current
        self._statuses = MappingProxyType(working)

        if arrivals:
            _logger.debug("Arrivals this cycle: %s", arrivals)
        if self._on_transition is not None:
            for asset_id in arrivals:
                self._on_transition(asset_id)
        return arrivals

    def previous(self, asset_id: str) -> YardStatus | None:
        return self._statuses.get(asset_id)

    def snapshot(self) -> Mapping[str, YardStatus]:
        return self._statuses

    def __len__(self) -> int:
        return len(self._statuses)

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._statuses
