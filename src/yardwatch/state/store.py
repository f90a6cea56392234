"""Snapshot stores for uploaded records and live positions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from yardwatch.models.asset import AssetRecord, LivePosition


class RecordStore:
    """The current batch-derived asset list.

    A new upload replaces the previous one wholesale.
    """

    def __init__(self) -> None:
        self._records: tuple[AssetRecord, ...] = ()

    def replace(self, records: Iterable[AssetRecord]) -> None:
        self._records = tuple(records)

    def snapshot(self) -> tuple[AssetRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)


class LivePositionStore:
    """Latest live positions keyed by id.

    Replaced wholesale each poll cycle. When the feed reports the same id
    twice in one cycle, the later entry wins.
    """

    def __init__(self) -> None:
        self._positions: Mapping[str, LivePosition] = MappingProxyType({})

    def replace(self, positions: Iterable[LivePosition]) -> None:
        self._positions = MappingProxyType({position.id: position for position in positions})

    def snapshot(self) -> Mapping[str, LivePosition]:
        return self._positions

    def __len__(self) -> int:
        return len(self._positions)
