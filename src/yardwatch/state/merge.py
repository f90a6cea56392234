"""Merged view of uploaded records and live positions."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from yardwatch.models.asset import AssetRecord, LivePosition


def merge_assets(
    records: Sequence[AssetRecord],
    live: Mapping[str, LivePosition],
    *,
    include_unmatched: bool = False,
) -> list[AssetRecord]:
    """Overlay live positions onto uploaded records by id.

    A record with a live match takes the live location (and with it the
    live status) but keeps its own service date. A record without one is
    returned as is. Live positions with no record are left out unless
    *include_unmatched* is set, in which case they follow the records
    with placeholder metadata. Neither input is modified.
    """
    merged: list[AssetRecord] = []
    for record in records:
        match = live.get(record.id)
        merged.append(record if match is None else record.overlay(match))

    if include_unmatched:
        known = {record.id for record in records}
        merged.extend(AssetRecord.from_live(position) for asset_id, position in live.items() if asset_id not in known)
    return merged
