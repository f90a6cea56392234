"""Arrival alert endpoint.

Endpoint:
  - POST /alert (configurable via ``YardConfig.alert_path``)
"""

from __future__ import annotations

from yardwatch._transport import Transport
from yardwatch.config import YardConfig


def build_alert_payload(asset_id: str) -> dict[str, str]:
    return {"trailerId": asset_id}


async def post_alert(config: YardConfig, transport: Transport, asset_id: str) -> None:
    """Send a single arrival alert. No retries."""
    await transport.post_json(config.alert_path, build_alert_payload(asset_id))
