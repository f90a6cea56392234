"""Monitor configuration for yardwatch."""

from __future__ import annotations

import dataclasses
import math
import os
from typing import Any

from yardwatch.exceptions import YardConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, cast: type[float] | type[int]) -> float | int:
    try:
        return cast(value.strip())
    except ValueError as exc:
        raise YardConfigError(f"{env_key} must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class YardConfig:
    """Monitor configuration.

    Parameters
    ----------
    yard_lat : float
        Latitude of the yard centre in degrees.
    yard_lng : float
        Longitude of the yard centre in degrees.
    yard_radius_km : float
        Geofence radius in kilometres. A position exactly on the
        boundary counts as inside.
    poll_interval_ms : int
        Milliseconds between live feed polls.
    base_url : str
        Base endpoint shared by the live feed and the alert sink.
    feed_path : str
        Path of the live position feed, appended to ``base_url``.
    alert_path : str
        Path alerts are POSTed to, appended to ``base_url``.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    include_unmatched : bool
        Whether the merged view also lists live positions that have no
        uploaded record. Off by default.
    """

    yard_lat: float = -33.870
    yard_lng: float = 151.200
    yard_radius_km: float = 0.5
    poll_interval_ms: int = 60000
    base_url: str = "http://localhost:8000/api"
    feed_path: str = "/gps-data"
    alert_path: str = "/alert"
    request_timeout: float = 10.0
    include_unmatched: bool = False

    def __post_init__(self) -> None:
        if not (math.isfinite(self.yard_lat) and -90.0 <= self.yard_lat <= 90.0):
            raise YardConfigError(f"yard_lat out of range: {self.yard_lat}")
        if not (math.isfinite(self.yard_lng) and -180.0 <= self.yard_lng <= 180.0):
            raise YardConfigError(f"yard_lng out of range: {self.yard_lng}")
        if not (math.isfinite(self.yard_radius_km) and self.yard_radius_km > 0):
            raise YardConfigError(f"yard_radius_km must be positive, got {self.yard_radius_km}")
        if self.poll_interval_ms <= 0:
            raise YardConfigError(f"poll_interval_ms must be positive, got {self.poll_interval_ms}")
        if self.request_timeout <= 0:
            raise YardConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        # Normalise so that f"{base_url}{path}" never doubles the slash.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def poll_interval(self) -> float:
        """Poll interval in seconds."""
        return self.poll_interval_ms / 1000.0

    @property
    def feed_url(self) -> str:
        return f"{self.base_url}{self.feed_path}"

    @property
    def alert_url(self) -> str:
        return f"{self.base_url}{self.alert_path}"

    @classmethod
    def from_env(cls, **overrides: Any) -> YardConfig:
        """Create configuration from environment variables.

        Reads optional ``YARDWATCH_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        YardConfig
            Populated configuration.

        Raises
        ------
        YardConfigError
            If a numeric variable does not parse or a value is out of range.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "YARDWATCH_BASE_URL": "base_url",
            "YARDWATCH_FEED_PATH": "feed_path",
            "YARDWATCH_ALERT_PATH": "alert_path",
        }
        _ENV_NUMBER_MAP: dict[str, tuple[str, type[float] | type[int]]] = {
            "YARDWATCH_YARD_LAT": ("yard_lat", float),
            "YARDWATCH_YARD_LNG": ("yard_lng", float),
            "YARDWATCH_YARD_RADIUS_KM": ("yard_radius_km", float),
            "YARDWATCH_POLL_INTERVAL_MS": ("poll_interval_ms", int),
            "YARDWATCH_REQUEST_TIMEOUT": ("request_timeout", float),
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        for env_key, (field_name, cast) in _ENV_NUMBER_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, cast)

        if "include_unmatched" not in overrides:
            config_kwargs["include_unmatched"] = _env_bool(env.get("YARDWATCH_INCLUDE_UNMATCHED"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
