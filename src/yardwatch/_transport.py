"""JSON-over-HTTP transport for the fleet backend."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from yardwatch._constants import USER_AGENT
from yardwatch.config import YardConfig
from yardwatch.exceptions import YardDecodeError, YardTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str) -> Any: ...

    async def post_json(self, endpoint: str, payload: Mapping[str, Any]) -> None: ...


class HttpTransport:
    """aiohttp transport rooted at ``config.base_url``."""

    def __init__(self, config: YardConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)
        self._headers = {"accept": "application/json", "user-agent": USER_AGENT}

    def _url(self, endpoint: str) -> str:
        return f"{self._config.base_url}{endpoint}"

    async def get_json(self, endpoint: str) -> Any:
        """GET *endpoint* and return the decoded JSON body.

        Raises
        ------
        YardTransportError
            On network failure or a non-2xx status.
        YardDecodeError
            If the body is not JSON.
        """
        url = self._url(endpoint)
        _logger.debug("GET %s", url)
        try:
            async with self._http.get(url, headers=self._headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status // 100 != 2:
                    raise YardTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except YardTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise YardTransportError(f"Request to {endpoint} failed: {exc!r}", endpoint=endpoint) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise YardDecodeError(f"Invalid JSON from {endpoint}: {text[:200]}", endpoint=endpoint) from exc

    async def post_json(self, endpoint: str, payload: Mapping[str, Any]) -> None:
        """POST *payload* as JSON. Only success/failure is meaningful.

        Raises
        ------
        YardTransportError
            On network failure or a non-2xx status.
        """
        url = self._url(endpoint)
        _logger.debug("POST %s", url)
        try:
            async with self._http.post(url, json=dict(payload), headers=self._headers, timeout=self._timeout) as resp:
                if resp.status // 100 != 2:
                    text = await resp.text()
                    raise YardTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except YardTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise YardTransportError(f"Request to {endpoint} failed: {exc!r}", endpoint=endpoint) from exc
