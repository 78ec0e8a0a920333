"""HTTP transport for the PostgREST directory API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp

from dealerportal._constants import REST_PREFIX, SINGLE_OBJECT_ACCEPT, USER_AGENT
from dealerportal._redact import redact_for_log
from dealerportal.config import PortalConfig
from dealerportal.exceptions import DirectoryTransportError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RestResponse:
    """Decoded reply: HTTP status plus the JSON body (``None`` when empty)."""

    status: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Test doubles only need to implement :meth:`request`.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
        single: bool = False,
    ) -> RestResponse:
        ...


class RestTransport:
    """aiohttp transport that adds project auth headers and decodes JSON."""

    def __init__(self, config: PortalConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self, *, single: bool, has_body: bool) -> dict[str, str]:
        headers: dict[str, str] = {
            "apikey": self._config.api_key,
            "authorization": f"Bearer {self._config.api_key}",
            "user-agent": USER_AGENT,
            "accept": SINGLE_OBJECT_ACCEPT if single else "application/json",
        }
        if has_body:
            headers["content-type"] = "application/json"
            headers["prefer"] = "return=minimal"
        return headers

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
        single: bool = False,
    ) -> RestResponse:
        """Send one REST call and return the decoded response.

        Non-2xx replies are returned, not raised: mapping PostgREST error
        bodies to exceptions is the endpoint modules' job. Only network
        failures and undecodable bodies raise here.
        """
        url = f"{self._config.base_url}{REST_PREFIX}{endpoint}"
        headers = self._headers(single=single, has_body=json_body is not None)
        data = json.dumps(json_body, separators=(",", ":")) if json_body is not None else None

        _logger.debug("%s %s params=%s", method, url, redact_for_log(dict(params or {})))

        try:
            async with self._http.request(
                method,
                url,
                params=dict(params or {}),
                data=data,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise DirectoryTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except TimeoutError as exc:
            raise DirectoryTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc

        if not text.strip():
            _logger.debug("%s %s -> %d (empty)", method, endpoint, status)
            return RestResponse(status=status, body=None)

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DirectoryTransportError(
                f"Invalid JSON from {endpoint} (HTTP {status}): {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        _logger.debug("%s %s -> %d body=%s", method, endpoint, status, redact_for_log(body))
        return RestResponse(status=status, body=body)
