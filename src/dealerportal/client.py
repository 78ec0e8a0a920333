"""High-level async client for the dealer directory."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import aiohttp

from dealerportal._api import cars as _cars_api
from dealerportal._api import dealers as _dealers_api
from dealerportal._transport import RestTransport, Transport
from dealerportal.config import PortalConfig
from dealerportal.exceptions import DealerPortalError
from dealerportal.models.car import Car
from dealerportal.models.dealer import Dealer

_logger = logging.getLogger(__name__)


class DirectoryService(Protocol):
    """Operations the session and inventory components need.

    :class:`DirectoryClient` is the production implementation; tests
    pass small in-memory doubles.
    """

    async def validate_dealer(self, dealer_id: str) -> Dealer:
        ...

    async def login_dealer(self, id_number: str) -> Dealer:
        ...

    async def get_dealer_cars(self, dealer_id: str) -> list[Car]:
        ...

    async def update_car_status(self, car_id: str, is_sold: bool) -> None:
        ...


class DirectoryClient:
    """Async client for the hosted dealer directory.

    Usage::

        async with DirectoryClient(PortalConfig.from_env()) as directory:
            dealer = await directory.validate_dealer("42")
            cars = await directory.get_dealer_cars(dealer.id)
    """

    def __init__(
        self,
        config: PortalConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport

    @property
    def config(self) -> PortalConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> DirectoryClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = RestTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise DealerPortalError("Client not initialized. Use 'async with DirectoryClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Dealers
    # ------------------------------------------------------------------

    async def validate_dealer(self, dealer_id: str) -> Dealer:
        """Look up a dealer by primary id (raises ``DealerNotFoundError``)."""
        return await _dealers_api.validate_dealer(self._config, self._require_transport(), dealer_id)

    async def login_dealer(self, id_number: str) -> Dealer:
        """Look up a dealer by secondary identifier (raises ``DealerNotFoundError``)."""
        return await _dealers_api.login_dealer(self._config, self._require_transport(), id_number)

    # ------------------------------------------------------------------
    # Inventory
    # ------------------------------------------------------------------

    async def get_dealer_cars(self, dealer_id: str) -> list[Car]:
        return await _cars_api.get_dealer_cars(self._config, self._require_transport(), dealer_id)

    async def update_car_status(self, car_id: str, is_sold: bool) -> None:
        await _cars_api.update_car_status(self._config, self._require_transport(), car_id, is_sold)
        _logger.info("Car %s marked is_sold=%s", car_id, is_sold)
