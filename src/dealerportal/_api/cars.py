"""Inventory endpoints against the ``cars`` table."""

from __future__ import annotations

import logging
from typing import Any

from dealerportal._api._common import eq, error_fields, raise_for_response
from dealerportal._transport import Transport
from dealerportal.config import PortalConfig
from dealerportal.exceptions import DirectoryApiError, DirectoryRemoteError
from dealerportal.models.car import Car

_logger = logging.getLogger(__name__)


def _parse_cars(endpoint: str, body: Any) -> list[Car]:
    if body is None:
        return []
    if not isinstance(body, list):
        raise DirectoryApiError(
            f"{endpoint} returned {type(body).__name__}, expected a list",
            code="invalid_body",
            endpoint=endpoint,
        )
    return [Car.model_validate(item) for item in body if isinstance(item, dict)]


async def get_dealer_cars(config: PortalConfig, transport: Transport, dealer_id: str) -> list[Car]:
    """Fetch every car owned by *dealer_id*, in the configured order."""
    endpoint = f"/{config.cars_table}"
    params: dict[str, str] = {"select": "*", "dealer_id": eq(dealer_id)}
    if config.cars_order:
        params["order"] = config.cars_order

    response = await transport.request("GET", endpoint, params=params)
    raise_for_response(response, endpoint=endpoint)
    cars = _parse_cars(endpoint, response.body)
    _logger.debug("Fetched %d cars for dealer=%s", len(cars), dealer_id)
    return cars


async def update_car_status(config: PortalConfig, transport: Transport, car_id: str, is_sold: bool) -> None:
    """Set ``is_sold`` on one car.

    Raises
    ------
    DirectoryRemoteError
        If the backend rejects the update.
    """
    endpoint = f"/{config.cars_table}"
    response = await transport.request(
        "PATCH",
        endpoint,
        params={"id": eq(car_id)},
        json_body={"is_sold": bool(is_sold)},
    )
    if not response.ok:
        code, message = error_fields(response.body)
        _logger.debug("Status update rejected car=%s status=%d code=%s", car_id, response.status, code)
        raise DirectoryRemoteError(
            f"{endpoint} update rejected: status={response.status} code={code} message={message}",
            code=code or str(response.status),
            endpoint=endpoint,
        )
