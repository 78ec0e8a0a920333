"""Dealer lookup endpoints against the ``dealers`` table.

Both lookups request a single object (``select ... eq ... single``):
zero rows map to :class:`~dealerportal.exceptions.DealerNotFoundError`.
"""

from __future__ import annotations

import logging

from dealerportal._api._common import eq, raise_for_response, require_object
from dealerportal._transport import Transport
from dealerportal.config import PortalConfig
from dealerportal.exceptions import DealerNotFoundError
from dealerportal.models.dealer import Dealer

_logger = logging.getLogger(__name__)

_DEALER_COLUMNS = "id,name"


async def _fetch_single_dealer(
    config: PortalConfig,
    transport: Transport,
    column: str,
    value: str,
) -> Dealer:
    endpoint = f"/{config.dealers_table}"
    response = await transport.request(
        "GET",
        endpoint,
        params={"select": _DEALER_COLUMNS, column: eq(value)},
        single=True,
    )
    raise_for_response(response, endpoint=endpoint, not_found_ok=True)
    return Dealer.model_validate(require_object(response, endpoint=endpoint))


async def validate_dealer(config: PortalConfig, transport: Transport, dealer_id: str) -> Dealer:
    """Confirm *dealer_id* belongs to an existing dealer.

    Raises
    ------
    DealerNotFoundError
        If no dealer has that id (or the id is blank).
    """
    if not dealer_id or not dealer_id.strip():
        raise DealerNotFoundError("Invalid dealer credentials", endpoint=f"/{config.dealers_table}")
    return await _fetch_single_dealer(config, transport, "id", dealer_id.strip())


async def login_dealer(config: PortalConfig, transport: Transport, id_number: str) -> Dealer:
    """Find the dealer registered under the secondary identifier *id_number*.

    The identifier is trimmed before the lookup.

    Raises
    ------
    DealerNotFoundError
        If no dealer matches.
    """
    trimmed = id_number.strip()
    if not trimmed:
        raise DealerNotFoundError("Invalid dealer ID", endpoint=f"/{config.dealers_table}")
    dealer = await _fetch_single_dealer(config, transport, "id_number", trimmed)
    _logger.debug("Dealer login lookup matched id=%s", dealer.id)
    return dealer
