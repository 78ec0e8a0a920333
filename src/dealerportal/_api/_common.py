"""Shared helpers for directory endpoint modules.

This module centralizes:
- PostgREST ``eq.`` filter construction
- mapping error replies onto the exception hierarchy

It is internal to dealerportal and may change at any time.
"""

from __future__ import annotations

from typing import Any

from dealerportal._constants import NO_SINGLE_ROW_CODE
from dealerportal._transport import RestResponse
from dealerportal.exceptions import DealerNotFoundError, DirectoryApiError, DirectoryTransportError


def eq(value: object) -> str:
    """PostgREST equality filter for *value*."""
    return f"eq.{value}"


def error_fields(body: Any) -> tuple[str, str]:
    """``(code, message)`` from a PostgREST error body, blank when absent."""
    if isinstance(body, dict):
        return str(body.get("code") or ""), str(body.get("message") or "")
    return "", ""


def raise_for_response(
    response: RestResponse,
    *,
    endpoint: str,
    not_found_ok: bool = False,
) -> None:
    """Raise the matching exception for a failed reply.

    With *not_found_ok* a single-object request that matched no row
    (``PGRST116``/HTTP 406) raises :class:`DealerNotFoundError` instead
    of :class:`DirectoryApiError`. 5xx replies are treated as transport
    failures.
    """
    if response.ok:
        return

    code, message = error_fields(response.body)
    if not_found_ok and (code == NO_SINGLE_ROW_CODE or response.status == 406):
        raise DealerNotFoundError(
            f"{endpoint}: no matching record",
            code=code or str(response.status),
            endpoint=endpoint,
        )
    if response.status >= 500:
        raise DirectoryTransportError(
            f"HTTP {response.status} from {endpoint}: {message}",
            status_code=response.status,
            endpoint=endpoint,
        )
    raise DirectoryApiError(
        f"{endpoint} failed: status={response.status} code={code} message={message}",
        code=code or str(response.status),
        endpoint=endpoint,
    )


def require_object(response: RestResponse, *, endpoint: str) -> dict[str, Any]:
    """Return the single-object body, treating anything else as not found."""
    body = response.body
    if not isinstance(body, dict) or not body:
        raise DealerNotFoundError(f"{endpoint}: empty record", endpoint=endpoint)
    return body
