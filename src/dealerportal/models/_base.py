"""Base model and shared field types for directory records.

Every record model inherits from :class:`DirectoryModel` which provides
a frozen, populate-by-name configuration.

Primary and foreign keys are exposed as :data:`RecordId`: the hosted
database may return integer or UUID keys, and the portal always stores
and compares them as strings.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict


def coerce_record_id(value: Any) -> Any:
    """Convert integer keys to ``str``; leave other values for pydantic to check."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return value


RecordId = Annotated[str, BeforeValidator(coerce_record_id)]
"""Annotated type that normalises integer/UUID keys to stripped strings."""


class DirectoryModel(BaseModel):
    """Base for records read from the directory."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
