"""Dealer model."""

from __future__ import annotations

from pydantic import Field

from dealerportal.models._base import DirectoryModel, RecordId


class Dealer(DirectoryModel):
    """A dealer account.

    Lookups only select ``id`` and ``name``; ``id_number`` is empty
    unless the caller selected it explicitly.
    """

    id: RecordId
    name: str = ""
    id_number: str = Field(default="", repr=False)
