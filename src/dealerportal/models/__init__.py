"""Data models for directory records and portal state."""

from dealerportal.models._base import DirectoryModel, RecordId, coerce_record_id
from dealerportal.models.car import Car
from dealerportal.models.dealer import Dealer

__all__ = [
    "Car",
    "Dealer",
    "DirectoryModel",
    "RecordId",
    "coerce_record_id",
]
