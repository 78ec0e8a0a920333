"""Car (inventory item) model."""

from __future__ import annotations

from pydantic import ConfigDict

from dealerportal.models._base import DirectoryModel, RecordId


class Car(DirectoryModel):
    """A car listed by a dealer.

    Only the fields the portal acts on are declared. Display fields
    (make, model, price, photos, ...) are kept as pydantic extras and
    survive status updates untouched::

        car = Car.model_validate({"id": 1, "is_sold": False, "make": "Volvo"})
        car.model_extra["make"]  # "Volvo"
    """

    model_config = ConfigDict(extra="allow")

    id: RecordId
    dealer_id: RecordId = ""
    is_sold: bool = False

    def with_status(self, is_sold: bool) -> Car:
        """Copy of this car with ``is_sold`` replaced."""
        return self.model_copy(update={"is_sold": is_sold})
