"""Dealer inventory listing and sold/available toggling."""

from __future__ import annotations

import asyncio
import logging
from enum import StrEnum

from dealerportal._constants import MSG_LOAD_FAILED, MSG_UPDATE_FAILED, status_message
from dealerportal.client import DirectoryService
from dealerportal.exceptions import DealerPortalError, LoadFailedError, UpdateFailedError
from dealerportal.lifetime import ViewLifetime
from dealerportal.models.car import Car
from dealerportal.surfaces import NotificationLevel, Notifier

_logger = logging.getLogger(__name__)


class InventoryState(StrEnum):
    IDLE = "idle"
    READY = "ready"
    FAILED = "failed"


class InventorySynchronizer:
    """Keeps a local copy of one dealer's cars in sync with the directory.

    Status changes are applied locally only after the directory accepted
    them, so a failed update never needs rolling back.

    Loads are numbered: only the most recently issued :meth:`load` may
    replace the list, so a slow response for a previous dealer cannot
    overwrite a newer one. A car with a status update in flight rejects
    further toggles until the first one settles.
    """

    def __init__(
        self,
        directory: DirectoryService,
        notifier: Notifier,
        *,
        lifetime: ViewLifetime | None = None,
    ) -> None:
        self._directory = directory
        self._notifier = notifier
        self._lifetime = lifetime or ViewLifetime()
        self._cars: list[Car] = []
        self._dealer_id: str | None = None
        self._is_loading = True
        self._state = InventoryState.IDLE
        self._generation = 0
        self._toggling: set[str] = set()
        self.last_error: DealerPortalError | None = None

    @property
    def cars(self) -> list[Car]:
        return list(self._cars)

    @property
    def dealer_id(self) -> str | None:
        return self._dealer_id

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def state(self) -> InventoryState:
        return self._state

    def is_toggling(self, car_id: str) -> bool:
        return car_id in self._toggling

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def set_dealer(self, dealer_id: str | None) -> asyncio.Task[bool] | None:
        """Point the inventory at *dealer_id*, reloading if it changed.

        Any change makes loads still in flight for the previous dealer
        stale. Returns the scheduled load task, or ``None`` when the id did
        not change or is empty.
        """
        if dealer_id == self._dealer_id:
            return None
        self._dealer_id = dealer_id
        self._generation += 1
        if not dealer_id:
            return None
        return self._lifetime.spawn(self.load(dealer_id), name=f"inventory-load-{dealer_id}")

    async def load(self, dealer_id: str | None) -> bool:
        """Replace the car list with the directory's current listing.

        Empty *dealer_id* is a no-op. Otherwise *dealer_id* becomes the
        dealer that :meth:`refresh` reloads. On failure the previous list is
        kept and an error notification is shown. Returns ``True`` when the
        list was replaced.
        """
        if not dealer_id:
            return False

        self._dealer_id = dealer_id
        self._generation += 1
        generation = self._generation
        self._is_loading = True
        self._state = InventoryState.IDLE

        try:
            cars = await self._directory.get_dealer_cars(dealer_id)
        except Exception as exc:
            if self._is_stale(generation):
                return False
            _logger.error("Error loading cars for dealer %s: %s", dealer_id, type(exc).__name__, exc_info=True)
            error = LoadFailedError(MSG_LOAD_FAILED)
            error.__cause__ = exc
            self.last_error = error
            self._state = InventoryState.FAILED
            self._is_loading = False
            self._notifier.notify(NotificationLevel.ERROR, MSG_LOAD_FAILED)
            return False

        if self._is_stale(generation):
            return False
        self._cars = list(cars)
        self.last_error = None
        self._state = InventoryState.READY
        self._is_loading = False
        return True

    async def refresh(self) -> bool:
        """Reload the current dealer's cars."""
        return await self.load(self._dealer_id)

    def _is_stale(self, generation: int) -> bool:
        if self._lifetime.closed:
            _logger.debug("Dropping inventory result for closed view")
            return True
        if generation != self._generation:
            _logger.debug("Dropping superseded inventory load #%d", generation)
            return True
        return False

    # ------------------------------------------------------------------
    # Status toggling
    # ------------------------------------------------------------------

    async def toggle_status(self, car: Car) -> bool:
        """Flip *car* between sold and available.

        Returns ``True`` when the directory accepted the change. Only the
        car with the same id is replaced; every other car, and the list
        order, stay as they were.
        """
        if car.id in self._toggling:
            _logger.warning("Ignoring toggle for car %s: update already in flight", car.id)
            return False

        target = not car.is_sold
        self._toggling.add(car.id)
        try:
            await self._directory.update_car_status(car.id, target)
        except Exception as exc:
            _logger.error("Error updating car %s: %s", car.id, type(exc).__name__, exc_info=True)
            if self._lifetime.closed:
                return False
            error = UpdateFailedError(MSG_UPDATE_FAILED)
            error.__cause__ = exc
            self.last_error = error
            self._notifier.notify(NotificationLevel.ERROR, MSG_UPDATE_FAILED)
            return False
        finally:
            self._toggling.discard(car.id)

        if self._lifetime.closed:
            return True
        self._cars = [c.with_status(target) if c.id == car.id else c for c in self._cars]
        self._notifier.notify(NotificationLevel.SUCCESS, status_message(target))
        return True
