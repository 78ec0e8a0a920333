"""Dealer dashboard: session check followed by inventory load."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from dealerportal._constants import LOGIN_PATH
from dealerportal.client import DirectoryService
from dealerportal.inventory import InventorySynchronizer
from dealerportal.lifetime import ViewLifetime
from dealerportal.session import SessionManager
from dealerportal.storage import KeyValueStore
from dealerportal.surfaces import LoggingNotifier, Navigator, Notifier

_logger = logging.getLogger(__name__)


class DealerDashboard:
    """One mounted dashboard view.

    Both components share a single :class:`ViewLifetime`; leaving the
    ``async with`` block (or calling :meth:`close`) cancels anything still
    in flight.

    Usage::

        async with DealerDashboard(directory, store, navigator) as view:
            await view.mount()
            for car in view.inventory.cars:
                ...
    """

    def __init__(
        self,
        directory: DirectoryService,
        store: KeyValueStore,
        navigator: Navigator,
        notifier: Notifier | None = None,
        *,
        login_path: str = LOGIN_PATH,
    ) -> None:
        self.lifetime = ViewLifetime()
        self.session = SessionManager(
            store,
            directory,
            navigator,
            lifetime=self.lifetime,
            login_path=login_path,
        )
        self.inventory = InventorySynchronizer(
            directory,
            notifier or LoggingNotifier(),
            lifetime=self.lifetime,
        )

    async def __aenter__(self) -> DealerDashboard:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    def mount(self) -> asyncio.Task[None]:
        """Enter the view: validate the session, then load that dealer's cars."""
        return self.lifetime.spawn(self._enter(), name="dealer-dashboard-enter")

    async def _enter(self) -> None:
        session = await self.session.check()
        if not session.is_authenticated:
            return
        task = self.inventory.set_dealer(session.dealer_id)
        if task is not None:
            await task

    def logout(self) -> None:
        self.session.logout()
        self.inventory.set_dealer(None)

    async def close(self) -> None:
        _logger.debug("Closing dashboard (%d pending tasks)", self.lifetime.pending)
        await self.lifetime.close()
