"""Dealer session resolution and lifecycle.

:func:`resolve_session` decides *whether* a dealer is logged in and has
no side effects beyond reading the store and querying the directory.
:class:`SessionManager` owns the in-memory :class:`Session` and decides
what to do with the answer (update state, redirect to the login page).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from dealerportal._constants import DEALER_ID_KEY, DEALER_NAME_KEY, LOGIN_PATH, MSG_INVALID_DEALER_ID
from dealerportal.client import DirectoryService
from dealerportal.exceptions import AuthInvalidError, LookupFailedError
from dealerportal.lifetime import ViewLifetime
from dealerportal.storage import KeyValueStore
from dealerportal.surfaces import Navigator

_logger = logging.getLogger(__name__)


class Session(BaseModel):
    """In-memory view of the current dealer.

    Parameters
    ----------
    dealer_id : str or None
        Validated dealer id, ``None`` until validation succeeds.
    dealer_name : str
        Display name (persisted name preferred over the remote one).
    is_loading : bool
        ``True`` from mount until the validation check resolves.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    dealer_id: str | None = None
    dealer_name: str = ""
    is_loading: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.dealer_id is not None


@dataclass(frozen=True, slots=True)
class Authenticated:
    dealer_id: str
    dealer_name: str


@dataclass(frozen=True, slots=True)
class Unauthenticated:
    """No usable session.

    ``reason`` is ``"missing"`` when nothing was persisted and
    ``"invalid"`` when the directory rejected the persisted id.
    """

    reason: str
    error: AuthInvalidError | None = None


SessionResolution = Authenticated | Unauthenticated


async def resolve_session(store: KeyValueStore, directory: DirectoryService) -> SessionResolution:
    """Resolve the persisted dealer id against the directory.

    Never raises for directory failures: not-found, transport and
    decoding errors all yield ``Unauthenticated("invalid")``. The
    directory is not called at all when no id is persisted.
    """
    dealer_id = store.get(DEALER_ID_KEY)
    stored_name = store.get(DEALER_NAME_KEY)

    if not dealer_id:
        return Unauthenticated(reason="missing")

    try:
        dealer = await directory.validate_dealer(dealer_id)
    except Exception as exc:
        _logger.error("Error validating dealer %s: %s", dealer_id, type(exc).__name__, exc_info=True)
        error = AuthInvalidError("Invalid dealer credentials")
        error.__cause__ = exc
        return Unauthenticated(reason="invalid", error=error)

    return Authenticated(dealer_id=dealer_id, dealer_name=stored_name or dealer.name)


class SessionManager:
    """Validates the persisted dealer session when a view is entered.

    Usage::

        manager = SessionManager(store, directory, navigator)
        session = await manager.check()
        if session.is_authenticated:
            ...
    """

    def __init__(
        self,
        store: KeyValueStore,
        directory: DirectoryService,
        navigator: Navigator,
        *,
        lifetime: ViewLifetime | None = None,
        login_path: str = LOGIN_PATH,
    ) -> None:
        self._store = store
        self._directory = directory
        self._navigator = navigator
        self._lifetime = lifetime or ViewLifetime()
        self._login_path = login_path
        self._session = Session()

    @property
    def session(self) -> Session:
        return self._session

    @property
    def dealer_id(self) -> str | None:
        return self._session.dealer_id

    @property
    def dealer_name(self) -> str:
        return self._session.dealer_name

    @property
    def is_loading(self) -> bool:
        return self._session.is_loading

    def _redirect_to_login(self) -> None:
        self._navigator.redirect_to(self._login_path)

    async def check(self) -> Session:
        """Resolve the persisted session and apply the outcome.

        On ``Authenticated`` the session is populated; otherwise it is
        cleared (persisted keys are left alone) and the navigator is sent
        to the login page. Loading always ends ``False``. If the view was
        torn down while the directory call was pending, the result is
        dropped.
        """
        resolution = await resolve_session(self._store, self._directory)
        if self._lifetime.closed:
            _logger.debug("Dropping session resolution for closed view")
            return self._session

        if isinstance(resolution, Authenticated):
            self._session = Session(
                dealer_id=resolution.dealer_id,
                dealer_name=resolution.dealer_name,
                is_loading=False,
            )
        else:
            self._session = Session(is_loading=False)
            self._redirect_to_login()
        return self._session

    def mount(self) -> asyncio.Task[Session]:
        """Start :meth:`check` in the background (call on view entry)."""
        return self._lifetime.spawn(self.check(), name="dealer-session-check")

    async def login(self, id_number: str) -> Session:
        """Log a dealer in by secondary identifier and persist the session.

        Raises
        ------
        LookupFailedError
            When no dealer matches (or the lookup fails). Local state is
            left untouched.
        """
        try:
            dealer = await self._directory.login_dealer(id_number.strip())
        except Exception as exc:
            _logger.error("Dealer login failed: %s", type(exc).__name__, exc_info=True)
            raise LookupFailedError(MSG_INVALID_DEALER_ID) from exc

        self._store.set(DEALER_ID_KEY, dealer.id)
        self._store.set(DEALER_NAME_KEY, dealer.name)
        self._session = Session(dealer_id=dealer.id, dealer_name=dealer.name, is_loading=False)
        _logger.info("Dealer %s logged in", dealer.id)
        return self._session

    def logout(self) -> None:
        """Forget the persisted dealer and go to the login page."""
        self._store.remove(DEALER_ID_KEY)
        self._store.remove(DEALER_NAME_KEY)
        self._session = Session(is_loading=False)
        self._redirect_to_login()
