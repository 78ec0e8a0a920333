from __future__ import annotations

import asyncio

import pytest

from dealerportal.exceptions import (
    AuthInvalidError,
    DealerNotFoundError,
    DirectoryTransportError,
    LookupFailedError,
)
from dealerportal.lifetime import ViewLifetime
from dealerportal.models import Car, Dealer
from dealerportal.session import (
    Authenticated,
    Session,
    SessionManager,
    Unauthenticated,
    resolve_session,
)
from dealerportal.storage import MemoryStore


class _FakeDirectory:
    def __init__(
        self,
        dealers: dict[str, Dealer] | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self._dealers = dealers or {}
        self._error = error
        self.calls: list[tuple[str, str]] = []

    async def validate_dealer(self, dealer_id: str) -> Dealer:
        self.calls.append(("validate_dealer", dealer_id))
        if self._error is not None:
            raise self._error
        dealer = self._dealers.get(dealer_id)
        if dealer is None:
            raise DealerNotFoundError("Invalid dealer credentials")
        return dealer

    async def login_dealer(self, id_number: str) -> Dealer:
        self.calls.append(("login_dealer", id_number))
        if self._error is not None:
            raise self._error
        for dealer in self._dealers.values():
            if dealer.id_number == id_number:
                return dealer
        raise DealerNotFoundError("Invalid dealer ID")

    async def get_dealer_cars(self, dealer_id: str) -> list[Car]:  # pragma: no cover
        raise AssertionError("not used")

    async def update_car_status(self, car_id: str, is_sold: bool) -> None:  # pragma: no cover
        raise AssertionError("not used")


class _Navigator:
    def __init__(self) -> None:
        self.paths: list[str] = []

    def redirect_to(self, path: str) -> None:
        self.paths.append(path)


_ACME = Dealer(id="42", name="Acme Motors", id_number="8001015009087")


@pytest.mark.asyncio
async def test_resolve_without_persisted_id_skips_directory() -> None:
    directory = _FakeDirectory({"42": _ACME})

    resolution = await resolve_session(MemoryStore(), directory)

    assert resolution == Unauthenticated(reason="missing")
    assert directory.calls == []


@pytest.mark.asyncio
async def test_resolve_prefers_persisted_name() -> None:
    store = MemoryStore({"dealer_id": "42", "dealer_name": "Acme (Cape Town)"})

    resolution = await resolve_session(store, _FakeDirectory({"42": _ACME}))

    assert resolution == Authenticated(dealer_id="42", dealer_name="Acme (Cape Town)")


@pytest.mark.asyncio
async def test_resolve_wraps_directory_error_as_auth_invalid() -> None:
    store = MemoryStore({"dealer_id": "42"})
    cause = DirectoryTransportError("connection reset", endpoint="/dealers")

    resolution = await resolve_session(store, _FakeDirectory(error=cause))

    assert isinstance(resolution, Unauthenticated)
    assert resolution.reason == "invalid"
    assert isinstance(resolution.error, AuthInvalidError)
    assert resolution.error.__cause__ is cause


@pytest.mark.asyncio
async def test_check_missing_id_redirects_to_login() -> None:
    navigator = _Navigator()
    directory = _FakeDirectory({"42": _ACME})
    manager = SessionManager(MemoryStore(), directory, navigator)

    assert manager.is_loading is True
    session = await manager.check()

    assert session == Session(dealer_id=None, dealer_name="", is_loading=False)
    assert navigator.paths == ["/dealer"]
    assert directory.calls == []


@pytest.mark.asyncio
async def test_check_valid_id_populates_session_from_remote_name() -> None:
    navigator = _Navigator()
    manager = SessionManager(MemoryStore({"dealer_id": "42"}), _FakeDirectory({"42": _ACME}), navigator)

    session = await manager.check()

    assert session == Session(dealer_id="42", dealer_name="Acme Motors", is_loading=False)
    assert manager.dealer_id == "42"
    assert navigator.paths == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        DealerNotFoundError("Invalid dealer credentials"),
        DirectoryTransportError("HTTP 503", status_code=503),
    ],
)
async def test_check_invalid_id_redirects_and_stops_loading(error: Exception) -> None:
    navigator = _Navigator()
    store = MemoryStore({"dealer_id": "99", "dealer_name": "Gone Motors"})
    manager = SessionManager(store, _FakeDirectory(error=error), navigator)

    session = await manager.check()

    assert session.dealer_id is None
    assert session.is_loading is False
    assert navigator.paths == ["/dealer"]
    # Nothing extra is cleared on a failed validation
    assert store.get("dealer_id") == "99"


@pytest.mark.asyncio
async def test_failed_recheck_clears_session_from_earlier_login() -> None:
    navigator = _Navigator()
    directory = _FakeDirectory({"42": _ACME})
    store = MemoryStore()
    manager = SessionManager(store, directory, navigator)
    await manager.login("8001015009087")
    assert manager.session.is_authenticated

    directory._dealers.clear()  # noqa: SLF001
    session = await manager.check()

    assert session == Session(dealer_id=None, dealer_name="", is_loading=False)
    assert not manager.session.is_authenticated
    assert navigator.paths == ["/dealer"]
    assert store.get("dealer_id") == "42"


@pytest.mark.asyncio
async def test_check_uses_configured_login_path() -> None:
    navigator = _Navigator()
    manager = SessionManager(MemoryStore(), _FakeDirectory(), navigator, login_path="/portal/login")

    await manager.check()

    assert navigator.paths == ["/portal/login"]


@pytest.mark.asyncio
async def test_logout_clears_store_and_redirects() -> None:
    navigator = _Navigator()
    store = MemoryStore({"dealer_id": "42", "dealer_name": "Acme Motors", "theme": "dark"})
    manager = SessionManager(store, _FakeDirectory({"42": _ACME}), navigator)
    await manager.check()

    manager.logout()

    assert store.snapshot() == {"theme": "dark"}
    assert manager.session == Session(is_loading=False)
    assert navigator.paths == ["/dealer"]


def test_logout_without_session_still_redirects() -> None:
    navigator = _Navigator()
    store = MemoryStore()
    manager = SessionManager(store, _FakeDirectory(), navigator)

    manager.logout()

    assert store.snapshot() == {}
    assert navigator.paths == ["/dealer"]


@pytest.mark.asyncio
async def test_login_trims_identifier_and_persists_session() -> None:
    store = MemoryStore()
    directory = _FakeDirectory({"42": _ACME})
    manager = SessionManager(store, directory, _Navigator())

    session = await manager.login("  8001015009087 ")

    assert directory.calls == [("login_dealer", "8001015009087")]
    assert session == Session(dealer_id="42", dealer_name="Acme Motors", is_loading=False)
    assert store.snapshot() == {"dealer_id": "42", "dealer_name": "Acme Motors"}


@pytest.mark.asyncio
async def test_login_unknown_identifier_raises_lookup_failed_without_state_change() -> None:
    store = MemoryStore()
    navigator = _Navigator()
    manager = SessionManager(store, _FakeDirectory({"42": _ACME}), navigator)

    with pytest.raises(LookupFailedError) as exc_info:
        await manager.login("0000000000000")

    assert str(exc_info.value) == "Invalid dealer ID"
    assert isinstance(exc_info.value.__cause__, DealerNotFoundError)
    assert store.snapshot() == {}
    assert manager.session == Session()
    assert navigator.paths == []


@pytest.mark.asyncio
async def test_mount_runs_check_in_background() -> None:
    manager = SessionManager(MemoryStore({"dealer_id": "42"}), _FakeDirectory({"42": _ACME}), _Navigator())

    task = manager.mount()
    assert manager.is_loading is True
    await task

    assert manager.is_loading is False
    assert manager.dealer_name == "Acme Motors"


@pytest.mark.asyncio
async def test_result_after_view_closed_is_dropped() -> None:
    release = asyncio.Event()

    class _SlowDirectory(_FakeDirectory):
        async def validate_dealer(self, dealer_id: str) -> Dealer:
            await release.wait()
            return _ACME

    lifetime = ViewLifetime()
    navigator = _Navigator()
    manager = SessionManager(MemoryStore({"dealer_id": "42"}), _SlowDirectory(), navigator, lifetime=lifetime)

    pending = asyncio.create_task(manager.check())
    await asyncio.sleep(0)
    lifetime.cancel()
    release.set()
    session = await pending

    assert session == Session()
    assert navigator.paths == []
