"""Client configuration for dealerportal."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from dealerportal._constants import CARS_TABLE, DEALERS_TABLE, LOGIN_PATH
from dealerportal.exceptions import DealerPortalConfigError


@dataclasses.dataclass(frozen=True)
class PortalConfig:
    """Directory and portal configuration.

    Parameters
    ----------
    base_url : str
        Project URL of the hosted database (e.g.
        ``"https://abcd.supabase.co"``). The REST prefix is appended by
        the transport.
    api_key : str
        Anonymous/public API key. Sent both as ``apikey`` and as the
        bearer token.
    dealers_table : str
        Table holding dealer records.
    cars_table : str
        Table holding car records.
    cars_order : str or None
        PostgREST ``order`` expression for the inventory listing.
        ``None`` leaves ordering to the server.
    login_path : str
        Navigation target used whenever the session is invalid.
    request_timeout : float
        Total timeout for one directory request, in seconds.
    store_path : str or None
        File used by :class:`~dealerportal.storage.JsonFileStore`.
        ``None`` means the caller supplies its own store.
    """

    base_url: str
    api_key: str
    dealers_table: str = DEALERS_TABLE
    cars_table: str = CARS_TABLE
    cars_order: str | None = "created_at.desc"
    login_path: str = LOGIN_PATH
    request_timeout: float = 10.0
    store_path: str | None = None

    def __post_init__(self) -> None:
        if not self.base_url:
            raise DealerPortalConfigError("base_url is required")
        if not self.api_key:
            raise DealerPortalConfigError("api_key is required")
        # Normalise so endpoint paths can be joined directly
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> PortalConfig:
        """Create configuration from ``DEALERPORTAL_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        DealerPortalConfigError
            If the URL or API key ends up missing, or a numeric
            variable does not parse.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "DEALERPORTAL_URL": "base_url",
            "DEALERPORTAL_API_KEY": "api_key",
            "DEALERPORTAL_DEALERS_TABLE": "dealers_table",
            "DEALERPORTAL_CARS_TABLE": "cars_table",
            "DEALERPORTAL_CARS_ORDER": "cars_order",
            "DEALERPORTAL_LOGIN_PATH": "login_path",
            "DEALERPORTAL_STORE_PATH": "store_path",
        }
        config_kwargs: dict[str, Any] = {"base_url": "", "api_key": ""}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("DEALERPORTAL_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise DealerPortalConfigError(f"DEALERPORTAL_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        # An empty order string means "server default"
        if config_kwargs.get("cars_order") == "":
            config_kwargs["cars_order"] = None

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
