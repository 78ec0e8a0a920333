"""dealerportal - Async dealer session and inventory sync for a hosted directory."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("dealerportal")
except PackageNotFoundError:
    __version__ = "0+local"
from dealerportal.client import DirectoryClient, DirectoryService
from dealerportal.config import PortalConfig
from dealerportal.dashboard import DealerDashboard
from dealerportal.exceptions import (
    AuthInvalidError,
    DealerNotFoundError,
    DealerPortalConfigError,
    DealerPortalError,
    DirectoryApiError,
    DirectoryRemoteError,
    DirectoryTransportError,
    LoadFailedError,
    LookupFailedError,
    UpdateFailedError,
)
from dealerportal.inventory import InventoryState, InventorySynchronizer
from dealerportal.lifetime import ViewLifetime
from dealerportal.models import Car, Dealer
from dealerportal.session import (
    Authenticated,
    Session,
    SessionManager,
    SessionResolution,
    Unauthenticated,
    resolve_session,
)
from dealerportal.storage import JsonFileStore, KeyValueStore, MemoryStore
from dealerportal.surfaces import LoggingNotifier, Navigator, NotificationLevel, Notifier, PathNavigator

__all__ = [
    "__version__",
    "AuthInvalidError",
    "Authenticated",
    "Car",
    "Dealer",
    "DealerDashboard",
    "DealerNotFoundError",
    "DealerPortalConfigError",
    "DealerPortalError",
    "DirectoryApiError",
    "DirectoryClient",
    "DirectoryRemoteError",
    "DirectoryService",
    "DirectoryTransportError",
    "InventoryState",
    "InventorySynchronizer",
    "JsonFileStore",
    "KeyValueStore",
    "LoadFailedError",
    "LoggingNotifier",
    "LookupFailedError",
    "MemoryStore",
    "Navigator",
    "NotificationLevel",
    "Notifier",
    "PathNavigator",
    "PortalConfig",
    "Session",
    "SessionManager",
    "SessionResolution",
    "Unauthenticated",
    "UpdateFailedError",
    "ViewLifetime",
    "resolve_session",
]
