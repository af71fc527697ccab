"""Client data-access layer: remote API first, local cache on failure."""

from askiep.client.api_client import IepApiClient
from askiep.client.config import ClientSettings
from askiep.client.connectivity import ConnectivityMonitor, ConnectivityStatus
from askiep.client.local_store import LocalKeys, LocalStore

__all__ = [
    "ClientSettings",
    "ConnectivityMonitor",
    "ConnectivityStatus",
    "IepApiClient",
    "LocalKeys",
    "LocalStore",
]
