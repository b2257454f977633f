"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import CatalogError, CatalogFetchError, CatalogWriteError, PlaylistCatalog
from .runtime import CancellationSignal, ConfigProvider

__all__ = [
    "CancellationSignal",
    "CatalogError",
    "CatalogFetchError",
    "CatalogWriteError",
    "ConfigProvider",
    "PlaylistCatalog",
]
