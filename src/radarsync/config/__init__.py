"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, InvalidIdentifierError, MissingConfigurationError
from .logging import configure_logging
from .playlists import PlaylistConfig, get_blacklist, get_playlist_config
from .resilience import ResilienceConfig, RetryPolicy
from .spotify import (
    DEFAULT_SPOTIFY_SCOPES,
    LIBRARY_SCOPES,
    PLAYLIST_SCOPES,
    SpotifyConfig,
    get_spotify_config,
    merge_spotify_scopes,
)
from .sync import SyncConfig, get_sync_config

__all__ = [
    "DEFAULT_SPOTIFY_SCOPES",
    "LIBRARY_SCOPES",
    "PLAYLIST_SCOPES",
    "ConfigurationError",
    "InvalidIdentifierError",
    "MissingConfigurationError",
    "PlaylistConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "SpotifyConfig",
    "SyncConfig",
    "configure_logging",
    "get_blacklist",
    "get_playlist_config",
    "get_spotify_config",
    "get_sync_config",
    "merge_spotify_scopes",
    "optional_env_var",
    "require_env_vars",
]
