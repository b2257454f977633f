"""Spotify configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_var, require_env_vars
from .resilience import ResilienceConfig

PLAYLIST_SCOPES = (
    "playlist-read-private",
    "playlist-read-collaborative",
    "playlist-modify-public",
    "playlist-modify-private",
)
LIBRARY_SCOPES = (
    "user-library-read",
    "user-follow-read",
)


def merge_spotify_scopes(*scopes: tuple[str, ...]) -> tuple[str, ...]:
    merged: list[str] = []
    for scope_list in scopes:
        for scope in scope_list:
            if scope not in merged:
                merged.append(scope)
    return tuple(merged)


DEFAULT_SPOTIFY_SCOPES = merge_spotify_scopes(PLAYLIST_SCOPES, LIBRARY_SCOPES)


def _default_resilience() -> ResilienceConfig:
    return ResilienceConfig(name="spotify")


@dataclass(frozen=True)
class SpotifyConfig:
    client_id: str
    client_secret: str
    redirect_uri: str
    scope: tuple[str, ...] = field(default_factory=lambda: DEFAULT_SPOTIFY_SCOPES)
    cache_path: str | None = None
    market: str | None = None
    resilience: ResilienceConfig = field(default_factory=_default_resilience)


def get_spotify_config(
    *,
    scope: tuple[str, ...] | None = None,
    resilience: ResilienceConfig | None = None,
) -> SpotifyConfig:
    values = require_env_vars(
        (
            "SPOTIFY_CLIENT_ID",
            "SPOTIFY_CLIENT_SECRET",
            "SPOTIFY_REDIRECT_URI",
        )
    )
    return SpotifyConfig(
        client_id=values["SPOTIFY_CLIENT_ID"],
        client_secret=values["SPOTIFY_CLIENT_SECRET"],
        redirect_uri=values["SPOTIFY_REDIRECT_URI"],
        scope=scope or DEFAULT_SPOTIFY_SCOPES,
        cache_path=optional_env_var("SPOTIFY_CACHE_PATH"),
        market=optional_env_var("SPOTIFY_MARKET"),
        resilience=resilience or _default_resilience(),
    )
