"""Playlist ids and blacklist entries taken from the environment."""

from __future__ import annotations

from dataclasses import dataclass

from radarsync.domain.blacklist import BlacklistArtist, InMemoryBlacklist
from radarsync.domain.model import parse_spotify_id

from .env import optional_env_var, require_env_vars
from .errors import InvalidIdentifierError


@dataclass(frozen=True, slots=True)
class PlaylistConfig:
    """Which playlists a run reads from and writes to.

    ``stock_playlist_id`` is the externally curated playlist (for example the
    service's own Release Radar) that must never be used as a write target.
    """

    stock_playlist_id: str
    reference_playlist_id: str
    target_playlist_id: str
    lagging_playlist_id: str | None = None


def _playlist_id(name: str, value: str) -> str:
    try:
        return parse_spotify_id(value, "playlist")
    except ValueError as exc:
        raise InvalidIdentifierError(name, value, str(exc)) from exc


def get_playlist_config() -> PlaylistConfig:
    values = require_env_vars(
        (
            "RADARSYNC_STOCK_PLAYLIST_ID",
            "RADARSYNC_REFERENCE_PLAYLIST_ID",
            "RADARSYNC_TARGET_PLAYLIST_ID",
        )
    )
    lagging = optional_env_var("RADARSYNC_LAGGING_PLAYLIST_ID")
    return PlaylistConfig(
        stock_playlist_id=_playlist_id(
            "RADARSYNC_STOCK_PLAYLIST_ID", values["RADARSYNC_STOCK_PLAYLIST_ID"]
        ),
        reference_playlist_id=_playlist_id(
            "RADARSYNC_REFERENCE_PLAYLIST_ID", values["RADARSYNC_REFERENCE_PLAYLIST_ID"]
        ),
        target_playlist_id=_playlist_id(
            "RADARSYNC_TARGET_PLAYLIST_ID", values["RADARSYNC_TARGET_PLAYLIST_ID"]
        ),
        lagging_playlist_id=(
            _playlist_id("RADARSYNC_LAGGING_PLAYLIST_ID", lagging) if lagging else None
        ),
    )


def get_blacklist() -> InMemoryBlacklist:
    """Build the artist blacklist from ``RADARSYNC_BLACKLIST_ARTIST_IDS`` (comma separated)."""

    raw = optional_env_var("RADARSYNC_BLACKLIST_ARTIST_IDS")
    if raw is None:
        return InMemoryBlacklist()
    artists: set[BlacklistArtist] = set()
    for entry in raw.split(","):
        value = entry.strip()
        if not value:
            continue
        try:
            artist_id = parse_spotify_id(value, "artist")
        except ValueError as exc:
            raise InvalidIdentifierError("RADARSYNC_BLACKLIST_ARTIST_IDS", value, str(exc)) from exc
        artists.add(BlacklistArtist(name=artist_id, id=artist_id))
    return InMemoryBlacklist(artists=artists)
