"""Spotify adapter package."""

from __future__ import annotations

from .catalog import SpotifyCatalog
from .client import SpotifyClient, build_spotipy_client
from .schema import (
    PlaylistItem,
    SpotifyAlbum,
    SpotifyArtist,
    SpotifyPlaylist,
    SpotifyTrack,
)
from .translator import (
    translate_album,
    translate_artist,
    translate_playlist,
    translate_playlist_items,
    translate_track,
)

__all__ = [
    "PlaylistItem",
    "SpotifyAlbum",
    "SpotifyArtist",
    "SpotifyCatalog",
    "SpotifyClient",
    "SpotifyPlaylist",
    "SpotifyTrack",
    "build_spotipy_client",
    "translate_album",
    "translate_artist",
    "translate_playlist",
    "translate_playlist_items",
    "translate_track",
]
