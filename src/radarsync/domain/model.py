"""Normalised catalog value types shared by the reconciliation engine.

Adapters translate provider payloads into these shapes at the boundary so the
engine only ever deals with one representation of a track, album or playlist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

SpotifyKind = Literal["album", "artist", "playlist", "track"]

_BARE_ID = re.compile(r"^[0-9A-Za-z]{1,64}$")
_URL_ID = re.compile(r"open\.spotify\.com/(?:intl-[a-z]+/)?(?P<kind>[a-z]+)/(?P<id>[0-9A-Za-z]+)")


def parse_spotify_id(value: str, kind: SpotifyKind) -> str:
    """Return the bare id for a bare id, ``spotify:<kind>:<id>`` URI or web URL."""

    candidate = value.strip()
    if candidate.startswith("spotify:"):
        parts = candidate.split(":")
        if len(parts) != 3 or parts[1] != kind:
            raise ValueError(f"Expected a spotify:{kind}:<id> URI, got {value!r}")
        candidate = parts[2]
    elif "open.spotify.com" in candidate:
        match = _URL_ID.search(candidate)
        if match is None or match.group("kind") != kind:
            raise ValueError(f"Expected an open.spotify.com/{kind}/<id> URL, got {value!r}")
        candidate = match.group("id")

    if not _BARE_ID.match(candidate):
        raise ValueError(f"Invalid Spotify {kind} id: {value!r}")
    return candidate


@dataclass(frozen=True, slots=True)
class ArtistRef:
    name: str
    id: str | None = None


@dataclass(frozen=True, slots=True)
class AlbumRef:
    name: str
    id: str | None = None


@dataclass(frozen=True, slots=True)
class Track:
    """A playable track as far as reconciliation is concerned."""

    id: str
    name: str
    artists: tuple[ArtistRef, ...] = ()
    album: AlbumRef | None = None
    duration_ms: int | None = None
    isrc: str | None = None

    @property
    def lead_artist(self) -> ArtistRef | None:
        return self.artists[0] if self.artists else None

    @property
    def album_id(self) -> str | None:
        return self.album.id if self.album is not None else None


@dataclass(frozen=True, slots=True)
class Album:
    id: str
    name: str
    track_ids: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PlaylistSnapshot:
    """Metadata plus the full track list of a playlist at one point in time."""

    id: str
    name: str
    snapshot_id: str | None = None
    tracks: tuple[Track, ...] = ()

    @property
    def track_ids(self) -> tuple[str, ...]:
        return tuple(track.id for track in self.tracks)
